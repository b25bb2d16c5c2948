from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from medifi.core.errors import UploadError
from medifi.platform.adapters.store_memory import InMemoryDocumentStore
from medifi.platform.ports.content_storage import StoredContent
from medifi.platform.registry import PlatformRegistry
from medifi.modules.access_grants.service import AccessGrantService
from medifi.modules.providers.service import ProviderService
from medifi.modules.records.service import RecordService

OWNER = "0xAAAA00000000000000000000000000000000AAAA"
OTHER_OWNER = "0x1111111111111111111111111111111111111111"
PROVIDER_WALLET = "0xBBBB00000000000000000000000000000000BBBB"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeContentStorage:
    def __init__(self):
        self.stored = []
        self.fail_with: str | None = None

    async def store(self, data, filename, content_type, metadata=None):
        if self.fail_with:
            raise UploadError(self.fail_with)
        self.stored.append({"data": data, "filename": filename, "content_type": content_type, "metadata": metadata})
        content_hash = f"bafy{len(self.stored):04d}"
        return StoredContent(content_hash=content_hash, content_url=self.file_url(content_hash))

    def file_url(self, content_hash):
        return f"https://gateway.example/ipfs/{content_hash}"

    async def close(self):
        return None


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def records(store):
    return RecordService(store)


@pytest.fixture
def providers(store):
    return ProviderService(store)


@pytest.fixture
def grants(store, records, clock):
    return AccessGrantService(store, records=records, clock=clock)


@pytest.fixture
def content():
    return FakeContentStorage()


@pytest.fixture
def client(store, content):
    from medifi.main import app

    app.state.platform = PlatformRegistry(store, content)
    with TestClient(app) as c:
        yield c
