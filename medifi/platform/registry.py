from medifi.core.config import Settings, settings as default_settings
from medifi.platform.ports.document_store import DocumentStorePort
from medifi.platform.ports.content_storage import ContentStoragePort
from medifi.platform.adapters.store_memory import InMemoryDocumentStore
from medifi.platform.adapters.store_sql import SqlDocumentStore
from medifi.platform.adapters.store_redis import RedisDocumentStore
from medifi.platform.adapters.content_local import LocalContentStorage
from medifi.platform.adapters.content_pinata import PinataContentStorage

class PlatformRegistry:
    """Holds the adapters for one process. Built at startup, closed at shutdown."""

    def __init__(self, documents: DocumentStorePort, content: ContentStoragePort):
        self.documents = documents
        self.content = content

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PlatformRegistry":
        settings = settings or default_settings
        prov = settings.STORAGE_PROVIDER
        if prov == "sql":
            documents = SqlDocumentStore(settings.DATABASE_DSN)
        elif prov == "redis":
            documents = RedisDocumentStore(settings.REDIS_URL, prefix=settings.REDIS_KEY_PREFIX)
        else:
            documents = InMemoryDocumentStore()

        if settings.CONTENT_STORAGE_PROVIDER == "pinata":
            content = PinataContentStorage(settings.PINATA_JWT)
        else:
            content = LocalContentStorage(settings.LOCAL_CONTENT_ROOT)
        return cls(documents, content)

    async def start(self) -> None:
        await self.documents.connect()

    async def close(self) -> None:
        await self.documents.close()
        await self.content.close()
