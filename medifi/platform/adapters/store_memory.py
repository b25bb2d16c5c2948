import copy
import logging
from medifi.platform.ports.document_store import DocumentStorePort

log = logging.getLogger("store.memory")

class InMemoryDocumentStore(DocumentStorePort):
    """Process-local store. Contents are lost when the process exits."""

    def __init__(self):
        self._collections: dict[str, dict[str, dict]] = {}

    async def connect(self) -> None:
        log.info("Using in-memory document store")

    async def get(self, collection: str, key: str) -> dict | None:
        doc = self._collections.get(collection, {}).get(key)
        return copy.deepcopy(doc) if doc is not None else None

    async def put(self, collection: str, key: str, doc: dict) -> None:
        self._collections.setdefault(collection, {})[key] = copy.deepcopy(doc)

    async def delete(self, collection: str, key: str) -> bool:
        return self._collections.get(collection, {}).pop(key, None) is not None

    async def scan(self, collection: str) -> list[dict]:
        return [copy.deepcopy(d) for d in self._collections.get(collection, {}).values()]

    async def close(self) -> None:
        self._collections.clear()
