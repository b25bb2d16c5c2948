from typing import Generic, TypeVar
from medifi.core.base import Document
from medifi.platform.ports.document_store import DocumentStorePort

T = TypeVar("T", bound=Document)

class DocumentRepository(Generic[T]):
    """CRUD over one collection of a document store, in terms of entity models."""

    model: type[T]
    collection: str

    def __init__(self, store: DocumentStorePort):
        self.store = store

    async def create(self, **data) -> T:
        obj = self.model(**data)
        await self.store.put(self.collection, obj.id, obj.to_document())
        return obj

    async def get(self, obj_id: str) -> T | None:
        doc = await self.store.get(self.collection, obj_id)
        return self.model.from_document(doc) if doc is not None else None

    async def list(self) -> list[T]:
        return [self.model.from_document(d) for d in await self.store.scan(self.collection)]

    async def save(self, obj: T) -> T:
        await self.store.put(self.collection, obj.id, obj.to_document())
        return obj

    async def delete(self, obj_id: str) -> bool:
        return await self.store.delete(self.collection, obj_id)
