from typing import Protocol, runtime_checkable

@runtime_checkable
class DocumentStorePort(Protocol):
    """Keyed collections of JSON documents.

    Each call is atomic on its own; nothing spans more than one document.
    """

    async def connect(self) -> None: ...

    async def get(self, collection: str, key: str) -> dict | None: ...

    async def put(self, collection: str, key: str, doc: dict) -> None: ...

    async def delete(self, collection: str, key: str) -> bool: ...

    async def scan(self, collection: str) -> list[dict]: ...

    async def close(self) -> None: ...
