from dataclasses import dataclass
from typing import Protocol, runtime_checkable

@dataclass(frozen=True)
class StoredContent:
    content_hash: str
    content_url: str

@runtime_checkable
class ContentStoragePort(Protocol):
    async def store(self, data: bytes, filename: str, content_type: str, metadata: dict | None = None) -> StoredContent:
        """Persist `data` and return its content address. Raises UploadError on failure."""
        ...

    def file_url(self, content_hash: str) -> str: ...

    async def close(self) -> None: ...
