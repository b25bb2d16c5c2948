import hashlib
import json
import logging
import os
from urllib.parse import quote
from medifi.core.config import settings
from medifi.core.errors import UploadError
from medifi.platform.ports.content_storage import ContentStoragePort, StoredContent

log = logging.getLogger("content.local")

class LocalContentStorage(ContentStoragePort):
    """Content-addressed files on local disk, for development without Pinata."""

    def __init__(self, root: str | None = None):
        self.root = os.path.abspath(root or settings.LOCAL_CONTENT_ROOT)
        os.makedirs(self.root, exist_ok=True)

    def _path(self, content_hash: str) -> str:
        safe = content_hash.strip("/").replace("..", "")
        return os.path.join(self.root, safe)

    async def store(self, data: bytes, filename: str, content_type: str, metadata: dict | None = None) -> StoredContent:
        sha = hashlib.sha256(data).hexdigest()
        path = self._path(sha)
        try:
            with open(path, "wb") as f:
                f.write(data)
            with open(path + ".json", "w") as f:
                json.dump({"name": filename, "content_type": content_type, "keyvalues": metadata or {}}, f)
        except OSError as e:
            raise UploadError(f"Local content write failed: {e}") from e
        log.debug(f"Stored {filename} ({len(data)} bytes) as {sha}")
        return StoredContent(content_hash=sha, content_url=self.file_url(sha))

    def file_url(self, content_hash: str) -> str:
        return f"file://{quote(self._path(content_hash))}"

    async def close(self) -> None:
        return None
