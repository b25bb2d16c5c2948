import json
import logging
import httpx
from medifi.core.config import settings
from medifi.core.errors import UploadError
from medifi.platform.ports.content_storage import ContentStoragePort, StoredContent

log = logging.getLogger("content.pinata")

class PinataContentStorage(ContentStoragePort):
    """Pins files and JSON to IPFS through the Pinata HTTP API (JWT auth)."""

    def __init__(
        self,
        jwt: str | None = None,
        *,
        api_url: str | None = None,
        gateway_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.jwt = jwt or settings.PINATA_JWT or ""
        self.gateway_url = (gateway_url or settings.PINATA_GATEWAY_URL).rstrip("/") + "/"
        if not self.jwt:
            log.warning("Pinata credentials not set (PINATA_JWT). IPFS features will not work.")

        headers = {"Authorization": f"Bearer {self.jwt}"} if self.jwt else {}
        self.client = httpx.AsyncClient(
            base_url=api_url or settings.PINATA_API_URL,
            headers=headers,
            timeout=timeout or settings.PINATA_TIMEOUT_SECONDS,
            transport=transport,
        )

    def _require_credentials(self):
        if not self.jwt:
            raise UploadError("Pinata credentials not configured")

    @staticmethod
    def _reason(exc: httpx.HTTPError) -> str:
        if isinstance(exc, httpx.HTTPStatusError):
            try:
                err = exc.response.json().get("error")
            except ValueError:
                err = None
            if isinstance(err, dict):
                err = err.get("details") or err.get("reason")
            return str(err or f"HTTP {exc.response.status_code}")
        return str(exc) or exc.__class__.__name__

    async def test_authentication(self) -> bool:
        try:
            resp = await self.client.get("/data/testAuthentication")
            resp.raise_for_status()
        except httpx.HTTPError as e:
            log.error(f"Pinata authentication failed: {self._reason(e)}")
            return False
        log.info("Pinata authentication successful")
        return True

    async def store(self, data: bytes, filename: str, content_type: str, metadata: dict | None = None) -> StoredContent:
        self._require_credentials()
        log.info(f"Uploading buffer: {filename} ({len(data)} bytes)")

        files = {"file": (filename, data, content_type or "application/octet-stream")}
        form = {"pinataOptions": json.dumps({"cidVersion": 1})}
        if metadata is not None:
            form["pinataMetadata"] = json.dumps({"name": filename, "keyvalues": metadata})

        try:
            resp = await self.client.post("/pinning/pinFileToIPFS", data=form, files=files)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            log.error(f"Pinata buffer upload error: {self._reason(e)}")
            raise UploadError(f"Pinata upload failed: {self._reason(e)}") from e

        ipfs_hash = resp.json().get("IpfsHash")
        if not ipfs_hash:
            raise UploadError("Pinata upload failed: response did not include IpfsHash")
        log.info(f"Buffer uploaded to IPFS: {ipfs_hash}")
        return StoredContent(content_hash=ipfs_hash, content_url=self.file_url(ipfs_hash))

    async def pin_json(self, json_data: dict, metadata: dict | None = None) -> dict:
        self._require_credentials()
        body: dict = {"pinataContent": json_data, "pinataOptions": {"cidVersion": 1}}
        if metadata:
            body["pinataMetadata"] = {"name": metadata.get("name") or "health-data", "keyvalues": metadata}
        try:
            resp = await self.client.post("/pinning/pinJSONToIPFS", json=body)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise UploadError(f"Pinata JSON pin failed: {self._reason(e)}") from e
        log.info(f"JSON pinned to IPFS: {resp.json().get('IpfsHash')}")
        return resp.json()

    async def unpin(self, content_hash: str) -> None:
        self._require_credentials()
        try:
            resp = await self.client.delete(f"/pinning/unpin/{content_hash}")
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise UploadError(f"Pinata unpin failed: {self._reason(e)}") from e
        log.info(f"File unpinned from IPFS: {content_hash}")

    async def list_pins(self, limit: int = 10) -> dict:
        self._require_credentials()
        try:
            resp = await self.client.get("/data/pinList", params={"status": "pinned", "pageLimit": limit})
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise UploadError(f"Failed to list pins: {self._reason(e)}") from e
        return resp.json()

    def file_url(self, content_hash: str) -> str:
        return f"{self.gateway_url}{content_hash}"

    async def close(self) -> None:
        await self.client.aclose()
