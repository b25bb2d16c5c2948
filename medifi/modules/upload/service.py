import logging
import pydantic
from medifi.core.base import utcnow
from medifi.core.config import settings
from medifi.core.errors import ValidationError
from medifi.platform.ports.content_storage import ContentStoragePort
from medifi.platform.ports.document_store import DocumentStorePort
from medifi.modules.records.models import HealthRecord
from medifi.modules.records.schemas import RecordCreate
from medifi.modules.records.service import RecordService

log = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/jpg",
    "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

class UploadService:
    """Pins an uploaded file and creates the health record pointing at it."""

    def __init__(self, store: DocumentStorePort, content: ContentStoragePort, *, max_bytes: int | None = None):
        self.records = RecordService(store)
        self.content = content
        self.max_bytes = max_bytes or settings.MAX_UPLOAD_BYTES

    def check_file(self, *, size: int, content_type: str | None) -> None:
        if size == 0:
            raise ValidationError("No file uploaded", field="file")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(f"File type {content_type} is not allowed", field="file")
        if size > self.max_bytes:
            raise ValidationError(f"File too large: maximum file size is {self.max_bytes // (1024 * 1024)}MB", field="file")

    async def upload(
        self,
        *,
        data: bytes,
        filename: str,
        content_type: str | None,
        name: str | None,
        type: str | None,
        date: str | None,
        owner_wallet: str | None,
    ) -> HealthRecord:
        missing = [f for f, v in (("name", name), ("type", type), ("date", date), ("ownerWallet", owner_wallet)) if not v]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", field=missing[0])
        self.check_file(size=len(data), content_type=content_type)

        try:
            payload = RecordCreate(name=name, type=type, date=date, owner_wallet=owner_wallet)
        except pydantic.ValidationError as e:
            err = e.errors()[0]
            raise ValidationError(err["msg"], field=".".join(str(p) for p in err["loc"])) from e

        owner = payload.owner_wallet.lower()
        # check before pinning so a duplicate never leaves orphaned content
        await self.records.ensure_unique(name=payload.name, type=payload.type, date=payload.date, owner_wallet=owner)

        stored = await self.content.store(
            data,
            filename,
            content_type,
            metadata={"name": filename, "type": payload.type, "uploadedAt": utcnow().isoformat(), "ownerWallet": owner},
        )
        log.info(f"Content stored hash={stored.content_hash} for owner={owner}")
        return await self.records.create(
            payload.model_copy(update={"content_hash": stored.content_hash, "content_url": stored.content_url})
        )
