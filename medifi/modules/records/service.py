import logging
from medifi.core.errors import ConflictError, NotFoundError
from medifi.core.wallet import canonical_wallet
from medifi.platform.ports.document_store import DocumentStorePort
from medifi.modules.records.models import HealthRecord
from medifi.modules.records.repository import RecordRepository
from medifi.modules.records.schemas import RecordCreate, RecordUpdate
from medifi.modules.records.selectors import find_duplicate_record, records_for_owner

log = logging.getLogger(__name__)

class RecordService:
    def __init__(self, store: DocumentStorePort):
        self.repo = RecordRepository(store)

    async def ensure_unique(self, *, name: str, type: str, date: str, owner_wallet: str) -> None:
        """Soft duplicate guard: same name, type and date for the same owner."""
        owner = canonical_wallet(owner_wallet)
        dup = find_duplicate_record(await self.repo.list(), name=name, type=type, date=date, owner_wallet=owner)
        if dup:
            raise ConflictError("A record with the same details already exists")

    async def create(self, payload: RecordCreate) -> HealthRecord:
        owner = canonical_wallet(payload.owner_wallet)
        await self.ensure_unique(name=payload.name, type=payload.type, date=payload.date, owner_wallet=owner)
        obj = await self.repo.create(
            name=payload.name,
            type=payload.type,
            date=payload.date,
            content_hash=payload.content_hash or "",
            content_url=payload.content_url or "",
            owner_wallet=owner,
        )
        log.info(f"Record created id={obj.id} owner={owner}")
        return obj

    async def get(self, record_id: str) -> HealthRecord:
        obj = await self.repo.get(record_id)
        if not obj:
            raise NotFoundError("Record not found", field="id")
        return obj

    async def list_by_owner(self, owner_wallet: str | None) -> list[HealthRecord]:
        owner = canonical_wallet(owner_wallet)
        return records_for_owner(await self.repo.list(), owner)

    async def update(self, record_id: str, payload: RecordUpdate) -> HealthRecord:
        obj = await self.get(record_id)
        for k, v in payload.model_dump(exclude_unset=True).items():
            if v is not None:
                setattr(obj, k, v)
        obj.touch()
        return await self.repo.save(obj)

    async def delete(self, record_id: str) -> HealthRecord:
        # Grants that reference this record are left in place.
        obj = await self.get(record_id)
        await self.repo.delete(record_id)
        log.info(f"Record deleted id={record_id}")
        return obj

    async def attach_content(self, record_id: str, content_hash: str, content_url: str) -> HealthRecord:
        obj = await self.get(record_id)
        obj.content_hash = content_hash
        obj.content_url = content_url
        obj.touch()
        return await self.repo.save(obj)

    async def download_url(self, record_id: str) -> str:
        obj = await self.get(record_id)
        if not obj.content_url or not obj.content_hash:
            raise NotFoundError("File not available on IPFS")
        log.info(f"File download requested: record={record_id} hash={obj.content_hash}")
        return obj.content_url
