import logging
from datetime import datetime
from typing import Callable
from medifi.core.base import as_utc, utcnow
from medifi.core.errors import ConflictError, NotFoundError, ValidationError
from medifi.core.wallet import canonical_identity
from medifi.platform.ports.document_store import DocumentStorePort
from medifi.modules.access_grants.models import AccessGrant, GrantStatus
from medifi.modules.access_grants.repository import AccessGrantRepository
from medifi.modules.access_grants.schemas import GrantCreate
from medifi.modules.access_grants.selectors import filter_grants, find_active_grant
from medifi.modules.records.service import RecordService

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]

class AccessGrantService:
    """Sharing permissions between a record and a provider wallet.

    Expiry is evaluated lazily: every read path re-checks `expires_at` against
    the clock and persists the `active -> expired` flip before returning, so
    status is correct as of the read. There is no background sweep.
    """

    def __init__(self, store: DocumentStorePort, *, records: RecordService | None = None, clock: Clock = utcnow):
        self.repo = AccessGrantRepository(store)
        self.records = records or RecordService(store)
        self.clock = clock

    async def _refresh(self, grant: AccessGrant, now: datetime) -> AccessGrant:
        if grant.refresh_status(now):
            await self.repo.save(grant)
            log.debug(f"Grant {grant.id} expired at {grant.expires_at.isoformat()}")
        return grant

    async def create(self, payload: GrantCreate) -> AccessGrant:
        record_id = payload.record_id.strip()
        if not record_id:
            raise ValidationError("recordId is required", field="recordId")
        provider_wallet = canonical_identity(payload.provider_wallet, field="providerWallet")
        expires_at = as_utc(payload.expires_at)
        now = self.clock()

        existing = filter_grants(await self.repo.list(), record_id=record_id, provider_wallet=provider_wallet)
        for g in existing:
            await self._refresh(g, now)
        if find_active_grant(existing, record_id, provider_wallet):
            raise ConflictError("Active access grant already exists for this provider and record")

        obj = await self.repo.create(
            record_id=record_id,
            provider_wallet=provider_wallet,
            provider_name=payload.provider_name,
            expires_at=expires_at,
            created_at=now,
            status=AccessGrant.initial_status(expires_at, now),
        )
        log.info(f"Grant created id={obj.id} record={record_id} provider={provider_wallet} status={obj.status.value}")
        return obj

    async def get(self, grant_id: str) -> AccessGrant:
        obj = await self.repo.get(grant_id)
        if not obj:
            raise NotFoundError("Access grant not found", field="id")
        return await self._refresh(obj, self.clock())

    async def list(
        self,
        *,
        record_id: str | None = None,
        provider_wallet: str | None = None,
        owner_wallet: str | None = None,
    ) -> list[AccessGrant]:
        record_ids = None
        if owner_wallet is not None:
            # grants whose record belongs to this owner; "" is rejected by the record store
            record_ids = {r.id for r in await self.records.list_by_owner(owner_wallet)}
        provider = canonical_identity(provider_wallet, field="providerWallet") if provider_wallet else None
        record_id = record_id.strip() if record_id else None

        now = self.clock()
        grants = await self.repo.list()
        for g in grants:
            await self._refresh(g, now)
        return filter_grants(grants, record_id=record_id or None, provider_wallet=provider, record_ids=record_ids)

    async def has_access(self, record_id: str, provider_wallet: str) -> bool:
        record_id = record_id.strip()
        provider = canonical_identity(provider_wallet, field="providerWallet")
        grants = await self.list(record_id=record_id, provider_wallet=provider)
        return find_active_grant(grants, record_id, provider) is not None

    async def revoke(self, grant_id: str) -> AccessGrant:
        obj = await self.repo.get(grant_id)
        if not obj:
            raise NotFoundError("Access grant not found", field="id")
        # overrides expiry; a second revoke just restamps
        obj.status = GrantStatus.REVOKED
        obj.revoked_at = self.clock()
        await self.repo.save(obj)
        log.info(f"Grant revoked id={grant_id}")
        return obj

    async def delete(self, grant_id: str) -> None:
        if not await self.repo.delete(grant_id):
            raise NotFoundError("Access grant not found", field="id")
        log.info(f"Grant deleted id={grant_id}")
