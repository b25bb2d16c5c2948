import logging
from medifi.core.errors import ConflictError, NotFoundError
from medifi.core.wallet import canonical_identity
from medifi.platform.ports.document_store import DocumentStorePort
from medifi.modules.providers.models import Provider
from medifi.modules.providers.repository import ProviderRepository
from medifi.modules.providers.schemas import ProviderCreate, ProviderUpdate
from medifi.modules.providers.selectors import providers_for_wallet

log = logging.getLogger(__name__)

class ProviderService:
    def __init__(self, store: DocumentStorePort):
        self.repo = ProviderRepository(store)

    async def _ensure_wallet_free(self, wallet: str, *, exclude_id: str | None = None) -> None:
        for p in providers_for_wallet(await self.repo.list(), wallet):
            if p.id != exclude_id:
                raise ConflictError("Provider with this wallet address already exists", field="walletAddress")

    async def register(self, payload: ProviderCreate) -> Provider:
        wallet = canonical_identity(payload.wallet_address, field="walletAddress")
        await self._ensure_wallet_free(wallet)
        obj = await self.repo.create(name=payload.name, wallet_address=wallet)
        log.info(f"Provider registered id={obj.id} wallet={wallet}")
        return obj

    async def get(self, provider_id: str) -> Provider:
        obj = await self.repo.get(provider_id)
        if not obj:
            raise NotFoundError("Provider not found", field="id")
        return obj

    async def list(self, wallet_address: str | None = None) -> list[Provider]:
        wallet = canonical_identity(wallet_address, field="walletAddress") if wallet_address else None
        return providers_for_wallet(await self.repo.list(), wallet)

    async def update(self, provider_id: str, payload: ProviderUpdate) -> Provider:
        obj = await self.get(provider_id)
        data = payload.model_dump(exclude_unset=True)
        if data.get("wallet_address") is not None:
            wallet = canonical_identity(data["wallet_address"], field="walletAddress")
            await self._ensure_wallet_free(wallet, exclude_id=obj.id)
            obj.wallet_address = wallet
        if data.get("name") is not None:
            obj.name = data["name"]
        obj.touch()
        return await self.repo.save(obj)

    async def delete(self, provider_id: str) -> None:
        # Grants issued to this provider stay as they are.
        if not await self.repo.delete(provider_id):
            raise NotFoundError("Provider not found", field="id")
        log.info(f"Provider deleted id={provider_id}")
