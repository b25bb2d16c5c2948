from fastapi import APIRouter, Depends, Query
from medifi.api.deps import get_platform
from medifi.core.wallet import canonical_identity
from medifi.platform.registry import PlatformRegistry
from medifi.modules.access_grants.schemas import AccessCheckOut, GrantCreate, GrantOut
from medifi.modules.access_grants.service import AccessGrantService

router = APIRouter()

def svc(platform: PlatformRegistry = Depends(get_platform)) -> AccessGrantService:
    return AccessGrantService(platform.documents)

@router.get("", response_model=list[GrantOut])
async def list_grants(
    record_id: str | None = Query(default=None, alias="recordId"),
    provider_wallet: str | None = Query(default=None, alias="providerWallet"),
    owner_wallet: str | None = Query(default=None, alias="ownerWallet"),
    service: AccessGrantService = Depends(svc),
):
    return await service.list(record_id=record_id, provider_wallet=provider_wallet, owner_wallet=owner_wallet)

@router.get("/check", response_model=AccessCheckOut)
async def check_access(
    record_id: str = Query(..., alias="recordId", min_length=1),
    provider_wallet: str = Query(..., alias="providerWallet", min_length=1),
    service: AccessGrantService = Depends(svc),
):
    allowed = await service.has_access(record_id, provider_wallet)
    return AccessCheckOut(
        record_id=record_id.strip(),
        provider_wallet=canonical_identity(provider_wallet, field="providerWallet"),
        allowed=allowed,
    )

@router.get("/{grant_id}", response_model=GrantOut)
async def get_grant(grant_id: str, service: AccessGrantService = Depends(svc)):
    return await service.get(grant_id)

@router.post("", response_model=GrantOut, status_code=201)
async def create_grant(payload: GrantCreate, service: AccessGrantService = Depends(svc)):
    return await service.create(payload)

@router.patch("/{grant_id}/revoke", response_model=GrantOut)
async def revoke_grant(grant_id: str, service: AccessGrantService = Depends(svc)):
    return await service.revoke(grant_id)

@router.delete("/{grant_id}", status_code=204)
async def delete_grant(grant_id: str, service: AccessGrantService = Depends(svc)):
    await service.delete(grant_id)
    return
