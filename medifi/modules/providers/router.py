from fastapi import APIRouter, Depends, Query
from medifi.api.deps import get_platform
from medifi.platform.registry import PlatformRegistry
from medifi.modules.providers.schemas import ProviderCreate, ProviderUpdate, ProviderOut
from medifi.modules.providers.service import ProviderService

router = APIRouter()

def svc(platform: PlatformRegistry = Depends(get_platform)) -> ProviderService:
    return ProviderService(platform.documents)

@router.get("", response_model=list[ProviderOut])
async def list_providers(
    wallet_address: str | None = Query(default=None, alias="walletAddress"),
    service: ProviderService = Depends(svc),
):
    return await service.list(wallet_address)

@router.post("", response_model=ProviderOut, status_code=201)
async def register_provider(payload: ProviderCreate, service: ProviderService = Depends(svc)):
    return await service.register(payload)

@router.get("/{provider_id}", response_model=ProviderOut)
async def get_provider(provider_id: str, service: ProviderService = Depends(svc)):
    return await service.get(provider_id)

@router.put("/{provider_id}", response_model=ProviderOut)
async def update_provider(provider_id: str, payload: ProviderUpdate, service: ProviderService = Depends(svc)):
    return await service.update(provider_id, payload)

@router.delete("/{provider_id}", status_code=204)
async def delete_provider(provider_id: str, service: ProviderService = Depends(svc)):
    await service.delete(provider_id)
    return
