from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from medifi.api.deps import get_platform
from medifi.platform.registry import PlatformRegistry
from medifi.modules.records.schemas import RecordCreate, RecordUpdate, RecordOut, RecordListOut
from medifi.modules.records.service import RecordService

router = APIRouter()

def svc(platform: PlatformRegistry = Depends(get_platform)) -> RecordService:
    return RecordService(platform.documents)

@router.get("", response_model=RecordListOut)
async def list_records(
    owner_wallet: str | None = Query(default=None, alias="ownerWallet"),
    service: RecordService = Depends(svc),
):
    records = await service.list_by_owner(owner_wallet)
    return RecordListOut(count=len(records), records=[RecordOut.model_validate(r) for r in records])

@router.post("", response_model=RecordOut, status_code=201)
async def create_record(payload: RecordCreate, service: RecordService = Depends(svc)):
    return await service.create(payload)

@router.get("/{record_id}", response_model=RecordOut)
async def get_record(record_id: str, service: RecordService = Depends(svc)):
    return await service.get(record_id)

@router.put("/{record_id}", response_model=RecordOut)
async def update_record(record_id: str, payload: RecordUpdate, service: RecordService = Depends(svc)):
    return await service.update(record_id, payload)

@router.delete("/{record_id}", status_code=204)
async def delete_record(record_id: str, service: RecordService = Depends(svc)):
    await service.delete(record_id)
    return

@router.get("/{record_id}/download")
async def download_record(record_id: str, service: RecordService = Depends(svc)):
    return RedirectResponse(await service.download_url(record_id))
