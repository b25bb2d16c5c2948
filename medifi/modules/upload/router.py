from fastapi import APIRouter, Depends, File, Form, UploadFile
from medifi.api.deps import get_platform
from medifi.platform.registry import PlatformRegistry
from medifi.modules.records.schemas import RecordOut
from medifi.modules.upload.service import UploadService

router = APIRouter()

def svc(platform: PlatformRegistry = Depends(get_platform)) -> UploadService:
    return UploadService(platform.documents, platform.content)

@router.post("", response_model=RecordOut, status_code=201)
async def upload_record(
    file: UploadFile = File(...),
    name: str = Form(""),
    type: str = Form(""),
    date: str = Form(""),
    owner_wallet: str = Form("", alias="ownerWallet"),
    service: UploadService = Depends(svc),
):
    # reject oversized/unsupported files before reading the body
    if file.size is not None:
        service.check_file(size=file.size, content_type=file.content_type)
    data = await file.read()
    return await service.upload(
        data=data,
        filename=file.filename or "health-record",
        content_type=file.content_type,
        name=name,
        type=type,
        date=date,
        owner_wallet=owner_wallet,
    )
