from fastapi import APIRouter
from medifi.modules.records.router import router as records_router
from medifi.modules.access_grants.router import router as access_grants_router
from medifi.modules.providers.router import router as providers_router
from medifi.modules.upload.router import router as upload_router

api_router = APIRouter()
api_router.include_router(records_router, prefix="/records", tags=["records"])
api_router.include_router(access_grants_router, prefix="/access-grants", tags=["access-grants"])
api_router.include_router(providers_router, prefix="/providers", tags=["providers"])
api_router.include_router(upload_router, prefix="/upload", tags=["upload"])
