from datetime import datetime
from pydantic import Field
from medifi.core.base import CamelModel
from medifi.modules.access_grants.models import GrantStatus

class GrantCreate(CamelModel):
    record_id: str = Field(..., min_length=1)
    provider_wallet: str = Field(..., min_length=1)
    provider_name: str | None = None
    expires_at: datetime

class GrantOut(CamelModel):
    id: str
    record_id: str
    provider_wallet: str
    provider_name: str | None
    expires_at: datetime
    created_at: datetime
    status: GrantStatus
    revoked_at: datetime | None

class AccessCheckOut(CamelModel):
    record_id: str
    provider_wallet: str
    allowed: bool
