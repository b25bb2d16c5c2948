from datetime import datetime
from pydantic import Field
from medifi.core.base import CamelModel

class ProviderCreate(CamelModel):
    name: str = Field(..., min_length=1)
    wallet_address: str = Field(..., min_length=1)

class ProviderUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    wallet_address: str | None = Field(default=None, min_length=1)

class ProviderOut(CamelModel):
    id: str
    name: str
    wallet_address: str
    created_at: datetime
    updated_at: datetime
