from datetime import datetime
from pydantic import Field, field_validator
from medifi.core.base import CamelModel
from medifi.core.wallet import WALLET_RE

def _parse_date(v: str) -> str:
    try:
        datetime.fromisoformat(v)
    except ValueError:
        raise ValueError("Invalid date format")
    return v

class RecordCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., min_length=1)
    date: str
    owner_wallet: str = Field(..., pattern=WALLET_RE.pattern)
    content_hash: str | None = None
    content_url: str | None = None

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str):
        return _parse_date(v)

class RecordUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    type: str | None = Field(default=None, min_length=1)
    date: str | None = None

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str | None):
        return _parse_date(v) if v is not None else v

class RecordOut(CamelModel):
    id: str
    name: str
    type: str
    date: str
    content_hash: str
    content_url: str
    owner_wallet: str
    created_at: datetime
    updated_at: datetime

class RecordListOut(CamelModel):
    count: int
    records: list[RecordOut]
