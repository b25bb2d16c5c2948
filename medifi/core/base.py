import uuid
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def as_utc(dt: datetime) -> datetime:
    # naive datetimes from callers are taken to be UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def new_id() -> str:
    return str(uuid.uuid4())

class Document(BaseModel):
    """An entity persisted as one JSON document in a store collection."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)

    def to_document(self) -> dict:
        return self.model_dump(mode="json")

    @classmethod
    def from_document(cls, doc: dict):
        return cls.model_validate(doc)

class TimestampedDocument(Document):
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self) -> None:
        self.updated_at = utcnow()

class CamelModel(BaseModel):
    """Request/response schema exposed with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
