from datetime import datetime
from enum import Enum
from pydantic import field_validator
from medifi.core.base import Document, as_utc

class GrantStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

class AccessGrant(Document):
    record_id: str          # not checked against the record store
    provider_wallet: str    # lowercase
    provider_name: str | None = None
    expires_at: datetime
    status: GrantStatus = GrantStatus.ACTIVE
    revoked_at: datetime | None = None

    @field_validator("expires_at", "revoked_at")
    @classmethod
    def _utc(cls, v: datetime | None):
        return as_utc(v) if v is not None else v

    @staticmethod
    def initial_status(expires_at: datetime, now: datetime) -> GrantStatus:
        return GrantStatus.EXPIRED if expires_at < now else GrantStatus.ACTIVE

    def refresh_status(self, now: datetime) -> bool:
        """Flip an active grant to expired once `expires_at` has passed.

        Returns True when the status changed. Revoked and expired grants are
        never touched.
        """
        if self.status == GrantStatus.ACTIVE and self.expires_at < now:
            self.status = GrantStatus.EXPIRED
            return True
        return False
