from typing import Iterable
from medifi.modules.access_grants.models import AccessGrant, GrantStatus

def grants_for_record(grants: Iterable[AccessGrant], record_id: str) -> list[AccessGrant]:
    return [g for g in grants if g.record_id == record_id]

def grants_for_provider(grants: Iterable[AccessGrant], provider_wallet: str) -> list[AccessGrant]:
    return [g for g in grants if g.provider_wallet == provider_wallet]

def grants_for_records(grants: Iterable[AccessGrant], record_ids: set[str]) -> list[AccessGrant]:
    return [g for g in grants if g.record_id in record_ids]

def find_active_grant(grants: Iterable[AccessGrant], record_id: str, provider_wallet: str) -> AccessGrant | None:
    for g in grants:
        if g.record_id == record_id and g.provider_wallet == provider_wallet and g.status == GrantStatus.ACTIVE:
            return g
    return None

def filter_grants(
    grants: Iterable[AccessGrant],
    *,
    record_id: str | None = None,
    provider_wallet: str | None = None,
    record_ids: set[str] | None = None,
) -> list[AccessGrant]:
    """Apply the given filters together; None means "no filter"."""
    out = list(grants)
    if record_id is not None:
        out = grants_for_record(out, record_id)
    if provider_wallet is not None:
        out = grants_for_provider(out, provider_wallet)
    if record_ids is not None:
        out = grants_for_records(out, record_ids)
    return sorted(out, key=lambda g: g.created_at)
