from typing import Iterable
from medifi.modules.records.models import HealthRecord

def records_for_owner(records: Iterable[HealthRecord], owner_wallet: str) -> list[HealthRecord]:
    """Records owned by `owner_wallet` (already canonical), newest first."""
    owned = [r for r in records if r.owner_wallet == owner_wallet]
    return sorted(owned, key=lambda r: r.created_at, reverse=True)

def find_duplicate_record(
    records: Iterable[HealthRecord], *, name: str, type: str, date: str, owner_wallet: str
) -> HealthRecord | None:
    for r in records:
        if (r.name, r.type, r.date, r.owner_wallet) == (name, type, date, owner_wallet):
            return r
    return None
