from datetime import datetime, timedelta

import pydantic
import pytest

from medifi.core.errors import ConflictError, NotFoundError, ValidationError
from medifi.modules.access_grants.models import GrantStatus
from medifi.modules.access_grants.schemas import GrantCreate
from medifi.modules.records.schemas import RecordCreate

from conftest import OTHER_OWNER, OWNER, PROVIDER_WALLET


def _grant(clock, record_id="r1", provider_wallet="p1", **delta):
    return GrantCreate(
        record_id=record_id,
        provider_wallet=provider_wallet,
        provider_name="Dr. X",
        expires_at=clock.now + timedelta(**(delta or {"days": 7})),
    )


async def test_future_expiry_starts_active(grants, clock):
    g = await grants.create(_grant(clock, seconds=1))
    assert g.status == GrantStatus.ACTIVE
    assert g.created_at == clock.now


async def test_past_expiry_starts_expired(grants, clock):
    g = await grants.create(_grant(clock, seconds=-1))
    assert g.status == GrantStatus.EXPIRED


async def test_naive_expiry_is_treated_as_utc(grants, clock):
    naive = (clock.now + timedelta(hours=1)).replace(tzinfo=None)
    g = await grants.create(GrantCreate(record_id="r1", provider_wallet="p1", expires_at=naive))
    assert g.expires_at == clock.now + timedelta(hours=1)
    assert g.status == GrantStatus.ACTIVE


async def test_get_expires_lazily(grants, clock):
    g = await grants.create(_grant(clock, seconds=1))
    assert (await grants.get(g.id)).status == GrantStatus.ACTIVE

    clock.advance(seconds=2)
    assert (await grants.get(g.id)).status == GrantStatus.EXPIRED
    # the flip is persisted
    assert (await grants.repo.get(g.id)).status == GrantStatus.EXPIRED


async def test_list_expires_every_scanned_grant(grants, clock):
    short = await grants.create(_grant(clock, record_id="r1", seconds=1))
    long = await grants.create(_grant(clock, record_id="r2", days=30))

    clock.advance(minutes=1)
    listed = await grants.list(record_id="r2")
    assert [g.id for g in listed] == [long.id]

    # r1 was not in the result but was touched by the scan
    assert (await grants.repo.get(short.id)).status == GrantStatus.EXPIRED


async def test_duplicate_active_grant_conflicts(grants, clock):
    await grants.create(_grant(clock))
    with pytest.raises(ConflictError):
        await grants.create(_grant(clock))
    # provider wallets compare case-insensitively
    with pytest.raises(ConflictError):
        await grants.create(_grant(clock, provider_wallet="P1"))


async def test_new_grant_allowed_after_revoke(grants, clock):
    first = await grants.create(_grant(clock))
    await grants.revoke(first.id)

    second = await grants.create(_grant(clock))
    assert second.status == GrantStatus.ACTIVE
    assert second.id != first.id


async def test_new_grant_allowed_after_expiry(grants, clock):
    first = await grants.create(_grant(clock, seconds=1))
    clock.advance(seconds=5)

    second = await grants.create(_grant(clock))
    assert second.status == GrantStatus.ACTIVE
    assert (await grants.get(first.id)).status == GrantStatus.EXPIRED


async def test_new_grant_allowed_after_delete(grants, clock):
    first = await grants.create(_grant(clock))
    await grants.delete(first.id)
    await grants.create(_grant(clock))


async def test_revoke_overrides_expiry(grants, clock):
    g = await grants.create(_grant(clock, seconds=1))
    clock.advance(seconds=2)
    assert (await grants.get(g.id)).status == GrantStatus.EXPIRED

    revoked = await grants.revoke(g.id)
    assert revoked.status == GrantStatus.REVOKED
    assert revoked.revoked_at == clock.now


async def test_revoke_is_sticky(grants, clock):
    g = await grants.create(_grant(clock, seconds=1))
    await grants.revoke(g.id)
    clock.advance(days=1)

    assert (await grants.get(g.id)).status == GrantStatus.REVOKED
    # revoking again is accepted
    assert (await grants.revoke(g.id)).status == GrantStatus.REVOKED


async def test_missing_grant(grants):
    with pytest.raises(NotFoundError):
        await grants.get("nope")
    with pytest.raises(NotFoundError):
        await grants.revoke("nope")
    with pytest.raises(NotFoundError):
        await grants.delete("nope")


async def test_delete_is_permanent(grants, clock):
    g = await grants.create(_grant(clock))
    await grants.delete(g.id)
    with pytest.raises(NotFoundError):
        await grants.get(g.id)


async def test_blank_record_id_rejected(grants, clock):
    with pytest.raises(ValidationError):
        await grants.create(GrantCreate(record_id="  ", provider_wallet="p1", expires_at=clock.now))


async def test_filters_are_conjunctive(grants, clock):
    a = await grants.create(_grant(clock, record_id="r1", provider_wallet="p1"))
    await grants.create(_grant(clock, record_id="r1", provider_wallet="p2"))
    await grants.create(_grant(clock, record_id="r2", provider_wallet="p1"))

    assert len(await grants.list()) == 3
    assert len(await grants.list(record_id="r1")) == 2
    assert len(await grants.list(provider_wallet="P1")) == 2
    assert [g.id for g in await grants.list(record_id="r1", provider_wallet="p1")] == [a.id]


async def test_owner_filter_joins_through_records(grants, records, clock):
    mine = await records.create(RecordCreate(name="X-ray", type="imaging", date="2025-01-01", owner_wallet=OWNER))
    theirs = await records.create(RecordCreate(name="X-ray", type="imaging", date="2025-01-01", owner_wallet=OTHER_OWNER))

    g_mine = await grants.create(_grant(clock, record_id=mine.id, provider_wallet=PROVIDER_WALLET))
    g_expired = await grants.create(_grant(clock, record_id=mine.id, provider_wallet="p2", seconds=-5))
    await grants.create(_grant(clock, record_id=theirs.id, provider_wallet=PROVIDER_WALLET))

    listed = await grants.list(owner_wallet=OWNER.lower())
    # ownership, not status, decides membership
    assert {g.id for g in listed} == {g_mine.id, g_expired.id}

    listed = await grants.list(owner_wallet=OWNER, provider_wallet=PROVIDER_WALLET)
    assert [g.id for g in listed] == [g_mine.id]


async def test_owner_filter_validates_wallet(grants):
    with pytest.raises(ValidationError):
        await grants.list(owner_wallet="0xnope")


async def test_empty_owner_filter_is_rejected(grants, records, clock):
    theirs = await records.create(RecordCreate(name="X-ray", type="imaging", date="2025-01-01", owner_wallet=OTHER_OWNER))
    await grants.create(_grant(clock, record_id=theirs.id))

    with pytest.raises(ValidationError) as exc:
        await grants.list(owner_wallet="")
    assert exc.value.field == "ownerWallet"


async def test_list_filters_are_trimmed(grants, clock):
    g = await grants.create(_grant(clock, record_id="r1", provider_wallet="p1"))
    listed = await grants.list(record_id="  r1 ", provider_wallet=" P1 ")
    assert [x.id for x in listed] == [g.id]
    assert await grants.has_access(" r1", " P1 ") is True


async def test_deleting_record_does_not_cascade(grants, records, clock):
    rec = await records.create(RecordCreate(name="MRI", type="imaging", date="2025-01-01", owner_wallet=OWNER))
    g = await grants.create(_grant(clock, record_id=rec.id))

    await records.delete(rec.id)

    listed = await grants.list(record_id=rec.id)
    assert [x.id for x in listed] == [g.id]
    assert listed[0].status == GrantStatus.ACTIVE


async def test_has_access(grants, clock):
    g = await grants.create(_grant(clock, seconds=10))
    assert await grants.has_access("r1", "P1") is True
    assert await grants.has_access("r1", "p9") is False

    clock.advance(seconds=11)
    assert await grants.has_access("r1", "p1") is False

    await grants.create(_grant(clock))
    assert await grants.has_access("r1", "p1") is True
    await grants.revoke((await grants.list(record_id="r1", provider_wallet="p1"))[-1].id)
    assert await grants.has_access("r1", "p1") is False
    assert g.status == GrantStatus.ACTIVE  # local snapshot is not mutated by later reads


def test_expires_at_must_parse():
    with pytest.raises(pydantic.ValidationError):
        GrantCreate(record_id="r1", provider_wallet="p1", expires_at="whenever")


def test_initial_status_boundary():
    from medifi.modules.access_grants.models import AccessGrant

    now = datetime(2025, 1, 1)
    assert AccessGrant.initial_status(now, now) == GrantStatus.ACTIVE
    assert AccessGrant.initial_status(now - timedelta(microseconds=1), now) == GrantStatus.EXPIRED
