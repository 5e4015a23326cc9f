from datetime import timedelta

import pytest

from nyayasetu.models import utcnow
from nyayasetu.schemas.advocate import AdvocateCreate, AdvocateProfileUpdate, ReviewCreate
from nyayasetu.services.advocate_service import AdvocateNotFound, AdvocateService
from nyayasetu.services.connection_service import (
    ConnectionPermissionError,
    ConnectionService,
    PaymentAlreadyUsedError,
)
from nyayasetu.storage import AdvocateFilter, MemoryStorage


async def _people(storage: MemoryStorage):
    client = await storage.create_user(username="c", password="x", email="c@example.com", full_name="Client")
    lawyer = await storage.create_user(
        username="l", password="x", email="l@example.com", full_name="Lawyer", role="advocate"
    )
    admin = await storage.create_user(username="a", password="x", email="a@example.com", full_name="Admin", role="admin")
    location = (await storage.get_all_locations())[0]
    advocate = await storage.create_advocate(
        user_id=lawyer.id, location_id=location.id, bio="Bio", experience=4, bar_council_number="DL/1"
    )
    return client, lawyer, admin, advocate


# ---- advocates ----


@pytest.mark.asyncio
async def test_search_empty_filter_returns_all(storage: MemoryStorage) -> None:
    await _people(storage)
    assert len(await AdvocateService.search(storage, AdvocateFilter())) == 1
    assert await AdvocateService.search(storage, AdvocateFilter(location="Chennai")) == []


@pytest.mark.asyncio
async def test_create_validates_references(storage: MemoryStorage) -> None:
    client, _, _, _ = await _people(storage)
    location = (await storage.get_all_locations())[0]
    base = dict(user_id=client.id, location_id=location.id, bio="b", bar_council_number="X/1")

    with pytest.raises(ValueError, match="User not found"):
        await AdvocateService.create(storage, AdvocateCreate(**{**base, "user_id": "999"}))
    with pytest.raises(ValueError, match="Location not found"):
        await AdvocateService.create(storage, AdvocateCreate(**{**base, "location_id": "999"}))
    with pytest.raises(ValueError, match="practice area"):
        await AdvocateService.create(storage, AdvocateCreate(**base, practice_area_ids=["999"]))
    assert await storage.get_advocate_by_user_id(client.id) is None

    details = await AdvocateService.create(storage, AdvocateCreate(**base, practice_area_ids=["1"]))
    assert details.user_id == client.id
    assert len(details.specialties) == 1


@pytest.mark.asyncio
async def test_update_profile_keeps_unset_fields(storage: MemoryStorage) -> None:
    _, _, _, advocate = await _people(storage)

    details = await AdvocateService.update_profile(storage, advocate, AdvocateProfileUpdate(experience=6))
    assert details.experience == 6
    assert details.bio == "Bio"

    details = await AdvocateService.update_profile(
        storage, advocate, AdvocateProfileUpdate(image_url="/img.png", practice_area_ids=["2", "2"])
    )
    assert details.image_url == "/img.png"
    assert len(details.specialties) == 1


@pytest.mark.asyncio
async def test_set_verified_missing(storage: MemoryStorage) -> None:
    with pytest.raises(AdvocateNotFound):
        await AdvocateService.set_verified(storage, "999", True)


@pytest.mark.asyncio
async def test_add_review(storage: MemoryStorage) -> None:
    client, lawyer, _, advocate = await _people(storage)

    review = await AdvocateService.add_review(storage, advocate.id, client, ReviewCreate(rating=5, content="Great"))
    assert review.rating == 5
    assert (await storage.get_advocate(advocate.id)).rating == 5.0

    with pytest.raises(ValueError):
        await AdvocateService.add_review(storage, advocate.id, lawyer, ReviewCreate(rating=1))
    with pytest.raises(AdvocateNotFound):
        await AdvocateService.add_review(storage, "999", client, ReviewCreate(rating=1))


# ---- connections ----


@pytest.mark.asyncio
async def test_open_paid_connection_is_idempotent(storage: MemoryStorage) -> None:
    client, _, _, advocate = await _people(storage)

    first = await ConnectionService.open_paid_connection(
        storage, client=client, advocate_id=advocate.id, payment_id="pay_1", validity_days=30
    )
    second = await ConnectionService.open_paid_connection(
        storage, client=client, advocate_id=advocate.id, payment_id="pay_1", validity_days=30
    )
    assert first.id == second.id
    assert first.status == "active"
    assert first.expires_at - first.created_at == timedelta(days=30)

    other = await ConnectionService.open_paid_connection(
        storage, client=client, advocate_id=advocate.id, payment_id="pay_2", validity_days=7
    )
    assert other.id != first.id
    assert other.expires_at - other.created_at == timedelta(days=7)


@pytest.mark.asyncio
async def test_payment_id_opens_one_connection_only(storage: MemoryStorage) -> None:
    client, lawyer, admin, advocate = await _people(storage)
    location = (await storage.get_all_locations())[0]
    second = await storage.create_advocate(
        user_id=admin.id, location_id=location.id, bio="Bio", experience=2, bar_council_number="DL/2"
    )
    await ConnectionService.open_paid_connection(
        storage, client=client, advocate_id=advocate.id, payment_id="pay_1", validity_days=30
    )

    with pytest.raises(PaymentAlreadyUsedError):
        await ConnectionService.open_paid_connection(
            storage, client=client, advocate_id=second.id, payment_id="pay_1", validity_days=30
        )
    with pytest.raises(PaymentAlreadyUsedError):
        await ConnectionService.open_paid_connection(
            storage, client=lawyer, advocate_id=advocate.id, payment_id="pay_1", validity_days=30
        )
    assert len(await storage.get_connections_by_client(client.id)) == 1
    assert await storage.get_connections_by_client(lawyer.id) == []


@pytest.mark.asyncio
async def test_refresh_only_expires_active_connections(storage: MemoryStorage) -> None:
    client, _, _, advocate = await _people(storage)
    old = utcnow() - timedelta(days=40)
    active = await storage.create_connection(advocate_id=advocate.id, client_id=client.id, status="active", created_at=old)
    pending = await storage.create_connection(advocate_id=advocate.id, client_id=client.id, created_at=old)

    assert (await ConnectionService.refresh(storage, active)).status == "expired"
    assert (await ConnectionService.refresh(storage, pending)).status == "pending"


@pytest.mark.asyncio
async def test_list_for_user_merges_both_sides(storage: MemoryStorage) -> None:
    client, lawyer, admin, advocate = await _people(storage)
    c1 = await storage.create_connection(advocate_id=advocate.id, client_id=client.id)
    # the lawyer also hired another advocate's services as a client
    c2 = await storage.create_connection(advocate_id="77", client_id=lawyer.id)

    assert [c.id for c in await ConnectionService.list_for_user(storage, client)] == [c1.id]
    assert [c.id for c in await ConnectionService.list_for_user(storage, lawyer)] == [c2.id, c1.id]
    assert await ConnectionService.list_for_user(storage, admin) == []


@pytest.mark.asyncio
async def test_change_status_permissions(storage: MemoryStorage) -> None:
    client, lawyer, admin, advocate = await _people(storage)
    stranger = await storage.create_user(username="s", password="x", email="s@example.com", full_name="S")
    connection = await storage.create_connection(advocate_id=advocate.id, client_id=client.id, status="active")

    with pytest.raises(ConnectionPermissionError):
        await ConnectionService.change_status(storage, stranger, connection, "cancelled")
    with pytest.raises(ConnectionPermissionError):
        await ConnectionService.change_status(storage, client, connection, "expired")

    assert (await ConnectionService.change_status(storage, lawyer, connection, "cancelled")).status == "cancelled"
    assert (await ConnectionService.change_status(storage, admin, connection, "active")).status == "active"
