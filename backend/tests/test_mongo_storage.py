import pytest
from bson import ObjectId

from nyayasetu.models import Advocate, User
from nyayasetu.storage import MemoryStorage, MongoStorage
from nyayasetu.storage.mongo import (
    CASE_INSENSITIVE,
    from_document,
    to_document,
    to_object_id,
    to_reference,
)


def test_to_object_id() -> None:
    oid = ObjectId()
    assert to_object_id(oid) is oid
    assert to_object_id(str(oid)) == oid
    assert to_object_id("12") is None
    assert to_object_id(None) is None


def test_to_reference_keeps_non_object_ids() -> None:
    oid = ObjectId()
    assert to_reference(str(oid)) == oid
    assert to_reference("guest") == "guest"


def test_document_round_trip_uses_camel_case() -> None:
    user_id = ObjectId()
    doc = to_document(
        {
            "user_id": str(user_id),
            "location_id": "guest",
            "bar_council_number": "BR/1",
            "review_count": 0,
        }
    )
    assert doc == {"userId": user_id, "locationId": "guest", "barCouncilNumber": "BR/1", "reviewCount": 0}

    advocate = from_document(
        Advocate,
        {**doc, "_id": ObjectId(), "bio": "b", "experience": 3, "locationId": ObjectId(), "rating": 0},
    )
    assert isinstance(advocate.id, str)
    assert advocate.user_id == str(user_id)
    assert advocate.bar_council_number == "BR/1"


@pytest.mark.asyncio
async def test_documents_store_references_as_object_ids(fake_db) -> None:
    storage = MongoStorage(fake_db)
    await storage.ensure_indexes()
    user = await storage.create_user(username="a", password="x", email="a@example.com", full_name="A")
    location = await storage.create_location(city="Patna", state="Bihar")
    advocate = await storage.create_advocate(
        user_id=user.id, location_id=location.id, bio="b", experience=2, bar_council_number="BR/1"
    )

    doc = fake_db["advocates"].docs[0]
    assert doc["_id"] == ObjectId(advocate.id)
    assert doc["userId"] == ObjectId(user.id)
    assert doc["locationId"] == ObjectId(location.id)
    assert doc["barCouncilNumber"] == "BR/1"
    assert doc["reviewCount"] == 0
    assert "user_id" not in doc

    user_doc = fake_db["users"].docs[0]
    assert user_doc["fullName"] == "A"
    assert "createdAt" in user_doc


@pytest.mark.asyncio
async def test_ensure_indexes(fake_db) -> None:
    await MongoStorage(fake_db).ensure_indexes()

    users = {tuple(i["fields"]): i for i in fake_db["users"].indexes}
    assert users[("username",)]["unique"] is True
    assert users[("username",)]["collation"] is CASE_INSENSITIVE
    assert users[("email",)]["collation"] is CASE_INSENSITIVE
    specialties = fake_db["advocateSpecialties"].indexes
    assert specialties[0]["fields"] == ["advocateId", "practiceAreaId"]
    assert specialties[0]["unique"] is True
    assert fake_db["advocates"].indexes[0] == {"fields": ["userId"], "unique": True, "collation": None}


@pytest.mark.asyncio
async def test_guest_chat_messages_keep_string_user_id(fake_db) -> None:
    storage = MongoStorage(fake_db)
    await storage.create_chat_message(user_id="guest", is_user_message=True, content="hello")

    assert fake_db["chatMessages"].docs[0]["userId"] == "guest"
    history = await storage.get_chat_history("guest")
    assert [m.content for m in history] == ["hello"]
    assert await storage.get_chat_history("guest", limit=0) == []


@pytest.mark.asyncio
async def test_duplicate_advocate_profile_is_rejected(fake_db) -> None:
    storage = MongoStorage(fake_db)
    await storage.ensure_indexes()
    user = await storage.create_user(username="a", password="x", email="a@example.com", full_name="A")
    location = await storage.create_location(city="Patna", state="Bihar")
    kwargs = dict(user_id=user.id, location_id=location.id, bio="b", experience=2, bar_council_number="BR/1")
    await storage.create_advocate(**kwargs)

    with pytest.raises(ValueError):
        await storage.create_advocate(**kwargs)

    await storage.create_practice_area(name="Tax Law")
    with pytest.raises(ValueError):
        await storage.create_practice_area(name="Tax Law")


@pytest.mark.asyncio
async def test_unconnected_storage_reads_users_from_fallback() -> None:
    fallback = MemoryStorage()
    user = await fallback.create_user(username="a", password="x", email="a@example.com", full_name="A")
    storage = MongoStorage(None, fallback=fallback)

    found = await storage.get_user(user.id)
    assert isinstance(found, User)
    assert found.username == "a"


@pytest.mark.asyncio
async def test_unconnected_storage_without_fallback_raises() -> None:
    storage = MongoStorage(None)
    with pytest.raises(RuntimeError):
        await storage.get_user_by_username("a")
    with pytest.raises(RuntimeError):
        await storage.get_user(str(ObjectId()))
