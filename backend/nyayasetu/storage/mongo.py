"""MongoDB storage backend (Motor)

Documents keep camelCase field names and store references as ObjectId.
Records leaving this module carry string ids; an id that is not a valid
ObjectId simply matches nothing.
"""
import logging
import re
from datetime import datetime
from typing import Any, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pydantic.alias_generators import to_camel, to_snake
from pymongo import ASCENDING, DESCENDING
from pymongo.collation import Collation
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..models import (
    Advocate,
    ChatMessage,
    Connection,
    ConnectionStatus,
    Location,
    PracticeArea,
    Record,
    Review,
    User,
    UserRole,
    utcnow,
)
from .base import Storage

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

# Case-insensitive comparison for usernames and emails.
CASE_INSENSITIVE = Collation(locale="en", strength=2)

# Fields holding references to other documents.
REFERENCE_FIELDS = frozenset({"user_id", "location_id", "advocate_id", "client_id", "practice_area_id"})


def to_object_id(value: str | ObjectId | None) -> ObjectId | None:
    if isinstance(value, ObjectId):
        return value
    if value is not None and ObjectId.is_valid(str(value)):
        return ObjectId(str(value))
    return None


def to_reference(value: str) -> ObjectId | str:
    """Stored form of a reference. Non-ObjectId ids (e.g. the guest chat id) stay strings."""
    oid = to_object_id(value)
    return oid if oid is not None else str(value)


def to_document(fields: dict[str, Any]) -> dict[str, Any]:
    doc: dict[str, Any] = {}
    for key, value in fields.items():
        if key in REFERENCE_FIELDS and value is not None:
            value = to_reference(value)
        doc[to_camel(key)] = value
    return doc


def from_document(model: type[R], doc: dict[str, Any]) -> R:
    data: dict[str, Any] = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            value = str(value)
        data["id" if key == "_id" else to_snake(key)] = value
    return model.model_validate(data)


class MongoStorage(Storage):
    """Persistent storage in MongoDB"""

    backend_name = "mongo"

    def __init__(
        self,
        database: AsyncIOMotorDatabase | None,
        *,
        client: AsyncIOMotorClient | None = None,
        fallback: Storage | None = None,
    ):
        self._db = database
        self._client = client
        self._fallback = fallback

    @classmethod
    async def connect(cls, uri: str, db_name: str, *, timeout_ms: int = 5000) -> "MongoStorage":
        """Connect, verify the server answers a ping and create indexes.

        Raises the driver error when the server is unreachable.
        """
        client = AsyncIOMotorClient(uri, tz_aware=True, serverSelectionTimeoutMS=timeout_ms)
        try:
            await client.admin.command("ping")
        except PyMongoError:
            client.close()
            raise
        storage = cls(client[db_name], client=client)
        await storage.ensure_indexes()
        logger.info("Connected to MongoDB database %s", db_name)
        return storage

    async def ensure_indexes(self) -> None:
        db = self._require_db()
        await db.users.create_index("username", unique=True, collation=CASE_INSENSITIVE)
        await db.users.create_index("email", unique=True, collation=CASE_INSENSITIVE)
        await db.practiceAreas.create_index("name", unique=True)
        await db.advocates.create_index("userId", unique=True)
        await db.advocateSpecialties.create_index(
            [("advocateId", ASCENDING), ("practiceAreaId", ASCENDING)], unique=True
        )
        await db.reviews.create_index("advocateId")
        await db.connections.create_index("clientId")
        await db.connections.create_index("advocateId")
        await db.connections.create_index("paymentId")
        await db.chatMessages.create_index([("userId", ASCENDING), ("createdAt", ASCENDING)])

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _require_db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise RuntimeError("MongoDB storage is not connected")
        return self._db

    async def _find_one(self, collection: str, model: type[R], query: dict, **kwargs) -> R | None:
        doc = await self._require_db()[collection].find_one(query, **kwargs)
        return None if doc is None else from_document(model, doc)

    async def _find_by_id(self, collection: str, model: type[R], record_id: str) -> R | None:
        oid = to_object_id(record_id)
        if oid is None:
            return None
        return await self._find_one(collection, model, {"_id": oid})

    async def _find_many(
        self, collection: str, model: type[R], query: dict, sort: list | None = None, limit: int = 0
    ) -> list[R]:
        cursor = self._require_db()[collection].find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=limit or None)
        return [from_document(model, doc) for doc in docs]

    async def _insert(self, collection: str, model: type[R], fields: dict[str, Any]) -> R:
        doc = to_document(fields)
        result = await self._require_db()[collection].insert_one(doc)
        return from_document(model, {**doc, "_id": result.inserted_id})

    # ---- users ----

    async def get_user(self, user_id: str) -> User | None:
        if self._db is None and self._fallback is not None:
            logger.warning("MongoDB client not initialised, reading user %s from fallback storage", user_id)
            return await self._fallback.get_user(user_id)
        return await self._find_by_id("users", User, user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._find_one("users", User, {"username": username}, collation=CASE_INSENSITIVE)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._find_one("users", User, {"email": email}, collation=CASE_INSENSITIVE)

    async def create_user(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        phone: str | None = None,
        role: UserRole = "client",
    ) -> User:
        fields = {
            "username": username,
            "password": password,
            "email": email,
            "full_name": full_name,
            "phone": phone,
            "role": role,
            "created_at": utcnow(),
        }
        try:
            return await self._insert("users", User, fields)
        except DuplicateKeyError as exc:
            raise ValueError("Username or email already exists") from exc

    async def count_users(self) -> int:
        return await self._require_db().users.count_documents({})

    # ---- locations ----

    async def create_location(self, *, city: str, state: str, pincode: str | None = None) -> Location:
        return await self._insert("locations", Location, {"city": city, "state": state, "pincode": pincode})

    async def get_location(self, location_id: str) -> Location | None:
        return await self._find_by_id("locations", Location, location_id)

    async def get_all_locations(self) -> list[Location]:
        return await self._find_many("locations", Location, {})

    async def get_locations_by_city_or_state(self, query: str) -> list[Location]:
        text = (query or "").strip()
        if not text:
            return await self.get_all_locations()
        pattern = {"$regex": re.escape(text), "$options": "i"}
        return await self._find_many(
            "locations",
            Location,
            {"$or": [{"city": pattern}, {"state": pattern}, {"pincode": text}]},
        )

    # ---- practice areas ----

    async def create_practice_area(self, *, name: str) -> PracticeArea:
        try:
            return await self._insert("practiceAreas", PracticeArea, {"name": name})
        except DuplicateKeyError as exc:
            raise ValueError("Practice area already exists") from exc

    async def get_practice_area(self, practice_area_id: str) -> PracticeArea | None:
        return await self._find_by_id("practiceAreas", PracticeArea, practice_area_id)

    async def get_all_practice_areas(self) -> list[PracticeArea]:
        return await self._find_many("practiceAreas", PracticeArea, {})

    # ---- advocates ----

    async def create_advocate(
        self,
        *,
        user_id: str,
        location_id: str,
        bio: str,
        experience: int,
        bar_council_number: str,
        image_url: str | None = None,
        verified: bool = False,
    ) -> Advocate:
        fields = {
            "user_id": user_id,
            "location_id": location_id,
            "bio": bio,
            "experience": experience,
            "bar_council_number": bar_council_number,
            "image_url": image_url,
            "rating": 0,
            "review_count": 0,
            "verified": verified,
        }
        try:
            return await self._insert("advocates", Advocate, fields)
        except DuplicateKeyError as exc:
            raise ValueError("User already has an advocate profile") from exc

    async def get_advocate(self, advocate_id: str) -> Advocate | None:
        return await self._find_by_id("advocates", Advocate, advocate_id)

    async def get_advocate_by_user_id(self, user_id: str) -> Advocate | None:
        return await self._find_one("advocates", Advocate, {"userId": to_reference(user_id)})

    async def list_advocates(self, *, location_id: str | None = None) -> list[Advocate]:
        query: dict[str, Any] = {}
        if location_id is not None:
            query["locationId"] = to_reference(location_id)
        return await self._find_many("advocates", Advocate, query)

    async def list_advocate_ids_by_practice_area(self, practice_area_id: str) -> list[str]:
        oid = to_object_id(practice_area_id)
        if oid is None:
            return []
        docs = await self._require_db().advocateSpecialties.find({"practiceAreaId": oid}).to_list(length=None)
        return [str(doc["advocateId"]) for doc in docs]

    async def _update_advocate_fields(self, advocate_id: str, fields: dict) -> Advocate | None:
        oid = to_object_id(advocate_id)
        if oid is None:
            return None
        result = await self._require_db().advocates.update_one({"_id": oid}, {"$set": to_document(fields)})
        if result.matched_count == 0:
            return None
        return await self.get_advocate(advocate_id)

    async def _set_advocate_rating(self, advocate_id: str, rating: float, review_count: int) -> None:
        oid = to_object_id(advocate_id)
        if oid is None:
            return
        await self._require_db().advocates.update_one(
            {"_id": oid}, {"$set": {"rating": rating, "reviewCount": review_count}}
        )

    # ---- specialties ----

    async def add_specialty_to_advocate(self, advocate_id: str, practice_area_id: str) -> None:
        doc = to_document({"advocate_id": advocate_id, "practice_area_id": practice_area_id})
        collection = self._require_db().advocateSpecialties
        if await collection.find_one(doc) is not None:
            return
        try:
            await collection.insert_one(doc)
        except DuplicateKeyError:
            logger.debug("Specialty %s already linked to advocate %s", practice_area_id, advocate_id)

    async def get_advocate_specialties(self, advocate_id: str) -> list[PracticeArea]:
        oid = to_object_id(advocate_id)
        if oid is None:
            return []
        links = await self._require_db().advocateSpecialties.find({"advocateId": oid}).to_list(length=None)
        area_ids = [link["practiceAreaId"] for link in links]
        if not area_ids:
            return []
        areas = await self._find_many("practiceAreas", PracticeArea, {"_id": {"$in": area_ids}})
        by_id = {area.id: area for area in areas}
        # Keep link order; links to missing practice areas are skipped.
        return [by_id[str(aid)] for aid in area_ids if str(aid) in by_id]

    # ---- reviews ----

    async def _insert_review(
        self, *, advocate_id: str, user_id: str, rating: int, content: str | None
    ) -> Review:
        fields = {
            "advocate_id": advocate_id,
            "user_id": user_id,
            "rating": rating,
            "content": content,
            "created_at": utcnow(),
        }
        return await self._insert("reviews", Review, fields)

    async def get_reviews_for_advocate(self, advocate_id: str) -> list[Review]:
        oid = to_object_id(advocate_id)
        if oid is None:
            return []
        return await self._find_many(
            "reviews", Review, {"advocateId": oid}, sort=[("createdAt", DESCENDING), ("_id", DESCENDING)]
        )

    # ---- connections ----

    async def _insert_connection(
        self,
        *,
        advocate_id: str,
        client_id: str,
        status: ConnectionStatus,
        payment_id: str | None,
        created_at: datetime,
        expires_at: datetime,
    ) -> Connection:
        fields = {
            "advocate_id": advocate_id,
            "client_id": client_id,
            "status": status,
            "payment_id": payment_id,
            "created_at": created_at,
            "expires_at": expires_at,
        }
        return await self._insert("connections", Connection, fields)

    async def get_connection(self, connection_id: str) -> Connection | None:
        return await self._find_by_id("connections", Connection, connection_id)

    async def get_connections_by_client(self, client_id: str) -> list[Connection]:
        return await self._find_many(
            "connections",
            Connection,
            {"clientId": to_reference(client_id)},
            sort=[("createdAt", DESCENDING), ("_id", DESCENDING)],
        )

    async def get_connections_by_advocate(self, advocate_id: str) -> list[Connection]:
        return await self._find_many(
            "connections",
            Connection,
            {"advocateId": to_reference(advocate_id)},
            sort=[("createdAt", DESCENDING), ("_id", DESCENDING)],
        )

    async def get_connection_by_payment_id(self, payment_id: str) -> Connection | None:
        return await self._find_one("connections", Connection, {"paymentId": payment_id})

    async def update_connection_status(
        self, connection_id: str, status: ConnectionStatus
    ) -> Connection | None:
        oid = to_object_id(connection_id)
        if oid is None:
            return None
        result = await self._require_db().connections.update_one({"_id": oid}, {"$set": {"status": status}})
        if result.matched_count == 0:
            return None
        return await self.get_connection(connection_id)

    # ---- chat ----

    async def create_chat_message(
        self, *, user_id: str, is_user_message: bool, content: str
    ) -> ChatMessage:
        fields = {
            "user_id": user_id,
            "is_user_message": is_user_message,
            "content": content,
            "created_at": utcnow(),
        }
        return await self._insert("chatMessages", ChatMessage, fields)

    async def get_chat_history(self, user_id: str, limit: int = 50) -> list[ChatMessage]:
        if limit <= 0:
            return []
        newest = await self._find_many(
            "chatMessages",
            ChatMessage,
            {"userId": to_reference(user_id)},
            sort=[("createdAt", DESCENDING), ("_id", DESCENDING)],
            limit=limit,
        )
        newest.reverse()
        return newest
