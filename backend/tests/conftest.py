"""Pytest configuration"""
import inspect
import re
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from nyayasetu.database import get_storage
from nyayasetu.main import app
from nyayasetu.models import User
from nyayasetu.services.session_service import session_service
from nyayasetu.storage import MemoryStorage, MongoStorage, Storage
from nyayasetu.storage.seed import seed_reference_data
from nyayasetu.utils.security import create_access_token, hash_password


# ---- a small in-process stand-in for the Motor database API ----


class FakeInsertResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class FakeUpdateResult:
    def __init__(self, matched_count: int):
        self.matched_count = matched_count
        self.modified_count = matched_count


def _fold(value: Any, case_insensitive: bool) -> Any:
    if case_insensitive and isinstance(value, str):
        return value.casefold()
    return value


def _matches(doc: dict, query: dict, case_insensitive: bool = False) -> bool:
    for key, cond in query.items():
        if key == "$or":
            if not any(_matches(doc, sub, case_insensitive) for sub in cond):
                return False
            continue
        value = doc.get(key)
        if isinstance(cond, dict):
            if "$in" in cond and value not in cond["$in"]:
                return False
            if "$regex" in cond:
                flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(cond["$regex"], value, flags):
                    return False
        elif _fold(value, case_insensitive) != _fold(cond, case_insensitive):
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs

    def sort(self, keys):
        if isinstance(keys, str):
            keys = [(keys, 1)]
        for field, direction in reversed(keys):
            self._docs.sort(key=lambda d: d.get(field), reverse=direction < 0)
        return self

    def limit(self, n: int):
        if n:
            self._docs = self._docs[:n]
        return self

    async def to_list(self, length: int | None = None):
        docs = self._docs if length is None else self._docs[:length]
        return [dict(d) for d in docs]


class FakeCollection:
    def __init__(self):
        self.docs: list[dict] = []
        self.indexes: list[dict] = []

    async def create_index(self, keys, unique: bool = False, collation=None):
        fields = [keys] if isinstance(keys, str) else [k for k, _ in keys]
        self.indexes.append({"fields": fields, "unique": unique, "collation": collation})
        return "_".join(fields)

    def _duplicate(self, doc: dict) -> bool:
        for index in self.indexes:
            if not index["unique"]:
                continue
            ci = index["collation"] is not None
            key = tuple(_fold(doc.get(f), ci) for f in index["fields"])
            if any(tuple(_fold(o.get(f), ci) for f in index["fields"]) == key for o in self.docs):
                return True
        return False

    async def insert_one(self, doc: dict):
        if self._duplicate(doc):
            raise DuplicateKeyError("E11000 duplicate key error")
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return FakeInsertResult(doc["_id"])

    async def find_one(self, query: dict, collation=None):
        for doc in self.docs:
            if _matches(doc, query, collation is not None):
                return dict(doc)
        return None

    def find(self, query: dict | None = None):
        return FakeCursor([dict(d) for d in self.docs if _matches(d, query or {})])

    async def update_one(self, query: dict, update: dict):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                return FakeUpdateResult(1)
        return FakeUpdateResult(0)

    async def count_documents(self, query: dict):
        return sum(1 for d in self.docs if _matches(d, query))


class FakeDatabase:
    def __init__(self):
        self._collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection())

    def __getattr__(self, name: str) -> FakeCollection:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


# ---- storage ----


async def _make_storage(kind: str) -> Storage:
    if kind == "mongo":
        storage = MongoStorage(FakeDatabase())
        await storage.ensure_indexes()
        return storage
    return MemoryStorage()


@pytest_asyncio.fixture(params=["memory", "mongo"])
async def any_storage(request) -> AsyncGenerator[Storage, None]:
    """Both backends, empty"""
    storage = await _make_storage(request.param)
    yield storage
    await storage.close()


@pytest_asyncio.fixture
async def storage() -> AsyncGenerator[MemoryStorage, None]:
    """In-memory storage with reference data"""
    s = MemoryStorage()
    await seed_reference_data(s)
    yield s


# ---- API ----


@pytest_asyncio.fixture
async def client(storage: MemoryStorage) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_storage] = lambda: storage

    transport_kwargs: dict[str, Any] = {"app": app}
    if "lifespan" in inspect.signature(ASGITransport.__init__).parameters:
        transport_kwargs["lifespan"] = "off"
    transport = ASGITransport(**transport_kwargs)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    session_service.clear()


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(storage: MemoryStorage):
    """Create a user in the test storage; returns the user and its auth headers"""

    async def _make(
        username: str,
        *,
        role: str = "client",
        password: str = "secret123",
        full_name: str | None = None,
    ) -> tuple[User, dict[str, str]]:
        user = await storage.create_user(
            username=username,
            password=hash_password(password),
            email=f"{username}@example.com",
            full_name=full_name or username.title(),
            role=role,
        )
        return user, auth_headers(user)

    return _make
