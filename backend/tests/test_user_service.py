import pytest

from nyayasetu.schemas.user import UserCreate
from nyayasetu.services.user_service import PLACEHOLDER_BAR_COUNCIL_NUMBER, UserService
from nyayasetu.storage import MemoryStorage
from nyayasetu.utils.security import verify_password


def _form(username: str, email: str, role: str = "client") -> UserCreate:
    return UserCreate(
        username=username,
        email=email,
        full_name=username.title(),
        password="p@ssw0rd",
        role=role,
    )


@pytest.mark.asyncio
async def test_create_and_duplicate_raises_value_error(storage: MemoryStorage) -> None:
    user, advocate = await UserService.create(storage, _form("user1", "u1@example.com"))
    assert user.id
    assert advocate is None
    assert user.password != "p@ssw0rd"
    assert verify_password("p@ssw0rd", user.password)

    with pytest.raises(ValueError, match="Username"):
        await UserService.create(storage, _form("USER1", "u2@example.com"))
    with pytest.raises(ValueError, match="Email"):
        await UserService.create(storage, _form("user2", "U1@example.com"))
    assert await storage.count_users() == 1


@pytest.mark.asyncio
async def test_create_advocate_gets_placeholder_profile(storage: MemoryStorage) -> None:
    user, advocate = await UserService.create(storage, _form("adv", "adv@example.com", role="advocate"))

    assert advocate is not None
    assert advocate.user_id == user.id
    assert advocate.bar_council_number == PLACEHOLDER_BAR_COUNCIL_NUMBER
    assert advocate.experience == 0
    assert advocate.verified is False
    assert advocate.location_id == (await storage.get_all_locations())[0].id


@pytest.mark.asyncio
async def test_create_advocate_without_locations() -> None:
    storage = MemoryStorage()
    user, advocate = await UserService.create(storage, _form("adv", "adv@example.com", role="advocate"))
    assert user.role == "advocate"
    assert advocate is None


@pytest.mark.asyncio
async def test_authenticate(storage: MemoryStorage) -> None:
    await UserService.create(storage, _form("user1", "u1@example.com"))

    assert (await UserService.authenticate(storage, "user1", "p@ssw0rd")).username == "user1"
    assert (await UserService.authenticate(storage, "u1@example.com", "p@ssw0rd")).username == "user1"
    assert await UserService.authenticate(storage, "user1", "wrong") is None
    assert await UserService.authenticate(storage, "nobody", "p@ssw0rd") is None


@pytest.mark.asyncio
async def test_authenticate_plaintext_only_when_allowed(storage: MemoryStorage) -> None:
    await storage.create_user(username="legacy", password="password123", email="l@example.com", full_name="L")

    assert await UserService.authenticate(storage, "legacy", "password123") is None
    user = await UserService.authenticate(storage, "legacy", "password123", allow_plaintext=True)
    assert user.username == "legacy"


@pytest.mark.asyncio
async def test_ensure_admin(storage: MemoryStorage) -> None:
    admin, created = await UserService.ensure_admin(
        storage, username="root", email="root@example.com", password="rootpass"
    )
    assert created is True
    assert admin.role == "admin"
    assert verify_password("rootpass", admin.password)

    again, created = await UserService.ensure_admin(
        storage, username="ROOT", email="other@example.com", password="x"
    )
    assert created is False
    assert again.id == admin.id

    await UserService.create(storage, _form("user1", "u1@example.com"))
    with pytest.raises(ValueError, match="not an admin"):
        await UserService.ensure_admin(storage, username="user1", email="u1@example.com", password="x")
