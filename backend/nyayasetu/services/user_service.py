"""User service layer"""
import logging

from ..models import Advocate, Role, User
from ..schemas.user import UserCreate
from ..storage import Storage
from ..utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

PLACEHOLDER_BAR_COUNCIL_NUMBER = "Not verified"


class UserService:
    """User accounts"""

    @staticmethod
    async def get_by_username_or_email(storage: Storage, identifier: str) -> User | None:
        user = await storage.get_user_by_username(identifier)
        if user is None:
            user = await storage.get_user_by_email(identifier)
        return user

    @staticmethod
    async def is_username_taken(storage: Storage, username: str) -> bool:
        return await storage.get_user_by_username(username) is not None

    @staticmethod
    async def is_email_taken(storage: Storage, email: str) -> bool:
        return await storage.get_user_by_email(email) is not None

    @staticmethod
    async def create(storage: Storage, user_data: UserCreate) -> tuple[User, Advocate | None]:
        """Register a user. Advocates also get a placeholder profile.

        Raises ValueError for a duplicate username or email before anything
        is written.
        """
        if await UserService.is_username_taken(storage, user_data.username):
            raise ValueError("Username already exists")
        if await UserService.is_email_taken(storage, user_data.email):
            raise ValueError("Email already exists")

        user = await storage.create_user(
            username=user_data.username,
            password=hash_password(user_data.password),
            email=user_data.email,
            full_name=user_data.full_name,
            phone=user_data.phone,
            role=user_data.role,
        )

        advocate = None
        if user.role == Role.ADVOCATE:
            advocate = await UserService._create_placeholder_profile(storage, user)
        return user, advocate

    @staticmethod
    async def _create_placeholder_profile(storage: Storage, user: User) -> Advocate | None:
        locations = await storage.get_all_locations()
        if not locations:
            logger.warning("No locations available, advocate profile for user %s not created", user.id)
            return None
        return await storage.create_advocate(
            user_id=user.id,
            location_id=locations[0].id,
            bio=f"Advocate profile for {user.full_name}",
            experience=0,
            bar_council_number=PLACEHOLDER_BAR_COUNCIL_NUMBER,
        )

    @staticmethod
    async def ensure_admin(
        storage: Storage,
        *,
        username: str,
        email: str,
        password: str,
        full_name: str = "Administrator",
    ) -> tuple[User, bool]:
        """Create an admin account unless the username exists. Returns (user, created)."""
        existing = await storage.get_user_by_username(username)
        if existing is not None:
            if existing.role != Role.ADMIN:
                raise ValueError(f"User {username} exists and is not an admin")
            return existing, False
        user = await storage.create_user(
            username=username,
            password=hash_password(password),
            email=email,
            full_name=full_name,
            role=Role.ADMIN,
        )
        logger.info("Admin account created: id=%s", user.id)
        return user, True

    @staticmethod
    async def authenticate(
        storage: Storage, identifier: str, password: str, *, allow_plaintext: bool = False
    ) -> User | None:
        """Verify login by username or email"""
        user = await UserService.get_by_username_or_email(storage, identifier)
        if not user:
            return None
        if not verify_password(password, user.password, allow_plaintext=allow_plaintext):
            return None
        return user


user_service = UserService()
