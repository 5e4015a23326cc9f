"""Storage interface shared by the in-memory and MongoDB backends

Backends implement the primitive record operations. The derived data
(detailed advocate view, filtering, rating aggregation) is computed here so
that both backends behave identically.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from ..models import (
    Advocate,
    AdvocateWithDetails,
    ChatMessage,
    Connection,
    ConnectionStatus,
    Location,
    PracticeArea,
    Review,
    User,
    UserRole,
    utcnow,
)
from .filters import AdvocateFilter, apply_filters
from .rating import compute_rating
from .views import build_advocate_details

logger = logging.getLogger(__name__)

# Profile fields callers may change through update_advocate.
ADVOCATE_PROFILE_FIELDS = frozenset(
    {"location_id", "bio", "experience", "bar_council_number", "image_url", "verified"}
)
CONNECTION_VALIDITY_DAYS = 30


class Storage(ABC):
    """Repository of marketplace records"""

    backend_name: str = "abstract"

    # ---- users ----

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    async def create_user(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        phone: str | None = None,
        role: UserRole = "client",
    ) -> User: ...

    @abstractmethod
    async def count_users(self) -> int: ...

    # ---- locations ----

    @abstractmethod
    async def create_location(self, *, city: str, state: str, pincode: str | None = None) -> Location: ...

    @abstractmethod
    async def get_location(self, location_id: str) -> Location | None: ...

    @abstractmethod
    async def get_all_locations(self) -> list[Location]: ...

    @abstractmethod
    async def get_locations_by_city_or_state(self, query: str) -> list[Location]: ...

    # ---- practice areas ----

    @abstractmethod
    async def create_practice_area(self, *, name: str) -> PracticeArea: ...

    @abstractmethod
    async def get_practice_area(self, practice_area_id: str) -> PracticeArea | None: ...

    @abstractmethod
    async def get_all_practice_areas(self) -> list[PracticeArea]: ...

    # ---- advocates ----

    @abstractmethod
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
    ) -> Advocate: ...

    @abstractmethod
    async def get_advocate(self, advocate_id: str) -> Advocate | None: ...

    @abstractmethod
    async def get_advocate_by_user_id(self, user_id: str) -> Advocate | None: ...

    @abstractmethod
    async def list_advocates(self, *, location_id: str | None = None) -> list[Advocate]: ...

    @abstractmethod
    async def list_advocate_ids_by_practice_area(self, practice_area_id: str) -> list[str]: ...

    @abstractmethod
    async def _update_advocate_fields(self, advocate_id: str, fields: dict) -> Advocate | None: ...

    # ---- specialties ----

    @abstractmethod
    async def add_specialty_to_advocate(self, advocate_id: str, practice_area_id: str) -> None: ...

    @abstractmethod
    async def get_advocate_specialties(self, advocate_id: str) -> list[PracticeArea]: ...

    # ---- reviews ----

    @abstractmethod
    async def _insert_review(
        self, *, advocate_id: str, user_id: str, rating: int, content: str | None
    ) -> Review: ...

    @abstractmethod
    async def get_reviews_for_advocate(self, advocate_id: str) -> list[Review]: ...

    # ---- connections ----

    @abstractmethod
    async def _insert_connection(
        self,
        *,
        advocate_id: str,
        client_id: str,
        status: ConnectionStatus,
        payment_id: str | None,
        created_at: datetime,
        expires_at: datetime,
    ) -> Connection: ...

    @abstractmethod
    async def get_connection(self, connection_id: str) -> Connection | None: ...

    @abstractmethod
    async def get_connections_by_client(self, client_id: str) -> list[Connection]: ...

    @abstractmethod
    async def get_connections_by_advocate(self, advocate_id: str) -> list[Connection]: ...

    @abstractmethod
    async def get_connection_by_payment_id(self, payment_id: str) -> Connection | None: ...

    @abstractmethod
    async def update_connection_status(
        self, connection_id: str, status: ConnectionStatus
    ) -> Connection | None: ...

    # ---- chat ----

    @abstractmethod
    async def create_chat_message(
        self, *, user_id: str, is_user_message: bool, content: str
    ) -> ChatMessage: ...

    @abstractmethod
    async def get_chat_history(self, user_id: str, limit: int = 50) -> list[ChatMessage]: ...

    async def close(self) -> None:
        return None

    # ---- derived data ----

    async def update_advocate(self, advocate_id: str, **changes) -> Advocate | None:
        """Update advocate profile fields. ``rating``/``review_count`` are rejected."""
        unknown = set(changes) - ADVOCATE_PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        if not changes:
            return await self.get_advocate(advocate_id)
        return await self._update_advocate_fields(advocate_id, changes)

    async def get_advocate_with_details(self, advocate_id: str) -> AdvocateWithDetails | None:
        advocate = await self.get_advocate(advocate_id)
        if advocate is None:
            return None
        return await self._details_for(advocate)

    async def _details_for(self, advocate: Advocate) -> AdvocateWithDetails | None:
        user = await self.get_user(advocate.user_id)
        location = await self.get_location(advocate.location_id)
        if user is None or location is None:
            logger.warning("Advocate %s has a dangling user or location reference", advocate.id)
            return None
        specialties = await self.get_advocate_specialties(advocate.id)
        return build_advocate_details(advocate, user, location, specialties)

    async def _details_for_all(self, advocates: list[Advocate]) -> list[AdvocateWithDetails]:
        result: list[AdvocateWithDetails] = []
        for advocate in advocates:
            details = await self._details_for(advocate)
            if details is not None:
                result.append(details)
        return result

    async def get_all_advocates(self) -> list[AdvocateWithDetails]:
        return await self._details_for_all(await self.list_advocates())

    async def get_advocates_by_location(self, location_id: str) -> list[AdvocateWithDetails]:
        return await self._details_for_all(await self.list_advocates(location_id=location_id))

    async def get_advocates_by_practice_area(self, practice_area_id: str) -> list[AdvocateWithDetails]:
        result: list[AdvocateWithDetails] = []
        for advocate_id in await self.list_advocate_ids_by_practice_area(practice_area_id):
            details = await self.get_advocate_with_details(advocate_id)
            if details is not None:
                result.append(details)
        return result

    async def get_advocates_by_filter(self, filters: AdvocateFilter) -> list[AdvocateWithDetails]:
        return apply_filters(await self.get_all_advocates(), filters)

    async def create_review(
        self, *, advocate_id: str, user_id: str, rating: int, content: str | None = None
    ) -> Review:
        review = await self._insert_review(
            advocate_id=advocate_id, user_id=user_id, rating=rating, content=content
        )
        await self.update_advocate_rating(advocate_id)
        return review

    async def update_advocate_rating(self, advocate_id: str) -> float:
        """Recompute rating and review count from the stored reviews"""
        reviews = await self.get_reviews_for_advocate(advocate_id)
        rating, count = compute_rating(r.rating for r in reviews)
        await self._set_advocate_rating(advocate_id, rating, count)
        return rating

    @abstractmethod
    async def _set_advocate_rating(self, advocate_id: str, rating: float, review_count: int) -> None: ...

    async def create_connection(
        self,
        *,
        advocate_id: str,
        client_id: str,
        status: ConnectionStatus = "pending",
        payment_id: str | None = None,
        created_at: datetime | None = None,
        expires_at: datetime | None = None,
        validity_days: int = CONNECTION_VALIDITY_DAYS,
    ) -> Connection:
        created = created_at or utcnow()
        expires = expires_at or created + timedelta(days=validity_days)
        return await self._insert_connection(
            advocate_id=advocate_id,
            client_id=client_id,
            status=status,
            payment_id=payment_id,
            created_at=created,
            expires_at=expires,
        )
