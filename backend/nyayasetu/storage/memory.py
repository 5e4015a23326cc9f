"""In-memory storage backend

Records live in dicts keyed by integer counters and are rendered with
string ids. Every mutation runs without awaiting between its read and its
write, so it is atomic with respect to other requests on the event loop.
"""
import itertools
from datetime import datetime
from typing import Generic, Iterator, TypeVar

from ..models import (
    Advocate,
    AdvocateSpecialty,
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

R = TypeVar("R", bound=Record)


def _key(record_id: str | int | None) -> int | None:
    """Convert an external id to the integer key; unparsable ids find nothing."""
    if record_id is None:
        return None
    try:
        return int(str(record_id))
    except ValueError:
        return None


class _Table(dict, Generic[R]):
    def __init__(self):
        super().__init__()
        self._ids: Iterator[int] = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def find(self, record_id: str | int | None) -> R | None:
        key = _key(record_id)
        return None if key is None else self.get(key)


class MemoryStorage(Storage):
    """Volatile storage used for development and tests"""

    backend_name = "memory"

    def __init__(self):
        self.users: _Table[User] = _Table()
        self.locations: _Table[Location] = _Table()
        self.practice_areas: _Table[PracticeArea] = _Table()
        self.advocates: _Table[Advocate] = _Table()
        self.reviews: _Table[Review] = _Table()
        self.connections: _Table[Connection] = _Table()
        self.chat_messages: _Table[ChatMessage] = _Table()
        self.specialties: list[AdvocateSpecialty] = []

    # ---- users ----

    async def get_user(self, user_id: str) -> User | None:
        return self.users.find(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        wanted = username.casefold()
        return next((u for u in self.users.values() if u.username.casefold() == wanted), None)

    async def get_user_by_email(self, email: str) -> User | None:
        wanted = email.casefold()
        return next((u for u in self.users.values() if u.email.casefold() == wanted), None)

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
        for existing in self.users.values():
            if existing.username.casefold() == username.casefold():
                raise ValueError("Username already exists")
            if existing.email.casefold() == email.casefold():
                raise ValueError("Email already exists")
        key = self.users.next_id()
        user = User(
            id=str(key),
            username=username,
            password=password,
            email=email,
            full_name=full_name,
            phone=phone,
            role=role,
            created_at=utcnow(),
        )
        self.users[key] = user
        return user

    async def count_users(self) -> int:
        return len(self.users)

    # ---- locations ----

    async def create_location(self, *, city: str, state: str, pincode: str | None = None) -> Location:
        key = self.locations.next_id()
        location = Location(id=str(key), city=city, state=state, pincode=pincode)
        self.locations[key] = location
        return location

    async def get_location(self, location_id: str) -> Location | None:
        return self.locations.find(location_id)

    async def get_all_locations(self) -> list[Location]:
        return list(self.locations.values())

    async def get_locations_by_city_or_state(self, query: str) -> list[Location]:
        needle = (query or "").strip().lower()
        if not needle:
            return await self.get_all_locations()
        return [
            loc
            for loc in self.locations.values()
            if needle in loc.city.lower() or needle in loc.state.lower() or loc.pincode == needle
        ]

    # ---- practice areas ----

    async def create_practice_area(self, *, name: str) -> PracticeArea:
        if any(a.name == name for a in self.practice_areas.values()):
            raise ValueError("Practice area already exists")
        key = self.practice_areas.next_id()
        area = PracticeArea(id=str(key), name=name)
        self.practice_areas[key] = area
        return area

    async def get_practice_area(self, practice_area_id: str) -> PracticeArea | None:
        return self.practice_areas.find(practice_area_id)

    async def get_all_practice_areas(self) -> list[PracticeArea]:
        return list(self.practice_areas.values())

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
        if any(a.user_id == str(user_id) for a in self.advocates.values()):
            raise ValueError("User already has an advocate profile")
        key = self.advocates.next_id()
        advocate = Advocate(
            id=str(key),
            user_id=str(user_id),
            location_id=str(location_id),
            bio=bio,
            experience=experience,
            bar_council_number=bar_council_number,
            image_url=image_url,
            rating=0,
            review_count=0,
            verified=verified,
        )
        self.advocates[key] = advocate
        return advocate

    async def get_advocate(self, advocate_id: str) -> Advocate | None:
        return self.advocates.find(advocate_id)

    async def get_advocate_by_user_id(self, user_id: str) -> Advocate | None:
        return next((a for a in self.advocates.values() if a.user_id == str(user_id)), None)

    async def list_advocates(self, *, location_id: str | None = None) -> list[Advocate]:
        if location_id is None:
            return list(self.advocates.values())
        return [a for a in self.advocates.values() if a.location_id == str(location_id)]

    async def list_advocate_ids_by_practice_area(self, practice_area_id: str) -> list[str]:
        return [s.advocate_id for s in self.specialties if s.practice_area_id == str(practice_area_id)]

    async def _update_advocate_fields(self, advocate_id: str, fields: dict) -> Advocate | None:
        current = self.advocates.find(advocate_id)
        if current is None:
            return None
        if "location_id" in fields:
            fields = {**fields, "location_id": str(fields["location_id"])}
        updated = current.model_copy(update=fields)
        self.advocates[int(current.id)] = updated
        return updated

    async def _set_advocate_rating(self, advocate_id: str, rating: float, review_count: int) -> None:
        current = self.advocates.find(advocate_id)
        if current is not None:
            self.advocates[int(current.id)] = current.model_copy(
                update={"rating": rating, "review_count": review_count}
            )

    # ---- specialties ----

    async def add_specialty_to_advocate(self, advocate_id: str, practice_area_id: str) -> None:
        link = AdvocateSpecialty(advocate_id=str(advocate_id), practice_area_id=str(practice_area_id))
        if link not in self.specialties:
            self.specialties.append(link)

    async def get_advocate_specialties(self, advocate_id: str) -> list[PracticeArea]:
        areas: list[PracticeArea] = []
        for link in self.specialties:
            if link.advocate_id != str(advocate_id):
                continue
            area = self.practice_areas.find(link.practice_area_id)
            if area is not None:
                areas.append(area)
        return areas

    # ---- reviews ----

    async def _insert_review(
        self, *, advocate_id: str, user_id: str, rating: int, content: str | None
    ) -> Review:
        key = self.reviews.next_id()
        review = Review(
            id=str(key),
            advocate_id=str(advocate_id),
            user_id=str(user_id),
            rating=rating,
            content=content,
            created_at=utcnow(),
        )
        self.reviews[key] = review
        return review

    async def get_reviews_for_advocate(self, advocate_id: str) -> list[Review]:
        found = [r for r in self.reviews.values() if r.advocate_id == str(advocate_id)]
        return sorted(found, key=lambda r: (r.created_at, int(r.id)), reverse=True)

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
        key = self.connections.next_id()
        connection = Connection(
            id=str(key),
            advocate_id=str(advocate_id),
            client_id=str(client_id),
            status=status,
            payment_id=payment_id,
            created_at=created_at,
            expires_at=expires_at,
        )
        self.connections[key] = connection
        return connection

    async def get_connection(self, connection_id: str) -> Connection | None:
        return self.connections.find(connection_id)

    def _newest_first(self, connections: list[Connection]) -> list[Connection]:
        return sorted(connections, key=lambda c: (c.created_at, int(c.id)), reverse=True)

    async def get_connections_by_client(self, client_id: str) -> list[Connection]:
        return self._newest_first([c for c in self.connections.values() if c.client_id == str(client_id)])

    async def get_connections_by_advocate(self, advocate_id: str) -> list[Connection]:
        return self._newest_first(
            [c for c in self.connections.values() if c.advocate_id == str(advocate_id)]
        )

    async def get_connection_by_payment_id(self, payment_id: str) -> Connection | None:
        return next((c for c in self.connections.values() if c.payment_id == payment_id), None)

    async def update_connection_status(
        self, connection_id: str, status: ConnectionStatus
    ) -> Connection | None:
        current = self.connections.find(connection_id)
        if current is None:
            return None
        updated = current.model_copy(update={"status": status})
        self.connections[int(current.id)] = updated
        return updated

    # ---- chat ----

    async def create_chat_message(
        self, *, user_id: str, is_user_message: bool, content: str
    ) -> ChatMessage:
        key = self.chat_messages.next_id()
        message = ChatMessage(
            id=str(key),
            user_id=str(user_id),
            is_user_message=is_user_message,
            content=content,
            created_at=utcnow(),
        )
        self.chat_messages[key] = message
        return message

    async def get_chat_history(self, user_id: str, limit: int = 50) -> list[ChatMessage]:
        found = [m for m in self.chat_messages.values() if m.user_id == str(user_id)]
        found.sort(key=lambda m: (m.created_at, int(m.id)))
        if limit <= 0:
            return []
        return found[-limit:]
