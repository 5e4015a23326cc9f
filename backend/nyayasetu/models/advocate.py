"""Advocate records and the detailed advocate view"""
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .base import Record, utcnow
from .reference import Location, PracticeArea


class Advocate(Record):
    """Advocate profile. ``rating`` and ``review_count`` are derived from reviews."""
    user_id: str
    location_id: str
    bio: str
    experience: int = Field(ge=0)
    bar_council_number: str
    image_url: str | None = None
    rating: float = 0
    review_count: int = 0
    verified: bool = False


class AdvocateSpecialty(BaseModel):
    advocate_id: str
    practice_area_id: str

    model_config: ClassVar[ConfigDict] = {"frozen": True, "extra": "ignore"}


class Review(Record):
    advocate_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    content: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class AdvocateContact(BaseModel):
    """Public projection of the user owning an advocate profile"""
    full_name: str
    email: str
    phone: str | None = None

    model_config: ClassVar[ConfigDict] = {"frozen": True}


class AdvocateWithDetails(BaseModel):
    """Advocate joined with its user, location and practice areas"""
    id: str
    user_id: str
    location_id: str
    bio: str
    experience: int
    bar_council_number: str
    image_url: str | None = None
    rating: float = 0
    review_count: int = 0
    verified: bool = False
    user: AdvocateContact
    location: Location
    specialties: list[PracticeArea] = []

    model_config: ClassVar[ConfigDict] = {"frozen": True}
