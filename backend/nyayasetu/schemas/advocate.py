"""Advocate, review and reference data schemas"""
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..models import AdvocateWithDetails, Location, PracticeArea


class AdvocateListResponse(BaseModel):
    items: list[AdvocateWithDetails]
    total: int


class AdvocateCreate(BaseModel):
    """Admin: create an advocate profile for an existing user"""
    user_id: str
    location_id: str
    bio: str = Field(..., min_length=1, max_length=5000)
    experience: int = Field(0, ge=0, le=80)
    bar_council_number: str = Field(..., min_length=1, max_length=50)
    image_url: str | None = Field(None, max_length=500)
    verified: bool = False
    practice_area_ids: list[str] = []


class AdvocateProfileUpdate(BaseModel):
    """Advocate: update own profile. Practice areas are added, never removed."""
    bio: str | None = Field(None, min_length=1, max_length=5000)
    experience: int | None = Field(None, ge=0, le=80)
    bar_council_number: str | None = Field(None, min_length=1, max_length=50)
    image_url: str | None = Field(None, max_length=500)
    location_id: str | None = None
    practice_area_ids: list[str] | None = None


class AdvocateVerify(BaseModel):
    verified: bool = True


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    content: str | None = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    id: str
    advocate_id: str
    user_id: str
    rating: int
    content: str | None = None
    created_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)


class ReviewListResponse(BaseModel):
    items: list[ReviewResponse]
    total: int


class PracticeAreaListResponse(BaseModel):
    items: list[PracticeArea]
    total: int


class LocationListResponse(BaseModel):
    items: list[Location]
    total: int
