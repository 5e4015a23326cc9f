"""User record"""
from datetime import datetime
from typing import Literal

from pydantic import Field

from .base import Record, utcnow


class Role:
    CLIENT = "client"
    ADVOCATE = "advocate"
    ADMIN = "admin"


UserRole = Literal["client", "advocate", "admin"]


class User(Record):
    """User account. ``password`` holds the stored hash and never leaves the API."""
    username: str
    password: str
    email: str
    full_name: str
    phone: str | None = None
    role: UserRole = "client"
    created_at: datetime = Field(default_factory=utcnow)
