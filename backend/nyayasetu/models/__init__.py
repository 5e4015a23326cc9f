"""Stored record types"""
from .base import Record, utcnow
from .user import Role, User, UserRole
from .reference import Location, PracticeArea
from .advocate import (
    Advocate,
    AdvocateContact,
    AdvocateSpecialty,
    AdvocateWithDetails,
    Review,
)
from .connection import Connection, ConnectionStatus
from .chat import GUEST_USER_ID, ChatMessage

__all__ = [
    "Record",
    "utcnow",
    "Role",
    "User",
    "UserRole",
    "Location",
    "PracticeArea",
    "Advocate",
    "AdvocateContact",
    "AdvocateSpecialty",
    "AdvocateWithDetails",
    "Review",
    "Connection",
    "ConnectionStatus",
    "GUEST_USER_ID",
    "ChatMessage",
]
