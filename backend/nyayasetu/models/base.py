"""Shared base for stored records"""
from datetime import datetime, timezone
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """A stored record. Ids are always strings outside the storage layer."""
    id: str

    model_config: ClassVar[ConfigDict] = {"frozen": True, "extra": "ignore"}
