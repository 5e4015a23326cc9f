"""Seeded reference data"""
from .base import Record


class Location(Record):
    city: str
    state: str
    pincode: str | None = None


class PracticeArea(Record):
    name: str
