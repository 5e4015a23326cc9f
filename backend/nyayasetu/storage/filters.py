"""Advocate search filters

All filters are optional and combined with AND. Matching is a
case-insensitive substring test over the detailed advocate view.
"""
import re
from dataclasses import dataclass
from typing import Iterable

from ..models import AdvocateWithDetails

_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)", re.ASCII)
_OPEN_RE = re.compile(r"(\d+)\s*\+", re.ASCII)


@dataclass(frozen=True)
class AdvocateFilter:
    location: str | None = None
    practice_area: str | None = None
    experience: str | None = None
    search_query: str | None = None

    def is_empty(self) -> bool:
        return not (self.location or self.practice_area or self.experience or self.search_query)


def parse_experience(value: str | None) -> tuple[int, int | None] | None:
    """Parse ``"a-b"`` (inclusive) or ``"n+"`` (at least n).

    Returns ``(low, high)`` with ``high`` None for open ranges, or None when
    the value is not a recognised range.
    """
    if not value:
        return None
    text = value.strip()
    m = _RANGE_RE.fullmatch(text)
    if m:
        return int(m.group(1)), int(m.group(2))
    m = _OPEN_RE.fullmatch(text)
    if m:
        return int(m.group(1)), None
    return None


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def matches(advocate: AdvocateWithDetails, filters: AdvocateFilter) -> bool:
    if filters.location:
        needle = filters.location.lower()
        if not (_contains(advocate.location.city, needle) or _contains(advocate.location.state, needle)):
            return False

    if filters.practice_area:
        needle = filters.practice_area.lower()
        if not any(_contains(area.name, needle) for area in advocate.specialties):
            return False

    if filters.experience:
        bounds = parse_experience(filters.experience)
        if bounds is not None:
            low, high = bounds
            if advocate.experience < low:
                return False
            if high is not None and advocate.experience > high:
                return False

    if filters.search_query:
        needle = filters.search_query.lower()
        if not (
            _contains(advocate.user.full_name, needle)
            or _contains(advocate.bio, needle)
            or any(_contains(area.name, needle) for area in advocate.specialties)
        ):
            return False

    return True


def apply_filters(
    advocates: Iterable[AdvocateWithDetails], filters: AdvocateFilter
) -> list[AdvocateWithDetails]:
    if filters.is_empty():
        return list(advocates)
    return [a for a in advocates if matches(a, filters)]
