"""Detailed advocate view"""
from typing import Iterable

from ..models import (
    Advocate,
    AdvocateContact,
    AdvocateWithDetails,
    Location,
    PracticeArea,
    User,
)


def build_advocate_details(
    advocate: Advocate,
    user: User,
    location: Location,
    specialties: Iterable[PracticeArea],
) -> AdvocateWithDetails:
    # Only the public contact fields of the user are copied.
    return AdvocateWithDetails(
        id=advocate.id,
        user_id=advocate.user_id,
        location_id=advocate.location_id,
        bio=advocate.bio,
        experience=advocate.experience,
        bar_council_number=advocate.bar_council_number,
        image_url=advocate.image_url,
        rating=advocate.rating or 0,
        review_count=advocate.review_count or 0,
        verified=advocate.verified,
        user=AdvocateContact(full_name=user.full_name, email=user.email, phone=user.phone),
        location=location,
        specialties=list(specialties),
    )
