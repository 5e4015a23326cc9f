"""Advocate profiles and reviews"""
import logging

from ..models import Advocate, AdvocateWithDetails, Review, User
from ..schemas.advocate import AdvocateCreate, AdvocateProfileUpdate, ReviewCreate
from ..storage import AdvocateFilter, Storage

logger = logging.getLogger(__name__)


class AdvocateNotFound(LookupError):
    pass


class AdvocateService:
    """Advocate service"""

    @staticmethod
    async def search(storage: Storage, filters: AdvocateFilter) -> list[AdvocateWithDetails]:
        if filters.is_empty():
            return await storage.get_all_advocates()
        return await storage.get_advocates_by_filter(filters)

    @staticmethod
    async def _check_practice_areas(storage: Storage, practice_area_ids: list[str]) -> None:
        for area_id in practice_area_ids:
            if await storage.get_practice_area(area_id) is None:
                raise ValueError(f"Unknown practice area: {area_id}")

    @staticmethod
    async def create(storage: Storage, data: AdvocateCreate) -> AdvocateWithDetails | None:
        """Create an advocate for an existing user, then link its practice areas.

        The two steps are not atomic: if linking fails part way the advocate
        exists with fewer specialties.
        """
        if await storage.get_user(data.user_id) is None:
            raise ValueError("User not found")
        if await storage.get_location(data.location_id) is None:
            raise ValueError("Location not found")
        if await storage.get_advocate_by_user_id(data.user_id) is not None:
            raise ValueError("User already has an advocate profile")
        await AdvocateService._check_practice_areas(storage, data.practice_area_ids)

        advocate = await storage.create_advocate(
            user_id=data.user_id,
            location_id=data.location_id,
            bio=data.bio,
            experience=data.experience,
            bar_council_number=data.bar_council_number,
            image_url=data.image_url,
            verified=data.verified,
        )
        for area_id in data.practice_area_ids:
            await storage.add_specialty_to_advocate(advocate.id, area_id)
        logger.info("Advocate %s created for user %s", advocate.id, data.user_id)
        return await storage.get_advocate_with_details(advocate.id)

    @staticmethod
    async def update_profile(
        storage: Storage, advocate: Advocate, data: AdvocateProfileUpdate
    ) -> AdvocateWithDetails | None:
        changes = data.model_dump(exclude_unset=True, exclude={"practice_area_ids"})
        changes = {k: v for k, v in changes.items() if v is not None or k == "image_url"}
        if "location_id" in changes and await storage.get_location(changes["location_id"]) is None:
            raise ValueError("Location not found")
        area_ids = data.practice_area_ids or []
        await AdvocateService._check_practice_areas(storage, area_ids)

        await storage.update_advocate(advocate.id, **changes)
        for area_id in area_ids:
            await storage.add_specialty_to_advocate(advocate.id, area_id)
        return await storage.get_advocate_with_details(advocate.id)

    @staticmethod
    async def set_verified(storage: Storage, advocate_id: str, verified: bool) -> AdvocateWithDetails:
        if await storage.update_advocate(advocate_id, verified=verified) is None:
            raise AdvocateNotFound(advocate_id)
        details = await storage.get_advocate_with_details(advocate_id)
        if details is None:
            raise AdvocateNotFound(advocate_id)
        return details

    @staticmethod
    async def add_review(storage: Storage, advocate_id: str, author: User, data: ReviewCreate) -> Review:
        advocate = await storage.get_advocate(advocate_id)
        if advocate is None:
            raise AdvocateNotFound(advocate_id)
        if advocate.user_id == author.id:
            raise ValueError("Advocates cannot review their own profile")
        review = await storage.create_review(
            advocate_id=advocate.id,
            user_id=author.id,
            rating=data.rating,
            content=data.content,
        )
        logger.info("Review %s added to advocate %s", review.id, advocate.id)
        return review


advocate_service = AdvocateService()
