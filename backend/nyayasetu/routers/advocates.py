"""Advocate routes"""
import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from ..models import AdvocateWithDetails
from ..schemas.advocate import (
    AdvocateCreate,
    AdvocateListResponse,
    AdvocateProfileUpdate,
    AdvocateVerify,
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
)
from ..services.advocate_service import AdvocateNotFound, advocate_service
from ..storage import AdvocateFilter
from ..utils.deps import AdminUser, CurrentAdvocate, CurrentUser, StorageDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advocates", tags=["Advocates"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Advocate not found")


@router.get("", response_model=AdvocateListResponse, summary="Search advocates")
async def list_advocates(
    storage: StorageDep,
    location: Annotated[str | None, Query(max_length=100, description="City or state")] = None,
    practice_area: Annotated[str | None, Query(alias="practiceArea", max_length=100)] = None,
    experience: Annotated[str | None, Query(max_length=20, description='"a-b" or "n+" years')] = None,
    search_query: Annotated[str | None, Query(alias="searchQuery", max_length=200)] = None,
):
    """
    List advocates; all given filters must match

    - **location**: substring of city or state
    - **practiceArea**: substring of a specialty name
    - **experience**: "5-10" or "15+"
    - **searchQuery**: substring of name, bio or specialty
    """
    filters = AdvocateFilter(
        location=location,
        practice_area=practice_area,
        experience=experience,
        search_query=search_query,
    )
    items = await advocate_service.search(storage, filters)
    return AdvocateListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=AdvocateWithDetails,
    status_code=status.HTTP_201_CREATED,
    summary="Create advocate (admin)",
)
async def create_advocate(data: AdvocateCreate, storage: StorageDep, _: AdminUser):
    try:
        details = await advocate_service.create(storage, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if details is None:
        raise _not_found()
    return details


@router.get("/me", response_model=AdvocateWithDetails, summary="My advocate profile")
async def get_my_profile(storage: StorageDep, advocate: CurrentAdvocate):
    details = await storage.get_advocate_with_details(advocate.id)
    if details is None:
        raise _not_found()
    return details


@router.put("/me", response_model=AdvocateWithDetails, summary="Update my advocate profile")
async def update_my_profile(data: AdvocateProfileUpdate, storage: StorageDep, advocate: CurrentAdvocate):
    try:
        details = await advocate_service.update_profile(storage, advocate, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if details is None:
        raise _not_found()
    return details


@router.get("/{advocate_id}", response_model=AdvocateWithDetails, summary="Advocate details")
async def get_advocate(advocate_id: str, storage: StorageDep):
    details = await storage.get_advocate_with_details(advocate_id)
    if details is None:
        raise _not_found()
    return details


@router.put("/{advocate_id}/verify", response_model=AdvocateWithDetails, summary="Verify advocate (admin)")
async def verify_advocate(advocate_id: str, data: AdvocateVerify, storage: StorageDep, admin: AdminUser):
    try:
        details = await advocate_service.set_verified(storage, advocate_id, data.verified)
    except AdvocateNotFound:
        raise _not_found()
    logger.info("Advocate %s verified=%s by admin %s", advocate_id, data.verified, admin.id)
    return details


@router.get("/{advocate_id}/reviews", response_model=ReviewListResponse, summary="Advocate reviews")
async def list_reviews(advocate_id: str, storage: StorageDep):
    if await storage.get_advocate(advocate_id) is None:
        raise _not_found()
    reviews = await storage.get_reviews_for_advocate(advocate_id)
    return ReviewListResponse(
        items=[ReviewResponse.model_validate(r) for r in reviews],
        total=len(reviews),
    )


@router.post(
    "/{advocate_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review an advocate",
)
async def create_review(advocate_id: str, data: ReviewCreate, storage: StorageDep, current_user: CurrentUser):
    try:
        review = await advocate_service.add_review(storage, advocate_id, current_user, data)
    except AdvocateNotFound:
        raise _not_found()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ReviewResponse.model_validate(review)
