"""Practice area and location routes"""
from typing import Annotated

from fastapi import APIRouter, Query

from ..schemas.advocate import LocationListResponse, PracticeAreaListResponse
from ..utils.deps import StorageDep

router = APIRouter(tags=["Reference data"])


@router.get("/practice-areas", response_model=PracticeAreaListResponse, summary="Practice areas")
async def list_practice_areas(storage: StorageDep):
    items = await storage.get_all_practice_areas()
    return PracticeAreaListResponse(items=items, total=len(items))


@router.get("/locations", response_model=LocationListResponse, summary="Locations")
async def list_locations(
    storage: StorageDep,
    q: Annotated[str | None, Query(max_length=100, description="City, state or pincode")] = None,
):
    """All locations, or those whose city/state contains ``q`` or whose pincode equals it"""
    if q and q.strip():
        items = await storage.get_locations_by_city_or_state(q)
    else:
        items = await storage.get_all_locations()
    return LocationListResponse(items=items, total=len(items))
