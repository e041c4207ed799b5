"""Location endpoints - the map reads every pin from here."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.config import get_settings
from app.schemas.location import LocationsResponse, LocationSearchResponse, PlaceRecord
from app.services.location_store import LocationStore, get_location_store

router = APIRouter()


@router.get("/locations", response_model=LocationsResponse)
async def list_locations(
    sorted_by_priority: Optional[bool] = Query(
        None, alias="sorted", description="Sort by priority index, highest first"
    ),
    store: LocationStore = Depends(get_location_store),
):
    """
    List all places with their current priority index.

    Sorting defaults to the SORT_LOCATIONS_BY_PRIORITY setting. Places with
    equal index keep their fixture order.
    """
    if sorted_by_priority is None:
        sorted_by_priority = get_settings().sort_locations_by_priority
    return LocationsResponse(locations=store.list_locations(sort_by_priority=sorted_by_priority))


@router.get("/locations/search", response_model=LocationSearchResponse)
async def search_location(
    name: str = Query(..., min_length=1),
    fuzzy: bool = Query(True),
    store: LocationStore = Depends(get_location_store),
):
    """Resolve a free-text name to a place; location is null when nothing matches."""
    return LocationSearchResponse(location=store.find_by_name(name, fuzzy=fuzzy))


@router.get("/locations/{location_id}", response_model=PlaceRecord)
async def get_location(
    location_id: int,
    store: LocationStore = Depends(get_location_store),
):
    """Get a single place by id."""
    location = store.get_location(location_id)
    if location is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Location {location_id} not found",
        )
    return location
