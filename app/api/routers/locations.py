"""/locations routers that delegate to LocationService via DI."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.api.deps import get_location_service
from app.schemas.common import ErrorResponse, OkResponse, ValidationErrorResponse
from app.schemas.location import MAX_LENGTH, LocationIn, LocationOut, LocationPatch
from app.services.locations import LocationService

router = APIRouter(prefix="/locations", tags=["locations"])

LocationIdPath = Annotated[int, Path(ge=0, description="Location ID")]

_ERRORS = {
    400: {"model": ValidationErrorResponse, "description": "validation error"},
    404: {"model": ErrorResponse, "description": "Not Found"},
}


@router.post(
    "",
    response_model=LocationOut,
    status_code=201,
    summary="Create a location",
    responses={400: _ERRORS[400]},
)
async def create_location(
    payload: LocationIn,
    svc: LocationService = Depends(get_location_service),
):
    return LocationOut.from_location(svc.create(payload.to_new_location()))


# Registered before /{location_id} so "nearest" is not parsed as an id.
@router.get(
    "/nearest",
    response_model=LocationOut,
    summary="Nearest location to an address",
    description=(
        "Geocodes `address` and returns the closest location, searching at "
        "successively larger radii (0.5, 1, 3 and 7 miles by default)."
    ),
    responses={
        **_ERRORS,
        502: {"model": ErrorResponse, "description": "geocoding provider failure"},
    },
)
async def nearest_location(
    address: str = Query(..., min_length=1, max_length=MAX_LENGTH, description="Free-form address"),
    svc: LocationService = Depends(get_location_service),
):
    return LocationOut.from_location(await svc.nearest_to_address(address))


@router.get(
    "/{location_id}",
    response_model=LocationOut,
    summary="Get a location",
    responses=_ERRORS,
)
async def get_location(
    location_id: LocationIdPath,
    svc: LocationService = Depends(get_location_service),
):
    return LocationOut.from_location(svc.get(location_id))


@router.put(
    "/{location_id}",
    response_model=LocationOut,
    summary="Replace an existing location",
    responses=_ERRORS,
)
async def replace_location(
    location_id: LocationIdPath,
    payload: LocationIn,
    svc: LocationService = Depends(get_location_service),
):
    location = svc.replace(location_id, payload.model_dump())
    return LocationOut.from_location(location)


@router.patch(
    "/{location_id}",
    response_model=LocationOut,
    summary="Partially update an existing location",
    responses=_ERRORS,
)
async def patch_location(
    location_id: LocationIdPath,
    payload: LocationPatch,
    svc: LocationService = Depends(get_location_service),
):
    return LocationOut.from_location(svc.patch(location_id, payload.changes()))


@router.delete(
    "/{location_id}",
    response_model=OkResponse,
    summary="Delete a location",
    responses=_ERRORS,
)
async def delete_location(
    location_id: LocationIdPath,
    svc: LocationService = Depends(get_location_service),
):
    svc.delete(location_id)
    return {"ok": True}
