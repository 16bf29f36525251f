"""API dependency helpers and service providers."""

from fastapi import Depends, HTTPException, Request

from app.core.config import Settings
from app.locations import LocationDatabase
from app.services.locations import Geocoder, LocationService

__all__ = [
    "get_geocoder",
    "get_location_database",
    "get_location_service",
    "get_settings",
]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_location_database(request: Request) -> LocationDatabase:
    database = getattr(request.app.state, "location_database", None)
    if database is None:
        raise HTTPException(status_code=503, detail="location database not loaded")
    return database


def get_geocoder(request: Request) -> Geocoder:
    return request.app.state.geocoder


def get_location_service(
    database: LocationDatabase = Depends(get_location_database),
    geocoder: Geocoder = Depends(get_geocoder),
    settings: Settings = Depends(get_settings),
) -> LocationService:
    return LocationService(
        database,
        geocoder=geocoder,
        radii=settings.radii,
        unit=settings.search_unit,
    )
