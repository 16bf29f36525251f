"""In-memory geospatial location store."""

from .database import LocationDatabase
from .models import Coordinates, IndexTag, Location, LocationId, NewLocation
from .spatial_index import GridSpatialIndex

__all__ = [
    "Coordinates",
    "GridSpatialIndex",
    "IndexTag",
    "Location",
    "LocationDatabase",
    "LocationId",
    "NewLocation",
]
