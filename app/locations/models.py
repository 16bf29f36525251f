"""Value types for the in-memory location store."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NewType

# Public record identifier, assigned by the store and exposed over HTTP.
LocationId = NewType("LocationId", int)
# Internal identifier of one physical insertion into the spatial index.
IndexTag = NewType("IndexTag", int)


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


@dataclass
class NewLocation:
    """A location that has not been assigned an id yet."""

    name: str
    address: str
    lat: float
    lng: float


@dataclass
class Location:
    id: LocationId
    name: str
    address: str
    lat: float
    lng: float

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)

    def copy(self, **changes) -> Location:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": int(self.id),
            "name": self.name,
            "address": self.address,
            "lat": self.lat,
            "lng": self.lng,
        }


__all__ = ["Coordinates", "IndexTag", "Location", "LocationId", "NewLocation"]
