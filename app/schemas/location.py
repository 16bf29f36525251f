from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.locations import Location, NewLocation

MAX_LENGTH = 100

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_LENGTH)]
Latitude = Annotated[float, Field(ge=-90.0, le=90.0, description="Latitude (-90..90)")]
Longitude = Annotated[float, Field(ge=-180.0, le=180.0, description="Longitude (-180..180)")]


class LocationIn(BaseModel):
    """Body for POST and PUT; unknown properties are ignored."""

    name: Text = Field(description="Display name")
    address: Text = Field(description="Street address")
    lat: Latitude
    lng: Longitude

    model_config = ConfigDict(extra="ignore")

    def to_new_location(self) -> NewLocation:
        return NewLocation(name=self.name, address=self.address, lat=self.lat, lng=self.lng)


class LocationPatch(BaseModel):
    name: Text | None = None
    address: Text | None = None
    lat: Latitude | None = None
    lng: Longitude | None = None

    model_config = ConfigDict(extra="ignore")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class LocationOut(BaseModel):
    id: int = Field(description="Location ID")
    name: str
    address: str
    lat: float
    lng: float

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 2,
                    "name": "Spike's Coffee and Teas",
                    "address": "4117 18th St",
                    "lat": 37.759418,
                    "lng": -122.435263,
                }
            ]
        }
    }

    @classmethod
    def from_location(cls, location: Location) -> LocationOut:
        return cls(**location.to_dict())
