from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import structlog

from app.core.exceptions import AddressNotFoundError, GeocodeError, GeocodeStatus, NotFoundError
from app.locations import Coordinates, Location, LocationDatabase, NewLocation
from app.services.geocode import geocode as _geocode
from app.services.geocode import sanitize_address
from app.utils.geo import DEFAULT_UNIT

Geocoder = Callable[[str], Awaitable[Coordinates]]

DEFAULT_RADII: tuple[float, ...] = (0.5, 1.0, 3.0, 7.0)
EDITABLE_FIELDS = ("name", "address", "lat", "lng")

logger = structlog.get_logger(__name__)


class LocationService:
    """CRUD and nearest-location lookups on top of a ``LocationDatabase``."""

    def __init__(
        self,
        database: LocationDatabase,
        *,
        geocoder: Geocoder = _geocode,
        radii: Sequence[float] = DEFAULT_RADII,
        unit: str = DEFAULT_UNIT,
    ):
        self._db = database
        self._geocoder = geocoder
        self._radii = tuple(sorted(float(r) for r in radii))
        self._unit = unit

    @property
    def max_radius(self) -> float:
        return self._radii[-1]

    def create(self, new_location: NewLocation) -> Location:
        location = self._db.add(new_location)
        logger.info("location_created", location_id=int(location.id))
        return location

    def get(self, location_id: int) -> Location:
        location = self._db.get(location_id)
        if location is None:
            raise NotFoundError("location not found")
        return location

    def replace(self, location_id: int, fields: Mapping[str, Any]) -> Location:
        current = self.get(location_id)
        updated = current.copy(**{name: fields[name] for name in EDITABLE_FIELDS})
        self._db.update(updated)
        logger.info("location_replaced", location_id=int(location_id))
        return updated

    def patch(self, location_id: int, changes: Mapping[str, Any]) -> Location:
        current = self.get(location_id)
        updated = current.copy(
            **{name: value for name, value in changes.items() if name in EDITABLE_FIELDS}
        )
        self._db.update(updated)
        logger.info("location_patched", location_id=int(location_id), fields=sorted(changes))
        return updated

    def delete(self, location_id: int) -> None:
        if not self._db.remove(location_id):
            raise NotFoundError("location not found")
        logger.info("location_deleted", location_id=int(location_id))

    def nearest(self, coordinates: Coordinates) -> Location | None:
        """Search at successively larger radii and stop at the first hit."""
        for radius in self._radii:
            location = self._db.find_nearest(coordinates, radius, self._unit)
            if location is not None:
                logger.info(
                    "nearest_found",
                    location_id=int(location.id),
                    radius=radius,
                    unit=self._unit,
                )
                return location
        return None

    async def nearest_to_address(self, address: str) -> Location:
        address = sanitize_address(address)
        try:
            coordinates = await self._geocoder(address)
        except GeocodeError as exc:
            if exc.status is GeocodeStatus.ZERO_RESULTS:
                raise AddressNotFoundError(address) from exc
            raise

        location = self.nearest(coordinates)
        if location is None:
            raise NotFoundError(f"no locations found within {self.max_radius:g} {self._unit}")
        return location


__all__ = ["DEFAULT_RADII", "EDITABLE_FIELDS", "Geocoder", "LocationService"]
