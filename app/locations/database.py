"""In-memory data store for point-of-interest locations.

The spatial index backing nearest-neighbor lookups supports insertion only. Update
and delete are layered on top of it with two maps:

- ``_locations``: public id -> current record (the record store)
- ``_live_tags``: index tag -> public id, for the one tag per record that is current

Every add/update inserts a fresh, never reused tag into the index. The record's
previous tag is dropped from ``_live_tags``, which leaves its index entry behind as a
tombstone. Readers resolve every index hit through ``_live_tags`` and skip tags that
are no longer there. Tombstones are never compacted, so ``index_size`` only grows.
"""

from __future__ import annotations

import os
import threading

import structlog

from app.locations.loader import read_locations
from app.locations.models import Coordinates, IndexTag, Location, LocationId, NewLocation
from app.locations.spatial_index import GridSpatialIndex
from app.utils.geo import DEFAULT_UNIT, haversine_distance

logger = structlog.get_logger(__name__)

FIRST_LOCATION_ID = 1
FIRST_INDEX_TAG = 0


class LocationDatabase:
    def __init__(self, *, index: GridSpatialIndex[IndexTag] | None = None):
        self._locations: dict[LocationId, Location] = {}
        self._live_tags: dict[IndexTag, LocationId] = {}
        self._tag_by_id: dict[LocationId, IndexTag] = {}
        self._index: GridSpatialIndex[IndexTag] = index if index is not None else GridSpatialIndex()
        self._next_id = FIRST_LOCATION_ID
        self._next_tag = FIRST_INDEX_TAG
        # Guards the record store, tag maps, index and both counters as one unit.
        self._lock = threading.RLock()

    @classmethod
    def load(cls, path: str | os.PathLike) -> LocationDatabase:
        """Build a database from a 5-column ``id,name,address,lat,lng`` CSV file."""
        database = cls()
        logger.info("locations_load_start", path=str(path))
        for location in read_locations(path):
            database.update(location)
        logger.info("locations_load_finish", path=str(path), count=database.size)
        return database

    @property
    def size(self) -> int:
        """Number of live locations."""
        return len(self._locations)

    def __len__(self) -> int:
        return self.size

    @property
    def index_size(self) -> int:
        """Number of physical index entries, tombstones included."""
        return len(self._index)

    @property
    def orphaned_entries(self) -> int:
        with self._lock:
            return len(self._index) - len(self._live_tags)

    def add(self, new_location: NewLocation) -> Location:
        """Insert a location under the next unused id and return the stored record."""
        with self._lock:
            location = Location(
                id=LocationId(self._next_id),
                name=new_location.name,
                address=new_location.address,
                lat=new_location.lat,
                lng=new_location.lng,
            )
            self.update(location)
            return location.copy()

    def get(self, location_id: int) -> Location | None:
        with self._lock:
            location = self._locations.get(LocationId(location_id))
            return location.copy() if location is not None else None

    def update(self, location: Location) -> None:
        """Insert or replace the location stored under ``location.id``.

        Works the same for new and existing ids; an existing record only differs in
        that its current index tag is retired first.
        """
        location_id = LocationId(int(location.id))
        with self._lock:
            self._retire_tag(location_id)
            tag = self._mint_tag()
            stored = location.copy(id=location_id)
            self._locations[location_id] = stored
            self._live_tags[tag] = location_id
            self._tag_by_id[location_id] = tag
            self._index.insert(stored.lat, stored.lng, tag)
            if location_id >= self._next_id:
                self._next_id = location_id + 1
        logger.debug("location_updated", location_id=int(location_id), tag=int(tag))

    def remove(self, location_id: int) -> bool:
        """Remove a location. Returns False when no such location exists."""
        key = LocationId(location_id)
        with self._lock:
            if key not in self._locations:
                return False
            self._retire_tag(key)
            del self._locations[key]
        logger.debug("location_removed", location_id=int(key))
        return True

    def find_nearest(
        self, coordinates: Coordinates, radius: float, unit: str = DEFAULT_UNIT
    ) -> Location | None:
        """Return the live location closest to ``coordinates`` within ``radius``.

        Among locations at exactly the same distance the first candidate returned by
        the index wins; that order is unspecified.
        """
        origin = coordinates.as_tuple()
        best: Location | None = None
        best_distance = float("inf")
        with self._lock:
            for tag in self._index.query_radius(origin[0], origin[1], radius, unit):
                location_id = self._live_tags.get(tag)
                if location_id is None:
                    continue
                location = self._locations.get(location_id)
                if location is None:
                    continue
                distance = haversine_distance(origin, (location.lat, location.lng), unit=unit)
                if distance < best_distance:
                    best_distance = distance
                    best = location
            return best.copy() if best is not None else None

    def _mint_tag(self) -> IndexTag:
        tag = IndexTag(self._next_tag)
        self._next_tag += 1
        return tag

    def _retire_tag(self, location_id: LocationId) -> None:
        tag = self._tag_by_id.pop(location_id, None)
        if tag is not None:
            self._live_tags.pop(tag, None)


__all__ = ["FIRST_INDEX_TAG", "FIRST_LOCATION_ID", "LocationDatabase"]
