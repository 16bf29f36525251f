"""
Insert-only grid bucket index for tagged lat/lng points.

Points are bucketed into fixed-size cells of latitude/longitude degrees. Radius
queries scan the cells overlapping the bounding box of the search circle and then
apply an exact haversine check, so results are exact but returned in no particular
order. There is intentionally no delete or update: callers that need either must
track liveness of tags themselves.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from app.utils.geo import DEFAULT_UNIT, LatLng, degrees_for_distance, haversine_distance

T = TypeVar("T")

DEFAULT_CELL_SIZE_DEG = 0.05


@dataclass(frozen=True)
class _Entry(Generic[T]):
    lat: float
    lng: float
    tag: T


class GridSpatialIndex(Generic[T]):
    def __init__(self, *, cell_size_deg: float = DEFAULT_CELL_SIZE_DEG):
        if float(cell_size_deg) <= 0 or float(cell_size_deg) > 180:
            raise ValueError("cell_size_deg must be in (0, 180]")
        self._cell_size = float(cell_size_deg)
        # Tolerate float error so 360 / 0.05 gives 7200 cells, not 7201.
        self._lng_cells = int(math.ceil(360.0 / self._cell_size - 1e-9))
        self._cells: dict[tuple[int, int], list[_Entry[T]]] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    # Cell addressing -------------------------------------------------

    def _row(self, lat: float) -> int:
        return int(math.floor((float(lat) + 90.0) / self._cell_size))

    def _col(self, lng: float) -> int:
        # Longitude 180 shares the last cell rather than wrapping to a new one
        return min(int(math.floor((float(lng) + 180.0) / self._cell_size)), self._lng_cells - 1)

    def _cols_between(self, min_lng: float, max_lng: float) -> Iterator[int]:
        """Columns covering min_lng..max_lng; the range may extend past +-180."""
        if max_lng - min_lng >= 360.0:
            yield from range(self._lng_cells)
            return
        shift = math.floor((min_lng + 180.0) / 360.0) * 360.0
        lo, hi = min_lng - shift, max_lng - shift
        segments = [(lo, min(hi, 180.0))]
        if hi > 180.0:
            segments.append((-180.0, hi - 360.0))
        seen: set[int] = set()
        for start, stop in segments:
            for col in range(self._col(start), self._col(stop) + 1):
                if col not in seen:
                    seen.add(col)
                    yield col

    def _scan(self, rows: range, cols: list[int]) -> Iterator[_Entry[T]]:
        for row in rows:
            for col in cols:
                cell = self._cells.get((row, col))
                if cell:
                    yield from cell

    # Public API --------------------------------------------------------

    def insert(self, lat: float, lng: float, tag: T) -> None:
        entry = _Entry(lat=float(lat), lng=float(lng), tag=tag)
        self._cells.setdefault((self._row(entry.lat), self._col(entry.lng)), []).append(entry)
        self._count += 1

    def query_radius(
        self, lat: float, lng: float, radius: float, unit: str = DEFAULT_UNIT
    ) -> list[T]:
        """Return tags of every point within ``radius`` of ``(lat, lng)``."""
        r = float(radius)
        if r < 0:
            return []
        origin: LatLng = (float(lat), float(lng))

        dlat = degrees_for_distance(r, unit=unit)
        min_lat = max(-90.0, origin[0] - dlat)
        max_lat = min(90.0, origin[0] + dlat)
        widest = max(abs(min_lat), abs(max_lat))
        cos_lat = math.cos(math.radians(widest))
        if widest >= 90.0 or cos_lat <= 0 or dlat / cos_lat >= 180.0:
            cols = list(range(self._lng_cells))
        else:
            dlng = dlat / cos_lat
            cols = list(self._cols_between(origin[1] - dlng, origin[1] + dlng))

        out: list[T] = []
        for entry in self._scan(range(self._row(min_lat), self._row(max_lat) + 1), cols):
            if haversine_distance(origin, (entry.lat, entry.lng), unit=unit) <= r:
                out.append(entry.tag)
        return out

    def query_box(self, min_coords: LatLng, max_coords: LatLng) -> list[T]:
        """Return tags of every point inside the box spanned by two corners.

        A box whose minimum longitude is greater than its maximum longitude is
        treated as crossing the antimeridian.
        """
        min_lat, min_lng = (float(v) for v in min_coords)
        max_lat, max_lng = (float(v) for v in max_coords)
        if min_lat > max_lat:
            return []
        wraps = min_lng > max_lng
        span_max = max_lng + 360.0 if wraps else max_lng
        cols = list(self._cols_between(min_lng, span_max))

        def _inside(entry: _Entry[T]) -> bool:
            if not (min_lat <= entry.lat <= max_lat):
                return False
            if wraps:
                return entry.lng >= min_lng or entry.lng <= max_lng
            return min_lng <= entry.lng <= max_lng

        rows = range(self._row(min_lat), self._row(max_lat) + 1)
        return [entry.tag for entry in self._scan(rows, cols) if _inside(entry)]


__all__ = ["DEFAULT_CELL_SIZE_DEG", "GridSpatialIndex"]
