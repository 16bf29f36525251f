"""CSV ingestion for the location store.

Files carry five headerless columns: ``id, name, address, lat, lng``. Whitespace
around every field is ignored and blank lines are skipped.
"""

from __future__ import annotations

import csv
import os
from collections.abc import Iterator

import structlog

from app.core.exceptions import LocationFileError
from app.locations.models import Location, LocationId

logger = structlog.get_logger(__name__)

COLUMNS = ("id", "name", "address", "lat", "lng")


def _parse_row(path: str, line: int, row: list[str]) -> Location:
    fields = [value.strip() for value in row]
    if len(fields) != len(COLUMNS):
        raise LocationFileError(path, line, f"expected {len(COLUMNS)} columns, got {len(fields)}")
    raw_id, name, address, raw_lat, raw_lng = fields
    try:
        location_id = int(raw_id)
        lat = float(raw_lat)
        lng = float(raw_lng)
    except ValueError as exc:
        raise LocationFileError(path, line, str(exc)) from exc
    return Location(id=LocationId(location_id), name=name, address=address, lat=lat, lng=lng)


def read_locations(path: str | os.PathLike) -> Iterator[Location]:
    """Yield locations from ``path`` in file order.

    Raises ``FileNotFoundError`` for a missing file and ``LocationFileError`` for a
    row that cannot be parsed.
    """
    display = str(path)
    with open(path, newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh, skipinitialspace=True)
        for row in reader:
            if not row or all(not value.strip() for value in row):
                continue
            location = _parse_row(display, reader.line_num, row)
            logger.debug("location_row", line=reader.line_num, location_id=int(location.id))
            yield location


__all__ = ["COLUMNS", "read_locations"]
