"""Look up the nearest location in a CSV file without starting the API.

Example::

    python -m scripts.tools.nearest data/locations.csv 37.7609 -122.4350 --radius 1
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence

from app.core.exceptions import DomainError
from app.locations import Coordinates, LocationDatabase
from app.services.locations import DEFAULT_RADII, LocationService

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find the nearest location to a coordinate")
    parser.add_argument("csv_path", help="5-column locations CSV")
    parser.add_argument("lat", type=float)
    parser.add_argument("lng", type=float)
    parser.add_argument(
        "--radius",
        type=float,
        action="append",
        default=None,
        help="Search radius; repeat to expand (default: 0.5 1 3 7)",
    )
    parser.add_argument("--unit", choices=("mi", "km", "m"), default="mi")
    return parser


def find_nearest(
    csv_path: str, lat: float, lng: float, radii: Sequence[float], unit: str = "mi"
) -> dict | None:
    database = LocationDatabase.load(csv_path)
    service = LocationService(database, radii=radii, unit=unit)
    location = service.nearest(Coordinates(lat=lat, lng=lng))
    return location.to_dict() if location is not None else None


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = _build_parser().parse_args(argv)
    try:
        result = find_nearest(
            args.csv_path, args.lat, args.lng, args.radius or DEFAULT_RADII, args.unit
        )
    except (OSError, DomainError):
        logger.exception("Could not load %s", args.csv_path)
        return 1

    if result is None:
        logger.info("No location found")
        return 2
    print(json.dumps(result, ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
