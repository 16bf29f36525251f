"""Forward geocoding of free-form addresses via the Google Geocoding API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from app.core.config import Settings
from app.core.config import settings as default_settings
from app.core.exceptions import GeocodeError, GeocodeStatus
from app.locations.models import Coordinates

logger = structlog.get_logger(__name__)

_USER_AGENT = "LocationLookup/0.1"


def sanitize_address(address: str) -> str:
    """Collapse whitespace and drop NUL bytes."""
    if not address:
        return ""
    return " ".join(address.replace("\x00", "").split())


async def _request_json(
    client: httpx.AsyncClient, url: str, params: dict[str, Any], timeout: float
) -> Any:
    try:
        response = await client.get(
            url,
            params=params,
            headers={"User-Agent": _USER_AGENT},
            timeout=timeout,
        )
    except httpx.RequestError as exc:
        logger.warning("geocode_request_failed", error=str(exc))
        raise GeocodeError(GeocodeStatus.UNKNOWN_ERROR) from exc

    if not response.is_success:
        logger.warning("geocode_bad_status", status=response.status_code)
        raise GeocodeError(GeocodeStatus.UNKNOWN_ERROR)

    try:
        return response.json()
    except ValueError as exc:
        logger.warning("geocode_invalid_json")
        raise GeocodeError(GeocodeStatus.UNKNOWN_ERROR) from exc


def _first_location(payload: Any) -> Coordinates:
    status = GeocodeStatus.parse(payload.get("status") if isinstance(payload, dict) else None)
    if status is not GeocodeStatus.OK:
        if status is not GeocodeStatus.ZERO_RESULTS:
            logger.warning("geocode_api_error", status=status.value)
        raise GeocodeError(status)

    results = payload.get("results") or []
    if not results:
        raise GeocodeError(GeocodeStatus.ZERO_RESULTS)

    # Multiple matches are possible; only the first is used.
    location = (results[0].get("geometry") or {}).get("location") or {}
    try:
        return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("geocode_invalid_payload", location=location)
        raise GeocodeError(GeocodeStatus.UNKNOWN_ERROR) from exc


async def geocode(
    address: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> Coordinates:
    """Resolve ``address`` to coordinates.

    Raises ``GeocodeError`` carrying the provider status on any failure;
    ``GeocodeStatus.ZERO_RESULTS`` means the address simply matched nothing.
    """
    cfg = settings or default_settings
    sanitized = sanitize_address(address)
    if not sanitized:
        raise GeocodeError(GeocodeStatus.INVALID_REQUEST)

    params = {"address": sanitized, "key": cfg.geocode_api_key}
    if client is not None:
        payload = await _request_json(client, cfg.geocode_url, params, cfg.geocode_timeout_seconds)
    else:
        async with httpx.AsyncClient() as own_client:
            payload = await _request_json(
                own_client, cfg.geocode_url, params, cfg.geocode_timeout_seconds
            )

    coordinates = _first_location(payload)
    logger.info("geocode_ok", address=sanitized, lat=coordinates.lat, lng=coordinates.lng)
    return coordinates
