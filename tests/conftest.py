"""Shared pytest fixtures: a small CSV-backed database and an app with a stub geocoder."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Boot settings before the app module is imported.
load_dotenv(".env.test", override=False)
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core.config import Settings  # noqa: E402
from app.core.exceptions import GeocodeError, GeocodeStatus  # noqa: E402
from app.locations import Coordinates, LocationDatabase  # noqa: E402
from app.main import create_app  # noqa: E402

DATA_DIR = Path(__file__).parent / "data"
TEST_CSV = DATA_DIR / "locations.csv"

# Addresses the stub geocoder knows about.
KNOWN_ADDRESSES = {
    "4076 18th St": Coordinates(lat=37.760889, lng=-122.435020),
    "4117 18th St": Coordinates(lat=37.759418, lng=-122.435263),
    "Mount Diablo Summit": Coordinates(lat=37.881658, lng=-121.914146),
    "Ferry Building": Coordinates(lat=37.795490, lng=-122.393700),
}


class StubGeocoder:
    def __init__(self, addresses: dict[str, Coordinates] | None = None):
        self.addresses = dict(KNOWN_ADDRESSES if addresses is None else addresses)
        self.failure: GeocodeStatus | None = None
        self.calls: list[str] = []

    async def __call__(self, address: str) -> Coordinates:
        self.calls.append(address)
        if self.failure is not None:
            raise GeocodeError(self.failure)
        try:
            return self.addresses[address]
        except KeyError:
            raise GeocodeError(GeocodeStatus.ZERO_RESULTS) from None


@pytest.fixture
def test_settings() -> Settings:
    return Settings(locations_csv=str(TEST_CSV), geocode_api_key="test-key")


@pytest.fixture
def database() -> LocationDatabase:
    return LocationDatabase.load(TEST_CSV)


@pytest.fixture
def geocoder() -> StubGeocoder:
    return StubGeocoder()


@pytest.fixture
def app(test_settings: Settings, geocoder: StubGeocoder) -> FastAPI:
    """App that loads tests/data/locations.csv on startup."""
    return create_app(test_settings, geocoder=geocoder)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def app_client(
    test_settings: Settings, database: LocationDatabase, geocoder: StubGeocoder
) -> AsyncIterator[AsyncClient]:
    """Async client over an app with the database injected (no lifespan)."""
    app = create_app(test_settings, database=database, geocoder=geocoder)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
