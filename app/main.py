import os
from contextlib import asynccontextmanager
from functools import partial

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from app.api import errors
from app.api.routers.healthz import router as healthz_router
from app.api.routers.locations import router as locations_router
from app.api.routers.readyz import router as readyz_router
from app.core.config import Settings
from app.core.config import settings as default_settings
from app.locations import LocationDatabase
from app.logging import setup_logging
from app.middleware.request_id import request_id_middleware
from app.middleware.security_headers import security_headers_middleware
from app.services.geocode import geocode
from app.services.locations import Geocoder


def _init_sentry() -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("APP_ENV", "dev"),
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def create_app(
    settings: Settings | None = None,
    *,
    database: LocationDatabase | None = None,
    geocoder: Geocoder | None = None,
) -> FastAPI:
    """Build the application.

    ``database`` skips CSV loading when given; ``geocoder`` replaces the HTTP geocoder.
    """
    setup_logging()
    _init_sentry()
    cfg = settings or default_settings
    logger = structlog.get_logger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.location_database is None:
            try:
                app.state.location_database = LocationDatabase.load(cfg.locations_csv)
            except Exception:
                logger.exception("locations_load_failed", path=cfg.locations_csv)
                raise
        logger.info(
            "app_startup",
            env=os.getenv("APP_ENV", "dev"),
            locations=app.state.location_database.size,
        )
        yield

    app = FastAPI(title="Location Lookup", version="0.1.0", lifespan=lifespan)
    app.state.settings = cfg
    app.state.location_database = database
    app.state.geocoder = geocoder or partial(geocode, settings=cfg)

    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)

    # CORS from ALLOW_ORIGINS env (comma-separated)
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)
    app.include_router(locations_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)
    return app


app = create_app()
