from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _access_fields(request: Request, rid: str, status_code: int, start_ns: int) -> dict:
    duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000.0
    return {
        "request_id": rid,
        "path": request.url.path,
        "method": request.method,
        "status": status_code,
        "duration_ms": round(duration_ms, 3),
        "client_ip": (request.client.host if request.client else None) or "-",
    }


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and emit one structured access log per request.

    The inbound header is reused when present, otherwise a UUID4 is generated.
    ``request_id``, ``path`` and ``method`` are bound to contextvars for the
    duration of the request so service and store logs carry them too.
    """
    logger = structlog.get_logger(__name__)
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method
    )
    # No-op when Sentry is not initialized
    sentry_sdk.set_tag("request_id", rid)

    start_ns = time.perf_counter_ns()
    try:
        response = await call_next(request)
    except Exception:
        logger.error("http_request", **_access_fields(request, rid, 500, start_ns), exc_info=True)
        structlog.contextvars.clear_contextvars()
        raise

    logger.info("http_request", **_access_fields(request, rid, response.status_code, start_ns))
    response.headers[REQUEST_ID_HEADER] = rid
    structlog.contextvars.clear_contextvars()
    return response
