from __future__ import annotations

from collections.abc import Callable

from fastapi import Request, Response

_DEFAULT_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), camera=(), microphone=()",
}


async def security_headers_middleware(request: Request, call_next: Callable) -> Response:
    """Attach basic security headers; location payloads are never cached."""
    response = await call_next(request)
    for name, value in _DEFAULT_HEADERS.items():
        response.headers.setdefault(name, value)
    if request.url.path.startswith("/locations"):
        response.headers.setdefault("Cache-Control", "no-store")
    return response
