from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import exceptions as domain_exceptions


def _field_errors(exc: RequestValidationError) -> list[dict]:
    # One entry per offending field, first error wins
    errors: list[dict] = []
    seen: set[tuple[str, str]] = set()
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc else "request"
        param = ".".join(loc[1:]) or location
        if (location, param) in seen:
            continue
        seen.add((location, param))
        entry = {"param": param, "msg": err.get("msg", "invalid value"), "location": location}
        if "input" in err and err.get("type") != "missing":
            entry["value"] = err["input"]
        errors.append(entry)
    return errors


def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Normalize to a consistent JSON body
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400, content=jsonable_encoder({"errors": _field_errors(exc)})
    )


def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    # Hide internal details by default
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def _address_not_found_handler(_: Request, exc: domain_exceptions.AddressNotFoundError):
    return JSONResponse(
        status_code=400,
        content={
            "errors": [
                {"param": "address", "msg": str(exc), "location": "query", "value": exc.address}
            ]
        },
    )


def _domain_error_handler(status_code: int, default_detail: str):
    def _handler(_: Request, exc: domain_exceptions.DomainError) -> JSONResponse:
        detail = str(exc) or default_detail
        return JSONResponse(status_code=status_code, content={"detail": detail})

    return _handler


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(
        domain_exceptions.NotFoundError, _domain_error_handler(404, "Not Found")
    )
    app.add_exception_handler(
        domain_exceptions.ValidationError, _domain_error_handler(400, "Bad Request")
    )
    app.add_exception_handler(
        domain_exceptions.AddressNotFoundError, _address_not_found_handler
    )
    app.add_exception_handler(
        domain_exceptions.GeocodeError, _domain_error_handler(502, "Bad Gateway")
    )
    app.add_exception_handler(
        domain_exceptions.InfrastructureError,
        _domain_error_handler(503, "Service Unavailable"),
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)
