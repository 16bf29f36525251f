from .common import ErrorResponse, FieldError, OkResponse, ValidationErrorResponse
from .location import LocationIn, LocationOut, LocationPatch

__all__ = [
    "ErrorResponse",
    "FieldError",
    "LocationIn",
    "LocationOut",
    "LocationPatch",
    "OkResponse",
    "ValidationErrorResponse",
]
