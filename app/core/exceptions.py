"""Domain-level exception hierarchy for service and loader layers."""

from __future__ import annotations

from enum import Enum


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ValidationError(DomainError):
    """Raised when input validation fails at the domain/service layer."""


class InfrastructureError(DomainError):
    """Raised when an external service is unavailable or misbehaves."""


class LocationFileError(ValidationError):
    """Raised when a locations CSV file contains a malformed row."""

    def __init__(self, path: str, line: int, reason: str):
        super().__init__(f"{path}:{line}: {reason}")
        self.path = path
        self.line = line
        self.reason = reason


class GeocodeStatus(str, Enum):
    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    @classmethod
    def parse(cls, value: object) -> GeocodeStatus:
        try:
            return cls(str(value))
        except ValueError:
            return cls.UNKNOWN_ERROR


class GeocodeError(InfrastructureError):
    """Raised when the geocoding provider does not return coordinates."""

    def __init__(self, status: GeocodeStatus):
        super().__init__(f"Error geocoding address: {status.value}")
        self.status = status


class AddressNotFoundError(ValidationError):
    """Raised when an address is well-formed but resolves to no coordinates."""

    def __init__(self, address: str):
        super().__init__("unable to geocode address")
        self.address = address
