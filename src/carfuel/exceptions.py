"""Custom exception hierarchy for carfuel."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Distinguishable kinds of domain failure."""

    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    INVALID_REQUEST = "invalid_request"


class CarFuelError(Exception):
    """Base exception for all carfuel errors."""


class CarFuelDomainError(CarFuelError):
    """A business-rule failure raised by the service layer.

    Subclasses set :attr:`kind` so callers can branch on the error kind
    without an ``isinstance`` chain.
    """

    kind: ErrorKind


class CarNotFoundError(CarFuelDomainError):
    """Referenced car id does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, car_id: int) -> None:
        self.car_id = car_id
        super().__init__(f"Car not found with id: {car_id}")


class DuplicateCarError(CarFuelDomainError):
    """A car with the same brand, model and year is already stored.

    Brand and model are compared case-insensitively.
    """

    kind = ErrorKind.DUPLICATE

    def __init__(self, brand: str, model: str, year: int) -> None:
        self.brand = brand
        self.model = model
        self.year = year
        super().__init__(f"Car already exists: {brand} {model} ({year})")


class InvalidRequestError(CarFuelDomainError):
    """Business-rule violation or rejected input (e.g. decreasing odometer)."""

    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class CarFuelConfigError(CarFuelError):
    """Invalid or missing configuration."""


class CarFuelTransportError(CarFuelError):
    """HTTP-level failure (network, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CarFuelApiError(CarFuelError):
    """The server answered with an error body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ServerStartError(CarFuelError):
    """A local server could not be started or did not become reachable."""
