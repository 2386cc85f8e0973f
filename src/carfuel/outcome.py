"""Tagged outcomes for service calls.

Transport layers branch on :class:`OutcomeKind` instead of catching each
domain exception separately::

    outcome = attempt(service.get_car_by_id, 3)
    if outcome.ok:
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from carfuel.exceptions import CarFuelDomainError, ErrorKind

T = TypeVar("T")


class OutcomeKind(StrEnum):
    OK = "ok"
    NOT_FOUND = ErrorKind.NOT_FOUND.value
    DUPLICATE = ErrorKind.DUPLICATE.value
    INVALID_REQUEST = ErrorKind.INVALID_REQUEST.value


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of a service call: a value, or an error kind with a message."""

    kind: OutcomeKind
    value: T | None = None
    message: str = ""
    error: CarFuelDomainError | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(kind=OutcomeKind.OK, value=value)

    @classmethod
    def failure(cls, error: CarFuelDomainError) -> Outcome[T]:
        return cls(kind=OutcomeKind(error.kind.value), message=str(error), error=error)

    def unwrap(self) -> T:
        """Return the value, re-raising the original error for failures."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Run a service operation and convert domain errors into an :class:`Outcome`.

    Errors that are not :class:`CarFuelDomainError` propagate unchanged.
    """
    try:
        return Outcome.success(fn(*args, **kwargs))
    except CarFuelDomainError as exc:
        return Outcome.failure(exc)
