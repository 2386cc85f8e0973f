"""Pydantic request models for the HTTP boundary.

These models provide a consistent "validate → normalize → execute" flow:
invalid input is rejected here, before it reaches
:class:`carfuel.service.FuelService`.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from carfuel._constants import MIN_ODOMETER, MIN_YEAR

_VALUE_ERROR_PREFIX = "Value error, "


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message of the first validation error."""
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    message = str(errors[0].get("msg", "Validation failed"))
    return message.removeprefix(_VALUE_ERROR_PREFIX)


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class CreateCarRequest(_RequestModel):
    brand: str | None = None
    model: str | None = None
    year: int | None = None

    @field_validator("brand", "model")
    @classmethod
    def _text_non_blank(cls, value: str | None, info: ValidationInfo) -> str:
        if value is None or not value.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return value

    @field_validator("year")
    @classmethod
    def _year_in_range(cls, value: int | None) -> int:
        if value is None:
            raise ValueError("Year is required")
        if value < MIN_YEAR:
            raise ValueError(f"Year must be at least {MIN_YEAR}")
        return value


class AddFuelRequest(_RequestModel):
    liters: float | None = None
    price: float | None = None
    odometer: int | None = None

    @field_validator("liters", "price")
    @classmethod
    def _positive(cls, value: float | None, info: ValidationInfo) -> float:
        label = info.field_name.capitalize()
        if value is None:
            raise ValueError(f"{label} is required")
        if not math.isfinite(value):
            raise ValueError(f"{label} must be a finite number")
        if value <= 0:
            raise ValueError(f"{label} must be positive")
        return value

    @field_validator("odometer")
    @classmethod
    def _odometer_non_negative(cls, value: int | None) -> int:
        if value is None:
            raise ValueError("Odometer is required")
        if value < MIN_ODOMETER:
            raise ValueError(f"Odometer must be at least {MIN_ODOMETER}")
        return value
