"""Data models for carfuel entities and HTTP payloads."""

from carfuel.models._base import CarFuelBaseModel, UtcDatetime, ensure_utc
from carfuel.models.car import Car, FuelEntry
from carfuel.models.errors import ErrorResponse
from carfuel.models.requests import AddFuelRequest, CreateCarRequest, first_error_message
from carfuel.models.stats import FuelStats

__all__ = [
    "AddFuelRequest",
    "Car",
    "CarFuelBaseModel",
    "CreateCarRequest",
    "ErrorResponse",
    "FuelEntry",
    "FuelStats",
    "UtcDatetime",
    "ensure_utc",
    "first_error_message",
]
