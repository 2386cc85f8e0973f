"""Error body returned by the HTTP API."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from carfuel.models._base import CarFuelBaseModel, UtcDatetime


class ErrorResponse(CarFuelBaseModel):
    message: str
    status: int
    timestamp: UtcDatetime = Field(default_factory=lambda: datetime.now(UTC))
