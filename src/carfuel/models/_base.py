"""Base model shared by carfuel entities and wire payloads.

Every model inherits from :class:`CarFuelBaseModel` which provides:

* ``alias_generator=to_camel`` so snake_case fields serialize to the
  camelCase keys the HTTP API uses (``fuelEntries``, ``createdAt``, ...).
* ``populate_by_name`` so both spellings are accepted on input.
* Frozen instances; updates go through ``model_copy(update=...)``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Annotated datetime that is always timezone-aware."""


class CarFuelBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)
