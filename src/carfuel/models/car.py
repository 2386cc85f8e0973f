"""Car aggregate and fuel entry models."""

from __future__ import annotations

from pydantic import Field

from carfuel.models._base import CarFuelBaseModel, UtcDatetime


class FuelEntry(CarFuelBaseModel):
    """A single refill event.

    Parameters
    ----------
    id : int
        System-wide unique entry id, assigned by the store.
    liters : float
        Amount of fuel in liters.
    price : float
        Total cost of the refill (not the unit price).
    odometer : int
        Odometer reading in kilometers at the time of the refill.
    timestamp : datetime
        When the entry was recorded. Used to order entries for statistics.
    """

    id: int
    liters: float
    price: float
    odometer: int
    timestamp: UtcDatetime


class Car(CarFuelBaseModel):
    """A car together with its fuel history."""

    id: int | None = None
    """Store-assigned identifier; ``None`` until first saved."""
    brand: str
    """Manufacturer (e.g. ``"Toyota"``)."""
    model: str
    """Model name (e.g. ``"Corolla"``)."""
    year: int
    """Manufacturing year."""
    fuel_entries: tuple[FuelEntry, ...] = Field(default_factory=tuple)
    """Fuel entries in insertion order."""
    created_at: UtcDatetime
    """When the car was added; never changes afterwards."""

    @property
    def max_odometer(self) -> int | None:
        """Largest odometer reading recorded so far, or ``None``."""
        if not self.fuel_entries:
            return None
        return max(entry.odometer for entry in self.fuel_entries)

    def with_fuel_entry(self, entry: FuelEntry) -> Car:
        """Return a copy of this car with *entry* appended."""
        return self.model_copy(update={"fuel_entries": (*self.fuel_entries, entry)})

    def matches(self, brand: str, model: str, year: int) -> bool:
        """Case-insensitive brand/model and exact year comparison."""
        return (
            self.brand.casefold() == brand.casefold()
            and self.model.casefold() == model.casefold()
            and self.year == year
        )
