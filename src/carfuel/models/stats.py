"""Derived fuel statistics."""

from __future__ import annotations

from carfuel.models._base import CarFuelBaseModel


class FuelStats(CarFuelBaseModel):
    """Aggregated fuel figures for one car.

    Parameters
    ----------
    total_fuel : float
        Sum of all entries' liters.
    total_cost : float
        Sum of all entries' price.
    avg_consumption : float
        Liters per 100 km between the first and last entry by timestamp.
        ``0.0`` when it cannot be determined (fewer than two entries, or
        no positive distance).
    entries_count : int
        Number of fuel entries.
    """

    total_fuel: float = 0.0
    total_cost: float = 0.0
    avg_consumption: float = 0.0
    entries_count: int = 0

    @classmethod
    def empty(cls) -> FuelStats:
        return cls()
