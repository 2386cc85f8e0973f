"""Car and fuel business rules on top of :class:`CarStore`."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from carfuel.exceptions import CarNotFoundError, DuplicateCarError, InvalidRequestError
from carfuel.models.car import Car, FuelEntry
from carfuel.models.stats import FuelStats
from carfuel.state.store import CarStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FuelService:
    """Stateless orchestrator for car creation, fuel entries and statistics.

    Every read-check-write sequence (duplicate check then save, odometer
    check then append) runs under the store's per-key lock, so concurrent
    calls on the same car are applied one after the other.
    """

    def __init__(
        self,
        store: CarStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._clock = clock

    def create_car(self, brand: str, model: str, year: int) -> Car:
        """Create and persist a new car.

        Raises
        ------
        DuplicateCarError
            A car with the same brand, model (case-insensitive) and year exists.
        """
        _logger.info("Creating new car: %s %s (%s)", brand, model, year)

        with self._store.lock_for(("car", brand.casefold(), model.casefold(), year)):
            if self._store.exists_by_brand_model_year(brand, model, year):
                _logger.warning("Duplicate car creation attempt: %s %s (%s)", brand, model, year)
                raise DuplicateCarError(brand, model, year)

            car = self._store.save(
                Car(brand=brand, model=model, year=year, created_at=self._clock()),
            )

        _logger.info("Car created with ID: %s", car.id)
        return car

    def get_all_cars(self) -> list[Car]:
        _logger.info("Fetching all cars")
        return self._store.find_all()

    def get_car_by_id(self, car_id: int) -> Car:
        """Return the car with *car_id* or raise :class:`CarNotFoundError`."""
        _logger.debug("Fetching car with ID: %s", car_id)
        car = self._store.find_by_id(car_id)
        if car is None:
            raise CarNotFoundError(car_id)
        return car

    def add_fuel_entry(self, car_id: int, liters: float, price: float, odometer: int) -> Car:
        """Append a fuel entry to a car and return the updated car.

        Raises
        ------
        CarNotFoundError
            No car with *car_id*.
        InvalidRequestError
            *odometer* is below the highest reading already recorded.
        """
        _logger.info(
            "Adding fuel entry to car %s: %s liters, %s price, %s km",
            car_id,
            liters,
            price,
            odometer,
        )

        with self._store.lock_for(car_id):
            car = self.get_car_by_id(car_id)

            max_odometer = car.max_odometer
            if max_odometer is not None and odometer < max_odometer:
                message = (
                    f"Invalid odometer reading: {odometer} km. "
                    f"Cannot be less than previous reading: {max_odometer} km"
                )
                _logger.warning("Invalid fuel entry for car %s: %s", car_id, message)
                raise InvalidRequestError(message, field="odometer")

            entry = FuelEntry(
                id=self._store.generate_fuel_id(),
                liters=liters,
                price=price,
                odometer=odometer,
                timestamp=self._clock(),
            )
            car = self._store.save(car.with_fuel_entry(entry))

        _logger.info("Fuel entry added successfully. Car now has %d entries", len(car.fuel_entries))
        return car

    def calculate_stats(self, car_id: int) -> FuelStats:
        """Compute fuel statistics for a car.

        * ``total_fuel`` / ``total_cost``: sums over all entries.
        * ``avg_consumption``: ``total_fuel / distance * 100`` where
          ``distance`` is the last minus the first odometer reading, with
          entries ordered by timestamp (ties keep insertion order).

        ``avg_consumption`` is ``0.0`` with fewer than two entries or when
        the distance is not positive.
        """
        car = self.get_car_by_id(car_id)
        entries = car.fuel_entries

        if not entries:
            _logger.info("No fuel entries found for car %s", car_id)
            return FuelStats.empty()

        total_fuel = sum(entry.liters for entry in entries)
        total_cost = sum(entry.price for entry in entries)
        avg_consumption = 0.0

        if len(entries) >= 2:
            ordered = sorted(entries, key=lambda entry: entry.timestamp)
            distance = ordered[-1].odometer - ordered[0].odometer
            if distance > 0:
                avg_consumption = (total_fuel / distance) * 100
                _logger.info(
                    "Distance traveled: %d km, Avg consumption: %.2f L/100km",
                    distance,
                    avg_consumption,
                )
            else:
                _logger.warning(
                    "Invalid distance (%d km) for car %s. Cannot calculate avg consumption.",
                    distance,
                    car_id,
                )
        else:
            _logger.info("Only one entry found for car %s. Cannot calculate avg consumption.", car_id)

        return FuelStats(
            total_fuel=total_fuel,
            total_cost=total_cost,
            avg_consumption=avg_consumption,
            entries_count=len(entries),
        )
