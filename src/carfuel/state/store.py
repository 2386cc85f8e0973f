"""Thread-safe in-memory car store.

Data is not persisted; everything is lost when the process exits.
"""

from __future__ import annotations

import contextlib
import dataclasses
import itertools
import threading
from collections.abc import Hashable, Iterator

from carfuel.models.car import Car


@dataclasses.dataclass(slots=True)
class _KeyLock:
    lock: threading.Lock = dataclasses.field(default_factory=threading.Lock)
    users: int = 0


class CarStore:
    """In-memory store keyed by car id.

    Two independent counters allocate car ids and fuel-entry ids. Both
    start at 1 and are never reset, not even by :meth:`delete_all`.

    All methods may be called from several threads at once. The store does
    not make multi-step sequences atomic on its own; callers that need a
    read-check-write sequence to be isolated hold :meth:`lock_for` for the
    affected key.
    """

    def __init__(self) -> None:
        self._cars: dict[int, Car] = {}
        self._lock = threading.Lock()
        self._id_lock = threading.Lock()
        self._car_ids = itertools.count(1)
        self._fuel_ids = itertools.count(1)
        self._key_locks: dict[Hashable, _KeyLock] = {}
        self._key_locks_guard = threading.Lock()

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, car_id: object) -> bool:
        return isinstance(car_id, int) and self.exists_by_id(car_id)

    def save(self, car: Car) -> Car:
        """Insert or overwrite *car*, assigning an id when it has none."""
        car_id = car.id
        if car_id is None:
            car_id = self.generate_car_id()
            car = car.model_copy(update={"id": car_id})
        with self._lock:
            self._cars[car_id] = car
        return car

    def find_by_id(self, car_id: int) -> Car | None:
        with self._lock:
            return self._cars.get(car_id)

    def find_all(self) -> list[Car]:
        """Snapshot of all stored cars. Order is not guaranteed."""
        with self._lock:
            return list(self._cars.values())

    def exists_by_id(self, car_id: int) -> bool:
        with self._lock:
            return car_id in self._cars

    def exists_by_brand_model_year(self, brand: str, model: str, year: int) -> bool:
        """Whether a car matches brand/model (case-insensitive) and year (exact)."""
        with self._lock:
            cars = list(self._cars.values())
        return any(car.matches(brand, model, year) for car in cars)

    def generate_car_id(self) -> int:
        with self._id_lock:
            return next(self._car_ids)

    def generate_fuel_id(self) -> int:
        with self._id_lock:
            return next(self._fuel_ids)

    def delete_all(self) -> None:
        """Remove every car. Id counters keep their position."""
        with self._lock:
            self._cars.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._cars)

    @contextlib.contextmanager
    def lock_for(self, key: Hashable) -> Iterator[None]:
        """Hold the mutual-exclusion lock dedicated to *key*.

        Callers using equal keys are serialized. A key's lock only exists
        while somebody holds or waits for it.
        """
        with self._key_locks_guard:
            entry = self._key_locks.get(key)
            if entry is None:
                entry = self._key_locks[key] = _KeyLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._key_locks_guard:
                entry.users -= 1
                if not entry.users:
                    del self._key_locks[key]

    def held_key_count(self) -> int:
        """Number of keys currently locked or awaited through :meth:`lock_for`."""
        with self._key_locks_guard:
            return len(self._key_locks)
