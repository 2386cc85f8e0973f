from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta

import pytest

from carfuel.service import FuelService
from carfuel.state.store import CarStore


class StepClock:
    """Deterministic clock: each call returns the next timestamp."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(minutes=1)) -> None:
        self._now = start or datetime(2026, 1, 1, tzinfo=UTC)
        self._step = step

    def __call__(self) -> datetime:
        current = self._now
        self._now += self._step
        return current


class ScriptedClock:
    """Returns the given timestamps in order."""

    def __init__(self, *times: datetime) -> None:
        self._times: Iterator[datetime] = iter(times)

    def __call__(self) -> datetime:
        return next(self._times)


@pytest.fixture
def store() -> CarStore:
    return CarStore()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def service(store: CarStore, clock: StepClock) -> FuelService:
    return FuelService(store, clock=clock)


@pytest.fixture
def scripted_service(store: CarStore) -> Callable[..., FuelService]:
    """Factory for a service whose clock returns exactly the given timestamps."""

    def _make(*times: datetime) -> FuelService:
        return FuelService(store, clock=ScriptedClock(*times))

    return _make
