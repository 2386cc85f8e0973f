"""Shared constants for carfuel."""

from __future__ import annotations

#: Earliest manufacturing year accepted for a car.
MIN_YEAR = 1900

#: Smallest odometer reading accepted for a fuel entry (km).
MIN_ODOMETER = 0

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

CARS_PATH = "/api/cars"
SERVLET_STATS_PATH = "/servlet/fuel-stats"

USER_AGENT = "carfuel-cli"


def car_path(car_id: int | str) -> str:
    return f"{CARS_PATH}/{car_id}"


def fuel_path(car_id: int | str) -> str:
    return f"{CARS_PATH}/{car_id}/fuel"


def stats_path(car_id: int | str) -> str:
    return f"{CARS_PATH}/{car_id}/fuel/stats"
