"""Async HTTP client for the carfuel API."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from carfuel._constants import CARS_PATH, USER_AGENT, car_path, fuel_path, stats_path
from carfuel.config import CarFuelConfig
from carfuel.exceptions import CarFuelApiError, CarFuelError, CarFuelTransportError
from carfuel.models.car import Car
from carfuel.models.requests import AddFuelRequest, CreateCarRequest
from carfuel.models.stats import FuelStats

_logger = logging.getLogger(__name__)


class CarFuelClient:
    """Async client for the carfuel HTTP API.

    Usage::

        async with CarFuelClient(config) as client:
            car = await client.create_car("Toyota", "Corolla", 2018)
            stats = await client.get_stats(car.id)
    """

    def __init__(
        self,
        config: CarFuelConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session

    async def __aenter__(self) -> CarFuelClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(headers={"user-agent": USER_AGENT})
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise CarFuelError("Client not initialized. Use 'async with CarFuelClient(...) as client:'")
        return self._http_session

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        payload: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> tuple[int, Any]:
        session = self._require_session()
        url = f"{self._config.api_base_url}{endpoint}"
        client_timeout = aiohttp.ClientTimeout(total=timeout or self._config.request_timeout)

        _logger.debug("%s %s", method, url)

        try:
            async with session.request(method, url, json=payload, timeout=client_timeout) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise CarFuelTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text) if text else None
        except ValueError as exc:
            raise CarFuelTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc
        return status, body

    async def _call(
        self,
        method: str,
        endpoint: str,
        *,
        expected: int = 200,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        status, body = await self._request(method, endpoint, payload=payload)
        if status != expected:
            message = body.get("message") if isinstance(body, dict) else None
            raise CarFuelApiError(
                str(message or body or "Unknown error"),
                status_code=status,
                endpoint=endpoint,
            )
        return body

    async def create_car(self, brand: str, model: str, year: int) -> Car:
        request = CreateCarRequest(brand=brand, model=model, year=year)
        body = await self._call("POST", CARS_PATH, expected=201, payload=request.model_dump(by_alias=True))
        return Car.model_validate(body)

    async def list_cars(self) -> list[Car]:
        body = await self._call("GET", CARS_PATH)
        return [Car.model_validate(item) for item in body or []]

    async def get_car(self, car_id: int) -> Car:
        body = await self._call("GET", car_path(car_id))
        return Car.model_validate(body)

    async def add_fuel(self, car_id: int, liters: float, price: float, odometer: int) -> Car:
        request = AddFuelRequest(liters=liters, price=price, odometer=odometer)
        body = await self._call("POST", fuel_path(car_id), payload=request.model_dump(by_alias=True))
        return Car.model_validate(body)

    async def get_stats(self, car_id: int) -> FuelStats:
        body = await self._call("GET", stats_path(car_id))
        return FuelStats.model_validate(body)

    async def is_reachable(self) -> bool:
        """Whether the API answers at all (any status below 500)."""
        try:
            status, _ = await self._request("GET", CARS_PATH, timeout=self._config.probe_timeout)
        except CarFuelTransportError:
            return False
        return 200 <= status < 500
