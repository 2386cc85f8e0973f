"""aiohttp HTTP API exposing :class:`FuelService`.

Routes::

    POST /api/cars                    create a car               (201)
    GET  /api/cars                    list cars
    GET  /api/cars/{id}               fetch one car
    POST /api/cars/{id}/fuel          add a fuel entry
    GET  /api/cars/{id}/fuel/stats    fuel statistics
    GET  /servlet/fuel-stats?carId=N  fuel statistics, query-string form

Every failure is answered with an :class:`ErrorResponse` body.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web
from pydantic import BaseModel, ValidationError

from carfuel._constants import CARS_PATH, SERVLET_STATS_PATH
from carfuel.config import CarFuelConfig
from carfuel.models.errors import ErrorResponse
from carfuel.models.requests import AddFuelRequest, CreateCarRequest, first_error_message
from carfuel.outcome import Outcome, OutcomeKind, attempt
from carfuel.service import FuelService
from carfuel.state.store import CarStore

_logger = logging.getLogger(__name__)

_STATUS_BY_KIND: dict[OutcomeKind, int] = {
    OutcomeKind.OK: 200,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.DUPLICATE: 409,
    OutcomeKind.INVALID_REQUEST: 400,
}

_INTEGER_RE = re.compile(r"^-?\d+$")

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class _HttpError(Exception):
    """Request rejected before it reached the service."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(message)


def _error_response(status: int, message: str) -> web.Response:
    body = ErrorResponse(message=message, status=status)
    return web.json_response(body.to_payload(), status=status)


def _to_json(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list | tuple):
        return [_to_json(item) for item in value]
    return value


def _respond(outcome: Outcome[Any], *, status: int = 200) -> web.Response:
    if outcome.ok:
        return web.json_response(_to_json(outcome.value), status=status)
    return _error_response(_STATUS_BY_KIND[outcome.kind], outcome.message)


def _parse_int(name: str, raw: str) -> int:
    if not _INTEGER_RE.match(raw):
        raise _HttpError(400, f"Invalid parameter '{name}': expected type int but got '{raw}'")
    return int(raw)


async def _read_body(request: web.Request, model: type[BaseModel]) -> Any:
    if request.content_type != "application/json":
        raise _HttpError(415, "Unsupported media type. Use application/json.")
    try:
        payload = await request.json()
    except ValueError as exc:
        raise _HttpError(400, "Malformed request body. Ensure valid JSON is sent.") from exc
    if not isinstance(payload, dict):
        raise _HttpError(400, "Malformed request body. Ensure valid JSON is sent.")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise _HttpError(400, first_error_message(exc)) from exc


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except _HttpError as exc:
        _logger.warning("Rejected %s %s: %s", request.method, request.path, exc.message)
        return _error_response(exc.status, exc.message)
    except web.HTTPNotFound:
        return _error_response(404, f"Route {request.method} {request.path} not found.")
    except web.HTTPMethodNotAllowed:
        return _error_response(405, f"Method {request.method} not allowed for this endpoint.")
    except web.HTTPException:
        raise
    except Exception as exc:
        _logger.exception("Unhandled error for %s %s", request.method, request.path)
        return _error_response(500, f"Internal server error: {exc}")


class CarRoutes:
    """Request handlers bound to one :class:`FuelService`."""

    def __init__(self, service: FuelService) -> None:
        self._service = service

    async def create_car(self, request: web.Request) -> web.Response:
        body: CreateCarRequest = await _read_body(request, CreateCarRequest)
        _logger.info("REST API: Creating car - %s %s (%s)", body.brand, body.model, body.year)
        outcome = await asyncio.to_thread(attempt, self._service.create_car, body.brand, body.model, body.year)
        return _respond(outcome, status=201)

    async def list_cars(self, _request: web.Request) -> web.Response:
        cars = await asyncio.to_thread(self._service.get_all_cars)
        return web.json_response(_to_json(cars))

    async def get_car(self, request: web.Request) -> web.Response:
        car_id = _parse_int("id", request.match_info["id"])
        outcome = await asyncio.to_thread(attempt, self._service.get_car_by_id, car_id)
        return _respond(outcome)

    async def add_fuel(self, request: web.Request) -> web.Response:
        car_id = _parse_int("id", request.match_info["id"])
        body: AddFuelRequest = await _read_body(request, AddFuelRequest)
        _logger.info(
            "REST API: Adding fuel entry to car %s - %s liters, %s price, %s km",
            car_id,
            body.liters,
            body.price,
            body.odometer,
        )
        outcome = await asyncio.to_thread(
            attempt,
            self._service.add_fuel_entry,
            car_id,
            body.liters,
            body.price,
            body.odometer,
        )
        return _respond(outcome)

    async def fuel_stats(self, request: web.Request) -> web.Response:
        car_id = _parse_int("id", request.match_info["id"])
        outcome = await asyncio.to_thread(attempt, self._service.calculate_stats, car_id)
        return _respond(outcome)

    async def query_fuel_stats(self, request: web.Request) -> web.Response:
        """Statistics addressed by ``?carId=`` instead of a path segment."""
        raw = request.query.get("carId", "").strip()
        if not raw:
            raise _HttpError(400, "carId query parameter is required")
        if not _INTEGER_RE.match(raw):
            raise _HttpError(400, "carId must be a valid number")
        outcome = await asyncio.to_thread(attempt, self._service.calculate_stats, int(raw))
        return _respond(outcome)

    async def query_fuel_stats_post(self, _request: web.Request) -> web.Response:
        return _error_response(405, "Only GET method is supported")


def create_app(service: FuelService | None = None) -> web.Application:
    """Build the aiohttp application.

    A fresh :class:`CarStore` backs the service when none is given.
    """
    if service is None:
        service = FuelService(CarStore())

    routes = CarRoutes(service)
    app = web.Application(middlewares=[error_middleware])
    app.router.add_post(CARS_PATH, routes.create_car)
    app.router.add_get(CARS_PATH, routes.list_cars)
    app.router.add_get(CARS_PATH + "/{id}", routes.get_car)
    app.router.add_post(CARS_PATH + "/{id}/fuel", routes.add_fuel)
    app.router.add_get(CARS_PATH + "/{id}/fuel/stats", routes.fuel_stats)
    app.router.add_get(SERVLET_STATS_PATH, routes.query_fuel_stats)
    app.router.add_post(SERVLET_STATS_PATH, routes.query_fuel_stats_post)
    return app


def run_server(config: CarFuelConfig, service: FuelService | None = None) -> None:
    """Serve the API until interrupted."""
    _logger.info("Starting carfuel API on %s:%s", config.host, config.port)
    web.run_app(create_app(service), host=config.host, port=config.port, print=None)
