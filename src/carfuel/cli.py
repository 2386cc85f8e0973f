"""Command-line interface for the carfuel API.

Examples::

    carfuel create-car --brand Toyota --model Corolla --year 2018
    carfuel add-fuel --car-id 1 --liters 40 --price 52.5 --odometer 45000
    carfuel fuel-stats --car-id 1
    carfuel list-cars
    carfuel serve --port 8080
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable, Sequence

from pydantic import ValidationError

from carfuel.client import CarFuelClient
from carfuel.config import CarFuelConfig
from carfuel.exceptions import CarFuelApiError, CarFuelError
from carfuel.models.car import Car
from carfuel.models.requests import first_error_message
from carfuel.models.stats import FuelStats
from carfuel.server import run_server
from carfuel.server_manager import ServerManager

_RULE = "═" * 39
_WIDE_RULE = "═" * 59
_THIN_RULE = "─" * 59


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="carfuel", description="Car fuel management CLI")
    parser.add_argument("--base-url", help="API base URL (default: http://HOST:PORT)")
    parser.add_argument("--host", help="API host")
    parser.add_argument("--port", type=int, help="API port")
    parser.add_argument("--yes", "-y", action="store_true", help="Start a local server without asking")
    parser.add_argument("--verbose", "-v", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    create = commands.add_parser("create-car", help="Create a new car")
    create.add_argument("--brand", required=True, help="Car brand")
    create.add_argument("--model", required=True, help="Car model")
    create.add_argument("--year", type=int, required=True, help="Manufacturing year")

    fuel = commands.add_parser("add-fuel", help="Add a fuel entry to a car")
    fuel.add_argument("--car-id", "--carId", dest="car_id", type=int, required=True, help="Car ID")
    fuel.add_argument("--liters", type=float, required=True, help="Fuel in liters")
    fuel.add_argument("--price", type=float, required=True, help="Total cost")
    fuel.add_argument("--odometer", type=int, required=True, help="Odometer reading in km")

    stats = commands.add_parser("fuel-stats", help="View fuel statistics")
    stats.add_argument("--car-id", "--carId", dest="car_id", type=int, required=True, help="Car ID")

    commands.add_parser("list-cars", help="List all cars")

    serve = commands.add_parser("serve", help="Run the HTTP API server")
    serve.add_argument("--host", default=argparse.SUPPRESS, help="Interface to bind")
    serve.add_argument("--port", type=int, default=argparse.SUPPRESS, help="Port to listen on")

    return parser


def _print_car_created(car: Car) -> None:
    print("Car created successfully!")
    print(f"   ID:    {car.id}")
    print(f"   Brand: {car.brand}")
    print(f"   Model: {car.model}")
    print(f"   Year:  {car.year}")


def _print_fuel_added(car: Car) -> None:
    print("Fuel entry added successfully!")
    print(f"   Car:           {car.brand} {car.model}")
    print(f"   Total entries: {len(car.fuel_entries)}")


def _print_stats(stats: FuelStats) -> None:
    print()
    print(_RULE)
    print("        Fuel Statistics")
    print(_RULE)
    print()
    print(f"Total fuel:          {stats.total_fuel:.1f} L")
    print(f"Total cost:          {stats.total_cost:.2f}")
    print(f"Average consumption: {stats.avg_consumption:.1f} L/100km")
    print(f"Entries count:       {stats.entries_count}")
    print()


def _print_cars(cars: list[Car]) -> None:
    if not cars:
        print("No cars registered yet.")
        print("Create one with: carfuel create-car --brand Toyota --model Corolla --year 2018")
        return
    print()
    print(_WIDE_RULE)
    print("                    Registered Cars")
    print(_WIDE_RULE)
    print()
    print(f"{'ID':<5} {'Brand':<15} {'Model':<15} {'Year':<6} {'Entries':<8}")
    print(_THIN_RULE)
    for car in sorted(cars, key=lambda item: item.id or 0):
        print(f"{car.id!s:<5} {car.brand:<15} {car.model:<15} {car.year:<6} {len(car.fuel_entries):<8}")
    print()


async def run_command(args: argparse.Namespace, client: CarFuelClient) -> None:
    """Execute one client sub-command and print its result."""
    if args.command == "create-car":
        _print_car_created(await client.create_car(args.brand, args.model, args.year))
    elif args.command == "add-fuel":
        _print_fuel_added(await client.add_fuel(args.car_id, args.liters, args.price, args.odometer))
    elif args.command == "fuel-stats":
        _print_stats(await client.get_stats(args.car_id))
    elif args.command == "list-cars":
        _print_cars(await client.list_cars())
    else:
        raise ValueError(f"Unknown command: {args.command}")


async def ensure_server(
    manager: ServerManager,
    *,
    assume_yes: bool,
    ask: Callable[[str], str] = input,
) -> bool:
    """Make sure an API server is reachable, offering to start one.

    Returns ``False`` when no server is available and none was started.
    """
    if await manager.is_server_running():
        return True

    print("Backend server is not running.")
    if not manager.can_start_server():
        print("Cannot start a server for a remote base URL.", file=sys.stderr)
        return False

    if not assume_yes:
        answer = (await asyncio.to_thread(ask, "Start the server now? (y/n): ")).strip().lower()
        if answer not in {"y", "yes"}:
            print("Server is required. Exiting.", file=sys.stderr)
            return False

    print("Starting backend server...")
    await manager.start_server()
    print("Server started successfully!")
    return True


async def _run_client(args: argparse.Namespace, config: CarFuelConfig) -> int:
    manager = ServerManager(config)
    if not await ensure_server(manager, assume_yes=args.yes or config.auto_start):
        return 1
    async with CarFuelClient(config) as client:
        await run_command(args, client)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = CarFuelConfig.from_env(host=args.host, port=args.port, base_url=args.base_url)
    except CarFuelError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(config)
        return 0

    try:
        return asyncio.run(_run_client(args, config))
    except CarFuelApiError as exc:
        print(f"Error ({exc.status_code}): {exc}", file=sys.stderr)
    except ValidationError as exc:
        print(f"Error: {first_error_message(exc)}", file=sys.stderr)
    except CarFuelError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
