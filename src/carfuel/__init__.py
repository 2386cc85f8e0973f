"""carfuel - Car fuel tracking service with consumption statistics."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("carfuel")
except PackageNotFoundError:
    __version__ = "0+local"
from carfuel.client import CarFuelClient
from carfuel.config import CarFuelConfig
from carfuel.exceptions import (
    CarFuelApiError,
    CarFuelConfigError,
    CarFuelDomainError,
    CarFuelError,
    CarFuelTransportError,
    CarNotFoundError,
    DuplicateCarError,
    ErrorKind,
    InvalidRequestError,
    ServerStartError,
)
from carfuel.models import (
    AddFuelRequest,
    Car,
    CreateCarRequest,
    ErrorResponse,
    FuelEntry,
    FuelStats,
)
from carfuel.outcome import Outcome, OutcomeKind, attempt
from carfuel.service import FuelService
from carfuel.state.store import CarStore

__all__ = [
    "__version__",
    "AddFuelRequest",
    "Car",
    "CarFuelApiError",
    "CarFuelClient",
    "CarFuelConfig",
    "CarFuelConfigError",
    "CarFuelDomainError",
    "CarFuelError",
    "CarFuelTransportError",
    "CarNotFoundError",
    "CarStore",
    "CreateCarRequest",
    "DuplicateCarError",
    "ErrorKind",
    "ErrorResponse",
    "FuelEntry",
    "FuelService",
    "FuelStats",
    "InvalidRequestError",
    "Outcome",
    "OutcomeKind",
    "ServerStartError",
    "attempt",
]
