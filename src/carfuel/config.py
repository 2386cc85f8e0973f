"""Runtime configuration for carfuel."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import Any

from carfuel._constants import DEFAULT_HOST, DEFAULT_PORT
from carfuel.exceptions import CarFuelConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(name: str, value: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(value)
    except ValueError as exc:
        raise CarFuelConfigError(f"{name} must be a valid {kind.__name__}, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CarFuelConfig:
    """Server and client configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP server binds to, and the host the client
        talks to when ``base_url`` is not set.
    port : int
        HTTP port.
    base_url : str
        Explicit API base URL for the client. Empty means
        ``http://{host}:{port}``.
    request_timeout : float
        Total timeout in seconds for a client request.
    probe_timeout : float
        Timeout in seconds for the reachability probe.
    startup_timeout : float
        Seconds to wait for an auto-started server to become reachable.
    auto_start : bool
        Start a local server without prompting when none is reachable.
    log_level : str
        Logging level name used by the CLI.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    base_url: str = ""
    request_timeout: float = 10.0
    probe_timeout: float = 2.0
    startup_timeout: float = 30.0
    auto_start: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise CarFuelConfigError(f"port must be between 1 and 65535, got {self.port}")
        for name in ("request_timeout", "probe_timeout", "startup_timeout"):
            if getattr(self, name) <= 0:
                raise CarFuelConfigError(f"{name} must be positive")
        if self.log_level.upper() not in logging.getLevelNamesMapping():
            raise CarFuelConfigError(f"log_level must be a logging level name, got {self.log_level!r}")

    @property
    def api_base_url(self) -> str:
        """Base URL the client sends requests to, without a trailing slash."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"http://{self.host}:{self.port}"

    @classmethod
    def from_env(cls, **overrides: Any) -> CarFuelConfig:
        """Create configuration from ``CARFUEL_*`` environment variables.

        Explicit keyword arguments override environment values. A keyword
        whose value is ``None`` counts as not given.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "CARFUEL_HOST": "host",
            "CARFUEL_BASE_URL": "base_url",
            "CARFUEL_LOG_LEVEL": "log_level",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMBER_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "CARFUEL_PORT": ("port", int),
            "CARFUEL_REQUEST_TIMEOUT": ("request_timeout", float),
            "CARFUEL_PROBE_TIMEOUT": ("probe_timeout", float),
            "CARFUEL_STARTUP_TIMEOUT": ("startup_timeout", float),
        }
        for env_key, (field_name, kind) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and overrides.get(field_name) is None:
                config_kwargs[field_name] = _env_number(env_key, val, kind)

        if overrides.get("auto_start") is None:
            config_kwargs["auto_start"] = _env_bool(env.get("CARFUEL_AUTO_START"), False)

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config_kwargs)
