"""Detect and auto-start a local carfuel API server."""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
import time
from urllib.parse import urlsplit

from carfuel.client import CarFuelClient
from carfuel.config import CarFuelConfig
from carfuel.exceptions import ServerStartError

_logger = logging.getLogger(__name__)

_LOCAL_HOSTS = frozenset({"127.0.0.1", "localhost", "::1", "0.0.0.0"})  # noqa: S104

#: Seconds between reachability probes while waiting for startup.
POLL_INTERVAL = 1.0

#: Seconds to wait for a graceful shutdown before killing the process.
STOP_GRACE_PERIOD = 5.0


class ServerManager:
    """Owns at most one server subprocess started on behalf of the CLI."""

    def __init__(self, config: CarFuelConfig, *, poll_interval: float = POLL_INTERVAL) -> None:
        self._config = config
        self._poll_interval = poll_interval
        self._process: subprocess.Popen[bytes] | None = None

    @property
    def command(self) -> list[str]:
        return [
            sys.executable,
            "-m",
            "carfuel",
            "--host",
            self._config.host,
            "--port",
            str(self._config.port),
            "serve",
        ]

    async def is_server_running(self) -> bool:
        async with CarFuelClient(self._config) as client:
            return await client.is_reachable()

    def can_start_server(self) -> bool:
        """Only a server on this machine can be started."""
        host = urlsplit(self._config.api_base_url).hostname or ""
        return host in _LOCAL_HOSTS

    async def start_server(self) -> None:
        """Spawn the server and wait until it answers.

        Raises
        ------
        ServerStartError
            The server cannot be started here, exited early, or did not
            become reachable within ``startup_timeout``.
        """
        if not self.can_start_server():
            raise ServerStartError(f"Cannot start a server for remote URL {self._config.api_base_url}")

        _logger.info("Starting server: %s", " ".join(self.command))
        try:
            self._process = subprocess.Popen(  # noqa: S603
                self.command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise ServerStartError(f"Failed to launch server: {exc}") from exc

        deadline = time.monotonic() + self._config.startup_timeout
        while time.monotonic() < deadline:
            await asyncio.sleep(self._poll_interval)
            if self._process.poll() is not None:
                raise ServerStartError(f"Server exited with code {self._process.returncode}")
            if await self.is_server_running():
                _logger.info("Server is reachable at %s", self._config.api_base_url)
                return

        self.stop_server()
        raise ServerStartError(f"Server failed to start within {self._config.startup_timeout:g} seconds")

    def stop_server(self) -> None:
        """Stop the server if this manager started it."""
        process = self._process
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=STOP_GRACE_PERIOD)
        except subprocess.TimeoutExpired:
            _logger.warning("Server did not stop in time; killing it")
            process.kill()
        self._process = None
