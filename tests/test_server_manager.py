from __future__ import annotations

import subprocess
import sys

import pytest

from carfuel.config import CarFuelConfig
from carfuel.exceptions import ServerStartError
from carfuel.server_manager import ServerManager


class FakeProcess:
    instances: list[FakeProcess] = []

    def __init__(self, command: list[str], **kwargs: object) -> None:
        self.command = command
        self.kwargs = kwargs
        self.returncode: int | None = None
        self.terminated = False
        self.killed = False
        FakeProcess.instances.append(self)

    def poll(self) -> int | None:
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True
        self.returncode = -15

    def wait(self, timeout: float | None = None) -> int | None:
        return self.returncode

    def kill(self) -> None:
        self.killed = True


@pytest.fixture(autouse=True)
def fake_popen(monkeypatch: pytest.MonkeyPatch) -> None:
    FakeProcess.instances = []
    monkeypatch.setattr(subprocess, "Popen", FakeProcess)


def test_command_runs_package_with_global_options_first() -> None:
    manager = ServerManager(CarFuelConfig(host="127.0.0.1", port=9123))

    assert manager.command == [sys.executable, "-m", "carfuel", "--host", "127.0.0.1", "--port", "9123", "serve"]


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        (CarFuelConfig(), True),
        (CarFuelConfig(base_url="http://localhost:8080"), True),
        (CarFuelConfig(base_url="https://cars.example.com"), False),
    ],
)
def test_can_start_only_local_servers(config: CarFuelConfig, expected: bool) -> None:
    assert ServerManager(config).can_start_server() is expected


@pytest.mark.asyncio
async def test_start_server_waits_until_reachable(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = ServerManager(CarFuelConfig(), poll_interval=0)
    answers = iter([False, False, True])

    async def reachable() -> bool:
        return next(answers)

    monkeypatch.setattr(manager, "is_server_running", reachable)

    await manager.start_server()

    (process,) = FakeProcess.instances
    assert process.command == manager.command
    assert process.kwargs["stdout"] is subprocess.DEVNULL

    manager.stop_server()
    assert process.terminated


@pytest.mark.asyncio
async def test_start_server_times_out(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = ServerManager(CarFuelConfig(startup_timeout=0.05), poll_interval=0.01)

    async def reachable() -> bool:
        return False

    monkeypatch.setattr(manager, "is_server_running", reachable)

    with pytest.raises(ServerStartError, match="failed to start"):
        await manager.start_server()

    assert FakeProcess.instances[0].terminated


@pytest.mark.asyncio
async def test_start_server_reports_early_exit(monkeypatch: pytest.MonkeyPatch) -> None:
    class ExitingProcess(FakeProcess):
        def __init__(self, command: list[str], **kwargs: object) -> None:
            super().__init__(command, **kwargs)
            self.returncode = 1

    monkeypatch.setattr(subprocess, "Popen", ExitingProcess)
    manager = ServerManager(CarFuelConfig(), poll_interval=0)

    with pytest.raises(ServerStartError, match="exited with code 1"):
        await manager.start_server()


@pytest.mark.asyncio
async def test_start_server_refuses_remote_url() -> None:
    manager = ServerManager(CarFuelConfig(base_url="https://cars.example.com"))

    with pytest.raises(ServerStartError, match="remote URL"):
        await manager.start_server()

    assert FakeProcess.instances == []


def test_stop_server_without_process_is_noop() -> None:
    ServerManager(CarFuelConfig()).stop_server()
