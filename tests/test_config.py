from __future__ import annotations

import pytest

from carfuel.config import CarFuelConfig
from carfuel.exceptions import CarFuelConfigError


def test_defaults() -> None:
    config = CarFuelConfig()

    assert config.api_base_url == "http://127.0.0.1:8080"
    assert config.request_timeout == 10.0
    assert config.auto_start is False


def test_explicit_base_url_wins_and_is_normalized() -> None:
    config = CarFuelConfig(base_url="http://cars.example:9000/")

    assert config.api_base_url == "http://cars.example:9000"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARFUEL_HOST", "0.0.0.0")
    monkeypatch.setenv("CARFUEL_PORT", "9090")
    monkeypatch.setenv("CARFUEL_REQUEST_TIMEOUT", "3.5")
    monkeypatch.setenv("CARFUEL_AUTO_START", "yes")

    config = CarFuelConfig.from_env()

    assert config.host == "0.0.0.0"
    assert config.port == 9090
    assert config.request_timeout == 3.5
    assert config.auto_start is True


def test_from_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARFUEL_PORT", "9090")

    config = CarFuelConfig.from_env(port=7000, host=None)

    assert config.port == 7000
    assert config.host == "127.0.0.1"


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARFUEL_PORT", "eighty")

    with pytest.raises(CarFuelConfigError, match="CARFUEL_PORT"):
        CarFuelConfig.from_env()


@pytest.mark.parametrize("kwargs", [{"port": 0}, {"port": 70000}, {"request_timeout": 0}])
def test_rejects_invalid_values(kwargs: dict[str, float]) -> None:
    with pytest.raises(CarFuelConfigError):
        CarFuelConfig(**kwargs)  # type: ignore[arg-type]


def test_from_env_none_overrides_fall_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARFUEL_PORT", "9090")
    monkeypatch.setenv("CARFUEL_AUTO_START", "1")

    config = CarFuelConfig.from_env(host=None, port=None, base_url=None, auto_start=None)

    assert config.port == 9090
    assert config.auto_start is True


@pytest.mark.parametrize("level", ["debug", "WARNING", "Error"])
def test_accepts_level_names_in_any_case(level: str) -> None:
    assert CarFuelConfig(log_level=level).log_level == level


def test_from_env_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARFUEL_LOG_LEVEL", "chatty")

    with pytest.raises(CarFuelConfigError, match="log_level"):
        CarFuelConfig.from_env()
