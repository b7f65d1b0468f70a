"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from portal.config.loader import BASE_URL_ENV
from portal.config.schema import PortalConfig, WeatherApiConfig

TEST_BASE_URL = "https://test-weather.example.com"


@pytest.fixture(autouse=True)
def _no_base_url_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BASE_URL_ENV, raising=False)


@pytest.fixture
def default_config() -> PortalConfig:
    """Return a PortalConfig pointed at the mocked upstream."""
    return PortalConfig(weather_api=WeatherApiConfig(base_url=TEST_BASE_URL))


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "weather_api": {"base_url": TEST_BASE_URL, "timeout_seconds": 10},
        "server": {"port": 8080},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def upstream_forecasts() -> list[dict]:
    """Upstream WeatherForecast payload, including one record without a date."""
    return [
        {"date": "2026-10-18", "temperatureC": 0, "summary": "Freezing"},
        {"date": "2026-10-19", "temperatureC": 100, "summary": "Scorching"},
        {"date": None, "temperatureC": 21, "summary": "Mild"},
        {"date": "2026-10-21T00:00:00", "temperatureC": -5, "summary": None},
    ]
