"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from forecaster.config.schema import ForecastConfig, HttpConfig

TEST_BASE_URL = "https://test-yandex.example.com"


@pytest.fixture(autouse=True)
def _no_env_api_key(monkeypatch):
    """Keep a developer's real key out of the tests."""
    monkeypatch.delenv("FORECASTER_API_KEY", raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forecast_payload(fixtures_dir: Path) -> dict:
    """Yandex response with fact.temp=5 and day averages 0, 4, 8."""
    with open(fixtures_dir / "yandex_forecast_moscow.json") as f:
        return json.load(f)


@pytest.fixture
def config() -> ForecastConfig:
    return ForecastConfig(
        api_key="test-key-1234",
        latitude=55.75,
        longitude=37.62,
        days=3,
        http=HttpConfig(base_url=TEST_BASE_URL),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api_key": "test-key-1234",
        "latitude": 55.75,
        "longitude": 37.62,
        "days": 3,
        "http": {"base_url": TEST_BASE_URL},
    }
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
