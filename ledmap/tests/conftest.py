"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from ledmap.config.defaults import DEFAULT_LOCATIONS
from ledmap.config.schema import LocationConfig, MapConfig, OwmConfig, RenderConfig


@pytest.fixture(autouse=True)
def no_api_key_env(monkeypatch):
    """Keep a developer's OWM_API_KEY from leaking into config tests."""
    monkeypatch.delenv("OWM_API_KEY", raising=False)


@pytest.fixture
def default_config() -> MapConfig:
    """Return default MapConfig with default locations."""
    return MapConfig(locations=DEFAULT_LOCATIONS)


@pytest.fixture
def small_config() -> MapConfig:
    """Two locations, four fade steps, and a test API key."""
    return MapConfig(
        owm=OwmConfig(api_key="test-key", base_url="https://test-owm.example.com"),
        render=RenderConfig(fade_steps=4),
        locations=[
            LocationConfig(name="Cairns", owm_id="2172797"),
            LocationConfig(name="Chicago", owm_id="4887398"),
        ],
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "render": {"fade_steps": 8},
        "strip": {"brightness": 128},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
