"""Tests for the forecast fetcher with a mocked OWM client."""

import json
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from ledmap.config.schema import LocationConfig, Units
from ledmap.ingest.forecast_fetcher import (
    ForecastFetcher,
    ForecastParseError,
    parse_forecast,
    parse_weather,
    to_fahrenheit,
)
from ledmap.ingest.owm_client import OwmClient

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"

CAIRNS = LocationConfig(name="Cairns", owm_id="2172797")
CHICAGO = LocationConfig(name="Chicago", owm_id="4887398")


def _load_owm(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def mock_owm() -> MagicMock:
    owm = MagicMock(spec=OwmClient)
    owm.get_current_weather.return_value = _load_owm("owm_weather_cairns.json")
    owm.get_forecast.return_value = _load_owm("owm_forecast_cairns.json")
    return owm


class TestParseWeather:
    def test_uses_feels_like(self):
        weather = parse_weather(_load_owm("owm_weather_cairns.json"))
        assert weather.temp == 91.4
        assert weather.observed_at == datetime(2026, 1, 1, tzinfo=UTC)

    def test_precipitation_threshold(self):
        base = {"dt": 0, "main": {"feels_like": 50}}
        assert parse_weather({**base, "weather": [{"id": 699}]}).precipitation
        assert not parse_weather({**base, "weather": [{"id": 700}]}).precipitation

    def test_missing_fields(self):
        with pytest.raises(ForecastParseError):
            parse_weather({"dt": 0, "weather": [{"id": 800}]})

    def test_empty_condition_list(self):
        with pytest.raises(ForecastParseError):
            parse_weather({"dt": 0, "main": {"feels_like": 1}, "weather": []})

    def test_forecast_without_list(self):
        with pytest.raises(ForecastParseError):
            parse_forecast({"cod": "404"})


class TestUnitConversion:
    def test_imperial_passes_through(self):
        assert to_fahrenheit(77.0, Units.IMPERIAL) == 77.0

    def test_metric(self):
        assert to_fahrenheit(25.0, Units.METRIC) == pytest.approx(77.0)
        assert to_fahrenheit(-40.0, Units.METRIC) == pytest.approx(-40.0)

    def test_standard_is_kelvin(self):
        assert to_fahrenheit(273.15, Units.STANDARD) == pytest.approx(32.0)

    def test_parse_weather_converts(self):
        raw = {"dt": 0, "main": {"feels_like": 25.0}, "weather": [{"id": 800}]}
        assert parse_weather(raw, Units.METRIC).temp == pytest.approx(77.0)

    def test_fetch_converts_every_entry(self, mock_owm: MagicMock):
        mock_owm.get_current_weather.return_value = {
            "dt": 0, "main": {"feels_like": 0.0}, "weather": [{"id": 800}],
        }
        mock_owm.get_forecast.return_value = {"list": [
            {"dt": 10800, "main": {"feels_like": 100.0}, "weather": [{"id": 800}]},
        ]}
        forecast = ForecastFetcher(mock_owm, Units.METRIC).fetch(CAIRNS)
        assert forecast.list_temps() == pytest.approx([32.0, 212.0])


class TestForecastFetcher:
    def test_fetch_puts_current_first(self, mock_owm: MagicMock):
        result = ForecastFetcher(mock_owm).fetch(CAIRNS)

        assert result.location_id == "2172797"
        assert result.name == "Cairns"
        assert result.list_temps() == [91.4, 93.0, 88.5, 80.1, 77.9]
        mock_owm.get_current_weather.assert_called_once_with("2172797")
        mock_owm.get_forecast.assert_called_once_with("2172797")

    def test_precipitation_flags(self, mock_owm: MagicMock):
        result = ForecastFetcher(mock_owm).fetch(CAIRNS)
        assert [w.precipitation for w in result.weathers] == [
            False, True, False, True, False,
        ]

    def test_fetch_all_keeps_location_order(self, mock_owm: MagicMock):
        area = ForecastFetcher(mock_owm).fetch_all([CAIRNS, CHICAGO])
        assert len(area) == 2
        assert [loc.name for loc in area.locations] == ["Cairns", "Chicago"]
        assert len(area.list_temps()) == 2
        assert area.list_temps()[0] == area.list_temps()[1]

    def test_fetch_all_aborts_on_error(self, mock_owm: MagicMock):
        mock_owm.get_forecast.side_effect = [
            _load_owm("owm_forecast_cairns.json"),
            httpx.ConnectError("down"),
        ]
        with pytest.raises(httpx.ConnectError):
            ForecastFetcher(mock_owm).fetch_all([CAIRNS, CHICAGO])
