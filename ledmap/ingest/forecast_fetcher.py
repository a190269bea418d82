"""Forecast fetcher: turns OWM payloads into an AreaForecast."""

import logging

from ledmap.config.schema import LocationConfig, Units
from ledmap.ingest.owm_client import OwmClient
from ledmap.models.common import from_unix
from ledmap.models.forecast import AreaForecast, LocationForecast, Weather

logger = logging.getLogger(__name__)

# OWM condition ids below 700 are all kinds of precipitation
PRECIPITATION_MAX_ID = 700


class ForecastParseError(ValueError):
    """Raised when an OWM payload is missing required fields."""


class ForecastFetcher:
    """Fetches per-location forecasts, converting readings to Fahrenheit.

    `units` must match what the client asks OWM for.
    """

    def __init__(self, owm_client: OwmClient, units: Units = Units.IMPERIAL):
        self.owm = owm_client
        self.units = units

    def fetch(self, location: LocationConfig) -> LocationForecast:
        """Current weather followed by every future forecast entry for one location."""
        current = parse_weather(
            self.owm.get_current_weather(location.owm_id), self.units
        )
        future = parse_forecast(self.owm.get_forecast(location.owm_id), self.units)
        logger.info(
            "Fetched %s (%s): %d entries", location.name, location.owm_id,
            len(future) + 1,
        )
        return LocationForecast(
            location_id=location.owm_id,
            name=location.name,
            weathers=(current, *future),
        )

    def fetch_all(self, locations: list[LocationConfig]) -> AreaForecast:
        """Fetch every location in order. Any failure aborts the whole fetch."""
        return AreaForecast(tuple(self.fetch(loc) for loc in locations))


def to_fahrenheit(value: float, units: Units) -> float:
    if units == Units.METRIC:
        return value * 9.0 / 5.0 + 32.0
    if units == Units.STANDARD:
        return (value - 273.15) * 9.0 / 5.0 + 32.0
    return value


def parse_weather(raw: dict, units: Units = Units.IMPERIAL) -> Weather:
    """Parse a single OWM weather object (the /weather body or a forecast list entry)."""
    try:
        condition_id = int(raw["weather"][0]["id"])
        return Weather(
            observed_at=from_unix(int(raw["dt"])),
            temp=to_fahrenheit(float(raw["main"]["feels_like"]), units),
            precipitation=condition_id < PRECIPITATION_MAX_ID,
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ForecastParseError(f"malformed weather payload: {e!r}") from e


def parse_forecast(raw: dict, units: Units = Units.IMPERIAL) -> list[Weather]:
    entries = raw.get("list")
    if not isinstance(entries, list):
        raise ForecastParseError("forecast payload has no 'list'")
    return [parse_weather(entry, units) for entry in entries]
