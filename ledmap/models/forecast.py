"""OpenWeatherMap forecast data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Weather:
    observed_at: datetime
    temp: float  # feels-like, Fahrenheit
    precipitation: bool


@dataclass(frozen=True)
class LocationForecast:
    location_id: str
    name: str
    weathers: tuple[Weather, ...]  # current observation first

    def list_temps(self) -> list[float]:
        return [w.temp for w in self.weathers]


@dataclass(frozen=True)
class AreaForecast:
    locations: tuple[LocationForecast, ...]

    def list_temps(self) -> list[list[float]]:
        """Temperatures per location, location-major, ready for color generation."""
        return [loc.list_temps() for loc in self.locations]

    def __len__(self) -> int:
        return len(self.locations)
