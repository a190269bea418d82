"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

OWM_BASE_URL = "https://api.openweathermap.org/data/2.5"


class Units(StrEnum):
    STANDARD = "standard"  # Kelvin
    METRIC = "metric"
    IMPERIAL = "imperial"


class OwmConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = OWM_BASE_URL
    units: Units = Units.IMPERIAL
    timeout_seconds: float = Field(default=120.0, gt=0.0)


class StripConfig(BaseModel):
    model_config = {"extra": "forbid"}

    led_count: int | None = Field(default=None, ge=1)
    brightness: int = Field(default=255, ge=0, le=255)
    auto_render: bool = False
    history_size: int = Field(default=256, ge=0)


class RenderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    fade_steps: int = Field(default=40, ge=1)
    initial_pause_seconds: float = Field(default=10.0, ge=0.0)
    subsequent_pause_seconds: float = Field(default=3.0, ge=0.0)
    frame_delay_ms: int = Field(default=25, ge=0)


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    refresh_interval_minutes: int = Field(default=60, ge=1)
    max_backoff_seconds: int = Field(default=600, ge=1)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    owm_id: str
    enabled: bool = True


class MapConfig(BaseModel):
    model_config = {"extra": "forbid"}

    owm: OwmConfig = OwmConfig()
    strip: StripConfig = StripConfig()
    render: RenderConfig = RenderConfig()
    ops: OpsConfig = OpsConfig()
    locations: list[LocationConfig] = []

    def enabled_locations(self) -> list[LocationConfig]:
        return [loc for loc in self.locations if loc.enabled]

    def led_count(self) -> int:
        """Configured strip length, or one LED per enabled location."""
        if self.strip.led_count is not None:
            return self.strip.led_count
        return len(self.enabled_locations())
