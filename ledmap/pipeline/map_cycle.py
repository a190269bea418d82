"""Map cycle: fetch forecasts, generate colors, play them on the strip."""

import logging
import time
import uuid
from collections.abc import Callable

from ledmap.color.fade import generate_colors
from ledmap.color.reorder import ColorCube
from ledmap.config.schema import MapConfig
from ledmap.display.renderer import MapRenderer
from ledmap.display.strip import LedStrip, SimulatedStrip
from ledmap.ingest.forecast_fetcher import ForecastFetcher
from ledmap.ingest.owm_client import OwmClient
from ledmap.models.common import utc_now_iso
from ledmap.models.forecast import AreaForecast
from ledmap.models.reporting import CycleSummary
from ledmap.reporting.formatters import format_cycle_text

logger = logging.getLogger(__name__)


def build_strip(config: MapConfig) -> SimulatedStrip:
    return SimulatedStrip(
        led_count=config.led_count(),
        brightness=config.strip.brightness,
        auto_render=config.strip.auto_render,
        history_size=config.strip.history_size,
    )


class MapCycle:
    """One fetch → colors → render pass.

    Errors are not caught here: a failed fetch or color computation aborts
    the cycle before anything is shown on the strip.
    """

    def __init__(
        self,
        config: MapConfig,
        strip: LedStrip | None = None,
        owm_client: OwmClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.strip = strip if strip is not None else build_strip(config)
        self.owm_client = owm_client
        render = config.render
        self.renderer = MapRenderer(
            self.strip,
            initial_pause=render.initial_pause_seconds,
            subsequent_pause=render.subsequent_pause_seconds,
            frame_delay=render.frame_delay_ms / 1000.0,
            sleep=sleep,
        )

    def fetch_forecast(self) -> AreaForecast:
        locations = self.config.enabled_locations()
        owm = self.config.owm
        if self.owm_client is not None:
            return ForecastFetcher(self.owm_client, owm.units).fetch_all(locations)

        with OwmClient(
            owm.api_key,
            base_url=owm.base_url,
            units=owm.units,
            timeout=owm.timeout_seconds,
        ) as client:
            return ForecastFetcher(client, owm.units).fetch_all(locations)

    def compute_colors(self, forecast: AreaForecast) -> ColorCube:
        return generate_colors(forecast.list_temps(), self.config.render.fade_steps)

    def play(self, colors: ColorCube) -> int:
        return self.renderer.play(colors)

    def run(self) -> CycleSummary:
        """Execute a full cycle and return its summary."""
        start_time = time.monotonic()
        summary = CycleSummary(
            cycle_id=str(uuid.uuid4()),
            fade_steps=self.config.render.fade_steps,
            started_at=utc_now_iso(),
        )

        forecast = self.fetch_forecast()
        temps = [t for row in forecast.list_temps() for t in row]
        summary.locations = len(forecast)
        if temps:
            summary.min_temp = min(temps)
            summary.max_temp = max(temps)

        colors = self.compute_colors(forecast)
        summary.time_steps = len(colors)
        logger.info(
            "Generated %d time-steps for %d locations", len(colors), len(forecast)
        )

        summary.frames_rendered = self.play(colors)
        summary.duration_seconds = time.monotonic() - start_time
        logger.info("\n%s", format_cycle_text(summary))
        return summary
