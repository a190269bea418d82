"""Fade generation: forecast temperatures to render-ready color cubes."""

import logging
from collections.abc import Sequence

from ledmap.color.encoder import temperature_to_color
from ledmap.color.errors import EmptyForecast, InvalidStepCount
from ledmap.color.interpolate import interpolate
from ledmap.color.reorder import ColorCube, reorder_hierarchy

logger = logging.getLogger(__name__)

Forecast = Sequence[Sequence[float]]


def fade(from_temp: float, to_temp: float, steps: int) -> tuple[int, ...]:
    """Colors for `steps` evenly spaced temperatures from from_temp to to_temp."""
    return tuple(
        temperature_to_color(temp) for temp in interpolate(from_temp, to_temp, steps)
    )


def fade_forecast(forecast: Forecast, fade_steps: int) -> ColorCube:
    """Build the location-major cube: one fade segment per time-step per location.

    Segment j-1 fades from the temperature at j-1 to the one at j. The last
    time-step has nothing to fade towards, so it holds a constant segment of
    its own color.

    Raises:
        EmptyForecast: if there are no locations or a location has no temps.
        InvalidStepCount: if fade_steps is below 1.
    """
    if len(forecast) == 0:
        raise EmptyForecast("forecast has no locations")
    if fade_steps < 1:
        raise InvalidStepCount(fade_steps, minimum=1)

    rows = []
    for i, temps in enumerate(forecast):
        if len(temps) == 0:
            raise EmptyForecast(f"location {i} has no temperatures")
        segments = [
            fade(temps[j - 1], temps[j], fade_steps) for j in range(1, len(temps))
        ]
        segments.append(fade(temps[-1], temps[-1], fade_steps))
        rows.append(tuple(segments))
    return tuple(rows)


def generate_colors(forecast: Forecast, fade_steps: int) -> ColorCube:
    """Compose fading and reordering into the cube a map renderer consumes.

    Returns a cube indexed [time-step][fade position][location].
    """
    cube = reorder_hierarchy(fade_forecast(forecast, fade_steps))
    logger.debug(
        "Generated colors: %d time-steps x %d fade steps x %d locations",
        len(cube), fade_steps, len(forecast),
    )
    return cube
