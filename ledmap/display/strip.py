"""LED strip abstraction and an in-memory simulated strip."""

import logging
from collections import deque
from collections.abc import Sequence
from typing import Protocol

logger = logging.getLogger(__name__)


class StripError(Exception):
    """Raised on invalid strip operations."""


class LedStrip(Protocol):
    """Anything that behaves like a one-dimensional string of LEDs.

    Colors are packed GRB integers. Changes are pending until `render`
    unless the strip renders automatically.
    """

    led_count: int

    def fill_single(self, color: int) -> None: ...

    def fill(self, colors: Sequence[int]) -> None: ...

    def set(self, index: int, color: int) -> None: ...

    def render(self) -> None: ...

    def close(self) -> None: ...


class SimulatedStrip:
    """Strip that keeps its pixels in memory and records rendered frames."""

    def __init__(
        self,
        led_count: int,
        brightness: int = 255,
        auto_render: bool = False,
        history_size: int = 256,
    ):
        if led_count < 1:
            raise StripError(f"led_count must be positive, got {led_count}")
        if not 0 <= brightness <= 255:
            raise StripError(f"brightness must be in 0..255, got {brightness}")
        self.led_count = led_count
        self.brightness = brightness
        self.auto_render = auto_render
        self.render_count = 0
        self._pixels = [0] * led_count
        self._frames: deque[tuple[int, ...]] = deque(maxlen=history_size)
        self._closed = False

    @property
    def pixels(self) -> tuple[int, ...]:
        """Pending pixel buffer, not yet necessarily rendered."""
        return tuple(self._pixels)

    @property
    def frames(self) -> list[tuple[int, ...]]:
        """Most recent rendered frames, oldest first."""
        return list(self._frames)

    @property
    def last_frame(self) -> tuple[int, ...] | None:
        return self._frames[-1] if self._frames else None

    def fill_single(self, color: int) -> None:
        """Apply one color to every LED."""
        self._check_open()
        self._pixels = [_check_color(color)] * self.led_count
        self._maybe_render()

    def fill(self, colors: Sequence[int]) -> None:
        """Apply one color per LED. Length must match the strip."""
        self._check_open()
        if len(colors) != self.led_count:
            raise StripError(
                f"mismatch between number of colors and number of LEDs: "
                f"colors={len(colors)}, leds={self.led_count}"
            )
        self._pixels = [_check_color(c) for c in colors]
        self._maybe_render()

    def set(self, index: int, color: int) -> None:
        """Set a single LED's color."""
        self._check_open()
        if not 0 <= index < self.led_count:
            raise StripError(f"index {index} out of range for {self.led_count} LEDs")
        self._pixels[index] = _check_color(color)
        self._maybe_render()

    def render(self) -> None:
        """Push pending changes, scaled by brightness, into the frame history."""
        self._check_open()
        self._frames.append(tuple(_scale(c, self.brightness) for c in self._pixels))
        self.render_count += 1

    def close(self) -> None:
        if not self._closed:
            logger.debug("Simulated strip closed after %d renders", self.render_count)
        self._closed = True

    def _maybe_render(self) -> None:
        if self.auto_render:
            self.render()

    def _check_open(self) -> None:
        if self._closed:
            raise StripError("strip is closed")


def _check_color(color: int) -> int:
    if not 0 <= color <= 0xFFFFFF:
        raise StripError(f"color {color:#x} is not a 24-bit value")
    return color


def _scale(color: int, brightness: int) -> int:
    if brightness == 255:
        return color
    channels = ((color >> shift) & 0xFF for shift in (16, 8, 0))
    a, b, c = (ch * brightness // 255 for ch in channels)
    return (a << 16) | (b << 8) | c
