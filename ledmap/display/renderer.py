"""Map renderer: plays a render-ready color cube on a strip with timed pauses."""

import logging
import time
from collections.abc import Callable, Sequence

from ledmap.display.strip import LedStrip

logger = logging.getLogger(__name__)


class MapRenderer:
    """Steps through [time-step][fade position][location] colors.

    The first color of each time-step is held for `initial_pause` (first
    time-step) or `subsequent_pause` seconds; the rest of the fade plays
    with `frame_delay` between frames.
    """

    def __init__(
        self,
        strip: LedStrip,
        initial_pause: float = 10.0,
        subsequent_pause: float = 3.0,
        frame_delay: float = 0.025,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.strip = strip
        self.initial_pause = initial_pause
        self.subsequent_pause = subsequent_pause
        self.frame_delay = frame_delay
        self._sleep = sleep

    def play(self, colors: Sequence[Sequence[Sequence[int]]]) -> int:
        """Render every frame once. Returns the number of frames rendered."""
        frames = 0
        for i, fade_frames in enumerate(colors):
            if not fade_frames:
                continue
            self._show(fade_frames[0])
            frames += 1
            self._sleep(self.initial_pause if i == 0 else self.subsequent_pause)
            for frame in fade_frames[1:]:
                self._show(frame)
                frames += 1
                self._sleep(self.frame_delay)
        logger.debug("Played %d time-steps, %d frames", len(colors), frames)
        return frames

    def _show(self, frame: Sequence[int]) -> None:
        self.strip.fill(frame)
        if not getattr(self.strip, "auto_render", False):
            self.strip.render()
