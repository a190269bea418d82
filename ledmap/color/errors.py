"""Errors raised by the temperature-to-color pipeline."""


class ColorPipelineError(ValueError):
    """Base class for all color pipeline failures."""


class EmptyForecast(ColorPipelineError):
    """Raised when a forecast has no locations, or a location has no time-steps."""


class InvalidStepCount(ColorPipelineError):
    """Raised for a negative interpolation step count or a fade-step count below 1."""

    def __init__(self, steps: int, minimum: int = 0):
        super().__init__(f"step count must be >= {minimum}, got {steps}")
        self.steps = steps
        self.minimum = minimum


class InvalidColorComponent(ColorPipelineError):
    """Raised when an HSV component falls outside [0, 1]."""

    def __init__(self, h: float, s: float, v: float):
        super().__init__(
            f"all HSV components must be in the range [0, 1], got h={h} s={s} v={v}"
        )
        self.components = (h, s, v)


class ShapeMismatch(ColorPipelineError):
    """Raised when a color cube's rows or segments have unequal lengths."""
