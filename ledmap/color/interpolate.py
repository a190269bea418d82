"""Linear interpolation between two values."""

from ledmap.color.errors import InvalidStepCount


def interpolate(start: float, end: float, steps: int) -> tuple[float, ...]:
    """Return `steps` evenly spaced values from start to end, inclusive.

    The first and last samples are exactly `start` and `end`. A single step
    yields just `(start,)` and zero steps yield an empty tuple.

    Raises:
        InvalidStepCount: if steps is negative.
    """
    if steps < 0:
        raise InvalidStepCount(steps)
    if steps == 0:
        return ()
    if steps == 1:
        return (start,)

    increment = (end - start) / (steps - 1)
    middle = tuple(start + increment * i for i in range(1, steps - 1))
    return (start, *middle, end)
