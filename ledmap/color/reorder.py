"""Reorder a color cube between location-major and time-major order.

The fade generator produces colors as location > time-step > fade position.
A map renderer sets every location at once for each frame, so it needs
time-step > fade position > location instead.
"""

from collections.abc import Sequence

from ledmap.color.errors import EmptyForecast, ShapeMismatch

ColorCube = tuple[tuple[tuple[int, ...], ...], ...]


def cube_shape(cube: Sequence[Sequence[Sequence[int]]]) -> tuple[int, int, int]:
    """Return (outer, middle, inner) lengths of a rectangular cube.

    Raises:
        EmptyForecast: if the cube has no rows or the first row is empty.
        ShapeMismatch: if any row or segment length differs from the first.
    """
    if len(cube) == 0:
        raise EmptyForecast("color cube has no rows")
    middle = len(cube[0])
    if middle == 0:
        raise EmptyForecast("color cube row 0 has no entries")
    inner = len(cube[0][0])

    for i, row in enumerate(cube):
        if len(row) != middle:
            raise ShapeMismatch(
                f"row {i} has {len(row)} entries, expected {middle}"
            )
        for j, segment in enumerate(row):
            if len(segment) != inner:
                raise ShapeMismatch(
                    f"segment [{i}][{j}] has {len(segment)} colors, expected {inner}"
                )
    return len(cube), middle, inner


def reorder_hierarchy(cube: Sequence[Sequence[Sequence[int]]]) -> ColorCube:
    """Transpose [location][time][pos] into [time][pos][location]."""
    locations, time_steps, fade_steps = cube_shape(cube)
    return tuple(
        tuple(
            tuple(cube[loc][t][pos] for loc in range(locations))
            for pos in range(fade_steps)
        )
        for t in range(time_steps)
    )


def restore_hierarchy(cube: Sequence[Sequence[Sequence[int]]]) -> ColorCube:
    """Inverse of `reorder_hierarchy`: [time][pos][location] back to [location][time][pos]."""
    time_steps, fade_steps, locations = cube_shape(cube)
    return tuple(
        tuple(
            tuple(cube[t][pos][loc] for pos in range(fade_steps))
            for t in range(time_steps)
        )
        for loc in range(locations)
    )
