"""Temperature to HSV mapping and HSV to packed GRB conversion.

Colors are packed for WS281x-style strips, which take green first:
bits 23-16 hold green, 15-8 red and 7-0 blue. Consumers that expect RGB
should go through `unpack_color` or `grb_to_rgb`.
"""

import math

from ledmap.color.errors import InvalidColorComponent

MIN_TEMP = 0.0
MAX_TEMP = 110.0
FREEZING = 32.0
WARM = 70.0

BLUE_HUE = 2.0 / 3.0
YELLOW_HUE = 1.0 / 6.0


def temperature_to_hsv(temp: float) -> tuple[float, float, float]:
    """Map a temperature to (hue, saturation, value), all in [0, 1].

    0 and colder is deep blue, fading to white at freezing. From freezing to
    70 the color warms from white to yellow, and from 70 to 110 the hue
    slides from yellow to red. Brightness is always full. NaN is treated as
    the cold end of the scale.
    """
    if math.isnan(temp):
        temp = MIN_TEMP
    temp = min(max(temp, MIN_TEMP), MAX_TEMP)

    if temp < FREEZING:
        hue = BLUE_HUE
        # Saturation eases from ~1 down to 0 as temp approaches freezing
        x = temp * 10.0 / FREEZING
        saturation = 1.0 - math.pow(1.4, x - 7.0) / math.pow(1.4, 3.0)
    elif temp < WARM:
        hue = YELLOW_HUE
        # Saturation rises from 0 towards 1 as temp approaches 70
        x = (temp - FREEZING) * 10.0 / (WARM - FREEZING)
        saturation = 1.0 - math.pow(1.5, -x - 3.0) / math.pow(1.5, -3.0)
    else:
        hue = YELLOW_HUE - ((temp - WARM) / (MAX_TEMP - WARM)) * YELLOW_HUE
        saturation = 1.0

    return hue, saturation, 1.0


def hsv_to_packed_color(h: float, s: float, v: float) -> int:
    """Convert HSV components in [0, 1] to a packed GRB integer.

    Raises:
        InvalidColorComponent: if any component is outside [0, 1].
    """
    if not (0.0 <= h <= 1.0 and 0.0 <= s <= 1.0 and 0.0 <= v <= 1.0):
        raise InvalidColorComponent(h, s, v)

    if s == 0:
        gray = round(v * 255)
        return _pack(gray, gray, gray)

    h6 = h * 6.0
    if h6 == 6.0:
        h6 = 0.0
    i = math.floor(h6)
    f = h6 - i

    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    sector = i % 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return _pack(int(g * 255), int(r * 255), int(b * 255))


def temperature_to_color(temp: float) -> int:
    """Packed GRB color for a single temperature."""
    return hsv_to_packed_color(*temperature_to_hsv(temp))


def unpack_color(packed: int) -> tuple[int, int, int]:
    """Decode a packed GRB integer into an (r, g, b) tuple."""
    g = (packed >> 16) & 0xFF
    r = (packed >> 8) & 0xFF
    b = packed & 0xFF
    return r, g, b


def grb_to_rgb(packed: int) -> int:
    """Swap the first two channels so the value reads as 0xRRGGBB."""
    r, g, b = unpack_color(packed)
    return (r << 16) | (g << 8) | b


def _pack(first: int, second: int, third: int) -> int:
    return (first << 16) | (second << 8) | third
