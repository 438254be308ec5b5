"""Color conversions and the pastel transform used for card backgrounds."""
import math
from dataclasses import replace

from processor.models import ExtractedColor

PASTEL_SATURATION_THRESHOLD = 0.3
PASTEL_LIGHTNESS_THRESHOLD = 0.75
SATURATION_FACTOR = 0.7
LIGHTNESS_STEP = 0.1
MAX_LIGHTNESS = 0.9


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rgb_to_hex(red: int, green: int, blue: int) -> str:
    """Format 0-255 channels as a lowercase #rrggbb string."""
    return f"#{red:02x}{green:02x}{blue:02x}"


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """
    Convert an HSL color to a hex string.

    Args:
        hue: Hue as a fraction of a full turn (0-1)
        saturation: Saturation (0-1)
        lightness: Lightness (0-1)

    Returns:
        Lowercase hex string such as "#ff0000"
    """
    degrees = hue * 360
    chroma = (1 - abs(2 * lightness - 1)) * saturation
    x = chroma * (1 - abs((degrees / 60) % 2 - 1))
    m = lightness - chroma / 2

    if degrees < 60:
        r, g, b = chroma, x, 0.0
    elif degrees < 120:
        r, g, b = x, chroma, 0.0
    elif degrees < 180:
        r, g, b = 0.0, chroma, x
    elif degrees < 240:
        r, g, b = 0.0, x, chroma
    elif degrees < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return rgb_to_hex(
        _round_half_up((r + m) * 255),
        _round_half_up((g + m) * 255),
        _round_half_up((b + m) * 255)
    )


def is_pastel(color: ExtractedColor) -> bool:
    """Return True if the color is already light or muted enough."""
    return (
        color.saturation < PASTEL_SATURATION_THRESHOLD or
        color.lightness > PASTEL_LIGHTNESS_THRESHOLD
    )


def make_pastel(color: ExtractedColor) -> ExtractedColor:
    """
    Map a color to its pastel variant.

    Already pastel colors are returned as-is. Others are desaturated and
    lightened, and their hex is recomputed from the new HSL values. RGB
    channels, intensity and area are carried over from the source color.

    Args:
        color: Extracted color

    Returns:
        Pastel ExtractedColor
    """
    if is_pastel(color):
        return color

    saturation = color.saturation * SATURATION_FACTOR
    lightness = min(color.lightness + LIGHTNESS_STEP, MAX_LIGHTNESS)

    return replace(
        color,
        hex=hsl_to_hex(color.hue, saturation, lightness),
        saturation=saturation,
        lightness=lightness
    )
