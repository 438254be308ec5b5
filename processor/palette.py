"""Palette extraction from decoded logo pixels."""
import colorsys
import logging
from typing import Callable, Iterator, List, Tuple

from PIL import Image

from processor.colors import rgb_to_hex
from processor.models import ExtractedColor

logger = logging.getLogger(__name__)

PixelFilter = Callable[[int, int, int, int], bool]

MIN_ALPHA = 200
GREY_CHANNEL_DIFFERENCE = 30

DEFAULT_MAX_DIMENSION = 200
DEFAULT_PALETTE_SIZE = 8


def accepts_pixel(red: int, green: int, blue: int, alpha: int = 255) -> bool:
    """
    Decide whether a pixel takes part in palette extraction.

    Near-transparent pixels and near-grey pixels are rejected so that logo
    backgrounds and anti-aliasing fringes do not outweigh brand colors.

    Args:
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)
        alpha: Alpha channel (0-255)

    Returns:
        True if the pixel is opaque enough and not grey
    """
    grey_shade = (
        abs(red - green) < GREY_CHANNEL_DIFFERENCE and
        abs(red - blue) < GREY_CHANNEL_DIFFERENCE and
        abs(green - blue) < GREY_CHANNEL_DIFFERENCE
    )
    return alpha > MIN_ALPHA and not grey_shade


def extract_palette(
    pixels: bytes,
    width: int,
    height: int,
    pixel_filter: PixelFilter = accepts_pixel,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    palette_size: int = DEFAULT_PALETTE_SIZE
) -> List[ExtractedColor]:
    """
    Extract representative colors from RGBA pixel data.

    The image is downscaled, pixels failing ``pixel_filter`` are dropped,
    and the rest are quantized with Pillow's median cut. Each palette
    entry's area is its share of the downscaled image and its intensity
    is area weighted by colorfulness.

    Args:
        pixels: RGBA bytes, 4 per pixel, row-major
        width: Image width in pixels
        height: Image height in pixels
        pixel_filter: Predicate over (red, green, blue, alpha)
        max_dimension: Longest side after downscaling
        palette_size: Maximum number of colors to quantize to

    Returns:
        Colors sorted by intensity, most intense first. Empty when no
        pixel passes the filter.

    Raises:
        ValueError: If the buffer size does not match the dimensions, or
            max_dimension is not positive
    """
    if max_dimension < 1:
        raise ValueError(f"max_dimension must be positive, got {max_dimension}")
    pixel_count = width * height
    if len(pixels) != pixel_count * 4:
        raise ValueError(
            f"Expected {pixel_count * 4} bytes for a {width}x{height} RGBA "
            f"image, got {len(pixels)}"
        )
    if pixel_count == 0:
        return []

    image = Image.frombytes('RGBA', (width, height), pixels)
    image.thumbnail((max_dimension, max_dimension), resample=Image.Resampling.NEAREST)
    sampled = image.width * image.height

    accepted = bytearray()
    for red, green, blue, alpha in _iter_rgba(image.tobytes()):
        if pixel_filter(red, green, blue, alpha):
            accepted.extend((red, green, blue))

    if not accepted:
        logger.debug(f"No pixels accepted out of {sampled} sampled ({width}x{height})")
        return []

    strip = Image.frombytes('RGB', (len(accepted) // 3, 1), bytes(accepted))
    quantized = strip.quantize(colors=palette_size, method=Image.Quantize.MEDIANCUT)
    palette = quantized.getpalette()

    colors = []
    for count, index in quantized.getcolors():
        red, green, blue = palette[index * 3:index * 3 + 3]
        colors.append(_to_extracted_color((red, green, blue), count / sampled))

    colors.sort(key=lambda c: c.intensity, reverse=True)
    logger.debug(
        f"Extracted {len(colors)} colors from {sampled} sampled pixels "
        f"({width}x{height})"
    )
    return colors


def _iter_rgba(data: bytes) -> Iterator[Tuple[int, int, int, int]]:
    channels = iter(data)
    return zip(channels, channels, channels, channels)


def _to_extracted_color(rgb: Tuple[int, int, int], area: float) -> ExtractedColor:
    red, green, blue = rgb
    hue, lightness, saturation = colorsys.rgb_to_hls(red / 255, green / 255, blue / 255)

    return ExtractedColor(
        hex=rgb_to_hex(red, green, blue),
        red=red,
        green=green,
        blue=blue,
        hue=hue,
        saturation=saturation,
        lightness=lightness,
        # Coverage times HSL chroma
        intensity=area * saturation * (1 - abs(2 * lightness - 1)),
        area=area
    )
