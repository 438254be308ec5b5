"""Logo download and decoding into raw RGBA pixels."""
import io
import logging
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from processor.models import DecodedImage

logger = logging.getLogger(__name__)

MAX_LOGO_DIMENSION = 512


class LogoError(Exception):
    """Base error for logo acquisition."""


class ImageFetchError(LogoError):
    """Logo could not be downloaded."""


class ImageDecodeError(LogoError):
    """Logo bytes are not a supported or intact raster image."""


class LogoFetcher:
    """Fetcher for event logo images."""

    def __init__(self, default_logo_url: str, timeout: int = 30):
        """
        Initialize the logo fetcher.

        Args:
            default_logo_url: Logo used for events without one
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.default_logo_url = default_logo_url
        self.timeout = timeout

    def fetch_logo_pixels(self, logo_url: Optional[str]) -> DecodedImage:
        """
        Download a logo and decode it to RGBA pixels.

        Args:
            logo_url: Logo URL, or None to use the default logo

        Returns:
            DecodedImage with 4 bytes per pixel

        Raises:
            ImageFetchError: On network or HTTP errors
            ImageDecodeError: On corrupt or unsupported image data
        """
        url = logo_url if logo_url and logo_url.strip() else self.default_logo_url
        content = self._download(url)
        return self.decode_image(content, url)

    def _download(self, url: str) -> bytes:
        """
        Fetch the raw image body. No retries are attempted.

        Raises:
            ImageFetchError: If the request fails or returns an error status
        """
        logger.debug(f"Fetching logo {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageFetchError(f"Failed to fetch logo {url}: {e}") from e

        return response.content

    @staticmethod
    def decode_image(content: bytes, source: str = '<bytes>') -> DecodedImage:
        """
        Decode PNG, JPEG or any other Pillow-supported raster image.

        Only the first frame of animated images is used. Images larger than
        MAX_LOGO_DIMENSION on either side are downscaled before conversion,
        keeping their aspect ratio.

        Args:
            content: Encoded image bytes
            source: Where the bytes came from, for error messages

        Returns:
            DecodedImage with RGBA pixels

        Raises:
            ImageDecodeError: If Pillow cannot decode the data
        """
        try:
            with Image.open(io.BytesIO(content)) as image:
                image.thumbnail((MAX_LOGO_DIMENSION, MAX_LOGO_DIMENSION))
                rgba = image.convert('RGBA')
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            EOFError,
            ValueError
        ) as e:
            raise ImageDecodeError(f"Failed to decode logo {source}: {e}") from e

        width, height = rgba.size
        return DecodedImage(pixels=rgba.tobytes(), width=width, height=height)
