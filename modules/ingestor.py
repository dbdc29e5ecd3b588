"""
Ingestor Module - Load the base image from a local file or a URL
"""

from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse
from loguru import logger
from PIL import Image
import httpx

from config import Settings, settings as default_settings
from utils.exceptions import ImageLoadError
from utils.image_utils import load_image, decode_image


class Ingestor:
    """
    Loads base images from disk or over HTTP(S)
    """

    def __init__(self, config: Optional[Settings] = None, client: Optional[httpx.Client] = None):
        """
        Initialize Ingestor

        Args:
            config: Settings to use (default: global settings)
            client: HTTP client for URL sources (default: created per download)
        """
        self.config = config or default_settings
        self.allowed_extensions = [ext.lower() for ext in self.config.ALLOWED_EXTENSIONS]
        self.client = client

    @staticmethod
    def is_url(source: Union[str, Path]) -> bool:
        """Check whether source is an http(s) URL"""
        return urlparse(str(source)).scheme in ("http", "https")

    def load(self, source: Union[str, Path]) -> Image.Image:
        """
        Load image from a path or URL

        Args:
            source: Local file path or http(s) URL

        Returns:
            Decoded PIL image
        """
        if self.is_url(source):
            return self.load_from_url(str(source))

        return self.load_from_path(Path(source))

    def load_from_path(self, image_path: Path) -> Image.Image:
        """
        Load image from local file

        Args:
            image_path: Path to image file

        Returns:
            Decoded PIL image
        """
        if image_path.suffix.lower() not in self.allowed_extensions:
            raise ImageLoadError(
                image_path,
                f"Unsupported image type '{image_path.suffix}' "
                f"(allowed: {', '.join(self.allowed_extensions)})"
            )

        img = load_image(image_path)
        logger.info(f"Loaded image {image_path} ({img.width}x{img.height}, {img.mode})")

        return img

    def load_from_url(self, url: str) -> Image.Image:
        """
        Download and decode image

        Args:
            url: http(s) URL

        Returns:
            Decoded PIL image
        """
        logger.info(f"📥 Downloading image: {url}")

        try:
            if self.client is not None:
                response = self.client.get(url)
            else:
                with httpx.Client(timeout=self.config.DOWNLOAD_TIMEOUT, follow_redirects=True) as client:
                    response = client.get(url)
        except httpx.TimeoutException as e:
            raise ImageLoadError(url, f"Download timeout after {self.config.DOWNLOAD_TIMEOUT} seconds") from e
        except httpx.HTTPError as e:
            raise ImageLoadError(url, f"HTTP error downloading image: {e}") from e

        if response.status_code != 200:
            raise ImageLoadError(url, f"Download failed with status {response.status_code}")

        data = response.content
        if len(data) > self.config.MAX_DOWNLOAD_BYTES:
            raise ImageLoadError(
                url,
                f"Image too large ({len(data)} bytes, limit {self.config.MAX_DOWNLOAD_BYTES})"
            )

        img = decode_image(data, source=url)
        logger.info(f"✅ Downloaded image ({img.width}x{img.height}, {img.mode})")

        return img
