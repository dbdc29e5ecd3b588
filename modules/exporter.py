"""
Exporter Module - Encode memes and save them with a consistent naming convention
"""

from pathlib import Path
from datetime import datetime
from typing import Optional, Union
from loguru import logger
from PIL import Image
import re

from config import Settings, settings as default_settings
from utils.image_utils import encode_image, save_image


class Exporter:
    """
    Exports memes as encoded bytes or files with optional versioning
    """

    def __init__(self, output_dir: Path = None, config: Optional[Settings] = None):
        """
        Initialize Exporter

        Args:
            output_dir: Output directory (default: workspace/out)
            config: Settings to use (default: global settings)
        """
        self.config = config or default_settings
        self.output_dir = Path(output_dir or self.config.OUT_DIR)
        self.output_format = self.config.OUTPUT_FORMAT.lower()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Exporter initialized with output dir: {self.output_dir}")

    def encode(self, image: Image.Image) -> bytes:
        """Encode meme in OUTPUT_FORMAT"""
        return encode_image(image, self.output_format)

    def save(self, image: Image.Image, output_path: Union[str, Path]) -> Path:
        """
        Save meme to an explicit path

        Args:
            image: Rendered meme
            output_path: Destination file (format taken from its suffix)

        Returns:
            Path to saved file
        """
        output_path = save_image(image, output_path)
        logger.info(f"Saved meme: {output_path}")
        return output_path

    def generate_filename(
        self,
        caption: str,
        version: Optional[int] = None,
        date: Optional[str] = None
    ) -> str:
        """
        Generate filename following pattern: CAPTION__YYYYMMDD_HHMMSS__vXXX.png

        Args:
            caption: Caption used to name the file
            version: Version number (auto-increment if None)
            date: Date string (use today if None)

        Returns:
            Filename string
        """
        clean_caption = self._clean_caption(caption)

        now = datetime.now()
        if date is None:
            date = now.strftime("%Y%m%d")

        timestamp = now.strftime("%H%M%S")

        if version is None:
            version = self._get_next_version(clean_caption, date)

        return f"{clean_caption}__{date}_{timestamp}__v{version:03d}.{self.output_format}"

    def _clean_caption(self, caption: str) -> str:
        """
        Clean caption for use in filename

        Args:
            caption: Original caption

        Returns:
            Cleaned caption ("meme" if nothing usable is left)
        """
        caption = caption.strip()

        # Keep letters, numbers, spaces, underscores and dashes
        caption = re.sub(r'[^\w\s-]', '', caption)

        # Replace spaces and multiple underscores with single underscore
        caption = re.sub(r'[\s_-]+', '_', caption).strip('_')

        # Limit length
        max_length = 50
        if len(caption) > max_length:
            caption = caption[:max_length]

        return caption or "meme"

    def _get_next_version(self, clean_caption: str, date: str) -> int:
        """
        Get next available version number

        Args:
            clean_caption: Cleaned caption
            date: Date string

        Returns:
            Next version number
        """
        pattern = f"{clean_caption}__{date}_*__v*.{self.output_format}"

        versions = []
        for file in self.output_dir.glob(pattern):
            match = re.search(r'__v(\d+)$', file.stem)
            if match:
                versions.append(int(match.group(1)))

        return max(versions) + 1 if versions else 1

    def save_versioned(self, image: Image.Image, caption: str) -> Path:
        """
        Save meme into the output directory with a generated name

        Args:
            image: Rendered meme
            caption: Caption used to name the file

        Returns:
            Path to saved file
        """
        filename = self.generate_filename(caption)
        output_path = self.output_dir / filename

        save_image(image, output_path, self.output_format)
        logger.info(f"Saved meme: {output_path}")

        return output_path

    def list_memes(self) -> list[Path]:
        """
        List all memes in output directory

        Returns:
            List of meme paths, newest first
        """
        pattern = f"*.{self.output_format}"
        memes = sorted(self.output_dir.glob(pattern), key=lambda p: p.stat().st_mtime, reverse=True)

        logger.info(f"Found {len(memes)} memes in {self.output_dir}")

        return memes
