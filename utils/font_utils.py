"""
Font loading for caption rendering
"""

from pathlib import Path
from typing import Optional, Union
from loguru import logger
from PIL import ImageFont

from utils.exceptions import FontLoadError


class FontProvider:
    """
    Loads the caption font face at a requested point size
    """

    def __init__(self, font_path: Optional[Union[str, Path]] = None):
        """
        Initialize FontProvider

        Args:
            font_path: TrueType/OpenType file, or None for Pillow's bundled font
        """
        self.font_path = Path(font_path) if font_path else None

        if self.font_path is not None and not self.font_path.exists():
            raise FontLoadError(self.font_path, f"Font not found: {self.font_path}")

        logger.info(f"FontProvider initialized ({self.font_path or 'bundled default'})")

    def load(self, size: float) -> ImageFont.FreeTypeFont:
        """
        Load the font face at the given size

        Args:
            size: Point size

        Returns:
            Font face
        """
        try:
            if self.font_path is None:
                font = ImageFont.load_default(size=size)
            else:
                font = ImageFont.truetype(str(self.font_path), size)
        except (OSError, ValueError) as e:
            raise FontLoadError(self.font_path, f"Could not load font file: {e}") from e

        if not isinstance(font, ImageFont.FreeTypeFont):
            # load_default() hands back a fixed-size bitmap font without FreeType
            raise FontLoadError(self.font_path, "Scalable fonts require Pillow built with FreeType")

        return font
