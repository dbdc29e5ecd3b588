"""
Layout Engine - Banner placement, word wrapping and font size fitting
"""

from typing import List, Optional
from dataclasses import dataclass, field
from loguru import logger
from PIL import ImageFont

from config import Settings, settings as default_settings
from utils.font_utils import FontProvider


@dataclass
class Position:
    """Position with x, y coordinates"""
    x: float
    y: float


@dataclass
class Banner:
    """Caption placement information"""
    text: str
    anchor: Position
    ax: float  # 0 = anchor is left edge of block, 1 = right edge
    ay: float  # 0 = anchor is top edge of block, 1 = bottom edge
    divisor: float  # height budget = canvas height / divisor


@dataclass
class FontFit:
    """Result of fitting a caption into a box"""
    size: int
    font: ImageFont.FreeTypeFont
    lines: List[str] = field(default_factory=list)
    width: float = 0.0  # widest line
    height: float = 0.0  # line height * leading * line count
    line_height: float = 0.0

    def fits(self, max_width: float, max_height: float) -> bool:
        return self.width <= max_width and self.height <= max_height


class LayoutEngine:
    """
    Places the top and bottom banners and picks the font size for each
    """

    def __init__(self, config: Optional[Settings] = None, font_provider: Optional[FontProvider] = None):
        """
        Initialize Layout Engine

        Args:
            config: Settings to use (default: global settings)
            font_provider: Font source (default: built from config.FONT_PATH)
        """
        self.config = config or default_settings
        self.font_provider = font_provider or FontProvider(self.config.FONT_PATH)

        self.margin = self.config.IMAGE_MARGIN
        self.leading = self.config.FONT_LEADING

    def top_banner(self, width: int, text: str) -> Banner:
        """Banner hanging from the top margin"""
        return Banner(
            text=text,
            anchor=Position(x=width / 2, y=self.margin),
            ax=0.5,
            ay=0.0,
            divisor=self.config.TOP_TEXT_DIVISOR,
        )

    def bottom_banner(self, width: int, height: int, text: str) -> Banner:
        """Banner standing on the bottom margin"""
        return Banner(
            text=text,
            anchor=Position(x=width / 2, y=height - self.margin),
            ax=0.5,
            ay=1.0,
            divisor=self.config.BOTTOM_TEXT_DIVISOR,
        )

    def text_box(self, width: int, height: int, banner: Banner) -> tuple[float, float]:
        """
        Width and height available to a banner's text

        Returns:
            (max_width, max_height)
        """
        max_width = width - (self.margin * 2)
        max_height = height / banner.divisor
        return max_width, max_height

    def line_height(self, font: ImageFont.FreeTypeFont) -> float:
        """Height of a single line of text"""
        ascent, descent = font.getmetrics()
        return ascent + descent

    def wrap_text(
        self,
        text: str,
        font: ImageFont.FreeTypeFont,
        max_width: float,
        max_lines: Optional[int] = None
    ) -> List[str]:
        """
        Wrap text into lines no wider than max_width

        Words are never split, so a single word wider than max_width
        ends up alone on its own line.

        Args:
            text: Input text
            font: Font used for measuring
            max_width: Maximum line width in pixels
            max_lines: Stop once this many lines are exceeded (None = wrap everything)

        Returns:
            List of text lines (at most max_lines + 1 when max_lines is set)
        """
        lines = []

        def overflowing():
            return max_lines is not None and len(lines) > max_lines

        for paragraph in text.split("\n"):
            current_line = []

            for word in paragraph.split():
                candidate = " ".join(current_line + [word])

                if current_line and font.getlength(candidate) > max_width:
                    lines.append(" ".join(current_line))
                    current_line = [word]

                    if overflowing():
                        return lines
                else:
                    current_line.append(word)

            # Add remaining words
            if current_line:
                lines.append(" ".join(current_line))

                if overflowing():
                    return lines

        return lines

    def measure(self, text: str, size: int, max_width: float, max_height: Optional[float] = None) -> FontFit:
        """
        Wrap and measure text at one font size

        With max_height set, wrapping stops as soon as the lines are taller
        than the box, so the result is only good for rejecting this size.

        Args:
            text: Text to measure (already upper-cased)
            size: Font size in points
            max_width: Wrap width
            max_height: Height budget for an early exit (None = measure everything)

        Returns:
            Measurement at this size
        """
        font = self.font_provider.load(size)
        line_height = self.line_height(font)

        max_lines = None
        if max_height is not None:
            max_lines = int(max_height // (line_height * self.leading))

        lines = self.wrap_text(text, font, max_width, max_lines)
        widest = max((font.getlength(line) for line in lines), default=0.0)

        return FontFit(
            size=size,
            font=font,
            lines=lines,
            width=widest,
            height=line_height * self.leading * len(lines),
            line_height=line_height,
        )

    def fit_font_size(self, text: str, max_width: float, max_height: float) -> FontFit:
        """
        Find the largest font size at which the wrapped text fits the box

        Sizes are tried from MAX_FONT_SIZE down to MIN_FONT_SIZE. If nothing
        fits, the MIN_FONT_SIZE result is returned and the text overflows.

        Args:
            text: Caption text (upper-cased here)
            max_width: Maximum block width in pixels
            max_height: Maximum block height in pixels

        Returns:
            Chosen size with its wrapped lines
        """
        text = text.upper()
        min_size = self.config.MIN_FONT_SIZE
        max_size = max(self.config.MAX_FONT_SIZE, min_size)

        for size in range(max_size, min_size, -1):
            fit = self.measure(text, size, max_width, max_height)

            if fit.fits(max_width, max_height):
                logger.debug(
                    f"Font fit: {size}pt, {len(fit.lines)} line(s), "
                    f"{fit.width:.0f}x{fit.height:.0f} in {max_width:.0f}x{max_height:.0f}"
                )
                return fit

        # The floor size is always wrapped in full, overflow or not
        fit = self.measure(text, min_size, max_width)

        if not fit.fits(max_width, max_height):
            logger.debug(f"Caption overflows its box, using minimum size {min_size}pt")

        return fit
