"""
Renderer Module - Size guard and outlined caption rendering with Pillow
"""

import math
import numpy as np
from typing import Iterator, Optional, Tuple, Union
from loguru import logger
from PIL import Image, ImageColor, ImageDraw

from config import Settings, settings as default_settings
from modules.layout import LayoutEngine, Banner, FontFit, Position
from utils.image_utils import resize_image

# Full-intensity white for greyscale modes deeper than 8 bits
WIDE_MODE_WHITE = {
    "I;16": 65535,
    "I;16B": 65535,
    "I": 65535,
    "F": 255.0,
}

# Pixels are palette indices or bits, so text is pasted without antialiasing
INDEXED_MODES = ("P", "PA", "1")


class Renderer:
    """
    Renders a meme by shrinking the base image and drawing top/bottom captions
    """

    def __init__(self, config: Optional[Settings] = None, layout_engine: Optional[LayoutEngine] = None):
        """
        Initialize Renderer

        The font is loaded once here so a missing or broken font fails
        immediately instead of on the first render.

        Args:
            config: Settings to use (default: global settings)
            layout_engine: Layout engine (default: built from config)
        """
        self.config = config or default_settings
        self.layout_engine = layout_engine or LayoutEngine(self.config)
        self.max_size = self.config.MAX_IMAGE_SIZE

        self.layout_engine.font_provider.load(self.config.MAX_FONT_SIZE)

        logger.info(f"Renderer initialized (max {self.max_size}px)")

    def render(self, image: Image.Image, top: str = "", bottom: str = "") -> Image.Image:
        """
        Create meme from base image

        Args:
            image: Base image
            top: Top caption ("" = no top banner)
            bottom: Bottom caption ("" = no bottom banner)

        Returns:
            Rendered meme in the pixel mode of the input
        """
        # 1. Shrink oversized images
        img = self.ensure_max_size(image)

        # 2. Draw captions on a private copy
        canvas = img.copy()
        self.render_top_banner(canvas, top)
        self.render_bottom_banner(canvas, bottom)

        logger.info(f"Meme rendered ({canvas.width}x{canvas.height}, {canvas.mode}, top={bool(top)}, bottom={bool(bottom)})")

        return canvas

    def ensure_max_size(self, image: Image.Image) -> Image.Image:
        """
        Shrink the image if it is too wide, then if it is too tall

        The two checks run one after the other on the current image, so an
        image over the limit on both axes is resized twice.

        Args:
            image: Input image

        Returns:
            Image no larger than MAX_IMAGE_SIZE on either axis
        """
        if image.width > self.max_size:
            logger.debug(f"Image too wide ({image.width}px), resizing to {self.max_size}px")
            image = resize_image(image, width=self.max_size)

        if image.height > self.max_size:
            logger.debug(f"Image too tall ({image.height}px), resizing to {self.max_size}px")
            image = resize_image(image, height=self.max_size)

        return image

    def render_top_banner(self, canvas: Image.Image, text: str) -> None:
        """Draw the top caption onto the canvas (no-op for empty text)"""
        if not text:
            return

        banner = self.layout_engine.top_banner(canvas.width, text)
        self.draw_banner(canvas, banner)

    def render_bottom_banner(self, canvas: Image.Image, text: str) -> None:
        """Draw the bottom caption onto the canvas (no-op for empty text)"""
        if not text:
            return

        banner = self.layout_engine.bottom_banner(canvas.width, canvas.height, text)
        self.draw_banner(canvas, banner)

    def draw_banner(self, canvas: Image.Image, banner: Banner) -> FontFit:
        """
        Fit and draw one banner

        Args:
            canvas: Canvas, modified in place
            banner: Banner placement

        Returns:
            Font fit used for drawing
        """
        max_width, max_height = self.layout_engine.text_box(canvas.width, canvas.height, banner)
        fit = self.layout_engine.fit_font_size(banner.text, max_width, max_height)

        logger.debug(f"Drawing '{banner.text[:30]}' at {fit.size}pt ({len(fit.lines)} line(s))")

        self.draw_outlined_text(canvas, fit, banner.anchor, banner.ax, banner.ay, max_width)

        return fit

    def draw_outlined_text(
        self,
        canvas: Image.Image,
        fit: FontFit,
        anchor: Position,
        ax: float,
        ay: float,
        max_width: float
    ) -> None:
        """
        Draw wrapped text with an outline

        The outline is made by stamping the whole text block at points on a
        small circle around the anchor, then the fill is drawn once on top.
        Both are drawn into 'L' coverage masks and pasted onto the canvas in
        the outline and fill colors, so the canvas keeps its own pixel mode.

        Args:
            canvas: Canvas, modified in place
            fit: Font and wrapped lines to draw
            anchor: Anchor point
            ax: Horizontal anchor fraction of the block
            ay: Vertical anchor fraction of the block
            max_width: Wrap box width
        """
        outline_mask = Image.new("L", canvas.size, 0)
        fill_mask = Image.new("L", canvas.size, 0)

        # Draw outline
        outline_draw = ImageDraw.Draw(outline_mask)
        for dx, dy in self._outline_offsets():
            self._draw_wrapped(outline_draw, fit, (anchor.x + dx, anchor.y + dy), ax, ay, max_width, canvas.height)

        # Draw text
        self._draw_wrapped(ImageDraw.Draw(fill_mask), fit, (anchor.x, anchor.y), ax, ay, max_width, canvas.height)

        self._paste_color(canvas, self.config.TEXT_OUTLINE_COLOR, outline_mask)
        self._paste_color(canvas, self.config.TEXT_FILL_COLOR, fill_mask)

    def _outline_offsets(self) -> Iterator[Tuple[float, float]]:
        """Offsets around the outline circle, one per OUTLINE_ANGLE_STEP"""
        radius = self.config.FONT_BORDER_RADIUS
        step = self.config.OUTLINE_ANGLE_STEP

        angle = 0.0
        while angle < 2 * math.pi:
            yield math.sin(angle) * radius, math.cos(angle) * radius
            angle += step

    def _draw_wrapped(
        self,
        draw: ImageDraw.ImageDraw,
        fit: FontFit,
        xy: Tuple[float, float],
        ax: float,
        ay: float,
        width: float,
        canvas_height: int
    ) -> None:
        """
        Draw the wrapped lines as a block anchored at xy

        Lines are always centered inside the block. Lines that fall entirely
        above or below the canvas are skipped.
        """
        if not fit.lines:
            return

        leading = self.config.FONT_LEADING
        line_height = fit.line_height

        # No extra leading below the last line
        block_height = len(fit.lines) * line_height * leading - (leading - 1) * line_height

        x = xy[0] - ax * width + width / 2
        y = xy[1] - ay * block_height

        for line in fit.lines:
            if y > canvas_height:
                break

            if y + line_height >= 0:
                draw.text(
                    (x, y),
                    line,
                    font=fit.font,
                    fill=255,
                    anchor="ma"  # middle-ascender: centered, y = top of line
                )
            y += line_height * leading

    def _paste_color(self, canvas: Image.Image, color: str, mask: Image.Image) -> None:
        """Blend a solid color into the canvas through a coverage mask"""
        if mask.getbbox() is None:
            return

        mode = canvas.mode

        if mode in WIDE_MODE_WHITE:
            self._blend_wide(canvas, color, mask)
        elif mode in INDEXED_MODES:
            # Blending indices is meaningless: each pixel is either text or not
            hard_mask = mask.point(lambda value: 255 if value >= 128 else 0)
            canvas.paste(self._indexed_ink(canvas, color), mask=hard_mask)
        else:
            try:
                ink = Image.new("RGB", (1, 1), color).convert(mode).getpixel((0, 0))
            except ValueError:
                # No direct RGB conversion for this mode: blend in RGBA
                blended = canvas.convert("RGBA")
                blended.paste(color, mask=mask)
                canvas.paste(blended.convert(mode))
                return

            canvas.paste(ink, mask=mask)

    def _blend_wide(self, canvas: Image.Image, color: str, mask: Image.Image) -> None:
        """Blend a color into a 16/32-bit greyscale canvas using its full range"""
        pixels = np.asarray(canvas)
        alpha = np.asarray(mask, dtype=np.float64) / 255.0
        level = ImageColor.getcolor(color, "L") / 255.0 * WIDE_MODE_WHITE[canvas.mode]

        blended = pixels * (1.0 - alpha) + level * alpha
        if np.issubdtype(pixels.dtype, np.integer):
            blended = np.rint(blended)

        canvas.paste(Image.fromarray(blended.astype(pixels.dtype)))

    def _indexed_ink(self, canvas: Image.Image, color: str) -> Union[int, Tuple[int, int]]:
        """Pixel value for a color in a palette or bilevel canvas"""
        if canvas.mode == "1":
            return 255 if ImageColor.getcolor(color, "L") >= 128 else 0

        rgb = ImageColor.getrgb(color)[:3]
        try:
            index = canvas.palette.getcolor(rgb, canvas)
        except ValueError:
            # Palette is full: use the closest existing entry
            entries = np.array(canvas.getpalette(), dtype=np.int64).reshape(-1, 3)
            index = int(np.argmin(((entries - rgb) ** 2).sum(axis=1)))

        return (index, 255) if canvas.mode == "PA" else index
