"""
Image utility functions for decoding, encoding and resizing
"""

import io
from pathlib import Path
from typing import Union
from PIL import Image, UnidentifiedImageError

from utils.exceptions import ImageLoadError, ImageSaveError


def load_image(image_path: Union[str, Path]) -> Image.Image:
    """
    Load image from file path

    Args:
        image_path: Path to image file

    Returns:
        Decoded PIL image (first frame for animated files)
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise ImageLoadError(image_path, f"Image not found: {image_path}")
    if not image_path.is_file():
        raise ImageLoadError(image_path, f"Not a file: {image_path}")

    try:
        data = image_path.read_bytes()
    except OSError as e:
        raise ImageLoadError(image_path, f"Failed to read image {image_path}: {e}") from e

    return decode_image(data, source=image_path)


def decode_image(data: bytes, source: Union[str, Path] = "<bytes>") -> Image.Image:
    """
    Decode raw bytes into a PIL image

    Args:
        data: Encoded image data
        source: Where the data came from (used in error messages)

    Returns:
        Fully loaded PIL image
    """
    if not data:
        raise ImageLoadError(source, f"Image is empty: {source}")

    try:
        img = Image.open(io.BytesIO(data))
        # Animated formats: keep the first frame only
        img.seek(0)
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(source, f"Failed to decode image {source}: {e}") from e

    return img


def encode_image(image: Image.Image, image_format: str = "png") -> bytes:
    """
    Encode image into bytes

    Args:
        image: PIL image
        image_format: Output format name (png, jpg, webp...)

    Returns:
        Encoded image bytes

    Raises:
        ImageSaveError: Unknown format, or a mode the encoder cannot write
    """
    image_format = image_format.lower()
    if image_format == "jpg":
        image_format = "jpeg"

    # JPEG has no alpha or palette support
    if image_format == "jpeg" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=image_format.upper())
    except KeyError as e:
        raise ImageSaveError(image_format, f"Unsupported output format: {image_format}") from e
    except (ValueError, OSError) as e:
        raise ImageSaveError(image_format, f"Failed to encode {image.mode} image as {image_format}: {e}") from e

    return buffer.getvalue()


def save_image(image: Image.Image, output_path: Union[str, Path], image_format: str = None) -> Path:
    """
    Save image to file

    Args:
        image: PIL image
        output_path: Output file path
        image_format: Output format (default: taken from the file suffix)

    Returns:
        Path written to
    """
    output_path = Path(output_path)
    image_format = image_format or output_path.suffix.lstrip(".") or "png"
    data = encode_image(image, image_format)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        raise ImageSaveError(output_path, f"Failed to write {output_path}: {e}") from e

    return output_path


def resize_image(image: Image.Image, width: int = 0, height: int = 0) -> Image.Image:
    """
    Resize image with bilinear interpolation

    A zero width or height is computed from the other side so the aspect
    ratio is kept. The computed side is rounded as int(0.7 + exact).

    Args:
        image: Input image
        width: Target width, or 0 for proportional
        height: Target height, or 0 for proportional

    Returns:
        Resized image
    """
    w, h = image.size

    if width == 0 and height == 0:
        return image

    if width == 0:
        width = int(0.7 + w * height / h)
    elif height == 0:
        height = int(0.7 + h * width / w)

    return image.resize((max(1, width), max(1, height)), Image.BILINEAR)
