"""
Utility Functions
"""

from .image_utils import (
    load_image,
    decode_image,
    encode_image,
    save_image,
    resize_image,
)
from .font_utils import FontProvider
from .exceptions import FontLoadError, ImageLoadError, ImageSaveError

__all__ = [
    "load_image",
    "decode_image",
    "encode_image",
    "save_image",
    "resize_image",
    "FontProvider",
    "FontLoadError",
    "ImageLoadError",
    "ImageSaveError",
]
