"""
Meme Generator Modules
"""

from .ingestor import Ingestor
from .layout import LayoutEngine
from .renderer import Renderer
from .exporter import Exporter

__all__ = [
    "Ingestor",
    "LayoutEngine",
    "Renderer",
    "Exporter",
]
