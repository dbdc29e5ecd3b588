"""
Shared fixtures for Meme Generator tests
"""

import pytest
from PIL import Image

from config import Settings
from modules.layout import LayoutEngine
from modules.renderer import Renderer


@pytest.fixture
def config():
    """Default settings, independent of the global instance"""
    return Settings()


@pytest.fixture
def layout_engine(config):
    return LayoutEngine(config)


@pytest.fixture
def renderer(config, layout_engine):
    return Renderer(config, layout_engine)


@pytest.fixture
def make_image():
    """Factory for solid-color test images"""
    def _make(width, height, mode="RGB", color=(90, 120, 150)):
        if mode in ("L", "P"):
            color = 100
        elif mode == "RGBA" and len(color) == 3:
            color = color + (255,)
        return Image.new(mode, (width, height), color=color)

    return _make
