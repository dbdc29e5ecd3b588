"""
Configuration settings for Meme Generator
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent
    WORKSPACE_DIR: Path = PROJECT_ROOT / "workspace"
    OUT_DIR: Path = WORKSPACE_DIR / "out"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Image input
    ALLOWED_EXTENSIONS: list[str] = [".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"]
    DOWNLOAD_TIMEOUT: float = 10.0  # seconds
    MAX_DOWNLOAD_BYTES: int = 10 * 1024 * 1024

    # Size guard
    MAX_IMAGE_SIZE: int = 600  # px, applies to both axes

    # Banner geometry
    IMAGE_MARGIN: float = 18.0  # px
    TOP_TEXT_DIVISOR: float = 5.0  # top banner gets height / 5
    BOTTOM_TEXT_DIVISOR: float = 3.75  # bottom banner gets height / 3.75

    # Font fitting
    FONT_PATH: Optional[Path] = None  # None = Pillow's bundled scalable font
    MAX_FONT_SIZE: int = 75  # pt
    MIN_FONT_SIZE: int = 21  # pt, used even if the text still overflows
    FONT_LEADING: float = 1.4  # line height multiplier

    # Text style
    TEXT_FILL_COLOR: str = "#FFF"
    TEXT_OUTLINE_COLOR: str = "#000"
    FONT_BORDER_RADIUS: float = 3.0  # px
    OUTLINE_ANGLE_STEP: float = 0.35  # radians between outline stamps

    # Output settings
    OUTPUT_FORMAT: str = "png"

    # FastAPI settings
    API_TITLE: str = "Meme Generator API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
