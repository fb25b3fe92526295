"""
colorpalette Configuration
Manages environment variables and defaults for extraction, loading and the HTTP API.
"""
import os
from typing import Literal


class Config:
    """Configuration class for colorpalette services."""

    # File size and dimensions
    MAX_FILE_MB: int = int(os.environ.get("COLORPALETTE_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("COLORPALETTE_MAX_EDGE", "1024"))

    # Pixel backend used by ImageLoader
    IMAGE_BACKEND: Literal["pillow", "opencv"] = os.environ.get("COLORPALETTE_IMAGE_BACKEND", "pillow")

    # Logging
    LOG_LEVEL: str = os.environ.get("COLORPALETTE_LOG_LEVEL", "INFO")

    # Remote image loading
    HTTP_TIMEOUT: float = float(os.environ.get("COLORPALETTE_HTTP_TIMEOUT", "10"))
    USER_AGENT: str = os.environ.get("COLORPALETTE_USER_AGENT", "colorpalette/1.0 (+image-loader)")
    ALLOW_PRIVATE_URLS: bool = bool(int(os.environ.get("COLORPALETTE_ALLOW_PRIVATE_URLS", "0")))

    # Extraction defaults
    SAMPLE_SIZE: int = int(os.environ.get("COLORPALETTE_SAMPLE_SIZE", "100"))
    QUANTIZE_STEP: int = int(os.environ.get("COLORPALETTE_QUANTIZE_STEP", "16"))
    MIN_SATURATION: float = float(os.environ.get("COLORPALETTE_MIN_SATURATION", "0.15"))
    MIN_VALUE: float = float(os.environ.get("COLORPALETTE_MIN_VALUE", "0.05"))
    MERGE_DELTA_E: float = float(os.environ.get("COLORPALETTE_MERGE_DELTA_E", "10.0"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("COLORPALETTE_ALLOWED_ORIGINS", "http://localhost:3000")

    # Palette size bounds
    MIN_COUNT: int = 1
    MAX_COUNT: int = 50
    DEFAULT_COUNT: int = 5

    # Bounds applied by the HTTP extract endpoint
    API_MIN_COUNT: int = 3
    API_MAX_COUNT: int = 15

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp", "image/bmp"]

    @classmethod
    def validate_count(cls, count: int) -> bool:
        """Validate a palette color count."""
        return cls.MIN_COUNT <= count <= cls.MAX_COUNT

    @classmethod
    def validate_backend(cls, backend: str) -> bool:
        """Validate image backend parameter."""
        return backend in ["pillow", "opencv"]

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter."""
        return 64 <= max_edge <= 8192

    @classmethod
    def validate_quantize_step(cls, step: int) -> bool:
        """Validate quantization bucket width."""
        return 1 <= step <= 128

    @classmethod
    def allowed_origins(cls) -> list:
        """Split the comma separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
