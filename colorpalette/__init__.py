"""
colorpalette

Color space conversion, manipulation and analysis, dominant color
extraction from images, scheme-based palette generation and semantic UI
themes with WCAG contrast checks.
"""

__version__ = "1.0.0"

from colorpalette.exceptions import ColorValidationError, UnsupportedSourceError
from colorpalette.services.colors import (
    Color,
    ColorExtractor,
    ColorPalette,
    ColorPaletteBuilder,
    ExtractionPolicy,
    PaletteScheme,
    Theme,
    ThemeGenerator,
    generate_palette,
)
from colorpalette.services.imaging import (
    ArrayPixelSource,
    ImageLoader,
    OpenCVPixelSource,
    PillowPixelSource,
    PixelSource,
)

__all__ = [
    "ArrayPixelSource",
    "Color",
    "ColorExtractor",
    "ColorPalette",
    "ColorPaletteBuilder",
    "ColorValidationError",
    "ExtractionPolicy",
    "ImageLoader",
    "OpenCVPixelSource",
    "PaletteScheme",
    "PillowPixelSource",
    "PixelSource",
    "Theme",
    "ThemeGenerator",
    "UnsupportedSourceError",
    "generate_palette",
]
