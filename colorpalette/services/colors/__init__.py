"""
colorpalette Colors Module

Provides the Color value type, conversions, manipulation and analysis,
dominant color extraction, scheme-based palette generation, the palette
builder and theme generation.
"""

from .color import BLACK, WHITE, Color
from .palette import ColorPalette
from .harmony import PaletteScheme, generate_palette, resolve_scheme
from .extraction import ColorExtractor, ExtractionPolicy
from .builder import ColorPaletteBuilder
from .theme import Theme, ThemeGenerator

__all__ = [
    "BLACK",
    "WHITE",
    "Color",
    "ColorExtractor",
    "ColorPalette",
    "ColorPaletteBuilder",
    "ExtractionPolicy",
    "PaletteScheme",
    "Theme",
    "ThemeGenerator",
    "generate_palette",
    "resolve_scheme",
]
