"""
ColorPalette: an immutable, ordered collection of colors with optional keys.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from colorpalette.config import config
from colorpalette.exceptions import ColorValidationError
from . import analysis
from .color import Color, ColorLike

PaletteKey = Union[int, str]

# Lightness shift for the light/dark surface variants
SURFACE_VARIANT_DELTA = 0.15


class ColorPalette:
    """
    Ordered mapping of keys to colors.

    Unkeyed entries receive the next free integer key, so a palette built
    from a plain list is indexed 0..n-1. The palette never changes after
    construction; accessors hand out copies.
    """

    def __init__(self, colors: Optional[Union[Iterable[ColorLike], Mapping[PaletteKey, ColorLike]]] = None):
        self._colors: Dict[PaletteKey, Color] = {}
        if colors is None:
            return

        if isinstance(colors, Mapping):
            items = colors.items()
        else:
            items = ((None, color) for color in colors)

        for key, color in items:
            self._insert(key, color)

    def _insert(self, key: Optional[PaletteKey], color: ColorLike):
        if key is None:
            int_keys = [k for k in self._colors if isinstance(k, int)]
            key = max(int_keys) + 1 if int_keys else 0
        elif isinstance(key, bool) or not isinstance(key, (int, str)):
            raise ColorValidationError(f"Palette keys must be str or int, got {type(key).__name__}")

        if key in self._colors:
            raise ColorValidationError(f"Duplicate palette key: {key!r}")

        self._colors[key] = Color.parse(color)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_hex_colors(cls, hex_colors: Iterable[str]) -> "ColorPalette":
        """Build from hex strings; any malformed entry raises ColorValidationError."""
        return cls([Color.from_hex(value) for value in hex_colors])

    @classmethod
    def from_items(cls, items: Iterable[Tuple[Optional[PaletteKey], ColorLike]]) -> "ColorPalette":
        """Build from (key, color) pairs; a None key takes the next free integer."""
        palette = cls()
        for key, color in items:
            palette._insert(key, color)
        return palette

    @classmethod
    def from_values(cls, values: Union[Iterable[ColorLike], Mapping[PaletteKey, ColorLike]]) -> "ColorPalette":
        """Build from a mix of Colors, hex strings and RGB tuples."""
        return cls(values)

    @classmethod
    def from_color(cls, base: ColorLike, scheme: Any = "monochromatic",
                   options: Optional[Mapping[str, Any]] = None) -> "ColorPalette":
        """Generate a palette from one base color with a named scheme."""
        from .harmony import generate_palette

        return generate_palette(Color.parse(base), scheme, options)

    @classmethod
    def from_image(cls, source: Any, count: int = config.DEFAULT_COUNT, loader: Any = None,
                   extractor: Any = None) -> "ColorPalette":
        """Extract ``count`` dominant colors from an image path, URL, bytes or PixelSource."""
        from .builder import ColorPaletteBuilder

        builder = ColorPaletteBuilder().from_image(source).with_count(count)
        if loader is not None:
            builder.with_loader(loader)
        if extractor is not None:
            builder.with_extractor(extractor)
        return builder.build()

    @classmethod
    def builder(cls):
        from .builder import ColorPaletteBuilder

        return ColorPaletteBuilder()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def colors(self) -> Dict[PaletteKey, Color]:
        """Ordered copy of the key -> Color mapping."""
        return dict(self._colors)

    def keys(self) -> List[PaletteKey]:
        return list(self._colors)

    def count(self) -> int:
        return len(self._colors)

    def is_empty(self) -> bool:
        return not self._colors

    def get(self, key: PaletteKey, default: Optional[Color] = None) -> Optional[Color]:
        return self._colors.get(key, default)

    def to_array(self) -> List[str]:
        """Hex strings in palette order."""
        return [color.to_hex() for color in self._colors.values()]

    def to_dict(self) -> Dict[PaletteKey, str]:
        """Key -> hex string, in palette order."""
        return {key: color.to_hex() for key, color in self._colors.items()}

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(list(self._colors.values()))

    def __getitem__(self, key: PaletteKey) -> Color:
        try:
            return self._colors[key]
        except KeyError:
            raise KeyError(f"No color at palette key {key!r}") from None

    def __contains__(self, key: object) -> bool:
        return key in self._colors

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorPalette):
            return NotImplemented
        return list(self._colors.items()) == list(other._colors.items())

    def __repr__(self) -> str:
        return f"ColorPalette({self.to_dict()!r})"

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggested_text_color(self, background: ColorLike) -> Color:
        """White or black, whichever contrasts more with ``background``."""
        return analysis.suggested_text_color(Color.parse(background))

    def suggested_surface_colors(self) -> Dict[str, Color]:
        """
        Six UI role colors derived from the first two palette colors.

        Returns:
            Mapping with primary, primary_light, primary_dark, secondary,
            secondary_light and secondary_dark. A single-color palette uses its
            complement as secondary; an empty palette yields an empty mapping.
        """
        colors = list(self._colors.values())
        if not colors:
            return {}

        primary = colors[0]
        secondary = colors[1] if len(colors) > 1 else primary.rotate(180)

        return {
            "primary": primary,
            "primary_light": primary.lighten(SURFACE_VARIANT_DELTA),
            "primary_dark": primary.darken(SURFACE_VARIANT_DELTA),
            "secondary": secondary,
            "secondary_light": secondary.lighten(SURFACE_VARIANT_DELTA),
            "secondary_dark": secondary.darken(SURFACE_VARIANT_DELTA),
        }
