"""
Fluent builder for ColorPalette.

Inputs accumulate through chained setters; ``build()`` resolves them by
strict priority: manual colors, then an image source, then a base color
with a scheme, else an empty palette.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from loguru import logger

from colorpalette.config import config
from colorpalette.exceptions import ColorValidationError
from ..imaging import ImageLoader
from .color import Color, ColorLike
from .extraction import ColorExtractor
from .harmony import PaletteScheme, generate_palette, get_count_option, resolve_scheme
from .palette import ColorPalette, PaletteKey

CustomScheme = Callable[[Color, Mapping[str, Any]], ColorPalette]


class ColorPaletteBuilder:
    """Mutable accumulator producing independent ColorPalette instances. Not thread-safe."""

    def __init__(self):
        self._colors: List[Tuple[Optional[PaletteKey], Color]] = []
        self._image_source: Any = None
        self._count: int = config.DEFAULT_COUNT
        self._base_color: Optional[Color] = None
        self._scheme: Union[PaletteScheme, CustomScheme, None] = None
        self._options: dict = {}
        self._loader: Optional[ImageLoader] = None
        self._extractor: Optional[ColorExtractor] = None

    @classmethod
    def create(cls) -> "ColorPaletteBuilder":
        return cls()

    def add_color(self, color: ColorLike, key: Optional[PaletteKey] = None) -> "ColorPaletteBuilder":
        """Append one color, optionally under a key."""
        self._colors.append((key, Color.parse(color)))
        return self

    def add_colors(self, colors: Union[Iterable[ColorLike], Mapping[PaletteKey, ColorLike]]) -> "ColorPaletteBuilder":
        """Append several colors; a mapping contributes its keys."""
        if isinstance(colors, Mapping):
            for key, color in colors.items():
                self.add_color(color, key)
        else:
            for color in colors:
                self.add_color(color)
        return self

    def from_image(self, source: Any) -> "ColorPaletteBuilder":
        """Use an image path, URL, bytes or PixelSource as input."""
        self._image_source = source
        return self

    def with_count(self, count: int) -> "ColorPaletteBuilder":
        """Set the size for image extraction and counted schemes."""
        self._count = get_count_option({"count": count})
        return self

    def with_base_color(self, color: ColorLike) -> "ColorPaletteBuilder":
        self._base_color = Color.parse(color)
        return self

    def with_scheme(self, scheme: Union[str, PaletteScheme, CustomScheme],
                    options: Optional[Mapping[str, Any]] = None) -> "ColorPaletteBuilder":
        """
        Select a generation scheme.

        Args:
            scheme: Scheme name, PaletteScheme member or a callable
                ``(base, options) -> ColorPalette``
            options: Scheme options; ``count`` here overrides ``with_count``

        Raises:
            ColorValidationError: For an unknown scheme name, an unsupported
                scheme type or an invalid ``count`` option
        """
        if isinstance(scheme, (str, PaletteScheme)):
            scheme = resolve_scheme(scheme)
        elif not callable(scheme):
            raise ColorValidationError(f"Unsupported scheme: {scheme!r}")
        get_count_option(options)
        self._scheme = scheme
        self._options = dict(options or {})
        return self

    def with_loader(self, loader: ImageLoader) -> "ColorPaletteBuilder":
        self._loader = loader
        return self

    def with_extractor(self, extractor: ColorExtractor) -> "ColorPaletteBuilder":
        self._extractor = extractor
        return self

    def build(self) -> ColorPalette:
        """
        Produce a palette from the highest-priority input present.

        Raises:
            ColorValidationError: For duplicate palette keys
            UnsupportedSourceError: If the image source cannot be loaded
        """
        if self._colors:
            logger.debug(f"Building palette from {len(self._colors)} manual colors")
            return ColorPalette.from_items(list(self._colors))

        if self._image_source is not None:
            return self._build_from_image()

        if self._base_color is not None and self._scheme is not None:
            options = {"count": self._count, **self._options}
            if isinstance(self._scheme, PaletteScheme):
                return generate_palette(self._base_color, self._scheme, options)
            return self._scheme(self._base_color, options)

        return ColorPalette()

    def _build_from_image(self) -> ColorPalette:
        source = self._image_source
        if not hasattr(source, "to_array"):
            loader = self._loader or ImageLoader()
            source = loader.load(source)

        extractor = self._extractor or ColorExtractor()
        return extractor.extract(source, self._count)
