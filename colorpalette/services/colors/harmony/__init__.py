"""
Palette generation from a single base color.

Implements the classic color-wheel harmonies (complementary, analogous,
triadic, tetradic, split-complementary), lightness ramps (monochromatic,
shades, tints), fixed-tone pentads (pastel, vibrant) and a keyed website
theme. Each scheme is a pure function ``(base, options) -> ColorPalette``
registered in ``SCHEME_GENERATORS``.
"""

import re
from enum import Enum
from numbers import Integral, Real
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loguru import logger

from colorpalette.config import config
from colorpalette.exceptions import ColorValidationError
from ..color import Color
from ..palette import ColorPalette


class PaletteScheme(str, Enum):
    """Supported palette generation schemes."""
    MONOCHROMATIC = "monochromatic"
    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    SPLIT_COMPLEMENTARY = "split-complementary"
    SHADES = "shades"
    TINTS = "tints"
    PASTEL = "pastel"
    VIBRANT = "vibrant"
    WEBSITE_THEME = "website-theme"


SchemeGenerator = Callable[[Color, Mapping[str, Any]], ColorPalette]

# Total lightness travel of the monochromatic/shades/tints ramps
LIGHTNESS_SPAN = 0.8

# Pentad hue spacing for pastel and vibrant
PENTAD_HUE_STEP = 72
PENTAD_SIZE = 5

# (saturation, lightness) of the fixed-tone pentads
PASTEL_TONE = (25, 90)
VIBRANT_TONE = (100, 50)

ANALOGOUS_ANGLE = 30
SPLIT_COMPLEMENTARY_ANGLE = 150


def get_count_option(options: Optional[Mapping[str, Any]], default: int = config.DEFAULT_COUNT) -> int:
    """
    Read and validate the ``count`` option.

    Args:
        options: Strategy options, may be None
        default: Value used when ``count`` is absent

    Returns:
        Validated count in [MIN_COUNT, MAX_COUNT]

    Raises:
        ColorValidationError: If count is not an integer or is out of bounds
    """
    if not options or options.get("count") is None:
        return default

    count = options["count"]
    if isinstance(count, bool) or not isinstance(count, Real):
        raise ColorValidationError(f"count must be an integer, got {count!r}")
    if not isinstance(count, Integral):
        if not float(count).is_integer():
            raise ColorValidationError(f"count must be an integer, got {count!r}")
    count = int(count)

    if not config.validate_count(count):
        raise ColorValidationError(
            f"count must be between {config.MIN_COUNT} and {config.MAX_COUNT}, got {count}"
        )
    return count


def _ramp_step(count: int) -> float:
    """Per-step lightness fraction; a single color has no ramp."""
    return LIGHTNESS_SPAN / (count - 1) if count > 1 else 0.0


def generate_monochromatic(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """Base color followed by lighter versions of the same hue."""
    count = get_count_option(options)
    step = _ramp_step(count)
    lightness = base.hsl[2]

    colors = [base]
    for i in range(1, count):
        colors.append(base.with_lightness((lightness + step * i * 100) / 100))
    return ColorPalette(colors)


def generate_complementary(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    return ColorPalette([base, base.rotate(180)])


def generate_analogous(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    return ColorPalette([base.rotate(-ANALOGOUS_ANGLE), base, base.rotate(ANALOGOUS_ANGLE)])


def generate_triadic(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    return ColorPalette([base, base.rotate(120), base.rotate(240)])


def generate_tetradic(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    return ColorPalette([base, base.rotate(90), base.rotate(180), base.rotate(270)])


def generate_split_complementary(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """Base plus the two neighbours of its complement."""
    return ColorPalette([
        base,
        base.rotate(SPLIT_COMPLEMENTARY_ANGLE),
        base.rotate(360 - SPLIT_COMPLEMENTARY_ANGLE)
    ])


def generate_shades(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """Base color followed by progressively darker versions."""
    count = get_count_option(options)
    step = _ramp_step(count)
    return ColorPalette([base] + [base.darken(step * i) for i in range(1, count)])


def generate_tints(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """Base color followed by progressively lighter versions."""
    count = get_count_option(options)
    step = _ramp_step(count)
    return ColorPalette([base] + [base.lighten(step * i) for i in range(1, count)])


def _pentad(base: Color, saturation: float, lightness: float) -> ColorPalette:
    hue = base.hsl[0]
    return ColorPalette([
        Color.from_hsl((hue + PENTAD_HUE_STEP * i) % 360, saturation, lightness)
        for i in range(PENTAD_SIZE)
    ])


def generate_pastel(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """Five evenly spaced hues at low saturation and high lightness."""
    return _pentad(base, *PASTEL_TONE)


def generate_vibrant(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """Five evenly spaced hues at full saturation and mid lightness."""
    return _pentad(base, *VIBRANT_TONE)


def generate_website_theme(base: Color, options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """
    Keyed palette for a simple website.

    Returns:
        Palette keyed primary, secondary, accent, background and surface
    """
    return ColorPalette({
        "primary": base,
        "secondary": base.rotate(30).desaturate(0.2),
        "accent": base.rotate(180).saturate(0.2),
        "background": Color.from_hsl(0, 0, 98),
        "surface": Color.from_hsl(0, 0, 100),
    })


SCHEME_GENERATORS: Dict[PaletteScheme, SchemeGenerator] = {
    PaletteScheme.MONOCHROMATIC: generate_monochromatic,
    PaletteScheme.COMPLEMENTARY: generate_complementary,
    PaletteScheme.ANALOGOUS: generate_analogous,
    PaletteScheme.TRIADIC: generate_triadic,
    PaletteScheme.TETRADIC: generate_tetradic,
    PaletteScheme.SPLIT_COMPLEMENTARY: generate_split_complementary,
    PaletteScheme.SHADES: generate_shades,
    PaletteScheme.TINTS: generate_tints,
    PaletteScheme.PASTEL: generate_pastel,
    PaletteScheme.VIBRANT: generate_vibrant,
    PaletteScheme.WEBSITE_THEME: generate_website_theme,
}

# Schemes whose size follows the count option
COUNTED_SCHEMES = {PaletteScheme.MONOCHROMATIC, PaletteScheme.SHADES, PaletteScheme.TINTS}

_SCHEME_ALIASES = {scheme.value.replace("-", ""): scheme for scheme in PaletteScheme}


def resolve_scheme(scheme: Union[str, PaletteScheme]) -> PaletteScheme:
    """
    Resolve a scheme name, ignoring case, hyphens, underscores and spaces.

    Raises:
        ColorValidationError: If the name matches no scheme
    """
    if isinstance(scheme, PaletteScheme):
        return scheme
    if not isinstance(scheme, str):
        raise ColorValidationError(f"Scheme must be a string, got {type(scheme).__name__}")

    normalized = re.sub(r"[-_\s]", "", scheme.lower())
    try:
        return _SCHEME_ALIASES[normalized]
    except KeyError:
        raise ColorValidationError(
            f"Unknown palette scheme: {scheme!r}. Supported: {', '.join(available_schemes())}"
        ) from None


def available_schemes() -> List[str]:
    return [scheme.value for scheme in PaletteScheme]


def generate_palette(base: Color, scheme: Union[str, PaletteScheme] = PaletteScheme.MONOCHROMATIC,
                     options: Optional[Mapping[str, Any]] = None) -> ColorPalette:
    """
    Generate a palette from a base color.

    Args:
        base: Base color
        scheme: Scheme name or PaletteScheme member
        options: Strategy options; only ``count`` is read, and only by
            monochromatic, shades and tints

    Returns:
        Generated ColorPalette

    Raises:
        ColorValidationError: For an unknown scheme or an invalid count
    """
    resolved = resolve_scheme(scheme)
    palette = SCHEME_GENERATORS[resolved](base, options or {})
    logger.debug(f"Generated {resolved.value} palette of {palette.count()} colors from {base.to_hex()}")
    return palette
