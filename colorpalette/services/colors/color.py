"""
Immutable sRGB color value.

A Color stores only its three 8-bit channels. Every other representation is
derived on demand; the rounded HSL triple is memoized per instance because
all HSL manipulations start from it.
"""

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from colorpalette.exceptions import ColorValidationError
from . import analysis, manipulation
from .conversions import (
    cmyk_to_rgb, format_hex, hsl_to_rgb, hsv_to_rgb, lab_to_rgb, normalize_hue,
    parse_hex, rgb_to_cmyk, rgb_to_hsl, rgb_to_hsv, rgb_to_lab, rgb_to_xyz
)

ColorLike = Union["Color", str, Sequence[int], Mapping[str, int]]


def _check_range(name: str, value: Any, low: float, high: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ColorValidationError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or not low <= value <= high:
        raise ColorValidationError(f"{name} must be between {low} and {high}, got {value}")
    return float(value)


@dataclass(frozen=True)
class Color:
    """An sRGB color with integer channels in [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ColorValidationError(
                    f"Channel {name} must be an integer, got {type(value).__name__}"
                )
            if not 0 <= value <= 255:
                raise ColorValidationError(f"Channel {name} must be between 0 and 255, got {value}")
            # numpy integers are normalized to plain ints
            object.__setattr__(self, name, int(value))

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        """Parse ``#rrggbb``, ``rrggbb`` or 3-digit shorthand."""
        return cls(*parse_hex(hex_color))

    @classmethod
    def from_rgb(cls, rgb: Union[Mapping[str, int], Sequence[int]]) -> "Color":
        """
        Build from a mapping with r/g/b keys or a 3-item sequence.

        Missing mapping keys default to 0.
        """
        if isinstance(rgb, Mapping):
            return cls(rgb.get("r", 0), rgb.get("g", 0), rgb.get("b", 0))
        if isinstance(rgb, (str, bytes)) or len(rgb) != 3:
            raise ColorValidationError(f"RGB sequence must have exactly 3 items, got {rgb!r}")
        return cls(*rgb)

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float) -> "Color":
        """Build from hue (degrees, wrapped), saturation and lightness (0-100)."""
        hue = _check_range("hue", h, -math.inf, math.inf)
        return cls(*hsl_to_rgb(
            normalize_hue(hue),
            _check_range("saturation", s, 0, 100),
            _check_range("lightness", l, 0, 100)
        ))

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> "Color":
        """Build from hue (degrees, wrapped), saturation and value (0-100)."""
        hue = _check_range("hue", h, -math.inf, math.inf)
        return cls(*hsv_to_rgb(
            normalize_hue(hue),
            _check_range("saturation", s, 0, 100),
            _check_range("value", v, 0, 100)
        ))

    @classmethod
    def from_cmyk(cls, c: float, m: float, y: float, k: float) -> "Color":
        """Build from CMYK percentages."""
        return cls(*cmyk_to_rgb(
            _check_range("cyan", c, 0, 100),
            _check_range("magenta", m, 0, 100),
            _check_range("yellow", y, 0, 100),
            _check_range("key", k, 0, 100)
        ))

    @classmethod
    def from_lab(cls, l: float, a: float, b: float) -> "Color":
        """Build from CIE L*a*b*; out-of-gamut results are clamped to sRGB."""
        return cls(*lab_to_rgb(
            _check_range("L", l, 0, 100),
            _check_range("a", a, -128, 127),
            _check_range("b", b, -128, 127)
        ))

    @classmethod
    def parse(cls, value: ColorLike) -> "Color":
        """Coerce a Color, hex string, RGB sequence or r/g/b mapping."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (Mapping, Sequence)):
            return cls.from_rgb(value)
        raise ColorValidationError(f"Cannot interpret {value!r} as a color")

    # ------------------------------------------------------------------
    # Representations
    # ------------------------------------------------------------------

    @cached_property
    def hsl(self) -> Tuple[int, int, int]:
        """Rounded (h, s, l); h in [0, 360), s and l in [0, 100]."""
        h, s, l = rgb_to_hsl(self.r, self.g, self.b)
        return round(h) % 360, round(s), round(l)

    def to_hex(self) -> str:
        return format_hex(self.r, self.g, self.b)

    def to_rgb(self) -> Dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}

    def to_hsl(self) -> Dict[str, int]:
        h, s, l = self.hsl
        return {"h": h, "s": s, "l": l}

    def to_hsv(self) -> Dict[str, int]:
        h, s, v = rgb_to_hsv(self.r, self.g, self.b)
        return {"h": round(h) % 360, "s": round(s), "v": round(v)}

    def to_cmyk(self) -> Dict[str, int]:
        c, m, y, k = rgb_to_cmyk(self.r, self.g, self.b)
        return {"c": round(c), "m": round(m), "y": round(y), "k": round(k)}

    def to_lab(self) -> Dict[str, float]:
        l, a, b = rgb_to_lab(self.r, self.g, self.b)
        return {"l": round(l, 2), "a": round(a, 2), "b": round(b, 2)}

    def to_xyz(self) -> Dict[str, float]:
        x, y, z = rgb_to_xyz(self.r, self.g, self.b)
        return {"x": x, "y": y, "z": z}

    def to_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_info(self) -> Dict[str, Any]:
        """Color info record used by the JSON API."""
        return {
            "hex": self.to_hex(),
            "rgb": self.to_rgb(),
            "hsl": self.to_hsl(),
            "brightness": self.brightness(),
            "isLight": self.is_light(),
            "isDark": self.is_dark(),
        }

    def __str__(self) -> str:
        return self.to_hex()

    # ------------------------------------------------------------------
    # Manipulation
    # ------------------------------------------------------------------

    def lighten(self, amount: float) -> "Color":
        return manipulation.lighten(self, amount)

    def darken(self, amount: float) -> "Color":
        return manipulation.darken(self, amount)

    def saturate(self, amount: float) -> "Color":
        return manipulation.saturate(self, amount)

    def desaturate(self, amount: float) -> "Color":
        return manipulation.desaturate(self, amount)

    def rotate(self, degrees: float) -> "Color":
        return manipulation.rotate(self, degrees)

    def mix(self, other: ColorLike, weight: float = 0.5) -> "Color":
        return manipulation.mix(self, Color.parse(other), weight)

    def with_lightness(self, lightness: float) -> "Color":
        return manipulation.with_lightness(self, lightness)

    def with_saturation(self, saturation: float) -> "Color":
        return manipulation.with_saturation(self, saturation)

    def with_hue(self, hue: float) -> "Color":
        return manipulation.with_hue(self, hue)

    def invert(self) -> "Color":
        return manipulation.invert(self)

    def grayscale(self) -> "Color":
        return manipulation.grayscale(self)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def brightness(self) -> float:
        return analysis.brightness(self)

    def is_light(self) -> bool:
        return analysis.is_light(self)

    def is_dark(self) -> bool:
        return analysis.is_dark(self)

    def luminance(self) -> float:
        return analysis.relative_luminance(self)

    def contrast(self, other: ColorLike) -> float:
        return analysis.contrast_ratio(self, Color.parse(other))

    def delta_e(self, other: ColorLike) -> float:
        return analysis.delta_e(self, Color.parse(other))

    def is_vibrant(self) -> bool:
        return analysis.is_vibrant(self)

    def is_muted(self) -> bool:
        return analysis.is_muted(self)

    def is_warm(self) -> bool:
        return analysis.is_warm(self)

    def is_cool(self) -> bool:
        return analysis.is_cool(self)

    def suggested_text_color(self, candidates: Optional[Iterable[ColorLike]] = None) -> "Color":
        """Black or white (or the best of ``candidates``) for text on this color."""
        options = [Color.parse(c) for c in candidates] if candidates else None
        return analysis.suggested_text_color(self, options)


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
