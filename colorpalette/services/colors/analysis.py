"""
Color analysis: perceived brightness, WCAG luminance and contrast, CIE76
color difference and coarse classification (vibrant, muted, warm, cool).
"""

import math
from typing import TYPE_CHECKING, Dict, Optional, Sequence, Tuple

import cv2
import numpy as np

from .conversions import rgb_to_lab

if TYPE_CHECKING:
    from .color import Color

# Perceived brightness threshold separating light (>=) from dark (<)
BRIGHTNESS_THRESHOLD = 128

# WCAG 2.x channel linearization
LUMINANCE_THRESHOLD = 0.03928
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)

# WCAG contrast requirements
WCAG_AA_NORMAL = 4.5
WCAG_AA_LARGE = 3.0
WCAG_AAA_NORMAL = 7.0
WCAG_AAA_LARGE = 4.5

# Classification bands (HSL percent / degrees)
VIBRANT_MIN_SATURATION = 70
VIBRANT_LIGHTNESS_BAND = (30, 70)
MUTED_MAX_SATURATION = 40
WARM_HUE_END = 90
COOL_HUE_END = 270


def brightness(color: "Color") -> float:
    """Perceived brightness (299r + 587g + 114b) / 1000 in [0, 255]."""
    return (color.r * 299 + color.g * 587 + color.b * 114) / 1000


def is_light(color: "Color") -> bool:
    return brightness(color) >= BRIGHTNESS_THRESHOLD


def is_dark(color: "Color") -> bool:
    return not is_light(color)


def _linearize(channel: int) -> float:
    c = channel / 255.0
    if c <= LUMINANCE_THRESHOLD:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: "Color") -> float:
    """WCAG relative luminance in [0, 1]."""
    wr, wg, wb = LUMINANCE_WEIGHTS
    return wr * _linearize(color.r) + wg * _linearize(color.g) + wb * _linearize(color.b)


def contrast_ratio(color: "Color", other: "Color") -> float:
    """
    WCAG contrast ratio between two colors.

    Symmetric, in [1, 21]; identical colors give exactly 1.
    """
    l1 = relative_luminance(color)
    l2 = relative_luminance(other)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def delta_e(color: "Color", other: "Color") -> float:
    """CIE76 color difference: Euclidean distance in L*a*b*."""
    l1, a1, b1 = rgb_to_lab(color.r, color.g, color.b)
    l2, a2, b2 = rgb_to_lab(other.r, other.g, other.b)
    return math.sqrt((l1 - l2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2)


def rgb_distance(color: "Color", other: "Color") -> float:
    """Euclidean distance in RGB space."""
    return math.sqrt((color.r - other.r) ** 2 + (color.g - other.g) ** 2 + (color.b - other.b) ** 2)


def is_vibrant(color: "Color") -> bool:
    _, s, l = color.hsl
    low, high = VIBRANT_LIGHTNESS_BAND
    return s >= VIBRANT_MIN_SATURATION and low <= l <= high


def is_muted(color: "Color") -> bool:
    return color.hsl[1] < MUTED_MAX_SATURATION


def is_warm(color: "Color") -> bool:
    """Hue in [0, 90) or (270, 360)."""
    h = color.hsl[0]
    return h < WARM_HUE_END or h > COOL_HUE_END


def is_cool(color: "Color") -> bool:
    """Hue in [90, 270]."""
    return not is_warm(color)


def meets_wcag_aa(color: "Color", other: "Color", large_text: bool = False) -> bool:
    required = WCAG_AA_LARGE if large_text else WCAG_AA_NORMAL
    return contrast_ratio(color, other) >= required


def meets_wcag_aaa(color: "Color", other: "Color", large_text: bool = False) -> bool:
    required = WCAG_AAA_LARGE if large_text else WCAG_AAA_NORMAL
    return contrast_ratio(color, other) >= required


def wcag_report(color: "Color", other: "Color") -> Dict[str, Dict[str, bool]]:
    """Pass/fail of a color pair against all four WCAG levels."""
    ratio = contrast_ratio(color, other)
    return {
        "aa": {"normal": ratio >= WCAG_AA_NORMAL, "large": ratio >= WCAG_AA_LARGE},
        "aaa": {"normal": ratio >= WCAG_AAA_NORMAL, "large": ratio >= WCAG_AAA_LARGE},
    }


def suggested_text_color(background: "Color",
                         candidates: Optional[Sequence["Color"]] = None) -> "Color":
    """
    Pick the foreground with the highest contrast against a background.

    Args:
        background: Background color
        candidates: Foreground options, black then white when omitted

    Returns:
        The candidate with the highest contrast ratio; ties keep the earlier one
    """
    if not candidates:
        cls = type(background)
        candidates = (cls(0, 0, 0), cls(255, 255, 255))

    best = candidates[0]
    best_ratio = contrast_ratio(background, best)
    for candidate in candidates[1:]:
        ratio = contrast_ratio(background, candidate)
        if ratio > best_ratio:
            best, best_ratio = candidate, ratio
    return best


def saturation_value_arrays(rgb_u8: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized HSV saturation and value for many colors.

    Args:
        rgb_u8: Array of shape (N, 3) uint8 RGB

    Returns:
        Tuple of (saturation, value) float arrays in [0, 1]
    """
    pixels = np.ascontiguousarray(rgb_u8, dtype=np.uint8).reshape(-1, 1, 3)
    if pixels.shape[0] == 0:
        empty = np.zeros(0, dtype=np.float32)
        return empty, empty
    hsv = cv2.cvtColor(pixels, cv2.COLOR_RGB2HSV).reshape(-1, 3).astype(np.float32)
    return hsv[:, 1] / 255.0, hsv[:, 2] / 255.0
