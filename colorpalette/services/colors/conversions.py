"""
Color space conversions.

Pure functions converting between 8-bit sRGB and HSL, HSV, CMYK, CIE XYZ,
CIE L*a*b* and hex notation. Numeric inputs are clamped into their domain
instead of rejected; only hex parsing raises.

Units:
    RGB channels are ints in [0, 255].
    Hue is in degrees [0, 360); saturation, lightness and value are percent.
    CMYK components are percent. XYZ is scaled so the D65 white has Y = 1.0.
"""

import colorsys
import math
import re
from typing import Tuple

import numpy as np

from colorpalette.exceptions import ColorValidationError

# sRGB companding
SRGB_GAMMA_THRESHOLD = 0.04045
SRGB_INVERSE_GAMMA_THRESHOLD = 0.0031308

# D65 reference white
D65_WHITE = (0.95047, 1.0, 1.08883)

# CIE constants (6/29)^3 and (29/3)^3
LAB_EPSILON = 216 / 24389
LAB_KAPPA = 24389 / 27

# sRGB (D65) primaries
RGB_TO_XYZ = np.array([
    [0.4124564390896921, 0.357576077643909, 0.18043748326639894],
    [0.21267285140562253, 0.715152155287818, 0.07217499330655958],
    [0.019333895582329317, 0.119192025881303, 0.9503040785363677],
])
XYZ_TO_RGB = np.array([
    [3.2404542361916533, -1.5371385127253989, -0.4985314095560161],
    [-0.969266030505187, 1.8760108454795392, 0.04155601753034983],
    [0.05564343095911469, -0.2040259135167538, 1.0572251882231791],
])

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def clamp_channel(value: float) -> int:
    """Round and clamp a channel value into [0, 255]."""
    return int(clamp(round(value), 0, 255))


def parse_hex(hex_color: str) -> Tuple[int, int, int]:
    """
    Parse a hex color string.

    Accepts ``#rrggbb``, ``rrggbb`` and the 3-digit shorthand, in any case.

    Args:
        hex_color: Hex color string

    Returns:
        Tuple of (r, g, b) ints in [0, 255]

    Raises:
        ColorValidationError: If the string is empty, has the wrong length or
            contains non-hex characters
    """
    if not isinstance(hex_color, str):
        raise ColorValidationError(f"Hex color must be a string, got {type(hex_color).__name__}")

    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ColorValidationError(f"Invalid hex color format: {hex_color!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def format_hex(r: float, g: float, b: float) -> str:
    """Format RGB channels as a lowercase ``#rrggbb`` string."""
    return f"#{clamp_channel(r):02x}{clamp_channel(g):02x}{clamp_channel(b):02x}"


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert RGB to HSL.

    Returns:
        Tuple of (h, s, l); h in [0, 360), s and l in [0, 100].
        Grayscale inputs yield h = 0 and s = 0.
    """
    h, l, s = colorsys.rgb_to_hls(
        clamp(r, 0, 255) / 255.0,
        clamp(g, 0, 255) / 255.0,
        clamp(b, 0, 255) / 255.0
    )
    return (h * 360.0) % 360.0, s * 100.0, l * 100.0


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """
    Convert HSL to RGB.

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 100].
    """
    hue = (h % 360.0) / 360.0
    sat = clamp(s, 0.0, 100.0) / 100.0
    light = clamp(l, 0.0, 100.0) / 100.0

    r, g, b = colorsys.hls_to_rgb(hue, light, sat)
    return clamp_channel(r * 255), clamp_channel(g * 255), clamp_channel(b * 255)


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert RGB to HSV as (h degrees, s percent, v percent)."""
    h, s, v = colorsys.rgb_to_hsv(
        clamp(r, 0, 255) / 255.0,
        clamp(g, 0, 255) / 255.0,
        clamp(b, 0, 255) / 255.0
    )
    return (h * 360.0) % 360.0, s * 100.0, v * 100.0


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[int, int, int]:
    """Convert HSV (degrees, percent, percent) to RGB."""
    r, g, b = colorsys.hsv_to_rgb(
        (h % 360.0) / 360.0,
        clamp(s, 0.0, 100.0) / 100.0,
        clamp(v, 0.0, 100.0) / 100.0
    )
    return clamp_channel(r * 255), clamp_channel(g * 255), clamp_channel(b * 255)


def rgb_to_hsb(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert RGB to HSB with fractional saturation and brightness in [0, 1]."""
    h, s, v = rgb_to_hsv(r, g, b)
    return h, s / 100.0, v / 100.0


def rgb_to_cmyk(r: int, g: int, b: int) -> Tuple[float, float, float, float]:
    """
    Convert RGB to CMYK percentages.

    Pure black maps to (0, 0, 0, 100).
    """
    rf = clamp(r, 0, 255) / 255.0
    gf = clamp(g, 0, 255) / 255.0
    bf = clamp(b, 0, 255) / 255.0

    k = 1.0 - max(rf, gf, bf)
    if k >= 1.0:
        return 0.0, 0.0, 0.0, 100.0

    c = (1.0 - rf - k) / (1.0 - k)
    m = (1.0 - gf - k) / (1.0 - k)
    y = (1.0 - bf - k) / (1.0 - k)
    return c * 100.0, m * 100.0, y * 100.0, k * 100.0


def cmyk_to_rgb(c: float, m: float, y: float, k: float) -> Tuple[int, int, int]:
    """Convert CMYK percentages to RGB."""
    c, m, y, k = (clamp(v, 0.0, 100.0) / 100.0 for v in (c, m, y, k))
    return (
        clamp_channel(255 * (1 - c) * (1 - k)),
        clamp_channel(255 * (1 - m) * (1 - k)),
        clamp_channel(255 * (1 - y) * (1 - k))
    )


def srgb_to_linear(channel: float) -> float:
    """Linearize one sRGB channel given in [0, 1]."""
    if channel <= SRGB_GAMMA_THRESHOLD:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def linear_to_srgb(channel: float) -> float:
    """Gamma-encode one linear channel, clamped to [0, 1]."""
    channel = clamp(channel, 0.0, 1.0)
    if channel <= SRGB_INVERSE_GAMMA_THRESHOLD:
        return channel * 12.92
    return 1.055 * channel ** (1 / 2.4) - 0.055


def rgb_to_xyz(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert RGB to CIE XYZ (D65)."""
    linear = np.array([srgb_to_linear(clamp(v, 0, 255) / 255.0) for v in (r, g, b)])
    x, y, z = RGB_TO_XYZ @ linear
    return float(x), float(y), float(z)


def xyz_to_rgb(x: float, y: float, z: float) -> Tuple[int, int, int]:
    """Convert CIE XYZ (D65) to RGB, clamping out-of-gamut values."""
    linear = XYZ_TO_RGB @ np.array([x, y, z], dtype=float)
    return tuple(clamp_channel(linear_to_srgb(float(v)) * 255) for v in linear)


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1 / 3)
    return (LAB_KAPPA * t + 16) / 116


def _lab_f_inv(f: float) -> float:
    cube = f ** 3
    if cube > LAB_EPSILON:
        return cube
    return (116 * f - 16) / LAB_KAPPA


def xyz_to_lab(x: float, y: float, z: float) -> Tuple[float, float, float]:
    """Convert CIE XYZ to CIE L*a*b* against the D65 white."""
    xn, yn, zn = D65_WHITE
    fx, fy, fz = _lab_f(x / xn), _lab_f(y / yn), _lab_f(z / zn)
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def lab_to_xyz(l: float, a: float, b: float) -> Tuple[float, float, float]:
    """Convert CIE L*a*b* to CIE XYZ against the D65 white."""
    xn, yn, zn = D65_WHITE
    fy = (l + 16) / 116
    fx = fy + a / 500
    fz = fy - b / 200

    # L* below the linear segment maps Y directly
    if l > LAB_KAPPA * LAB_EPSILON:
        y = fy ** 3
    else:
        y = l / LAB_KAPPA

    return _lab_f_inv(fx) * xn, y * yn, _lab_f_inv(fz) * zn


def rgb_to_lab(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert RGB to CIE L*a*b*."""
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


def lab_to_rgb(l: float, a: float, b: float) -> Tuple[int, int, int]:
    """Convert CIE L*a*b* to RGB, clamping out-of-gamut values."""
    return xyz_to_rgb(*lab_to_xyz(clamp(l, 0.0, 100.0), a, b))


def rgb_array_to_lab(rgb: np.ndarray) -> np.ndarray:
    """
    Vectorized RGB -> L*a*b* conversion.

    Args:
        rgb: Array of shape (N, 3) with channels in [0, 255]

    Returns:
        Float array of shape (N, 3) holding (L, a, b) rows
    """
    srgb = np.clip(np.asarray(rgb, dtype=np.float64).reshape(-1, 3), 0, 255) / 255.0
    linear = np.where(
        srgb <= SRGB_GAMMA_THRESHOLD,
        srgb / 12.92,
        ((srgb + 0.055) / 1.055) ** 2.4
    )
    xyz = linear @ RGB_TO_XYZ.T / np.array(D65_WHITE)
    f = np.where(xyz > LAB_EPSILON, np.cbrt(xyz), (LAB_KAPPA * xyz + 16) / 116)

    lab = np.empty_like(f)
    lab[:, 0] = 116 * f[:, 1] - 16
    lab[:, 1] = 500 * (f[:, 0] - f[:, 1])
    lab[:, 2] = 200 * (f[:, 1] - f[:, 2])
    return lab


def normalize_hue(hue: float) -> float:
    """Wrap a hue in degrees into [0, 360)."""
    if not math.isfinite(hue):
        raise ColorValidationError(f"Hue must be a finite number, got {hue}")
    return hue % 360.0
