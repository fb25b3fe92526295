"""
Color manipulation in HSL space.

Every function takes a Color and returns a new Color of the same type; the
input is never modified. Amounts are fractions where 0.2 means 20 percentage
points. Results are clamped; a non-finite hue angle raises
ColorValidationError.
"""

from typing import TYPE_CHECKING, Callable, Dict

from colorpalette.exceptions import ColorValidationError
from .conversions import clamp, hsl_to_rgb, normalize_hue

if TYPE_CHECKING:
    from .color import Color


def _from_hsl(color: "Color", h: float, s: float, l: float) -> "Color":
    return type(color)(*hsl_to_rgb(h, s, l))


def _adjust(color: "Color", ds: float = 0.0, dl: float = 0.0) -> "Color":
    h, s, l = color.hsl
    return _from_hsl(color, h, clamp(s + ds * 100, 0, 100), clamp(l + dl * 100, 0, 100))


def lighten(color: "Color", amount: float) -> "Color":
    """Raise lightness by ``amount * 100`` points."""
    return _adjust(color, dl=amount)


def darken(color: "Color", amount: float) -> "Color":
    """Lower lightness by ``amount * 100`` points."""
    return _adjust(color, dl=-amount)


def saturate(color: "Color", amount: float) -> "Color":
    """Raise saturation by ``amount * 100`` points."""
    return _adjust(color, ds=amount)


def desaturate(color: "Color", amount: float) -> "Color":
    """Lower saturation by ``amount * 100`` points."""
    return _adjust(color, ds=-amount)


def rotate(color: "Color", degrees: float) -> "Color":
    """Rotate hue by degrees; negative rotations wrap forward."""
    h, s, l = color.hsl
    return _from_hsl(color, normalize_hue(h + degrees), s, l)


def with_lightness(color: "Color", lightness: float) -> "Color":
    """Set lightness to ``lightness * 100`` percent, keeping hue and saturation."""
    h, s, _ = color.hsl
    return _from_hsl(color, h, s, clamp(lightness * 100, 0, 100))


def with_saturation(color: "Color", saturation: float) -> "Color":
    """Set saturation to ``saturation * 100`` percent, keeping hue and lightness."""
    h, _, l = color.hsl
    return _from_hsl(color, h, clamp(saturation * 100, 0, 100), l)


def with_hue(color: "Color", hue: float) -> "Color":
    """Set hue to an absolute angle in degrees."""
    _, s, l = color.hsl
    return _from_hsl(color, normalize_hue(hue), s, l)


def mix(color: "Color", other: "Color", weight: float = 0.5) -> "Color":
    """
    Blend two colors channel-wise in RGB space.

    Args:
        color: Color weighted by ``weight``
        other: Color weighted by ``1 - weight``
        weight: Share of ``color`` in the blend, clamped to [0, 1]

    Returns:
        New color; weight 1 reproduces ``color`` and weight 0 reproduces ``other``
    """
    w = clamp(weight, 0.0, 1.0)
    return type(color)(
        round(color.r * w + other.r * (1 - w)),
        round(color.g * w + other.g * (1 - w)),
        round(color.b * w + other.b * (1 - w))
    )


def invert(color: "Color") -> "Color":
    """Channel-wise RGB inverse."""
    return type(color)(255 - color.r, 255 - color.g, 255 - color.b)


def grayscale(color: "Color") -> "Color":
    """Drop all saturation, keeping hue and lightness."""
    return with_saturation(color, 0)


OPERATIONS: Dict[str, Callable[["Color", float], "Color"]] = {
    "lighten": lighten,
    "darken": darken,
    "saturate": saturate,
    "desaturate": desaturate,
    "rotate": rotate,
}


def apply_operation(color: "Color", operation: str, amount: float) -> "Color":
    """
    Apply a named manipulation.

    Raises:
        ColorValidationError: If the operation name is unknown
    """
    func = OPERATIONS.get(str(operation).strip().lower())
    if func is None:
        raise ColorValidationError(
            f"Unknown manipulation operation: {operation!r}. "
            f"Supported: {', '.join(OPERATIONS)}"
        )
    return func(color, amount)
