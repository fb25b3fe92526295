"""
Semantic UI themes.

ThemeGenerator maps palette colors onto the roles primary, secondary,
accent, background and surface, and pairs each role with an ``on_<role>``
foreground chosen for maximum contrast.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from loguru import logger

from colorpalette.exceptions import ColorValidationError
from . import analysis
from .color import Color, ColorLike
from .palette import ColorPalette

THEME_ROLES = ("primary", "secondary", "accent", "background", "surface")
ON_PREFIX = "on_"

DEFAULT_BACKGROUND = Color(255, 255, 255)
DEFAULT_SURFACE = Color(245, 245, 245)

# Hue offsets used when a palette is too short to fill every role
DEFAULT_SECONDARY_ROTATION = 180
DEFAULT_ACCENT_ROTATION = 120


class Theme:
    """Immutable mapping of role names (and their on_ foregrounds) to colors."""

    def __init__(self, roles: Mapping[str, Color], foregrounds: Optional[Mapping[str, Color]] = None):
        self._roles = MappingProxyType(dict(roles))
        self._foregrounds = MappingProxyType(dict(foregrounds or {}))

    @classmethod
    def from_colors(cls, colors: Mapping[str, ColorLike]) -> "Theme":
        """
        Build a theme from explicit role colors.

        on_ entries are derived for every role that lacks one.

        Raises:
            ColorValidationError: For unknown role names or invalid colors
        """
        roles: Dict[str, Color] = {}
        foregrounds: Dict[str, Color] = {}
        for name, value in colors.items():
            if name.startswith(ON_PREFIX):
                base_role = name[len(ON_PREFIX):]
                _validate_role(base_role)
                foregrounds[name] = Color.parse(value)
            else:
                _validate_role(name)
                roles[name] = Color.parse(value)

        for name, color in roles.items():
            foregrounds.setdefault(ON_PREFIX + name, analysis.suggested_text_color(color))
        return cls(roles, foregrounds)

    def roles(self) -> Dict[str, Color]:
        return dict(self._roles)

    def colors(self) -> Dict[str, Color]:
        """All colors: roles first, then their on_ foregrounds."""
        return {**self._roles, **self._foregrounds}

    def get(self, name: str) -> Color:
        colors = self.colors()
        if name not in colors:
            raise KeyError(f"Theme has no color named {name!r}")
        return colors[name]

    def has(self, name: str) -> bool:
        return name in self._roles or name in self._foregrounds

    def to_array(self) -> Dict[str, str]:
        """Role and on_ names mapped to hex strings."""
        return {name: color.to_hex() for name, color in self.colors().items()}

    def __getitem__(self, name: str) -> Color:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Theme):
            return NotImplemented
        return self.to_array() == other.to_array()

    def __repr__(self) -> str:
        return f"Theme({self.to_array()!r})"


def _validate_role(name: str):
    if name not in THEME_ROLES:
        raise ColorValidationError(
            f"Unknown theme role: {name!r}. Supported: {', '.join(THEME_ROLES)}"
        )


class ThemeGenerator:
    """Derives Theme instances from palettes or single colors."""

    def __init__(self, secondary_rotation: float = DEFAULT_SECONDARY_ROTATION,
                 accent_rotation: float = DEFAULT_ACCENT_ROTATION):
        self.secondary_rotation = secondary_rotation
        self.accent_rotation = accent_rotation

    def _fallback(self, role: str, primary: Color) -> Color:
        if role == "secondary":
            return primary.rotate(self.secondary_rotation)
        if role == "accent":
            return primary.rotate(self.accent_rotation)
        if role == "background":
            return DEFAULT_BACKGROUND
        if role == "surface":
            return DEFAULT_SURFACE
        return primary

    def generate(self, palette: ColorPalette, roles: Sequence[str] = THEME_ROLES) -> Theme:
        """
        Assign palette colors to roles by position.

        Args:
            palette: Source palette, in priority order
            roles: Role names to fill, a duplicate-free subset of THEME_ROLES

        Returns:
            Theme with each role and its on_ foreground

        Raises:
            ColorValidationError: For an empty palette or invalid role list
        """
        if palette.is_empty():
            raise ColorValidationError("Cannot generate a theme from an empty palette")
        if not roles:
            raise ColorValidationError("At least one theme role is required")
        if len(set(roles)) != len(roles):
            raise ColorValidationError(f"Duplicate theme roles: {list(roles)}")
        for role in roles:
            _validate_role(role)

        colors = list(palette)
        primary = colors[0]
        assigned: Dict[str, Color] = {}
        for index, role in enumerate(roles):
            assigned[role] = colors[index] if index < len(colors) else self._fallback(role, primary)

        if len(colors) < len(roles):
            logger.debug(f"Palette has {len(colors)} colors for {len(roles)} roles, using fallbacks")

        foregrounds = {
            ON_PREFIX + role: analysis.suggested_text_color(color)
            for role, color in assigned.items()
        }
        return Theme(assigned, foregrounds)

    def generate_with_options(self, base: ColorLike, secondary_rotation: Optional[float] = None,
                              accent_rotation: Optional[float] = None) -> Theme:
        """Build a full theme from one base color using hue rotations."""
        primary = Color.parse(base)
        secondary = primary.rotate(self.secondary_rotation if secondary_rotation is None else secondary_rotation)
        accent = primary.rotate(self.accent_rotation if accent_rotation is None else accent_rotation)
        palette = ColorPalette([primary, secondary, accent, DEFAULT_BACKGROUND, DEFAULT_SURFACE])
        return self.generate(palette)
