"""
colorpalette API Schemas
Pydantic models for palette, theme and accessibility request/response validation.
"""
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

HEX_PATTERN = r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$"


class RGBModel(BaseModel):
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class HSLModel(BaseModel):
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation percent")
    l: int = Field(..., ge=0, le=100, description="Lightness percent")


class ColorInfo(BaseModel):
    """Full description of one color."""
    model_config = ConfigDict(populate_by_name=True)

    hex: str = Field(..., pattern=r"^#[0-9a-f]{6}$", description="Lowercase #rrggbb")
    rgb: RGBModel
    hsl: HSLModel
    brightness: float = Field(..., ge=0, le=255, description="Perceived brightness")
    is_light: bool = Field(..., alias="isLight")
    is_dark: bool = Field(..., alias="isDark")
    key: Optional[Union[str, int]] = Field(None, description="Palette key for keyed palettes")


class WCAGLevel(BaseModel):
    normal: bool
    large: bool


class WCAGReport(BaseModel):
    aa: WCAGLevel
    aaa: WCAGLevel


class GenerateRequest(BaseModel):
    """Generate a palette from one base color."""
    color: str = Field(..., pattern=HEX_PATTERN, description="Base color as hex")
    scheme: str = Field("monochromatic", description="Palette scheme name")
    count: int = Field(5, ge=1, le=50, description="Size for monochromatic, shades and tints")


class GenerateResponse(BaseModel):
    success: bool = True
    scheme: str
    colors: List[ColorInfo]


class ManipulateRequest(BaseModel):
    """Apply one named manipulation to a color."""
    color: str = Field(..., pattern=HEX_PATTERN)
    operation: str = Field(..., description="lighten, darken, saturate, desaturate or rotate")
    amount: float = Field(0.1, allow_inf_nan=False, description="Fraction for HSL shifts, degrees for rotate")


class ManipulateResponse(BaseModel):
    success: bool = True
    original: ColorInfo
    result: ColorInfo


class ContrastRequest(BaseModel):
    background: str = Field(..., pattern=HEX_PATTERN)
    text: str = Field(..., pattern=HEX_PATTERN)


class ContrastResponse(BaseModel):
    """Accessibility report for a background/text pair."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    contrast_ratio: float = Field(..., ge=1.0, alias="contrastRatio")
    wcag: WCAGReport
    suggested_text_color: str = Field(..., alias="suggestedTextColor")


class ExtractResponse(BaseModel):
    success: bool = True
    count: int
    colors: List[ColorInfo]
    theme: Dict[str, ColorInfo] = Field(..., description="Suggested surface colors")


class ThemeRequest(BaseModel):
    """Build a theme from a palette or from a single base color."""
    colors: Optional[List[str]] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=HEX_PATTERN)
    secondary_rotation: float = Field(180, allow_inf_nan=False, description="Hue offset of secondary when using color")
    accent_rotation: float = Field(120, allow_inf_nan=False, description="Hue offset of accent when using color")


class ThemeResponse(BaseModel):
    success: bool = True
    theme: Dict[str, str]


class SchemesResponse(BaseModel):
    schemes: List[str]
    counted: List[str] = Field(..., description="Schemes whose size follows count")


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("colorpalette", description="Service name")

