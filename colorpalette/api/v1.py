"""
colorpalette v1 API Routes
Extraction, palette generation, manipulation, contrast and theme endpoints.
"""
from typing import Optional, Union

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from colorpalette.config import Config
from colorpalette.exceptions import ColorValidationError, UnsupportedSourceError
from colorpalette.schemas import (
    ColorInfo, ContrastRequest, ContrastResponse, ExtractResponse, GenerateRequest,
    GenerateResponse, ManipulateRequest, ManipulateResponse, SchemesResponse,
    ThemeRequest, ThemeResponse
)
from colorpalette.services.colors import analysis
from colorpalette.services.colors.builder import ColorPaletteBuilder
from colorpalette.services.colors.color import Color
from colorpalette.services.colors.harmony import (
    COUNTED_SCHEMES, PaletteScheme, available_schemes, generate_palette, resolve_scheme
)
from colorpalette.services.colors.manipulation import apply_operation
from colorpalette.services.colors.palette import ColorPalette
from colorpalette.services.colors.theme import ThemeGenerator
from colorpalette.services.imaging import ImageLoader
from colorpalette.utils.ids import generate_request_id
from colorpalette.utils.logging import get_logger, log_request
from colorpalette.utils.metrics import get_metrics, performance_monitor

config = Config()
router = APIRouter(prefix="/v1", tags=["Palettes"])

theme_generator = ThemeGenerator()


def _color_info(color: Color, key: Optional[Union[str, int]] = None) -> ColorInfo:
    return ColorInfo(**color.to_info(), key=key)


def _bad_request(request_id: str, error: ValueError) -> HTTPException:
    get_logger().warning(f"Rejected request: {error}", extra={"request_id": request_id})
    get_metrics().increment("api_rejected_total")
    return HTTPException(status_code=400, detail=str(error))


@router.post("/extract",
             response_model=ExtractResponse,
             summary="Extract Dominant Colors",
             description="Extract dominant colors from an uploaded image or an image URL")
async def extract_colors(
    file: Optional[UploadFile] = File(None, description="Image file (JPEG, PNG, GIF, WebP or BMP)"),
    url: Optional[str] = Form(None, description="http(s) URL of an image"),
    count: int = Form(5, description="Number of colors, clamped to [3, 15]")
):
    request_id = generate_request_id("extract")
    count = max(config.API_MIN_COUNT, min(config.API_MAX_COUNT, count))
    log_request(request_id, "extract", count=count, mode="file" if file is not None else "url")

    if file is None and not url:
        raise HTTPException(status_code=400, detail="Either 'file' or 'url' must be provided")

    try:
        source = await file.read() if file is not None else url
        with performance_monitor("api_extract", request_id=request_id):
            palette = (
                ColorPaletteBuilder()
                .with_loader(ImageLoader())
                .from_image(source)
                .with_count(count)
                .build()
            )
    except (ColorValidationError, UnsupportedSourceError) as e:
        raise _bad_request(request_id, e)

    surfaces = palette.suggested_surface_colors()
    return ExtractResponse(
        count=palette.count(),
        colors=[_color_info(color) for color in palette],
        theme={role: _color_info(color) for role, color in surfaces.items()}
    )


@router.post("/generate",
             response_model=GenerateResponse,
             summary="Generate Palette",
             description="Generate a palette from a base color and a scheme")
def generate(request: GenerateRequest):
    request_id = generate_request_id("generate")
    log_request(request_id, "generate", color=request.color, scheme=request.scheme, count=request.count)

    try:
        base = Color.from_hex(request.color)
        scheme = resolve_scheme(request.scheme)
        options = {"count": request.count} if scheme in COUNTED_SCHEMES else {}
        palette = generate_palette(base, scheme, options)
    except ColorValidationError as e:
        raise _bad_request(request_id, e)

    keyed = any(isinstance(key, str) for key in palette.keys())
    return GenerateResponse(
        scheme=scheme.value,
        colors=[
            _color_info(color, key if keyed else None)
            for key, color in palette.colors().items()
        ]
    )


@router.post("/manipulate",
             response_model=ManipulateResponse,
             summary="Manipulate Color",
             description="Lighten, darken, saturate, desaturate or rotate a color")
def manipulate(request: ManipulateRequest):
    request_id = generate_request_id("manipulate")
    log_request(request_id, "manipulate", color=request.color, operation=request.operation)

    try:
        original = Color.from_hex(request.color)
        result = apply_operation(original, request.operation, request.amount)
    except ColorValidationError as e:
        raise _bad_request(request_id, e)

    return ManipulateResponse(original=_color_info(original), result=_color_info(result))


@router.post("/contrast",
             response_model=ContrastResponse,
             summary="Check Contrast",
             description="WCAG contrast ratio and compliance for a background/text pair")
def contrast(request: ContrastRequest):
    request_id = generate_request_id("contrast")
    log_request(request_id, "contrast", background=request.background, text=request.text)

    try:
        background = Color.from_hex(request.background)
        text = Color.from_hex(request.text)
    except ColorValidationError as e:
        raise _bad_request(request_id, e)

    return ContrastResponse(
        contrast_ratio=round(analysis.contrast_ratio(background, text), 2),
        wcag=analysis.wcag_report(background, text),
        suggested_text_color=analysis.suggested_text_color(background).to_hex()
    )


@router.post("/theme",
             response_model=ThemeResponse,
             summary="Generate Theme",
             description="Map palette colors onto UI roles with readable foregrounds")
def theme(request: ThemeRequest):
    request_id = generate_request_id("theme")
    log_request(request_id, "theme", colors=request.colors, color=request.color)

    if not request.colors and not request.color:
        raise HTTPException(status_code=400, detail="Either 'colors' or 'color' must be provided")

    try:
        if request.colors:
            result = theme_generator.generate(ColorPalette.from_hex_colors(request.colors))
        else:
            result = theme_generator.generate_with_options(
                Color.from_hex(request.color),
                secondary_rotation=request.secondary_rotation,
                accent_rotation=request.accent_rotation
            )
    except ColorValidationError as e:
        raise _bad_request(request_id, e)

    return ThemeResponse(theme=result.to_array())


@router.get("/schemes",
            response_model=SchemesResponse,
            summary="List Schemes")
def list_schemes():
    return SchemesResponse(
        schemes=available_schemes(),
        counted=[scheme.value for scheme in PaletteScheme if scheme in COUNTED_SCHEMES]
    )
