"""
Unit tests for palette generation schemes.

Tests the color-wheel rules, lightness ramps, fixed-tone pentads, the keyed
website theme, scheme name resolution and count validation.
"""

import pytest

from colorpalette.exceptions import ColorValidationError
from colorpalette.services.colors.color import Color
from colorpalette.services.colors.harmony import (
    COUNTED_SCHEMES, SCHEME_GENERATORS, PaletteScheme, available_schemes,
    generate_palette, get_count_option, resolve_scheme
)

RED = Color(255, 0, 0)
MATERIAL_BLUE = Color.from_hex("#2196F3")


def hue_distance(a: float, b: float) -> float:
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


class TestStrategyCounts:
    """Each scheme produces its documented number of colors."""

    @pytest.mark.parametrize("scheme,expected", [
        ("monochromatic", 5),
        ("complementary", 2),
        ("analogous", 3),
        ("triadic", 3),
        ("tetradic", 4),
        ("split-complementary", 3),
        ("shades", 5),
        ("tints", 5),
        ("pastel", 5),
        ("vibrant", 5),
        ("website-theme", 5),
    ])
    def test_default_counts(self, scheme, expected):
        assert generate_palette(MATERIAL_BLUE, scheme).count() == expected

    @pytest.mark.parametrize("scheme", ["monochromatic", "shades", "tints"])
    def test_counted_schemes_follow_count(self, scheme):
        for count in (1, 2, 7, 50):
            assert generate_palette(MATERIAL_BLUE, scheme, {"count": count}).count() == count

    def test_fixed_schemes_ignore_count(self):
        assert generate_palette(RED, "triadic", {"count": 9}).count() == 3
        assert generate_palette(RED, "pastel", {"count": 2}).count() == 5

    def test_every_scheme_registered(self):
        assert set(SCHEME_GENERATORS) == set(PaletteScheme)
        assert COUNTED_SCHEMES <= set(PaletteScheme)


class TestWheelHarmonies:
    """Test hue rotation based schemes."""

    def test_complementary(self):
        assert generate_palette(RED, "complementary").to_array() == ["#ff0000", "#00ffff"]

    def test_triadic(self):
        assert generate_palette(RED, "triadic").to_array() == ["#ff0000", "#00ff00", "#0000ff"]

    def test_analogous_order(self):
        hues = [c.hsl[0] for c in generate_palette(RED, "analogous")]
        assert hue_distance(hues[0], 330) <= 1
        assert hues[1] == 0
        assert hue_distance(hues[2], 30) <= 1

    def test_tetradic(self):
        palette = generate_palette(RED, "tetradic")
        hues = [c.hsl[0] for c in palette]
        for hue, expected in zip(hues, (0, 90, 180, 270)):
            assert hue_distance(hue, expected) <= 1
        assert palette[2].to_hex() == "#00ffff"

    def test_split_complementary(self):
        hues = [c.hsl[0] for c in generate_palette(RED, "split-complementary")]
        assert hues[0] == 0
        assert hue_distance(hues[1], 150) <= 1
        assert hue_distance(hues[2], 210) <= 1


class TestLightnessRamps:
    """Test monochromatic, shades and tints."""

    def test_monochromatic_material_blue(self):
        palette = generate_palette(MATERIAL_BLUE, "monochromatic", {"count": 5})
        assert palette.count() == 5
        assert palette[0].to_hex() == "#2196f3"
        lightness = [c.hsl[2] for c in palette]
        assert lightness == sorted(lightness)

    def test_monochromatic_red(self):
        palette = generate_palette(RED, "monochromatic", {"count": 3})
        assert palette.to_array() == ["#ff0000", "#ffcccc", "#ffffff"]

    def test_single_color_ramps(self):
        for scheme in ("monochromatic", "shades", "tints"):
            assert generate_palette(RED, scheme, {"count": 1}).to_array() == ["#ff0000"]

    def test_shades(self):
        palette = generate_palette(RED, "shades", {"count": 5})
        assert palette.to_array() == ["#ff0000", "#990000", "#330000", "#000000", "#000000"]

    def test_tints(self):
        palette = generate_palette(RED, "tints", {"count": 5})
        assert palette[0].to_hex() == "#ff0000"
        assert palette[1].to_hex() == "#ff6666"
        assert palette[4].to_hex() == "#ffffff"


class TestPentads:
    """Test pastel and vibrant."""

    def test_pastel_tones(self):
        palette = generate_palette(RED, "pastel")
        for color in palette:
            _, s, l = color.hsl
            assert l >= 88
            assert s <= 35

    def test_vibrant_tones(self):
        palette = generate_palette(RED, "vibrant")
        assert palette[0] == RED
        hues = [c.hsl[0] for c in palette]
        for hue, expected in zip(hues, (0, 72, 144, 216, 288)):
            assert hue_distance(hue, expected) <= 2
        for color in palette:
            assert color.hsl[1] >= 95


class TestWebsiteTheme:
    """Test the keyed website theme."""

    def test_keys_and_fixed_colors(self):
        palette = generate_palette(RED, "website-theme")
        assert palette.keys() == ["primary", "secondary", "accent", "background", "surface"]
        assert palette["primary"] == RED
        assert palette["background"].to_hex() == "#fafafa"
        assert palette["surface"].to_hex() == "#ffffff"

    def test_secondary_and_accent(self):
        palette = generate_palette(RED, "website-theme")
        secondary = palette["secondary"]
        accent = palette["accent"]
        assert hue_distance(secondary.hsl[0], 30) <= 1
        assert secondary.hsl[1] <= 81
        assert hue_distance(accent.hsl[0], 180) <= 1


class TestSchemeResolution:
    """Test scheme name aliases."""

    @pytest.mark.parametrize("name", [
        "split-complementary", "splitcomplementary", "SplitComplementary",
        "split_complementary", PaletteScheme.SPLIT_COMPLEMENTARY
    ])
    def test_split_complementary_aliases(self, name):
        assert resolve_scheme(name) is PaletteScheme.SPLIT_COMPLEMENTARY

    @pytest.mark.parametrize("name", ["website-theme", "websitetheme", "Website-Theme", "websiteTheme"])
    def test_website_theme_aliases(self, name):
        assert resolve_scheme(name) is PaletteScheme.WEBSITE_THEME

    def test_unknown_scheme(self):
        with pytest.raises(ColorValidationError):
            resolve_scheme("rainbow")
        with pytest.raises(ColorValidationError):
            generate_palette(RED, "rainbow")
        with pytest.raises(ColorValidationError):
            resolve_scheme(42)

    def test_available_schemes(self):
        schemes = available_schemes()
        assert len(schemes) == 11
        assert "website-theme" in schemes


class TestCountOption:
    """Test count option validation."""

    def test_defaults(self):
        assert get_count_option(None) == 5
        assert get_count_option({}) == 5
        assert get_count_option({"count": None}, default=3) == 3

    def test_integral_float_accepted(self):
        assert get_count_option({"count": 3.0}) == 3

    @pytest.mark.parametrize("count", [0, 51, -1, 2.5, "5", True])
    def test_invalid_counts(self, count):
        with pytest.raises(ColorValidationError):
            get_count_option({"count": count})

    def test_generate_rejects_bad_count(self):
        with pytest.raises(ColorValidationError):
            generate_palette(RED, "monochromatic", {"count": 0})
        with pytest.raises(ColorValidationError):
            generate_palette(RED, "tints", {"count": 51})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
