"""
Unit tests for color space conversions.

Covers hex parsing/formatting, HSL, HSV, CMYK and CIE XYZ/L*a*b* math,
clamping of out-of-range input and the vectorized LAB path.
"""

import numpy as np
import pytest

from colorpalette.exceptions import ColorValidationError
from colorpalette.services.colors.conversions import (
    cmyk_to_rgb, format_hex, hsl_to_rgb, hsv_to_rgb, lab_to_rgb, parse_hex,
    rgb_array_to_lab, rgb_to_cmyk, rgb_to_hsb, rgb_to_hsl, rgb_to_hsv, rgb_to_lab,
    rgb_to_xyz, xyz_to_rgb
)

SAMPLE_COLORS = [
    (255, 0, 0), (0, 255, 0), (0, 0, 255), (33, 150, 243), (128, 128, 128),
    (12, 200, 99), (250, 250, 240), (1, 2, 3), (255, 255, 255), (0, 0, 0),
    (176, 48, 96), (64, 224, 208),
]


class TestHexParsing:
    """Test hex string parsing and formatting."""

    def test_six_digit_forms(self):
        assert parse_hex("#FF0000") == (255, 0, 0)
        assert parse_hex("ff0000") == (255, 0, 0)
        assert parse_hex("#2196f3") == (33, 150, 243)

    def test_three_digit_shorthand(self):
        assert parse_hex("#f00") == (255, 0, 0)
        assert parse_hex("abc") == (170, 187, 204)

    @pytest.mark.parametrize("bad", ["", "#", "#12345", "#1234567", "#gggggg", "red", "#12 456"])
    def test_invalid_hex_rejected(self, bad):
        with pytest.raises(ColorValidationError):
            parse_hex(bad)

    def test_non_string_rejected(self):
        with pytest.raises(ColorValidationError):
            parse_hex(0xFF0000)

    def test_format_hex_lowercase_and_clamped(self):
        assert format_hex(255, 0, 0) == "#ff0000"
        assert format_hex(300, -5, 127.6) == "#ff0080"

    def test_hex_round_trip(self):
        for value in ["#000000", "#ffffff", "#2196f3", "#abcdef", "#010203"]:
            assert format_hex(*parse_hex(value.upper())) == value


class TestHSL:
    """Test RGB <-> HSL conversions."""

    def test_primary_colors(self):
        assert rgb_to_hsl(255, 0, 0) == pytest.approx((0.0, 100.0, 50.0))
        h, s, l = rgb_to_hsl(0, 0, 255)
        assert h == pytest.approx(240.0)
        assert s == pytest.approx(100.0)

    def test_grayscale_has_no_hue(self):
        h, s, l = rgb_to_hsl(128, 128, 128)
        assert h == 0.0
        assert s == 0.0
        assert l == pytest.approx(50.196, abs=0.01)

    def test_hsl_to_rgb_sectors(self):
        assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
        assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
        assert hsl_to_rgb(240, 100, 50) == (0, 0, 255)
        assert hsl_to_rgb(180, 100, 50) == (0, 255, 255)

    def test_hue_wraps(self):
        assert hsl_to_rgb(-120, 100, 50) == hsl_to_rgb(240, 100, 50)
        assert hsl_to_rgb(360, 100, 50) == hsl_to_rgb(0, 100, 50)

    def test_out_of_range_is_clamped(self):
        assert hsl_to_rgb(0, 150, 50) == (255, 0, 0)
        assert hsl_to_rgb(0, 100, 120) == (255, 255, 255)
        assert hsl_to_rgb(0, -10, -10) == (0, 0, 0)

    def test_round_trip_within_tolerance(self):
        for rgb in SAMPLE_COLORS:
            back = hsl_to_rgb(*rgb_to_hsl(*rgb))
            assert max(abs(a - b) for a, b in zip(rgb, back)) <= 1


class TestHSV:
    """Test RGB <-> HSV conversions."""

    def test_red(self):
        assert rgb_to_hsv(255, 0, 0) == pytest.approx((0.0, 100.0, 100.0))
        assert hsv_to_rgb(0, 100, 100) == (255, 0, 0)

    def test_hsb_fractions(self):
        h, s, b = rgb_to_hsb(255, 0, 0)
        assert s == pytest.approx(1.0)
        assert b == pytest.approx(1.0)
        _, s, b = rgb_to_hsb(0, 0, 0)
        assert s == 0.0 and b == 0.0

    def test_round_trip(self):
        for rgb in SAMPLE_COLORS:
            back = hsv_to_rgb(*rgb_to_hsv(*rgb))
            assert max(abs(a - b) for a, b in zip(rgb, back)) <= 1


class TestCMYK:
    """Test RGB <-> CMYK conversions."""

    def test_black_special_case(self):
        assert rgb_to_cmyk(0, 0, 0) == (0.0, 0.0, 0.0, 100.0)

    def test_red(self):
        assert rgb_to_cmyk(255, 0, 0) == pytest.approx((0.0, 100.0, 100.0, 0.0))
        assert cmyk_to_rgb(0, 100, 100, 0) == (255, 0, 0)

    def test_clamping(self):
        assert cmyk_to_rgb(-5, 0, 0, 150) == (0, 0, 0)

    def test_round_trip(self):
        for rgb in SAMPLE_COLORS:
            back = cmyk_to_rgb(*rgb_to_cmyk(*rgb))
            assert max(abs(a - b) for a, b in zip(rgb, back)) <= 1


class TestLab:
    """Test CIE XYZ and L*a*b* conversions."""

    def test_white_point(self):
        x, y, z = rgb_to_xyz(255, 255, 255)
        assert (x, y, z) == pytest.approx((0.95047, 1.0, 1.08883), abs=1e-4)

        l, a, b = rgb_to_lab(255, 255, 255)
        assert l == pytest.approx(100.0, abs=0.01)
        assert a == pytest.approx(0.0, abs=0.01)
        assert b == pytest.approx(0.0, abs=0.01)

    def test_black(self):
        assert rgb_to_lab(0, 0, 0) == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    def test_red_reference_values(self):
        l, a, b = rgb_to_lab(255, 0, 0)
        assert l == pytest.approx(53.24, abs=0.5)
        assert a == pytest.approx(80.09, abs=0.5)
        assert b == pytest.approx(67.20, abs=0.5)

    def test_xyz_round_trip(self):
        for rgb in SAMPLE_COLORS:
            assert xyz_to_rgb(*rgb_to_xyz(*rgb)) == rgb

    def test_lab_round_trip(self):
        for rgb in SAMPLE_COLORS:
            back = lab_to_rgb(*rgb_to_lab(*rgb))
            assert max(abs(a - b) for a, b in zip(rgb, back)) <= 1

    def test_out_of_gamut_lab_is_clamped(self):
        r, g, b = lab_to_rgb(50, 127, -128)
        assert all(0 <= channel <= 255 for channel in (r, g, b))

    def test_vectorized_matches_scalar(self):
        rgb = np.array(SAMPLE_COLORS, dtype=np.uint8)
        lab = rgb_array_to_lab(rgb)
        assert lab.shape == (len(SAMPLE_COLORS), 3)
        for row, color in zip(lab, SAMPLE_COLORS):
            assert tuple(row) == pytest.approx(rgb_to_lab(*color), abs=1e-6)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
