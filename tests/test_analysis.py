"""
Unit tests for color analysis: brightness, luminance, contrast, WCAG levels,
color difference and classification.
"""

import numpy as np
import pytest

from colorpalette.services.colors import analysis
from colorpalette.services.colors.color import BLACK, WHITE, Color

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)
GRAY_777 = Color.from_hex("#777777")


class TestBrightness:
    """Test perceived brightness and the light/dark split."""

    def test_extremes(self):
        assert analysis.brightness(WHITE) == 255
        assert analysis.brightness(BLACK) == 0
        assert analysis.brightness(RED) == pytest.approx(76.245)

    def test_threshold_is_inclusive(self):
        assert Color(128, 128, 128).is_light()
        assert Color(127, 127, 127).is_dark()
        assert not Color(127, 127, 127).is_light()


class TestContrast:
    """Test WCAG luminance and contrast ratio."""

    def test_luminance_reference_values(self):
        assert analysis.relative_luminance(WHITE) == pytest.approx(1.0)
        assert analysis.relative_luminance(BLACK) == pytest.approx(0.0)
        assert analysis.relative_luminance(RED) == pytest.approx(0.2126, abs=1e-4)

    def test_white_black_contrast(self):
        ratio = analysis.contrast_ratio(WHITE, BLACK)
        assert ratio > 20
        assert ratio == pytest.approx(21.0)

    def test_contrast_is_symmetric(self):
        pairs = [(WHITE, BLACK), (RED, BLUE), (GRAY_777, WHITE), (Color(33, 150, 243), Color(250, 250, 240))]
        for a, b in pairs:
            assert analysis.contrast_ratio(a, b) == analysis.contrast_ratio(b, a)

    def test_identical_colors(self):
        assert analysis.contrast_ratio(RED, RED) == pytest.approx(1.0)

    def test_color_method_accepts_hex(self):
        assert WHITE.contrast("#000000") == pytest.approx(21.0)


class TestWCAG:
    """Test WCAG compliance thresholds."""

    def test_black_on_white_passes_everything(self):
        assert analysis.meets_wcag_aa(BLACK, WHITE)
        assert analysis.meets_wcag_aaa(BLACK, WHITE)
        assert analysis.wcag_report(BLACK, WHITE) == {
            "aa": {"normal": True, "large": True},
            "aaa": {"normal": True, "large": True},
        }

    def test_777_on_white_is_borderline(self):
        # Ratio is about 4.48
        assert not analysis.meets_wcag_aa(GRAY_777, WHITE)
        assert analysis.meets_wcag_aa(GRAY_777, WHITE, large_text=True)
        assert not analysis.meets_wcag_aaa(GRAY_777, WHITE, large_text=True)

    def test_same_color_fails(self):
        report = analysis.wcag_report(RED, RED)
        assert report == {"aa": {"normal": False, "large": False}, "aaa": {"normal": False, "large": False}}


class TestDifference:
    """Test CIE76 and RGB distances."""

    def test_delta_e_zero_for_identical(self):
        assert analysis.delta_e(RED, RED) == 0.0

    def test_delta_e_symmetric_and_large_for_distinct(self):
        assert analysis.delta_e(RED, BLUE) == pytest.approx(analysis.delta_e(BLUE, RED))
        assert analysis.delta_e(RED, BLUE) > 50

    def test_delta_e_small_for_near_colors(self):
        assert analysis.delta_e(RED, Color(255, 16, 16)) < 10

    def test_rgb_distance(self):
        assert analysis.rgb_distance(BLACK, Color(3, 4, 0)) == pytest.approx(5.0)


class TestClassification:
    """Test vibrant, muted, warm and cool classification."""

    def test_vibrant_and_muted(self):
        assert RED.is_vibrant()
        assert not RED.is_muted()
        gray = Color(128, 128, 128)
        assert gray.is_muted()
        assert not gray.is_vibrant()
        # Fully saturated but too light
        assert not Color.from_hsl(0, 100, 90).is_vibrant()

    def test_warm_and_cool(self):
        assert RED.is_warm()
        assert Color(255, 0, 255).is_warm()
        assert Color(255, 128, 0).is_warm()
        assert Color(0, 255, 0).is_cool()
        assert BLUE.is_cool()
        assert not BLUE.is_warm()


class TestTextSuggestion:
    """Test foreground suggestions."""

    def test_black_or_white(self):
        assert analysis.suggested_text_color(WHITE) == BLACK
        assert analysis.suggested_text_color(BLACK) == WHITE
        assert analysis.suggested_text_color(Color(0, 0, 128)) == WHITE
        assert analysis.suggested_text_color(Color(255, 255, 0)) == BLACK

    def test_custom_candidates(self):
        navy = Color(0, 0, 128)
        best = navy.suggested_text_color(["#ffff00", "#000033"])
        assert best == Color(255, 255, 0)


class TestVectorized:
    """Test the array helpers used by extraction."""

    def test_saturation_value_arrays(self):
        rgb = np.array([[255, 0, 0], [128, 128, 128], [0, 0, 0]], dtype=np.uint8)
        saturation, value = analysis.saturation_value_arrays(rgb)
        assert saturation[0] == pytest.approx(1.0)
        assert saturation[1] == pytest.approx(0.0)
        assert value[0] == pytest.approx(1.0)
        assert value[2] == pytest.approx(0.0)

    def test_empty_input(self):
        saturation, value = analysis.saturation_value_arrays(np.zeros((0, 3), dtype=np.uint8))
        assert saturation.size == 0 and value.size == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
