"""Tests for chromakit.enhancer module."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chromakit.colors import BLACK, WHITE, Color
from chromakit.enhancer import (
    AccessibilityEnhancer,
    AdjustmentStrategy,
    EnhancerConfiguration,
    _lab_step_size,
    enhance_color,
    is_perceptually_similar,
    suggest_accessible_variants,
)
from chromakit.wcag import WCAGContrastLevel

unit_float = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)
color_strategy = st.builds(Color, unit_float, unit_float, unit_float)

LIGHT_BLUE = Color(0.7, 0.7, 1.0)


def enhancer_for(strategy, **kwargs):
    return AccessibilityEnhancer(EnhancerConfiguration(strategy=strategy, **kwargs))


class TestAdjustmentStrategy:
    """Test the strategy enum."""

    def test_values(self):
        """Test lookup by CLI value."""
        assert AdjustmentStrategy("minimum-change") is AdjustmentStrategy.MINIMUM_CHANGE
        assert AdjustmentStrategy.PRESERVE_HUE == "preserve-hue"

    def test_descriptions(self):
        """Test that every strategy describes itself."""
        for strategy in AdjustmentStrategy:
            assert strategy.description.startswith(("Maintains", "Makes"))


class TestEnhanceColor:
    """Test single-color enhancement."""

    def test_compliant_color_is_unchanged(self):
        """Test that passing colors are returned as-is."""
        yellow = Color(1.0, 1.0, 0.0)
        for strategy in AdjustmentStrategy:
            assert enhancer_for(strategy).enhance_color(yellow, BLACK) == yellow

    def test_preserve_hue(self):
        """Test that preserve-hue keeps the hue and reaches AA."""
        enhanced = enhancer_for(AdjustmentStrategy.PRESERVE_HUE).enhance_color(
            LIGHT_BLUE, WHITE
        )
        assert enhanced.contrast_ratio(WHITE) >= 4.5
        assert enhanced.hsl().hue == pytest.approx(2 / 3, abs=1e-3)
        assert enhanced.hsl().lightness < LIGHT_BLUE.hsl().lightness

    def test_preserve_hue_with_darker_preference(self):
        """Test that prefer_darker on a light background steps lightness directly."""
        enhanced = enhancer_for(
            AdjustmentStrategy.PRESERVE_HUE, prefer_darker=True
        ).enhance_color(LIGHT_BLUE, WHITE)
        assert enhanced.contrast_ratio(WHITE) >= 4.5
        assert enhanced.hsl().hue == pytest.approx(2 / 3, abs=1e-3)

    def test_preserve_saturation(self):
        """Test that preserve-saturation reaches AA with a drifting hue."""
        original = Color.from_hsl(0.0, 0.6, 0.8)
        enhanced = enhancer_for(AdjustmentStrategy.PRESERVE_SATURATION).enhance_color(
            original, WHITE
        )
        assert enhanced.contrast_ratio(WHITE) >= 4.5
        assert enhanced.hsl().saturation == pytest.approx(0.6, abs=0.01)
        assert enhanced.hsl().hue > 0.0

    def test_preserve_lightness_delegates_when_exhausted(self):
        """Test that an unreachable lightness hands over to preserve-hue."""
        by_lightness = enhancer_for(AdjustmentStrategy.PRESERVE_LIGHTNESS).enhance_color(
            LIGHT_BLUE, WHITE
        )
        by_hue = enhancer_for(AdjustmentStrategy.PRESERVE_HUE).enhance_color(
            LIGHT_BLUE, WHITE
        )
        assert by_lightness == by_hue

    def test_minimum_change(self):
        """Test the LAB walk reaches AA."""
        enhanced = enhancer_for(AdjustmentStrategy.MINIMUM_CHANGE).enhance_color(
            LIGHT_BLUE, WHITE
        )
        assert enhanced.contrast_ratio(WHITE) >= 4.5
        assert enhanced.lab().l < LIGHT_BLUE.lab().l

    def test_dark_background_lightens(self):
        """Test that dark backgrounds push colors lighter."""
        navy = Color.from_hex("#202060")
        for strategy in AdjustmentStrategy:
            enhanced = enhancer_for(strategy).enhance_color(navy, BLACK)
            assert enhanced.contrast_ratio(BLACK) >= 4.5
            assert enhanced.luminance() > navy.luminance()

    def test_alpha_is_kept(self):
        """Test that enhanced colors keep the input alpha."""
        translucent = LIGHT_BLUE.with_alpha(0.5)
        for strategy in AdjustmentStrategy:
            assert enhancer_for(strategy).enhance_color(translucent, WHITE).alpha == 0.5

    def test_unreachable_level_falls_back(self, caplog):
        """Test the black/white fallback and its debug log."""
        background = Color(0.46, 0.46, 0.46)
        enhancer = enhancer_for(
            AdjustmentStrategy.PRESERVE_SATURATION, target_level=WCAGContrastLevel.AAA
        )

        with caplog.at_level(logging.DEBUG, logger="chromakit.enhancer"):
            result = enhancer.enhance_color(Color(0.5, 0.5, 0.5), background)

        assert result == WHITE
        assert "preserve-saturation exhausted" in caplog.text

    @given(color_strategy, color_strategy, st.sampled_from(list(AdjustmentStrategy)))
    def test_result_passes_or_is_black_or_white(self, color, background, strategy):
        """Test that every strategy ends compliant or at an extreme."""
        enhanced = enhancer_for(strategy).enhance_color(color, background)
        assert (
            enhanced.contrast_ratio(background) >= 4.5
            or enhanced == BLACK
            or enhanced == WHITE
        )

    @pytest.mark.parametrize("strategy", list(AdjustmentStrategy))
    def test_mid_gray_background_gets_white_below_target(self, strategy):
        """Test that the fallback direction follows luminance, not the better extreme."""
        background = Color.from_hex("#8A8A8A")
        enhanced = enhancer_for(strategy).enhance_color(background, background)

        assert enhanced == WHITE
        assert enhanced.contrast_ratio(background) == pytest.approx(3.45, abs=0.01)
        assert BLACK.contrast_ratio(background) == pytest.approx(6.08, abs=0.01)

    def test_module_level_shortcut(self, cache):
        """Test enhance_color with an explicit strategy and cache."""
        enhanced = enhance_color(
            LIGHT_BLUE,
            WHITE,
            target_level=WCAGContrastLevel.AAA,
            strategy=AdjustmentStrategy.PRESERVE_HUE,
            cache=cache,
        )
        assert enhanced.contrast_ratio(WHITE) >= 7.0
        assert cache.stats()["contrast"]["size"] > 0


class TestVariants:
    """Test multi-variant suggestions."""

    def test_variants_are_distinct_and_compliant(self):
        """Test that variants pass and differ by at least ΔE 5."""
        variants = AccessibilityEnhancer().suggest_accessible_variants(LIGHT_BLUE, WHITE)

        assert 1 <= len(variants) <= 3
        for variant in variants:
            assert variant.contrast_ratio(WHITE) >= 4.5
        for i, first in enumerate(variants):
            for second in variants[i + 1:]:
                assert first.delta_e(second) >= 5.0

    def test_count_limits_result(self):
        """Test that no more than `count` variants come back."""
        assert len(suggest_accessible_variants(LIGHT_BLUE, WHITE, count=1)) == 1
        assert suggest_accessible_variants(LIGHT_BLUE, WHITE, count=0) == []

    def test_negative_count(self):
        """Test that a negative count is rejected."""
        with pytest.raises(ValueError, match="must not be negative"):
            AccessibilityEnhancer().suggest_accessible_variants(LIGHT_BLUE, WHITE, count=-1)

    def test_compliant_color_yields_itself(self):
        """Test that a passing color collapses to a single variant."""
        assert suggest_accessible_variants(BLACK, WHITE, count=3) == [BLACK]


class TestHelpers:
    """Test step sizes and perceptual similarity."""

    @pytest.mark.parametrize(
        "step,expected", [(0, 2.0), (10, 2.0), (11, 4.0), (20, 4.0), (21, 8.0), (29, 8.0)]
    )
    def test_lab_step_size(self, step, expected):
        """Test the escalating L* step."""
        assert _lab_step_size(step) == expected

    def test_is_perceptually_similar(self):
        """Test the CIE76 threshold check."""
        assert is_perceptually_similar(WHITE, WHITE)
        assert not is_perceptually_similar(BLACK, WHITE)
        near_white = Color(0.98, 0.98, 0.98)
        assert is_perceptually_similar(WHITE, near_white)
        assert not is_perceptually_similar(WHITE, near_white, threshold=0.5)
