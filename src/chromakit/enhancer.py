"""Contrast enhancement that keeps a color recognizable.

:class:`AccessibilityEnhancer` nudges a color against a background until the
pair meets a WCAG level. Each :class:`AdjustmentStrategy` holds a different
attribute of the color fixed while the others move:

    - PRESERVE_HUE: steps lightness (or saturation) by 0.05, up to 20 steps
    - PRESERVE_SATURATION: steps lightness by 0.05 and drifts hue by 0.02
    - PRESERVE_LIGHTNESS: raises saturation by 0.05 and drifts hue by 0.02,
      then hands over to PRESERVE_HUE
    - MINIMUM_CHANGE: walks L* in LAB space while wobbling a* and b*, up to
      30 steps, then hands over to PRESERVE_HUE

Every search is bounded. When PRESERVE_HUE or PRESERVE_SATURATION run out of
steps they return pure white on backgrounds with luminance up to 0.5 and pure
black above it. That extreme may still miss the target: on #8A8A8A white
reaches 3.45:1 while black would reach 6.08:1.

Example:
    >>> from chromakit.colors import Color, WHITE
    >>> enhancer = AccessibilityEnhancer()
    >>> enhanced = enhancer.enhance_color(Color(0.7, 0.7, 1.0), WHITE)
    >>> enhanced.contrast_ratio(WHITE) >= 4.5
    True
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .cache import ConversionCache
from .colors import BLACK, WHITE, Color
from .wcag import WCAGContrastLevel

__all__ = [
    "AdjustmentStrategy",
    "EnhancerConfiguration",
    "AccessibilityEnhancer",
    "enhance_color",
    "suggest_accessible_variants",
    "is_perceptually_similar",
]

logger = logging.getLogger(__name__)

HSL_MAX_STEPS = 20
HSL_STEP = 0.05
HUE_DRIFT = 0.02
SATURATION_NUDGE_THRESHOLD = 0.9

LAB_MAX_STEPS = 30
LAB_WOBBLE_FREQUENCY = 0.2
LAB_WOBBLE_AMPLITUDE = 2.0

VARIANT_SIMILARITY_THRESHOLD = 5.0
VARIANT_DISTANCES = (15.0, 20.0, 25.0, 35.0, 40.0)


class AdjustmentStrategy(str, Enum):
    PRESERVE_HUE = "preserve-hue"
    PRESERVE_SATURATION = "preserve-saturation"
    PRESERVE_LIGHTNESS = "preserve-lightness"
    MINIMUM_CHANGE = "minimum-change"

    @property
    def description(self) -> str:
        return _STRATEGY_DESCRIPTIONS[self]


_STRATEGY_DESCRIPTIONS = {
    AdjustmentStrategy.PRESERVE_HUE: (
        "Maintains the color's hue while adjusting saturation and lightness"
    ),
    AdjustmentStrategy.PRESERVE_SATURATION: (
        "Maintains the color's saturation while adjusting hue and lightness"
    ),
    AdjustmentStrategy.PRESERVE_LIGHTNESS: (
        "Maintains the color's lightness while adjusting hue and saturation"
    ),
    AdjustmentStrategy.MINIMUM_CHANGE: (
        "Makes the smallest perceptual change needed to meet accessibility requirements"
    ),
}

_VARIANT_ORDER = (
    AdjustmentStrategy.PRESERVE_HUE,
    AdjustmentStrategy.PRESERVE_SATURATION,
    AdjustmentStrategy.PRESERVE_LIGHTNESS,
    AdjustmentStrategy.MINIMUM_CHANGE,
)


@dataclass(frozen=True)
class EnhancerConfiguration:
    """Settings for :class:`AccessibilityEnhancer`.

    ``max_perceptual_distance`` is carried through variant generation but
    does not bound the searches.
    """

    target_level: WCAGContrastLevel = WCAGContrastLevel.AA
    strategy: AdjustmentStrategy = AdjustmentStrategy.PRESERVE_HUE
    max_perceptual_distance: float = 30.0
    prefer_darker: bool = False


def is_perceptually_similar(
    color1: Color,
    color2: Color,
    threshold: float = 10.0,
    cache: Optional[ConversionCache] = None,
) -> bool:
    """True when the CIE76 distance between the colors is below `threshold`."""
    return color1.delta_e(color2, cache=cache) < threshold


class AccessibilityEnhancer:
    """Adjust colors to meet a WCAG level against a background."""

    def __init__(
        self,
        configuration: Optional[EnhancerConfiguration] = None,
        cache: Optional[ConversionCache] = None,
    ):
        self.configuration = configuration or EnhancerConfiguration()
        self.cache = cache

    @property
    def _minimum_ratio(self) -> float:
        return self.configuration.target_level.minimum_ratio

    def _meets_target(self, color: Color, background: Color) -> bool:
        return color.contrast_ratio(background, cache=self.cache) >= self._minimum_ratio

    def _needs_darker(self, background: Color) -> bool:
        return background.luminance(cache=self.cache) > 0.5

    def enhance_color(self, color: Color, background: Color) -> Color:
        """Return `color` unchanged if compliant, else the strategy's result."""
        if self._meets_target(color, background):
            return color

        strategy = self.configuration.strategy
        if strategy is AdjustmentStrategy.PRESERVE_HUE:
            return self._enhance_preserving_hue(color, background)
        if strategy is AdjustmentStrategy.PRESERVE_SATURATION:
            return self._enhance_preserving_saturation(color, background)
        if strategy is AdjustmentStrategy.PRESERVE_LIGHTNESS:
            return self._enhance_preserving_lightness(color, background)
        return self._enhance_with_minimum_change(color, background)

    def suggest_accessible_variants(
        self, color: Color, background: Color, count: int = 3
    ) -> list[Color]:
        """Up to `count` compliant variants that differ by at least ΔE 5.

        The four strategies are tried in a fixed order. If that yields too
        few distinct colors, the configured strategy is rerun with the
        opposite darkness preference across a range of perceptual distances.
        """
        if count < 0:
            raise ValueError(f"Variant count must not be negative, got {count}")

        variants: list[Color] = []

        def add(variant: Color) -> None:
            if not any(
                is_perceptually_similar(
                    existing, variant, VARIANT_SIMILARITY_THRESHOLD, cache=self.cache
                )
                for existing in variants
            ):
                variants.append(variant)

        for strategy in _VARIANT_ORDER:
            enhancer = AccessibilityEnhancer(
                replace(self.configuration, strategy=strategy), cache=self.cache
            )
            add(enhancer.enhance_color(color, background))
            if len(variants) >= count:
                break

        if len(variants) < count:
            for distance in VARIANT_DISTANCES:
                enhancer = AccessibilityEnhancer(
                    replace(
                        self.configuration,
                        max_perceptual_distance=distance,
                        prefer_darker=not self.configuration.prefer_darker,
                    ),
                    cache=self.cache,
                )
                add(enhancer.enhance_color(color, background))
                if len(variants) >= count:
                    break

        return variants[:count]

    # Strategies

    def _enhance_preserving_hue(self, color: Color, background: Color) -> Color:
        hue, saturation, lightness = color.hsl(cache=self.cache)
        need_darker = self._needs_darker(background)
        # Lightness moves only when the needed direction matches the preference;
        # otherwise saturation leads and lightness follows once it saturates.
        adjust_lightness = need_darker == self.configuration.prefer_darker

        def step_lightness(value: float) -> float:
            if need_darker:
                return max(0.0, value - HSL_STEP)
            return min(1.0, value + HSL_STEP)

        for _ in range(HSL_MAX_STEPS):
            if adjust_lightness:
                lightness = step_lightness(lightness)
            else:
                saturation = min(1.0, saturation + HSL_STEP)

            candidate = Color.from_hsl(hue, saturation, lightness, color.alpha)
            if self._meets_target(candidate, background):
                return candidate

            if saturation > SATURATION_NUDGE_THRESHOLD and not adjust_lightness:
                lightness = step_lightness(lightness)

        return self._fallback(color, background, need_darker, "preserve-hue")

    def _enhance_preserving_saturation(self, color: Color, background: Color) -> Color:
        hue, saturation, lightness = color.hsl(cache=self.cache)
        need_darker = self._needs_darker(background)

        for _ in range(HSL_MAX_STEPS):
            if need_darker:
                lightness = max(0.0, lightness - HSL_STEP)
            else:
                lightness = min(1.0, lightness + HSL_STEP)
            hue = (hue + HUE_DRIFT) % 1.0

            candidate = Color.from_hsl(hue, saturation, lightness, color.alpha)
            if self._meets_target(candidate, background):
                return candidate

        return self._fallback(color, background, need_darker, "preserve-saturation")

    def _enhance_preserving_lightness(self, color: Color, background: Color) -> Color:
        hue, saturation, lightness = color.hsl(cache=self.cache)

        for _ in range(HSL_MAX_STEPS):
            saturation = min(1.0, saturation + HSL_STEP)
            hue = (hue + HUE_DRIFT) % 1.0

            candidate = Color.from_hsl(hue, saturation, lightness, color.alpha)
            if self._meets_target(candidate, background):
                return candidate

        logger.debug(
            "preserve-lightness exhausted for %s, delegating to preserve-hue", color.hex()
        )
        return self._enhance_preserving_hue(color, background)

    def _enhance_with_minimum_change(self, color: Color, background: Color) -> Color:
        original_l, original_a, original_b = color.lab(cache=self.cache)
        need_darker = self._needs_darker(background)

        for step in range(LAB_MAX_STEPS):
            step_size = _lab_step_size(step)
            if need_darker:
                new_l = max(0.0, original_l - step * step_size)
            else:
                new_l = min(100.0, original_l + step * step_size)
            new_a = original_a + math.sin(step * LAB_WOBBLE_FREQUENCY) * LAB_WOBBLE_AMPLITUDE
            new_b = original_b + math.cos(step * LAB_WOBBLE_FREQUENCY) * LAB_WOBBLE_AMPLITUDE

            candidate = Color.from_lab(new_l, new_a, new_b, color.alpha)
            if self._meets_target(candidate, background):
                return candidate

        logger.debug(
            "minimum-change exhausted for %s, delegating to preserve-hue", color.hex()
        )
        return self._enhance_preserving_hue(color, background)

    def _fallback(
        self, color: Color, background: Color, need_darker: bool, strategy: str
    ) -> Color:
        fallback = BLACK if need_darker else WHITE
        logger.debug(
            "%s exhausted for %s on %s, falling back to %s",
            strategy,
            color.hex(),
            background.hex(),
            fallback.hex(),
        )
        return fallback


def _lab_step_size(step: int) -> float:
    """L* increment for a minimum-change step: 2, then 4 after 10, 8 after 20."""
    if step > 20:
        return 8.0
    if step > 10:
        return 4.0
    return 2.0


def enhance_color(
    color: Color,
    background: Color,
    target_level: WCAGContrastLevel = WCAGContrastLevel.AA,
    strategy: AdjustmentStrategy = AdjustmentStrategy.PRESERVE_HUE,
    cache: Optional[ConversionCache] = None,
) -> Color:
    configuration = EnhancerConfiguration(target_level=target_level, strategy=strategy)
    return AccessibilityEnhancer(configuration, cache=cache).enhance_color(color, background)


def suggest_accessible_variants(
    color: Color,
    background: Color,
    target_level: WCAGContrastLevel = WCAGContrastLevel.AA,
    count: int = 3,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    configuration = EnhancerConfiguration(target_level=target_level)
    enhancer = AccessibilityEnhancer(configuration, cache=cache)
    return enhancer.suggest_accessible_variants(color, background, count=count)
