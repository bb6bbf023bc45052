"""Contrast-driven color suggestions.

Given a fixed base color and a target color that fails a WCAG level against
it, the engine walks the target's HSL lightness (and then saturation) toward
the extreme that increases contrast and returns the first compliant color.
Black or white closes the search, so the result is never empty.
"""

import logging
from typing import Optional

from .cache import ConversionCache
from .colors import BLACK, WHITE, Color
from .wcag import WCAGContrastLevel, evaluate

__all__ = ["ColorSuggestionEngine", "suggest_accessible_colors"]

logger = logging.getLogger(__name__)

LIGHTNESS_STEPS = 10
SATURATION_FACTORS = (0.8, 0.6, 0.4, 0.2)


class ColorSuggestionEngine:
    """Suggest WCAG-compliant replacements for a target color on a base color.

    Args:
        base_color: The color that stays fixed (usually a background)
        target_color: The color to adjust
        target_level: WCAG level the pair must satisfy
        cache: Optional conversion cache; the default cache is used otherwise
    """

    def __init__(
        self,
        base_color: Color,
        target_color: Color,
        target_level: WCAGContrastLevel = WCAGContrastLevel.AA,
        cache: Optional[ConversionCache] = None,
    ):
        self.base_color = base_color
        self.target_color = target_color
        self.target_level = target_level
        self.cache = cache

    def _passes(self, candidate: Color) -> bool:
        return evaluate(self.base_color, candidate, cache=self.cache).passes_level(
            self.target_level
        )

    def generate_suggestions(self, preserve_hue: bool = True) -> list[Color]:
        """Return a one-element list with the first compliant color found."""
        if self._passes(self.target_color):
            return [self.target_color]

        hue, saturation, lightness = self.target_color.hsl(cache=self.cache)
        alpha = self.target_color.alpha
        needs_darkening = self.base_color.luminance(cache=self.cache) > 0.5

        if preserve_hue:
            for i in range(1, LIGHTNESS_STEPS + 1):
                fraction = i / LIGHTNESS_STEPS
                if needs_darkening:
                    adjusted = max(0.0, lightness - fraction * lightness)
                else:
                    adjusted = min(1.0, lightness + fraction * (1.0 - lightness))
                candidate = Color.from_hsl(hue, saturation, adjusted, alpha)
                if self._passes(candidate):
                    return [candidate]

        extreme = 0.0 if needs_darkening else 1.0
        for factor in SATURATION_FACTORS:
            candidate = Color.from_hsl(hue, saturation * factor, extreme, alpha)
            if self._passes(candidate):
                return [candidate]

        fallback = BLACK if needs_darkening else WHITE
        logger.debug(
            "No adjusted color for %s on %s reached %s, falling back to %s",
            self.target_color.hex(),
            self.base_color.hex(),
            self.target_level.label,
            fallback.hex(),
        )
        return [fallback]


def suggest_accessible_colors(
    base_color: Color,
    target_color: Color,
    level: WCAGContrastLevel = WCAGContrastLevel.AA,
    preserve_hue: bool = True,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    """Shortcut for ``ColorSuggestionEngine(...).generate_suggestions()``.

    Example:
        >>> from chromakit.colors import WHITE
        >>> gray = Color.from_rgb255(200, 200, 200)
        >>> [c.hex() for c in suggest_accessible_colors(WHITE, gray)]
        ['#646464FF']
    """
    engine = ColorSuggestionEngine(base_color, target_color, level, cache=cache)
    return engine.generate_suggestions(preserve_hue=preserve_hue)
