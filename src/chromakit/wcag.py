"""WCAG 2.x contrast compliance for chromakit."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .cache import ConversionCache
from .colors import BLACK, WHITE, Color

__all__ = [
    "WCAGContrastLevel",
    "WCAGComplianceResult",
    "evaluate",
    "suggested_color",
    "accessible_contrasting_color",
    "is_dark_color",
    "adjusted_for_mode",
    "adjusted_for_accessibility",
]

logger = logging.getLogger(__name__)

MODE_LIGHTNESS_SHIFT = 0.3
ACCESSIBILITY_STEP = 0.05
# One full sweep of the lightness range
ACCESSIBILITY_MAX_STEPS = 20


class WCAGContrastLevel(Enum):
    """WCAG conformance levels and their minimum contrast ratios.

    AA and AAA_LARGE share the 4.5 threshold but stay distinct members: one is
    normal-size text at AA, the other large text at AAA.
    """

    AA_LARGE = ("AA Large", 3.0)
    AA = ("AA", 4.5)
    AAA_LARGE = ("AAA Large", 4.5)
    AAA = ("AAA", 7.0)

    def __init__(self, label: str, minimum_ratio: float):
        self.label = label
        self.minimum_ratio = minimum_ratio

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "WCAGContrastLevel":
        """Look a level up by member name or label, ignoring case and separators.

        Raises:
            ValueError: If no level matches.
        """
        wanted = name.strip().lower().replace("-", "_").replace(" ", "_")
        for level in cls:
            if wanted in (level.name.lower(), level.label.lower().replace(" ", "_")):
                return level
        raise ValueError(
            f"Unknown WCAG level '{name}'. "
            f"Expected one of: {', '.join(level.label for level in cls)}"
        )


_DESCRIPTIONS = {
    WCAGContrastLevel.AA_LARGE: "Minimum contrast for large text (18pt+ or 14pt+ bold)",
    WCAGContrastLevel.AA: "Minimum contrast for normal text",
    WCAGContrastLevel.AAA_LARGE: "Enhanced contrast for large text",
    WCAGContrastLevel.AAA: "Enhanced contrast for normal text",
}

# Most stringent first.
_STRINGENCY_DESCENDING = (
    WCAGContrastLevel.AAA,
    WCAGContrastLevel.AAA_LARGE,
    WCAGContrastLevel.AA,
    WCAGContrastLevel.AA_LARGE,
)


@dataclass(frozen=True)
class WCAGComplianceResult:
    """Pass/fail flags for one contrast ratio, derived by threshold comparison."""

    contrast_ratio: float
    passes_aa: bool
    passes_aa_large: bool
    passes_aaa: bool
    passes_aaa_large: bool

    @classmethod
    def from_ratio(cls, contrast_ratio: float) -> "WCAGComplianceResult":
        return cls(
            contrast_ratio=contrast_ratio,
            passes_aa=contrast_ratio >= WCAGContrastLevel.AA.minimum_ratio,
            passes_aa_large=contrast_ratio >= WCAGContrastLevel.AA_LARGE.minimum_ratio,
            passes_aaa=contrast_ratio >= WCAGContrastLevel.AAA.minimum_ratio,
            passes_aaa_large=contrast_ratio >= WCAGContrastLevel.AAA_LARGE.minimum_ratio,
        )

    def passes_level(self, level: WCAGContrastLevel) -> bool:
        return {
            WCAGContrastLevel.AA_LARGE: self.passes_aa_large,
            WCAGContrastLevel.AA: self.passes_aa,
            WCAGContrastLevel.AAA_LARGE: self.passes_aaa_large,
            WCAGContrastLevel.AAA: self.passes_aaa,
        }[level]

    def highest_level(self) -> Optional[WCAGContrastLevel]:
        """The most stringent level satisfied, or None."""
        for level in _STRINGENCY_DESCENDING:
            if self.passes_level(level):
                return level
        return None

    def passes(self) -> list[WCAGContrastLevel]:
        """All satisfied levels in ascending stringency."""
        return [level for level in WCAGContrastLevel if self.passes_level(level)]


def evaluate(
    foreground: Color, background: Color, cache: Optional[ConversionCache] = None
) -> WCAGComplianceResult:
    """Evaluate a foreground/background pair against every WCAG level.

    Example:
        >>> evaluate(BLACK, WHITE).highest_level()
        <WCAGContrastLevel.AAA: ('AAA', 7.0)>
    """
    return WCAGComplianceResult.from_ratio(foreground.contrast_ratio(background, cache=cache))


def suggested_color(color: Color, cache: Optional[ConversionCache] = None) -> Color:
    """Black for light colors, white for dark ones."""
    return WHITE if is_dark_color(color, cache=cache) else BLACK


def accessible_contrasting_color(
    color: Color,
    level: WCAGContrastLevel = WCAGContrastLevel.AA,
    cache: Optional[ConversionCache] = None,
) -> Color:
    """Black or white for `color`; if that still fails, a lightness-pinned tint.

    The fallback keeps the color's hue and saturation and pins lightness to
    0.9 for dark colors or 0.1 for light ones.
    """
    candidate = suggested_color(color, cache=cache)
    if evaluate(candidate, color, cache=cache).passes_level(level):
        return candidate

    hue, saturation, lightness = color.hsl(cache=cache)
    pinned = 0.9 if lightness < 0.5 else 0.1
    return Color.from_hsl(hue, saturation, pinned, color.alpha)


def is_dark_color(color: Color, cache: Optional[ConversionCache] = None) -> bool:
    """True when the relative luminance is below 0.5."""
    return color.luminance(cache=cache) < 0.5


def adjusted_for_mode(
    color: Color, dark_mode: bool, cache: Optional[ConversionCache] = None
) -> Color:
    """Lighten by 0.3 HSL lightness for dark mode, darken by 0.3 for light mode."""
    hue, saturation, lightness = color.hsl(cache=cache)
    shift = MODE_LIGHTNESS_SHIFT if dark_mode else -MODE_LIGHTNESS_SHIFT
    return Color.from_hsl(hue, saturation, min(max(lightness + shift, 0.0), 1.0), color.alpha)


def adjusted_for_accessibility(
    color: Color,
    background: Color,
    minimum_ratio: float = WCAGContrastLevel.AA.minimum_ratio,
    cache: Optional[ConversionCache] = None,
) -> Color:
    """Move `color`'s HSL lightness until it reaches `minimum_ratio` on `background`.

    Each round tries one step lighter and one step darker and returns the
    first that passes. Otherwise it continues from whichever raised contrast
    more, and stops once lightness hits 0 or 1. Colors that already pass are
    returned unchanged. When the walk fails the result is white on dark
    backgrounds and black on light ones, with the input alpha.

    Example:
        >>> gray = Color.from_hex("#888888")
        >>> adjusted_for_accessibility(gray, WHITE).contrast_ratio(WHITE) >= 4.5
        True
    """
    if color.contrast_ratio(background, cache=cache) >= minimum_ratio:
        return color

    hue, saturation, lightness = color.hsl(cache=cache)
    for _ in range(ACCESSIBILITY_MAX_STEPS):
        lighter = Color.from_hsl(
            hue, saturation, min(1.0, lightness + ACCESSIBILITY_STEP), color.alpha
        )
        darker = Color.from_hsl(
            hue, saturation, max(0.0, lightness - ACCESSIBILITY_STEP), color.alpha
        )
        lighter_ratio = lighter.contrast_ratio(background, cache=cache)
        darker_ratio = darker.contrast_ratio(background, cache=cache)

        if lighter_ratio >= minimum_ratio:
            return lighter
        if darker_ratio >= minimum_ratio:
            return darker

        if lighter_ratio > darker_ratio:
            lightness = min(1.0, lightness + ACCESSIBILITY_STEP)
        else:
            lightness = max(0.0, lightness - ACCESSIBILITY_STEP)
        if lightness in (0.0, 1.0):
            break

    fallback = WHITE if is_dark_color(background, cache=cache) else BLACK
    logger.debug(
        "Lightness walk for %s on %s stopped below %.2f:1, falling back to %s",
        color.hex(),
        background.hex(),
        minimum_ratio,
        fallback.hex(),
    )
    return fallback.with_alpha(color.alpha)
