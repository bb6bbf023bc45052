"""Side-by-side comparison of two colors."""

import math
from dataclasses import dataclass
from typing import Optional

from .cache import ConversionCache
from .colors import Color
from .wcag import WCAGContrastLevel, evaluate

__all__ = ["ColorDifference", "compare"]


@dataclass(frozen=True)
class ColorDifference:
    """Differences between two colors.

    Attributes:
        rgb_difference: Absolute per-channel difference, each in [0, 1]
        hsl_difference: Hue in degrees along the shorter arc (0-180),
            saturation and lightness in percentage points
        perceptual_difference: RGB Euclidean distance in 0-255 units
            divided by sqrt(3), so it stays within 0-255
        contrast_ratio: WCAG contrast ratio between the colors
        wcag_levels: Levels the pair satisfies, ascending
    """

    rgb_difference: tuple[float, float, float]
    hsl_difference: tuple[float, float, float]
    perceptual_difference: float
    contrast_ratio: float
    wcag_levels: tuple[WCAGContrastLevel, ...]

    def summary(self) -> str:
        r, g, b = self.rgb_difference
        h, s, l = self.hsl_difference  # noqa: E741
        levels = ", ".join(level.label for level in self.wcag_levels) or "none"
        return "\n".join(
            [
                f"RGB difference: R {r * 100:.1f}%, G {g * 100:.1f}%, B {b * 100:.1f}%",
                f"HSL difference: H {h:.1f}°, S {s:.1f}%, L {l:.1f}%",
                f"Perceptual difference: {self.perceptual_difference:.2f}",
                f"Contrast ratio: {self.contrast_ratio:.2f}:1",
                f"WCAG levels passed: {levels}",
            ]
        )


def compare(
    color1: Color, color2: Color, cache: Optional[ConversionCache] = None
) -> ColorDifference:
    rgb_diff = tuple(abs(c1 - c2) for c1, c2 in zip(color1.rgb, color2.rgb))

    h1, s1, l1 = color1.hsl(cache=cache)
    h2, s2, l2 = color2.hsl(cache=cache)
    hue_diff = abs(h1 - h2)
    hsl_diff = (
        min(hue_diff, 1.0 - hue_diff) * 360.0,
        abs(s1 - s2) * 100.0,
        abs(l1 - l2) * 100.0,
    )

    perceptual = math.sqrt(sum((d * 255.0) ** 2 for d in rgb_diff)) / math.sqrt(3)
    compliance = evaluate(color1, color2, cache=cache)

    return ColorDifference(
        rgb_difference=rgb_diff,
        hsl_difference=hsl_diff,
        perceptual_difference=perceptual,
        contrast_ratio=compliance.contrast_ratio,
        wcag_levels=tuple(compliance.passes()),
    )
