"""Blend modes, interpolation and gradients.

Blend modes follow the separable formulas used by image editors and work per
RGB channel. Interpolation runs in RGB, HSL (taking the short way around the
hue circle) or LAB. Full-strength blends and all interpolations are memoized
in the conversion cache.
"""

import math
from enum import Enum
from typing import Callable, Optional

from .cache import ConversionCache, resolve_cache
from .colors import Color

__all__ = [
    "BlendMode",
    "GradientColorSpace",
    "blend",
    "interpolate",
    "linear_gradient",
    "complementary_gradient",
    "analogous_gradient",
    "triadic_gradient",
    "monochromatic_gradient",
]

DEFAULT_ANALOGOUS_ANGLE = 0.0833
DEFAULT_LIGHTNESS_RANGE = (0.1, 0.9)


def _overlay(base: float, other: float) -> float:
    if base < 0.5:
        return 2 * base * other
    return 1 - 2 * (1 - base) * (1 - other)


def _soft_light(base: float, other: float) -> float:
    if other < 0.5:
        return base - (1 - 2 * other) * base * (1 - base)
    if base <= 0.25:
        d = ((16 * base - 12) * base + 4) * base
    else:
        d = math.sqrt(base)
    return base + (2 * other - 1) * (d - base)


def _color_dodge(base: float, other: float) -> float:
    if other >= 1:
        return 1.0
    if other <= 0:
        return base
    return min(1.0, base / (1 - other))


def _color_burn(base: float, other: float) -> float:
    if other <= 0:
        return 0.0
    if other >= 1:
        return base
    return 1 - min(1.0, (1 - base) / other)


_CHANNEL_FUNCTIONS: dict[str, Callable[[float, float], float]] = {
    "normal": lambda base, other: other,
    "multiply": lambda base, other: base * other,
    "screen": lambda base, other: 1 - (1 - base) * (1 - other),
    "overlay": _overlay,
    "darken": min,
    "lighten": max,
    "color-dodge": _color_dodge,
    "color-burn": _color_burn,
    "hard-light": lambda base, other: _overlay(other, base),
    "soft-light": _soft_light,
    "difference": lambda base, other: abs(base - other),
    "exclusion": lambda base, other: base + other - 2 * base * other,
}


class BlendMode(str, Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "color-dodge"
    COLOR_BURN = "color-burn"
    HARD_LIGHT = "hard-light"
    SOFT_LIGHT = "soft-light"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"

    def apply(
        self, base: tuple[float, float, float], other: tuple[float, float, float]
    ) -> tuple[float, float, float]:
        """Blend two RGB triples channel by channel, ignoring alpha."""
        function = _CHANNEL_FUNCTIONS[self.value]
        r, g, b = (function(c1, c2) for c1, c2 in zip(base, other))
        return (r, g, b)


class GradientColorSpace(str, Enum):
    RGB = "rgb"
    HSL = "hsl"
    LAB = "lab"


def blend(
    base: Color,
    other: Color,
    mode: BlendMode = BlendMode.NORMAL,
    amount: float = 1.0,
    cache: Optional[ConversionCache] = None,
) -> Color:
    """Blend `other` over `base`.

    The blended channels are mixed back into `base` by ``amount`` scaled by
    the alpha of `other`; the result keeps the alpha of `base`.

    Example:
        >>> from chromakit.colors import WHITE, RED
        >>> blend(WHITE, RED, BlendMode.MULTIPLY).hex()
        '#FF0000FF'
    """
    if amount <= 0:
        return base

    cache = resolve_cache(cache)
    full_strength = amount >= 1.0
    if full_strength:
        cached = cache.get_cached_blended_color(base, other, mode.value)
        if cached is not None:
            return cached

    blended = mode.apply(base.rgb, other.rgb)
    weight = min(1.0, amount) * other.alpha
    mixed = [c1 + (c2 - c1) * weight for c1, c2 in zip(base.rgb, blended)]
    result = Color.from_components((*mixed, base.alpha))

    if full_strength:
        cache.cache_blended_color(base, other, mode.value, result)
    return result


def interpolate(
    start: Color,
    end: Color,
    amount: float,
    color_space: GradientColorSpace = GradientColorSpace.RGB,
    cache: Optional[ConversionCache] = None,
) -> Color:
    """Interpolate between two colors.

    ``amount`` is clamped to [0, 1] and rounded to 3 decimals, so the cached
    and the computed result are always the same color. Alpha is interpolated
    linearly in every space.
    """
    amount = round(max(0.0, min(1.0, amount)), 3)
    cache = resolve_cache(cache)

    cached = cache.get_cached_interpolated_color(start, end, amount, color_space.value)
    if cached is not None:
        return cached

    alpha = start.alpha + (end.alpha - start.alpha) * amount
    if color_space is GradientColorSpace.HSL:
        result = _interpolate_hsl(start, end, amount, alpha, cache)
    elif color_space is GradientColorSpace.LAB:
        l1, a1, b1 = start.lab(cache=cache)
        l2, a2, b2 = end.lab(cache=cache)
        result = Color.from_lab(
            l1 + (l2 - l1) * amount,
            a1 + (a2 - a1) * amount,
            b1 + (b2 - b1) * amount,
            alpha,
        )
    else:
        mixed = [c1 + (c2 - c1) * amount for c1, c2 in zip(start.rgb, end.rgb)]
        result = Color.from_components((*mixed, alpha))

    cache.cache_interpolated_color(start, end, amount, color_space.value, result)
    return result


def _interpolate_hsl(
    start: Color, end: Color, amount: float, alpha: float, cache: ConversionCache
) -> Color:
    h1, s1, l1 = start.hsl(cache=cache)
    h2, s2, l2 = end.hsl(cache=cache)

    # Shortest way around the hue circle.
    if abs(h2 - h1) > 0.5:
        if h1 > h2:
            h2 += 1.0
        else:
            h1 += 1.0

    return Color.from_hsl(
        (h1 + (h2 - h1) * amount) % 1.0,
        s1 + (s2 - s1) * amount,
        l1 + (l2 - l1) * amount,
        alpha,
    )


def linear_gradient(
    start: Color,
    end: Color,
    steps: int,
    color_space: GradientColorSpace = GradientColorSpace.RGB,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    """`steps` evenly spaced colors from `start` to `end`, both included."""
    if steps <= 1:
        return [start]
    return [
        interpolate(start, end, step / (steps - 1), color_space, cache=cache)
        for step in range(steps)
    ]


def complementary_gradient(
    color: Color,
    steps: int,
    color_space: GradientColorSpace = GradientColorSpace.HSL,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    if steps <= 1:
        return [color]
    hue, saturation, lightness = color.hsl(cache=cache)
    complement = Color.from_hsl((hue + 0.5) % 1.0, saturation, lightness)
    return linear_gradient(color, complement, steps, color_space, cache=cache)


def analogous_gradient(
    color: Color,
    steps: int,
    angle: float = DEFAULT_ANALOGOUS_ANGLE,
    color_space: GradientColorSpace = GradientColorSpace.HSL,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    """Gradient across the hue band of width `angle` centered on `color`."""
    if steps <= 1:
        return [color]
    hue, saturation, lightness = color.hsl(cache=cache)
    first = Color.from_hsl((hue - angle / 2) % 1.0, saturation, lightness)
    last = Color.from_hsl((hue + angle / 2) % 1.0, saturation, lightness)
    return linear_gradient(first, last, steps, color_space, cache=cache)


def triadic_gradient(
    color: Color,
    steps: int,
    color_space: GradientColorSpace = GradientColorSpace.HSL,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    """Closed loop through the three triadic hues; joints are not repeated."""
    if steps <= 1:
        return [color]
    hue, saturation, lightness = color.hsl(cache=cache)
    second = Color.from_hsl((hue + 1 / 3) % 1.0, saturation, lightness)
    third = Color.from_hsl((hue + 2 / 3) % 1.0, saturation, lightness)

    result = linear_gradient(color, second, steps, color_space, cache=cache)
    result.extend(linear_gradient(second, third, steps, color_space, cache=cache)[1:])
    result.extend(linear_gradient(third, color, steps, color_space, cache=cache)[1:])
    return result


def monochromatic_gradient(
    color: Color,
    steps: int,
    lightness_range: tuple[float, float] = DEFAULT_LIGHTNESS_RANGE,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    if steps <= 1:
        return [color]
    hue, saturation, _ = color.hsl(cache=cache)
    low, high = lightness_range
    return [
        Color.from_hsl(hue, saturation, low + step / (steps - 1) * (high - low))
        for step in range(steps)
    ]
