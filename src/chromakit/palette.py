"""Accessible palette and theme generation from a single seed color.

Palettes are randomized: each candidate rotates the seed's hue by a random
amount in [0.2, 0.8] and pushes its lightness 0.4 away from the seed's. A
candidate joins the palette only if it is not similar in HSL to any color
already in it. Pass ``rng`` (a ``numpy.random.Generator`` or an integer seed)
to make the sequence reproducible.

Themes are deterministic and derived by hue rotation alone.

Example:
    >>> from chromakit.colors import BLUE
    >>> generator = AccessiblePaletteGenerator(rng=42)
    >>> len(generator.generate_palette(BLUE))
    5
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .cache import ConversionCache
from .colors import BLACK, BLUE, GREEN, ORANGE, PINK, PURPLE, RED, WHITE, YELLOW, Color
from .enhancer import AccessibilityEnhancer, AdjustmentStrategy, EnhancerConfiguration
from .theme import ColorTheme
from .wcag import WCAGContrastLevel

__all__ = [
    "PaletteConfiguration",
    "PaletteSizeWarning",
    "AccessiblePaletteGenerator",
    "generate_accessible_palette",
]

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 100
MIN_PALETTE_SIZE = 2

HUE_SHIFT_RANGE = (0.2, 0.8)
LIGHTNESS_SHIFT = 0.4
SATURATION_BOOST = 0.1
PINNED_LIGHT = 0.9
PINNED_DARK = 0.1

SIMILAR_HUE = 0.15
SIMILAR_SATURATION = 0.25
SIMILAR_LIGHTNESS = 0.25

FALLBACK_COLORS = (RED, GREEN, BLUE, ORANGE, PURPLE, YELLOW, PINK)

RandomSource = Union[np.random.Generator, int, None]


class PaletteSizeWarning(UserWarning):
    """Emitted when a palette comes out smaller than requested."""


@dataclass(frozen=True)
class PaletteConfiguration:
    """Settings for :class:`AccessiblePaletteGenerator`.

    ``palette_size`` values below 2 are raised to 2.
    """

    target_level: WCAGContrastLevel = WCAGContrastLevel.AA
    palette_size: int = 5
    include_black_and_white: bool = True

    def __post_init__(self):
        if self.palette_size < MIN_PALETTE_SIZE:
            object.__setattr__(self, "palette_size", MIN_PALETTE_SIZE)

    @property
    def minimum_contrast_ratio(self) -> float:
        return self.target_level.minimum_ratio


class AccessiblePaletteGenerator:
    """Generate palettes and themes that respect a WCAG contrast level.

    Args:
        configuration: Palette settings; defaults to AA, five colors, black
            and white included
        rng: Random source for palette generation
        cache: Optional conversion cache; the default cache is used otherwise
    """

    def __init__(
        self,
        configuration: Optional[PaletteConfiguration] = None,
        rng: RandomSource = None,
        cache: Optional[ConversionCache] = None,
    ):
        self.configuration = configuration or PaletteConfiguration()
        self.rng = np.random.default_rng(rng)
        self.cache = cache

    def generate_palette(self, seed: Color) -> list[Color]:
        """Build a palette starting with `seed`.

        Black and white follow the seed when enabled, except one that is
        similar to the seed itself, so no two entries are ever similar.

        The palette may be shorter than ``palette_size`` when neither random
        generation nor the fallback colors yield enough distinct entries; a
        :class:`PaletteSizeWarning` is emitted in that case.
        """
        target_size = self.configuration.palette_size
        palette = [seed]
        if self.configuration.include_black_and_white:
            for extreme in (BLACK, WHITE):
                if not self.are_colors_similar(seed, extreme):
                    palette.append(extreme)

        attempts = 0
        while len(palette) < target_size and attempts < MAX_ATTEMPTS:
            attempts += 1
            candidate = self._generate_contrasting_color(seed)
            if not any(self.are_colors_similar(existing, candidate) for existing in palette):
                palette.append(candidate)

        if len(palette) < target_size:
            logger.debug(
                "Random generation gave %d of %d colors after %d attempts, using fallbacks",
                len(palette),
                target_size,
                attempts,
            )
            for fallback in FALLBACK_COLORS:
                if len(palette) >= target_size:
                    break
                if not any(self.are_colors_similar(existing, fallback) for existing in palette):
                    palette.append(fallback)

        if len(palette) < target_size:
            warnings.warn(
                f"Generated {len(palette)} of {target_size} requested colors for seed "
                f"{seed.hex()}",
                PaletteSizeWarning,
                stacklevel=2,
            )

        return palette

    def generate_theme(
        self, seed: Color, name: str, ensure_contrast: bool = False
    ) -> ColorTheme:
        """Derive a theme from `seed` without randomness.

        Background is black for light seeds and white for dark ones; text is
        the opposite. Secondary and accent are hue rotations of the seed and
        are not checked against the background unless ``ensure_contrast`` is
        set, in which case both are enhanced (preserving hue) to the
        configured level.
        """
        hue, saturation, lightness = seed.hsl(cache=self.cache)

        if seed.luminance(cache=self.cache) > 0.5:
            background, text = BLACK, WHITE
        else:
            background, text = WHITE, BLACK

        accent = Color.from_hsl(
            (hue + 0.5) % 1.0, min(saturation + SATURATION_BOOST, 1.0), lightness, seed.alpha
        )
        secondary = Color.from_hsl((hue + 0.25) % 1.0, saturation, lightness, seed.alpha)

        if ensure_contrast:
            enhancer = AccessibilityEnhancer(
                EnhancerConfiguration(
                    target_level=self.configuration.target_level,
                    strategy=AdjustmentStrategy.PRESERVE_HUE,
                ),
                cache=self.cache,
            )
            secondary = enhancer.enhance_color(secondary, background)
            accent = enhancer.enhance_color(accent, background)

        return ColorTheme.from_colors(
            name=name,
            primary=seed,
            secondary=secondary,
            accent=accent,
            background=background,
            text=text,
        )

    def are_colors_similar(self, color1: Color, color2: Color) -> bool:
        """True when hue, saturation and lightness are all close."""
        h1, s1, l1 = color1.hsl(cache=self.cache)
        h2, s2, l2 = color2.hsl(cache=self.cache)

        hue_diff = abs(h1 - h2)
        hue_diff = min(hue_diff, 1.0 - hue_diff)

        return (
            hue_diff < SIMILAR_HUE
            and abs(s1 - s2) < SIMILAR_SATURATION
            and abs(l1 - l2) < SIMILAR_LIGHTNESS
        )

    def _generate_contrasting_color(self, seed: Color) -> Color:
        hue, saturation, lightness = seed.hsl(cache=self.cache)

        new_hue = (hue + self.rng.uniform(*HUE_SHIFT_RANGE)) % 1.0
        if lightness < 0.5:
            new_lightness = min(lightness + LIGHTNESS_SHIFT, 1.0)
        else:
            new_lightness = max(lightness - LIGHTNESS_SHIFT, 0.0)
        new_saturation = min(saturation + SATURATION_BOOST, 1.0)

        candidate = Color.from_hsl(new_hue, new_saturation, new_lightness)
        if seed.contrast_ratio(candidate, cache=self.cache) >= self.configuration.minimum_contrast_ratio:
            return candidate

        pinned = PINNED_LIGHT if lightness < 0.5 else PINNED_DARK
        return Color.from_hsl(new_hue, new_saturation, pinned)


def generate_accessible_palette(
    seed: Color,
    target_level: WCAGContrastLevel = WCAGContrastLevel.AA,
    palette_size: int = 5,
    include_black_and_white: bool = True,
    rng: RandomSource = None,
    cache: Optional[ConversionCache] = None,
) -> list[Color]:
    configuration = PaletteConfiguration(
        target_level=target_level,
        palette_size=palette_size,
        include_black_and_white=include_black_and_white,
    )
    return AccessiblePaletteGenerator(configuration, rng=rng, cache=cache).generate_palette(seed)
