"""chromakit - color conversions, WCAG contrast and accessible palettes"""

import logging

__version__ = "0.1.0"

from .blending import BlendMode, GradientColorSpace, blend, interpolate, linear_gradient
from .cache import ConversionCache, get_default_cache, set_default_cache
from .color_utils import format_color_output, parse_color
from .colors import BLACK, WHITE, Color, ColorComponents
from .comparison import ColorDifference, compare
from .enhancer import (
    AccessibilityEnhancer,
    AdjustmentStrategy,
    EnhancerConfiguration,
    is_perceptually_similar,
)
from .palette import AccessiblePaletteGenerator, PaletteConfiguration, PaletteSizeWarning
from .suggestions import ColorSuggestionEngine, suggest_accessible_colors
from .theme import ColorTheme, ThemeColorSet
from .wcag import (
    WCAGComplianceResult,
    WCAGContrastLevel,
    adjusted_for_accessibility,
    adjusted_for_mode,
    evaluate,
    is_dark_color,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Color",
    "ColorComponents",
    "BLACK",
    "WHITE",
    "ConversionCache",
    "get_default_cache",
    "set_default_cache",
    "WCAGContrastLevel",
    "WCAGComplianceResult",
    "evaluate",
    "is_dark_color",
    "adjusted_for_mode",
    "adjusted_for_accessibility",
    "ColorSuggestionEngine",
    "suggest_accessible_colors",
    "AccessibilityEnhancer",
    "AdjustmentStrategy",
    "EnhancerConfiguration",
    "is_perceptually_similar",
    "AccessiblePaletteGenerator",
    "PaletteConfiguration",
    "PaletteSizeWarning",
    "ColorTheme",
    "ThemeColorSet",
    "BlendMode",
    "GradientColorSpace",
    "blend",
    "interpolate",
    "linear_gradient",
    "ColorDifference",
    "compare",
    "parse_color",
    "format_color_output",
]
