"""Test configuration and fixtures for chromakit tests."""

from typing import List, Tuple

import pytest
from hypothesis import HealthCheck, settings

from chromakit.cache import ConversionCache, set_default_cache
from chromakit.colors import Color

# Configure hypothesis settings for faster tests
settings.register_profile(
    "fast",
    max_examples=20,
    deadline=5000,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("fast")


@pytest.fixture
def sample_colors() -> List[Color]:
    """Provide sample colors for testing."""
    return [
        Color(0.0, 0.0, 0.0),      # Black
        Color(1.0, 1.0, 1.0),      # White
        Color(1.0, 0.0, 0.0),      # Red
        Color(0.0, 1.0, 0.0),      # Green
        Color(0.0, 0.0, 1.0),      # Blue
        Color(0.5, 0.5, 0.5),      # Gray
        Color(1.0, 1.0, 0.0),      # Yellow
        Color(1.0, 0.0, 1.0),      # Magenta
        Color(0.0, 1.0, 1.0),      # Cyan
    ]


@pytest.fixture
def known_luminance_values() -> List[Tuple[Color, float]]:
    """Provide colors with known luminance values for testing."""
    return [
        (Color(0.0, 0.0, 0.0), 0.0),           # Black
        (Color(1.0, 1.0, 1.0), 1.0),           # White
        (Color(1.0, 0.0, 0.0), 0.2126),        # Red
        (Color(0.0, 1.0, 0.0), 0.7152),        # Green
        (Color(0.0, 0.0, 1.0), 0.0722),        # Blue
    ]


@pytest.fixture
def color_format_examples() -> List[Tuple[str, Tuple[float, float, float]]]:
    """Provide examples of different color formats with expected RGB values."""
    return [
        ("#FF0000", (1.0, 0.0, 0.0)),     # Hex red
        ("#00ff00", (0.0, 1.0, 0.0)),     # Hex green, lowercase
        ("0000FF", (0.0, 0.0, 1.0)),      # Hex blue, no hash
        ("#FFFFFFFF", (1.0, 1.0, 1.0)),   # Hex white with alpha
        ("rgb(255, 0, 0)", (1.0, 0.0, 0.0)),
        ("rgb(128, 128, 128)", (128 / 255, 128 / 255, 128 / 255)),
        ("hsl(120, 100%, 50%)", (0.0, 1.0, 0.0)),
        ("hsv(240, 100%, 100%)", (0.0, 0.0, 1.0)),
        ("white", (1.0, 1.0, 1.0)),
    ]


@pytest.fixture
def invalid_color_formats() -> List[str]:
    """Provide examples of invalid color format strings."""
    return [
        "invalid",
        "#GG0000",             # Invalid hex characters
        "#FF00",               # Too short hex
        "#FF0000000",          # Nine digits
        "rgb(256, 0, 0)",      # RGB value out of range
        "rgb(-1, 0, 0)",       # Negative RGB value
        "rgb(255, 0)",         # Missing RGB component
        "rgba(0, 0, 0, 2)",    # Alpha out of range
        "hsl(361, 50%, 50%)",  # HSL hue out of range
        "hsl(180, 101%, 50%)", # HSL saturation out of range
        "hsv(180, 50%, 101%)", # HSV value out of range
        "",                    # Empty string
        "   ",                 # Whitespace only
    ]


@pytest.fixture
def cache() -> ConversionCache:
    """Provide an isolated conversion cache."""
    return ConversionCache()


@pytest.fixture(autouse=True)
def reset_default_cache():
    """Give every test a fresh process-wide cache."""
    set_default_cache(None)
    yield
    set_default_cache(None)


class ColorTestHelpers:
    """Helper class with utility methods for color testing."""

    @staticmethod
    def is_valid_color(color: Color) -> bool:
        """Check if RGBA values are in valid [0,1] range."""
        return all(0.0 <= c <= 1.0 for c in color)

    @staticmethod
    def colors_approximately_equal(
        color1: Tuple[float, ...],
        color2: Tuple[float, ...],
        tolerance: float = 0.01,
    ) -> bool:
        """Check if two colors are approximately equal within tolerance."""
        return all(abs(c1 - c2) < tolerance for c1, c2 in zip(color1, color2))


@pytest.fixture
def color_helpers() -> ColorTestHelpers:
    """Provide helper methods for color testing."""
    return ColorTestHelpers()
