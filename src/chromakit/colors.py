"""Color value type and color-model views for chromakit.

A :class:`Color` is an immutable sRGB value stored as four normalized floats
(red, green, blue, alpha). Every other representation (hex, HSL, HSB, LAB,
XYZ, CMYK) is derived on demand through :mod:`chromakit.conversions`; nothing
but RGBA is ever stored.

Key Features:
    - Constructors from RGBA floats, 8-bit RGB, hex strings, HSL, HSB, LAB and
      CMYK
    - Exporters to hex (``#RRGGBBAA``), HSL, HSB, LAB, XYZ, CMYK and a
      :class:`ColorComponents` bundle of all of them
    - Cached relative luminance and contrast ratio (WCAG 2.x)

Caching:
    HSL, LAB, luminance and contrast lookups go through a
    :class:`~chromakit.cache.ConversionCache`. Pass ``cache=`` to use an
    isolated instance; otherwise the process-wide default is used.

Example:
    >>> from chromakit.colors import Color, BLACK, WHITE
    >>> tuple(round(c, 3) for c in Color.from_hex("#0000FF").hsl())
    (0.667, 1.0, 0.5)
    >>> round(BLACK.contrast_ratio(WHITE), 2)
    21.0
    >>> Color.from_hex("not a color") is None
    True
"""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from . import conversions
from .cache import ConversionCache, resolve_cache

__all__ = [
    "Color",
    "HSL",
    "HSB",
    "LAB",
    "XYZ",
    "CMYK",
    "ColorComponents",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "ORANGE",
    "PURPLE",
    "YELLOW",
    "PINK",
    "GRAY",
]

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


class HSL(NamedTuple):
    hue: float
    saturation: float
    lightness: float


class HSB(NamedTuple):
    hue: float
    saturation: float
    brightness: float


class LAB(NamedTuple):
    l: float  # noqa: E741
    a: float
    b: float


class XYZ(NamedTuple):
    x: float
    y: float
    z: float


class CMYK(NamedTuple):
    cyan: float
    magenta: float
    yellow: float
    key: float


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


class Color(NamedTuple):
    """An sRGB color with normalized components in [0, 1].

    Build instances with the ``from_*`` constructors, which clamp their input.
    The plain tuple constructor stores the values as given.
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    # Constructors

    @classmethod
    def from_components(cls, components: Sequence[float]) -> "Color":
        """Build a color from any 3 or 4 normalized floats, clamped to [0, 1].

        This is the single boundary for bridging foreign color objects: any
        value that can yield RGB or RGBA floats becomes a Color here.
        """
        values = [float(c) for c in components]
        if len(values) not in (3, 4):
            raise ValueError(
                f"Expected 3 or 4 color components, got {len(values)}: {values}"
            )
        if len(values) == 3:
            values.append(1.0)
        return cls(*(_clamp(v) for v in values))

    @classmethod
    def from_rgb255(cls, red: int, green: int, blue: int, alpha: float = 1.0) -> "Color":
        return cls.from_components((red / 255.0, green / 255.0, blue / 255.0, alpha))

    @classmethod
    def from_hex(cls, value: str) -> Optional["Color"]:
        """Parse ``#RRGGBB`` or ``#RRGGBBAA`` (``#`` optional, any case).

        Returns None when the string is not a 6 or 8 digit hex color.
        """
        hex_str = value.strip()
        if hex_str.startswith("#"):
            hex_str = hex_str[1:]
        if len(hex_str) not in (6, 8) or not _HEX_PATTERN.match(hex_str):
            return None

        channels = [int(hex_str[i : i + 2], 16) / 255.0 for i in range(0, len(hex_str), 2)]
        if len(channels) == 3:
            channels.append(1.0)
        return cls(*channels)

    @classmethod
    def from_hsl(
        cls, hue: float, saturation: float, lightness: float, alpha: float = 1.0
    ) -> "Color":
        return cls(*conversions.hsl_to_rgb(hue, saturation, lightness), _clamp(alpha))

    @classmethod
    def from_hsb(
        cls, hue: float, saturation: float, brightness: float, alpha: float = 1.0
    ) -> "Color":
        return cls(*conversions.hsb_to_rgb(hue, saturation, brightness), _clamp(alpha))

    @classmethod
    def from_lab(cls, l: float, a: float, b: float, alpha: float = 1.0) -> "Color":  # noqa: E741
        return cls(*conversions.lab_to_rgb(l, a, b), _clamp(alpha))

    @classmethod
    def from_cmyk(
        cls, cyan: float, magenta: float, yellow: float, key: float, alpha: float = 1.0
    ) -> "Color":
        return cls(*conversions.cmyk_to_rgb(cyan, magenta, yellow, key), _clamp(alpha))

    # Views

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def rgba(self) -> tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)

    def with_alpha(self, alpha: float) -> "Color":
        return self._replace(alpha=_clamp(alpha))

    def hex(self) -> str:
        """Uppercase ``#RRGGBBAA`` representation, alpha always included."""
        return "#" + "".join(f"{round(_clamp(c) * 255):02X}" for c in self.rgba())

    def hsl(self, cache: Optional[ConversionCache] = None) -> HSL:
        cache = resolve_cache(cache)
        cached = cache.get_cached_hsl(self)
        if cached is not None:
            return HSL(*cached)
        hsl = HSL(*conversions.rgb_to_hsl(self.rgb))
        cache.cache_hsl(self, hsl)
        return hsl

    def hsb(self) -> HSB:
        return HSB(*conversions.rgb_to_hsb(self.rgb))

    def lab(self, cache: Optional[ConversionCache] = None) -> LAB:
        cache = resolve_cache(cache)
        cached = cache.get_cached_lab(self)
        if cached is not None:
            return LAB(*cached)
        lab = LAB(*conversions.rgb_to_lab(self.rgb))
        cache.cache_lab(self, lab)
        return lab

    def xyz(self) -> XYZ:
        return XYZ(*conversions.rgb_to_xyz(self.rgb))

    def cmyk(self) -> CMYK:
        return CMYK(*conversions.rgb_to_cmyk(self.rgb))

    def hsl_string(self) -> str:
        hue, saturation, lightness = self.hsl()
        return f"hsl({int(hue * 360)}, {int(saturation * 100)}%, {int(lightness * 100)}%)"

    def lab_string(self) -> str:
        return "lab({:.1f}, {:.1f}, {:.1f})".format(*self.lab())

    def cmyk_string(self) -> str:
        c, m, y, k = (int(v * 100) for v in self.cmyk())
        return f"cmyk({c}%, {m}%, {y}%, {k}%)"

    def components(self) -> "ColorComponents":
        return ColorComponents(
            rgb=self.rgba(),
            hsl=self.hsl(),
            hsb=self.hsb(),
            cmyk=self.cmyk(),
            lab=self.lab(),
            xyz=self.xyz(),
        )

    # WCAG

    def luminance(self, cache: Optional[ConversionCache] = None) -> float:
        """WCAG relative luminance of the RGB channels (alpha is ignored)."""
        cache = resolve_cache(cache)
        cached = cache.get_cached_luminance(self)
        if cached is not None:
            return cached
        luminance = conversions.compute_luminance(self.rgb)
        cache.cache_luminance(self, luminance)
        return luminance

    def contrast_ratio(self, other: "Color", cache: Optional[ConversionCache] = None) -> float:
        """WCAG contrast ratio against another color, in [1, 21]."""
        cache = resolve_cache(cache)
        cached = cache.get_cached_contrast_ratio(self, other)
        if cached is not None:
            return cached
        ratio = conversions.luminance_contrast_ratio(
            self.luminance(cache=cache), other.luminance(cache=cache)
        )
        cache.cache_contrast_ratio(self, other, ratio)
        return ratio

    def delta_e(self, other: "Color", cache: Optional[ConversionCache] = None) -> float:
        """CIE76 distance to another color."""
        return conversions.delta_e_cie76(self.lab(cache=cache), other.lab(cache=cache))


@dataclass(frozen=True)
class ColorComponents:
    """Every derived view of one color, computed together."""

    rgb: tuple[float, float, float, float]
    hsl: HSL
    hsb: HSB
    cmyk: CMYK
    lab: LAB
    xyz: XYZ

    def describe(self) -> str:
        r, g, b, a = self.rgb
        lines = [
            "RGB:",
            f"- Red: {r * 255:.2f} ({r:.2f})",
            f"- Green: {g * 255:.2f} ({g:.2f})",
            f"- Blue: {b * 255:.2f} ({b:.2f})",
            f"- Alpha: {a:.2f}",
            "",
            "HSL:",
            f"- Hue: {self.hsl.hue * 360:.2f}°",
            f"- Saturation: {self.hsl.saturation * 100:.2f}%",
            f"- Lightness: {self.hsl.lightness * 100:.2f}%",
            "",
            "HSB:",
            f"- Hue: {self.hsb.hue * 360:.2f}°",
            f"- Saturation: {self.hsb.saturation * 100:.2f}%",
            f"- Brightness: {self.hsb.brightness * 100:.2f}%",
            "",
            "CMYK:",
            f"- Cyan: {self.cmyk.cyan * 100:.2f}%",
            f"- Magenta: {self.cmyk.magenta * 100:.2f}%",
            f"- Yellow: {self.cmyk.yellow * 100:.2f}%",
            f"- Key: {self.cmyk.key * 100:.2f}%",
            "",
            "LAB:",
            f"- L: {self.lab.l:.2f}",
            f"- a: {self.lab.a:.2f}",
            f"- b: {self.lab.b:.2f}",
            "",
            "XYZ:",
            f"- X: {self.xyz.x:.2f}",
            f"- Y: {self.xyz.y:.2f}",
            f"- Z: {self.xyz.z:.2f}",
        ]
        return "\n".join(lines)

    def as_dict(self) -> dict:
        return {
            "rgb": dict(zip(("red", "green", "blue", "alpha"), self.rgb)),
            "hsl": self.hsl._asdict(),
            "hsb": self.hsb._asdict(),
            "cmyk": self.cmyk._asdict(),
            "lab": self.lab._asdict(),
            "xyz": self.xyz._asdict(),
        }


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
ORANGE = Color(1.0, 0.5, 0.0)
PURPLE = Color(0.5, 0.0, 0.5)
YELLOW = Color(1.0, 1.0, 0.0)
PINK = Color(1.0, 0.75, 0.8)
GRAY = Color(0.5, 0.5, 0.5)
