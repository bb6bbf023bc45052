"""Color space math for chromakit.

Pure, stateless conversions between sRGB and the derived color models used
across the package. Every function takes and returns plain float tuples so the
math can be reused without the :class:`~chromakit.colors.Color` wrapper.

Supported conversions:
    - sRGB <-> HSL and sRGB <-> HSB (via colour-science cylindrical models)
    - sRGB <-> CIE XYZ <-> CIE L*a*b* (D65 reference white)
    - sRGB <-> CMYK (naive key extraction, not ICC accurate)
    - WCAG 2.x relative luminance and contrast ratio
    - CIE76 color difference

Conventions:
    - RGB, HSL, HSB and CMYK components are normalized to [0, 1]
    - Hue is circular and stored in [0, 1)
    - XYZ is scaled so that the D65 white has Y = 100
    - L* is in [0, 100], a* and b* in [-128, 127]

Dependencies:
    - colour-science: HSL/HSV models and CIE76 delta E
    - numpy: matrix products and vectorized linearization
"""

import colour
import numpy as np

__all__ = [
    "D65_WHITE",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsb",
    "hsb_to_rgb",
    "rgb_to_xyz",
    "xyz_to_lab",
    "rgb_to_lab",
    "lab_to_rgb",
    "rgb_to_cmyk",
    "cmyk_to_rgb",
    "compute_luminance",
    "contrast_ratio",
    "luminance_contrast_ratio",
    "delta_e_cie76",
]

RGB = tuple[float, float, float]
Triple = tuple[float, float, float]

# D65 reference white, Y normalized to 100.
D65_WHITE: Triple = (95.047, 100.0, 108.883)

_SRGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)

_XYZ_TO_SRGB = np.array(
    [
        [3.2404542, -1.5371385, -0.4985314],
        [-0.9692660, 1.8760108, 0.0415560],
        [0.0556434, -0.2040259, 1.0572252],
    ]
)

_LAB_EPSILON = 0.008856
_LAB_KAPPA = 7.787
_LAB_OFFSET = 16.0 / 116.0


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _as_floats(values: np.ndarray) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


def rgb_to_hsl(rgb: RGB) -> Triple:
    """Convert normalized sRGB to (hue, saturation, lightness).

    Achromatic input (max == min channel) yields hue 0 and saturation 0.
    """
    hsl = colour.RGB_to_HSL(np.asarray(rgb, dtype=float))
    hue, saturation, lightness = _as_floats(hsl)
    if hue >= 1.0:
        hue -= 1.0
    return hue, saturation, lightness


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """Convert HSL to normalized sRGB.

    Hue wraps around 1.0; saturation and lightness are clamped to [0, 1].
    """
    hsl = np.array([hue % 1.0, _clamp(saturation), _clamp(lightness)])
    rgb = np.clip(colour.HSL_to_RGB(hsl), 0.0, 1.0)
    return _as_floats(rgb)


def rgb_to_hsb(rgb: RGB) -> Triple:
    """Convert normalized sRGB to (hue, saturation, brightness)."""
    hsv = colour.RGB_to_HSV(np.asarray(rgb, dtype=float))
    hue, saturation, brightness = _as_floats(hsv)
    if hue >= 1.0:
        hue -= 1.0
    return hue, saturation, brightness


def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> RGB:
    hsv = np.array([hue % 1.0, _clamp(saturation), _clamp(brightness)])
    rgb = np.clip(colour.HSV_to_RGB(hsv), 0.0, 1.0)
    return _as_floats(rgb)


def _linearize(rgb: RGB) -> np.ndarray:
    values = np.asarray(rgb, dtype=float)
    return np.where(
        values > 0.04045, ((values + 0.055) / 1.055) ** 2.4, values / 12.92
    )


def _delinearize(linear: np.ndarray) -> np.ndarray:
    # Clip before the power so out-of-gamut negatives do not produce NaN.
    linear = np.clip(linear, 0.0, None)
    return np.where(
        linear > 0.0031308, 1.055 * linear ** (1 / 2.4) - 0.055, 12.92 * linear
    )


def rgb_to_xyz(rgb: RGB) -> Triple:
    """Convert normalized sRGB to CIE XYZ scaled to Y = 100 for white."""
    xyz = _SRGB_TO_XYZ @ _linearize(rgb) * 100.0
    return _as_floats(xyz)


def xyz_to_lab(xyz: Triple) -> Triple:
    """Convert CIE XYZ (Y = 100 scale) to CIE L*a*b* under D65."""
    ratios = np.asarray(xyz, dtype=float) / np.asarray(D65_WHITE)
    f = np.where(
        ratios > _LAB_EPSILON, np.cbrt(ratios), _LAB_KAPPA * ratios + _LAB_OFFSET
    )
    fx, fy, fz = _as_floats(f)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def rgb_to_lab(rgb: RGB) -> Triple:
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_to_rgb(lightness: float, a: float, b: float) -> RGB:
    """Convert CIE L*a*b* to normalized sRGB.

    Inputs are clamped to L* in [0, 100] and a*, b* in [-128, 127]; each output
    channel is clamped to [0, 1] after de-linearization.
    """
    lightness = _clamp(lightness, 0.0, 100.0)
    a = _clamp(a, -128.0, 127.0)
    b = _clamp(b, -128.0, 127.0)

    fy = (lightness + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0

    f = np.array([fx, fy, fz])
    cubed = f**3
    ratios = np.where(cubed > _LAB_EPSILON, cubed, (f - _LAB_OFFSET) / _LAB_KAPPA)
    xyz = ratios * np.asarray(D65_WHITE) / 100.0

    rgb = np.clip(_delinearize(_XYZ_TO_SRGB @ xyz), 0.0, 1.0)
    return _as_floats(rgb)


def rgb_to_cmyk(rgb: RGB) -> tuple[float, float, float, float]:
    """Convert normalized sRGB to (cyan, magenta, yellow, key).

    Pure black returns (0, 0, 0, 1) instead of dividing by zero.
    """
    r, g, b = rgb
    key = 1.0 - max(r, g, b)
    if key >= 1.0:
        return 0.0, 0.0, 0.0, 1.0
    scale = 1.0 - key
    return (1.0 - r - key) / scale, (1.0 - g - key) / scale, (1.0 - b - key) / scale, key


def cmyk_to_rgb(cyan: float, magenta: float, yellow: float, key: float) -> RGB:
    key = _clamp(key)
    return (
        (1.0 - _clamp(cyan)) * (1.0 - key),
        (1.0 - _clamp(magenta)) * (1.0 - key),
        (1.0 - _clamp(yellow)) * (1.0 - key),
    )


def compute_luminance(rgb: RGB) -> float:
    """Compute WCAG 2.x relative luminance of a normalized sRGB color.

    Each channel is linearized with the WCAG threshold (0.03928) and the
    results are weighted 0.2126 R + 0.7152 G + 0.0722 B.

    Examples:
        >>> compute_luminance((1.0, 1.0, 1.0))
        1.0
        >>> round(compute_luminance((1.0, 0.0, 0.0)), 4)
        0.2126
    """

    def linearize(c: float) -> float:
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def luminance_contrast_ratio(l1: float, l2: float) -> float:
    """WCAG contrast ratio between two relative luminance values.

    Order independent; always in [1.0, 21.0] for luminances in [0, 1].
    """
    light = max(l1, l2)
    dark = min(l1, l2)
    return (light + 0.05) / (dark + 0.05)


def contrast_ratio(rgb1: RGB, rgb2: RGB) -> float:
    return luminance_contrast_ratio(compute_luminance(rgb1), compute_luminance(rgb2))


def delta_e_cie76(lab1: Triple, lab2: Triple) -> float:
    """Euclidean (CIE 1976) distance between two L*a*b* colors."""
    return float(
        colour.difference.delta_E_CIE1976(np.asarray(lab1), np.asarray(lab2))
    )
