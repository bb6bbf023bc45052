"""Theme value types: semantic color roles with light and dark variants."""

from dataclasses import dataclass, field

from .colors import GREEN, RED, YELLOW, Color

__all__ = ["ThemeColorSet", "StatusColorSet", "ColorTheme"]

VARIANT_LIGHTNESS_OFFSET = 0.15
VARIANT_SATURATION_OFFSET = 0.1


@dataclass(frozen=True)
class ThemeColorSet:
    base: Color
    light: Color
    dark: Color

    @classmethod
    def from_base(cls, base: Color) -> "ThemeColorSet":
        """Derive light and dark variants by fixed HSL offsets from `base`."""
        hue, saturation, lightness = base.hsl()
        light = Color.from_hsl(
            hue,
            max(saturation - VARIANT_SATURATION_OFFSET, 0.0),
            min(lightness + VARIANT_LIGHTNESS_OFFSET, 1.0),
            base.alpha,
        )
        dark = Color.from_hsl(
            hue,
            min(saturation + VARIANT_SATURATION_OFFSET, 1.0),
            max(lightness - VARIANT_LIGHTNESS_OFFSET, 0.0),
            base.alpha,
        )
        return cls(base=base, light=light, dark=dark)


@dataclass(frozen=True)
class StatusColorSet:
    success: Color = GREEN
    warning: Color = YELLOW
    error: Color = RED


@dataclass(frozen=True)
class ColorTheme:
    """A named theme. Build one from plain colors with :meth:`from_colors`."""

    name: str
    primary: ThemeColorSet
    secondary: ThemeColorSet
    accent: ThemeColorSet
    background: ThemeColorSet
    text: ThemeColorSet
    status: StatusColorSet = field(default_factory=StatusColorSet)

    @classmethod
    def from_colors(
        cls,
        name: str,
        primary: Color,
        secondary: Color,
        accent: Color,
        background: Color,
        text: Color,
        status: StatusColorSet = StatusColorSet(),
    ) -> "ColorTheme":
        return cls(
            name=name,
            primary=ThemeColorSet.from_base(primary),
            secondary=ThemeColorSet.from_base(secondary),
            accent=ThemeColorSet.from_base(accent),
            background=ThemeColorSet.from_base(background),
            text=ThemeColorSet.from_base(text),
            status=status,
        )

    def entries(self) -> list[tuple[str, Color]]:
        """Flatten the theme into named colors, roles first, then status."""
        named: list[tuple[str, Color]] = []
        for role in ("primary", "secondary", "accent", "background", "text"):
            color_set: ThemeColorSet = getattr(self, role)
            title = role.capitalize()
            named.append((title, color_set.base))
            named.append((f"{title} Light", color_set.light))
            named.append((f"{title} Dark", color_set.dark))
        named.append(("Success", self.status.success))
        named.append(("Warning", self.status.warning))
        named.append(("Error", self.status.error))
        return named
