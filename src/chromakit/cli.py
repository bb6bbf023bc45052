"""Command-line interface for chromakit."""

import functools
import logging
import sys
from typing import Any, Callable, Optional

import click

from . import __version__
from .color_utils import OUTPUT_FORMATS, format_color, format_color_output, parse_color
from .colors import Color
from .comparison import compare
from .enhancer import AccessibilityEnhancer, AdjustmentStrategy, EnhancerConfiguration
from .export import ExportFormat, export_palette, palette_entries, theme_entries
from .palette import AccessiblePaletteGenerator, PaletteConfiguration
from .suggestions import suggest_accessible_colors
from .wcag import WCAGContrastLevel, evaluate

LEVEL_CHOICES = ["aa-large", "aa", "aaa-large", "aaa"]
STRATEGY_CHOICES = [strategy.value for strategy in AdjustmentStrategy]
EXPORT_CHOICES = ["list"] + [export_format.value for export_format in ExportFormat]

COLOR_HELP = (
    "Color in format: #RRGGBB, #RRGGBBAA, rgb(R,G,B), rgba(R,G,B,A), "
    "hsl(H,S%,L%), hsv(H,S%,V%) or a color name"
)

level_option = click.option(
    "-l",
    "--level",
    type=click.Choice(LEVEL_CHOICES, case_sensitive=False),
    default="aa",
    show_default=True,
    help="WCAG level to meet",
)


def _report_errors(command: Callable[..., Any]) -> Callable[..., Any]:
    """Turn exceptions into an error message and exit status 1."""

    @functools.wraps(command)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return command(*args, **kwargs)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except Exception as e:
            click.echo(f"Unexpected error: {e}", err=True)
            sys.exit(1)

    return wrapper


def _emit(colors: list[Color], output_format: str, columns: int) -> None:
    formatted = format_color_output(colors, output_format)
    for i in range(0, len(formatted), columns):
        row = formatted[i : i + columns]
        click.echo("  " + "  ".join(f"{value:24}" for value in row).rstrip())


def _export(
    entries: list, export_format: str, name: str, output: Optional[str]
) -> None:
    selected = ExportFormat(export_format)
    if selected is ExportFormat.ASE and not output:
        raise ValueError("ASE export requires an output file")
    document = export_palette(entries, selected, name, output)
    if document is not None and not output:
        click.echo(document, nl=False)
    elif output and selected is not ExportFormat.PNG:
        click.echo(f"{export_format.upper()} saved to: {output}")


@click.group()
@click.version_option(version=__version__, prog_name="chromakit")
@click.option("-v", "--verbose", is_flag=True, help="Log search details to stderr")
def cli(verbose: bool) -> None:
    """Color conversions, WCAG contrast checks and accessible palettes.

    Every option can also be set through an environment variable named
    CHROMAKIT_<COMMAND>_<OPTION>, for example CHROMAKIT_PALETTE_SIZE=7.

    Examples:

        chromakit convert "#3366CC" --format all

        chromakit contrast "#777777" white

        chromakit suggest white "rgb(200, 200, 200)" --level aaa

        chromakit enhance "#99CCFF" white --strategy minimum-change

        chromakit palette blue --size 6 --seed 7 --export json

        chromakit theme "#1E90FF" --name Ocean --export png -o ocean.png
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("color")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS) + ["all"], case_sensitive=False),
    default="all",
    show_default=True,
    help="Representation to print",
)
@_report_errors
def convert(color: str, output_format: str) -> None:
    """Show COLOR in other color models."""
    parsed = parse_color(color)
    if output_format.lower() == "all":
        click.echo(f"Hex: {parsed.hex()}")
        click.echo()
        click.echo(parsed.components().describe())
    else:
        click.echo(format_color(parsed, output_format.lower()))


@cli.command()
@click.argument("foreground")
@click.argument("background")
@click.option("--details", is_flag=True, help="Also print RGB, HSL and perceptual differences")
@_report_errors
def contrast(foreground: str, background: str, details: bool) -> None:
    """Check the WCAG contrast between FOREGROUND and BACKGROUND."""
    fg = parse_color(foreground)
    bg = parse_color(background)

    if details:
        click.echo(compare(fg, bg).summary())
        return

    result = evaluate(fg, bg)
    click.echo(f"Contrast ratio: {result.contrast_ratio:.2f}:1")
    for level in WCAGContrastLevel:
        status = "pass" if result.passes_level(level) else "fail"
        click.echo(f"  {level.label:10} (>= {level.minimum_ratio}): {status}")
    highest = result.highest_level()
    click.echo(f"Highest level: {highest.label if highest else 'none'}")


@cli.command()
@click.argument("base")
@click.argument("target")
@level_option
@click.option(
    "--preserve-hue/--no-preserve-hue",
    default=True,
    show_default=True,
    help="Try lightness steps before dropping saturation",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default="hex",
    show_default=True,
)
@_report_errors
def suggest(base: str, target: str, level: str, preserve_hue: bool, output_format: str) -> None:
    """Suggest a replacement for TARGET that meets LEVEL on BASE."""
    base_color = parse_color(base)
    target_color = parse_color(target)
    wcag_level = WCAGContrastLevel.from_name(level)

    suggestions = suggest_accessible_colors(
        base_color, target_color, wcag_level, preserve_hue=preserve_hue
    )
    for suggestion in suggestions:
        ratio = suggestion.contrast_ratio(base_color)
        click.echo(f"{format_color(suggestion, output_format.lower())}  ({ratio:.2f}:1)")


@cli.command()
@click.argument("color")
@click.argument("background")
@level_option
@click.option(
    "-s",
    "--strategy",
    type=click.Choice(STRATEGY_CHOICES, case_sensitive=False),
    default=AdjustmentStrategy.PRESERVE_HUE.value,
    show_default=True,
    help="Which attribute of COLOR to keep",
)
@click.option("--prefer-darker", is_flag=True, help="Prefer darker results")
@click.option(
    "-n",
    "--variants",
    type=click.IntRange(0, 10),
    default=0,
    help="Print this many distinct variants instead of one result",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default="hex",
    show_default=True,
)
@_report_errors
def enhance(
    color: str,
    background: str,
    level: str,
    strategy: str,
    prefer_darker: bool,
    variants: int,
    output_format: str,
) -> None:
    """Adjust COLOR until it meets LEVEL on BACKGROUND."""
    fg = parse_color(color)
    bg = parse_color(background)
    configuration = EnhancerConfiguration(
        target_level=WCAGContrastLevel.from_name(level),
        strategy=AdjustmentStrategy(strategy.lower()),
        prefer_darker=prefer_darker,
    )
    enhancer = AccessibilityEnhancer(configuration)

    if variants:
        results = enhancer.suggest_accessible_variants(fg, bg, count=variants)
    else:
        results = [enhancer.enhance_color(fg, bg)]

    for result in results:
        ratio = result.contrast_ratio(bg)
        click.echo(f"{format_color(result, output_format.lower())}  ({ratio:.2f}:1)")


@cli.command()
@click.argument("seed")
@level_option
@click.option(
    "-n", "--size", type=click.IntRange(2, 32), default=5, show_default=True, help="Palette size"
)
@click.option(
    "--black-and-white/--no-black-and-white",
    default=True,
    show_default=True,
    help="Include black and white in the palette",
)
@click.option(
    "--seed",
    "random_seed",
    type=int,
    envvar="CHROMAKIT_PALETTE_SEED",
    help="Random seed for reproducible palettes",
)
@click.option(
    "-e",
    "--export",
    "export_format",
    type=click.Choice(EXPORT_CHOICES, case_sensitive=False),
    default="list",
    show_default=True,
)
@click.option("--name", default="Palette", show_default=True, help="Palette name for exports")
@click.option("-o", "--output", type=str, help="Output file path (required for PNG and ASE)")
@_report_errors
def palette(
    seed: str,
    level: str,
    size: int,
    black_and_white: bool,
    random_seed: Optional[int],
    export_format: str,
    name: str,
    output: Optional[str],
) -> None:
    """Generate an accessible palette from SEED."""
    configuration = PaletteConfiguration(
        target_level=WCAGContrastLevel.from_name(level),
        palette_size=size,
        include_black_and_white=black_and_white,
    )
    generator = AccessiblePaletteGenerator(configuration, rng=random_seed)
    colors = generator.generate_palette(parse_color(seed))

    if export_format.lower() == "list":
        click.echo(f"Generated {len(colors)} colors from {seed}:")
        click.echo()
        _emit(colors, "hex", columns=4)
        return

    _export(palette_entries(colors), export_format.lower(), name, output)


@cli.command()
@click.argument("seed")
@click.option("--name", default="Custom Theme", show_default=True, help="Theme name")
@level_option
@click.option(
    "--ensure-contrast",
    is_flag=True,
    help="Enhance secondary and accent colors to meet LEVEL on the background",
)
@click.option(
    "-e",
    "--export",
    "export_format",
    type=click.Choice(EXPORT_CHOICES, case_sensitive=False),
    default="list",
    show_default=True,
)
@click.option("-o", "--output", type=str, help="Output file path (required for PNG and ASE)")
@_report_errors
def theme(
    seed: str,
    name: str,
    level: str,
    ensure_contrast: bool,
    export_format: str,
    output: Optional[str],
) -> None:
    """Generate a theme from SEED."""
    configuration = PaletteConfiguration(target_level=WCAGContrastLevel.from_name(level))
    generator = AccessiblePaletteGenerator(configuration)
    color_theme = generator.generate_theme(
        parse_color(seed), name, ensure_contrast=ensure_contrast
    )

    if export_format.lower() == "list":
        click.echo(f"Theme: {color_theme.name}")
        for role, color in color_theme.entries():
            click.echo(f"  {role:18} {color.hex()}")
        return

    _export(theme_entries(color_theme), export_format.lower(), color_theme.name, output)


def main() -> None:
    cli(auto_envvar_prefix="CHROMAKIT")


if __name__ == "__main__":
    main()
