"""Palette and theme export for chromakit.

Named colors are written as JSON, CSS custom properties, SVG swatches, an
Adobe Swatch Exchange (ASE) file or a PNG tile grid rendered with matplotlib.
"""

import json
import math
import struct
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Union
from xml.sax.saxutils import escape

import click
import matplotlib.patches as patches
import matplotlib.pyplot as plt

from .colors import WHITE, Color
from .theme import ColorTheme

__all__ = [
    "ExportFormat",
    "PaletteEntry",
    "palette_entries",
    "theme_entries",
    "export_json",
    "export_css",
    "export_svg",
    "export_ase",
    "create_png_grid",
    "export_palette",
]

SVG_WIDTH = 800
SVG_HEIGHT = 400

ASE_SIGNATURE = b"ASEF"
ASE_VERSION = (1, 0)
ASE_COLOR_BLOCK = 0x0001
ASE_GLOBAL_COLOR = 0


class ExportFormat(str, Enum):
    JSON = "json"
    CSS = "css"
    SVG = "svg"
    PNG = "png"
    ASE = "ase"

    @property
    def file_extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return {
            ExportFormat.JSON: "application/json",
            ExportFormat.CSS: "text/css",
            ExportFormat.SVG: "image/svg+xml",
            ExportFormat.PNG: "image/png",
            ExportFormat.ASE: "application/octet-stream",
        }[self]


class PaletteEntry(NamedTuple):
    name: str
    color: Color


def palette_entries(colors: Sequence[Color], name_prefix: str = "Color") -> list[PaletteEntry]:
    """Name colors "Color 1", "Color 2", ... in order."""
    return [PaletteEntry(f"{name_prefix} {i}", color) for i, color in enumerate(colors, start=1)]


def theme_entries(theme: ColorTheme) -> list[PaletteEntry]:
    return [PaletteEntry(name, color) for name, color in theme.entries()]


def _css_variable_name(name: str) -> str:
    return name.strip().lower().replace(" ", "-")


def export_json(entries: Sequence[PaletteEntry], palette_name: str) -> str:
    colors = []
    for entry in entries:
        r, g, b = (int(round(c * 255)) for c in entry.color.rgb)
        colors.append(
            {
                "name": entry.name,
                "hex": entry.color.hex(),
                "rgb": {"r": r, "g": g, "b": b},
                "alpha": entry.color.alpha,
            }
        )
    return json.dumps({"name": palette_name, "colors": colors}, indent=2)


def export_css(entries: Sequence[PaletteEntry], palette_name: str) -> str:
    lines = [f"/* {palette_name} Color Palette */", ":root {"]
    for entry in entries:
        lines.append(f"  --{_css_variable_name(entry.name)}: {entry.color.hex()};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_svg(entries: Sequence[PaletteEntry], palette_name: str) -> str:
    """Equal-width vertical swatches labelled with name and hex value."""
    swatch_width = SVG_WIDTH // max(len(entries), 1)
    parts = [
        f'<svg width="{SVG_WIDTH}" height="{SVG_HEIGHT}" '
        f'viewBox="0 0 {SVG_WIDTH} {SVG_HEIGHT}" xmlns="http://www.w3.org/2000/svg">',
        f"  <title>{escape(palette_name)}</title>",
    ]
    label_style = (
        'font-family="Arial" fill="white" text-anchor="middle" '
        'stroke="black" stroke-width="0.5"'
    )
    for index, entry in enumerate(entries):
        x = index * swatch_width
        center = x + swatch_width // 2
        hex_value = entry.color.hex()
        parts.append(
            f'  <rect x="{x}" y="0" width="{swatch_width}" height="{SVG_HEIGHT}" '
            f'fill="{hex_value}" />'
        )
        parts.append(
            f'  <text x="{center}" y="{SVG_HEIGHT - 20}" font-size="14" {label_style}>'
            f"{escape(entry.name)}</text>"
        )
        parts.append(
            f'  <text x="{center}" y="{SVG_HEIGHT - 40}" font-size="12" {label_style}>'
            f"{hex_value}</text>"
        )
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def export_ase(entries: Sequence[PaletteEntry], palette_name: str) -> bytes:
    """Encode entries as ASE color blocks.

    All integers and floats are big-endian. Each block holds the name as
    null-terminated UTF-16BE, the "RGB " model and three float32 channels.
    Alpha is not stored and `palette_name` is unused, since no group block
    is written.
    """
    data = bytearray(ASE_SIGNATURE)
    data += struct.pack(">HHI", *ASE_VERSION, len(entries))
    for entry in entries:
        name = entry.name.encode("utf-16-be")
        body = struct.pack(">H", len(name) // 2 + 1) + name + b"\x00\x00"
        body += b"RGB " + struct.pack(">fff", *entry.color.rgb)
        body += struct.pack(">H", ASE_GLOBAL_COLOR)
        data += struct.pack(">HI", ASE_COLOR_BLOCK, len(body)) + body
    return bytes(data)


def create_png_grid(
    entries: Sequence[PaletteEntry],
    output_file: str,
    columns: int = 5,
    tile_size: int = 64,
    tile_margin: int = 8,
    background: Color = WHITE,
    show_labels: bool = True,
) -> None:
    """Create a PNG image with the palette colors arranged in a grid."""
    n_colors = len(entries)
    if n_colors == 0:
        raise ValueError("No colors provided")
    if columns < 1:
        raise ValueError(f"Column count must be positive, got {columns}")

    columns = min(columns, n_colors)
    rows = math.ceil(n_colors / columns)

    w = (columns * (tile_size + tile_margin)) + tile_margin
    # Extra bottom margin
    h = (rows * (tile_size + tile_margin)) + tile_margin + tile_margin

    fig, ax = plt.subplots(figsize=(w / 100, h / 100), dpi=100)  # type: ignore[misc]

    fig.patch.set_facecolor(background.rgba())
    ax.set_facecolor(background.rgba())

    ax.set_xlim(0, w)
    ax.set_ylim(0, h)
    ax.axis("off")

    for i, entry in enumerate(entries):
        row = i // columns
        col = i % columns

        # Flip y so the first row sits at the top
        x = tile_margin + col * (tile_size + tile_margin)
        y = h - tile_margin - (row + 1) * (tile_size + tile_margin)

        rect = patches.Rectangle(
            (x, y), tile_size, tile_size, linewidth=0, facecolor=entry.color.rgba()
        )
        ax.add_patch(rect)

        if show_labels:
            label_color = "white" if entry.color.luminance() < 0.5 else "black"
            ax.text(
                x + tile_size / 2,
                y + tile_size / 2,
                f"{entry.name}\n{entry.color.hex()}",
                color=label_color,
                fontsize=max(tile_size / 16, 3),
                ha="center",
                va="center",
            )

    plt.tight_layout()
    plt.savefig(output_file, bbox_inches="tight", pad_inches=0, dpi=100)  # type: ignore[misc]
    plt.close()

    click.echo(f"PNG grid saved to: {output_file}")


def export_palette(
    entries: Sequence[PaletteEntry],
    export_format: ExportFormat,
    palette_name: str,
    output_file: Optional[str] = None,
) -> Optional[Union[str, bytes]]:
    """Export entries in `export_format`.

    Text formats return the encoded document and ASE returns its bytes; both
    are also written when `output_file` is given. PNG needs `output_file` and
    returns None.
    """
    if export_format is ExportFormat.PNG:
        if not output_file:
            raise ValueError("PNG export requires an output file")
        create_png_grid(entries, output_file)
        return None

    if export_format is ExportFormat.ASE:
        data = export_ase(entries, palette_name)
        if output_file:
            with open(output_file, "wb") as handle:
                handle.write(data)
        return data

    encoders = {
        ExportFormat.JSON: export_json,
        ExportFormat.CSS: export_css,
        ExportFormat.SVG: export_svg,
    }
    document = encoders[export_format](entries, palette_name)
    if output_file:
        with open(output_file, "w", encoding="utf-8") as handle:
            handle.write(document)
    return document
