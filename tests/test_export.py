"""Tests for chromakit.export module."""

import json
import struct
from unittest.mock import MagicMock, patch

import pytest

from chromakit.colors import BLACK, BLUE, GREEN, RED, WHITE, Color
from chromakit.export import (
    ExportFormat,
    PaletteEntry,
    create_png_grid,
    export_ase,
    export_css,
    export_json,
    export_palette,
    export_svg,
    palette_entries,
    theme_entries,
)
from chromakit.theme import ColorTheme


@pytest.fixture
def entries():
    """Provide three named palette entries."""
    return palette_entries([RED, GREEN, BLUE])


class TestEntries:
    """Test naming palette and theme colors."""

    def test_palette_entries(self):
        """Test default numbering."""
        assert palette_entries([RED, BLUE]) == [
            PaletteEntry("Color 1", RED),
            PaletteEntry("Color 2", BLUE),
        ]

    def test_palette_entries_prefix(self):
        """Test a custom name prefix."""
        assert palette_entries([RED], name_prefix="Swatch")[0].name == "Swatch 1"

    def test_theme_entries(self):
        """Test that theme roles become entries."""
        theme = ColorTheme.from_colors("Test", BLUE, GREEN, RED, WHITE, BLACK)
        named = theme_entries(theme)
        assert len(named) == 18
        assert named[0] == PaletteEntry("Primary", BLUE)


class TestExportFormat:
    """Test the format enum."""

    def test_extensions_and_mime_types(self):
        """Test file metadata."""
        assert ExportFormat.JSON.file_extension == "json"
        assert ExportFormat.SVG.mime_type == "image/svg+xml"
        assert ExportFormat("png") is ExportFormat.PNG
        assert ExportFormat.ASE.file_extension == "ase"
        assert ExportFormat.ASE.mime_type == "application/octet-stream"


class TestTextFormats:
    """Test JSON, CSS and SVG encoders."""

    def test_json(self, entries):
        """Test the JSON document structure."""
        data = json.loads(export_json(entries, "Primaries"))
        assert data["name"] == "Primaries"
        assert data["colors"][0] == {
            "name": "Color 1",
            "hex": "#FF0000FF",
            "rgb": {"r": 255, "g": 0, "b": 0},
            "alpha": 1.0,
        }
        assert len(data["colors"]) == 3

    def test_css(self, entries):
        """Test CSS custom properties."""
        assert export_css(entries, "Primaries") == (
            "/* Primaries Color Palette */\n"
            ":root {\n"
            "  --color-1: #FF0000FF;\n"
            "  --color-2: #00FF00FF;\n"
            "  --color-3: #0000FFFF;\n"
            "}\n"
        )

    def test_css_theme_names(self):
        """Test that multi-word names become dashed variables."""
        css = export_css([PaletteEntry("Primary Light", WHITE)], "Theme")
        assert "  --primary-light: #FFFFFFFF;" in css

    def test_svg(self, entries):
        """Test SVG swatches and labels."""
        svg = export_svg(entries, "Primaries")
        assert svg.startswith('<svg width="800" height="400"')
        assert svg.count("<rect ") == 3
        assert 'fill="#0000FFFF"' in svg
        assert "<title>Primaries</title>" in svg
        assert svg.rstrip().endswith("</svg>")

    def test_svg_escapes_text(self):
        """Test that names are XML-escaped."""
        svg = export_svg([PaletteEntry("A & B <1>", RED)], "Mine & Yours")
        assert "A &amp; B &lt;1&gt;" in svg
        assert "<title>Mine &amp; Yours</title>" in svg


class TestExportAse:
    """Test the binary ASE encoder."""

    def test_single_color_layout(self):
        """Test every byte of a one-color swatch file."""
        data = export_ase([PaletteEntry("Red", RED)], "Primaries")

        assert data == (
            b"ASEF"
            b"\x00\x01\x00\x00"  # version 1.0
            b"\x00\x00\x00\x01"  # block count
            b"\x00\x01"  # color block
            b"\x00\x00\x00\x1c"  # block length 28
            b"\x00\x04"  # name length with terminator
            b"\x00R\x00e\x00d\x00\x00"
            b"RGB "
            b"\x3f\x80\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
            b"\x00\x00"  # global color
        )

    def test_block_per_entry(self, entries):
        """Test the block count and float channels."""
        data = export_ase(entries, "Primaries")
        assert struct.unpack(">I", data[8:12]) == (3,)
        assert data.count(b"RGB ") == 3
        blue_channels = data.rindex(b"RGB ") + 4
        assert struct.unpack(">fff", data[blue_channels:blue_channels + 12]) == (0.0, 0.0, 1.0)

    def test_non_ascii_names(self):
        """Test that names are counted in UTF-16 code units."""
        data = export_ase([PaletteEntry("Bl\u00e5", BLUE)], "P")
        assert data[18:20] == b"\x00\x04"
        assert data[20:28] == "Bl\u00e5".encode("utf-16-be") + b"\x00\x00"

    def test_empty_palette(self):
        """Test a header-only file."""
        assert export_ase([], "Empty") == b"ASEF\x00\x01\x00\x00\x00\x00\x00\x00"


class TestCreatePngGrid:
    """Test the create_png_grid function."""

    def test_empty_entries_raises_error(self):
        """Test that an empty palette raises ValueError."""
        with pytest.raises(ValueError, match="No colors provided"):
            create_png_grid([], "test.png")

    def test_invalid_columns(self, entries):
        """Test that non-positive column counts raise ValueError."""
        with pytest.raises(ValueError, match="Column count must be positive"):
            create_png_grid(entries, "test.png", columns=0)

    def test_basic_grid_creation(self, entries, tmp_path):
        """Test PNG grid layout with matplotlib mocked out."""
        output = str(tmp_path / "grid.png")
        background = Color(0.5, 0.5, 0.5)

        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout') as mock_tight_layout, \
             patch('matplotlib.pyplot.savefig') as mock_savefig, \
             patch('matplotlib.pyplot.close') as mock_close, \
             patch('click.echo') as mock_echo:

            mock_fig = MagicMock()
            mock_ax = MagicMock()
            mock_subplots.return_value = (mock_fig, mock_ax)

            create_png_grid(entries, output, columns=2, background=background)

            # 2 columns x 2 rows of 64px tiles with 8px margins
            mock_subplots.assert_called_once_with(figsize=(152 / 100, 160 / 100), dpi=100)
            mock_fig.patch.set_facecolor.assert_called_once_with(background.rgba())
            mock_ax.set_facecolor.assert_called_once_with(background.rgba())
            mock_ax.set_xlim.assert_called_once_with(0, 152)
            mock_ax.set_ylim.assert_called_once_with(0, 160)
            mock_ax.axis.assert_called_once_with('off')
            mock_tight_layout.assert_called_once()
            mock_savefig.assert_called_once_with(
                output, bbox_inches='tight', pad_inches=0, dpi=100
            )
            mock_close.assert_called_once()
            mock_echo.assert_called_once_with(f"PNG grid saved to: {output}")

            assert mock_ax.add_patch.call_count == 3
            assert mock_ax.text.call_count == 3

    def test_columns_clamped_to_entry_count(self, tmp_path):
        """Test that a short palette is laid out on one row."""
        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout'), \
             patch('matplotlib.pyplot.savefig'), \
             patch('matplotlib.pyplot.close'), \
             patch('click.echo'):

            mock_subplots.return_value = (MagicMock(), MagicMock())
            create_png_grid(palette_entries([RED, BLUE]), str(tmp_path / "x.png"), columns=10)

            # 2 columns x 1 row
            mock_subplots.assert_called_once_with(figsize=(152 / 100, 88 / 100), dpi=100)

    def test_tiles_start_top_left(self, entries, tmp_path):
        """Test tile positions and label colors."""
        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout'), \
             patch('matplotlib.pyplot.savefig'), \
             patch('matplotlib.pyplot.close'), \
             patch('click.echo'):

            mock_ax = MagicMock()
            mock_subplots.return_value = (MagicMock(), mock_ax)
            create_png_grid(entries, str(tmp_path / "x.png"), columns=2)

            first_rect = mock_ax.add_patch.call_args_list[0][0][0]
            assert first_rect.get_xy() == (8, 160 - 8 - 72)
            # Green is light, so its label is black
            assert mock_ax.text.call_args_list[1][1]["color"] == "black"
            assert mock_ax.text.call_args_list[2][1]["color"] == "white"

    def test_labels_can_be_hidden(self, entries, tmp_path):
        """Test show_labels=False."""
        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout'), \
             patch('matplotlib.pyplot.savefig'), \
             patch('matplotlib.pyplot.close'), \
             patch('click.echo'):

            mock_ax = MagicMock()
            mock_subplots.return_value = (MagicMock(), mock_ax)
            create_png_grid(entries, str(tmp_path / "x.png"), show_labels=False)

            mock_ax.text.assert_not_called()

    def test_writes_png_file(self, entries, tmp_path):
        """Test a real render to disk."""
        output = tmp_path / "palette.png"
        create_png_grid(entries, str(output))
        assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


class TestExportPalette:
    """Test the format dispatcher."""

    def test_returns_text_document(self, entries):
        """Test that text formats return their document."""
        document = export_palette(entries, ExportFormat.CSS, "Primaries")
        assert document == export_css(entries, "Primaries")

    def test_writes_text_file(self, entries, tmp_path):
        """Test that an output path receives the same document."""
        output = tmp_path / "palette.json"
        document = export_palette(entries, ExportFormat.JSON, "Primaries", str(output))
        assert output.read_text(encoding="utf-8") == document

    def test_png_requires_output_file(self, entries):
        """Test that PNG without a path raises ValueError."""
        with pytest.raises(ValueError, match="PNG export requires an output file"):
            export_palette(entries, ExportFormat.PNG, "Primaries")

    def test_png_dispatches_to_grid(self, entries, tmp_path):
        """Test that PNG export renders a grid and returns None."""
        output = str(tmp_path / "palette.png")
        with patch('chromakit.export.create_png_grid') as mock_grid:
            assert export_palette(entries, ExportFormat.PNG, "Primaries", output) is None
        mock_grid.assert_called_once_with(entries, output)

    def test_ase_returns_and_writes_bytes(self, entries, tmp_path):
        """Test that ASE export returns bytes and writes them in binary mode."""
        output = tmp_path / "palette.ase"
        data = export_palette(entries, ExportFormat.ASE, "Primaries", str(output))
        assert data == export_ase(entries, "Primaries")
        assert output.read_bytes() == data
