"""
Unit tests for ANSI-aware formatting and the grid layout.
"""

import click

from cargo_quality.display.formatting import pad_to_width, paint, visible_width
from cargo_quality.display.grid import (
    COLUMN_GAP, MIN_BLOCK_WIDTH, RenderedBlock, calculate_columns, layout_grid, render_grid
)


def block(*lines, width=MIN_BLOCK_WIDTH):
    return RenderedBlock(tuple(lines), width)


class TestFormatting:
    """Test width measurement and padding."""

    def test_visible_width_ignores_styles(self):
        """Test visible width ignores styles."""
        assert visible_width(click.style("abc", fg="red", bold=True)) == 3

    def test_visible_width_wide_characters(self):
        """Test visible width wide characters."""
        assert visible_width("日本") == 4

    def test_pad_styled_text(self):
        """Test pad styled text."""
        padded = pad_to_width(click.style("ab", fg="red"), 5)

        assert visible_width(padded) == 5
        assert click.unstyle(padded) == "ab   "

    def test_pad_wider_text_unchanged(self):
        """Test pad wider text unchanged."""
        assert pad_to_width("abcdef", 3) == "abcdef"

    def test_paint(self):
        """Test styling block text."""
        assert paint("") == ""
        assert paint("x", fg="red") != "x"
        assert click.unstyle(paint("x", fg="red", bold=True)) == "x"


class TestRenderedBlock:
    """Test RenderedBlock construction."""

    def test_minimum_width(self):
        """Test the minimum block width."""
        assert RenderedBlock.from_lines(["short"]).width == MIN_BLOCK_WIDTH

    def test_width_of_widest_line(self):
        """Test width of widest line."""
        styled = click.style("y" * 55, fg="green")
        rendered = RenderedBlock.from_lines(["x" * 50, styled])

        assert rendered.width == 55
        assert rendered.line_count == 2

    def test_empty(self):
        """Test a block without lines."""
        assert RenderedBlock.from_lines([]).line_count == 0


class TestCalculateColumns:
    """Test column fitting."""

    def test_no_blocks(self):
        """Test column fitting with no blocks."""
        assert calculate_columns([], 200) == 1

    def test_all_fit(self):
        """Test that all blocks share a row when they fit exactly."""
        blocks = [block("a")] * 3
        assert calculate_columns(blocks, 3 * 40 + 2 * COLUMN_GAP) == 3

    def test_one_short(self):
        """Test dropping a column when one cell is missing."""
        blocks = [block("a")] * 3
        assert calculate_columns(blocks, 3 * 40 + 2 * COLUMN_GAP - 1) == 2

    def test_widest_block_decides(self):
        """Test widest block decides."""
        blocks = [block("a"), block("b", width=70)]
        assert calculate_columns(blocks, 120) == 1
        assert calculate_columns(blocks, 144) == 2

    def test_never_less_than_one(self):
        """Test never less than one."""
        assert calculate_columns([block("a")], 10) == 1


class TestLayoutGrid:
    """Test row construction."""

    def test_single_column(self):
        """Test that a single column ends every block with a blank line."""
        rows = layout_grid([block("a1", "a2"), block("b1")], 1)
        assert rows == ["a1", "a2", "", "b1", ""]

    def test_two_columns(self):
        """Test padding ragged blocks into two columns."""
        rows = layout_grid([block("a1", "a2"), block("b1")], 2)

        gap = " " * COLUMN_GAP
        assert rows == [
            "a1".ljust(40) + gap + "b1".ljust(40),
            "a2".ljust(40) + gap + " " * 40,
            "",
        ]

    def test_chunks(self):
        """Test wrapping blocks onto a new row."""
        rows = layout_grid([block("a"), block("b"), block("c")], 2)

        assert len(rows) == 4
        assert rows[2] == "c".ljust(40)
        assert rows[3] == ""

    def test_styled_cells_aligned(self):
        """Test styled cells aligned."""
        rows = layout_grid([block(click.style("a", fg="red")), block("b")], 2)
        assert visible_width(rows[0]) == 40 + COLUMN_GAP + 40

    def test_empty(self):
        """Test an empty grid."""
        assert layout_grid([], 3) == []

    def test_render_grid_echoes_rows(self):
        """Test render grid echoes rows."""
        echoed = []
        render_grid([block("a1"), block("b1")], 1, echo=lambda text, color=None: echoed.append(text))

        assert echoed == ["a1", "", "b1", ""]
