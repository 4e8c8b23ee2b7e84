"""
Terminal presentation: ANSI-aware measurement, grid layout, block rendering
and the diff presentation modes.
"""

from .formatting import pad_to_width, paint, visible_width
from .grid import COLUMN_GAP, MIN_BLOCK_WIDTH, RenderedBlock, calculate_columns, layout_grid, render_grid
from .render import (
    render_analyzer_blocks,
    render_compact_blocks,
    render_file_block,
    render_report_block,
    render_verbose_blocks,
)
from .views import show_full, show_interactive, show_summary

__all__ = [
    "COLUMN_GAP",
    "MIN_BLOCK_WIDTH",
    "RenderedBlock",
    "calculate_columns",
    "layout_grid",
    "pad_to_width",
    "paint",
    "render_analyzer_blocks",
    "render_compact_blocks",
    "render_file_block",
    "render_grid",
    "render_report_block",
    "render_verbose_blocks",
    "show_full",
    "show_interactive",
    "show_summary",
    "visible_width",
]
