"""
Grid Layout Module

Lays pre-rendered blocks out side by side in as many columns as the
terminal width allows. Widths are measured on visible text so styled
blocks stay aligned.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import click

from .formatting import pad_to_width, visible_width

COLUMN_GAP = 4
MIN_BLOCK_WIDTH = 40


@dataclass(frozen=True)
class RenderedBlock:
    """Lines of one pre-rendered unit and their widest visible width."""
    lines: Tuple[str, ...]
    width: int = MIN_BLOCK_WIDTH

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RenderedBlock":
        lines = tuple(lines)
        width = max((visible_width(line) for line in lines), default=0)
        return cls(lines, max(width, MIN_BLOCK_WIDTH))

    @property
    def line_count(self) -> int:
        return len(self.lines)


def calculate_columns(blocks: Sequence[RenderedBlock], terminal_width: int) -> int:
    """
    Largest number of blocks that fit side by side in ``terminal_width``.

    Every column is as wide as the widest block. One column is always
    returned when nothing else fits.
    """
    if not blocks:
        return 1

    max_width = max(max(block.width for block in blocks), MIN_BLOCK_WIDTH)
    for columns in range(len(blocks), 0, -1):
        total = columns * max_width + (columns - 1) * COLUMN_GAP
        if total <= terminal_width:
            return columns
    return 1


def layout_grid(blocks: Sequence[RenderedBlock], columns: int) -> List[str]:
    """
    Arrange blocks into output rows.

    With one column, blocks follow each other, each one followed by a blank line.
    Otherwise blocks are taken ``columns`` at a time; shorter blocks are
    filled with empty cells and each chunk ends with a blank line.
    """
    if not blocks:
        return []

    rows: List[str] = []
    if columns <= 1:
        for block in blocks:
            rows.extend(block.lines)
            rows.append("")
        return rows

    column_width = max(block.width for block in blocks)
    gap = " " * COLUMN_GAP
    for start in range(0, len(blocks), columns):
        chunk = blocks[start:start + columns]
        max_lines = max(block.line_count for block in chunk)
        for row in range(max_lines):
            cells = [
                pad_to_width(block.lines[row] if row < block.line_count else "", column_width)
                for block in chunk
            ]
            rows.append(gap.join(cells))
        rows.append("")
    return rows


def render_grid(blocks: Sequence[RenderedBlock], columns: int,
                echo: Callable[..., None] = click.echo, color: Optional[bool] = None):
    """Print ``blocks`` in a grid of ``columns`` columns."""
    for row in layout_grid(blocks, columns):
        echo(row, color=color)
