"""Width measurement and styling helpers that ignore ANSI escape codes."""

from typing import Optional

import click
from rich.cells import cell_len


def visible_width(text: str) -> int:
    """Terminal cells ``text`` occupies once escape codes are stripped."""
    return cell_len(click.unstyle(text))


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces to ``width`` visible cells; wider text is returned as is."""
    current = visible_width(text)
    if current >= width:
        return text
    return text + " " * (width - current)


def paint(text: str, fg: Optional[str] = None, bold: bool = False, dim: bool = False) -> str:
    """Style ``text`` for a rendered block; plain text for an empty string."""
    if not text:
        return text
    return click.style(text, fg=fg, bold=bold, dim=dim)
