"""
Presentation Modes Module

The three ways a DiffResult is shown: a full grid of per-file blocks, a
per-file summary of counts, and an interactive walk asking y/n/a/q for
each entry.
"""

import logging
from typing import Callable, Optional

import click

from ..core.differ import DiffResult, FileDiff
from .formatting import paint
from .grid import calculate_columns, render_grid
from .render import render_file_block

logger = logging.getLogger(__name__)

PROMPT_TEXT = "Apply this fix? [y/n/a/q]: "

Echo = Callable[..., None]


def _read_choice(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix="")


def _totals_line(result: DiffResult) -> str:
    return paint(f"Total: {result.total_changes()} changes in {result.total_files()} files", fg="yellow", bold=True)


def show_full(result: DiffResult, terminal_width: int, color: Optional[bool] = None, echo: Echo = click.echo):
    """Print every file's diff block in as many columns as ``terminal_width`` allows."""
    echo(f"\n{paint('DIFF OUTPUT', bold=True)}\n", color=color)

    blocks = [render_file_block(file_diff) for file_diff in result.files]
    columns = calculate_columns(blocks, terminal_width)
    if columns > 1:
        echo(paint(f"Layout: {columns} columns (terminal width: {terminal_width})", dim=True) + "\n", color=color)

    render_grid(blocks, columns, echo=echo, color=color)
    echo(_totals_line(result), color=color)


def show_summary(result: DiffResult, color: Optional[bool] = None, echo: Echo = click.echo):
    """Print per-file, per-analyzer entry counts."""
    echo(f"\n{paint('DIFF SUMMARY', bold=True)}\n", color=color)

    for file_diff in result.files:
        echo(paint(f"{file_diff.path}:", fg="cyan", bold=True), color=color)
        for analyzer_name, count in DiffResult.analyzer_counts(file_diff).items():
            noun = "issue" if count == 1 else "issues"
            echo(f"  {paint(analyzer_name, fg='green')}: {count} {noun}", color=color)
        echo("", color=color)

    echo(_totals_line(result), color=color)


def show_interactive(result: DiffResult, color: Optional[bool] = None, echo: Echo = click.echo,
                     prompt: Callable[[str], str] = _read_choice) -> DiffResult:
    """
    Ask for every entry whether to apply it.

    ``y`` accepts, ``n`` skips, ``a`` accepts this and all remaining
    entries, ``q`` stops asking. Any other reply skips the entry.

    Returns:
        DiffResult holding the accepted entries in their original order
    """
    selected = DiffResult()
    apply_all = False
    stopped = False

    echo(f"\n{paint('INTERACTIVE DIFF', bold=True)}\n", color=color)
    echo(paint("Commands: y=yes, n=no, a=all, q=quit", dim=True) + "\n", color=color)

    for file_diff in result.files:
        if stopped:
            break

        accepted = FileDiff(file_diff.path)
        echo(paint(f"File: {file_diff.path}", fg="cyan", bold=True), color=color)
        echo("", color=color)

        total = file_diff.total_changes()
        for idx, entry in enumerate(file_diff.entries, start=1):
            echo(f"{paint(f'[{idx}/{total}]', fg='yellow')} {paint(entry.analyzer_name, fg='green')}", color=color)
            echo(paint(f"Line {entry.line}:", dim=True), color=color)
            echo(paint(f"- {entry.original_text}", fg="red"), color=color)
            if entry.import_statement:
                echo(paint(f"+ {entry.import_statement}", fg="green"), color=color)
            echo(paint(f"+ {entry.modified_text}", fg="green"), color=color)
            echo("", color=color)

            if apply_all:
                accepted.add_entry(entry)
                continue

            try:
                choice = prompt(paint(PROMPT_TEXT, bold=True)).strip().lower()
            except click.Abort:
                logger.debug("Input closed, leaving interactive mode")
                choice = "q"

            if choice in ("y", "yes"):
                accepted.add_entry(entry)
                echo(paint("Applied", fg="green"), color=color)
            elif choice in ("n", "no"):
                echo(paint("Skipped", fg="yellow"), color=color)
            elif choice in ("a", "all"):
                apply_all = True
                accepted.add_entry(entry)
                echo(paint("Applying all remaining changes", fg="green", bold=True), color=color)
            elif choice in ("q", "quit"):
                echo(paint("Quit", fg="red"), color=color)
                stopped = True
                break
            else:
                echo(paint("Invalid input, skipping", fg="red"), color=color)
            echo("", color=color)

        selected.add_file(accepted)

    echo("\n" + paint(f"Selected {selected.total_changes()} changes for application", fg="yellow", bold=True),
         color=color)
    return selected
