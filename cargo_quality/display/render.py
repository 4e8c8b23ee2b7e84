"""
Block Rendering Module

Turns FileDiffs and Reports into RenderedBlocks ready for grid layout.
Lines are styled with ANSI codes; whether they reach the terminal styled
is decided when they are echoed.
"""

from typing import List, Optional

from ..core.differ import DiffResult, FileDiff
from ..core.grouping import group_imports
from ..core.issue import Issue
from ..core.report import GlobalReport, Report
from .formatting import paint
from .grid import RenderedBlock

SEPARATOR = "─" * 40
FOOTER = "═" * 40


def _header(title: str) -> List[str]:
    return [paint(title, fg="cyan", bold=True), paint(SEPARATOR, dim=True)]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def render_file_block(file_diff: FileDiff) -> RenderedBlock:
    """
    Render one file's diff.

    Layout: a header, the grouped imports the fixes need, one section per
    analyzer with a ``-``/``+`` pair per entry, and a footer.
    """
    lines = _header(f"File: {file_diff.path}")

    imports = file_diff.imports()
    if imports:
        lines.append(paint("Imports (file top)", dim=True))
        for statement in group_imports(imports):
            lines.append(paint(f"+    {statement}", fg="green"))
        lines.append("")

    counts = DiffResult.analyzer_counts(file_diff)
    last_analyzer = None
    for entry in file_diff.entries:
        if entry.analyzer_name != last_analyzer:
            if last_analyzer is not None:
                lines.append("")
            lines.append(paint(f"{entry.analyzer_name} ({counts[entry.analyzer_name]} issues)", fg="green", bold=True))
            lines.append("")
            last_analyzer = entry.analyzer_name

        lines.append(paint(f"Line {entry.line}", fg="cyan"))
        lines.append(paint(f"-    {entry.original_text}", fg="red"))
        lines.append(paint(f"+    {entry.modified_text}", fg="green"))
        lines.append("")

    lines.append(paint(FOOTER, dim=True))
    return RenderedBlock.from_lines(lines)


def _issue_lines(issue: Issue, prefix: str = "") -> List[str]:
    message = issue.message.splitlines() or [""]
    lines = [f"  {prefix}{issue.line}:{issue.column} {message[0]}"]
    lines.extend(paint(f"      {extra}", dim=True) for extra in message[1:])
    return lines


def _fix_hint(issue: Issue) -> Optional[str]:
    with_import = issue.fix.as_import()
    if with_import is not None:
        return paint(f"      Fix: {with_import[0]}", fg="green")
    simple = issue.fix.as_simple()
    if simple is not None:
        return paint(f"      Fix: {simple or 'remove line'}", fg="green")
    return None


def render_report_block(report: Report, analyzer_name: Optional[str] = None) -> RenderedBlock:
    """
    Render one file's report, optionally restricted to a single analyzer.

    Files without issues get a short "No issues found" block.
    """
    lines = _header(f"File: {report.file_path}")

    total = 0
    fixable = 0
    for name, result in report.results:
        if analyzer_name is not None and name != analyzer_name:
            continue
        if not result.issues:
            continue

        lines.append(paint(f"{name} ({_plural(len(result.issues), 'issue')})", fg="green", bold=True))
        for issue in result.issues:
            lines.extend(_issue_lines(issue))
            hint = _fix_hint(issue)
            if hint is not None:
                lines.append(hint)
        lines.append("")
        total += len(result.issues)
        fixable += result.fixable_count

    if total:
        lines.append(paint(f"Total: {_plural(total, 'issue')}, {fixable} fixable", fg="yellow"))
    else:
        lines.append(paint("No issues found", fg="green"))
    lines.append(paint(FOOTER, dim=True))
    return RenderedBlock.from_lines(lines)


def render_compact_blocks(global_report: GlobalReport) -> List[RenderedBlock]:
    """One block per analyzer listing ``path:line:column message`` for every issue."""
    blocks = []
    for analyzer_name, located in global_report.by_analyzer().items():
        lines = _header(f"{analyzer_name} ({_plural(len(located), 'issue')})")
        for file_path, issue in located:
            lines.extend(_issue_lines(issue, prefix=f"{file_path}:"))
        lines.append(paint(FOOTER, dim=True))
        blocks.append(RenderedBlock.from_lines(lines))
    return blocks


def render_verbose_blocks(global_report: GlobalReport) -> List[RenderedBlock]:
    """One block per file, files without issues included."""
    return [render_report_block(report) for report in global_report.reports]


def render_analyzer_blocks(global_report: GlobalReport, analyzer_name: str) -> List[RenderedBlock]:
    """One block per file that has issues from ``analyzer_name``."""
    return [
        render_report_block(report, analyzer_name)
        for report in global_report.reports
        if any(True for _ in report.issues(analyzer_name))
    ]
