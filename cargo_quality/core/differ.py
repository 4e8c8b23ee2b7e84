"""
Diff Generator Module

Computes a before/after preview of every available fix without touching the
analyzed tree or the file on disk, and re-applies accepted previews later.
Both directions go through ``apply_line_fixes`` so a preview is exactly
what gets written.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from .analyzer import Analyzer
from .errors import FixError, ParseError
from .files import read_source, write_source
from .issue import Issue
from .syntax import LineEdit, apply_line_fixes, is_valid, parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffEntry:
    """One issue's fix rendered as before/after text of a single line."""
    line: int
    analyzer_name: str
    original_text: str
    modified_text: str
    description: str
    import_statement: Optional[str] = None
    search_pattern: Optional[str] = None
    replacement_text: Optional[str] = None

    def to_edit(self) -> LineEdit:
        if self.search_pattern is not None:
            return LineEdit(self.line, self.replacement_text or "", self.search_pattern)
        return LineEdit(self.line, self.modified_text)


@dataclass
class FileDiff:
    """Entries for one file, in analyzer order then issue order."""
    path: str
    entries: List[DiffEntry] = field(default_factory=list)

    def add_entry(self, entry: DiffEntry):
        self.entries.append(entry)

    def total_changes(self) -> int:
        return len(self.entries)

    def imports(self) -> List[str]:
        return [entry.import_statement for entry in self.entries if entry.import_statement]


@dataclass
class DiffResult:
    """FileDiffs of a run. Files without entries are never kept."""
    files: List[FileDiff] = field(default_factory=list)

    def add_file(self, file_diff: FileDiff):
        if file_diff.total_changes() > 0:
            self.files.append(file_diff)

    def total_changes(self) -> int:
        return sum(file_diff.total_changes() for file_diff in self.files)

    def total_files(self) -> int:
        return len(self.files)

    def entries(self) -> Iterator[DiffEntry]:
        for file_diff in self.files:
            yield from file_diff.entries

    @staticmethod
    def analyzer_counts(file_diff: FileDiff) -> Dict[str, int]:
        """Count entries per analyzer, keyed in first-seen order."""
        counts: Dict[str, int] = {}
        for entry in file_diff.entries:
            counts[entry.analyzer_name] = counts.get(entry.analyzer_name, 0) + 1
        return counts


def preview_line(original_text: str, edit: LineEdit) -> str:
    """Compute what ``edit`` turns a single line into."""
    modified, _ = apply_line_fixes(original_text, [LineEdit(1, edit.replacement, edit.search_pattern)], [], 0)
    return modified


def _entry_for(issue: Issue, analyzer_name: str, original_text: str) -> Optional[DiffEntry]:
    with_import = issue.fix.as_import()
    if with_import is not None:
        import_statement, pattern, replacement = with_import
        modified = preview_line(original_text, LineEdit(issue.line, replacement, pattern))
        return DiffEntry(
            issue.line, analyzer_name, original_text, modified, issue.message,
            import_statement=import_statement, search_pattern=pattern, replacement_text=replacement,
        )

    simple = issue.fix.as_simple()
    if simple is not None:
        return DiffEntry(issue.line, analyzer_name, original_text, simple, issue.message)
    return None


def generate_diff(file_path: Union[str, Path], analyzers: Iterable[Analyzer]) -> FileDiff:
    """
    Preview the fixes every analyzer would make to one file.

    The file is read and parsed once; each analyzer sees the same pristine
    tree, and neither the tree nor the file is modified.

    Raises:
        IoError: If the file cannot be read
        ParseError: If the file does not parse; no partial diff is returned
    """
    path = str(file_path)
    content = read_source(path)
    try:
        tree = parse(content)
    except ParseError as e:
        raise e.with_path(path) from e

    file_diff = FileDiff(path)
    for analyzer in analyzers:
        result = analyzer.analyze(tree, content)
        for issue in result.issues:
            if not issue.is_located or not issue.fix.is_available:
                continue
            entry = _entry_for(issue, analyzer.name, tree.line(issue.line))
            if entry is not None:
                file_diff.add_entry(entry)

    logger.debug(f"{path}: {file_diff.total_changes()} previewed change(s)")
    return file_diff


def apply_entries(
    file_path: Union[str, Path],
    entries: Iterable[DiffEntry],
    backup: Optional[Callable[[str], object]] = None,
) -> int:
    """
    Write accepted diff entries to a file.

    Each entry's line ends up equal to its ``modified_text``; required
    imports are grouped and inserted before the first item.

    Args:
        file_path: File the entries were generated from
        entries: Entries to apply, line numbers referring to the current file
        backup: Called with the path before the file is overwritten

    Raises:
        IoError: On read or write failure
        ParseError: If the file no longer parses
        FixError: If the result would not parse; the file is left untouched

    Returns:
        Number of lines changed
    """
    path = str(file_path)
    entries = list(entries)
    if not entries:
        return 0

    content = read_source(path)
    try:
        tree = parse(content)
    except ParseError as e:
        raise e.with_path(path) from e

    edits = [entry.to_edit() for entry in entries]
    imports = [entry.import_statement for entry in entries if entry.import_statement]
    new_content, changed = apply_line_fixes(content, edits, imports, tree.import_insertion_row())
    if new_content == content:
        return 0

    if not is_valid(new_content):
        raise FixError("Applying diff entries produced source that no longer parses", path)

    if backup is not None:
        backup(path)
    write_source(path, new_content)
    logger.info(f"Applied {changed} change(s) to {path}")
    return changed
