"""
Report Module

Runs analyzers over files and collects their results per file and across
a run. A per-file Report also renders as plain text.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .analyzer import Analyzer
from .errors import ParseError
from .files import read_source
from .issue import AnalysisResult, Issue
from .syntax import parse

logger = logging.getLogger(__name__)


class Report:
    """Analysis results of one file, in analyzer order."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.results: List[Tuple[str, AnalysisResult]] = []

    def add_result(self, analyzer_name: str, result: AnalysisResult):
        self.results.append((analyzer_name, result))

    def total_issues(self) -> int:
        return sum(len(result.issues) for _, result in self.results)

    def total_fixable(self) -> int:
        return sum(result.fixable_count for _, result in self.results)

    def issues(self, analyzer_name: Optional[str] = None) -> Iterator[Tuple[str, Issue]]:
        """Iterate (analyzer_name, issue) pairs, optionally for one analyzer only."""
        for name, result in self.results:
            if analyzer_name is not None and name != analyzer_name:
                continue
            for issue in result.issues:
                yield name, issue

    def __str__(self):
        out = [f"Quality report for: {self.file_path}", "="]

        for analyzer_name, result in self.results:
            if not result.issues:
                continue

            out.append(f"\n[{analyzer_name}]")
            for issue in result.issues:
                text = f"  {issue.line}:{issue.column} - {issue.message}"
                with_import = issue.fix.as_import()
                simple = issue.fix.as_simple()
                if with_import is not None:
                    text += f"\n    Fix: Add import: {with_import[0]}"
                    text += "\n    (Will replace path with short name)"
                elif simple is not None:
                    text += f"\n    Fix: {simple}"
                out.append(text)

        out.append(f"\nTotal issues: {self.total_issues()}")
        out.append(f"Fixable: {self.total_fixable()}")
        return "\n".join(out) + "\n"

    def __repr__(self):
        return f"Report(file_path='{self.file_path}', issues={self.total_issues()})"


def analyze_file(file_path: str, analyzers: Sequence[Analyzer]) -> Report:
    """
    Run every analyzer over one file.

    Raises:
        IoError: If the file cannot be read
        ParseError: If the file does not parse
    """
    path = str(file_path)
    content = read_source(path)
    try:
        tree = parse(content)
    except ParseError as e:
        raise e.with_path(path) from e

    report = Report(path)
    for analyzer in analyzers:
        report.add_result(analyzer.name, analyzer.analyze(tree, content))
    logger.debug(f"{path}: {report.total_issues()} issue(s)")
    return report


class GlobalReport:
    """Reports of every file in a run, in discovery order."""

    def __init__(self):
        self.reports: List[Report] = []

    def add_report(self, report: Report):
        self.reports.append(report)

    def total_issues(self) -> int:
        return sum(report.total_issues() for report in self.reports)

    def total_fixable(self) -> int:
        return sum(report.total_fixable() for report in self.reports)

    def total_files(self) -> int:
        return len(self.reports)

    def by_analyzer(self) -> Dict[str, List[Tuple[str, Issue]]]:
        """Group (file_path, issue) pairs by analyzer, in first-seen analyzer order."""
        grouped: Dict[str, List[Tuple[str, Issue]]] = {}
        for report in self.reports:
            for analyzer_name, issue in report.issues():
                grouped.setdefault(analyzer_name, []).append((report.file_path, issue))
        return grouped
