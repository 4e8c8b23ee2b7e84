"""
Empty Lines Analyzer

Blank lines inside a function body usually separate steps that belong in
functions of their own. Blank lines right after an opening brace or right
before a closing brace are tolerated.
"""

import logging
from typing import List

from ..analyzer import Analyzer
from ..issue import AnalysisResult, Fix, Issue
from ..syntax import SourceTree
from .functions import function_body_ranges

logger = logging.getLogger(__name__)

MESSAGE = "Empty line in function body indicates untamed complexity"


def _after_opening_brace(lines: List[str], idx: int) -> bool:
    return idx > 0 and lines[idx - 1].strip().endswith("{")


def _before_closing_brace(lines: List[str], idx: int) -> bool:
    return idx + 1 < len(lines) and lines[idx + 1].strip().startswith("}")


def check_block(start_line: int, end_line: int, lines: List[str]) -> List[Issue]:
    """Report blank lines in [start_line, end_line) except the first and last."""
    issues = []
    for line_num in range(start_line, end_line):
        idx = line_num - 1
        if idx >= len(lines) or lines[idx].strip():
            continue
        if line_num == start_line or line_num == end_line - 1:
            continue
        if _after_opening_brace(lines, idx) or _before_closing_brace(lines, idx):
            continue
        issues.append(Issue(line_num, 1, MESSAGE, Fix.simple("")))
    return issues


class EmptyLinesAnalyzer(Analyzer):
    """Reports blank lines in function bodies; the empty replacement deletes them."""

    name = "empty_lines"

    def analyze(self, tree: SourceTree, source: str) -> AnalysisResult:
        lines = tree.lines
        issues = []
        for start_line, end_line in function_body_ranges(tree):
            issues.extend(check_block(start_line, end_line, lines))
        logger.debug(f"{self.name}: {len(issues)} issue(s)")
        return AnalysisResult.from_issues(issues)
