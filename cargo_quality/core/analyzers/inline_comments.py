"""
Inline Comments Analyzer

Explanations belong in the doc comment's ``# Notes`` section rather than in
``//`` comments scattered through a function body. Each report suggests the
doc line to write, citing the code the comment referred to.
"""

from typing import List, Optional

from ..analyzer import Analyzer
from ..issue import AnalysisResult, Issue
from ..syntax import SourceTree
from .functions import function_body_ranges


def find_related_code_line(lines: List[str], comment_idx: int) -> Optional[str]:
    """Return the first code line after ``comment_idx`` inside the block, if any."""
    for line in lines[comment_idx + 1:]:
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("//"):
            continue
        if trimmed.startswith("}"):
            return None
        return trimmed
    return None


def check_block(start_line: int, end_line: int, lines: List[str]) -> List[Issue]:
    issues = []
    for line_num in range(start_line, end_line):
        idx = line_num - 1
        if idx >= len(lines):
            break

        trimmed = lines[idx].strip()
        if not trimmed.startswith("//") or trimmed.startswith("///"):
            continue

        comment = trimmed.lstrip("/").strip()
        code = find_related_code_line(lines, idx)
        if code is not None:
            suggestion = f"Move to doc block # Notes section:\n/// - {comment} - `{code}`"
        else:
            suggestion = f"Move to doc block # Notes section:\n/// - {comment}"

        issues.append(Issue(line_num, 1, f'Inline comment found: "{comment}"\n{suggestion}'))
    return issues


class InlineCommentsAnalyzer(Analyzer):
    """Reports ``//`` comments inside function bodies. Not fixable."""

    name = "inline_comments"

    def analyze(self, tree: SourceTree, source: str) -> AnalysisResult:
        lines = tree.lines
        issues = []
        for start_line, end_line in function_body_ranges(tree):
            issues.extend(check_block(start_line, end_line, lines))
        return AnalysisResult.from_issues(issues)
