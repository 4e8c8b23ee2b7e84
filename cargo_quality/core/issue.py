"""
Issue Model Module

The vocabulary analyzers use to report problems: an Issue located in the
source, an optional Fix describing how to rewrite its line, and the
AnalysisResult an analyzer returns for one file.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class FixKind(Enum):
    """Kinds of fixes an analyzer can describe."""
    NONE = "none"
    SIMPLE = "simple"
    WITH_IMPORT = "with_import"


@dataclass(frozen=True)
class Fix:
    """
    A structured description of how to fix an issue, not yet applied.

    SIMPLE replaces the issue line wholesale with ``replacement_text``.
    WITH_IMPORT replaces the first occurrence of ``search_pattern`` on the
    issue line with ``replacement_text`` and requires ``import_statement``
    at the top of the file.
    """
    kind: FixKind = FixKind.NONE
    replacement_text: str = ""
    import_statement: str = ""
    search_pattern: str = ""

    @classmethod
    def none(cls) -> "Fix":
        return cls()

    @classmethod
    def simple(cls, replacement_text: str) -> "Fix":
        return cls(FixKind.SIMPLE, replacement_text=replacement_text)

    @classmethod
    def with_import(cls, import_statement: str, search_pattern: str, replacement_text: str) -> "Fix":
        return cls(
            FixKind.WITH_IMPORT,
            replacement_text=replacement_text,
            import_statement=import_statement,
            search_pattern=search_pattern,
        )

    @property
    def is_available(self) -> bool:
        return self.kind is not FixKind.NONE

    def as_simple(self) -> Optional[str]:
        """Return the replacement line for a SIMPLE fix, else None."""
        if self.kind is FixKind.SIMPLE:
            return self.replacement_text
        return None

    def as_import(self) -> Optional[Tuple[str, str, str]]:
        """Return (import_statement, search_pattern, replacement_text) for a WITH_IMPORT fix."""
        if self.kind is FixKind.WITH_IMPORT:
            return self.import_statement, self.search_pattern, self.replacement_text
        return None


@dataclass(frozen=True)
class Issue:
    """One detected problem. ``line`` is 1-based; 0 means unlocated."""
    line: int
    column: int
    message: str
    fix: Fix = field(default_factory=Fix.none)

    @property
    def is_located(self) -> bool:
        return self.line != 0


@dataclass
class AnalysisResult:
    """Issues found by one analyzer in one file."""
    issues: List[Issue] = field(default_factory=list)
    fixable_count: int = 0

    def __post_init__(self):
        if self.fixable_count > len(self.issues):
            raise ValueError(
                f"fixable_count ({self.fixable_count}) exceeds issue count ({len(self.issues)})"
            )

    @classmethod
    def from_issues(cls, issues: List[Issue]) -> "AnalysisResult":
        return cls(list(issues), sum(1 for issue in issues if issue.fix.is_available))

    def __repr__(self):
        return f"AnalysisResult(issues={len(self.issues)}, fixable={self.fixable_count})"
