"""
Analyzer Contract Module

Every quality check implements the Analyzer interface: a stable lowercase
``name``, a pure ``analyze`` that reports issues, and ``fix`` which applies
the fixes it describes to a tree in place.
"""

import logging
from abc import ABC, abstractmethod

from .issue import AnalysisResult
from .syntax import SourceTree

logger = logging.getLogger(__name__)


class Analyzer(ABC):
    """Base class for quality analyzers."""

    #: Unique lowercase identifier used for CLI filtering and report grouping.
    name: str = ""

    @abstractmethod
    def analyze(self, tree: SourceTree, source: str) -> AnalysisResult:
        """
        Detect issues without modifying ``tree``.

        Args:
            tree: Parsed source file
            source: The raw text the tree was parsed from

        Returns:
            AnalysisResult with located issues and their fixes
        """

    def fix(self, tree: SourceTree) -> int:
        """
        Apply every available fix to ``tree`` in place.

        The default re-runs ``analyze`` and hands the issues to
        ``SourceTree.apply_fixes``, which is also what diff previews are
        computed against.

        Returns:
            Number of fixes applied
        """
        result = self.analyze(tree, tree.source)
        if not result.fixable_count:
            return 0

        applied = tree.apply_fixes(result.issues)
        logger.debug(f"{self.name}: applied {applied} fix(es)")
        return applied

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"
