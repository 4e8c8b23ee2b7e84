"""
Path Import Analyzer

Flags module paths used in expressions, such as ``std::fs::read_to_string(p)``,
that read better as a ``use`` declaration plus the bare function name.
Associated functions (``Vec::new``), enum variants and constants are left
alone.
"""

import logging
from typing import List, Optional

from tree_sitter import Node

from ..analyzer import Analyzer
from ..issue import AnalysisResult, Fix, Issue
from ..syntax import SourceTree

logger = logging.getLogger(__name__)

STDLIB_ROOTS = ("std", "core", "alloc")

# Paths under these nodes are declarations, not expressions.
_NON_EXPRESSION_ANCESTORS = frozenset({
    "use_declaration",
    "attribute_item",
    "inner_attribute_item",
    "visibility_modifier",
})

# A scoped_identifier directly under these is part of a longer path or a type.
_PATH_CONTAINERS = frozenset({
    "scoped_identifier",
    "scoped_type_identifier",
})

_SEGMENT_TYPES = frozenset({"identifier", "crate", "self", "super"})


def is_screaming_snake_case(name: str) -> bool:
    return all(c.isupper() or c == "_" or c.isdigit() for c in name)


def should_extract_to_import(segments: List[str]) -> bool:
    """
    Decide whether a path names a free function worth importing.

    Args:
        segments: Path segments, e.g. ``["std", "fs", "read_to_string"]``

    Returns:
        True if the path should become a ``use`` declaration
    """
    if len(segments) < 2 or not all(segments):
        return False

    first, last = segments[0], segments[-1]
    if first[0].isupper():
        return False
    if is_screaming_snake_case(last) or last[0].isupper():
        return False
    if segments[-2][0].isupper():
        return False

    if first in STDLIB_ROOTS:
        return True
    return len(segments) >= 3 and first[0].islower()


class PathImportAnalyzer(Analyzer):
    """Suggests ``use`` declarations for fully qualified function paths."""

    name = "path_import"

    def analyze(self, tree: SourceTree, source: str) -> AnalysisResult:
        issues = []
        for node in tree.walk():
            if node.type != "scoped_identifier" or not self._is_expression_path(node):
                continue

            segments = self._segments(tree, node)
            if segments is None or not should_extract_to_import(segments):
                continue

            path = "::".join(segments)
            line, column = tree.position(node)
            issues.append(Issue(
                line=line,
                column=column,
                message=f"Use import instead of path: {path}",
                fix=Fix.with_import(f"use {path};", path, segments[-1]),
            ))

        logger.debug(f"{self.name}: {len(issues)} issue(s)")
        return AnalysisResult.from_issues(issues)

    @staticmethod
    def _is_expression_path(node: Node) -> bool:
        parent = node.parent
        if parent is None or parent.type in _PATH_CONTAINERS:
            return False
        if parent.type == "macro_invocation" and parent.child_by_field_name("macro") == node:
            return False

        ancestor = parent
        while ancestor is not None:
            if ancestor.type in _NON_EXPRESSION_ANCESTORS:
                return False
            ancestor = ancestor.parent
        return True

    @classmethod
    def _segments(cls, tree: SourceTree, node: Node) -> Optional[List[str]]:
        """Flatten a scoped_identifier into plain segments; None for qualified or global paths."""
        qualifier = node.child_by_field_name("path")
        name = node.child_by_field_name("name")
        if qualifier is None or name is None:
            return None

        if qualifier.type == "scoped_identifier":
            head = cls._segments(tree, qualifier)
            if head is None:
                return None
        elif qualifier.type in _SEGMENT_TYPES:
            head = [tree.text_of(qualifier)]
        else:
            return None

        return head + [tree.text_of(name)]
