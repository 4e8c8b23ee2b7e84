"""Locating function bodies shared by the line-scanning analyzers."""

from typing import List, Optional, Tuple

from tree_sitter import Node

from ..syntax import SourceTree


def _enclosing(node: Node, types) -> Optional[Node]:
    parent = node.parent
    while parent is not None:
        if parent.type in types:
            return parent
        parent = parent.parent
    return None


def function_body_ranges(tree: SourceTree) -> List[Tuple[int, int]]:
    """
    Return (start_line, end_line) of every function body to scan.

    Covers free functions, impl methods and functions in modules. Trait
    default bodies are excluded, and functions nested inside another
    function are left to the outer scan so no line is reported twice.
    Lines are 1-based; ``end_line`` holds the closing brace.
    """
    ranges = []
    for node in tree.walk():
        if node.type != "function_item":
            continue
        if _enclosing(node, ("function_item", "trait_item")) is not None:
            continue
        body = node.child_by_field_name("body")
        if body is None:
            continue
        ranges.append((body.start_point[0] + 1, body.end_point[0] + 1))
    return ranges
