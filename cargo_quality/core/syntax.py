"""
Syntax Tree Module

Parses Rust source into a tree-sitter tree and keeps it together with the
exact source text. The text is authoritative: fixes are applied as line
edits on the text and the tree is re-parsed, so formatting, comments and
blank lines survive a round trip through parse/unparse.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, cast

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from .errors import FixError, ParseError
from .grouping import group_imports
from .issue import Issue

logger = logging.getLogger(__name__)

# Nodes that may precede the first item without receiving imports above them.
_PREAMBLE_NODES = frozenset({"line_comment", "block_comment", "inner_attribute_item"})


@lru_cache(maxsize=1)
def load_rust_language() -> Language:
    """Return the compiled tree-sitter grammar for Rust."""
    return Language(tree_sitter_rust.language())


def build_rust_parser() -> Parser:
    """Return a new tree-sitter parser configured for Rust."""
    parser = Parser()
    language = load_rust_language()
    if hasattr(parser, "set_language"):
        setter = cast(Callable[[Language], None], getattr(parser, "set_language"))
        setter(language)
    else:
        setattr(parser, "language", language)
    return parser


def _parse_tree(text: str) -> Tree:
    return build_rust_parser().parse(text.encode("utf-8"))


def _last_row(node: Node) -> int:
    # Line comments may end at column 0 of the following row.
    end_row, end_column = node.end_point
    if end_column == 0 and end_row > node.start_point[0]:
        return end_row - 1
    return end_row


def split_lines(text: str) -> List[str]:
    """Split text on newlines the way the parser counts rows, dropping ``\\r``."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


@dataclass(frozen=True)
class LineEdit:
    """
    A single-line rewrite.

    With ``search_pattern`` set, the first occurrence of the pattern on the
    current text of the line is replaced; otherwise the whole line is, and
    an empty replacement deletes it.
    """
    line: int
    replacement: str
    search_pattern: Optional[str] = None


def edits_from_issues(issues: Iterable[Issue]) -> Tuple[List[LineEdit], List[str]]:
    """Translate located, fixable issues into line edits and required imports."""
    edits = []
    imports = []
    for issue in issues:
        if not issue.is_located or not issue.fix.is_available:
            continue
        with_import = issue.fix.as_import()
        if with_import is not None:
            import_statement, pattern, replacement = with_import
            edits.append(LineEdit(issue.line, replacement, pattern))
            imports.append(import_statement)
        else:
            edits.append(LineEdit(issue.line, issue.fix.as_simple() or ""))
    return edits, imports


def _split_with_endings(text: str) -> List[List[str]]:
    # Rows follow the parser: split on "\n", keep each row's own ending.
    parts = text.split("\n")
    rows = []
    for idx, part in enumerate(parts):
        ending = "" if idx == len(parts) - 1 else "\n"
        if part.endswith("\r"):
            part, ending = part[:-1], "\r" + ending
        rows.append([part, ending])
    return rows


def dominant_newline(text: str) -> str:
    """Return ``\\r\\n`` when most line endings in ``text`` are CRLF, else ``\\n``."""
    crlf = text.count("\r\n")
    return "\r\n" if crlf > text.count("\n") - crlf else "\n"


def apply_line_fixes(text: str, edits: List[LineEdit], imports: List[str], insert_at: int) -> Tuple[str, int]:
    """
    Apply line edits and insert missing imports.

    Line numbers in ``edits`` refer to ``text``, counted like the parser
    counts rows. Every line keeps its own ending, so files mixing ``\\n``
    and ``\\r\\n`` come back with the same endings. Edits outside the file
    are ignored. Imports already present verbatim are skipped; the rest are
    grouped and inserted before row ``insert_at`` (0-based, also in ``text``)
    using the file's dominant newline.

    Returns:
        Tuple of (new_text, number_of_lines_changed)
    """
    newline = dominant_newline(text)
    rows = _split_with_endings(text)
    changed = 0
    deleted = set()

    for edit in edits:
        idx = edit.line - 1
        if idx < 0 or idx >= len(rows):
            logger.debug(f"Skipping edit outside file: line {edit.line}")
            continue
        if idx in deleted:
            continue
        if edit.search_pattern is None and not edit.replacement:
            deleted.add(idx)
            changed += 1
            continue
        current = rows[idx][0]
        if edit.search_pattern is not None:
            updated = current.replace(edit.search_pattern, edit.replacement, 1)
        else:
            updated = edit.replacement
        if updated != current:
            rows[idx][0] = updated
            changed += 1

    if deleted:
        insert_at -= sum(1 for idx in deleted if idx < insert_at)
        last_kept = max((idx for idx in range(len(rows)) if idx not in deleted), default=None)
        if last_kept is not None and last_kept < len(rows) - 1:
            # The old last row had no ending; the new last row must not gain one.
            rows[last_kept][1] = rows[-1][1]
        rows = [row for idx, row in enumerate(rows) if idx not in deleted]

    present = {content.strip() for content, _ in rows}
    missing = [stmt for stmt in imports if stmt.strip() not in present]
    if missing:
        grouped = group_imports(missing)
        insert_at = max(0, min(insert_at, len(rows)))
        following = rows[insert_at][0].strip() if insert_at < len(rows) else ""
        block = [[statement, newline] for statement in grouped]
        if following and not following.startswith(("use ", "pub use ")):
            block.append(["", newline])
        if insert_at == len(rows) and rows and not rows[-1][1].endswith("\n"):
            rows[-1][1] += newline
        rows[insert_at:insert_at] = block
        logger.debug(f"Inserted {len(grouped)} import statement(s) at row {insert_at}")

    return "".join(content + ending for content, ending in rows), changed


class SourceTree:
    """
    A parsed Rust source file.

    Analyzers read it through ``root``, ``walk`` and ``line``; only
    ``apply_fixes`` mutates it, replacing both text and tree at once.
    """

    def __init__(self, source: str, tree: Tree):
        self._source = source
        self._tree = tree
        self._bytes = source.encode("utf-8")
        self._lines = split_lines(source)

    @property
    def source(self) -> str:
        return self._source

    @property
    def root(self) -> Node:
        return self._tree.root_node

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def line(self, number: int) -> str:
        """Return the 1-based line ``number``; out-of-range lines are empty."""
        if number < 1 or number > len(self._lines):
            return ""
        return self._lines[number - 1]

    def walk(self) -> Iterator[Node]:
        """Iterate every node in pre-order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def text_of(self, node: Node) -> str:
        return self._bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def position(self, node: Node) -> Tuple[int, int]:
        """Return the 1-based (line, column) of ``node``, column counted in characters."""
        start = node.start_byte
        line_start = self._bytes.rfind(b"\n", 0, start) + 1
        column = len(self._bytes[line_start:start].decode("utf-8", errors="replace")) + 1
        return node.start_point[0] + 1, column

    def import_insertion_row(self) -> int:
        """
        Row before which new ``use`` statements go.

        That is the first item of the file, or the comments directly above
        it. Inner doc comments and inner attributes stay on top.
        """
        children = self.root.named_children
        first = next((i for i, child in enumerate(children) if child.type not in _PREAMBLE_NODES), None)
        if first is None:
            return len(self._lines)

        row = children[first].start_point[0]
        for child in reversed(children[:first]):
            if child.type == "inner_attribute_item" or self.text_of(child).startswith(("//!", "/*!")):
                break
            if _last_row(child) + 1 != row:
                break
            row = child.start_point[0]
        return row

    def clone(self) -> "SourceTree":
        """Return an independent copy that shares no mutable state."""
        return SourceTree(self._source, _parse_tree(self._source))

    def apply_fixes(self, issues: Iterable[Issue]) -> int:
        """
        Apply the fixes of ``issues`` in place.

        Raises:
            FixError: If the fixed text no longer parses; the tree is unchanged.

        Returns:
            Number of lines actually changed
        """
        edits, imports = edits_from_issues(issues)
        if not edits:
            return 0

        new_source, changed = apply_line_fixes(self._source, edits, imports, self.import_insertion_row())
        if new_source == self._source:
            return 0

        self._replace_source(new_source)
        return changed

    def _replace_source(self, new_source: str):
        new_tree = _parse_tree(new_source)
        if new_tree.root_node.has_error:
            raise FixError("Applying fixes produced source that no longer parses")

        self._source = new_source
        self._tree = new_tree
        self._bytes = new_source.encode("utf-8")
        self._lines = split_lines(new_source)

    def __repr__(self):
        return f"SourceTree(lines={len(self._lines)})"


def _first_error(tree: SourceTree) -> Optional[Node]:
    for node in tree.walk():
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def parse(text: str) -> SourceTree:
    """
    Parse Rust source text.

    Raises:
        ParseError: If the source contains syntax errors
    """
    source_tree = SourceTree(text, _parse_tree(text))
    if source_tree.root.has_error:
        node = _first_error(source_tree)
        if node is None:
            raise ParseError("invalid syntax")
        line, column = source_tree.position(node)
        if node.is_missing:
            raise ParseError(f"expected `{node.type}`", line, column)
        raise ParseError(f"unexpected `{source_tree.text_of(node).strip()[:40]}`", line, column)
    return source_tree


def unparse(tree: SourceTree) -> str:
    """Return the current source text of ``tree``."""
    return tree.source


def is_valid(text: str) -> bool:
    """Return True if ``text`` parses without errors."""
    return not _parse_tree(text).root_node.has_error
