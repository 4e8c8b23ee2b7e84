"""
Built-in analyzers.

| Analyzer          | Detects                               | Fixable |
|-------------------|---------------------------------------|---------|
| path_import       | ``std::fs::read(p)`` style paths      | yes     |
| format_args       | ``println!("{}", x)`` positional args | no      |
| empty_lines       | blank lines in function bodies        | yes     |
| inline_comments   | ``//`` comments in function bodies    | no      |
"""

from typing import List, Optional

from ..analyzer import Analyzer
from ..errors import ConfigError
from .empty_lines import EmptyLinesAnalyzer
from .format_args import FormatArgsAnalyzer
from .inline_comments import InlineCommentsAnalyzer
from .path_import import PathImportAnalyzer

__all__ = [
    "EmptyLinesAnalyzer",
    "FormatArgsAnalyzer",
    "InlineCommentsAnalyzer",
    "PathImportAnalyzer",
    "analyzer_names",
    "find_analyzers",
    "get_analyzers",
]


def get_analyzers() -> List[Analyzer]:
    """Return a fresh instance of every built-in analyzer, in reporting order."""
    return [
        PathImportAnalyzer(),
        FormatArgsAnalyzer(),
        EmptyLinesAnalyzer(),
        InlineCommentsAnalyzer(),
    ]


def analyzer_names() -> List[str]:
    return [analyzer.name for analyzer in get_analyzers()]


def find_analyzers(name: Optional[str] = None) -> List[Analyzer]:
    """
    Select analyzers by name.

    Args:
        name: Analyzer name, or None for all of them

    Raises:
        ConfigError: If no analyzer has that name
    """
    analyzers = get_analyzers()
    if name is None:
        return analyzers

    selected = [analyzer for analyzer in analyzers if analyzer.name == name]
    if not selected:
        raise ConfigError(f"Unknown analyzer: {name}", analyzer_names())
    return selected
