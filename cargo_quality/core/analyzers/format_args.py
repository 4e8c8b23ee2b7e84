"""
Format Args Analyzer

Flags formatting macros that pass positional ``{}`` arguments, e.g.
``println!("{} {}", a, b)``, where inline named arguments would be clearer.
"""

from ..analyzer import Analyzer
from ..issue import AnalysisResult, Issue
from ..syntax import SourceTree

FORMAT_MACROS = frozenset({"format", "println", "print", "write", "writeln"})

# Macro invocations directly under these are items, not expressions or statements.
_ITEM_CONTAINERS = frozenset({"source_file", "declaration_list"})


class FormatArgsAnalyzer(Analyzer):
    """Reports positional placeholders in formatting macros. Not fixable."""

    name = "format_args"

    def analyze(self, tree: SourceTree, source: str) -> AnalysisResult:
        issues = []
        for node in tree.walk():
            if node.type != "macro_invocation":
                continue
            if node.parent is not None and node.parent.type in _ITEM_CONTAINERS:
                continue

            macro = node.child_by_field_name("macro")
            if macro is None or macro.type != "identifier" or tree.text_of(macro) not in FORMAT_MACROS:
                continue

            arguments = next((child for child in node.children if child.type == "token_tree"), None)
            if arguments is None:
                continue

            tokens = tree.text_of(arguments)
            if "{}" in tokens and "," in tokens:
                line, column = tree.position(node)
                issues.append(Issue(line, column, "Use named format arguments instead of positional"))

        return AnalysisResult.from_issues(issues)
