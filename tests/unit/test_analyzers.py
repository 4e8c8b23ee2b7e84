"""
Unit tests for the built-in analyzers.

These tests cover:
- Path import detection, exclusions and fixes
- Format args detection
- Empty line detection and removal
- Inline comment detection and suggestions
- Analyzer selection by name
"""

import pytest

from cargo_quality.core.analyzers import (
    EmptyLinesAnalyzer, FormatArgsAnalyzer, InlineCommentsAnalyzer, PathImportAnalyzer,
    analyzer_names, find_analyzers, get_analyzers
)
from cargo_quality.core.analyzers.path_import import should_extract_to_import
from cargo_quality.core.errors import ConfigError
from cargo_quality.core.syntax import parse, unparse


def analyze(analyzer, source):
    return analyzer.analyze(parse(source), source)


class TestShouldExtractToImport:
    """Test the path classification rules."""

    def test_stdlib_function(self):
        """Test that standard library function paths are extracted."""
        assert should_extract_to_import(["std", "fs", "read_to_string"])
        assert should_extract_to_import(["core", "mem", "swap"])

    def test_associated_function_excluded(self):
        """Test associated function excluded."""
        assert not should_extract_to_import(["Vec", "new"])
        assert not should_extract_to_import(["std", "fs", "File", "open"])

    def test_constants_and_variants_excluded(self):
        """Test constants and variants excluded."""
        assert not should_extract_to_import(["std", "f64", "consts", "PI"])
        assert not should_extract_to_import(["std", "cmp", "Ordering"])

    def test_third_party_needs_three_segments(self):
        """Test third-party needs three segments."""
        assert not should_extract_to_import(["serde_json", "to_string"])
        assert should_extract_to_import(["my_crate", "utils", "helper"])

    def test_too_short(self):
        """Test that single segment paths are kept."""
        assert not should_extract_to_import(["read"])
        assert not should_extract_to_import([])


class TestPathImportAnalyzer:
    """Test PathImportAnalyzer."""

    def setup_method(self):
        self.analyzer = PathImportAnalyzer()

    def test_reports_stdlib_path(self):
        """Test reports stdlib path."""
        result = analyze(self.analyzer, 'fn main() { let x = std::fs::read_to_string("f"); }')

        assert len(result.issues) == 1
        assert result.fixable_count == 1
        issue = result.issues[0]
        assert (issue.line, issue.column) == (1, 21)
        assert issue.message == "Use import instead of path: std::fs::read_to_string"
        assert issue.fix.as_import() == (
            "use std::fs::read_to_string;", "std::fs::read_to_string", "read_to_string"
        )

    def test_column_counts_characters(self):
        """Test column counts characters."""
        result = analyze(self.analyzer, 'fn main() { let s = "é"; let x = std::fs::read("f"); }')
        assert result.issues[0].column == 34

    def test_reports_every_path(self):
        """Test reports every path."""
        source = 'fn main() {\n    let a = std::fs::read("a");\n    let b = std::env::var("b");\n}\n'
        result = analyze(self.analyzer, source)

        assert [issue.line for issue in result.issues] == [2, 3]

    def test_crate_path(self):
        """Test reporting a crate-relative path."""
        result = analyze(self.analyzer, "fn main() { crate::utils::helper(); }")
        assert result.issues[0].message == "Use import instead of path: crate::utils::helper"

    def test_ignores_associated_functions_and_variants(self):
        """Test ignores associated functions and variants."""
        source = (
            "fn main() {\n"
            "    let v = Vec::new();\n"
            "    let o = Ordering::Less;\n"
            '    let f = std::fs::File::open("f");\n'
            "}\n"
        )
        assert analyze(self.analyzer, source).issues == []

    def test_ignores_use_declarations(self):
        """Test ignores use declarations."""
        source = "use std::fs::read_to_string;\n\nfn main() {}\n"
        assert analyze(self.analyzer, source).issues == []

    def test_ignores_types(self):
        """Test that type paths are not reported."""
        source = "fn main() { let m: std::collections::HashMap<u8, u8> = make(); }"
        assert analyze(self.analyzer, source).issues == []

    def test_ignores_short_third_party_path(self):
        """Test ignores short third-party path."""
        assert analyze(self.analyzer, "fn main() { serde_json::to_string(&x); }").issues == []

    def test_fix(self):
        """Test the analyzer's fix pass."""
        tree = parse('fn main() {\n    let x = std::fs::read_to_string("f");\n}\n')

        assert self.analyzer.fix(tree) == 1
        assert unparse(tree) == (
            "use std::fs::read_to_string;\n\n"
            'fn main() {\n    let x = read_to_string("f");\n}\n'
        )

    def test_fix_is_idempotent(self):
        """Test fix is idempotent."""
        tree = parse('fn main() {\n    let x = std::fs::read_to_string("f");\n}\n')
        self.analyzer.fix(tree)

        assert self.analyzer.fix(tree) == 0

    def test_analyze_does_not_mutate(self):
        """Test analyze does not mutate."""
        source = 'fn main() { let x = std::fs::read_to_string("f"); }'
        tree = parse(source)
        self.analyzer.analyze(tree, source)

        assert unparse(tree) == source


class TestFormatArgsAnalyzer:
    """Test FormatArgsAnalyzer."""

    def setup_method(self):
        self.analyzer = FormatArgsAnalyzer()

    def test_reports_positional_args(self):
        """Test reports positional args."""
        result = analyze(self.analyzer, 'fn main() { let x = 1; println!("{}", x); }')

        assert len(result.issues) == 1
        assert (result.issues[0].line, result.issues[0].column) == (1, 24)
        assert result.issues[0].message == "Use named format arguments instead of positional"
        assert result.fixable_count == 0

    def test_reports_format_and_write(self):
        """Test reports format and write."""
        source = (
            "fn show(f: &mut Formatter, a: u8) {\n"
            '    let s = format!("{}", a);\n'
            '    write!(f, "{}", s);\n'
            "}\n"
        )
        result = analyze(self.analyzer, source)
        assert [issue.line for issue in result.issues] == [2, 3]

    def test_inline_arguments_accepted(self):
        """Test inline arguments accepted."""
        source = 'fn main() { let x = 1; println!("{x}"); println!("hello"); }'
        assert analyze(self.analyzer, source).issues == []

    def test_other_macros_ignored(self):
        """Test other macros ignored."""
        source = 'fn main() { let v = vec![1, 2]; assert_eq!(v.len(), 2, "{}", 3); }'
        assert analyze(self.analyzer, source).issues == []

    def test_fix_changes_nothing(self):
        """Test fix changes nothing."""
        source = 'fn main() { let x = 1; println!("{}", x); }'
        tree = parse(source)

        assert self.analyzer.fix(tree) == 0
        assert unparse(tree) == source


class TestEmptyLinesAnalyzer:
    """Test EmptyLinesAnalyzer."""

    SAMPLE = "fn main() {\n    let a = 1;\n\n    let b = 2;\n}\n"

    def setup_method(self):
        self.analyzer = EmptyLinesAnalyzer()

    def test_reports_blank_line_in_body(self):
        """Test reports blank line in body."""
        result = analyze(self.analyzer, self.SAMPLE)

        assert [issue.line for issue in result.issues] == [3]
        assert result.issues[0].message == "Empty line in function body indicates untamed complexity"
        assert result.issues[0].fix.as_simple() == ""
        assert result.fixable_count == 1

    def test_blank_lines_next_to_braces_tolerated(self):
        """Test blank lines next to braces tolerated."""
        source = "fn f() {\n\n    let a = 1;\n\n}\n"
        assert analyze(self.analyzer, source).issues == []

    def test_blank_line_before_inner_closing_brace_tolerated(self):
        """Test blank line before inner closing brace tolerated."""
        source = "fn f() {\n    if x {\n        a();\n\n    }\n    b();\n}\n"
        assert analyze(self.analyzer, source).issues == []

    def test_blank_lines_outside_functions_ignored(self):
        """Test blank lines outside functions ignored."""
        source = "use std::fs;\n\nstruct S;\n\nfn f() {}\n"
        assert analyze(self.analyzer, source).issues == []

    def test_impl_methods_checked(self):
        """Test impl methods checked."""
        source = (
            "struct S;\n"
            "impl S {\n"
            "    fn f(&self) {\n"
            "        let a = 1;\n"
            "\n"
            "        let b = 2;\n"
            "    }\n"
            "}\n"
        )
        assert [issue.line for issue in analyze(self.analyzer, source).issues] == [5]

    def test_trait_default_bodies_skipped(self):
        """Test trait default bodies skipped."""
        source = (
            "trait T {\n"
            "    fn f() {\n"
            "        let a = 1;\n"
            "\n"
            "        let b = 2;\n"
            "    }\n"
            "}\n"
        )
        assert analyze(self.analyzer, source).issues == []

    def test_nested_function_reported_once(self):
        """Test nested function reported once."""
        source = (
            "fn outer() {\n"
            "    fn inner() {\n"
            "        let a = 1;\n"
            "\n"
            "        let b = 2;\n"
            "    }\n"
            "    inner();\n"
            "}\n"
        )
        assert [issue.line for issue in analyze(self.analyzer, source).issues] == [4]

    def test_fix_removes_lines(self):
        """Test fix removes lines."""
        tree = parse(self.SAMPLE)

        assert self.analyzer.fix(tree) == 1
        assert unparse(tree) == "fn main() {\n    let a = 1;\n    let b = 2;\n}\n"
        assert self.analyzer.analyze(tree, tree.source).issues == []


class TestInlineCommentsAnalyzer:
    """Test InlineCommentsAnalyzer."""

    SAMPLE = (
        "// outside\n"
        "fn main() {\n"
        "    // read input\n"
        "    let x = read();\n"
        "    /// doc\n"
        "    let y = 2;\n"
        "    // trailing\n"
        "}\n"
    )

    def setup_method(self):
        self.analyzer = InlineCommentsAnalyzer()

    def test_reports_comments_in_body(self):
        """Test reports comments in body."""
        result = analyze(self.analyzer, self.SAMPLE)

        assert [issue.line for issue in result.issues] == [3, 7]
        assert result.fixable_count == 0

    def test_suggestion_cites_following_code(self):
        """Test suggestion cites following code."""
        issue = analyze(self.analyzer, self.SAMPLE).issues[0]
        assert issue.message == (
            'Inline comment found: "read input"\n'
            "Move to doc block # Notes section:\n"
            "/// - read input - `let x = read();`"
        )

    def test_suggestion_without_following_code(self):
        """Test suggestion without following code."""
        issue = analyze(self.analyzer, self.SAMPLE).issues[1]
        assert issue.message == (
            'Inline comment found: "trailing"\n'
            "Move to doc block # Notes section:\n"
            "/// - trailing"
        )


class TestAnalyzerSelection:
    """Test analyzer registry lookups."""

    def test_order(self):
        """Test the registry order."""
        assert analyzer_names() == ["path_import", "format_args", "empty_lines", "inline_comments"]

    def test_fresh_instances(self):
        """Test that each lookup builds new analyzers."""
        assert get_analyzers()[0] is not get_analyzers()[0]

    def test_find_all(self):
        """Test finding every analyzer."""
        assert len(find_analyzers()) == 4

    def test_find_by_name(self):
        """Test find by name."""
        selected = find_analyzers("empty_lines")
        assert [analyzer.name for analyzer in selected] == ["empty_lines"]

    def test_unknown_name(self):
        """Test looking up an unknown analyzer."""
        with pytest.raises(ConfigError) as exc_info:
            find_analyzers("nope")

        assert str(exc_info.value) == "Unknown analyzer: nope"
        assert "path_import" in exc_info.value.valid_names

    def test_repr(self):
        """Test Analyzer string representation."""
        assert repr(EmptyLinesAnalyzer()) == "EmptyLinesAnalyzer(name='empty_lines')"
