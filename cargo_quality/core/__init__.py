"""
Core modules for parsing Rust sources, detecting quality issues, previewing
and applying fixes.
"""

from .analyzer import Analyzer
from .analyzers import analyzer_names, find_analyzers, get_analyzers
from .differ import DiffEntry, DiffResult, FileDiff, apply_entries, generate_diff
from .errors import ConfigError, FixError, FormatterError, IoError, ParseError, QualityError
from .files import collect_rust_files
from .fixer import FixResult, QualityFixer
from .grouping import find_common_prefix, group_imports
from .issue import AnalysisResult, Fix, FixKind, Issue
from .report import GlobalReport, Report
from .syntax import SourceTree, parse, unparse

__all__ = [
    'Analyzer',
    'AnalysisResult',
    'ConfigError',
    'DiffEntry',
    'DiffResult',
    'FileDiff',
    'Fix',
    'FixError',
    'FixKind',
    'FixResult',
    'FormatterError',
    'GlobalReport',
    'IoError',
    'Issue',
    'ParseError',
    'QualityError',
    'QualityFixer',
    'Report',
    'SourceTree',
    'analyzer_names',
    'apply_entries',
    'collect_rust_files',
    'find_analyzers',
    'find_common_prefix',
    'generate_diff',
    'get_analyzers',
    'group_imports',
    'parse',
    'unparse',
]
