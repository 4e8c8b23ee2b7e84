"""
cargo-quality

A code quality linter for Rust sources: reports style issues, previews
fixes as a diff and applies them in place.
"""

__version__ = "0.1.0"

from .core.analyzers import get_analyzers
from .core.differ import generate_diff
from .core.fixer import QualityFixer
from .core.grouping import group_imports
from .core.syntax import parse

__all__ = [
    'QualityFixer',
    'generate_diff',
    'get_analyzers',
    'group_imports',
    'parse',
]
