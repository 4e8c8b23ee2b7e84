"""
Error Types Module

Every failure the linter can surface to a user derives from QualityError.
Library code raises these; the CLI maps them to console messages.
"""

from typing import List, Optional


class QualityError(Exception):
    """Base class for all cargo-quality errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class IoError(QualityError):
    """File read or write failure."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"IO error: {cause.strerror or cause}", path)
        self.cause = cause


class ParseError(QualityError):
    """Source text is not valid Rust."""

    def __init__(self, message: str, line: int = 0, column: int = 0, path: Optional[str] = None):
        super().__init__(message, path)
        self.line = line
        self.column = column

    def with_path(self, path: str) -> "ParseError":
        return ParseError(self.message, self.line, self.column, path)

    def __str__(self):
        location = self.path or "<source>"
        if self.line:
            location = f"{location}:{self.line}:{self.column}"
        return f"{location}: Parse error: {self.message}"


class ConfigError(QualityError):
    """Invalid user input, e.g. an unknown analyzer name."""

    def __init__(self, message: str, valid_names: Optional[List[str]] = None):
        super().__init__(message)
        self.valid_names = list(valid_names or [])


class FixError(QualityError):
    """Applying fixes would leave the tree in an unparsable state."""


class FormatterError(QualityError):
    """The external formatter exited unsuccessfully."""

    def __init__(self, message: str, returncode: int):
        super().__init__(message)
        self.returncode = returncode
