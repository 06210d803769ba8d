"""
ZhCode errors - exceptions raised by the compiler pipeline
"""

from typing import Optional


class ZhCodeError(Exception):
    """Base class for every error the compiler surfaces to callers."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class ParseError(ZhCodeError, SyntaxError):
    """Positioned parse failure. The first one aborts the whole parse."""

    def __init__(self, message: str, line: int, column: int,
                 expected: Optional[str] = None, found: Optional[str] = None):
        super().__init__(message, line, column)
        self.expected = expected
        self.found = found

    @property
    def col(self) -> int:
        return self.column


class TranspileError(ZhCodeError):
    """An AST node the JavaScript generator has no rendering for."""


class ConfigError(ZhCodeError):
    """Bundled language or target definition is missing or malformed."""
