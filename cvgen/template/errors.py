"""
Template engine errors.

All errors carry the 1-based line and column of the offending tag so that
a broken template can be fixed without guessing.
"""

from __future__ import annotations


class TemplateError(Exception):
    """Base class for template engine errors."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column


class LexerError(TemplateError):
    """Lexical error (unterminated tag)."""
    pass


class ParserError(TemplateError):
    """Syntax error (unknown or unbalanced directive, malformed placeholder)."""
    pass


class TemplateEvaluationError(TemplateError):
    """Runtime error (unknown variable, non-iterable loop source)."""
    pass


__all__ = ["TemplateError", "LexerError", "ParserError", "TemplateEvaluationError"]
