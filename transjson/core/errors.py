"""
Error taxonomy.

Callers discriminate three failure categories:
- ValidationError: a required request field is missing or empty
- ParseError: the document text is not valid JSON
- TranslationError: a leaf translation call failed
"""

from __future__ import annotations


class TransJsonError(Exception):
    """Base exception for all translation request failures."""

    category: str = "error"


class ValidationError(TransJsonError):
    """Missing or empty required fields. Never reaches the walker."""

    category = "validation"

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class ParseError(TransJsonError):
    """
    The input text is not a valid JSON document.

    Carries the decoder's diagnostic unchanged.
    """

    category = "parse"

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        position: int | None = None,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.position = position
        if line is not None and column is not None:
            super().__init__(f"{message}: line {line} column {column} (char {position})")
        else:
            super().__init__(message)


class TranslationError(TransJsonError):
    """
    A leaf translation call failed.

    Wraps the first observed failure; the original exception is
    available as ``cause`` and as ``__cause__``.
    """

    category = "translation"

    def __init__(self, cause: BaseException, pointer: str | None = None):
        self.cause = cause
        self.pointer = pointer
        super().__init__(str(cause) or cause.__class__.__name__)
