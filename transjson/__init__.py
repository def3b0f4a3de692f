"""
transjson - translate the string values of arbitrary JSON documents.

The document's shape (keys, key order, array order, non-string values) is
preserved exactly; only string values change.

Usage:
    from transjson import translate_document

    async def shout(text: str) -> str:
        return text.upper()

    await translate_document('{"a": "hi", "b": ["yo", 3, null]}', shout)
"""

from transjson.core import (
    DocumentTranslator,
    FailurePolicy,
    ParseError,
    TranslatedDocument,
    TranslationError,
    TransJsonError,
    ValidationError,
    translate_document,
)

__version__ = "0.1.0"

__all__ = [
    "DocumentTranslator",
    "FailurePolicy",
    "ParseError",
    "TranslatedDocument",
    "TranslationError",
    "TransJsonError",
    "ValidationError",
    "translate_document",
]
