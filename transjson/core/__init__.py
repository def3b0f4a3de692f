"""
Core module - the JSON tree transform.

This module contains:
- values: JSON value tagged union, parsing and serialization
- walker: Structured document walker (shape-preserving rebuild)
- dispatcher: Bounded-concurrency leaf translation dispatcher
- errors: Validation / parse / translation error taxonomy
"""

from transjson.core.errors import (
    TransJsonError,
    ValidationError,
    ParseError,
    TranslationError,
)

from transjson.core.values import (
    JsonKind,
    JsonValue,
    JsonNull,
    JsonBool,
    JsonNumber,
    JsonString,
    JsonArray,
    JsonObject,
    parse,
    dumps,
    from_python,
    to_python,
)

from transjson.core.dispatcher import (
    FailurePolicy,
    LeafUnit,
    LeafOutcome,
    dispatch,
    json_pointer,
)

from transjson.core.walker import (
    DocumentTranslator,
    TranslatedDocument,
    LeafFailure,
    translate_document,
)

__all__ = [
    # Errors
    "TransJsonError",
    "ValidationError",
    "ParseError",
    "TranslationError",
    # Values
    "JsonKind",
    "JsonValue",
    "JsonNull",
    "JsonBool",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    "parse",
    "dumps",
    "from_python",
    "to_python",
    # Dispatcher
    "FailurePolicy",
    "LeafUnit",
    "LeafOutcome",
    "dispatch",
    "json_pointer",
    # Walker
    "DocumentTranslator",
    "TranslatedDocument",
    "LeafFailure",
    "translate_document",
]
