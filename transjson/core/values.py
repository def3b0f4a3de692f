"""
JSON value model.

Parsed documents are represented as an explicit tagged union so that
traversal logic dispatches on ``kind`` instead of Python runtime types.
Number nodes keep their literal text, so ``1.0``, ``1e400`` and very
large integers survive a round trip unchanged.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from transjson.core.errors import ParseError


class JsonKind(str, Enum):
    """Variant tag of a JSON value."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


# =============================================================================
# Variants
# =============================================================================


@dataclass(frozen=True)
class JsonNull:
    kind = JsonKind.NULL


@dataclass(frozen=True)
class JsonBool:
    value: bool
    kind = JsonKind.BOOLEAN


@dataclass(frozen=True)
class JsonNumber:
    """A number, stored as its exact source literal."""

    literal: str
    kind = JsonKind.NUMBER


@dataclass(frozen=True)
class JsonString:
    value: str
    kind = JsonKind.STRING


@dataclass(frozen=True)
class JsonArray:
    items: tuple[JsonValue, ...] = ()
    kind = JsonKind.ARRAY


@dataclass(frozen=True)
class JsonObject:
    """An object; ``entries`` keeps insertion order."""

    entries: tuple[tuple[str, JsonValue], ...] = ()
    kind = JsonKind.OBJECT

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def get(self, key: str) -> JsonValue | None:
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        return None


JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]

NULL = JsonNull()


# =============================================================================
# Parsing
# =============================================================================


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default; RFC 8259 does not
    raise ValueError(f"Invalid number literal: {name}")


def _make_object(pairs: list[tuple[str, Any]]) -> JsonObject:
    # Repeated keys: last value wins, first position is kept
    merged: dict[str, JsonValue] = {}
    for key, value in pairs:
        merged[key] = _lift(value)
    return JsonObject(tuple(merged.items()))


def _lift(obj: Any) -> JsonValue:
    """Lift a value produced by the decoder hooks into the tagged union."""
    if isinstance(obj, (JsonObject, JsonNumber)):
        return obj
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return JsonBool(obj)
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, list):
        return JsonArray(tuple(_lift(item) for item in obj))
    raise TypeError(f"Unexpected decoded value: {obj!r}")


def parse(text: str) -> JsonValue:
    """
    Parse JSON text into a value tree.

    Raises:
        ParseError: the text is not a valid JSON document
    """
    try:
        raw = json.loads(
            text,
            object_pairs_hook=_make_object,
            parse_int=JsonNumber,
            parse_float=JsonNumber,
            parse_constant=_reject_constant,
        )
        return _lift(raw)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, line=e.lineno, column=e.colno, position=e.pos) from e
    except ValueError as e:
        raise ParseError(str(e)) from e
    except RecursionError as e:
        raise ParseError("Document nesting exceeds the supported depth") from e


# =============================================================================
# Serialization
# =============================================================================


# A surrogate left in a decoded str is unpaired; it cannot be encoded as UTF-8
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def _encode_string(value: str) -> str:
    encoded = json.dumps(value, ensure_ascii=False)
    return _SURROGATE_RE.sub(lambda m: "\\u%04x" % ord(m.group()), encoded)


def _encode(value: JsonValue, indent: int | None, level: int, out: list[str]) -> None:
    kind = value.kind

    if kind == JsonKind.NULL:
        out.append("null")
    elif kind == JsonKind.BOOLEAN:
        out.append("true" if value.value else "false")
    elif kind == JsonKind.NUMBER:
        out.append(value.literal)
    elif kind == JsonKind.STRING:
        out.append(_encode_string(value.value))
    elif kind == JsonKind.ARRAY:
        if not value.items:
            out.append("[]")
            return
        out.append("[")
        for i, item in enumerate(value.items):
            if i:
                out.append(",")
            if indent is not None:
                out.append("\n" + " " * (indent * (level + 1)))
            _encode(item, indent, level + 1, out)
        if indent is not None:
            out.append("\n" + " " * (indent * level))
        out.append("]")
    elif kind == JsonKind.OBJECT:
        if not value.entries:
            out.append("{}")
            return
        separator = ": " if indent is not None else ":"
        out.append("{")
        for i, (key, item) in enumerate(value.entries):
            if i:
                out.append(",")
            if indent is not None:
                out.append("\n" + " " * (indent * (level + 1)))
            out.append(_encode_string(key))
            out.append(separator)
            _encode(item, indent, level + 1, out)
        if indent is not None:
            out.append("\n" + " " * (indent * level))
        out.append("}")
    else:
        raise TypeError(f"Unknown JSON kind: {kind}")


def dumps(value: JsonValue, indent: int | None = 2) -> str:
    """
    Serialize a value tree to canonical JSON text.

    Args:
        value: Tree to serialize
        indent: Spaces per nesting level, or None for compact output

    Returns:
        Valid JSON text (non-ASCII characters are not escaped)
    """
    out: list[str] = []
    _encode(value, indent, 0, out)
    return "".join(out)


# =============================================================================
# Python object bridge
# =============================================================================


def from_python(obj: Any) -> JsonValue:
    """Build a value tree from plain Python data (dict, list, str, ...)."""
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return JsonBool(obj)
    if isinstance(obj, (int, float)):
        return JsonNumber(json.dumps(obj, allow_nan=False))
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, (list, tuple)):
        return JsonArray(tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        entries: dict[str, JsonValue] = {}
        for k, v in obj.items():
            key = str(k)
            if key in entries:
                raise ValueError(f"Keys collide after conversion to string: {key!r}")
            entries[key] = from_python(v)
        return JsonObject(tuple(entries.items()))
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_python(value: JsonValue) -> Any:
    """Convert a value tree back to plain Python data."""
    kind = value.kind
    if kind == JsonKind.NULL:
        return None
    if kind in (JsonKind.BOOLEAN, JsonKind.STRING):
        return value.value
    if kind == JsonKind.NUMBER:
        return json.loads(value.literal)
    if kind == JsonKind.ARRAY:
        return [to_python(item) for item in value.items]
    if kind == JsonKind.OBJECT:
        return {key: to_python(item) for key, item in value.entries}
    raise TypeError(f"Unknown JSON kind: {kind}")
