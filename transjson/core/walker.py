"""
Structured document walker.

Parses JSON text, collects every string value as a leaf unit tagged with
its path from the root, hands the units to the dispatcher and rebuilds a
new tree of identical shape with the translated strings in place.

Object keys are never translated. Null, boolean and number nodes are
copied unchanged. Every string occurrence is translated independently,
including empty strings and duplicates.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from transjson.core.dispatcher import (
    FailurePolicy,
    LeafOutcome,
    LeafPath,
    LeafTranslateFn,
    LeafUnit,
    dispatch,
    json_pointer,
)
from transjson.core.errors import ParseError, ValidationError
from transjson.core.values import (
    JsonArray,
    JsonKind,
    JsonObject,
    JsonString,
    JsonValue,
    dumps,
    parse,
)

logger = logging.getLogger(__name__)


DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True)
class LeafFailure:
    """A leaf left untranslated under the partial failure policy."""

    pointer: str
    error: str


@dataclass
class TranslatedDocument:
    """Output of a document translation."""

    text: str
    leaf_count: int
    failures: list[LeafFailure] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


# =============================================================================
# Tree traversal
# =============================================================================


def collect_leaves(value: JsonValue, path: LeafPath = ()) -> Iterator[LeafUnit]:
    """Yield a leaf unit for every string value, in document order."""
    kind = value.kind
    if kind == JsonKind.STRING:
        yield LeafUnit(path=path, text=value.value)
    elif kind == JsonKind.ARRAY:
        for index, item in enumerate(value.items):
            yield from collect_leaves(item, path + (index,))
    elif kind == JsonKind.OBJECT:
        for key, item in value.entries:
            yield from collect_leaves(item, path + (key,))


def rebuild(value: JsonValue, outcomes: dict[LeafPath, LeafOutcome], path: LeafPath = ()) -> JsonValue:
    """
    Build a new tree with each string leaf replaced by its outcome.

    Failed leaves (partial policy) keep their source text.
    """
    kind = value.kind
    if kind == JsonKind.STRING:
        outcome = outcomes.get(path)
        if outcome is None:
            raise RuntimeError(f"No translation result for leaf {json_pointer(path)!r}")
        return JsonString(outcome.translated if outcome.ok else outcome.source)
    if kind == JsonKind.ARRAY:
        return JsonArray(tuple(
            rebuild(item, outcomes, path + (index,))
            for index, item in enumerate(value.items)
        ))
    if kind == JsonKind.OBJECT:
        return JsonObject(tuple(
            (key, rebuild(item, outcomes, path + (key,)))
            for key, item in value.entries
        ))
    # null, boolean, number
    return value


# =============================================================================
# Document Translator
# =============================================================================


@contextmanager
def _nesting_guard() -> Iterator[None]:
    """Report interpreter recursion overflow on deep documents as ParseError."""
    try:
        yield
    except RecursionError as e:
        raise ParseError("Document nesting exceeds the supported depth") from e


class DocumentTranslator:
    """
    Translates every string value of a JSON document.

    Usage:
        translator = DocumentTranslator(translate_leaf, max_concurrency=4)
        result = await translator.translate('{"greeting": "hello"}')
        print(result.text)
    """

    def __init__(
        self,
        translate_leaf: LeafTranslateFn,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        policy: FailurePolicy = FailurePolicy.FAIL_FAST,
        indent: int | None = 2,
    ):
        self.translate_leaf = translate_leaf
        self.max_concurrency = max_concurrency
        self.policy = FailurePolicy(policy)
        self.indent = indent

    async def _run(self, value: JsonValue) -> tuple[JsonValue, int, list[LeafFailure]]:
        with _nesting_guard():
            units = list(collect_leaves(value))

        logger.info("Dispatching %d leaf unit(s), max_concurrency=%d", len(units), self.max_concurrency)

        outcomes = await dispatch(units, self.translate_leaf, self.max_concurrency, self.policy)
        failures = [
            LeafFailure(pointer=json_pointer(unit.path), error=str(outcomes[unit.path].error))
            for unit in units
            if not outcomes[unit.path].ok
        ]
        if failures:
            logger.warning("%d leaf translation(s) failed; source text kept", len(failures))
        with _nesting_guard():
            translated = rebuild(value, outcomes)
        return translated, len(units), failures

    async def translate_value(self, value: JsonValue) -> tuple[JsonValue, list[LeafFailure]]:
        """
        Translate a parsed value tree.

        Returns:
            The new tree and any per-leaf failures (partial policy only)
        """
        translated, _, failures = await self._run(value)
        return translated, failures

    async def translate(self, input_text: str) -> TranslatedDocument:
        """
        Translate a JSON document given as text.

        Raises:
            ValidationError: input is empty or whitespace only
            ParseError: input is not valid JSON
            TranslationError: a leaf failed under the fail-fast policy
        """
        if not input_text or not input_text.strip():
            raise ValidationError("JSON cannot be empty", fields=["json"])

        value = parse(input_text)
        translated, leaf_count, failures = await self._run(value)

        with _nesting_guard():
            text = dumps(translated, indent=self.indent)

        return TranslatedDocument(
            text=text,
            leaf_count=leaf_count,
            failures=failures,
        )


async def translate_document(
    input_text: str,
    translate_leaf: LeafTranslateFn,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    policy: FailurePolicy = FailurePolicy.FAIL_FAST,
) -> str:
    """Translate every string value of ``input_text``; returns JSON text."""
    result = await DocumentTranslator(translate_leaf, max_concurrency, policy).translate(input_text)
    return result.text
