"""
Leaf translation dispatcher.

Runs the leaf translation units discovered by the walker under a bounded
level of concurrency and routes each result back to the tree position it
came from. Completion order does not matter: results are keyed by path.

Two failure policies:
- FAIL_FAST: the first failure cancels every outstanding sibling and the
  whole call fails with TranslationError. No partial results escape.
- PARTIAL: every unit runs; failures are reported per leaf.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Sequence, Union

from transjson.core.errors import TranslationError

logger = logging.getLogger(__name__)


LeafPath = tuple[Union[str, int], ...]
LeafTranslateFn = Callable[[str], Awaitable[str]]


class FailurePolicy(str, Enum):
    """What to do when a leaf translation fails."""

    FAIL_FAST = "fail_fast"
    PARTIAL = "partial"


@dataclass(frozen=True)
class LeafUnit:
    """One string leaf scheduled for translation."""

    path: LeafPath
    text: str


@dataclass(frozen=True)
class LeafOutcome:
    """Result of one leaf: either ``translated`` or ``error`` is set."""

    path: LeafPath
    source: str
    translated: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def json_pointer(path: LeafPath) -> str:
    """Render a leaf path as an RFC 6901 JSON Pointer."""
    tokens = []
    for token in path:
        tokens.append(str(token).replace("~", "~0").replace("/", "~1"))
    return "".join("/" + t for t in tokens)


class _ResultSlots:
    """Write-once result storage keyed by leaf path."""

    def __init__(self):
        self._slots: dict[LeafPath, LeafOutcome] = {}

    def write(self, outcome: LeafOutcome) -> None:
        if outcome.path in self._slots:
            raise RuntimeError(f"Result slot {json_pointer(outcome.path)!r} written twice")
        self._slots[outcome.path] = outcome

    def as_dict(self) -> dict[LeafPath, LeafOutcome]:
        return dict(self._slots)


async def dispatch(
    units: Sequence[LeafUnit],
    translate_leaf: LeafTranslateFn,
    max_concurrency: int,
    policy: FailurePolicy = FailurePolicy.FAIL_FAST,
) -> dict[LeafPath, LeafOutcome]:
    """
    Translate every unit with at most ``max_concurrency`` calls in flight.

    Args:
        units: Leaf units in document order
        translate_leaf: Async capability mapping source text to translation
        max_concurrency: Upper bound on simultaneous calls (positive)
        policy: Failure policy

    Returns:
        Outcome for each unit, keyed by its path

    Raises:
        TranslationError: A leaf failed under FAIL_FAST
        ValueError: max_concurrency is not a positive integer
    """
    if isinstance(max_concurrency, bool) or not isinstance(max_concurrency, int) or max_concurrency < 1:
        raise ValueError(f"max_concurrency must be a positive integer, got {max_concurrency!r}")

    slots = _ResultSlots()
    if not units:
        return slots.as_dict()

    semaphore = asyncio.Semaphore(max_concurrency)
    capture_errors = policy == FailurePolicy.PARTIAL

    async def run(unit: LeafUnit) -> None:
        async with semaphore:
            logger.debug("Translating leaf %s", json_pointer(unit.path))
            try:
                translated = await translate_leaf(unit.text)
            except Exception as e:
                if not capture_errors:
                    raise
                logger.warning("Leaf %s failed: %s", json_pointer(unit.path), e)
                slots.write(LeafOutcome(path=unit.path, source=unit.text, error=e))
                return
        slots.write(LeafOutcome(path=unit.path, source=unit.text, translated=translated))

    tasks = [asyncio.create_task(run(unit)) for unit in units]

    try:
        if capture_errors:
            await asyncio.gather(*tasks)
            return slots.as_dict()

        # Returns once every task is done, or as soon as one raises
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        failures = [
            (unit, task.exception())
            for unit, task in zip(units, tasks)
            if task in done and not task.cancelled() and task.exception() is not None
        ]
        if failures:
            # Earliest failure in document order among those observed
            unit, error = failures[0]
            pointer = json_pointer(unit.path)
            logger.warning(
                "Leaf %s failed, cancelling %d outstanding unit(s): %s",
                pointer,
                len(pending),
                error,
            )
            raise TranslationError(error, pointer=pointer) from error
        return slots.as_dict()
    finally:
        outstanding = [task for task in tasks if not task.done()]
        for task in outstanding:
            task.cancel()
        if outstanding:
            await asyncio.gather(*outstanding, return_exceptions=True)
