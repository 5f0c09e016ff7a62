"""Filter-match engine.

The engine selects the records that satisfy every predicate present in a `FilterSet`. Absent
fields are wildcards. It is a total function: it never raises on a valid filter set, and it never
mutates or reorders its input.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from src.analysis.schema import AnalyzedString
from src.query.schema import FilterSet

Predicate = Callable[[AnalyzedString, Any], bool]


def _contains_character(item: AnalyzedString, character: str) -> bool:
    return character.lower() in item.value.lower()


_PREDICATES: tuple[tuple[str, Predicate], ...] = (
    ("is_palindrome", lambda item, want: item.properties.is_palindrome == want),
    ("min_length", lambda item, bound: item.properties.length >= bound),
    ("max_length", lambda item, bound: item.properties.length <= bound),
    ("word_count", lambda item, count: item.properties.word_count == count),
    ("contains_character", _contains_character),
)


def _active_predicates(filters: FilterSet | None) -> list[tuple[Predicate, Any]]:
    if filters is None:
        return []

    active: list[tuple[Predicate, Any]] = []
    for field, predicate in _PREDICATES:
        expected = getattr(filters, field)
        if expected is not None:
            active.append((predicate, expected))
    return active


def matches(item: AnalyzedString, filters: FilterSet | None) -> bool:
    """Whether a single record satisfies every present predicate."""

    return all(predicate(item, expected) for predicate, expected in _active_predicates(filters))


def match(filters: FilterSet | None, items: Iterable[AnalyzedString]) -> list[AnalyzedString]:
    """Return the records satisfying `filters`, in their original relative order.

    `None` or an empty filter set keeps every record.
    """

    active = _active_predicates(filters)
    if not active:
        return list(items)

    # `all` stops at the first failing predicate.
    return [
        item
        for item in items
        if all(predicate(item, expected) for predicate, expected in active)
    ]
