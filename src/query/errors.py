"""Error taxonomy of the query translator.

Callers must be able to tell "text not understood" (`InvalidQueryError`, `NoMatchError`) apart
from "text understood but contradictory" (`FilterValidationError` and its subclasses).
"""

from __future__ import annotations


class QueryTranslationError(ValueError):
    """Base class for every failure raised while translating a query."""


class InvalidQueryError(QueryTranslationError):
    """Raised when the query is not a non-empty string or holds a number that cannot be read."""


class NoMatchError(QueryTranslationError):
    """Raised when no known phrasing was recognized in the query."""


class FilterValidationError(QueryTranslationError):
    """Raised when a filter set violates its invariants."""


class ConflictingBoundsError(FilterValidationError):
    """Raised when `min_length` is greater than `max_length`."""


class NegativeValueError(FilterValidationError):
    """Raised when a numeric filter is negative."""


class InvalidCharacterError(FilterValidationError):
    """Raised when `contains_character` is not a single letter."""
