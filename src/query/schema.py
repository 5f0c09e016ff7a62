"""Filter schema (Pydantic models).

This schema is the contract between the query translator and the match engine. The HTTP layer also
builds it directly from query-string parameters, bypassing the translator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from src.query.errors import (
    ConflictingBoundsError,
    InvalidCharacterError,
    NegativeValueError,
)

_NUMERIC_FIELDS: tuple[str, ...] = ("min_length", "max_length", "word_count")


def validate_filters(filters: Mapping[str, Any]) -> None:
    """Check the cross-field invariants of a raw filter mapping.

    Absent keys and `None` values impose no constraint.

    Raises:
        ConflictingBoundsError: If `min_length > max_length`.
        NegativeValueError: If `min_length`, `max_length` or `word_count` is negative.
        InvalidCharacterError: If `contains_character` is not exactly one alphabetic character.
    """

    min_length = filters.get("min_length")
    max_length = filters.get("max_length")
    if min_length is not None and max_length is not None and min_length > max_length:
        raise ConflictingBoundsError("min_length cannot be greater than max_length")

    for name in _NUMERIC_FIELDS:
        value = filters.get(name)
        if value is not None and value < 0:
            raise NegativeValueError(f"{name} cannot be negative")

    character = filters.get("contains_character")
    if character is not None:
        if not isinstance(character, str) or len(character) != 1 or not character.isalpha():
            raise InvalidCharacterError("contains_character must be a single letter")


class FilterSet(BaseModel):
    """Optional predicates over string properties, combined using logical AND."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    is_palindrome: bool | None = None
    min_length: int | None = None
    max_length: int | None = None
    word_count: int | None = None
    contains_character: str | None = None

    @model_validator(mode="after")
    def validate_invariants(self) -> FilterSet:
        """Enforce bounds ordering, non-negative numerics and single-letter containment."""

        validate_filters(self.as_dict())
        return self

    def as_dict(self) -> dict[str, Any]:
        """Return only the fields that are set."""

        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.as_dict()


class ParseResult(BaseModel):
    """A successfully translated query: the input text plus a non-empty filter set."""

    model_config = ConfigDict(frozen=True)

    original: str
    parsed_filters: FilterSet
