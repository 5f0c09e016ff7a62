"""Rules-based English query translator.

This translator is intentionally strict and deterministic:
    - it only recognizes the phrasings listed in `src.query.vocabulary`,
    - each rule group sets its fields from the first rule that matches,
    - the result is validated before a `ParseResult` is returned; there is no partial result.
"""

from __future__ import annotations

import logging
from typing import Any

from src.query.errors import InvalidQueryError, NoMatchError
from src.query.normalize import normalize_text
from src.query.schema import FilterSet, ParseResult, validate_filters
from src.query.vocabulary import (
    NEGATIVE_PALINDROME_KEYWORDS,
    POSITIVE_PALINDROME_KEYWORDS,
    RULE_GROUPS,
    find_first_rule,
    has_keyword,
)

logger = logging.getLogger(__name__)


def _apply_palindrome_polarity(text: str, filters: dict[str, Any]) -> None:
    # Two passes on purpose: the negative pass overwrites the positive one.
    if has_keyword(text, POSITIVE_PALINDROME_KEYWORDS):
        filters["is_palindrome"] = True
    if has_keyword(text, NEGATIVE_PALINDROME_KEYWORDS):
        filters["is_palindrome"] = False


def extract_filters(text: str) -> dict[str, Any]:
    """Apply every rule group to `text` and return the raw, unvalidated fields."""

    normalized = normalize_text(text)
    filters: dict[str, Any] = {}

    _apply_palindrome_polarity(normalized, filters)

    for group, rules in RULE_GROUPS:
        found = find_first_rule(rules, normalized)
        if found is None:
            continue
        rule, fields = found
        logger.debug("rule matched group=%s rule=%s fields=%s", group, rule.name, fields)
        filters.update(fields)

    return filters


def translate(query: Any) -> ParseResult:
    """Translate a free-text query into a validated filter set.

    Raises:
        InvalidQueryError: If `query` is not a non-empty string, or a captured number is too
            large to convert.
        ConflictingBoundsError: If the recognized bounds contradict each other.
        NegativeValueError: If a recognized numeric bound is negative.
        InvalidCharacterError: If the recognized character is not a single letter.
        NoMatchError: If no known phrasing was recognized.
    """

    if not isinstance(query, str) or not query.strip():
        raise InvalidQueryError("query must be a non-empty string")

    filters = extract_filters(query)
    validate_filters(filters)

    if not filters:
        raise NoMatchError("unable to parse natural language query: no recognizable filters found")

    return ParseResult(original=query, parsed_filters=FilterSet(**filters))
