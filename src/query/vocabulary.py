"""English phrasing catalog for the rules-based translator.

Every group is an ordered tuple of rules evaluated against normalized (lower-cased) text. Within a
group the first matching rule wins, so precedence is the order of the tuple and nothing else.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from src.query.errors import InvalidQueryError

POSITIVE_PALINDROME_KEYWORDS: tuple[str, ...] = (
    "palindrome",
    "palindromic",
    "reads the same",
    "same forwards and backwards",
)

# Applied after the positive set; "not palindrome" also contains "palindrome".
NEGATIVE_PALINDROME_KEYWORDS: tuple[str, ...] = (
    "not palindrome",
    "non-palindrome",
    "non palindrome",
)


class BoundKind(StrEnum):
    """Which length bound a length rule sets."""

    min = "min"
    max = "max"
    exact = "exact"


@dataclass(frozen=True)
class Rule:
    """A compiled pattern paired with the filter fields it produces on a match."""

    name: str
    pattern: re.Pattern[str]
    apply: Callable[[re.Match[str]], dict[str, Any]]

    def fields(self, text: str) -> dict[str, Any] | None:
        """Return the produced fields, or `None` when the pattern does not occur in `text`."""

        match = self.pattern.search(text)
        if match is None:
            return None
        return self.apply(match)


def _constant(**fields: Any) -> Callable[[re.Match[str]], dict[str, Any]]:
    return lambda _match: dict(fields)


def _to_int(digits: str) -> int:
    try:
        return int(digits)
    except ValueError as exc:
        # Digit runs past the interpreter's int conversion limit.
        raise InvalidQueryError(f"number too large: {digits[:20]}...") from exc


def _captured_int(field: str) -> Callable[[re.Match[str]], dict[str, Any]]:
    return lambda match: {field: _to_int(match.group(1))}


def _captured_letter(match: re.Match[str]) -> dict[str, Any]:
    return {"contains_character": match.group(1).lower()}


def _length_bound(kind: BoundKind, offset: int) -> Callable[[re.Match[str]], dict[str, Any]]:
    """Build an applier turning the captured number into length bounds.

    The offset encodes strictness: "longer than n" means `length >= n + 1`.
    """

    def apply(match: re.Match[str]) -> dict[str, Any]:
        value = _to_int(match.group(1)) + offset
        if kind == BoundKind.exact:
            return {"min_length": value, "max_length": value}
        return {f"{kind}_length": value}

    return apply


def _rule(name: str, pattern: str, apply: Callable[[re.Match[str]], dict[str, Any]]) -> Rule:
    return Rule(name=name, pattern=re.compile(pattern), apply=apply)


WORD_COUNT_RULES: tuple[Rule, ...] = (
    _rule("single_word", r"single word", _constant(word_count=1)),
    _rule("one_word", r"one word", _constant(word_count=1)),
    _rule("n_words", r"(\d+)\s*word", _captured_int("word_count")),
    _rule("word_count_of", r"word count (?:of |is )?(\d+)", _captured_int("word_count")),
    _rule("exactly_n_words", r"exactly (\d+) word", _captured_int("word_count")),
)

LENGTH_RULES: tuple[Rule, ...] = (
    _rule("longer_than", r"longer than (\d+)", _length_bound(BoundKind.min, 1)),
    _rule("more_than_chars", r"more than (\d+) character", _length_bound(BoundKind.min, 1)),
    _rule("at_least_chars", r"at least (\d+) character", _length_bound(BoundKind.min, 0)),
    _rule("minimum_chars", r"minimum (?:of )?(\d+) character", _length_bound(BoundKind.min, 0)),
    _rule("min_length_of", r"min(?:imum)? length (?:of )?(\d+)", _length_bound(BoundKind.min, 0)),
    _rule("shorter_than", r"shorter than (\d+)", _length_bound(BoundKind.max, -1)),
    _rule("less_than_chars", r"less than (\d+) character", _length_bound(BoundKind.max, -1)),
    _rule("at_most_chars", r"at most (\d+) character", _length_bound(BoundKind.max, 0)),
    _rule("maximum_chars", r"maximum (?:of )?(\d+) character", _length_bound(BoundKind.max, 0)),
    _rule("max_length_of", r"max(?:imum)? length (?:of )?(\d+)", _length_bound(BoundKind.max, 0)),
    _rule("length_of", r"length (?:of )?(\d+)", _length_bound(BoundKind.exact, 0)),
)

EXPLICIT_LETTER_RULES: tuple[Rule, ...] = (
    _rule(
        "contains_letter",
        r"contain(?:ing|s)?\s+(?:the\s+)?(?:letter|character)\s+([a-z])",
        _captured_letter,
    ),
    _rule("with_letter", r"with\s+(?:the\s+)?(?:letter|character)\s+([a-z])", _captured_letter),
    _rule("has_letter", r"has\s+(?:the\s+)?(?:letter|character)\s+([a-z])", _captured_letter),
    _rule(
        "includes_letter",
        r"include(?:s)?\s+(?:the\s+)?(?:letter|character)\s+([a-z])",
        _captured_letter,
    ),
)

# A bare "vowel" with no vowel letter after it matches nothing here and is ignored.
VOWEL_RULES: tuple[Rule, ...] = (
    _rule("first_vowel", r"first vowel", _constant(contains_character="a")),
    _rule("vowel_a", r"vowel a", _constant(contains_character="a")),
    _rule("contains_a", r"contain(?:s)?\s+a\b", _constant(contains_character="a")),
    _rule("vowel_letter", r"vowel\s+([aeiou])\b", _captured_letter),
)

BARE_LETTER_RULES: tuple[Rule, ...] = (
    _rule("letter", r"letter\s+([a-z])\b", _captured_letter),
)

# The character cascade: a later step only applies when no earlier step produced a letter, which
# is exactly first-match-wins over the concatenation.
CHARACTER_RULES: tuple[Rule, ...] = EXPLICIT_LETTER_RULES + VOWEL_RULES + BARE_LETTER_RULES

RULE_GROUPS: tuple[tuple[str, tuple[Rule, ...]], ...] = (
    ("word_count", WORD_COUNT_RULES),
    ("length", LENGTH_RULES),
    ("character", CHARACTER_RULES),
)


def find_first_rule(rules: tuple[Rule, ...], text: str) -> tuple[Rule, dict[str, Any]] | None:
    """Return the first rule in `rules` that matches `text`, with the fields it produced."""

    for rule in rules:
        fields = rule.fields(text)
        if fields is not None:
            return rule, fields
    return None


def has_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    """Whether any keyword occurs in `text` as a plain substring."""

    return any(keyword in text for keyword in keywords)
