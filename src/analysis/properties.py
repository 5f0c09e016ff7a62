"""Per-string property computation."""

from __future__ import annotations

import hashlib
import re
from datetime import UTC, datetime

from src.analysis.schema import AnalyzedString, StringProperties

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def sha256_hex(value: str) -> str:
    """Hex SHA-256 of the UTF-8 encoded value; also used as the record id."""

    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def is_palindrome(value: str) -> bool:
    """Case-insensitive palindrome check over ASCII letters and digits only.

    Punctuation and whitespace are ignored, so "A man, a plan, a canal: Panama" qualifies.
    """

    cleaned = _NON_ALNUM_RE.sub("", value).lower()
    return cleaned == cleaned[::-1]


def count_words(value: str) -> int:
    return len(value.split())


def character_frequency_map(value: str) -> dict[str, int]:
    freq: dict[str, int] = {}
    for char in value:
        freq[char] = freq.get(char, 0) + 1
    return freq


def analyze(value: str) -> StringProperties:
    """Compute every derived property of `value` in one place."""

    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(set(value)),
        word_count=count_words(value),
        sha256_hash=sha256_hex(value),
        character_frequency_map=character_frequency_map(value),
    )


def build_record(value: str, *, created_at: datetime | None = None) -> AnalyzedString:
    """Analyze `value` and wrap it into a record keyed by its hash."""

    properties = analyze(value)
    return AnalyzedString(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
        created_at=created_at or datetime.now(UTC),
    )
