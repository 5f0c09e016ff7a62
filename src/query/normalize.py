"""Text normalization for deterministic query translation."""

from __future__ import annotations

import re

_NON_WORD_RE = re.compile(r"[^\w\-\s]+")
_MULTISPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize user text for rules-based translation.

    Normalization is intentionally conservative:
        - Lowercase.
        - Replace punctuation with spaces (hyphens are kept for "non-palindrome").
        - Collapse whitespace.

    The goal is deterministic matching, not linguistic lemmatization.
    """

    value = (text or "").strip().lower()

    # Normalize common unicode dashes to ASCII hyphen.
    value = value.replace("—", "-").replace("–", "-")

    # Treat quotes/backticks as separators but keep the contents (e.g. "letter 'z'").
    value = value.replace("`", " ").replace('"', " ").replace("'", " ")

    value = _NON_WORD_RE.sub(" ", value)
    value = _MULTISPACE_RE.sub(" ", value).strip()
    return value
