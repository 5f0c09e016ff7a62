"""Analyzed string records (Pydantic models).

These records are what the store persists and what the match engine filters. The match engine
trusts `properties` verbatim and never recomputes them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StringProperties(BaseModel):
    """Derived properties of a stored string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: dict[str, int]


class AnalyzedString(BaseModel):
    """A stored string plus its precomputed properties."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime
