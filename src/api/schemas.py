"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from src.analysis.schema import AnalyzedString


class StringCreate(BaseModel):
    """Body of `POST /strings`."""

    value: str


class StringList(BaseModel):
    """Records selected by explicit query-string filters."""

    data: list[AnalyzedString]
    count: int
    filters_applied: dict[str, Any]


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: dict[str, Any]


class NaturalLanguageResult(BaseModel):
    """Records selected by a translated free-text query."""

    data: list[AnalyzedString]
    count: int
    interpreted_query: InterpretedQuery
