"""HTTP route handlers.

Domain errors are mapped to status codes here and nowhere else: the translator, the match engine
and the store know nothing about HTTP. Handlers that mutate the store are plain `def`: every
mutation rewrites the data file, so FastAPI runs them in its threadpool.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from time import monotonic
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from src.analysis.properties import build_record
from src.analysis.schema import AnalyzedString
from src.api.schemas import InterpretedQuery, NaturalLanguageResult, StringCreate, StringList
from src.app import App
from src.matching.engine import match
from src.query.errors import FilterValidationError, InvalidQueryError, NoMatchError
from src.query.schema import FilterSet, validate_filters
from src.query.translator import translate
from src.storage.store import DuplicateStringError, StringNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app(request: Request) -> App:
    return request.app.state.app


def _newest_first(records: Sequence[AnalyzedString]) -> list[AnalyzedString]:
    return sorted(records, key=lambda r: r.created_at, reverse=True)


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "Success", "message": "Welcome to the String Analyzer Service"}


@router.get("/health")
async def health() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.post("/strings", response_model=AnalyzedString, status_code=201)
def create_string(payload: StringCreate, app: App = Depends(get_app)) -> AnalyzedString:
    """Analyze and store a string."""

    try:
        record = app.store.add(build_record(payload.value))
    except DuplicateStringError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    logger.info("stored string id=%s length=%d", record.id, record.properties.length)
    return record


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResult)
async def filter_by_natural_language(
        query: str = Query(...),
        app: App = Depends(get_app),
) -> NaturalLanguageResult:
    """Filter stored strings with a free-text query."""

    started = monotonic()
    try:
        parsed = translate(query)
    except (InvalidQueryError, NoMatchError) as exc:
        logger.info("unsupported query reason=%s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FilterValidationError as exc:
        logger.info("conflicting query reason=%s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    data = _newest_first(match(parsed.parsed_filters, app.store.all()))

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "handled query filters=%s count=%d latency_ms=%d",
        parsed.parsed_filters.as_dict(),
        len(data),
        latency_ms,
    )
    return NaturalLanguageResult(
        data=data,
        count=len(data),
        interpreted_query=InterpretedQuery(
            original=parsed.original,
            parsed_filters=parsed.parsed_filters.as_dict(),
        ),
    )


@router.get("/strings", response_model=StringList)
async def list_strings(
        is_palindrome: bool | None = Query(None),
        min_length: int | None = Query(None),
        max_length: int | None = Query(None),
        word_count: int | None = Query(None),
        contains_character: str | None = Query(None),
        app: App = Depends(get_app),
) -> StringList:
    """List stored strings, optionally filtered by explicit parameters."""

    requested: dict[str, Any] = {
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    }
    applied = {name: value for name, value in requested.items() if value is not None}

    try:
        validate_filters(applied)
    except FilterValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    data = _newest_first(match(FilterSet(**applied), app.store.all()))
    return StringList(data=data, count=len(data), filters_applied=applied)


@router.get("/strings/{string_value}", response_model=AnalyzedString)
async def get_string(string_value: str, app: App = Depends(get_app)) -> AnalyzedString:
    """Get a stored string by its raw value."""

    record = app.store.get_by_value(string_value)
    if record is None:
        raise HTTPException(status_code=404, detail="String does not exist in the system")
    return record


@router.delete("/strings/{string_value}", status_code=204)
def delete_string(string_value: str, app: App = Depends(get_app)) -> Response:
    """Delete a stored string by its raw value."""

    try:
        app.store.delete_by_value(string_value)
    except StringNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    logger.info("deleted string length=%d", len(string_value))
    return Response(status_code=204)
