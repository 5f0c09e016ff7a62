"""API process entrypoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.app import App, create_app
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)

_BAD_REQUEST_ERROR_TYPES = {"missing", "json_invalid"}


def _jsonable_errors(errors: list[dict]) -> list[dict]:
    # `ctx` may carry exception instances, which are not JSON serializable.
    return [{key: value for key, value in err.items() if key != "ctx"} for err in errors]


async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
) -> JSONResponse:
    """Map request validation errors to the status codes clients expect.

    A missing field or malformed JSON body is a 400; a body with a wrong value type is a 422.
    Invalid query-string parameters are always a 400.
    """

    errors = exc.errors()
    if request.method == "GET":
        status = 400
    elif any(err.get("type") in _BAD_REQUEST_ERROR_TYPES for err in errors):
        status = 400
    else:
        status = 422
    return JSONResponse(status_code=status, content={"detail": _jsonable_errors(errors)})


def create_api(app: App) -> FastAPI:
    """Create the FastAPI application around an application container.

    The store is loaded when the application starts serving. Cross-origin requests are allowed
    from `CORS_ORIGINS`.
    """

    @asynccontextmanager
    async def lifespan(_api: FastAPI) -> AsyncIterator[None]:
        app.store.load()
        logger.info("started strings=%d", len(app.store))
        yield
        logger.info("shutting down")

    api = FastAPI(title="String Analyzer Service", lifespan=lifespan)
    api.state.app = app
    api.add_middleware(
        CORSMiddleware,
        allow_origins=app.settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    api.include_router(router)
    api.add_exception_handler(RequestValidationError, validation_exception_handler)
    return api


def main() -> None:
    """Run the HTTP server."""

    settings = load_settings()
    configure_logging(settings.log_level)

    api = create_api(create_app(settings))
    uvicorn.run(api, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
