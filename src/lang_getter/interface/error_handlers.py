"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.  GitHub
client errors (401, 403, 404, 429) pass through with their original status
and message; anything else from GitHub becomes a 502.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lang_getter.domain.exceptions import (
    InvalidCredentialError,
    LangGetterError,
    RemoteRequestError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[LangGetterError], int]] = [
    (InvalidCredentialError, 401),
    (ValidationError, 422),
    (LangGetterError, 500),
]

_PASSTHROUGH_STATUS = frozenset({401, 403, 404, 429})


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def remote_status(exc: RemoteRequestError) -> int:
    """HTTP status to answer with for a failed GitHub request."""
    if exc.status_code in _PASSTHROUGH_STATUS:
        return exc.status_code  # type: ignore[return-value]
    return 502


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    # ── GitHub API errors ───────────────────────────────────────────────

    @app.exception_handler(RemoteRequestError)
    async def remote_handler(request: Request, exc: RemoteRequestError) -> JSONResponse:
        logger.warning("GitHub request failed (%s): %s", exc.status_code, exc.message)
        return _error_json(remote_status(exc), exc.message)

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
