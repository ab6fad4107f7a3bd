"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from lang_getter.interface.dependencies import shutdown, startup
from lang_getter.interface.error_handlers import register_error_handlers
from lang_getter.interface.routes import router

_OPENAPI_TAGS = [
    {
        "name": "languages",
        "description": (
            "Bytes per language across repositories, or bytes added and "
            "commits touched per language across a user's own commits."
        ),
    },
]


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Language Getter",
        version="1.0.0",
        description=(
            "Computes a GitHub user's programming-language breakdown, either "
            "as bytes per language across their repositories or as bytes "
            "added and commits touched per language across their own commits."
        ),
        openapi_tags=_OPENAPI_TAGS,
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (liveness) ────────────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
