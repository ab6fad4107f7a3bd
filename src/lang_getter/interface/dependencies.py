"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from fastapi import Header

from lang_getter.api import build_use_case
from lang_getter.domain.value_objects import AccessToken
from lang_getter.infrastructure.config import get_settings
from lang_getter.services.language_usage import LanguageUsageUseCase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


def _token_from_header(authorization: str | None) -> str | None:
    """Accept ``Bearer <token>``, ``token <token>`` or a bare token."""
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if credentials and scheme.lower() in ("bearer", "token"):
        return credentials.strip()
    return authorization.strip()


def get_use_case(
    authorization: str | None = Header(default=None),
) -> LanguageUsageUseCase:
    """Build a per-request use case bound to the caller's token.

    Falls back to ``GITHUB_TOKEN`` from the settings when the request
    carries no ``Authorization`` header.
    """
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"

    raw = _token_from_header(authorization)
    if raw is None and settings.github_token:
        raw = settings.github_token.get_secret_value()

    return build_use_case(_http_client, AccessToken.from_string(raw), settings)
