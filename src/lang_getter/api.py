"""Public library entry points.

Each coroutine validates its inputs, wires the GitHub adapter to a
:class:`~lang_getter.services.language_usage.LanguageUsageUseCase` and
runs one aggregation.  Example::

    import asyncio
    from lang_getter.api import get_commit_languages

    totals = asyncio.run(get_commit_languages(token, {"visibility": "all"}))
    for language, usage in totals.items():
        print(language, usage.bytes, usage.commits)

Pass ``client=`` to reuse an existing :class:`httpx.AsyncClient`; it is left
open.  Otherwise a client is created and closed per call.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from lang_getter.domain.entities import LanguageUsage
from lang_getter.domain.value_objects import AccessToken
from lang_getter.infrastructure.config import Settings, get_settings
from lang_getter.infrastructure.github_rest_adapter import GitHubRestAdapter
from lang_getter.infrastructure.pygments_classifier import PygmentsClassifier
from lang_getter.infrastructure.unidiff_parser import UnidiffParser
from lang_getter.services.language_usage import LanguageUsageUseCase, OptionsInput


def build_use_case(
    client: httpx.AsyncClient,
    token: AccessToken,
    settings: Settings,
) -> LanguageUsageUseCase:
    """Wire the concrete adapters into a use case."""
    github_api = GitHubRestAdapter(
        client=client,
        token=token.value,
        base_url=settings.github_api_url,
        per_page=settings.per_page,
        max_concurrency=settings.max_concurrency,
        user_agent=settings.user_agent,
    )
    return LanguageUsageUseCase(
        github_api=github_api,
        classifier=PygmentsClassifier(),
        diff_parser=UnidiffParser(),
        max_concurrency=settings.max_concurrency,
    )


@asynccontextmanager
async def _session(
    token: object,
    client: httpx.AsyncClient | None,
    settings: Settings | None,
) -> AsyncIterator[LanguageUsageUseCase]:
    # Validate before any client exists so bad input never reaches the network.
    access_token = AccessToken.from_string(token)
    settings = settings or get_settings()

    if client is not None:
        yield build_use_case(client, access_token, settings)
        return

    async with httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout)) as owned:
        yield build_use_case(owned, access_token, settings)


async def get_repo_languages(
    token: str,
    options: OptionsInput = None,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> dict[str, int]:
    """Bytes per language across the token owner's repositories.

    ``options`` may set ``visibility`` (``all``, ``public``, ``private``;
    default ``public``) and ``affiliation`` (any of ``owner``,
    ``collaborator``, ``organization_member``; default all three).
    """
    async with _session(token, client, settings) as use_case:
        return await use_case.repo_languages(options)


async def get_repo_languages_by_username(
    token: str,
    username: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> dict[str, int]:
    """Bytes per language across *username*'s public repositories."""
    async with _session(token, client, settings) as use_case:
        return await use_case.repo_languages_by_username(username)


async def get_commit_languages(
    token: str,
    options: OptionsInput = None,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> dict[str, LanguageUsage]:
    """Bytes added and commits touched per language, for the token owner."""
    async with _session(token, client, settings) as use_case:
        return await use_case.commit_languages(options)


async def get_commit_languages_by_username(
    token: str,
    username: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> dict[str, LanguageUsage]:
    """Bytes added and commits touched per language, for *username*."""
    async with _session(token, client, settings) as use_case:
        return await use_case.commit_languages_by_username(username)
