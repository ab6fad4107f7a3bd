"""Repo-bytes aggregator — sum each repository's language byte counts."""

from __future__ import annotations

import logging

from lang_getter.domain.entities import Repository
from lang_getter.domain.ports.github_api import GitHubApi
from lang_getter.services.fan_out import DEFAULT_CONCURRENCY, gather_bounded

logger = logging.getLogger(__name__)


async def fetch_repo_language_totals(
    api: GitHubApi,
    repos: list[Repository],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> dict[str, int]:
    """GET every ``languages_url`` and sum the byte counts per language."""

    async def _fetch_languages(repo: Repository) -> dict[str, int]:
        return await api.get_json(repo.languages_url) or {}

    breakdowns = await gather_bounded(_fetch_languages, repos, limit=concurrency)
    return sum_language_bytes(breakdowns)


def sum_language_bytes(breakdowns: list[dict[str, int]]) -> dict[str, int]:
    """Sum ``{language: bytes}`` maps.  Language names are kept verbatim."""
    totals: dict[str, int] = {}
    for breakdown in breakdowns:
        for language, byte_count in breakdown.items():
            totals[language] = totals.get(language, 0) + int(byte_count)
    return totals
