"""Repository lister — which repositories to scan."""

from __future__ import annotations

import logging
from typing import Any

from lang_getter.domain.entities import Repository
from lang_getter.domain.ports.github_api import GitHubApi
from lang_getter.domain.value_objects import RepoQueryOptions, Username
from lang_getter.services.fan_out import DEFAULT_CONCURRENCY
from lang_getter.services.pagination import fetch_all_pages

logger = logging.getLogger(__name__)


async def list_own_repositories(
    api: GitHubApi,
    options: RepoQueryOptions,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[Repository]:
    """GET /user/repos filtered by visibility and affiliation."""
    items = await fetch_all_pages(
        api, "/user/repos", options.query_params(), concurrency=concurrency
    )
    repos = [_to_repository(item) for item in items]
    logger.info(
        "Found %d repositories (visibility=%s, affiliation=%s)",
        len(repos),
        options.visibility.value,
        ",".join(a.value for a in options.affiliation),
    )
    return repos


async def list_user_repositories(
    api: GitHubApi,
    username: Username,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[Repository]:
    """GET /users/{username}/repos — public repositories only."""
    items = await fetch_all_pages(
        api, f"/users/{username.value}/repos", concurrency=concurrency
    )
    repos = [_to_repository(item) for item in items]
    logger.info("Found %d public repositories for %s", len(repos), username)
    return repos


def _to_repository(item: dict[str, Any]) -> Repository:
    url = item["url"]
    return Repository(
        url=url,
        languages_url=item.get("languages_url") or f"{url}/languages",
        full_name=item.get("full_name", ""),
    )
