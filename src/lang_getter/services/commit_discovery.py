"""Commit discoverer — list the acting user's commits in every repository.

A repository whose commit listing fails (empty repository, revoked access,
transient 5xx) contributes no commits instead of failing the whole call.
This is the only tolerant fan-out in the package.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, TypeVar

from lang_getter.domain.entities import CommitSummary, Repository
from lang_getter.domain.exceptions import PartialCollectionFailure, RemoteRequestError
from lang_getter.domain.ports.github_api import GitHubApi
from lang_getter.domain.value_objects import Username
from lang_getter.services.fan_out import DEFAULT_CONCURRENCY
from lang_getter.services.pagination import fetch_all_pages

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of one best-effort task: a value, or the error it raised."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class DiscoveredCommits:
    """Commit summaries per repository, in repository order."""

    per_repository: list[list[CommitSummary]] = field(default_factory=list)
    failures: list[PartialCollectionFailure] = field(default_factory=list)


async def gather_best_effort(
    tasks: list[Callable[[], Awaitable[T]]],
    *,
    limit: int = DEFAULT_CONCURRENCY,
) -> list[Outcome[T]]:
    """Run *tasks* with bounded concurrency, capturing remote failures.

    Only :class:`RemoteRequestError` is captured; anything else propagates.
    """
    sem = asyncio.Semaphore(limit)

    async def _run_one(task: Callable[[], Awaitable[T]]) -> Outcome[T]:
        async with sem:
            try:
                return Outcome(value=await task())
            except RemoteRequestError as exc:
                return Outcome(error=exc)

    return list(await asyncio.gather(*(_run_one(task) for task in tasks)))


async def resolve_identity(api: GitHubApi, username: Username | None = None) -> str:
    """Return the acting login: *username* if given, else ``GET /user``."""
    if username is not None:
        return username.value
    user = await api.get_json("/user")
    login = user.get("login") if isinstance(user, dict) else None
    if not login:
        raise RemoteRequestError("GET /user returned no login.", url="/user")
    logger.debug("Resolved acting user %s from token", login)
    return login


async def discover_commits(
    api: GitHubApi,
    repos: list[Repository],
    login: str,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> DiscoveredCommits:
    """List every repository's commits authored by *login*, best effort."""

    def _commit_listing(repo: Repository) -> Callable[[], Awaitable[list[Any]]]:
        async def _fetch() -> list[Any]:
            return await fetch_all_pages(
                api, repo.commits_url, {"author": login}, concurrency=concurrency
            )

        return _fetch

    outcomes = await gather_best_effort(
        [_commit_listing(repo) for repo in repos], limit=concurrency
    )

    result = DiscoveredCommits()
    for repo, outcome in zip(repos, outcomes):
        if not outcome.ok:
            failure = PartialCollectionFailure(repo.url, outcome.error)  # type: ignore[arg-type]
            logger.warning("Skipping repository: %s", failure)
            result.failures.append(failure)
            result.per_repository.append([])
            continue
        result.per_repository.append(
            [_to_commit_summary(item) for item in outcome.value or []]
        )
    return result


def _to_commit_summary(item: dict[str, Any]) -> CommitSummary:
    author = item.get("author") or {}
    return CommitSummary(
        url=item["url"],
        author_login=author.get("login"),
    )
