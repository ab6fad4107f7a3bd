"""Language-usage use case — orchestrates the two aggregation pipelines.

Repository bytes:  list repositories → sum their language breakdowns.
Commit languages:  list repositories → list the user's commits per
repository → keep the user's own commits → tally their diffs by language.

The use case depends only on the ports; the caller injects adapters whose
credential has already been validated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lang_getter.domain.entities import LanguageUsage, Repository
from lang_getter.domain.ports.diff_parser import DiffParser
from lang_getter.domain.ports.github_api import GitHubApi
from lang_getter.domain.ports.language_classifier import LanguageClassifier
from lang_getter.domain.value_objects import RepoQueryOptions, Username
from lang_getter.services.commit_attribution import attributed_commit_urls
from lang_getter.services.commit_discovery import discover_commits, resolve_identity
from lang_getter.services.commit_languages import fetch_commit_language_totals
from lang_getter.services.fan_out import DEFAULT_CONCURRENCY
from lang_getter.services.repo_languages import fetch_repo_language_totals
from lang_getter.services.repo_lister import list_own_repositories, list_user_repositories

logger = logging.getLogger(__name__)

OptionsInput = Mapping[str, Any] | RepoQueryOptions | None


class LanguageUsageUseCase:
    """Computes a user's language breakdown from the GitHub API.

    Parameters
    ----------
    github_api:
        Adapter performing authenticated GET requests.
    classifier:
        Maps changed filenames to language names.
    diff_parser:
        Splits per-file patches into hunks.
    max_concurrency:
        Upper bound on simultaneous requests for every fan-out.
    """

    def __init__(
        self,
        github_api: GitHubApi,
        classifier: LanguageClassifier,
        diff_parser: DiffParser,
        max_concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self._api = github_api
        self._classifier = classifier
        self._diff_parser = diff_parser
        self._concurrency = max_concurrency

    # ── Repository bytes ────────────────────────────────────────────────

    async def repo_languages(self, options: OptionsInput = None) -> dict[str, int]:
        """Bytes per language across the token owner's repositories."""
        query = RepoQueryOptions.from_mapping(options)
        repos = await list_own_repositories(self._api, query, concurrency=self._concurrency)
        return await self._repo_totals(repos)

    async def repo_languages_by_username(self, username: str) -> dict[str, int]:
        """Bytes per language across *username*'s public repositories."""
        user = Username.from_string(username)
        repos = await list_user_repositories(self._api, user, concurrency=self._concurrency)
        return await self._repo_totals(repos)

    # ── Commit languages ────────────────────────────────────────────────

    async def commit_languages(self, options: OptionsInput = None) -> dict[str, LanguageUsage]:
        """``{bytes, commits}`` per language for the token owner's commits."""
        query = RepoQueryOptions.from_mapping(options)
        repos = await list_own_repositories(self._api, query, concurrency=self._concurrency)
        return await self._commit_totals(repos, None)

    async def commit_languages_by_username(self, username: str) -> dict[str, LanguageUsage]:
        """``{bytes, commits}`` per language for *username*'s commits."""
        user = Username.from_string(username)
        repos = await list_user_repositories(self._api, user, concurrency=self._concurrency)
        return await self._commit_totals(repos, user)

    # ── Pipelines ───────────────────────────────────────────────────────

    async def _repo_totals(self, repos: list[Repository]) -> dict[str, int]:
        totals = await fetch_repo_language_totals(
            self._api, repos, concurrency=self._concurrency
        )
        logger.info("Summed %d languages over %d repositories", len(totals), len(repos))
        return totals

    async def _commit_totals(
        self, repos: list[Repository], username: Username | None
    ) -> dict[str, LanguageUsage]:
        login = await resolve_identity(self._api, username)
        discovered = await discover_commits(
            self._api, repos, login, concurrency=self._concurrency
        )
        if discovered.failures:
            logger.warning(
                "Commit listing failed for %d of %d repositories",
                len(discovered.failures),
                len(repos),
            )

        commit_urls = attributed_commit_urls(discovered.per_repository, login)
        logger.info("Tallying %d commits by %s", len(commit_urls), login)

        return await fetch_commit_language_totals(
            self._api,
            commit_urls,
            self._classifier,
            self._diff_parser,
            concurrency=self._concurrency,
        )
