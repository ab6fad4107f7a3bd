"""Commit attribution filter — keep only the acting user's commits."""

from __future__ import annotations

from typing import Iterable

from lang_getter.domain.entities import CommitSummary


def attributed_commit_urls(
    commits_per_repository: Iterable[Iterable[CommitSummary]],
    login: str,
) -> list[str]:
    """Detail URLs of commits whose author login matches *login*.

    The ``author`` query parameter is not trusted to have filtered exactly,
    so the author is checked again here.  Logins compare case-insensitively;
    commits with no linked GitHub author are dropped.
    """
    wanted = login.casefold()
    return [
        commit.url
        for commits in commits_per_repository
        for commit in commits
        if commit.author_login is not None and commit.author_login.casefold() == wanted
    ]
