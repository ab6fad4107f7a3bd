"""Commit detail aggregator — per-language bytes added and commits touched."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from lang_getter.domain.entities import ChangedFile, CommitDetail, LanguageUsage
from lang_getter.domain.ports.diff_parser import DiffParser
from lang_getter.domain.ports.github_api import GitHubApi
from lang_getter.domain.ports.language_classifier import LanguageClassifier
from lang_getter.services.fan_out import DEFAULT_CONCURRENCY, gather_bounded

logger = logging.getLogger(__name__)


async def fetch_commit_language_totals(
    api: GitHubApi,
    commit_urls: list[str],
    classifier: LanguageClassifier,
    diff_parser: DiffParser,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> dict[str, LanguageUsage]:
    """Fetch every commit's detail and tally its files by language."""

    async def _fetch_detail(url: str) -> CommitDetail:
        return _to_commit_detail(url, await api.get_json(url))

    details = await gather_bounded(_fetch_detail, commit_urls, limit=concurrency)
    return tally_commit_languages(details, classifier, diff_parser)


def tally_commit_languages(
    commits: Iterable[CommitDetail],
    classifier: LanguageClassifier,
    diff_parser: DiffParser,
) -> dict[str, LanguageUsage]:
    """Accumulate ``{bytes, commits}`` per language.

    A language's ``commits`` counter moves at most once per commit, however
    many of the commit's files share that language.  ``bytes`` grows by every
    file's own added-line length.  Files whose language is unknown are
    ignored; a known-language file without a usable patch (binary, rename
    only, truncated) still marks its language as touched by the commit.
    """
    totals: dict[str, LanguageUsage] = {}
    for commit in commits:
        touched: set[str] = set()
        for changed in commit.files:
            language = classifier.classify(changed.filename)
            if language is None:
                continue
            usage = totals.setdefault(language, LanguageUsage())
            if language not in touched:
                touched.add(language)
                usage.commits += 1
            usage.bytes += added_bytes(changed, diff_parser)
    return totals


def added_bytes(changed: ChangedFile, diff_parser: DiffParser) -> int:
    """Total length of the lines *changed* adds, across all hunks."""
    if not changed.patch:
        return 0
    try:
        hunks = diff_parser.parse(changed.filename, changed.patch)
    except ValueError:
        logger.debug("Ignoring unparseable patch for %s", changed.filename, exc_info=True)
        return 0
    return sum(len(line) for hunk in hunks for line in hunk.additions)


def _to_commit_detail(url: str, payload: Any) -> CommitDetail:
    files = (payload or {}).get("files") or []
    return CommitDetail(
        url=url,
        files=[
            ChangedFile(filename=item.get("filename", ""), patch=item.get("patch"))
            for item in files
        ],
    )
