"""Tests for the commit detail aggregator."""

from __future__ import annotations

import asyncio

import pytest

from lang_getter.domain.entities import ChangedFile, CommitDetail, LanguageUsage
from lang_getter.domain.exceptions import ResourceNotFoundError
from lang_getter.infrastructure.pygments_classifier import PygmentsClassifier
from lang_getter.infrastructure.unidiff_parser import UnidiffParser
from lang_getter.services.commit_languages import (
    added_bytes,
    fetch_commit_language_totals,
    tally_commit_languages,
)

API = "https://api.github.com/repos/o/r/commits"


def _tally(commits: list[CommitDetail]) -> dict[str, LanguageUsage]:
    return tally_commit_languages(commits, PygmentsClassifier(), UnidiffParser())


def test_language_counts_once_per_commit_but_bytes_per_file(make_patch) -> None:  # type: ignore[no-untyped-def]
    commit = CommitDetail(
        url=f"{API}/1",
        files=[
            ChangedFile("src/one.py", make_patch("x" * 10)),
            ChangedFile("src/two.py", make_patch("y" * 5)),
            ChangedFile("lib/three.rb", make_patch("zzz")),
        ],
    )

    totals = _tally([commit])

    assert totals["Python"] == LanguageUsage(bytes=15, commits=1)
    assert totals["Ruby"] == LanguageUsage(bytes=3, commits=1)


def test_totals_accumulate_across_commits(make_patch) -> None:  # type: ignore[no-untyped-def]
    commits = [
        CommitDetail(url=f"{API}/1", files=[ChangedFile("a.py", make_patch("abcd", "ef"))]),
        CommitDetail(url=f"{API}/2", files=[ChangedFile("b.py", make_patch("g"))]),
    ]

    assert _tally(commits) == {"Python": LanguageUsage(bytes=7, commits=2)}


def test_unrecognised_files_contribute_nothing(make_patch) -> None:  # type: ignore[no-untyped-def]
    commit = CommitDetail(
        url=f"{API}/1",
        files=[ChangedFile("assets/logo.png", make_patch("binary-ish"))],
    )

    assert _tally([commit]) == {}


def test_file_without_patch_still_marks_language_touched(make_patch) -> None:  # type: ignore[no-untyped-def]
    commit = CommitDetail(
        url=f"{API}/1",
        files=[
            ChangedFile("moved.py", None),
            ChangedFile("edited.py", make_patch("12345")),
        ],
    )
    patchless_only = CommitDetail(url=f"{API}/2", files=[ChangedFile("renamed.py", None)])

    totals = _tally([commit, patchless_only])

    assert totals["Python"] == LanguageUsage(bytes=5, commits=2)


def test_removed_and_context_lines_are_not_counted() -> None:
    patch = "@@ -1,3 +1,3 @@\n keep me\n-drop me\n+add\n same\n"

    assert added_bytes(ChangedFile("x.py", patch), UnidiffParser()) == 3


def test_unparseable_patch_counts_zero_bytes() -> None:
    patch = "@@ -1,5 +1,9 @@\n+truncated"

    assert added_bytes(ChangedFile("x.py", patch), UnidiffParser()) == 0


def test_commit_details_are_fetched_and_tallied(fake_api, make_patch) -> None:  # type: ignore[no-untyped-def]
    fake_api.add_resource(
        f"{API}/1",
        {"files": [{"filename": "main.go", "patch": make_patch("package main")}]},
    )
    fake_api.add_resource(
        f"{API}/2",
        {"files": [{"filename": "go.sum"}, {"filename": "cmd/run.go", "patch": make_patch("x")}]},
    )

    totals = asyncio.run(
        fetch_commit_language_totals(
            fake_api,
            [f"{API}/1", f"{API}/2"],
            PygmentsClassifier(),
            UnidiffParser(),
            concurrency=1,
        )
    )

    assert totals["Go"] == LanguageUsage(bytes=13, commits=2)
    assert fake_api.max_in_flight == 1


def test_failed_commit_detail_fetch_propagates(fake_api) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ResourceNotFoundError):
        asyncio.run(
            fetch_commit_language_totals(
                fake_api, [f"{API}/missing"], PygmentsClassifier(), UnidiffParser()
            )
        )
