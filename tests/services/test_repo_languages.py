"""Tests for repository listing and the repo-bytes aggregator."""

from __future__ import annotations

import asyncio

from lang_getter.domain.entities import Repository
from lang_getter.domain.value_objects import RepoQueryOptions, Username
from lang_getter.services.repo_languages import fetch_repo_language_totals, sum_language_bytes
from lang_getter.services.repo_lister import list_own_repositories, list_user_repositories

API = "https://api.github.com/repos"


def _repo_item(name: str) -> dict[str, str]:
    return {
        "url": f"{API}/octocat/{name}",
        "languages_url": f"{API}/octocat/{name}/languages",
        "full_name": f"octocat/{name}",
    }


def test_own_repositories_are_listed_with_visibility_and_affiliation(fake_api) -> None:  # type: ignore[no-untyped-def]
    fake_api.add_collection("/user/repos", [_repo_item("a"), _repo_item("b")])
    options = RepoQueryOptions.from_mapping({"visibility": "all", "affiliation": ["owner"]})

    repos = asyncio.run(list_own_repositories(fake_api, options))

    assert [r.full_name for r in repos] == ["octocat/a", "octocat/b"]
    assert repos[0].commits_url == f"{API}/octocat/a/commits"
    assert fake_api.calls == [("/user/repos", {"visibility": "all", "affiliation": "owner"})]


def test_user_repositories_ignore_visibility_and_affiliation(fake_api) -> None:  # type: ignore[no-untyped-def]
    fake_api.add_collection("/users/octocat/repos", [_repo_item("a")])

    repos = asyncio.run(list_user_repositories(fake_api, Username.from_string("octocat")))

    assert len(repos) == 1
    assert fake_api.calls == [("/users/octocat/repos", {})]


def test_language_bytes_are_summed_across_repositories(fake_api) -> None:  # type: ignore[no-untyped-def]
    repos = [
        Repository(url=f"{API}/o/a", languages_url=f"{API}/o/a/languages"),
        Repository(url=f"{API}/o/b", languages_url=f"{API}/o/b/languages"),
        Repository(url=f"{API}/o/c", languages_url=f"{API}/o/c/languages"),
    ]
    fake_api.add_resource(f"{API}/o/a/languages", {"Python": 1200, "Shell": 30})
    fake_api.add_resource(f"{API}/o/b/languages", {"Python": 800, "HTML": 5000})
    fake_api.add_resource(f"{API}/o/c/languages", {})

    totals = asyncio.run(fetch_repo_language_totals(fake_api, repos, concurrency=2))

    assert totals == {"Python": 2000, "Shell": 30, "HTML": 5000}
    assert fake_api.max_in_flight <= 2


def test_summation_does_not_depend_on_order() -> None:
    breakdowns = [{"Go": 10, "Dockerfile": 1}, {"Go": 5}, {"Makefile": 7, "Go": 1}]

    forward = sum_language_bytes(breakdowns)
    backward = sum_language_bytes(list(reversed(breakdowns)))

    assert forward == backward == {"Go": 16, "Dockerfile": 1, "Makefile": 7}


def test_no_repositories_means_no_languages(fake_api) -> None:  # type: ignore[no-untyped-def]
    assert asyncio.run(fetch_repo_language_totals(fake_api, [])) == {}
    assert fake_api.calls == []
