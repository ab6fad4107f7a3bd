from __future__ import annotations

import asyncio
from typing import Any

import pytest

from lang_getter.domain.entities import Page, PageLink
from lang_getter.domain.exceptions import ResourceNotFoundError


class FakeGitHubApi:
    """In-memory GitHubApi: paged collections, single resources and errors."""

    def __init__(self) -> None:
        self.collections: dict[str, list[list[Any]]] = {}
        self.resources: dict[str, Any] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add_collection(self, url: str, items: list[Any], per_page: int = 100) -> None:
        pages = [items[i : i + per_page] for i in range(0, len(items), per_page)]
        self.collections[url] = pages or [[]]

    def add_resource(self, url: str, body: Any) -> None:
        self.resources[url] = body

    def fail(self, url: str, exc: Exception) -> None:
        self.errors[url] = exc

    def urls_called(self) -> list[str]:
        return [url for url, _ in self.calls]

    async def _request(self, url: str, params: dict[str, Any] | None) -> None:
        self.calls.append((url, dict(params or {})))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1
        if url in self.errors:
            raise self.errors[url]

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        await self._request(url, params)
        if url not in self.resources:
            raise ResourceNotFoundError("Not Found", status_code=404, url=url)
        return self.resources[url]

    async def get_page(self, url: str, params: dict[str, Any] | None = None) -> Page:
        await self._request(url, params)
        if url not in self.collections:
            raise ResourceNotFoundError("Not Found", status_code=404, url=url)
        pages = self.collections[url]
        number = int((params or {}).get("page", 1))
        items = pages[number - 1] if number <= len(pages) else []
        if number < len(pages):
            link = PageLink(next_page=number + 1, last_page=len(pages))
        else:
            link = PageLink()
        return Page(items=list(items), link=link)


@pytest.fixture
def fake_api() -> FakeGitHubApi:
    """Provide an empty in-memory GitHub API."""
    return FakeGitHubApi()


def patch_adding(*lines: str) -> str:
    """A GitHub-style patch fragment that adds *lines* to a new file."""
    body = "".join(f"+{line}\n" for line in lines)
    return f"@@ -0,0 +1,{len(lines)} @@\n{body}"


@pytest.fixture
def make_patch():
    """Build GitHub-style patch fragments that only add lines."""
    return patch_adding
