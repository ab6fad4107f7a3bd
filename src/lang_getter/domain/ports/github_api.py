"""Port: GitHub API — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from lang_getter.domain.entities import Page


class GitHubApi(Protocol):
    """Abstract contract for authenticated GET requests against GitHub.

    ``url`` may be an absolute URL (as found in API payloads, e.g.
    ``languages_url``) or a path relative to the API root such as ``/user``.
    """

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Return the decoded JSON body of a single request."""
        ...

    async def get_page(self, url: str, params: dict[str, Any] | None = None) -> Page:
        """Return one page of a collection, with its pagination links."""
        ...
