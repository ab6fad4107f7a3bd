"""GitHub REST API adapter — implements the GitHubApi port."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from lang_getter.domain.entities import Page, PageLink
from lang_getter.domain.exceptions import (
    AccessDeniedError,
    BadCredentialsError,
    GitHubRateLimitError,
    RemoteRequestError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Concrete GitHubApi backed by the GitHub v3 REST API.

    Every request made through one adapter shares a single semaphore, so
    nested fan-outs (repositories × pages) never have more than
    ``max_concurrency`` requests in flight.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        base_url: str = _GITHUB_API,
        per_page: int = 100,
        max_concurrency: int = 10,
        user_agent: str = "lang-getter/1.0",
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._per_page = per_page
        self._slots = asyncio.Semaphore(max_concurrency)
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a single resource and decode its JSON body."""
        resp = await self._api_get(url, params)
        return _decode(resp)

    async def get_page(self, url: str, params: dict[str, Any] | None = None) -> Page:
        """GET one page of a collection → Page(items, link)."""
        query: dict[str, Any] = {"per_page": self._per_page}
        if params:
            query.update(params)
        resp = await self._api_get(url, query)
        items = _decode(resp)
        if items is None:
            items = []
        if not isinstance(items, list):
            raise RemoteRequestError(
                f"Expected a JSON array from {resp.request.url}",
                status_code=resp.status_code,
                url=str(resp.request.url),
            )
        return Page(items=items, link=parse_page_link(resp))

    async def _api_get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        if not url.startswith(("http://", "https://")):
            url = f"{self._base_url}/{url.lstrip('/')}"

        async with self._slots:
            logger.debug("GET %s %s", url, params or "")
            try:
                resp = await self._client.get(
                    url, headers=self._api_headers, params=params
                )
            except httpx.HTTPError as exc:
                raise RemoteRequestError(
                    f"Network error fetching {url}: {exc}", url=url
                ) from exc

        if resp.is_success:
            return resp

        message = _remote_message(resp)
        status = resp.status_code

        if status == 401:
            raise BadCredentialsError(message, status_code=status, url=url)

        if status == 404:
            raise ResourceNotFoundError(message, status_code=status, url=url)

        if status == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                logger.warning("GitHub rate limit exhausted; resets at %s", reset_str)
                raise GitHubRateLimitError(
                    f"{message} (resets at {reset_str})", status_code=status, url=url
                )
            raise AccessDeniedError(message, status_code=status, url=url)

        if status == 429:
            raise GitHubRateLimitError(message, status_code=status, url=url)

        raise RemoteRequestError(message, status_code=status, url=url)


def parse_page_link(resp: httpx.Response) -> PageLink:
    """Read the ``next`` and ``last`` page numbers from the Link header."""
    links = resp.links
    return PageLink(
        next_page=_page_number(links.get("next")),
        last_page=_page_number(links.get("last")),
    )


def _page_number(link: dict[str, str] | None) -> int | None:
    if not link or not link.get("url"):
        return None
    raw = httpx.URL(link["url"]).params.get("page")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _decode(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as exc:
        raise RemoteRequestError(
            f"Invalid JSON in response from {resp.request.url}",
            status_code=resp.status_code,
            url=str(resp.request.url),
        ) from exc


def _remote_message(resp: httpx.Response) -> str:
    """Return GitHub's ``message`` field, falling back to the reason phrase."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return resp.reason_phrase or f"HTTP {resp.status_code}"
