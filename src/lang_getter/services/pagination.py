"""Paginated fetcher — resolve every page of a collection into one list.

Works in two phases.  Page 1 is fetched on its own because only its
``Link`` header tells how many pages exist; the remaining pages are then
fetched with bounded concurrency and appended in page order.
"""

from __future__ import annotations

import logging
from typing import Any

from lang_getter.domain.entities import Page
from lang_getter.domain.ports.github_api import GitHubApi
from lang_getter.services.fan_out import DEFAULT_CONCURRENCY, gather_bounded

logger = logging.getLogger(__name__)


async def fetch_all_pages(
    api: GitHubApi,
    url: str,
    params: dict[str, Any] | None = None,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[Any]:
    """Return every item of the collection at *url*, across all pages."""
    # Phase 1 — discover extent
    first = await api.get_page(url, params)
    items = list(first.items)
    link = first.link
    if not link.has_more:
        return items

    if link.last_page is None:
        items.extend(await _follow_next_links(api, url, params, first))
        return items

    # Phase 2 — fetch remainder
    page_numbers = range(link.next_page, link.last_page + 1)
    logger.debug("Fetching pages %d..%d of %s", link.next_page, link.last_page, url)

    async def _fetch_page(number: int) -> Page:
        return await api.get_page(url, _with_page(params, number))

    for page in await gather_bounded(_fetch_page, page_numbers, limit=concurrency):
        items.extend(page.items)
    return items


async def _follow_next_links(
    api: GitHubApi,
    url: str,
    params: dict[str, Any] | None,
    page: Page,
) -> list[Any]:
    """Walk ``next`` links one at a time when no ``last`` link is given."""
    items: list[Any] = []
    current = 1
    while page.link.next_page is not None and page.link.next_page > current:
        current = page.link.next_page
        page = await api.get_page(url, _with_page(params, current))
        items.extend(page.items)
    return items


def _with_page(params: dict[str, Any] | None, page: int) -> dict[str, Any]:
    merged = dict(params or {})
    merged["page"] = page
    return merged
