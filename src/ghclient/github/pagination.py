"""Link header pagination for list endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

import httpx

logger = logging.getLogger("ghclient.github")

T = TypeVar("T")


def next_page_url(response: httpx.Response) -> str | None:
    """Get the URL of the next page of a paginated response.

    Args:
        response: Response that may carry a ``Link`` header such as
            ``<https://api.github.com/...?page=2>; rel="next"``.

    Returns:
        The ``rel="next"`` target, or None when this is the last page.
    """
    link = response.links.get("next")
    if not link:
        return None
    return link.get("url") or None


def fetch_all_pages(
    get_page: Callable[[str], httpx.Response],
    first_url: str,
    decode: Callable[[httpx.Response], list[T]],
) -> list[T]:
    """Fetch every page of a list endpoint and concatenate the items.

    Pages are requested one after another, starting at ``first_url`` and
    following ``rel="next"`` until a response has no next link. If any page
    fails the error propagates and nothing fetched so far is returned.

    Args:
        get_page: Sends a GET for a path or absolute URL and returns the
            response once its status has been checked.
        first_url: Path or URL of the first page.
        decode: Turns one page's response into its items.

    Returns:
        Items of all pages, in page order.
    """
    items: list[T] = []
    url: str | None = first_url
    pages = 0
    while url is not None:
        response = get_page(url)
        items.extend(decode(response))
        pages += 1
        url = next_page_url(response)
    logger.debug("Fetched %d item(s) over %d page(s) from %s", len(items), pages, first_url)
    return items
