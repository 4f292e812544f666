"""Unit tests for Link header pagination."""

import httpx
import pytest

from ghclient.github import fetch_all_pages, next_page_url


def _response(
    body, link: str | None = None, url: str = "https://api.example.com/items"
) -> httpx.Response:
    headers = {"Link": link} if link is not None else {}
    return httpx.Response(200, json=body, headers=headers, request=httpx.Request("GET", url))


@pytest.mark.unit
class TestNextPageUrl:
    """Tests for next_page_url."""

    def test_no_link_header(self) -> None:
        """None when the response has no Link header."""
        assert next_page_url(_response([])) is None

    def test_picks_next_relation(self) -> None:
        """Only the rel="next" entry is used."""
        link = (
            '<https://api.example.com/items?page=1>; rel="first", '
            '<https://api.example.com/items?page=3>; rel="next", '
            '<https://api.example.com/items?page=9>; rel="last"'
        )

        assert next_page_url(_response([], link)) == "https://api.example.com/items?page=3"

    def test_last_page_has_no_next(self) -> None:
        """None when only other relations are present."""
        link = (
            '<https://api.example.com/items?page=1>; rel="first", '
            '<https://api.example.com/items?page=2>; rel="prev"'
        )

        assert next_page_url(_response([], link)) is None


@pytest.mark.unit
class TestFetchAllPages:
    """Tests for fetch_all_pages."""

    def test_aggregates_in_page_order(self) -> None:
        """Items from every page are concatenated in the order pages are fetched."""
        pages = {
            "/items": _response([1, 2], '<https://api.example.com/items?page=2>; rel="next"'),
            "https://api.example.com/items?page=2": _response(
                [3], '<https://api.example.com/items?page=3>; rel="next"'
            ),
            "https://api.example.com/items?page=3": _response([4]),
        }
        requested: list[str] = []

        def get_page(url: str) -> httpx.Response:
            requested.append(url)
            return pages[url]

        items = fetch_all_pages(get_page, "/items", lambda r: r.json())

        assert items == [1, 2, 3, 4]
        assert requested == [
            "/items",
            "https://api.example.com/items?page=2",
            "https://api.example.com/items?page=3",
        ]

    def test_decode_applied_per_page(self) -> None:
        """The decode function maps each page to its items."""
        items = fetch_all_pages(
            lambda url: _response([{"name": "a"}, {"name": "b"}]),
            "/labels",
            lambda r: [item["name"].upper() for item in r.json()],
        )

        assert items == ["A", "B"]

    def test_error_discards_previous_pages(self) -> None:
        """An error on a later page propagates and nothing is returned."""

        def get_page(url: str) -> httpx.Response:
            if url == "/items":
                return _response([1], '<https://api.example.com/items?page=2>; rel="next"')
            raise RuntimeError("page 2 failed")

        with pytest.raises(RuntimeError, match="page 2 failed"):
            fetch_all_pages(get_page, "/items", lambda r: r.json())
