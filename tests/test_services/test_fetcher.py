"""Tests for PageFetcher."""

import httpx
import pytest
import respx
from httpx import Response

from venue_scraper.services.fetcher import PageFetcher

PAGE = (
    "<html><head><script>[]</script><script>last()</script></head>"
    "<body><p>Chateau</p></body></html>"
)


@pytest.fixture
def client():
    return httpx.AsyncClient()


@pytest.fixture
def fetcher(client):
    return PageFetcher(client)


@respx.mock
async def test_fetch_returns_markup(fetcher):
    respx.get("https://venues.fr/list").mock(
        return_value=Response(200, html="<html><body><p>ok</p></body></html>")
    )
    assert "<p>ok</p>" in await fetcher.fetch("https://venues.fr/list")


@respx.mock
async def test_fetch_sends_user_agent(client):
    route = respx.get("https://venues.fr/list").mock(
        return_value=Response(200, html="<p>ok</p>")
    )
    await PageFetcher(client, user_agent="TestAgent/1.0").fetch("https://venues.fr/list")
    assert route.calls.last.request.headers["User-Agent"] == "TestAgent/1.0"


@respx.mock
async def test_404_returns_empty(fetcher):
    respx.get("https://venues.fr/list").mock(return_value=Response(404))
    assert await fetcher.fetch("https://venues.fr/list") == ""


@respx.mock
async def test_timeout_returns_empty(fetcher):
    respx.get("https://venues.fr/list").mock(side_effect=httpx.ReadTimeout("timeout"))
    assert await fetcher.fetch("https://venues.fr/list") == ""


@respx.mock
async def test_connect_error_returns_empty(fetcher):
    respx.get("https://venues.fr/list").mock(side_effect=httpx.ConnectError("refused"))
    assert await fetcher.fetch("https://venues.fr/list") == ""


@respx.mock
async def test_empty_body_returns_empty(fetcher):
    respx.get("https://venues.fr/list").mock(return_value=Response(200, html="   "))
    assert await fetcher.fetch("https://venues.fr/list") == ""


@respx.mock
async def test_plain_text_body_returned_unchanged(fetcher):
    respx.get("https://venues.fr/list").mock(return_value=Response(200, text=PAGE))
    assert await fetcher.fetch("https://venues.fr/list") == PAGE


@respx.mock
async def test_body_without_content_type_returned_unchanged(fetcher):
    respx.get("https://venues.fr/list").mock(
        return_value=Response(200, content=PAGE.encode("utf-8"))
    )
    assert await fetcher.fetch("https://venues.fr/list") == PAGE


@respx.mock
async def test_non_html_content_type_returned_unchanged(fetcher):
    respx.get("https://venues.fr/list").mock(
        return_value=Response(
            200, content=PAGE.encode("utf-8"), headers={"content-type": "application/octet-stream"}
        )
    )
    assert await fetcher.fetch("https://venues.fr/list") == PAGE


@respx.mock
async def test_fetch_fragment_returns_inner_markup(fetcher):
    respx.get("https://venues.fr/v/1").mock(
        return_value=Response(
            200,
            html=(
                '<html><body><div data-testid="card"><span class="label">50 - 80</span></div>'
                "</body></html>"
            ),
        )
    )
    fragment = await fetcher.fetch_fragment("https://venues.fr/v/1", '[data-testid="card"]')
    assert fragment == '<span class="label">50 - 80</span>'


@respx.mock
async def test_fetch_fragment_no_match_returns_empty(fetcher):
    respx.get("https://venues.fr/v/1").mock(
        return_value=Response(200, html="<html><body><p>nothing</p></body></html>")
    )
    assert await fetcher.fetch_fragment("https://venues.fr/v/1", '[data-testid="card"]') == ""


@respx.mock
async def test_fetch_fragment_fetch_failure_returns_empty(fetcher):
    respx.get("https://venues.fr/v/1").mock(return_value=Response(500))
    assert await fetcher.fetch_fragment("https://venues.fr/v/1", "div") == ""
