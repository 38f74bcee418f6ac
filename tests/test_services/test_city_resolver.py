"""Tests for CityResolver."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest
import respx
from httpx import Response

from venue_scraper.schemas.listing import Address, DomainRecord
from venue_scraper.services.city_resolver import CityResolver
from venue_scraper.services.fetcher import PageFetcher

DETAIL_URL = "https://venues.fr/domaine-mariage/chateau--e1.htm"


def _record(locality: str) -> DomainRecord:
    return DomainRecord(
        url=DETAIL_URL,
        name="Château",
        address=Address(addressLocality=locality, addressRegion="Île-de-France", postalCode="75001"),
    )


def _detail_page(payload) -> str:
    return (
        "<html><head>"
        f'<script type="application/ld+json">{json.dumps(payload)}</script>'
        "<script>window.tracking = {};</script>"
        "</head><body></body></html>"
    )


@pytest.fixture
def resolver():
    return CityResolver(PageFetcher(httpx.AsyncClient()))


async def test_resolved_locality_needs_no_fetch():
    fetcher = AsyncMock(spec=PageFetcher)
    resolver = CityResolver(fetcher)

    info = await resolver.resolve(_record("Lyon"))

    assert info.city == "Lyon"
    assert info.region == "Île-de-France"
    fetcher.fetch.assert_not_awaited()


async def test_resolution_is_idempotent():
    fetcher = AsyncMock(spec=PageFetcher)
    resolver = CityResolver(fetcher)

    first = await resolver.resolve(_record("Lyon"))
    second = await resolver.resolve(_record(first.city))

    assert first == second
    fetcher.fetch.assert_not_awaited()


@respx.mock
async def test_sentinel_locality_resolved_from_detail_page(resolver):
    respx.get(DETAIL_URL).mock(
        return_value=Response(
            200,
            html=_detail_page([{"url": DETAIL_URL, "address": {"addressLocality": "Paris"}}]),
        )
    )

    info = await resolver.resolve(_record("0"))

    assert info.city == "Paris"
    assert info.postalCode == "75001"


@respx.mock
async def test_empty_locality_resolved_from_single_object_payload(resolver):
    respx.get(DETAIL_URL).mock(
        return_value=Response(
            200,
            html=_detail_page({"url": DETAIL_URL, "address": {"addressLocality": "Nantes"}}),
        )
    )
    info = await resolver.resolve(_record(""))
    assert info.city == "Nantes"


@respx.mock
async def test_first_detail_record_wins(resolver):
    respx.get(DETAIL_URL).mock(
        return_value=Response(
            200,
            html=_detail_page([
                {"url": DETAIL_URL, "address": {"addressLocality": "Lille"}},
                {"url": DETAIL_URL, "address": {"addressLocality": "Arras"}},
            ]),
        )
    )
    info = await resolver.resolve(_record("0"))
    assert info.city == "Lille"


@respx.mock
async def test_fetch_failure_keeps_original(resolver):
    respx.get(DETAIL_URL).mock(return_value=Response(503))
    info = await resolver.resolve(_record("0"))
    assert info.city == "0"


@respx.mock
async def test_malformed_detail_payload_keeps_original(resolver):
    respx.get(DETAIL_URL).mock(
        return_value=Response(
            200,
            html="<script>{broken</script><script>last()</script>",
        )
    )
    info = await resolver.resolve(_record(""))
    assert info.city == ""


@respx.mock
async def test_unresolved_detail_locality_keeps_original(resolver):
    respx.get(DETAIL_URL).mock(
        return_value=Response(
            200,
            html=_detail_page([{"url": DETAIL_URL, "address": {"addressLocality": "0"}}]),
        )
    )
    info = await resolver.resolve(_record(""))
    assert info.city == ""


async def test_unexpected_error_keeps_original():
    fetcher = AsyncMock(spec=PageFetcher)
    fetcher.fetch.side_effect = RuntimeError("boom")

    info = await CityResolver(fetcher).resolve(_record("0"))

    assert info.city == "0"


async def test_whitespace_locality_is_kept_without_fetch():
    fetcher = AsyncMock(spec=PageFetcher)

    info = await CityResolver(fetcher).resolve(_record(" "))

    assert info.city == " "
    fetcher.fetch.assert_not_awaited()
