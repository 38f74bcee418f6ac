import asyncio
import logging
from urllib.parse import urljoin

import httpx

from venue_scraper.config import Settings
from venue_scraper.exceptions.custom import PageProcessingError
from venue_scraper.mappers.domain_parser import parse_domain_records
from venue_scraper.mappers.listing_mapper import build_complete_listing, to_listing_info
from venue_scraper.mappers.pagination import build_pagination_plan
from venue_scraper.mappers.structured_block import extract_second_last_script
from venue_scraper.schemas.listing import (
    CompleteListing,
    DomainRecord,
    ScrapeResult,
    is_unresolved_locality,
)
from venue_scraper.services.city_resolver import CityResolver
from venue_scraper.services.fetcher import PageFetcher
from venue_scraper.services.guest_count import GuestCountService

logger = logging.getLogger(__name__)


class ScrapePipeline:
    """Listing page → structured records → enriched listings.

    Every record of a page is enriched concurrently and every planned page is
    processed concurrently, with no cap on fan-out: a 10-page run over pages
    of 24 listings issues up to 10 + 2 * 240 requests at once.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        city_resolver: CityResolver,
        guest_count: GuestCountService,
        page_param: str = "page",
        fail_fast: bool = True,
    ):
        self._fetcher = fetcher
        self._city_resolver = city_resolver
        self._guest_count = guest_count
        self._page_param = page_param
        self._fail_fast = fail_fast

    async def run(self, url: str, pages: int | None = None) -> ScrapeResult:
        plan = build_pagination_plan(url, pages, self._page_param)
        listings, failed = await self._process_plan(plan)

        result = ScrapeResult(
            listings=listings,
            pages_requested=len(plan),
            pages_failed=failed,
            unresolved_city=sum(1 for lst in listings if is_unresolved_locality(lst.city)),
            unresolved_capacity=sum(1 for lst in listings if lst.capacity is None),
        )
        logger.info(
            "Scraped %d listings from %d/%d pages (unresolved city=%d, capacity=%d)",
            len(listings), len(plan) - failed, len(plan),
            result.unresolved_city, result.unresolved_capacity,
        )
        return result

    async def process_pages(self, url: str, pages: int | None = None) -> list[CompleteListing]:
        plan = build_pagination_plan(url, pages, self._page_param)
        listings, _ = await self._process_plan(plan)
        return listings

    async def process_page(self, url: str) -> list[CompleteListing]:
        html = await self._fetcher.fetch(url)
        if not html:
            logger.warning("Nothing fetched from %s", url)
            return []

        records = parse_domain_records(extract_second_last_script(html))
        logger.info("Found %d listings on %s", len(records), url)

        records = [
            record.model_copy(update={"url": urljoin(url, record.url)})
            for record in records
        ]
        return list(await asyncio.gather(*(self._enrich(r) for r in records)))

    async def _process_plan(self, plan: list[str]) -> tuple[list[CompleteListing], int]:
        tasks = [
            asyncio.create_task(self._process_planned_page(page_url)) for page_url in plan
        ]
        try:
            results = await asyncio.gather(*tasks, return_exceptions=not self._fail_fast)
        except PageProcessingError:
            for task in tasks:
                task.cancel()
            raise

        listings: list[CompleteListing] = []
        failed = 0
        for page_url, res in zip(plan, results):
            if isinstance(res, BaseException):
                failed += 1
                logger.warning("Skipping page %s: %s", page_url, res)
                continue
            listings.extend(res)
        return listings, failed

    async def _process_planned_page(self, url: str) -> list[CompleteListing]:
        try:
            return await self.process_page(url)
        except Exception as exc:
            raise PageProcessingError(url, str(exc)) from exc

    async def _enrich(self, record: DomainRecord) -> CompleteListing:
        try:
            info = await self._city_resolver.resolve(record)
            capacity = await self._guest_count.get_guest_count(info.url)
        except Exception:
            logger.exception("Enrichment failed for %s, keeping raw listing", record.url)
            return build_complete_listing(to_listing_info(record), None)
        return build_complete_listing(info, capacity)


def build_pipeline(client: httpx.AsyncClient, settings: Settings) -> ScrapePipeline:
    fetcher = PageFetcher(client, user_agent=settings.user_agent)
    return ScrapePipeline(
        fetcher,
        CityResolver(fetcher),
        GuestCountService(fetcher),
        page_param=settings.page_param,
        fail_fast=settings.fail_fast_pagination,
    )
