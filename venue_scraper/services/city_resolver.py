import logging

from venue_scraper.mappers.domain_parser import parse_domain_records
from venue_scraper.mappers.listing_mapper import to_listing_info
from venue_scraper.mappers.structured_block import extract_second_last_script
from venue_scraper.schemas.listing import DomainRecord, ListingInfo, is_unresolved_locality
from venue_scraper.services.fetcher import PageFetcher

logger = logging.getLogger(__name__)


class CityResolver:
    def __init__(self, fetcher: PageFetcher):
        self._fetcher = fetcher

    async def resolve(self, record: DomainRecord) -> ListingInfo:
        """Listing info with its city resolved.

        List pages omit the locality for some listing types (empty or "0");
        the listing's own page always carries it. If that lookup fails the
        original value is kept.
        """
        info = to_listing_info(record)
        if not is_unresolved_locality(info.city):
            return info

        try:
            city = await self._lookup_detail_city(record.url)
        except Exception:
            logger.exception("City lookup failed for %s", record.url)
            return info

        if city is None:
            logger.info("Could not resolve city for %s", record.url)
            return info
        return info.model_copy(update={"city": city})

    async def _lookup_detail_city(self, url: str) -> str | None:
        html = await self._fetcher.fetch(url)
        if not html:
            return None

        records = parse_domain_records(extract_second_last_script(html))
        if not records:
            return None

        city = records[0].address.addressLocality
        if is_unresolved_locality(city):
            return None
        return city
