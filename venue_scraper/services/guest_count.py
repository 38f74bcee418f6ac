import logging

from venue_scraper.mappers.capacity import GUEST_CARD_SELECTOR, extract_capacity
from venue_scraper.schemas.listing import CapacityRange
from venue_scraper.services.fetcher import PageFetcher

logger = logging.getLogger(__name__)


class GuestCountService:
    def __init__(self, fetcher: PageFetcher):
        self._fetcher = fetcher

    async def get_guest_count(self, url: str) -> CapacityRange | None:
        """Capacity advertised on a listing page. Best-effort, never raises."""
        try:
            fragment = await self._fetcher.fetch_fragment(url, GUEST_CARD_SELECTOR)
            capacity = extract_capacity(fragment)
        except Exception:
            logger.exception("Guest count lookup failed for %s", url)
            return None

        if capacity is None:
            logger.debug("No guest count found for %s", url)
        return capacity
