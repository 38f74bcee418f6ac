import logging

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)


class PageFetcher:
    def __init__(self, client: httpx.AsyncClient, user_agent: str = _DEFAULT_USER_AGENT):
        self._client = client
        self._user_agent = user_agent

    async def fetch(self, url: str) -> str:
        """Fetch a page's markup. Returns "" on any failure, never raises."""
        try:
            resp = await self._client.get(
                url,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Failed to fetch %s: %s", url, exc)
            return ""

        if not resp.text.strip():
            logger.debug("Empty body for %s", url)
            return ""

        return resp.text

    async def fetch_fragment(self, url: str, selector: str) -> str:
        """Fetch a page and return the inner markup of the first ``selector`` match."""
        html = await self.fetch(url)
        if not html:
            return ""

        soup = BeautifulSoup(html, "html.parser")
        element = soup.select_one(selector)
        if element is None:
            logger.debug("No element matching %s on %s", selector, url)
            return ""
        return element.decode_contents()
