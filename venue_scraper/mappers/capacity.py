import re
from collections.abc import Callable

from bs4 import BeautifulSoup

from venue_scraper.schemas.listing import CapacityRange

GUEST_CARD_SELECTOR = '[data-testid="storefrontHeadingFaqsCardGuests"]'
GUEST_LABEL_SELECTOR = ".storefrontHeadingFaqsCard__label"

# "50 - 120"
_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)")

# "Jusqu'à 80" on the source site, "Up to 80" on its English mirror
_UP_TO_RE = re.compile(
    r"(?:\bup\s+to|\bjusqu\s*['’]\s*(?:à|a))\s*(\d+)",
    re.IGNORECASE,
)


def _match_range(text: str) -> CapacityRange | None:
    m = _RANGE_RE.search(text)
    if not m:
        return None
    low, high = int(m.group(1)), int(m.group(2))
    if high < low:
        return None
    return CapacityRange(min=low, max=high)


def _match_up_to(text: str) -> CapacityRange | None:
    m = _UP_TO_RE.search(text)
    if not m:
        return None
    return CapacityRange(min=0, max=int(m.group(1)))


# Tried in order; add new phrasings at the end.
CAPACITY_PATTERNS: tuple[Callable[[str], CapacityRange | None], ...] = (
    _match_range,
    _match_up_to,
)


def guest_label_text(fragment: str) -> str:
    soup = BeautifulSoup(fragment, "html.parser")
    return "".join(el.get_text() for el in soup.select(GUEST_LABEL_SELECTOR)).strip()


def parse_capacity_text(text: str) -> CapacityRange | None:
    for pattern in CAPACITY_PATTERNS:
        capacity = pattern(text)
        if capacity is not None:
            return capacity
    return None


def extract_capacity(fragment: str) -> CapacityRange | None:
    """Derive a guest-count range from the guest card markup."""
    if not fragment:
        return None
    text = guest_label_text(fragment)
    if not text:
        return None
    return parse_capacity_text(text)
