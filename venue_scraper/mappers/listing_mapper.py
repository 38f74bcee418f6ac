from urllib.parse import urlsplit

from venue_scraper.schemas.listing import (
    CapacityRange,
    CompleteListing,
    DomainRecord,
    ListingInfo,
)


def listing_type(url: str) -> str:
    """First path segment of a listing URL, e.g. ``domaine-mariage``."""
    path = urlsplit(url).path.strip("/")
    if not path:
        return ""
    return path.split("/", 1)[0]


def to_listing_info(record: DomainRecord) -> ListingInfo:
    return ListingInfo(
        name=record.name,
        url=record.url,
        city=record.address.addressLocality,
        region=record.address.addressRegion,
        postalCode=record.address.postalCode,
    )


def build_complete_listing(
    info: ListingInfo, capacity: CapacityRange | None
) -> CompleteListing:
    return CompleteListing(
        **info.model_dump(),
        type=listing_type(info.url),
        capacity=capacity,
    )
