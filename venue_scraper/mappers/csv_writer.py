from collections.abc import Iterable

from venue_scraper.schemas.listing import CompleteListing

CSV_COLUMNS = ("type", "name", "city", "region", "postalCode", "url", "min", "max")
CSV_MODES = ("w", "a")


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _number(value: int | None) -> str:
    return "" if value is None else str(value)


def to_csv_row(listing: CompleteListing) -> str:
    return ",".join([
        _quote(listing.type),
        _quote(listing.name),
        _quote(listing.city),
        _quote(listing.region),
        _quote(listing.postalCode),
        _quote(listing.url),
        _number(listing.min),
        _number(listing.max),
    ])


def to_csv(listings: Iterable[CompleteListing], mode: str) -> str:
    """Render listings as CSV text.

    ``"w"`` emits the header row first; ``"a"`` emits data rows only, for
    appending to a file that already has one. Every line ends with a newline.
    """
    if mode not in CSV_MODES:
        raise ValueError(f"mode must be 'w' or 'a', got {mode!r}")

    lines = [",".join(CSV_COLUMNS)] if mode == "w" else []
    lines.extend(to_csv_row(listing) for listing in listings)
    return "".join(f"{line}\n" for line in lines)
