import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from venue_scraper.config import Settings, configure_logging
from venue_scraper.exceptions.custom import ScraperError
from venue_scraper.services.export import write_csv
from venue_scraper.services.pipeline import build_pipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="venue-scraper",
        description="Scrape venue listings into a CSV file under the output directory.",
    )
    parser.add_argument("url", help="listing-index URL")
    parser.add_argument(
        "mode", choices=("w", "a"),
        help='"w" writes a fresh file with a header, "a" appends rows only',
    )
    parser.add_argument("output_file", help="CSV file name, created under OUTPUT_DIR")
    parser.add_argument(
        "--pages", type=int, default=None,
        help="number of result pages to scrape (default: only the given URL)",
    )
    return parser


async def run(url: str, mode: str, output_file: str, pages: int | None, settings: Settings) -> None:
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        pipeline = build_pipeline(client, settings)
        result = await pipeline.run(url, pages)
    write_csv(result.listings, output_file, mode, settings.output_dir)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.pages is not None and args.pages < 1:
        parser.error("--pages must be >= 1")
    if Path(args.output_file).name != args.output_file:
        parser.error("output_file must be a bare file name")

    settings = Settings()
    configure_logging(settings.log_level)

    try:
        asyncio.run(run(args.url, args.mode, args.output_file, args.pages, settings))
    except ScraperError as exc:
        logger.error("Error in main execution: %s", exc.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
