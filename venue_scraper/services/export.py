import logging
from collections.abc import Sequence
from pathlib import Path

from venue_scraper.exceptions.custom import OutputWriteError
from venue_scraper.mappers.csv_writer import to_csv
from venue_scraper.schemas.listing import CompleteListing

logger = logging.getLogger(__name__)


def write_csv(
    listings: Sequence[CompleteListing],
    output_file: str,
    mode: str,
    output_dir: str | Path = "data",
) -> Path:
    """Write (``"w"``) or append (``"a"``) listings to ``<output_dir>/<output_file>``."""
    if not output_file or Path(output_file).name != output_file:
        raise ValueError(f"output_file must be a bare file name, got {output_file!r}")

    content = to_csv(listings, mode)
    path = Path(output_dir) / output_file
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open(mode, encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as exc:
        raise OutputWriteError(str(path), str(exc)) from exc

    logger.info("CSV file has been saved to: %s (%d rows)", path, len(listings))
    return path
