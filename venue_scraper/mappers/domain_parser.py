import json
import logging

from pydantic import ValidationError

from venue_scraper.schemas.listing import DomainRecord

logger = logging.getLogger(__name__)


def parse_domain_records(raw_text: str) -> list[DomainRecord]:
    """Deserialize a structured-data block into listing records.

    Malformed payloads log a warning and yield an empty list so one bad page
    cannot abort a multi-page run. Items that fail validation are skipped
    individually.
    """
    if not raw_text or not raw_text.strip():
        logger.warning("No structured-data block to parse")
        return []

    try:
        data = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Malformed structured-data block: %s", exc)
        return []

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        logger.warning(
            "Unexpected structured-data payload type: %s", type(data).__name__
        )
        return []

    records: list[DomainRecord] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("Skipping non-object structured-data item %d", i)
            continue
        try:
            records.append(DomainRecord.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid structured-data item %d: %s",
                i, exc.errors()[0].get("msg", "invalid"),
            )
    return records
