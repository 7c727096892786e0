"""Parsing of advertiser performance payloads.

A payload is a JSON array of objects shaped like
{"advertiser_id": 123, "ymd": "2016-06-01", "num_clicks": 3, "num_impressions": 10}.
Bad elements are skipped one at a time; a bad payload yields no records.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ad_aggregator.models import AdvertiserRecord

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


class RecordError(ValueError):
    """Raised when a single payload element cannot be turned into a record."""


@dataclass
class ParseReport:
    records: list[AdvertiserRecord] = field(default_factory=list)
    skipped: int = 0
    valid_payload: bool = True


def _require_int(obj: dict, key: str, minimum: Optional[int] = None) -> int:
    if key not in obj:
        raise RecordError(f"missing field '{key}'")
    value = obj[key]
    # bool is an int subclass; true/false are not counts
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordError(f"field '{key}' is not an integer: {value!r}")
    if minimum is not None and value < minimum:
        raise RecordError(f"field '{key}' is below {minimum}: {value}")
    return value


def _require_date(obj: dict, key: str) -> str:
    if key not in obj:
        raise RecordError(f"missing field '{key}'")
    value = obj[key]
    if not isinstance(value, str):
        raise RecordError(f"field '{key}' is not a string: {value!r}")
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise RecordError(f"field '{key}' is not a YYYY-MM-DD date: {value!r}")
    # strptime accepts "2016-6-1"; dates are grouped by their exact text
    if parsed.strftime(DATE_FORMAT) != value:
        raise RecordError(f"field '{key}' is not a zero-padded YYYY-MM-DD date: {value!r}")
    return value


def parse_record(obj: Any) -> AdvertiserRecord:
    """Convert one decoded JSON element into an AdvertiserRecord.

    Raises:
        RecordError: If the element is not an object or a field is missing
            or has the wrong type.
    """
    if not isinstance(obj, dict):
        raise RecordError(f"element is not an object: {type(obj).__name__}")
    return AdvertiserRecord(
        advertiser_id=_require_int(obj, "advertiser_id"),
        date=_require_date(obj, "ymd"),
        clicks=_require_int(obj, "num_clicks", minimum=0),
        impressions=_require_int(obj, "num_impressions", minimum=0),
    )


def parse_payload(raw_body: Optional[str]) -> ParseReport:
    """Parse a raw response body, keeping every well-formed element.

    Args:
        raw_body: Response text, or None when nothing was fetched.

    Returns:
        ParseReport with the parsed records, the number of skipped elements,
        and whether the body was a JSON array at all.
    """
    if raw_body is None:
        return ParseReport(valid_payload=False)

    try:
        data = json.loads(raw_body)
    except ValueError as e:
        logger.error("Payload is not valid JSON: %s", e)
        return ParseReport(valid_payload=False)

    if not isinstance(data, list):
        logger.error("Payload is not a JSON array (got %s)", type(data).__name__)
        return ParseReport(valid_payload=False)

    report = ParseReport()
    for index, obj in enumerate(data):
        try:
            report.records.append(parse_record(obj))
        except RecordError as e:
            report.skipped += 1
            logger.warning("Skipping record %d: %s", index, e)
    return report


def parse_records(raw_body: Optional[str]) -> list[AdvertiserRecord]:
    """Parse a raw response body into records; invalid payloads give []."""
    return parse_payload(raw_body).records
