import logging
from typing import Iterable

from ad_aggregator.models import AdvertiserRecord, AggregatedEntry, AggregationResult

logger = logging.getLogger(__name__)


def aggregate(records: Iterable[AdvertiserRecord], sort_by_date: bool = True) -> AggregationResult:
    """Sum clicks and impressions per date across all advertisers.

    Entries keep first-seen order unless sort_by_date is set, in which case
    they are ordered by date ascending.
    """
    by_date: dict[str, AggregatedEntry] = {}
    record_count = 0

    for record in records:
        entry = by_date.get(record.date)
        if entry is None:
            entry = AggregatedEntry(date=record.date)
            by_date[record.date] = entry
        entry.clicks += record.clicks
        entry.impressions += record.impressions
        record_count += 1

    entries = list(by_date.values())
    if sort_by_date:
        entries.sort(key=lambda e: e.date)

    logger.info("Aggregated %d record(s) into %d date(s)", record_count, len(entries))
    return AggregationResult(entries=entries, record_count=record_count)
