import logging
from typing import Callable

from ad_aggregator.models import AggregatedEntry, AggregationResult

logger = logging.getLogger(__name__)

ResultSink = Callable[[AggregationResult], None]

LINE_TEMPLATE = "{date}:\tClicks: {clicks}\tImpressions: {impressions}"


def format_entry(entry: AggregatedEntry) -> str:
    return LINE_TEMPLATE.format(
        date=entry.date, clicks=entry.clicks, impressions=entry.impressions,
    )


def format_report(result: AggregationResult) -> str:
    """One line per aggregated date, in result order."""
    return "\n".join(format_entry(e) for e in result.entries)


def print_sink(result: AggregationResult) -> None:
    for entry in result.entries:
        print(format_entry(entry))


def logging_sink(result: AggregationResult) -> None:
    for entry in result.entries:
        logger.info("%s", format_entry(entry))
