"""Concurrent fetch of advertiser payloads followed by one aggregation pass.

Workers only fetch and parse. Their records travel back through the futures
to the calling thread, which alone owns the accumulator and the completion
count, so aggregation is triggered exactly once after the last task.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, Optional

from ad_aggregator.aggregator import aggregate
from ad_aggregator.config import DEFAULT_MAX_CONCURRENCY, MIN_CONCURRENCY, AggregatorConfig
from ad_aggregator.models import AdvertiserRecord, AggregationResult
from ad_aggregator.parser import parse_payload
from ad_aggregator.sink import ResultSink, print_sink
from ad_aggregator.sources.base import BaseAdvertiserSource
from ad_aggregator.sources.http import HttpAdvertiserSource

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(
        self,
        source: BaseAdvertiserSource,
        sink: ResultSink = print_sink,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        sort_by_date: bool = True,
    ):
        if max_concurrency < MIN_CONCURRENCY:
            logger.warning(
                "max_concurrency %d is below the minimum, using %d",
                max_concurrency, MIN_CONCURRENCY,
            )
            max_concurrency = MIN_CONCURRENCY
        self.source = source
        self.sink = sink
        self.max_concurrency = max_concurrency
        self.sort_by_date = sort_by_date

    def _fetch_and_parse(self, advertiser_id: int) -> tuple[bool, list[AdvertiserRecord]]:
        """Returns (usable, records); usable is False for a failed fetch or a bad payload."""
        outcome = self.source.fetch(advertiser_id)
        if not outcome.success:
            return False, []
        report = parse_payload(outcome.body)
        if report.skipped:
            logger.warning(
                "Advertiser %s: skipped %d malformed record(s)", advertiser_id, report.skipped,
            )
        return report.valid_payload, report.records

    def run(self, advertiser_ids: Optional[Iterable[int]]) -> AggregationResult:
        """Fetch every advertiser, aggregate by date, and hand the result to the sink.

        An empty or missing id list is a no-op: nothing is fetched and the sink
        is not called.
        """
        ids = list(advertiser_ids or [])
        if not ids:
            logger.info("No advertiser ids given, nothing to fetch")
            return AggregationResult()

        logger.info(
            "Fetching %d advertiser(s) with up to %d concurrent worker(s)",
            len(ids), self.max_concurrency,
        )

        records: list[AdvertiserRecord] = []
        failed: list[int] = []
        completed = 0

        with ThreadPoolExecutor(max_workers=self.max_concurrency) as executor:
            futures = {
                executor.submit(self._fetch_and_parse, advertiser_id): advertiser_id
                for advertiser_id in ids
            }
            for future in as_completed(futures):
                advertiser_id = futures[future]
                try:
                    usable, task_records = future.result()
                except Exception as e:
                    logger.error(
                        "Worker for advertiser %s failed: %s", advertiser_id, e, exc_info=True,
                    )
                    usable, task_records = False, []
                if not usable:
                    failed.append(advertiser_id)
                records.extend(task_records)
                completed += 1
                logger.debug("Completed %d/%d", completed, len(futures))

        if failed:
            logger.warning(
                "%d of %d advertiser(s) contributed no data: %s",
                len(failed), len(ids), sorted(failed),
            )

        result = aggregate(records, sort_by_date=self.sort_by_date)
        result.advertiser_count = len(ids)
        result.failed_advertiser_ids = sorted(failed)

        try:
            self.sink(result)
        except Exception as e:
            logger.error("Result sink failed: %s", e)
            raise
        return result


def run(
    advertiser_ids: Optional[Iterable[int]],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    source: Optional[BaseAdvertiserSource] = None,
    sink: ResultSink = print_sink,
) -> AggregationResult:
    """Aggregate advertisers with the default HTTP source unless one is given."""
    if source is None:
        source = HttpAdvertiserSource(AggregatorConfig())
    return Dispatcher(source, sink=sink, max_concurrency=max_concurrency).run(advertiser_ids)
