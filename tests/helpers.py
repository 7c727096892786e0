import json
import threading
import time

from ad_aggregator.sources.base import BaseAdvertiserSource, FetchOutcome


def make_payload(*rows) -> str:
    """Build a response body from (advertiser_id, ymd, clicks, impressions) tuples."""
    return json.dumps([
        {
            "advertiser_id": advertiser_id,
            "ymd": ymd,
            "num_clicks": clicks,
            "num_impressions": impressions,
        }
        for advertiser_id, ymd, clicks, impressions in rows
    ])


class FakeSource(BaseAdvertiserSource):
    """Serves canned bodies per advertiser id; ids without a body fail."""

    def __init__(self, bodies: dict, delay: float = 0.0):
        self.bodies = bodies
        self.delay = delay
        self.calls: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def fetch(self, advertiser_id: int) -> FetchOutcome:
        with self._lock:
            self.calls.append(advertiser_id)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            body = self.bodies.get(advertiser_id)
            if body is None:
                return FetchOutcome.failed(advertiser_id, "connection refused")
            return FetchOutcome.ok(advertiser_id, body)
        finally:
            with self._lock:
                self.in_flight -= 1
