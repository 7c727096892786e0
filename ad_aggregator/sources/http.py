import logging

import requests

from ad_aggregator.config import AggregatorConfig
from ad_aggregator.sources.base import BaseAdvertiserSource, FetchOutcome

logger = logging.getLogger(__name__)


class HttpAdvertiserSource(BaseAdvertiserSource):
    def __init__(self, config: AggregatorConfig):
        self.config = config

    def build_url(self, advertiser_id: int) -> str:
        return f"{self.config.base_url}{advertiser_id}"

    def _read_body(self, resp: requests.Response) -> str:
        # Lines are re-joined with no separator; JSON payloads are unaffected.
        raw = b"".join(resp.iter_lines())
        return raw.decode(resp.encoding or "utf-8")

    def fetch(self, advertiser_id: int) -> FetchOutcome:
        url = self.build_url(advertiser_id)
        try:
            # Connect timeout only: the body read is allowed to wait.
            resp = requests.get(url, timeout=(self.config.connect_timeout, None))
            resp.raise_for_status()
            body = self._read_body(resp)
        except requests.RequestException as e:
            logger.error("Fetch failed for advertiser %s: %s", advertiser_id, e)
            return FetchOutcome.failed(advertiser_id, str(e))
        except Exception as e:
            logger.error("Fetch failed for advertiser %s: %s", advertiser_id, e, exc_info=True)
            return FetchOutcome.failed(advertiser_id, str(e))

        logger.debug("Fetched %d bytes for advertiser %s", len(body), advertiser_id)
        return FetchOutcome.ok(advertiser_id, body)
