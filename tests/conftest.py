import pytest

from ad_aggregator.config import AggregatorConfig


@pytest.fixture
def aggregator_config():
    return AggregatorConfig(
        base_url="https://ads.example.com/advertisers/",
        connect_timeout=0.2,
        max_concurrency=4,
    )
