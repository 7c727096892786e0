import os
from unittest.mock import patch

import pytest

from ad_aggregator.config import DEFAULT_BASE_URL, AggregatorConfig, load_config


@patch("ad_aggregator.config.load_dotenv")
@patch.dict(os.environ, {}, clear=True)
def test_load_config_defaults(mock_dotenv):
    config = load_config()

    assert config == AggregatorConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.connect_timeout == 0.2
    assert config.max_concurrency == 8


@patch("ad_aggregator.config.load_dotenv")
@patch.dict(os.environ, {
    "AD_AGGREGATOR_BASE_URL": "https://ads.example.com/advertisers/",
    "AD_AGGREGATOR_CONNECT_TIMEOUT_MS": "500",
    "AD_AGGREGATOR_MAX_CONCURRENCY": "3",
    "AD_AGGREGATOR_LOG_LEVEL": "debug",
}, clear=True)
def test_load_config_overrides(mock_dotenv):
    config = load_config()

    assert config.base_url == "https://ads.example.com/advertisers/"
    assert config.connect_timeout == 0.5
    assert config.max_concurrency == 3
    assert config.log_level == "debug"


@patch("ad_aggregator.config.load_dotenv")
@patch.dict(os.environ, {
    "AD_AGGREGATOR_CONNECT_TIMEOUT_MS": "fast",
    "AD_AGGREGATOR_MAX_CONCURRENCY": "1",
}, clear=True)
def test_load_config_reports_all_invalid(mock_dotenv):
    with pytest.raises(ValueError) as exc:
        load_config()

    assert "AD_AGGREGATOR_CONNECT_TIMEOUT_MS" in str(exc.value)
    assert "AD_AGGREGATOR_MAX_CONCURRENCY" in str(exc.value)
