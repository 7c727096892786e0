import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://dan.triplelift.net/code_test.php?advertiser_id="
DEFAULT_CONNECT_TIMEOUT = 0.2
DEFAULT_MAX_CONCURRENCY = 8
MIN_CONCURRENCY = 2


@dataclass(frozen=True)
class AggregatorConfig:
    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT  # seconds
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    sort_by_date: bool = True
    log_level: str = "INFO"


def load_config() -> AggregatorConfig:
    """Load configuration, applying any overrides found in the environment.

    Recognised variables: AD_AGGREGATOR_BASE_URL,
    AD_AGGREGATOR_CONNECT_TIMEOUT_MS, AD_AGGREGATOR_MAX_CONCURRENCY and
    AD_AGGREGATOR_LOG_LEVEL (logging verbosity, INFO by default).
    Every setting has a default, so an empty environment is valid.
    """
    load_dotenv()
    invalid = []

    def _get(name: str) -> str:
        return os.environ.get(name, "").strip()

    def _get_int(name: str, default: int, minimum: int) -> int:
        raw = _get(name)
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            invalid.append(f"{name}={raw!r}")
            return default
        if value < minimum:
            invalid.append(f"{name}={raw!r}")
            return default
        return value

    base_url = _get("AD_AGGREGATOR_BASE_URL") or DEFAULT_BASE_URL
    timeout_ms = _get_int(
        "AD_AGGREGATOR_CONNECT_TIMEOUT_MS", int(DEFAULT_CONNECT_TIMEOUT * 1000), 1,
    )
    max_concurrency = _get_int(
        "AD_AGGREGATOR_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY, MIN_CONCURRENCY,
    )
    log_level = _get("AD_AGGREGATOR_LOG_LEVEL") or "INFO"

    if invalid:
        raise ValueError(
            f"Invalid environment variables: {', '.join(invalid)}"
        )

    return AggregatorConfig(
        base_url=base_url,
        connect_timeout=timeout_ms / 1000,
        max_concurrency=max_concurrency,
        log_level=log_level,
    )
