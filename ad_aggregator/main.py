import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from ad_aggregator.config import AggregatorConfig, load_config
from ad_aggregator.dispatcher import Dispatcher
from ad_aggregator.sink import print_sink
from ad_aggregator.sources.http import HttpAdvertiserSource

DEFAULT_ADVERTISER_IDS = [123, 124, 456, 457, 726]

ENV_HELP = """\
environment overrides (also read from .env):
  AD_AGGREGATOR_BASE_URL            endpoint prefix
  AD_AGGREGATOR_CONNECT_TIMEOUT_MS  connect timeout in milliseconds (>= 1)
  AD_AGGREGATOR_MAX_CONCURRENCY     maximum concurrent fetches (>= 2)
  AD_AGGREGATOR_LOG_LEVEL           log level, e.g. DEBUG or WARNING (default INFO)
"""


def configure_logging(config: AggregatorConfig) -> logging.Logger:
    """Send log records to stdout at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    return logging.getLogger("ad_aggregator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ad-aggregator",
        description="Fetch advertiser performance data and aggregate it by date.",
        epilog=ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "advertiser_ids", nargs="*", type=int, metavar="ID",
        help="advertiser ids to fetch (default: %(default)s)",
        default=DEFAULT_ADVERTISER_IDS,
    )
    parser.add_argument("--max-concurrency", type=int, help="maximum concurrent fetches")
    parser.add_argument("--connect-timeout-ms", type=int, help="connect timeout in milliseconds")
    parser.add_argument("--base-url", help="endpoint prefix the advertiser id is appended to")
    parser.add_argument(
        "--unsorted", action="store_true",
        help="keep dates in first-seen order instead of sorting them",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> AggregatorConfig:
    """Load the environment config and apply command-line overrides.

    Raises:
        ValueError: If an environment value or a flag is invalid.
    """
    config = load_config()

    overrides = {}
    if args.max_concurrency is not None:
        overrides["max_concurrency"] = args.max_concurrency
    if args.connect_timeout_ms is not None:
        if args.connect_timeout_ms < 1:
            raise ValueError(f"--connect-timeout-ms must be at least 1, got {args.connect_timeout_ms}")
        overrides["connect_timeout"] = args.connect_timeout_ms / 1000
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.unsorted:
        overrides["sort_by_date"] = False
    return replace(config, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except ValueError as e:
        configure_logging(AggregatorConfig()).error("Configuration error: %s", e)
        sys.exit(1)

    logger = configure_logging(config)
    logger.info("Starting advertiser aggregation for %d advertiser(s)", len(args.advertiser_ids))

    dispatcher = Dispatcher(
        HttpAdvertiserSource(config),
        sink=print_sink,
        max_concurrency=config.max_concurrency,
        sort_by_date=config.sort_by_date,
    )
    result = dispatcher.run(args.advertiser_ids)

    logger.info(
        "Aggregation finished: %d date(s), %d record(s), %d failed advertiser(s)",
        len(result.entries), result.record_count, len(result.failed_advertiser_ids),
    )


if __name__ == "__main__":
    main()
