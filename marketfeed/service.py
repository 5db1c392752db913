from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import FeedSettings, load_config
from .datasource.http_api import HttpMarketStatusSource, HttpMarketStatusSourceConfig
from .monitor import MarketWatcher
from .types import StatusChange


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def build_source(settings: FeedSettings) -> HttpMarketStatusSource:
    return HttpMarketStatusSource(
        HttpMarketStatusSourceConfig(
            base_url=settings.api_url,
            timeout_seconds=settings.timeout_seconds,
        )
    )


async def run(args: argparse.Namespace) -> List[StatusChange]:
    settings = load_config(args.env_file)
    configure_logging(args.verbose)
    logger = logging.getLogger("matka.feed")

    markets = args.market or list(settings.markets)
    if not markets:
        raise RuntimeError("No markets configured; pass --market or set FEED_MARKETS.")

    watcher = MarketWatcher(settings, build_source(settings), markets=markets, logger=logger)

    if args.once or settings.run_once:
        return await watcher.run_once()

    await watcher.run_forever()
    return []


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Matka market status feed")
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env file")
    parser.add_argument("--once", action="store_true", help="Poll once and exit.")
    parser.add_argument(
        "--market", type=int, action="append", default=None, help="Market id to watch (repeatable)."
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging (default INFO)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        print("Market feed stopped by user.")


if __name__ == "__main__":
    main()
