"""CLI entrypoint for the NeurIPS proceedings scraper."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from neurips_scraper.config import Config
from neurips_scraper.errors import ConfigError, DirectoryError, SinkError
from neurips_scraper.logging_config import setup_logging
from neurips_scraper.manager import ScrapeManager

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        description="Download NeurIPS papers and record their metadata in a CSV table",
    )
    parser.add_argument("--start-year", type=int, default=None, help="Newest year to scrape (processed first)")
    parser.add_argument("--end-year", type=int, default=None, help="Oldest year to scrape (processed last)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Root directory for output.csv and PDFs")
    parser.add_argument("--workers", type=int, default=None, help="Number of papers processed concurrently")
    parser.add_argument("--max-attempts", type=int, default=None, help="Attempts per paper before it is recorded as FAILED")
    parser.add_argument("--backoff", type=float, default=None, help="Seconds to wait before retrying a paper")
    parser.add_argument("--base-url", default=None, help="Root URL of the proceedings website")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")
    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Copy the flags that were given onto the configuration."""
    if args.start_year is not None:
        config.scraper.start_year = args.start_year
    if args.end_year is not None:
        config.scraper.end_year = args.end_year
    if args.output_dir is not None:
        config.paths.output_dir = args.output_dir
    if args.workers is not None:
        config.scraper.max_workers = args.workers
    if args.max_attempts is not None:
        config.retry.max_attempts = args.max_attempts
    if args.backoff is not None:
        config.retry.backoff_seconds = args.backoff
    if args.base_url is not None:
        config.scraper.base_url = args.base_url.rstrip("/")
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Load configuration, run the scraper and return the exit code."""
    args = parse_args(argv)
    config = apply_overrides(Config.from_env(), args)
    setup_logging(config.log, log_level_override=args.log_level)

    try:
        with ScrapeManager(config) as manager:
            manager.run()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except DirectoryError as e:
        logger.error(f"Failed to create output folder: {e}")
        return 1
    except SinkError as e:
        logger.error(f"Output table is no longer writable: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
