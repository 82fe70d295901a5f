"""Command-line entry point for the WinWorld scraper."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .core.controller import CrawlConfig, CrawlController
from .core.errors import FatalCrawlError
from .core.logger import ScraperLogger
from .utils.validators import validate_base_url


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = CrawlConfig()
    parser = argparse.ArgumentParser(
        description="Crawl the WinWorld archive and record per-file metadata (IPFS and mirror links) as CSV.",
    )
    parser.add_argument("--base-url", default=defaults.base_url, help="Site origin to crawl")
    parser.add_argument("--output", default=defaults.output_dir, help="Directory for the CSV results")
    parser.add_argument("--log-dir", default=defaults.log_dir, help="Directory for the log file")
    parser.add_argument(
        "--delay",
        type=float,
        default=defaults.request_delay,
        help="Seconds to wait before every request",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        default=defaults.max_pages,
        help="Stop after this many listing pages (0 = all)",
    )
    parser.add_argument(
        "--no-error-report",
        action="store_true",
        help="Do not write error_report.txt when records are degraded",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    ok, base_url, err = validate_base_url(args.base_url)
    if not ok:
        print(f"error: invalid --base-url: {err}", file=sys.stderr)
        return 2

    config = CrawlConfig(
        base_url=base_url,
        output_dir=args.output,
        log_dir=args.log_dir,
        request_delay=args.delay,
        max_pages=args.max_pages,
        error_report=not args.no_error_report,
    )

    scraper_logger = ScraperLogger(
        log_dir=config.log_dir,
        log_file=config.log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    scraper_logger.log_system_info()
    logger = scraper_logger.get_logger('crawl')

    controller = CrawlController(config, logger=logger)
    try:
        stats = controller.run()
    except FatalCrawlError as e:
        logger.critical(f"{e} (URL: {e.url})" if e.url else str(e))
        return 1
    finally:
        controller.close()
        scraper_logger.close()

    print(
        f"Crawled {stats['pages']} pages: {stats['articles']} articles, "
        f"{stats['files']} files ({stats['errors']} errors, {stats['warnings']} warnings)"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
