"""
Crawl Orchestrator: discovers the page bound, then walks listing pages,
entries and files in order, persisting each page as it completes.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional

from .article_scraper import ArticlePageScraper
from .download_scraper import DownloadPageScraper
from .fetcher import DEFAULT_USER_AGENT, RateLimitedFetcher
from .logger import ErrorTracker
from .models import Article
from .pagination import PaginationDiscoverer
from .search_scraper import DEFAULT_SORT_ORDER, SearchPageScraper
from ..utils.file_manager import ResultsWriter


@dataclass
class CrawlConfig:
    base_url: str = "https://winworldpc.com"
    output_dir: str = "output"
    results_file: str = "results.csv"
    full_results_file: str = "results_full.csv"
    log_dir: str = "logs"
    log_file: str = "output.log"
    request_delay: float = 3.0
    user_agent: str = DEFAULT_USER_AGENT
    sort_order: str = DEFAULT_SORT_ORDER
    timeout: Optional[float] = None  # None = HTTP client default
    max_pages: int = 0  # 0 = no cap
    error_report: bool = True


class CrawlController:
    def __init__(self,
                 config: CrawlConfig,
                 logger: Optional[logging.Logger] = None,
                 fetcher: Optional[RateLimitedFetcher] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.errors = ErrorTracker(self.logger)
        self.fetcher = fetcher or RateLimitedFetcher(
            request_delay=config.request_delay,
            user_agent=config.user_agent,
            timeout=config.timeout,
            logger=self.logger,
        )

        self.pagination = PaginationDiscoverer(self.fetcher, config.base_url, logger=self.logger)
        self.download_scraper = DownloadPageScraper(
            self.fetcher, config.base_url, error_tracker=self.errors, logger=self.logger)
        self.article_scraper = ArticlePageScraper(
            self.fetcher, config.base_url, self.download_scraper, error_tracker=self.errors, logger=self.logger)
        self.search_scraper = SearchPageScraper(
            self.fetcher, config.base_url, self.article_scraper, sort_order=config.sort_order,
            error_tracker=self.errors, logger=self.logger)

        self.writer = ResultsWriter(
            config.output_dir, config.results_file, config.full_results_file, logger=self.logger)
        self._executor = ThreadPoolExecutor(thread_name_prefix="page-writer")
        # Per-page write tasks; never awaited by run(), completion order is unspecified
        self.pending_writes: List[Future] = []

    def page_range(self, upper_bound: int) -> range:
        """Pages 1 up to, but excluding, the discovered bound (optionally capped)."""
        last = upper_bound
        if self.config.max_pages and self.config.max_pages > 0:
            last = min(last, self.config.max_pages + 1)
        return range(1, last)

    def run(self) -> Dict[str, int]:
        """
        Run the crawl to completion.

        Raises:
            FatalCrawlError: If the page bound cannot be discovered or a
                listing page cannot be read
        """
        stats = {"pages": 0, "articles": 0, "files": 0, "errors": 0, "warnings": 0}
        start = time.monotonic()
        self.logger.info("WinWorld IPFS Scraper Started")

        articles: List[Article] = []

        upper_bound = self.pagination.discover_upper_bound()

        for page in self.page_range(upper_bound):
            # Frozen once handed off: the slice is never touched again here
            results = tuple(self.search_scraper.scrape(page))
            articles.extend(results)
            self.pending_writes.append(self._executor.submit(self.writer.write_page, results))

            stats["pages"] += 1
            stats["articles"] += len(results)
            stats["files"] += sum(len(a.files) for a in results)

        self.writer.write_full(articles)
        self._executor.shutdown(wait=False)

        summary = self.errors.get_summary()
        stats["errors"] = summary['total_errors']
        stats["warnings"] = summary['total_warnings']
        if summary['total_errors'] or summary['total_warnings']:
            self.logger.warning(
                f"Degraded records: {summary['total_errors']} errors, "
                f"{summary['total_warnings']} warnings by tier {summary['by_tier']}"
            )
            if self.config.error_report:
                self.errors.save_report(str(self.writer.base_output_dir / "error_report.txt"))

        self.logger.info("WinWorld IPFS Scraper completed")
        self.logger.info(f"Total time: {time.monotonic() - start:.1f}s")
        return stats

    def close(self):
        self._executor.shutdown(wait=True)
        self.fetcher.close()
