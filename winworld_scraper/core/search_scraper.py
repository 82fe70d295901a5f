"""
Search-Page Scraper

Lists the catalog entries on one search results page and scrapes each of
them in turn.
"""

import logging
from typing import List, Optional
from urllib.parse import urlencode

from .article_scraper import ArticlePageScraper
from .errors import FatalCrawlError, ParseError
from .fetcher import RateLimitedFetcher
from .logger import SEARCH, ErrorTracker
from .models import Article
from .parser import parse_search_entries
from ..utils.validators import site_origin


SEARCH_PATH = "/search"
DEFAULT_SORT_ORDER = "most-recent"


def search_url(base_url: str, page: Optional[int] = None, sort: str = DEFAULT_SORT_ORDER) -> str:
    """Build the search listing URL; without a page number, the bare listing."""
    url = site_origin(base_url) + SEARCH_PATH
    if page is None:
        return url
    return f"{url}?{urlencode({'sort': sort, 'page': page})}"


class SearchPageScraper:
    def __init__(self,
                 fetcher: RateLimitedFetcher,
                 base_url: str,
                 article_scraper: ArticlePageScraper,
                 sort_order: str = DEFAULT_SORT_ORDER,
                 error_tracker: Optional[ErrorTracker] = None,
                 logger: Optional[logging.Logger] = None):
        self.fetcher = fetcher
        self.base_url = site_origin(base_url)
        self.article_scraper = article_scraper
        self.sort_order = sort_order
        self.logger = logger or logging.getLogger(__name__)
        self.errors = error_tracker or ErrorTracker(self.logger)

    def scrape(self, page: int) -> List[Article]:
        """
        Scrape one listing page and every entry on it.

        Raises:
            FatalCrawlError: If the listing page cannot be fetched or parsed
        """
        self.logger.info(f"=============================== PAGE {page:2d} ===============================")
        url = search_url(self.base_url, page, self.sort_order)

        response, error = self.fetcher.fetch(url)
        if error is not None:
            raise FatalCrawlError(f"unable to fetch search page {page}: {error}", url=url) from error

        try:
            entries = parse_search_entries(response.text)
        except ParseError as e:
            raise FatalCrawlError(f"unable to parse search page {page}: {e}", url=url) from e

        articles: List[Article] = []
        for entry in entries:
            if not entry.link:
                self.errors.record_warning(
                    SEARCH,
                    f"version link on page {page} does not have a href",
                    url,
                    article=Article(entry.title, entry.version, ""),
                )
                continue

            stub = Article(title=entry.title, version=entry.version, link=entry.link)
            articles.append(self.article_scraper.scrape(stub))

        return articles
