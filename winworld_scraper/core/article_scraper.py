"""
Article-Page Scraper

Resolves one catalog entry's file table, handing each row to the
download-page scraper.
"""

import logging
from typing import Optional
from urllib.parse import urljoin

from .download_scraper import DownloadPageScraper
from .errors import ParseError
from .fetcher import RateLimitedFetcher
from .logger import DETAIL, ErrorTracker
from .models import Article
from .parser import parse_file_rows
from ..utils.validators import site_origin


class ArticlePageScraper:
    def __init__(self,
                 fetcher: RateLimitedFetcher,
                 base_url: str,
                 download_scraper: DownloadPageScraper,
                 error_tracker: Optional[ErrorTracker] = None,
                 logger: Optional[logging.Logger] = None):
        self.fetcher = fetcher
        self.base_url = site_origin(base_url)
        self.download_scraper = download_scraper
        self.logger = logger or logging.getLogger(__name__)
        self.errors = error_tracker or ErrorTracker(self.logger)

    def scrape(self, article: Article) -> Article:
        """
        Append the article's files, in table row order.

        If the detail page cannot be fetched or parsed the article is
        returned with its file list untouched; one bad entry never stops
        the page.
        """
        url = urljoin(self.base_url, article.link)

        response, error = self.fetcher.fetch(url)
        if error is not None:
            self.errors.record_error(DETAIL, error, url, article=article)
            return article

        try:
            files = parse_file_rows(response.text)
        except ParseError as e:
            self.errors.record_error(DETAIL, e, url, article=article)
            return article

        for file in files:
            article.files.append(self.download_scraper.scrape(file))

        self.logger.debug(f"{article.title} {article.version}: {len(article.files)} files")
        return article
