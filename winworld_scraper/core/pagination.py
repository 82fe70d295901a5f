"""
Pagination Discoverer

Finds how many result pages the search listing has. Without this bound the
crawl cannot be limited, so every failure here is fatal.
"""

import logging
from typing import Optional

from .errors import FatalCrawlError, ParseError
from .fetcher import RateLimitedFetcher
from .parser import parse_pagination_bound
from .search_scraper import search_url
from ..utils.validators import site_origin


class PaginationDiscoverer:
    def __init__(self,
                 fetcher: RateLimitedFetcher,
                 base_url: str,
                 logger: Optional[logging.Logger] = None):
        self.fetcher = fetcher
        self.base_url = site_origin(base_url)
        self.logger = logger or logging.getLogger(__name__)

    def discover_upper_bound(self) -> int:
        """
        Fetch the root search listing and read its last pagination label.

        Raises:
            FatalCrawlError: If the page cannot be fetched, the control is
                missing, or the label is not an unsigned integer
        """
        url = search_url(self.base_url)
        self.logger.info("Fetching search pagination upper bound")

        response, error = self.fetcher.fetch(url)
        if error is not None:
            raise FatalCrawlError(f"unable to fetch search pagination: {error}", url=url) from error

        try:
            bound = parse_pagination_bound(response.text)
        except ParseError as e:
            raise FatalCrawlError(str(e), url=url) from e

        self.logger.info(f"====== Found {bound} total pages ======")
        return bound
