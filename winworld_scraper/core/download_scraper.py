"""
Download-Page Scraper

Resolves one file's IPFS link and mirror list from its download page.
"""

import logging
from typing import Optional

from .errors import ParseError
from .fetcher import RateLimitedFetcher
from .logger import DOWNLOAD, ErrorTracker
from .models import File
from .parser import DOWNLOAD_PATH_PREFIX, parse_download_page
from ..utils.validators import site_origin


class DownloadPageScraper:
    def __init__(self,
                 fetcher: RateLimitedFetcher,
                 base_url: str,
                 error_tracker: Optional[ErrorTracker] = None,
                 logger: Optional[logging.Logger] = None):
        self.fetcher = fetcher
        self.base_url = site_origin(base_url)
        self.logger = logger or logging.getLogger(__name__)
        self.errors = error_tracker or ErrorTracker(self.logger)

    def download_url(self, file: File) -> str:
        return self.base_url + DOWNLOAD_PATH_PREFIX + file.guid

    def scrape(self, file: File) -> File:
        """
        Fill in the file's IPFS link and mirrors.

        A failed fetch or parse leaves the file as it was; absent elements
        leave the matching field empty.
        """
        url = self.download_url(file)

        response, error = self.fetcher.fetch(url)
        if error is not None:
            self.errors.record_error(DOWNLOAD, error, url, file=file)
            return file

        try:
            ipfs_link, mirrors = parse_download_page(response.text)
        except ParseError as e:
            self.errors.record_error(DOWNLOAD, e, url, file=file)
            return file

        if ipfs_link:
            file.ipfs_link = ipfs_link
        file.mirror_links.extend(mirrors)

        return file
