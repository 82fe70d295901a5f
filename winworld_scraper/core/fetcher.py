"""
Rate-Limited Page Fetcher

This module issues the crawler's HTTP requests: one GET per call, with an
identifying User-Agent, after a fixed pre-request delay. Failures are handed
back to the caller as values; nothing is retried.
"""

import logging
from typing import Optional, Tuple

import requests

from ..utils.rate_limiter import FixedDelay


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; IPFS.ScraperBot/v1.1; "
    "+https://github.com/Neo-Desktop/winworldpc-ipfs-scraper)"
)

FetchResult = Tuple[Optional[requests.Response], Optional[requests.RequestException]]


class RateLimitedFetcher:
    """
    Fetches pages from the archive site, one attempt per call.

    Each call logs the target URL, waits on the pacing limiter, then issues a
    single GET. Anything other than a 200 response is reported as an error.
    """

    def __init__(self,
                 request_delay: float = 3.0,
                 user_agent: str = DEFAULT_USER_AGENT,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 rate_limiter: Optional[FixedDelay] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the fetcher.

        Args:
            request_delay: Delay in seconds before every request
            user_agent: Value of the User-Agent header sent with every request
            timeout: Request timeout passed to requests (None = client default)
            session: HTTP session to use; a new requests.Session if omitted
            rate_limiter: Pacing limiter; a FixedDelay(request_delay) if omitted
            logger: Logger to report fetches to
        """
        self.request_delay = request_delay
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.rate_limiter = rate_limiter or FixedDelay(request_delay)

        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch a single page.

        Args:
            url: Absolute URL to request

        Returns:
            Tuple of (response, error). On success error is None. A non-200
            status yields the response together with a requests.HTTPError;
            a network failure yields (None, exception).
        """
        self.logger.info(f"sleeping {self.request_delay:g} seconds before requesting {url}")
        self.rate_limiter.acquire()

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            return None, e

        if response.status_code != requests.codes.ok:
            error = requests.HTTPError(
                f"status code error: {response.status_code} {response.reason}",
                response=response,
            )
            return response, error

        return response, None

    def close(self):
        """Close the HTTP session."""
        self.session.close()
