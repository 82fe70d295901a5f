"""
Shared fixtures: a fake HTTP session and a fake clock, so the crawler can be
driven against inline HTML without touching the network or sleeping.
"""

import logging

import pytest

from winworld_scraper.core.fetcher import RateLimitedFetcher
from winworld_scraper.core.logger import ErrorTracker
from winworld_scraper.utils.rate_limiter import FixedDelay


BASE_URL = "https://winworldpc.com"


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def time(self) -> float:
        return self.now

    def sleep(self, secs: float):
        self.now += secs


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", reason: str = "OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    """
    Stands in for requests.Session. Pages maps URL -> HTML (status 200),
    a FakeResponse, or an exception instance to raise. Unknown URLs are 404.
    """

    def __init__(self, pages=None, clock: FakeClock = None):
        self.pages = dict(pages or {})
        self.clock = clock
        self.headers = {}
        self.requests = []      # URLs, in request order
        self.request_times = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requests.append(url)
        if self.clock is not None:
            self.request_times.append(self.clock.time())

        page = self.pages.get(url)
        if page is None:
            return FakeResponse(404, "", "Not Found")
        if isinstance(page, Exception):
            raise page
        if isinstance(page, FakeResponse):
            return page
        return FakeResponse(200, page)

    def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_fetcher(clock):
    def factory(pages=None, delay: float = 3.0):
        session = FakeSession(pages, clock=clock)
        limiter = FixedDelay(delay, sleep=clock.sleep, clock=clock.time)
        fetcher = RateLimitedFetcher(request_delay=delay, session=session, rate_limiter=limiter)
        return fetcher, session
    return factory


@pytest.fixture
def tracker():
    return ErrorTracker(logging.getLogger("winworld_scraper.test"))
