"""
Exception types raised by the crawler.

Only FatalCrawlError stops a run; everything below the listing pages is
handled in place and recorded as a gap in the extracted data.
"""


class ScraperError(Exception):
    """Base class for crawler errors."""


class ParseError(ScraperError):
    """Markup could not be parsed, or a required element is missing or malformed."""


class FatalCrawlError(ScraperError):
    """The crawl cannot establish or advance its page enumeration."""

    def __init__(self, message: str, url: str = None):
        super().__init__(message)
        self.url = url
