"""
Scraper tests: listing, detail and download pages, including the
partial-failure paths.
"""

import pytest

from winworld_scraper.core.article_scraper import ArticlePageScraper
from winworld_scraper.core.download_scraper import DownloadPageScraper
from winworld_scraper.core.errors import FatalCrawlError
from winworld_scraper.core.models import Article, File
from winworld_scraper.core.pagination import PaginationDiscoverer
from winworld_scraper.core.search_scraper import SearchPageScraper, search_url
from conftest import BASE_URL, FakeResponse
from html_fixtures import detail_page, download_page, file_row, listing_page, pagination_page


class RecordingArticleScraper:
    """Returns stubs untouched, recording the order they arrive in."""

    def __init__(self):
        self.seen = []

    def scrape(self, article):
        self.seen.append(article)
        return article


def test_search_url():
    assert search_url(BASE_URL) == "https://winworldpc.com/search"
    assert search_url(BASE_URL + "/", 4) == "https://winworldpc.com/search?sort=most-recent&page=4"


def test_download_scraper_fills_links(make_fetcher, tracker):
    url = BASE_URL + "/download/abc-123"
    fetcher, session = make_fetcher({url: download_page("ipfs://QmA", ["https://m1/a", "https://m2/a"])})
    scraper = DownloadPageScraper(fetcher, BASE_URL, error_tracker=tracker)

    file = scraper.scrape(File(name="Disk 1", guid="abc-123"))

    assert session.requests == [url]
    assert file.ipfs_link == "ipfs://QmA"
    assert file.mirror_links == ["https://m1/a", "https://m2/a"]
    assert tracker.errors == []


def test_download_scraper_failure_returns_file_unchanged(make_fetcher, tracker):
    fetcher, _ = make_fetcher({})
    scraper = DownloadPageScraper(fetcher, BASE_URL, error_tracker=tracker)

    file = scraper.scrape(File(name="Disk 1", guid="missing"))

    assert file == File(name="Disk 1", guid="missing")
    assert len(tracker.errors) == 1
    gap = tracker.errors[0]
    assert gap.url == BASE_URL + "/download/missing"
    assert gap.tier == "download"
    assert gap.file == "Disk 1 [missing]"


def test_article_scraper_keeps_row_order(make_fetcher, tracker):
    pages = {
        BASE_URL + "/product/dos/622": detail_page([
            file_row("Disk A", "a", "6.22", "English", "x86", "1 MB", "h1"),
            file_row("Disk B", "b", "6.22", "English", "x86", "2 MB", "h2"),
            file_row("Disk C", "c", "6.22", "French", None, "3 MB", None),
        ]),
        BASE_URL + "/download/a": download_page("ipfs://A", ["https://m/a"]),
        BASE_URL + "/download/b": download_page(None, []),
        # /download/c is absent: 404
    }
    fetcher, session = make_fetcher(pages)
    downloads = DownloadPageScraper(fetcher, BASE_URL, error_tracker=tracker)
    scraper = ArticlePageScraper(fetcher, BASE_URL, downloads, error_tracker=tracker)

    article = scraper.scrape(Article("MS-DOS", "6.22", "/product/dos/622"))

    assert [f.name for f in article.files] == ["Disk A", "Disk B", "Disk C"]
    assert article.files[0].mirror_links == ["https://m/a"]
    assert article.files[1].ipfs_link == ""
    assert article.files[2].architecture == ""
    assert article.files[2].mirror_links == []
    assert session.requests == [
        BASE_URL + "/product/dos/622",
        BASE_URL + "/download/a",
        BASE_URL + "/download/b",
        BASE_URL + "/download/c",
    ]
    assert len(tracker.errors) == 1


def test_article_scraper_detail_failure_returns_article_unchanged(make_fetcher, tracker):
    fetcher, session = make_fetcher({BASE_URL + "/product/x/1": FakeResponse(500, "", "Server Error")})
    downloads = DownloadPageScraper(fetcher, BASE_URL, error_tracker=tracker)
    scraper = ArticlePageScraper(fetcher, BASE_URL, downloads, error_tracker=tracker)
    stub = Article("X", "1", "/product/x/1")

    article = scraper.scrape(stub)

    assert article == Article("X", "1", "/product/x/1")
    assert article.files == []
    assert session.requests == [BASE_URL + "/product/x/1"]
    assert len(tracker.errors) == 1
    assert tracker.errors[0].tier == "detail"
    assert tracker.errors[0].article == "X 1"


def test_search_scraper_returns_one_stub_per_version_link(make_fetcher, tracker):
    url = search_url(BASE_URL, 1)
    fetcher, _ = make_fetcher({url: listing_page([
        ("MS-DOS", [("6.22", "/product/dos/622"), ("5.0", "/product/dos/50")]),
        ("OS/2", [("2.1", "/product/os2/21")]),
    ])})
    recorder = RecordingArticleScraper()
    scraper = SearchPageScraper(fetcher, BASE_URL, recorder, error_tracker=tracker)

    articles = scraper.scrape(1)

    assert [(a.title, a.version, a.link) for a in articles] == [
        ("MS-DOS", "6.22", "/product/dos/622"),
        ("MS-DOS", "5.0", "/product/dos/50"),
        ("OS/2", "2.1", "/product/os2/21"),
    ]
    assert recorder.seen == articles


def test_search_scraper_skips_link_without_href(make_fetcher, tracker):
    url = search_url(BASE_URL, 2)
    fetcher, _ = make_fetcher({url: listing_page([("GEM", [("1.0", None), ("2.0", "/product/gem/20")])])})
    scraper = SearchPageScraper(fetcher, BASE_URL, RecordingArticleScraper(), error_tracker=tracker)

    articles = scraper.scrape(2)

    assert [a.version for a in articles] == ["2.0"]
    assert len(tracker.warnings) == 1
    assert tracker.warnings[0].tier == "search"
    assert tracker.warnings[0].article == "GEM 1.0"


def test_search_scraper_fetch_failure_is_fatal(make_fetcher, tracker):
    fetcher, _ = make_fetcher({})
    scraper = SearchPageScraper(fetcher, BASE_URL, RecordingArticleScraper(), error_tracker=tracker)

    with pytest.raises(FatalCrawlError) as excinfo:
        scraper.scrape(1)
    assert excinfo.value.url == search_url(BASE_URL, 1)


def test_pagination_discoverer(make_fetcher):
    fetcher, session = make_fetcher({BASE_URL + "/search": pagination_page(["1", "2", "12"])})
    assert PaginationDiscoverer(fetcher, BASE_URL).discover_upper_bound() == 12
    assert session.requests == [BASE_URL + "/search"]


def test_pagination_discoverer_non_numeric_label_is_fatal(make_fetcher):
    fetcher, _ = make_fetcher({BASE_URL + "/search": pagination_page(["1", "Next"])})
    with pytest.raises(FatalCrawlError):
        PaginationDiscoverer(fetcher, BASE_URL).discover_upper_bound()


def test_pagination_discoverer_fetch_failure_is_fatal(make_fetcher):
    fetcher, _ = make_fetcher({})
    with pytest.raises(FatalCrawlError):
        PaginationDiscoverer(fetcher, BASE_URL).discover_upper_bound()


def test_links_resolve_against_origin_when_base_has_path(make_fetcher, tracker):
    base = "https://mirror.example.org/winworld/"
    pages = {
        "https://mirror.example.org/search?sort=most-recent&page=1": listing_page([("X", [("1", "/product/x/1")])]),
        "https://mirror.example.org/product/x/1": detail_page([
            file_row("Disk", "g", "1", "English", "x86", "1 MB", "h"),
        ]),
        "https://mirror.example.org/download/g": download_page("ipfs://G", []),
    }
    fetcher, session = make_fetcher(pages)
    downloads = DownloadPageScraper(fetcher, base, error_tracker=tracker)
    articles = ArticlePageScraper(fetcher, base, downloads, error_tracker=tracker)
    scraper = SearchPageScraper(fetcher, base, articles, error_tracker=tracker)

    result = scraper.scrape(1)

    assert session.requests == list(pages)
    assert result[0].files[0].ipfs_link == "ipfs://G"
    assert tracker.gaps == []
