"""
Page Parsing Module

Pure functions that turn archive-site markup into structured values. Nothing
here performs I/O; the scrapers feed in response bodies and decide what a
missing element means.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .errors import ParseError
from .models import File


DOWNLOAD_PATH_PREFIX = "/download/"

PAGINATION_SELECTOR = "#searchPagination > li"
ENTRY_SELECTOR = ".media > .media-body"
ENTRY_TITLE_SELECTOR = ".mt-0 a"
VERSION_LINK_SELECTOR = ".nav > .nav-link > a"
FILE_ROW_SELECTOR = "#downloadsTable tbody tr"
STORAGE_LINK_SELECTOR = "#localClientLink a[href]"
MIRROR_LINK_SELECTOR = "#mirrorsList a"

_UNSIGNED = re.compile(r"[0-9]+")


class SearchEntry(NamedTuple):
    """One version link of a catalog entry on a listing page."""
    title: str
    version: str
    link: Optional[str]


def make_soup(html: str) -> BeautifulSoup:
    """Parse markup with the lxml tree builder."""
    try:
        return BeautifulSoup(html, 'lxml')
    except ParserRejectedMarkup as e:
        raise ParseError(f"unable to parse markup: {e}") from e


def _text(element) -> str:
    return element.get_text().strip() if element is not None else ""


def _attr(element, name: str) -> str:
    if element is None:
        return ""
    value = element.get(name)
    return value if value is not None else ""


def parse_pagination_bound(html: str) -> int:
    """
    Read the search listing's page count from the last pagination control.

    Raises:
        ParseError: If there is no pagination control or its label is not an
            unsigned decimal integer
    """
    soup = make_soup(html)
    items = soup.select(PAGINATION_SELECTOR)
    if not items:
        raise ParseError("search pagination not found")

    label = _text(items[-1])
    if not _UNSIGNED.fullmatch(label):
        raise ParseError(f"unable to parse search pagination upper bound: {label!r}")
    return int(label)


def parse_search_entries(html: str) -> List[SearchEntry]:
    """
    List every version link on a search listing page, in document order.

    A version link without an href is still returned, with link set to None.
    """
    soup = make_soup(html)
    entries: List[SearchEntry] = []

    for body in soup.select(ENTRY_SELECTOR):
        title = _text(body.select_one(ENTRY_TITLE_SELECTOR))
        for anchor in body.select(VERSION_LINK_SELECTOR):
            entries.append(SearchEntry(
                title=title,
                version=_text(anchor),
                link=anchor.get('href'),
            ))

    return entries


def guid_from_link(link: str) -> str:
    """Return the part of a download link after the /download/ prefix."""
    _, sep, rest = link.partition(DOWNLOAD_PATH_PREFIX)
    return rest if sep else link


# Detail-page table layout. Each rule reads one cell into one File field;
# an absent sub-element yields an empty string for that field only.

@dataclass(frozen=True)
class ColumnRule:
    index: int
    field: str
    extract: Callable


def _cell_text(td) -> str:
    return _text(td)


def _cell_guid(td) -> str:
    anchor = td.find('a', href=True)
    return guid_from_link(anchor['href']) if anchor is not None else ""


def _cell_img_title(td) -> str:
    return _attr(td.find('img'), 'title')


def _cell_span_title(td) -> str:
    return _attr(td.find('span'), 'title').strip()


FILE_COLUMNS: Tuple[ColumnRule, ...] = (
    ColumnRule(0, 'name', _cell_text),
    ColumnRule(0, 'guid', _cell_guid),
    ColumnRule(1, 'version', _cell_text),
    ColumnRule(2, 'language', _cell_text),
    ColumnRule(3, 'architecture', _cell_img_title),
    ColumnRule(4, 'size', _cell_text),
    ColumnRule(4, 'hash', _cell_span_title),
    # 5: download counter, not recorded
)


def parse_file_row(tr, columns: Tuple[ColumnRule, ...] = FILE_COLUMNS) -> File:
    """Build a File from one detail-table row using the column rules."""
    cells = tr.find_all('td', recursive=False)
    file = File()
    for rule in columns:
        if rule.index < len(cells):
            setattr(file, rule.field, rule.extract(cells[rule.index]))
    return file


def parse_file_rows(html: str) -> List[File]:
    """Return one File per row of the detail page's downloads table, in row order."""
    soup = make_soup(html)
    return [parse_file_row(tr) for tr in soup.select(FILE_ROW_SELECTOR)]


def parse_download_page(html: str) -> Tuple[str, List[str]]:
    """
    Extract the IPFS link and the mirror links from a download page.

    Returns:
        Tuple of (ipfs_link, mirror_links); an empty string and an empty list
        when the respective elements are absent
    """
    soup = make_soup(html)

    ipfs_link = _attr(soup.select_one(STORAGE_LINK_SELECTOR), 'href')
    mirrors = [a['href'] for a in soup.select(MIRROR_LINK_SELECTOR) if a.has_attr('href')]

    return ipfs_link, mirrors
