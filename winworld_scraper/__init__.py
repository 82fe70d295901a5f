"""
WinWorld Scraper: Software Archive Metadata Crawler

A utility for politely crawling the WinWorld software archive, discovering
every catalog entry and extracting per-file metadata (name, version,
checksum, IPFS link, mirror links) for later offline use.
"""

__version__ = "1.1"
__author__ = "WinWorld Scraper Project"
__description__ = "Software Archive Metadata Crawler"
