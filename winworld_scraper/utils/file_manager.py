"""
Output File Utilities

This module writes extracted file metadata to CSV, one row per file, in the
output directory.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, Optional

from ..core.models import Article


class ResultsWriter:
    """
    Appends article files as CSV rows.

    Destinations are opened in append-create mode and never truncated; each
    call opens, writes and closes its file independently.
    """

    def __init__(self,
                 base_output_dir: str = "output",
                 results_file: str = "results.csv",
                 full_results_file: str = "results_full.csv",
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the writer.

        Args:
            base_output_dir: Directory for all output files
            results_file: Per-page incremental destination
            full_results_file: Destination for the complete dataset
        """
        self.base_output_dir = Path(base_output_dir)
        self.results_path = self.base_output_dir / results_file
        self.full_results_path = self.base_output_dir / full_results_file
        self.logger = logger or logging.getLogger(__name__)

        self.base_output_dir.mkdir(parents=True, exist_ok=True)

    def append_articles(self, articles: Iterable[Article], path) -> int:
        """
        Append one row per file of every article.

        Returns:
            Number of rows written (0 if the file could not be opened)
        """
        rows = 0
        try:
            with open(path, 'a', encoding='utf-8', newline='') as f:
                writer = csv.writer(f)
                for article in articles:
                    for file in article.files:
                        writer.writerow(file.to_row())
                        rows += 1
        except OSError as e:
            self.logger.error(f"Failed to write {path}: {e}")
            return rows

        self.logger.debug(f"Appended {rows} rows to {path}")
        return rows

    def write_page(self, articles: Iterable[Article]) -> int:
        return self.append_articles(articles, self.results_path)

    def write_full(self, articles: Iterable[Article]) -> int:
        rows = self.append_articles(articles, self.full_results_path)
        self.logger.info(f"Saved {rows} rows to {self.full_results_path}")
        return rows
