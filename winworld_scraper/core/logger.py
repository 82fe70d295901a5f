"""
Logging and Error Handling System

This module provides the logging setup and degraded-failure tracking used
by the crawler. A ScraperLogger is constructed explicitly by the entry point
and its loggers are handed to each component.
"""

import logging
import logging.handlers
import os
import sys
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from .models import Article, File


class ScraperLogger:
    """
    Logging setup for the crawler.

    Every record goes to two sinks: the console (stdout) and an append-mode
    log file, both with timestamped, human-readable lines.
    """

    def __init__(self,
                 log_dir: str = "logs",
                 log_file: str = "output.log",
                 app_name: str = "winworld_scraper",
                 level: int = logging.INFO):
        """
        Initialize the logging system.

        Args:
            log_dir: Directory to store the log file
            log_file: Name of the log file inside log_dir
            app_name: Name of the application logger
            level: Logging level for the application logger
        """
        self.log_dir = Path(log_dir)
        self.log_path = self.log_dir / log_file
        self.app_name = app_name
        self.loggers: Dict[str, logging.Logger] = {}

        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.setup_logger(level)

    def setup_logger(self, level: int = logging.INFO) -> logging.Logger:
        """
        Attach the console and file handlers to the application logger.

        Args:
            level: Logging level (default: INFO)

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(self.app_name)
        logger.setLevel(level)
        logger.propagate = False

        # Prevent duplicate handlers
        if logger.handlers:
            return logger

        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # File handler with rotation, opened in append mode
        file_handler = logging.handlers.RotatingFileHandler(
            self.log_path,
            mode='a',
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a child logger for a specific component.

        Args:
            name: Name of the component

        Returns:
            Logger instance for the component
        """
        full_name = f"{self.app_name}.{name}"

        if full_name not in self.loggers:
            self.loggers[full_name] = logging.getLogger(full_name)

        return self.loggers[full_name]

    def log_system_info(self):
        """Log system information for debugging."""
        logger = self.get_logger('system')

        logger.info(f"Python version: {sys.version.split()[0]}")
        logger.info(f"Platform: {sys.platform}")
        logger.info(f"Working directory: {os.getcwd()}")
        logger.info(f"Log file: {self.log_path.absolute()}")

    def close(self):
        """Detach and close the handlers added by this instance."""
        logger = logging.getLogger(self.app_name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True


# Crawl tiers a gap can come from
SEARCH = "search"
DETAIL = "detail"
DOWNLOAD = "download"


@dataclass
class Gap:
    """One hole in the extracted data, and where in the crawl it came from."""
    id: str
    tier: str
    severity: str            # 'error' | 'warning'
    message: str
    url: str
    article: str = ""        # "<title> <version>" of the affected entry
    file: str = ""           # "<name> [<guid>]" of the affected file
    error_type: str = ""
    timestamp: datetime = None


def describe_article(article: Optional[Article]) -> str:
    return f"{article.title} {article.version}".strip() if article else ""


def describe_file(file: Optional[File]) -> str:
    if not file:
        return ""
    return f"{file.name} [{file.guid}]" if file.guid else file.name


class ErrorTracker:
    """
    Records degraded failures: detail or download pages that could not be
    read, and listing links that could not be followed. Each gap keeps the
    tier it happened in and the entry or file left incomplete.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.gaps: List[Gap] = []

    @property
    def errors(self) -> List[Gap]:
        return [g for g in self.gaps if g.severity == 'error']

    @property
    def warnings(self) -> List[Gap]:
        return [g for g in self.gaps if g.severity == 'warning']

    def _add(self, tier: str, severity: str, message: str, url: str,
             article: Optional[Article], file: Optional[File], error_type: str = "") -> Gap:
        gap = Gap(
            id=f"{tier.upper()}-{len(self.gaps) + 1:04d}",
            tier=tier,
            severity=severity,
            message=message,
            url=url,
            article=describe_article(article),
            file=describe_file(file),
            error_type=error_type,
            timestamp=datetime.now(),
        )
        self.gaps.append(gap)

        subject = gap.file or gap.article
        line = f"[{gap.id}] {tier} page: {message}"
        if subject:
            line += f" ({subject})"
        line += f" (URL: {url})"

        if severity == 'error':
            self.logger.error(line)
        else:
            self.logger.warning(line)
        return gap

    def record_error(self,
                     tier: str,
                     error: Exception,
                     url: str,
                     article: Article = None,
                     file: File = None) -> str:
        """
        Record a page that could not be fetched or parsed.

        Returns:
            ID of the recorded gap
        """
        return self._add(tier, 'error', str(error), url, article, file, type(error).__name__).id

    def record_warning(self,
                       tier: str,
                       message: str,
                       url: str,
                       article: Article = None,
                       file: File = None) -> str:
        """Record a skipped link or element; returns the gap ID."""
        return self._add(tier, 'warning', message, url, article, file).id

    def get_summary(self) -> Dict[str, object]:
        """Counts of errors and warnings, and of gaps per tier and per error type."""
        return {
            'total_errors': len(self.errors),
            'total_warnings': len(self.warnings),
            'by_tier': dict(Counter(g.tier for g in self.gaps)),
            'error_types': dict(Counter(g.error_type for g in self.errors)),
        }

    def save_report(self, output_path: str) -> Optional[str]:
        """
        Write the gaps to a plain-text report, grouped by tier.

        Returns:
            The report path, or None if it could not be written
        """
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write("WINWORLD SCRAPER GAP REPORT\n")
                f.write("=" * 50 + "\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write(f"Errors: {len(self.errors)}  Warnings: {len(self.warnings)}\n")

                for tier in (SEARCH, DETAIL, DOWNLOAD):
                    gaps = [g for g in self.gaps if g.tier == tier]
                    if not gaps:
                        continue
                    f.write(f"\n{tier.upper()} PAGES ({len(gaps)})\n")
                    f.write("-" * 30 + "\n")
                    for gap in gaps:
                        f.write(f"[{gap.id}] {gap.severity} {gap.timestamp:%H:%M:%S}\n")
                        if gap.article:
                            f.write(f"  Article: {gap.article}\n")
                        if gap.file:
                            f.write(f"  File: {gap.file}\n")
                        if gap.error_type:
                            f.write(f"  {gap.error_type}: {gap.message}\n")
                        else:
                            f.write(f"  {gap.message}\n")
                        f.write(f"  URL: {gap.url}\n")

            self.logger.info(f"Gap report saved to: {output_path}")
            return output_path

        except OSError as e:
            self.logger.error(f"Failed to save gap report: {e}")
            return None
