"""
Data model for extracted catalog metadata.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class File:
    """One downloadable artifact of a catalog entry."""
    name: str = ""
    version: str = ""
    language: str = ""
    guid: str = ""            # Download-page path segment, unique per Article
    size: str = ""
    hash: str = ""
    architecture: str = ""
    ipfs_link: str = ""
    mirror_links: List[str] = field(default_factory=list)

    def to_row(self) -> List[str]:
        """Flatten to a CSV row: eight fixed columns, then one per mirror."""
        row = [
            self.name,
            self.version,
            self.language,
            self.guid,
            self.size,
            self.hash,
            self.architecture,
            self.ipfs_link,
        ]
        row.extend(self.mirror_links)
        return row


@dataclass
class Article:
    """One catalog entry at one version grouping."""
    title: str
    version: str
    link: str
    files: List[File] = field(default_factory=list)
