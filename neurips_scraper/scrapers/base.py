"""
Data model shared by the scraping components.

PaperListing objects come out of a year-index page, PaperRecord objects
go into the output table, and DownloadTarget ties a record to the file
its PDF is saved to.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Sentinel written to the PDF column when no PDF was saved
PDF_NOT_FOUND = "N/A"
# Sentinel written to the PDF column when every attempt failed
PDF_FAILED = "FAILED"

# Longest file stem written, leaving room for ".pdf" under a 255-byte name limit
MAX_STEM_LENGTH = 200

CSV_HEADER = ["Year", "Title", "Authors", "Paper Link", "PDF Link"]


def sanitize_title(title: str) -> str:
    """
    Turn a paper title into a filesystem-safe file stem.

    Every character outside [a-zA-Z0-9] is replaced with an underscore and
    the result is cut to MAX_STEM_LENGTH characters.

    Examples:
        >>> sanitize_title("Attention: Is All You Need?")
        'Attention__Is_All_You_Need_'
    """
    return re.sub(r"[^a-zA-Z0-9]", "_", title)[:MAX_STEM_LENGTH]


@dataclass(frozen=True)
class PaperListing:
    """
    A paper link discovered on a year-index page.

    Attributes:
        title: Trimmed anchor text.
        page_url: Absolute URL of the paper page.
    """

    title: str
    page_url: str


@dataclass(frozen=True)
class PaperRecord:
    """
    One row of the output table.

    Attributes:
        year: Conference year the paper was listed under.
        title: Paper title as shown on the year-index page.
        authors: Space-terminated author names, possibly empty.
        page_url: Absolute URL of the paper page.
        pdf_url: Resolved PDF URL, PDF_NOT_FOUND or PDF_FAILED.
    """

    year: int
    title: str
    authors: str
    page_url: str
    pdf_url: str

    @classmethod
    def failed(cls, year: int, listing: PaperListing) -> "PaperRecord":
        """Build the record emitted once every attempt for a listing failed."""
        return cls(
            year=year,
            title=listing.title,
            authors="",
            page_url=listing.page_url,
            pdf_url=PDF_FAILED,
        )

    @property
    def has_pdf(self) -> bool:
        return self.pdf_url not in (PDF_NOT_FOUND, PDF_FAILED)

    def to_row(self) -> List[object]:
        """Return the values in output table column order."""
        return [self.year, self.title, self.authors, self.page_url, self.pdf_url]


@dataclass(frozen=True)
class DownloadTarget:
    """
    Where a PDF is fetched from and saved to.

    Attributes:
        url: Resolved PDF URL.
        destination_path: <root>/<year>/<sanitized-title>.pdf
    """

    url: str
    destination_path: Path

    @classmethod
    def for_paper(cls, title: str, pdf_url: Optional[str], year_dir: Path) -> Optional["DownloadTarget"]:
        """
        Build the target for a paper, or None when it has no PDF link.

        Args:
            title: Paper title used for the file name.
            pdf_url: Resolved PDF URL, if any.
            year_dir: Directory of the paper's year.
        """
        if not pdf_url or pdf_url in (PDF_NOT_FOUND, PDF_FAILED):
            return None
        return cls(url=pdf_url, destination_path=Path(year_dir) / f"{sanitize_title(title)}.pdf")
