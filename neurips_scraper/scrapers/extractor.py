"""
Extraction of paper metadata from proceedings pages.

The proceedings site lists papers as anchors inside ``ul.paper-list``; a
paper page shows its authors in ``<i>`` elements and links its PDF with an
anchor ending in ``.pdf``.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from neurips_scraper.scrapers.base import PaperListing

logger = logging.getLogger(__name__)


class PaperPageExtractor:
    """
    Pulls paper listings, authors and PDF links out of parsed pages.

    Relative links are resolved against base_url.

    Typical usage:
        >>> extractor = PaperPageExtractor("https://papers.nips.cc")
        >>> listings = extractor.extract_paper_links(year_doc)
        >>> authors = extractor.extract_authors(paper_doc)
        >>> pdf_url = extractor.extract_pdf_link(paper_doc)
    """

    PAPER_LINK_SELECTOR = "ul.paper-list li a"
    AUTHOR_SELECTOR = "i"
    PDF_LINK_SELECTOR = 'a[href$=".pdf"]'

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/") + "/"

    def _resolve(self, href: str) -> str:
        return urljoin(self.base_url, href)

    def extract_paper_links(self, doc: BeautifulSoup) -> List[PaperListing]:
        """
        Collect the paper links of a year-index page.

        Args:
            doc: Parsed year-index page.

        Returns:
            One PaperListing per anchor, in page order. Empty if the page
            has no paper list.
        """
        listings: List[PaperListing] = []
        for anchor in doc.select(self.PAPER_LINK_SELECTOR):
            href = anchor.get("href")
            if not href:
                continue
            listings.append(
                PaperListing(
                    title=anchor.get_text().strip(),
                    page_url=self._resolve(href),
                )
            )
        logger.debug(f"Extracted {len(listings)} paper links")
        return listings

    def extract_authors(self, doc: BeautifulSoup) -> str:
        """
        Concatenate the text of every italic element on a paper page.

        Each name is followed by a single space. Unrelated italic text on
        the page ends up in the result too.

        Args:
            doc: Parsed paper page.

        Returns:
            Author string, or "" if the page has no italic elements.
        """
        return "".join(f"{element.get_text()} " for element in doc.select(self.AUTHOR_SELECTOR))

    def extract_pdf_link(self, doc: BeautifulSoup) -> Optional[str]:
        """
        Find the first link to a PDF on a paper page.

        Args:
            doc: Parsed paper page.

        Returns:
            Absolute PDF URL, or None if the page links no PDF.
        """
        anchor = doc.select_one(self.PDF_LINK_SELECTOR)
        if anchor is None:
            return None
        return self._resolve(anchor["href"])
