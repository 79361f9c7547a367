"""
Scraping components for the proceedings website.

This module groups the page fetcher, the metadata extractor and the PDF
downloader, along with the data model they exchange.
"""

from neurips_scraper.scrapers.base import (
    CSV_HEADER,
    PDF_FAILED,
    PDF_NOT_FOUND,
    DownloadTarget,
    PaperListing,
    PaperRecord,
    sanitize_title,
)
from neurips_scraper.scrapers.downloader import PdfDownloader
from neurips_scraper.scrapers.extractor import PaperPageExtractor
from neurips_scraper.scrapers.fetcher import PageFetcher, build_session

__all__ = [
    "CSV_HEADER",
    "PDF_FAILED",
    "PDF_NOT_FOUND",
    "DownloadTarget",
    "PaperListing",
    "PaperRecord",
    "sanitize_title",
    "PdfDownloader",
    "PaperPageExtractor",
    "PageFetcher",
    "build_session",
]
