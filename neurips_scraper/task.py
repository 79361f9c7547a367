"""
Per-paper scraping task.

A PaperTask fetches one paper page, extracts its authors and PDF link,
downloads the PDF and appends exactly one row to the result sink. Fetch
and extraction failures are retried after a fixed pause; once every
attempt has failed the task records the paper with the FAILED marker.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from neurips_scraper.config import RetryConfig
from neurips_scraper.errors import DownloadError, ExtractError, FetchError
from neurips_scraper.scrapers.base import (
    PDF_FAILED,
    PDF_NOT_FOUND,
    DownloadTarget,
    PaperListing,
    PaperRecord,
)
from neurips_scraper.scrapers.downloader import PdfDownloader
from neurips_scraper.scrapers.extractor import PaperPageExtractor
from neurips_scraper.scrapers.fetcher import PageFetcher
from neurips_scraper.sink import CsvResultSink

logger = logging.getLogger(__name__)


class TaskState(Enum):
    """
    Lifecycle of a paper task.

    RETRYING leads back to FETCHING until the attempts run out.
    """

    PENDING = "pending"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    DOWNLOADING = "downloading"
    RECORDING = "recording"
    RETRYING = "retrying"
    DONE = "done"


class PaperTask:
    """
    Scrapes one paper listing into one output row.

    Typical usage:
        >>> task = PaperTask(listing, 2023, year_dir, fetcher, extractor, downloader, sink)
        >>> record = task.run()

    Attributes:
        listing: The paper to scrape.
        year: Conference year of the listing.
        year_dir: Directory the PDF is saved to.
        state: Current TaskState.
        attempts: Number of fetch attempts made so far.
        downloaded_path: Path of the saved PDF, if any.
    """

    def __init__(
        self,
        listing: PaperListing,
        year: int,
        year_dir: Path,
        fetcher: PageFetcher,
        extractor: PaperPageExtractor,
        downloader: PdfDownloader,
        sink: CsvResultSink,
        retry: Optional[RetryConfig] = None,
        page_timeout: Optional[float] = 60.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.listing = listing
        self.year = year
        self.year_dir = Path(year_dir)
        self.fetcher = fetcher
        self.extractor = extractor
        self.downloader = downloader
        self.sink = sink
        self.retry = retry or RetryConfig()
        self.page_timeout = page_timeout
        self._sleep = sleep

        self.state = TaskState.PENDING
        self.attempts = 0
        self.downloaded_path: Optional[Path] = None
        self.record: Optional[PaperRecord] = None

    def _transition(self, state: TaskState) -> None:
        logger.debug(f"{self.listing.title}: {self.state.value} -> {state.value}")
        self.state = state

    @property
    def failed(self) -> bool:
        """True once the task recorded the paper as FAILED."""
        return self.record is not None and self.record.pdf_url == PDF_FAILED

    def run(self) -> PaperRecord:
        """
        Run the task to completion.

        Returns:
            The record appended to the sink.

        Raises:
            SinkError: If the record cannot be written.
        """
        record = None
        while record is None:
            self.attempts += 1
            try:
                record = self._attempt()
            except (FetchError, ExtractError) as e:
                logger.error(
                    f"Error processing paper: {self.listing.title} "
                    f"(Attempt {self.attempts} of {self.retry.max_attempts}): {e}"
                )
                if self.attempts >= self.retry.max_attempts:
                    logger.error(
                        f"Failed to process paper after {self.attempts} attempts: {self.listing.title}"
                    )
                    record = PaperRecord.failed(self.year, self.listing)
                    break
                self._transition(TaskState.RETRYING)
                self._sleep(self.retry.backoff_seconds)
                logger.info(f"Retrying paper: {self.listing.title} ({self.listing.page_url})")

        self._transition(TaskState.RECORDING)
        self.sink.append(record)
        self.record = record
        self._transition(TaskState.DONE)
        return record

    def _attempt(self) -> PaperRecord:
        self.downloaded_path = None
        self._transition(TaskState.FETCHING)
        doc = self.fetcher.fetch(self.listing.page_url, timeout=self.page_timeout)

        self._transition(TaskState.EXTRACTING)
        try:
            authors = self.extractor.extract_authors(doc)
            pdf_url = self.extractor.extract_pdf_link(doc)
        except Exception as e:
            raise ExtractError(self.listing.page_url, str(e)) from e

        if not authors:
            logger.info(f"No authors found for: {self.listing.title}")

        target = DownloadTarget.for_paper(self.listing.title, pdf_url, self.year_dir)
        if target is None:
            logger.info(f"No PDF link found for: {self.listing.title}")
            pdf_url = PDF_NOT_FOUND
        else:
            self._transition(TaskState.DOWNLOADING)
            logger.info(f"Downloading PDF: {target.url}")
            try:
                self.downloaded_path = self.downloader.download(target.url, target.destination_path)
            except DownloadError as e:
                logger.error(f"Failed to download: {target.url}: {e}")
                pdf_url = PDF_NOT_FOUND

        return PaperRecord(
            year=self.year,
            title=self.listing.title,
            authors=authors,
            page_url=self.listing.page_url,
            pdf_url=pdf_url,
        )
