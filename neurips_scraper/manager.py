"""
Scrape manager for orchestrating a proceedings run.

This module provides the ScrapeManager class which walks the configured
years newest first, discovers the papers of each year and runs one
PaperTask per paper on a bounded thread pool. A year only starts once
every task of the previous year has finished.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import requests

from neurips_scraper.config import Config
from neurips_scraper.errors import DirectoryError, FetchError
from neurips_scraper.scrapers.base import PaperRecord
from neurips_scraper.scrapers.downloader import PdfDownloader
from neurips_scraper.scrapers.extractor import PaperPageExtractor
from neurips_scraper.scrapers.fetcher import PageFetcher, build_session
from neurips_scraper.sink import CsvResultSink
from neurips_scraper.task import PaperTask

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """
    Outcome of a scrape run.

    Attributes:
        years_processed: Years whose papers were dispatched.
        years_skipped: Years skipped because the index failed or was empty.
        records_written: Rows appended to the output table.
        pdfs_downloaded: PDFs saved to disk.
        papers_failed: Papers recorded as FAILED.
    """

    years_processed: List[int] = field(default_factory=list)
    years_skipped: List[int] = field(default_factory=list)
    records_written: int = 0
    pdfs_downloaded: int = 0
    papers_failed: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "years_processed": list(self.years_processed),
            "years_skipped": list(self.years_skipped),
            "records_written": self.records_written,
            "pdfs_downloaded": self.pdfs_downloaded,
            "papers_failed": self.papers_failed,
        }


class ScrapeManager:
    """
    Coordinates fetchers, paper tasks and the result sink for a run.

    Typical usage:
        >>> config = Config.from_env()
        >>> with ScrapeManager(config) as manager:
        ...     summary = manager.run()

    Attributes:
        config: Application configuration.
        session: HTTP session shared by the fetcher and downloader.
        fetcher: Page fetcher.
        extractor: Metadata extractor.
        downloader: PDF downloader.
        summary: Counters of the current run.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the scrape manager.

        Args:
            config: Application configuration. If None, loads from environment.
            session: HTTP session to use. If None, one is created.
            sleep: Function used for the retry backoff pause.
        """
        self.config = (config or Config.from_env()).validate()
        scraper = self.config.scraper

        self._owns_session = session is None
        self.session = session or build_session(scraper.user_agent, pool_size=scraper.max_workers)
        self.fetcher = PageFetcher(self.session, default_timeout=scraper.page_timeout)
        self.extractor = PaperPageExtractor(scraper.base_url)
        self.downloader = PdfDownloader(
            self.session,
            timeout=scraper.download_timeout,
            chunk_size=scraper.chunk_size,
        )
        self._sleep = sleep
        self._executor: Optional[ThreadPoolExecutor] = None
        self._sink: Optional[CsvResultSink] = None
        self.summary = RunSummary()

    def _ensure_directory(self, path: Path) -> Path:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryError(path, str(e)) from e
        return path

    def _open(self) -> None:
        if self._sink is None:
            self._ensure_directory(self.config.paths.output_dir)
            self._sink = CsvResultSink(self.config.paths.csv_path)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.scraper.max_workers,
                thread_name_prefix="paper-worker",
            )

    def run(self) -> RunSummary:
        """
        Scrape every configured year, newest first.

        Returns:
            Counters describing the run.

        Raises:
            DirectoryError: If the output root or a year directory cannot be created.
            SinkError: If the output table becomes unwritable.
        """
        self._open()
        logger.info(
            f"Scraping {self.config.scraper.base_url} years "
            f"{self.config.scraper.start_year}-{self.config.scraper.end_year} "
            f"with {self.config.scraper.max_workers} workers"
        )

        for year in self.config.scraper.years():
            self.process_year(year)

        logger.info(f"Data successfully written to {self.config.paths.csv_path}")
        logger.info(f"Run complete: {self.summary.to_dict()}")
        return self.summary

    def process_year(self, year: int) -> List[PaperRecord]:
        """
        Scrape every paper of one year and wait for all of them.

        Args:
            year: Conference year.

        Returns:
            Records written for the year; empty when the year was skipped.

        Raises:
            DirectoryError: If the year directory cannot be created.
            SinkError: If a task could not write its record.
        """
        self._open()
        year_dir = self._ensure_directory(self.config.paths.year_dir(year))
        year_url = self.config.scraper.year_url(year)

        logger.info(f"Fetching papers from: {year_url}")
        try:
            year_doc = self.fetcher.fetch(year_url, timeout=self.config.scraper.index_timeout)
        except FetchError as e:
            logger.error(f"Failed to fetch URL: {year_url}: {e}")
            self.summary.years_skipped.append(year)
            return []

        listings = self.extractor.extract_paper_links(year_doc)
        if not listings:
            logger.error(f"No paper links found on page: {year_url}")
            self.summary.years_skipped.append(year)
            return []

        logger.info(f"Found {len(listings)} papers for {year}")
        tasks = [
            PaperTask(
                listing,
                year,
                year_dir,
                fetcher=self.fetcher,
                extractor=self.extractor,
                downloader=self.downloader,
                sink=self._sink,
                retry=self.config.retry,
                page_timeout=self.config.scraper.page_timeout,
                sleep=self._sleep,
            )
            for listing in listings
        ]
        futures: List[Future] = [self._executor.submit(task.run) for task in tasks]
        wait(futures)

        records: List[PaperRecord] = []
        for task, future in zip(tasks, futures):
            # Re-raises SinkError from the worker
            record = future.result()
            records.append(record)
            if record.has_pdf:
                self.summary.pdfs_downloaded += 1
            if task.failed:
                self.summary.papers_failed += 1

        self.summary.records_written += len(records)
        self.summary.years_processed.append(year)
        logger.info(f"Completed processing year: {year}")
        return records

    def close(self) -> None:
        """Shut down the worker pool, the sink and the HTTP session."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._sink is not None:
            self._sink.close()
            self._sink = None
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
