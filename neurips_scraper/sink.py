"""
CSV output table shared by all paper workers.

Rows are appended under a lock and flushed one by one, so concurrent
workers never interleave partial lines and a crash loses at most the row
being written.
"""

from __future__ import annotations

import csv
import logging
import threading
from pathlib import Path
from typing import IO, Optional, Union

from neurips_scraper.errors import SinkError
from neurips_scraper.scrapers.base import CSV_HEADER, PaperRecord

logger = logging.getLogger(__name__)


class CsvResultSink:
    """
    Synchronized append-only writer for the output table.

    The file is opened in append mode. The header row is written only when
    the file is new or empty, so a re-run adds its rows after the previous
    ones.

    Typical usage:
        >>> with CsvResultSink(Path("data/NeurIPS_Papers/output.csv")) as sink:
        ...     sink.append(record)

    Attributes:
        path: Location of the CSV file.
        count: Number of rows appended through this sink.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Open the output table.

        Args:
            path: Location of the CSV file. Its directory must exist.

        Raises:
            SinkError: If the file cannot be opened or the header written.
        """
        self.path = Path(path)
        self.count = 0
        self._lock = threading.Lock()
        self._fh: Optional[IO[str]] = None

        try:
            write_header = not self.path.exists() or self.path.stat().st_size == 0
            self._fh = self.path.open("a", newline="", encoding="utf-8")
            if write_header:
                csv.writer(self._fh, lineterminator="\n").writerow(CSV_HEADER)
                self._fh.flush()
        except OSError as e:
            raise SinkError(self.path, str(e)) from e

        # Strings quoted, the year left bare
        self._writer = csv.writer(self._fh, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
        logger.info(f"Writing results to {self.path}")

    @property
    def closed(self) -> bool:
        return self._fh is None or self._fh.closed

    def append(self, record: PaperRecord) -> None:
        """
        Write one record as a CSV row and flush it.

        Safe to call from many threads at once.

        Args:
            record: The record to write.

        Raises:
            SinkError: If the sink is closed or the write fails.
        """
        with self._lock:
            if self.closed:
                raise SinkError(self.path, "sink is closed")
            try:
                self._writer.writerow(record.to_row())
                self._fh.flush()
            except (OSError, csv.Error) as e:
                raise SinkError(self.path, str(e)) from e
            self.count += 1

    def close(self) -> None:
        """Close the underlying file. Calling it again is a no-op."""
        with self._lock:
            if self._fh is not None and not self._fh.closed:
                self._fh.close()
                logger.info(f"Closed {self.path} after {self.count} rows")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
