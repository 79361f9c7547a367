"""
Streaming PDF downloader.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Optional, Union

import requests

from neurips_scraper.errors import DownloadError

logger = logging.getLogger(__name__)


class PdfDownloader:
    """
    Streams a remote file to a local path.

    Attributes:
        session: requests session used for the download.
        timeout: Connect/read timeout in seconds.
        chunk_size: Number of bytes copied per write.
    """

    def __init__(
        self,
        session: requests.Session,
        timeout: Optional[float] = 60.0,
        chunk_size: int = 8192,
    ):
        self.session = session
        self.timeout = timeout
        self.chunk_size = chunk_size

    def download(self, url: str, dest_path: Union[str, Path]) -> Path:
        """
        Download url into dest_path, overwriting any existing file.

        The parent directory must already exist. A partially written file
        is removed when the transfer fails; a file left by an earlier run
        is kept when the request itself fails.

        Args:
            url: URL of the file.
            dest_path: Destination file path.

        Returns:
            Path to the written file.

        Raises:
            DownloadError: On any network or I/O failure.
        """
        dest_path = Path(dest_path)
        logger.debug(f"Downloading {url} to {dest_path}")

        opened = False
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(dest_path, "wb") as fh:
                    opened = True
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            fh.write(chunk)
        except (requests.RequestException, OSError) as e:
            # Only a file this call created is removed
            if opened:
                with contextlib.suppress(OSError):
                    dest_path.unlink()
            raise DownloadError(url, dest_path, str(e)) from e

        size_mb = dest_path.stat().st_size / (1024 * 1024)
        logger.info(f"Downloaded: {dest_path} ({size_mb:.2f} MB)")
        return dest_path
