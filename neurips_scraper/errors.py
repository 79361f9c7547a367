"""
Exception hierarchy for the NeurIPS scraper.

Fetch and extract failures are retried per paper, download failures are
recorded as a missing PDF, and directory or sink failures abort the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ScraperError(Exception):
    """Base class for all scraper errors."""


class ConfigError(ScraperError):
    """Raised when configuration values cannot drive a run."""


class FetchError(ScraperError):
    """
    Raised when a page cannot be fetched.

    Covers connection failures, timeouts and non-2xx responses.

    Attributes:
        url: The URL that failed.
    """

    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ExtractError(ScraperError):
    """Raised when a fetched document has an unusable shape."""

    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        message = f"Failed to extract data from {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DownloadError(ScraperError):
    """
    Raised when a PDF cannot be streamed to disk.

    Attributes:
        url: The PDF URL.
        path: The destination path.
    """

    def __init__(self, url: str, path: Union[str, Path], reason: Optional[str] = None):
        self.url = url
        self.path = Path(path)
        self.reason = reason
        message = f"Failed to download {url} to {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DirectoryError(ScraperError):
    """Raised when a required output directory cannot be created."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot create directory {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SinkError(ScraperError):
    """Raised when the output table can no longer be written."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot write output table {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
