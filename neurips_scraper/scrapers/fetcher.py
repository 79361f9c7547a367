"""
HTTP page fetcher.

Fetches a page with a shared requests session and parses it with
BeautifulSoup. Retrying is left to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter

from neurips_scraper.errors import FetchError

logger = logging.getLogger(__name__)


def build_session(user_agent: str, pool_size: int = 10) -> requests.Session:
    """
    Create the HTTP session shared by the fetcher and the downloader.

    pool_size should be at least the number of worker threads, otherwise
    connections beyond the pool are opened and discarded per request.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class PageFetcher:
    """
    Fetches HTML pages and returns parsed documents.

    Typical usage:
        >>> fetcher = PageFetcher(build_session("NeurIPSScraper/1.0"))
        >>> doc = fetcher.fetch("https://papers.nips.cc/paper_files/paper/2023", timeout=30)

    Attributes:
        session: requests session used for every GET.
        default_timeout: Timeout applied when fetch() gets none.
    """

    def __init__(self, session: requests.Session, default_timeout: Optional[float] = None):
        """
        Initialize the fetcher.

        Args:
            session: Session for connection pooling.
            default_timeout: Timeout in seconds used when none is passed.
        """
        self.session = session
        self.default_timeout = default_timeout

    def fetch(self, url: str, timeout: Optional[float] = None) -> BeautifulSoup:
        """
        Fetch a page and parse it.

        Args:
            url: URL to fetch.
            timeout: Timeout in seconds; falls back to default_timeout.

        Returns:
            Parsed document.

        Raises:
            FetchError: On connection failure, timeout or a non-2xx response.
        """
        effective_timeout = timeout if timeout is not None else self.default_timeout
        logger.debug(f"GET {url} (timeout={effective_timeout})")
        try:
            response = self.session.get(url, timeout=effective_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        return BeautifulSoup(response.text, "html.parser")
