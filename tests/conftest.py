"""
pytest configuration and fixtures for scraper tests.

This module provides shared fixtures for all test modules.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from neurips_scraper.config import Config, LogConfig, PathConfig, RetryConfig, ScraperConfig
from neurips_scraper.scrapers.extractor import PaperPageExtractor

from tests.test_utils import BASE_URL, FakeSession, cleanup_test_env, setup_test_env


@pytest.fixture(scope="session", autouse=True)
def test_env_guard():
    """
    Isolate the tests from the developer's environment.

    Removes SCRAPER_* and LOG_* variables for the whole session and points
    the log directory at a temporary location.
    """
    removed = setup_test_env()
    with tempfile.TemporaryDirectory() as log_dir:
        os.environ["LOG_DIR"] = log_dir
        yield
        del os.environ["LOG_DIR"]
    cleanup_test_env(removed)


@pytest.fixture(scope="function")
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="function")
def config(temp_dir):
    """Create a test configuration writing into temp_dir."""
    return Config(
        scraper=ScraperConfig(base_url=BASE_URL, start_year=2023, end_year=2023, max_workers=4),
        retry=RetryConfig(max_attempts=3, backoff_seconds=10.0),
        paths=PathConfig(output_dir=temp_dir / "NeurIPS_Papers"),
        log=LogConfig(log_dir=temp_dir / "logs", console_output=False),
    )


@pytest.fixture(scope="function")
def fake_session():
    """Create an empty fake HTTP session; tests add routes."""
    return FakeSession()


@pytest.fixture(scope="function")
def extractor():
    """Create an extractor for the proceedings site."""
    return PaperPageExtractor(BASE_URL)


@pytest.fixture(scope="function")
def no_sleep():
    """A sleep replacement that records the requested pauses."""
    return Mock(return_value=None)
