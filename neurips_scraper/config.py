"""
Configuration management for the NeurIPS scraper.

This module provides centralized configuration management using environment
variables and python-dotenv. Every tunable of the scraping pipeline (year
range, worker pool size, retry policy, timeouts and output location) can be
set from the environment or a .env file.

Environment variables are loaded from .env file or system environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from dotenv import load_dotenv

from neurips_scraper.errors import ConfigError

# Load environment variables from .env file if present
load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass
class ScraperConfig:
    """
    Configuration for the proceedings site and the worker pool.

    Attributes:
        base_url: Root URL of the proceedings website.
        start_year: Newest year to scrape (processed first).
        end_year: Oldest year to scrape (processed last).
        max_workers: Capacity of the paper worker pool.
        page_timeout: Timeout in seconds for paper page requests.
        index_timeout: Timeout in seconds for year-index requests.
        download_timeout: Timeout in seconds for PDF downloads.
        chunk_size: Buffer size used when streaming PDFs to disk.
        user_agent: User-Agent header sent with every request.
    """

    base_url: str = "https://papers.nips.cc"
    start_year: int = 2023
    end_year: int = 2019
    max_workers: int = 50
    page_timeout: float = 60.0
    index_timeout: Optional[float] = 30.0
    download_timeout: float = 60.0
    chunk_size: int = 8192
    user_agent: str = "Mozilla/5.0 (compatible; NeurIPSScraper/1.0)"

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """
        Create ScraperConfig from environment variables.

        Returns:
            A configured ScraperConfig instance.

        Examples:
            >>> config = ScraperConfig.from_env()
            >>> config.base_url
            'https://papers.nips.cc'
        """
        return cls(
            base_url=os.getenv("SCRAPER_BASE_URL", "https://papers.nips.cc").rstrip("/"),
            start_year=int(os.getenv("SCRAPER_START_YEAR", "2023")),
            end_year=int(os.getenv("SCRAPER_END_YEAR", "2019")),
            max_workers=int(os.getenv("SCRAPER_MAX_WORKERS", "50")),
            page_timeout=float(os.getenv("SCRAPER_PAGE_TIMEOUT", "60")),
            index_timeout=_optional_float(os.getenv("SCRAPER_INDEX_TIMEOUT", "30")),
            download_timeout=float(os.getenv("SCRAPER_DOWNLOAD_TIMEOUT", "60")),
            chunk_size=int(os.getenv("SCRAPER_CHUNK_SIZE", "8192")),
            user_agent=os.getenv(
                "SCRAPER_USER_AGENT",
                "Mozilla/5.0 (compatible; NeurIPSScraper/1.0)",
            ),
        )

    def years(self) -> Iterator[int]:
        """
        Iterate over the configured years, newest first.

        Examples:
            >>> list(ScraperConfig(start_year=2023, end_year=2021).years())
            [2023, 2022, 2021]
        """
        return iter(range(self.start_year, self.end_year - 1, -1))

    def year_url(self, year: int) -> str:
        """Return the year-index URL for a given year."""
        return f"{self.base_url}/paper_files/paper/{year}"


@dataclass
class RetryConfig:
    """
    Configuration for per-paper retries.

    Attributes:
        max_attempts: Total attempts per paper, including the first one.
        backoff_seconds: Fixed pause before every re-attempt.
    """

    max_attempts: int = 3
    backoff_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "RetryConfig":
        """
        Create RetryConfig from environment variables.

        Returns:
            A configured RetryConfig instance.
        """
        return cls(
            max_attempts=int(os.getenv("SCRAPER_MAX_ATTEMPTS", "3")),
            backoff_seconds=float(os.getenv("SCRAPER_BACKOFF_SECONDS", "10")),
        )


@dataclass
class PathConfig:
    """
    Configuration for output locations.

    Directories are not created here; the scrape manager creates them
    before any work starts so that failures surface as DirectoryError.

    Attributes:
        output_dir: Root directory for the CSV table and year folders.
        csv_name: File name of the output table inside output_dir.
    """

    output_dir: Path = field(default_factory=lambda: Path("data/NeurIPS_Papers"))
    csv_name: str = "output.csv"

    @classmethod
    def from_env(cls) -> "PathConfig":
        """
        Create PathConfig from environment variables.

        Returns:
            A configured PathConfig instance.
        """
        return cls(
            output_dir=Path(os.getenv("SCRAPER_OUTPUT_DIR", "data/NeurIPS_Papers")),
            csv_name=os.getenv("SCRAPER_CSV_NAME", "output.csv"),
        )

    @property
    def csv_path(self) -> Path:
        return self.output_dir / self.csv_name

    def year_dir(self, year: int) -> Path:
        return self.output_dir / str(year)


@dataclass
class LogConfig:
    """
    Configuration for application logging.

    Controls logging behavior including log level, output format,
    and file rotation settings.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        log_file: Name of the log file.
        max_bytes: Maximum size of a single log file before rotation.
        backup_count: Number of backup log files to keep.
        format_string: Log message format string.
        date_format: Date format for log timestamps.
        console_output: Whether to also output logs to console.
    """

    level: str = "INFO"
    log_dir: Path = field(default_factory=lambda: Path("data/logs"))
    log_file: str = "neurips_scraper.log"
    max_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_output: bool = True

    @classmethod
    def from_env(cls) -> "LogConfig":
        """
        Create LogConfig from environment variables.

        Creates log directory if it doesn't exist.

        Returns:
            A configured LogConfig instance.
        """
        log_dir = Path(os.getenv("LOG_DIR", "data/logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=log_dir,
            log_file=os.getenv("LOG_FILE", "neurips_scraper.log"),
            max_bytes=int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),  # 10 MB
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            format_string=os.getenv(
                "LOG_FORMAT",
                "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s",
            ),
            date_format=os.getenv("LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S"),
            console_output=os.getenv("LOG_CONSOLE_OUTPUT", "true").lower() == "true",
        )


@dataclass
class Config:
    """
    Main configuration container for the scraper.

    This class aggregates all sub-configurations into a single convenient
    interface. It's typically created once at application startup using
    the from_env() class method.

    Attributes:
        scraper: Site, year range, pool size and timeouts.
        retry: Per-paper retry policy.
        paths: Output locations.
        log: Logging configuration.
    """

    scraper: ScraperConfig = field(default_factory=ScraperConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    paths: PathConfig = field(default_factory=PathConfig)
    log: LogConfig = field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config from environment variables.

        Returns:
            A fully configured Config instance.

        Examples:
            >>> config = Config.from_env()
            >>> config.retry.max_attempts
            3
        """
        return cls(
            scraper=ScraperConfig.from_env(),
            retry=RetryConfig.from_env(),
            paths=PathConfig.from_env(),
            log=LogConfig.from_env(),
        )

    def validate(self) -> "Config":
        """
        Check that the configured values can drive a run.

        Returns:
            The same Config instance, for chaining.

        Raises:
            ConfigError: If a value is out of range.
        """
        if self.scraper.max_workers < 1:
            raise ConfigError(f"max_workers must be positive, got {self.scraper.max_workers}")
        if self.retry.max_attempts < 1:
            raise ConfigError(f"max_attempts must be positive, got {self.retry.max_attempts}")
        if self.retry.backoff_seconds < 0:
            raise ConfigError(f"backoff_seconds must not be negative, got {self.retry.backoff_seconds}")
        if self.scraper.start_year < self.scraper.end_year:
            raise ConfigError(
                f"start_year ({self.scraper.start_year}) must not be earlier "
                f"than end_year ({self.scraper.end_year})"
            )
        if self.scraper.chunk_size < 1:
            raise ConfigError(f"chunk_size must be positive, got {self.scraper.chunk_size}")
        return self
