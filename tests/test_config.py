"""
Unit tests for configuration loading and the command-line interface.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from neurips_scraper import cli
from neurips_scraper.config import Config, LogConfig, RetryConfig, ScraperConfig
from neurips_scraper.errors import ConfigError, DirectoryError
from neurips_scraper.logging_config import setup_logging
from neurips_scraper.manager import RunSummary


class TestConfig:
    """Tests for the configuration dataclasses."""

    def test_defaults(self):
        """Environment-free defaults match the proceedings site."""
        config = Config.from_env()

        assert config.scraper.base_url == "https://papers.nips.cc"
        assert list(config.scraper.years()) == [2023, 2022, 2021, 2020, 2019]
        assert config.scraper.max_workers == 50
        assert config.scraper.page_timeout == 60.0
        assert config.retry.max_attempts == 3
        assert config.retry.backoff_seconds == 10.0
        assert config.paths.csv_path == Path("data/NeurIPS_Papers/output.csv")

    def test_from_env(self, monkeypatch, tmp_path):
        """Every scraper setting can come from the environment."""
        monkeypatch.setenv("SCRAPER_BASE_URL", "https://proceedings.example.org/")
        monkeypatch.setenv("SCRAPER_START_YEAR", "2021")
        monkeypatch.setenv("SCRAPER_END_YEAR", "2020")
        monkeypatch.setenv("SCRAPER_MAX_WORKERS", "8")
        monkeypatch.setenv("SCRAPER_INDEX_TIMEOUT", "")
        monkeypatch.setenv("SCRAPER_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("SCRAPER_BACKOFF_SECONDS", "2.5")
        monkeypatch.setenv("SCRAPER_OUTPUT_DIR", str(tmp_path / "out"))

        config = Config.from_env()

        assert config.scraper.base_url == "https://proceedings.example.org"
        assert config.scraper.year_url(2021) == "https://proceedings.example.org/paper_files/paper/2021"
        assert list(config.scraper.years()) == [2021, 2020]
        assert config.scraper.max_workers == 8
        assert config.scraper.index_timeout is None
        assert config.retry == RetryConfig(max_attempts=5, backoff_seconds=2.5)
        assert config.paths.year_dir(2020) == tmp_path / "out" / "2020"
        assert not (tmp_path / "out").exists()

    @pytest.mark.parametrize(
        "bad_config",
        [
            Config(scraper=ScraperConfig(max_workers=0)),
            Config(retry=RetryConfig(max_attempts=0)),
            Config(retry=RetryConfig(backoff_seconds=-1)),
            Config(scraper=ScraperConfig(start_year=2019, end_year=2023)),
            Config(scraper=ScraperConfig(chunk_size=0)),
        ],
    )
    def test_validate_rejects(self, bad_config):
        """Out-of-range values raise ConfigError."""
        with pytest.raises(ConfigError):
            bad_config.validate()

    def test_validate_single_year(self):
        """A range of one year is valid."""
        config = Config(scraper=ScraperConfig(start_year=2020, end_year=2020))
        assert config.validate() is config
        assert list(config.scraper.years()) == [2020]


class TestCli:
    """Tests for the command-line entrypoint."""

    def test_apply_overrides(self, tmp_path):
        """Given flags replace configured values; missing ones keep them."""
        args = cli.parse_args([
            "--start-year", "2022",
            "--end-year", "2021",
            "--output-dir", str(tmp_path),
            "--workers", "10",
            "--backoff", "0",
            "--base-url", "https://mirror.example.org/",
        ])
        config = cli.apply_overrides(Config(), args)

        assert config.scraper.start_year == 2022
        assert config.scraper.end_year == 2021
        assert config.paths.output_dir == tmp_path
        assert config.scraper.max_workers == 10
        assert config.retry.backoff_seconds == 0
        assert config.retry.max_attempts == 3
        assert config.scraper.base_url == "https://mirror.example.org"

    @patch("neurips_scraper.cli.setup_logging")
    @patch("neurips_scraper.cli.ScrapeManager")
    def test_main_success(self, mock_manager_class, mock_setup_logging, tmp_path):
        """A completed run exits with 0."""
        mock_manager = mock_manager_class.return_value.__enter__.return_value
        mock_manager.run.return_value = RunSummary(years_processed=[2023])

        assert cli.main(["--output-dir", str(tmp_path), "--log-level", "DEBUG"]) == 0

        config = mock_manager_class.call_args.args[0]
        assert config.paths.output_dir == tmp_path
        mock_setup_logging.assert_called_once_with(config.log, log_level_override="DEBUG")

    @patch("neurips_scraper.cli.setup_logging")
    @patch("neurips_scraper.cli.ScrapeManager")
    def test_main_directory_error(self, mock_manager_class, mock_setup_logging, tmp_path):
        """A fatal directory error exits with 1."""
        mock_manager = mock_manager_class.return_value.__enter__.return_value
        mock_manager.run.side_effect = DirectoryError(tmp_path / "x", "permission denied")

        assert cli.main([]) == 1

    @patch("neurips_scraper.cli.setup_logging")
    def test_main_invalid_config(self, mock_setup_logging):
        """Invalid flags exit with 1 before any request."""
        assert cli.main(["--workers", "0"]) == 1


class TestLogging:
    """Tests for setup_logging."""

    def test_setup_logging_writes_file(self, tmp_path):
        """Records reach the rotating log file at the overridden level."""
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        log_config = LogConfig(log_dir=tmp_path / "logs", log_file="scraper.log", console_output=False)
        try:
            setup_logging(log_config, log_level_override="debug")
            logging.getLogger("neurips_scraper.test").debug("sample message")
            for handler in root.handlers:
                handler.flush()

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert "sample message" in (tmp_path / "logs" / "scraper.log").read_text(encoding="utf-8")
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
