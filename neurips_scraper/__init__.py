"""
NeurIPS Scraper - Concurrent proceedings scraping and PDF download.

This package provides a small pipeline for:
- Discovering the papers of each conference year
- Extracting authors and PDF links from paper pages
- Downloading PDFs on a bounded worker pool with per-paper retry
- Recording one CSV row per paper
"""

__version__ = "0.1.0"
