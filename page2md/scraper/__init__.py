"""Scraper package: fetch, normalise and select page content."""

from page2md.scraper.extractor import extract_page
from page2md.scraper.fetcher import (
    FetchOptions,
    fetch_page,
    fetch_url,
    load_file,
    parse_fetch_options,
)
from page2md.scraper.models import RawPage, SelectedPage

__all__ = [
    "FetchOptions",
    "RawPage",
    "SelectedPage",
    "extract_page",
    "fetch_page",
    "fetch_url",
    "load_file",
    "parse_fetch_options",
]
