"""Scraper package - page fetch & media stream extraction."""

from backend.scraper.analyzer import analyze_url, validate_url
from backend.scraper.errors import (
    FetchError,
    InputError,
    StreamExtractError,
    StreamNotFoundError,
    error_message,
)
from backend.scraper.extractor import extract_stream
from backend.scraper.fetcher import default_fetcher_config, fetch_page
from backend.scraper.models import ExtractionResult, FetchOutcome, FetcherConfig

__all__ = [
    "analyze_url",
    "validate_url",
    "fetch_page",
    "default_fetcher_config",
    "extract_stream",
    "ExtractionResult",
    "FetchOutcome",
    "FetcherConfig",
    "StreamExtractError",
    "InputError",
    "FetchError",
    "StreamNotFoundError",
    "error_message",
]
