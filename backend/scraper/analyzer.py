"""Fetch + extract, composed for a single request."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

from backend.scraper.errors import InputError
from backend.scraper.extractor import extract_stream
from backend.scraper.fetcher import fetch_page
from backend.scraper.models import ExtractionResult, FetcherConfig

logger = logging.getLogger(__name__)


def validate_url(url: Optional[str]) -> str:
    """Return *url* stripped, or raise :class:`InputError`.

    Only absolute ``http``/``https`` URLs with a host are accepted.
    """
    if url is None or not str(url).strip():
        raise InputError("URL is required")
    url = str(url).strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InputError(f"Invalid URL: {url}")
    return url


def analyze_url(url: Optional[str], config: Optional[FetcherConfig] = None) -> ExtractionResult:
    """Fetch the page at *url* and extract its media stream.

    Raises:
        InputError: *url* is missing or not an absolute http(s) URL.
        FetchError: The page could not be fetched.
        StreamNotFoundError: The page holds no recognisable stream.
    """
    url = validate_url(url)
    page = fetch_page(url, config)
    result = extract_stream(url, page.final_url, page.html)
    logger.info("[analyze] Found %s stream at %s", result.content_type, result.url)
    return result
