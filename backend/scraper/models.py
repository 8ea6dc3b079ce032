"""Data models for the stream-extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

HLS_CONTENT_TYPE = "application/x-mpegURL"
WEBM_CONTENT_TYPE = "video/webm"
MP4_CONTENT_TYPE = "video/mp4"


@dataclass(frozen=True)
class FetcherConfig:
    """Fixed request parameters handed to :func:`fetch_page`."""

    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 15.0
    max_redirects: int = 5
    # Final responses at or above this status are treated as failures.
    error_status_threshold: int = 400


@dataclass(frozen=True)
class FetchOutcome:
    """The page body after redirects have been followed."""

    final_url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class ExtractionResult:
    """A discovered media stream plus display metadata for its page."""

    url: str
    content_type: str
    title: Optional[str] = None
    description: Optional[str] = None
    site_name: Optional[str] = None
    poster: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire representation used by the HTTP API."""
        return {
            "url": self.url,
            "contentType": self.content_type,
            "title": self.title,
            "description": self.description,
            "siteName": self.site_name,
            "poster": self.poster,
        }
