"""Stream discovery: turns a fetched page into an :class:`ExtractionResult`.

Discovery runs an ordered list of strategies and stops at the first one
that yields a candidate URL:

1. social player tags (``og:video:secure_url``, ``og:video``,
   ``twitter:player:stream``)
2. native ``<video>`` / ``<video><source>`` markup
3. a regex scan of inline ``<script>`` text for ``.mp4`` / ``.m3u8`` URLs

Every function here is pure; the same ``(original_url, final_url, html)``
always produces the same result.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from backend.scraper.errors import StreamNotFoundError
from backend.scraper.models import (
    HLS_CONTENT_TYPE,
    MP4_CONTENT_TYPE,
    WEBM_CONTENT_TYPE,
    ExtractionResult,
)

# Matches http(s):// and its JSON-escaped form http(s):\/\/
_SCRIPT_MEDIA_RE = re.compile(
    r"""https?:\\?/\\?/[^"'\s<>]+\.(?:mp4|m3u8)""",
    re.IGNORECASE,
)

_STREAM_SUFFIXES = (".mp4", ".m3u8")

UNKNOWN_TITLE = "Unknown Title"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _meta(soup: BeautifulSoup, key: str, attr: str = "property") -> Optional[str]:
    """Return the stripped ``content`` of the first ``<meta attr=key>``.

    Empty values count as missing.
    """
    tag = soup.find("meta", attrs={attr: key})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def _is_absolute(url: Optional[str]) -> bool:
    return bool(url) and url.startswith(("http://", "https://", "//"))


def _looks_like_stream(url: Optional[str]) -> bool:
    return bool(url) and any(suffix in url for suffix in _STREAM_SUFFIXES)


def normalize_url(url: str) -> str:
    """Give protocol-relative URLs an explicit ``https:`` scheme."""
    if url.startswith("//"):
        return "https:" + url
    return url


def classify_content_type(url: str) -> str:
    """Infer a MIME type from the URL text alone.

    Anything that is neither HLS nor WebM is reported as progressive MP4.
    """
    lowered = url.lower()
    if ".m3u8" in lowered:
        return HLS_CONTENT_TYPE
    if ".webm" in lowered:
        return WEBM_CONTENT_TYPE
    return MP4_CONTENT_TYPE


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def _from_player_tags(soup: BeautifulSoup, original_url: str, final_url: str) -> Optional[str]:
    """Open Graph video tags, then the Twitter player stream."""
    secure = _meta(soup, "og:video:secure_url")
    if _looks_like_stream(secure):
        return secure

    og_video = _meta(soup, "og:video")
    if _looks_like_stream(og_video):
        return og_video

    # Trusted as an explicit stream pointer, no suffix check.
    return _meta(soup, "twitter:player:stream", attr="name")


def _from_video_markup(soup: BeautifulSoup, original_url: str, final_url: str) -> Optional[str]:
    """``<video src>`` or its first nested ``<source src>``.

    Relative paths are not resolved against the page; they are skipped.
    """
    video = soup.find("video")
    video_src = (video.get("src") or "").strip() if video is not None else ""
    if _is_absolute(video_src):
        return video_src

    source = soup.select_one("video source")
    source_src = (source.get("src") or "").strip() if source is not None else ""
    if _is_absolute(source_src):
        return source_src

    return None


def _from_script_scan(soup: BeautifulSoup, original_url: str, final_url: str) -> Optional[str]:
    """First media URL in inline script text that is not the page's own URL."""
    script_text = "".join(script.string or "" for script in soup.find_all("script"))
    for match in _SCRIPT_MEDIA_RE.finditer(script_text):
        candidate = match.group(0).replace("\\/", "/")
        if candidate != original_url and candidate != final_url:
            return candidate
    return None


Strategy = Callable[[BeautifulSoup, str, str], Optional[str]]

STRATEGIES: Tuple[Strategy, ...] = (
    _from_player_tags,
    _from_video_markup,
    _from_script_scan,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_metadata(soup: BeautifulSoup, final_url: str) -> Dict[str, Optional[str]]:
    """Collect display metadata for the page.  Never raises on missing tags."""
    title = _meta(soup, "og:title")
    if not title and soup.title is not None:
        title = soup.title.get_text().strip() or None

    description = _meta(soup, "og:description") or _meta(soup, "description", attr="name")

    return {
        "title": title or UNKNOWN_TITLE,
        "description": description or "",
        "site_name": _meta(soup, "og:site_name") or urlparse(final_url).hostname or final_url,
        "poster": _meta(soup, "og:image"),
    }


def find_stream_url(soup: BeautifulSoup, original_url: str, final_url: str) -> Optional[str]:
    """Run :data:`STRATEGIES` in order and return the first candidate found."""
    for strategy in STRATEGIES:
        candidate = strategy(soup, original_url, final_url)
        if candidate:
            return candidate
    return None


def extract_stream(original_url: str, final_url: str, html: str) -> ExtractionResult:
    """Locate a playable media URL in *html* and describe it.

    Args:
        original_url: The URL the caller asked for.
        final_url: The URL the page was actually served from after redirects.
        html: The page body.

    Raises:
        StreamNotFoundError: If no strategy produced a candidate.
    """
    soup = BeautifulSoup(html, "html.parser")

    candidate = find_stream_url(soup, original_url, final_url)
    if not candidate:
        raise StreamNotFoundError(urlparse(final_url).hostname or final_url)

    stream_url = normalize_url(candidate)
    return ExtractionResult(
        url=stream_url,
        content_type=classify_content_type(stream_url),
        **extract_metadata(soup, final_url),
    )
