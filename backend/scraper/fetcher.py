"""HTTP page fetcher with browser-like headers and bounded redirects."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from backend.config import settings
from backend.scraper.errors import FetchError
from backend.scraper.models import FetchOutcome, FetcherConfig

logger = logging.getLogger(__name__)

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def default_fetcher_config() -> FetcherConfig:
    """Build a :class:`FetcherConfig` from the current ``settings``."""
    return FetcherConfig(
        headers={
            "User-Agent": settings.user_agent,
            "Accept": _ACCEPT,
            "Accept-Language": settings.accept_language,
        },
        timeout=settings.request_timeout,
        max_redirects=settings.max_redirects,
    )


def _time_left(deadline: float, config: FetcherConfig) -> float:
    """Seconds until *deadline*; raises :class:`FetchError` once it has passed."""
    left = deadline - time.monotonic()
    if left <= 0:
        raise FetchError(f"timeout of {config.timeout:g}s exceeded")
    return left


def _with_timeout(request: httpx.Request, seconds: float) -> httpx.Request:
    request.extensions["timeout"] = httpx.Timeout(seconds).as_dict()
    return request


def fetch_page(url: str, config: Optional[FetcherConfig] = None) -> FetchOutcome:
    """Fetch *url* and return a :class:`FetchOutcome`.

    Redirects are followed up to ``config.max_redirects``; the URL of the
    last response is reported as ``final_url``.  The requested URL is sent
    as ``Referer`` because some hosts reject requests without one.

    ``config.timeout`` bounds the whole fetch: every redirect hop and the
    body download share one deadline, and each network step is given only
    the time that remains.

    Raises:
        FetchError: On any transport failure (DNS, connection, TLS, timeout,
            redirect limit) or when the final status is at or above
            ``config.error_status_threshold``.
    """
    config = config or default_fetcher_config()
    logger.info("[analyze] Fetching %s", url)
    deadline = time.monotonic() + config.timeout

    try:
        with httpx.Client(headers=dict(config.headers), follow_redirects=False) as client:
            request = client.build_request("GET", url, headers={"Referer": url})
            response = client.send(
                _with_timeout(request, _time_left(deadline, config)), stream=True
            )
            try:
                hops = 0
                while response.next_request is not None:
                    response.close()
                    if hops >= config.max_redirects:
                        logger.warning("[analyze] Too many redirects for %s", url)
                        raise FetchError(
                            "Maximum number of redirects exceeded "
                            f"({config.max_redirects})"
                        )
                    hops += 1
                    request = _with_timeout(
                        response.next_request, _time_left(deadline, config)
                    )
                    response = client.send(request, stream=True)

                if response.status_code >= config.error_status_threshold:
                    logger.warning(
                        "[analyze] %s answered HTTP %d", url, response.status_code
                    )
                    raise FetchError(
                        f"Request failed with status code {response.status_code}",
                        upstream_status=response.status_code,
                    )

                parts = []
                for chunk in response.iter_text():
                    parts.append(chunk)
                    _time_left(deadline, config)
            finally:
                response.close()
    except httpx.TimeoutException as exc:
        logger.warning("[analyze] Timed out fetching %s: %s", url, exc)
        raise FetchError(f"timeout of {config.timeout:g}s exceeded") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("[analyze] Request to %s failed: %s", url, exc)
        raise FetchError(str(exc) or exc.__class__.__name__) from exc

    return FetchOutcome(
        final_url=str(response.url),
        html="".join(parts),
        status_code=response.status_code,
    )
