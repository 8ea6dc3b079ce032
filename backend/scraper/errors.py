"""Exceptions raised by the fetch/extract pipeline.

Each carries the HTTP status the API layer should answer with, so the
request boundary can turn any of them into the error envelope without
knowing which stage failed.
"""

from __future__ import annotations

from typing import Optional


class StreamExtractError(Exception):
    """Base class for every expected pipeline failure."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputError(StreamExtractError):
    """The caller supplied a missing or malformed URL."""

    status_code = 400


class FetchError(StreamExtractError):
    """The page could not be retrieved.

    ``upstream_status`` is the HTTP status returned by the remote server when
    one was received; it is ``None`` for DNS, connection, TLS, timeout and
    redirect-limit failures.
    """

    def __init__(self, message: str, upstream_status: Optional[int] = None) -> None:
        super().__init__(message, status_code=upstream_status or 500)
        self.upstream_status = upstream_status


class StreamNotFoundError(StreamExtractError):
    """The page was fetched but no strategy located a media stream."""

    status_code = 404

    def __init__(self, hostname: str) -> None:
        self.hostname = hostname
        super().__init__(
            f"Could not detect a direct public video stream on {hostname}. "
            "The site may require authentication, use DRM, or embed its media "
            "as encrypted blobs."
        )


def error_message(exc: Exception) -> str:
    """Text for the ``error`` field of the failure envelope.

    Input and not-found errors are reported as-is; fetch failures and
    anything unexpected are prefixed so the caller knows the page itself
    could not be analyzed.
    """
    if isinstance(exc, (InputError, StreamNotFoundError)):
        return exc.message
    if isinstance(exc, StreamExtractError):
        return f"Failed to analyze URL: {exc.message}"
    return f"Failed to analyze URL: {exc}"
