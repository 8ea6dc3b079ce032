"""Stream analysis endpoint.

Routes
------
POST /api/analyze    Body: {"url": "https://..."}    → analyze_url

Every outcome, success or failure, is answered with the same envelope::

    {"success": true,  "data": {...}}
    {"success": false, "error": "..."}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.scraper import (
    FetchError,
    InputError,
    StreamNotFoundError,
    analyze_url,
    error_message,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    # Optional so a missing field reaches the handler and gets the envelope.
    url: Optional[str] = None


class StreamData(BaseModel):
    url: str
    contentType: str
    title: Optional[str] = None
    description: Optional[str] = None
    siteName: Optional[str] = None
    poster: Optional[str] = None


class AnalyzeResponse(BaseModel):
    success: bool
    data: Optional[StreamData] = None
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_exclude_none=True,
)
def analyze_endpoint(body: AnalyzeRequest) -> Any:
    """Fetch the page at ``body.url`` and return the media stream it embeds."""
    try:
        result = analyze_url(body.url)
    except InputError as exc:
        return error_response(exc.status_code, error_message(exc))
    except StreamNotFoundError as exc:
        logger.info("[analyze] No stream on %s", exc.hostname)
        return error_response(exc.status_code, error_message(exc))
    except FetchError as exc:
        logger.error("[analyze] Fetch failed for %s: %s", body.url, exc.message)
        return error_response(exc.status_code, error_message(exc))
    except Exception as exc:
        logger.exception("[analyze] Unexpected error for %s", body.url)
        return error_response(500, error_message(exc))

    return {"success": True, "data": result.to_dict()}
