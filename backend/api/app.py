"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /api       stream analysis
    /health    liveness probe

Request bodies that fail validation are answered with the same
``{"success": false, "error": ...}`` envelope as every other failure.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import settings
from backend.logging_config import configure_logging

from backend.api.routers import analyze as analyze_router


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # A present-but-unusable ``url`` (wrong type) is reported like any other
    # malformed URL; a missing body or field gets the "required" message.
    for error in exc.errors():
        if tuple(error.get("loc", ()))[-1:] == ("url",) and error.get("type") != "missing":
            return analyze_router.error_response(
                400, f"Invalid URL: {error.get('input')}"
            )
    return analyze_router.error_response(400, "URL is required")


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging(settings.log_level)

    app = FastAPI(
        title="StreamExtract API",
        description=(
            "Locates a direct, playable media stream (MP4 or HLS) embedded "
            "in a public web page and returns it with display metadata."
        ),
        version="0.1.0",
    )

    # The presentation layer calls the API from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(analyze_router.router, prefix="/api", tags=["analyze"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --reload
app = create_app()
