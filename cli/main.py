"""StreamExtract CLI - entry-point for backend operations.

Usage:
    python cli/main.py --help

Commands:
    analyze   → fetch a page and print the media stream it embeds
    serve     → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from backend.config import settings
from backend.logging_config import configure_logging
from backend.scraper import StreamExtractError, analyze_url, error_message

app = typer.Typer(
    name="streamextract",
    help="StreamExtract backend CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Locate direct MP4/HLS streams embedded in public web pages."""
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command("analyze")
def analyze(
    url: str = typer.Argument(..., help="Page URL to analyze."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope."),
) -> None:
    """Fetch URL and print the direct media stream it embeds."""
    try:
        result = analyze_url(url)
    except StreamExtractError as exc:
        message = error_message(exc)
        if as_json:
            typer.echo(json.dumps({"success": False, "error": message}, indent=2))
        typer.echo(f"[analyze] {message}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps({"success": True, "data": result.to_dict()}, indent=2))
        return

    typer.echo(f"[analyze] Stream : {result.url}")
    typer.echo(f"[analyze] Type   : {result.content_type}")
    typer.echo(f"[analyze] Title  : {result.title}")
    typer.echo(f"[analyze] Site   : {result.site_name}")
    if result.poster:
        typer.echo(f"[analyze] Poster : {result.poster}")
    if result.description:
        typer.echo("")
        typer.echo(result.description)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (default: API_PORT)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "backend.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
