"""steel-scraper CLI — entry-point for the server and one-off scrapes.

Usage:
    python cli/main.py --help

Commands:
    serve   → run the MCP server over stdio
    scrape  → scrape one URL and print the rendered result
    health  → probe the remote API (exit code 0 when healthy)
    info    → print the remote API's /info document
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from steel_scraper.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import List, Optional

import typer

from steel_scraper.config import settings
from steel_scraper.errors import SteelError
from steel_scraper.scraper.models import SUPPORTED_FORMATS, ScrapeRequest
from steel_scraper.scraper.service import create_service
from steel_scraper.server import build_server, run_scrape

app = typer.Typer(
    name="steel-scraper",
    help="Browser-automation scraping via a remote steel API.",
    no_args_is_help=True,
)


@app.command("serve")
def serve() -> None:
    """Run the MCP server on stdio."""
    print(f"[server] steel-scraper MCP server running on stdio → {settings.steel_api_url}", file=sys.stderr)
    build_server(create_service(settings)).run()


@app.command("scrape")
def scrape(
    url: str = typer.Argument(..., help="URL to scrape."),
    format: Optional[List[str]] = typer.Option(
        None, "--format", "-f", help=f"Format to request (repeatable): {', '.join(SUPPORTED_FORMATS)}."
    ),
    max_length: Optional[int] = typer.Option(None, "--max-length", min=1, help="Maximum characters to return."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Include scrape metadata."),
    screenshot: bool = typer.Option(False, help="Capture a screenshot."),
    pdf: bool = typer.Option(False, help="Capture a PDF."),
    proxy_url: Optional[str] = typer.Option(None, "--proxy-url", help="Proxy URL for the remote browser."),
    delay: Optional[float] = typer.Option(None, min=0, help="Seconds to wait after page load."),
    log_url: Optional[str] = typer.Option(None, "--log-url", help="Remote log sink URL."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
) -> None:
    """Scrape a URL and print the rendered result to stdout."""
    try:
        request = ScrapeRequest(
            url=url,
            formats=tuple(format or ()),
            screenshot=screenshot,
            pdf=pdf,
            proxy_url=proxy_url,
            delay=delay,
            log_url=log_url,
            max_length=max_length,
            verbose=verbose,
        )
    except ValueError as exc:
        typer.echo(f"[scrape] Invalid request: {exc}")
        raise typer.Exit(2)

    service = create_service(settings)

    if as_json:
        try:
            result = asyncio.run(service.scrape_with_browser(request))
        except SteelError as exc:
            typer.echo(json.dumps(exc.to_dict(), indent=2))
            raise typer.Exit(1)
        typer.echo(json.dumps(result.to_dict(), indent=2))
        raise typer.Exit(0 if result.success else 1)

    response = asyncio.run(run_scrape(service, request))
    typer.echo(response.text)
    if response.is_error:
        raise typer.Exit(1)


@app.command("health")
def health() -> None:
    """Check that the remote API is reachable."""
    service = create_service(settings)
    if asyncio.run(service.health_check()):
        typer.echo(f"[health] {service.base_url} OK")
        return
    typer.echo(f"[health] {service.base_url} unreachable")
    raise typer.Exit(1)


@app.command("info")
def info() -> None:
    """Print the remote API's /info document."""
    service = create_service(settings)
    try:
        data = asyncio.run(service.get_info())
    except SteelError as exc:
        typer.echo(f"[info] {exc.message} ({exc.kind.value})")
        raise typer.Exit(1)
    typer.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    app()
