"""MCP server exposing the ``visit_with_browser`` tool.

The tool builds a :class:`ScrapeRequest` from its arguments, runs it through
:class:`ScraperService` and renders the result with
:mod:`steel_scraper.formatter`.  Failed scrapes are reported as tool errors.

Run over stdio with::

    steel-scraper serve
"""

from __future__ import annotations

import sys
from typing import Annotated, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from steel_scraper.errors import ErrorKind, SteelError
from steel_scraper.formatter import FormattedResponse, format_result
from steel_scraper.scraper.models import ScrapeRequest
from steel_scraper.scraper.service import ScraperService

SERVER_NAME = "steel-scraper"
TOOL_NAME = "visit_with_browser"

TOOL_DESCRIPTION = (
    "Visit any website using full browser automation (stealth mode, anti-detection). "
    "Returns page content in your chosen format: 'html' for raw HTML source, "
    "'markdown' for clean formatted text (recommended for reading), 'readability' "
    "for Mozilla Readability format, or 'cleaned_html' for cleaned HTML. Supports "
    "screenshot and PDF generation. Automatically handles JavaScript rendering and "
    "provides clean output by default."
)

FormatName = Literal["html", "readability", "cleaned_html", "markdown"]


async def run_scrape(service: ScraperService, request: ScrapeRequest) -> FormattedResponse:
    """Scrape and render, turning anything the service raises into an error block."""
    try:
        result = await service.scrape_with_browser(request)
    except SteelError as exc:
        return _unexpected(exc, exc.kind)
    except Exception as exc:
        return _unexpected(exc, ErrorKind.UNKNOWN_ERROR)
    return format_result(result, request.verbose)


def _unexpected(exc: BaseException, kind: ErrorKind) -> FormattedResponse:
    print(f"[server] unexpected {type(exc).__name__}: {exc}", file=sys.stderr)
    return FormattedResponse(f"Unexpected Error: {exc} ({kind.value})", is_error=True)


def build_server(service: ScraperService) -> FastMCP:
    """Return a :class:`FastMCP` app with the scrape tool registered."""
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def visit_with_browser(
        url: Annotated[str, Field(description="The complete URL to scrape (must include http:// or https://)")],
        format: Annotated[
            Optional[list[FormatName]],
            Field(
                description=(
                    "Content formats to extract: 'html'=raw HTML source (may be very large), "
                    "'markdown'=clean formatted text converted from HTML (recommended for reading), "
                    "'readability'=Mozilla Readability format, 'cleaned_html'=cleaned HTML. "
                    "You can request multiple formats; the first one is returned. Default: ['markdown']."
                )
            ),
        ] = None,
        screenshot: Annotated[bool, Field(description="Take a screenshot of the page (base64 image)")] = False,
        pdf: Annotated[bool, Field(description="Generate a PDF of the page (base64 PDF)")] = False,
        proxyUrl: Annotated[Optional[str], Field(description="Proxy URL to use, e.g. 'http://proxy:port'")] = None,
        delay: Annotated[float, Field(ge=0, description="Seconds to wait after page load before scraping")] = 0,
        logUrl: Annotated[Optional[str], Field(description="URL to send logs to for debugging")] = None,
        maxLength: Annotated[
            Optional[int],
            Field(
                gt=0,
                description=(
                    "Maximum characters to return. Smart defaults: markdown=8000, readability=10000, "
                    "html=15000, cleaned_html=12000. For markdown, space is reserved for metadata."
                ),
            ),
        ] = None,
        verboseMode: Annotated[
            bool, Field(description="Return full metadata instead of clean content-focused output")
        ] = False,
    ) -> str:
        try:
            request = ScrapeRequest(
                url=url,
                formats=tuple(format or ()),
                screenshot=screenshot,
                pdf=pdf,
                proxy_url=proxyUrl,
                delay=delay,
                log_url=logUrl,
                max_length=maxLength,
                verbose=verboseMode,
            )
        except ValueError as exc:
            raise ToolError(f"Invalid arguments: {exc} ({ErrorKind.CLIENT_ERROR.value})") from exc

        response = await run_scrape(service, request)
        if response.is_error:
            raise ToolError(response.text)
        return response.text

    return mcp
