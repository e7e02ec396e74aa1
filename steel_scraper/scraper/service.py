"""Scrape orchestration: request → remote API → normalised :class:`ScrapeResult`.

``ScraperService.scrape_with_browser`` runs one call end to end:

    normalise → call remote → select → check quality → truncate → result

Any exception raised by the remote call, or a non-2xx reply, short-circuits
to a failed result carrying an :class:`~steel_scraper.errors.ErrorKind`.
Ordinary failures are returned, never raised.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from steel_scraper.config import Settings
from steel_scraper.errors import ErrorKind, SteelError
from steel_scraper.scraper.classifier import (
    classify_status,
    classify_transport_error,
    status_message,
)
from steel_scraper.scraper.extractor import check_quality, select_content, truncate_content
from steel_scraper.scraper.fetcher import SteelClient, build_payload
from steel_scraper.scraper.models import (
    PageMetadata,
    RemoteScrapeResponse,
    ScrapeMetadata,
    ScrapeRequest,
    ScrapeResult,
)
from steel_scraper.scraper.normalizer import normalize_request

# Hard upper bound on the liveness probe, in seconds.
HEALTH_CHECK_TIMEOUT = 5.0


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _log(message: str) -> None:
    print(f"[scrape] {message}", file=sys.stderr)


def _remote_error_message(response: httpx.Response) -> Optional[str]:
    """Best-effort ``error`` field from a failed reply body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class ScraperService:
    """Turns :class:`ScrapeRequest` objects into :class:`ScrapeResult` objects."""

    def __init__(self, client: SteelClient) -> None:
        self._client = client

    @property
    def base_url(self) -> str:
        return self._client.base_url

    async def scrape_with_browser(self, request: ScrapeRequest) -> ScrapeResult:
        """Scrape ``request.url`` through the remote API.

        Returns a failed result for transport errors and non-2xx replies.

        Raises:
            SteelError: ``CONTENT/PARSE_FAILED`` if a 2xx reply body cannot be
                interpreted at all.
        """
        plan = normalize_request(request.formats, request.max_length, request.verbose)
        _log(
            f"{request.url} format={','.join(plan.formats)} "
            f"max_length={request.max_length} effective={plan.effective_max_length} "
            f"budget={plan.content_budget}"
        )

        try:
            response = await self._client.scrape(build_payload(request, plan.formats))
        except Exception as exc:
            kind = classify_transport_error(exc)
            _log(f"✗ {request.url}: {kind.value} ({type(exc).__name__}: {exc})")
            return ScrapeResult.failure(
                url=request.url,
                timestamp=_now(),
                kind=kind,
                message=str(exc) or type(exc).__name__,
                error_metadata={"url": request.url, "exception": type(exc).__name__},
            )

        if not response.is_success:
            kind = classify_status(response.status_code)
            message = status_message(response.status_code, _remote_error_message(response))
            _log(f"✗ {request.url}: HTTP {response.status_code} → {kind.value}")
            return ScrapeResult.failure(
                url=request.url,
                timestamp=_now(),
                kind=kind,
                message=message,
                status_code=response.status_code,
                error_metadata={
                    "url": request.url,
                    "status": response.status_code,
                    "reason": response.reason_phrase,
                },
            )

        try:
            reply = RemoteScrapeResponse.model_validate(response.json())
        except ValueError as exc:
            raise SteelError(
                ErrorKind.CONTENT_PARSE_FAILED,
                f"Unreadable reply from scrape API for {request.url}",
                metadata={"url": request.url, "status": response.status_code},
                cause=exc,
            ) from exc

        content = select_content(reply.content, plan.formats)
        original_length = len(content)
        _log(f"received {original_length} characters, budget {plan.content_budget}")

        warnings = check_quality(
            content,
            plan.primary_format,
            reply.longest_representation(),
            plan.content_budget,
        )
        for warning in warnings:
            _log(f"⚠ {warning} ({request.url})")

        final, truncated = truncate_content(content, plan.effective_max_length)
        if truncated:
            _log(f"truncated {original_length} → {plan.effective_max_length} characters")

        page = reply.metadata or PageMetadata()
        metadata = ScrapeMetadata(
            url=request.url,
            timestamp=_now(),
            formats=list(plan.formats),
            content_length=original_length,
            returned_length=len(final),
            truncated=truncated,
            verbose=request.verbose,
            warnings=warnings or None,
            processing_time=reply.processing_time,
            content_type=response.headers.get("content-type", "unknown"),
            title=page.title,
            description=page.description,
            language=page.language,
            og_image=page.og_image,
            og_title=page.og_title,
            og_description=page.og_description,
            published_timestamp=page.published_timestamp,
        )
        return ScrapeResult(
            success=True,
            url=request.url,
            timestamp=metadata.timestamp,
            data=final,
            status_code=response.status_code,
            metadata=metadata,
            headers=dict(response.headers),
            screenshot=reply.screenshot,
            pdf=reply.pdf,
            links=[link.model_dump() for link in reply.links] if reply.links else None,
        )

    async def health_check(self) -> bool:
        """Return ``True`` if the remote API answers ``/health`` within the bound.

        The in-flight probe is cancelled when ``HEALTH_CHECK_TIMEOUT`` elapses.
        Never raises.
        """
        try:
            response = await asyncio.wait_for(
                self._client.probe(HEALTH_CHECK_TIMEOUT), timeout=HEALTH_CHECK_TIMEOUT
            )
        except Exception as exc:
            print(f"[health] {self.base_url} unreachable: {exc!r:.120}", file=sys.stderr)
            return False
        return response.is_success

    async def get_info(self) -> dict[str, Any]:
        """Return the remote API's ``/info`` document.

        Raises:
            SteelError: classified by transport error or HTTP status.
        """
        try:
            response = await self._client.info()
        except Exception as exc:
            raise SteelError(
                classify_transport_error(exc),
                f"Failed to get API info: {exc}",
                metadata={"url": f"{self.base_url}/info"},
                cause=exc,
            ) from exc

        if not response.is_success:
            raise SteelError(
                classify_status(response.status_code),
                f"Failed to get API info: {status_message(response.status_code)}",
                metadata={"url": f"{self.base_url}/info", "status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise SteelError(
                ErrorKind.CONTENT_PARSE_FAILED,
                "Failed to get API info: reply is not JSON",
                cause=exc,
            ) from exc


def create_service(config: Settings) -> ScraperService:
    """Build a :class:`ScraperService` from process configuration."""
    client = SteelClient(
        config.steel_api_url,
        timeout=config.timeout_seconds,
        retries=config.retries,
    )
    return ScraperService(client)
