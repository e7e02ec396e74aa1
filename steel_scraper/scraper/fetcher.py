"""HTTP client for the remote browser-automation API.

This is the only module that performs network I/O.  It knows the API's
routes and payload shape but makes no decisions about the reply; status
handling and error classification live in
:mod:`steel_scraper.scraper.service`.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from steel_scraper.scraper.models import ScrapeRequest

_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "User-Agent": "steel-scraper/1.0",
}


def build_payload(request: ScrapeRequest, formats: tuple[str, ...]) -> dict[str, Any]:
    """Return the ``/v1/scrape`` JSON body.  Optional keys are sent only when set."""
    payload: dict[str, Any] = {"url": request.url, "format": list(formats)}
    if request.screenshot:
        payload["screenshot"] = True
    if request.pdf:
        payload["pdf"] = True
    if request.proxy_url:
        payload["proxyUrl"] = request.proxy_url
    if request.delay:
        payload["delay"] = request.delay
    if request.log_url:
        payload["logUrl"] = request.log_url
    return payload


class SteelClient:
    """Thin async wrapper around the remote API's three routes.

    Each call opens its own ``httpx.AsyncClient`` so no connection state is
    shared between concurrent scrapes.  ``retries`` only applies to failed
    connection attempts (``httpx`` transport retries), never to requests that
    reached the server.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, retries: int = 0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=_DEFAULT_HEADERS,
            timeout=self.timeout if timeout is None else timeout,
            transport=httpx.AsyncHTTPTransport(retries=self.retries),
        )

    async def scrape(self, payload: dict[str, Any]) -> httpx.Response:
        """POST *payload* to ``/v1/scrape``.  Raises on transport failure only."""
        async with self._client() as client:
            return await client.post("/v1/scrape", json=payload)

    async def probe(self, timeout: Optional[float] = None) -> httpx.Response:
        """GET ``/health``."""
        async with self._client(timeout) as client:
            return await client.get("/health")

    async def info(self) -> httpx.Response:
        """GET ``/info``."""
        async with self._client() as client:
            return await client.get("/info")
