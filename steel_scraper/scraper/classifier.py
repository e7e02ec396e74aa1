"""Map transport failures and HTTP statuses onto :class:`ErrorKind`."""

from __future__ import annotations

import asyncio
import re
import socket
from http import HTTPStatus
from typing import Optional

import httpx

from steel_scraper.errors import ErrorKind

# Resolver messages from glibc, macOS and Windows respectively.
_DNS_MESSAGE_RE = re.compile(
    r"name or service not known|nodename nor servname|getaddrinfo failed"
    r"|temporary failure in name resolution|no address associated with hostname",
    re.IGNORECASE,
)


def _exception_chain(exc: BaseException):
    """Yield *exc* and every exception it was raised from or during."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _is_dns_failure(exc: BaseException) -> bool:
    for err in _exception_chain(exc):
        if isinstance(err, socket.gaierror):
            return True
        if _DNS_MESSAGE_RE.search(str(err)):
            return True
    return False


def _is_timeout(exc: BaseException) -> bool:
    return any(
        isinstance(err, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError, asyncio.CancelledError))
        for err in _exception_chain(exc)
    )


def classify_transport_error(exc: BaseException) -> ErrorKind:
    """Classify an exception raised while talking to the remote API.

    Name-resolution failures win over timeouts; anything else is treated as
    the network being unavailable.
    """
    if _is_dns_failure(exc):
        return ErrorKind.NETWORK_DNS_FAILURE
    if _is_timeout(exc):
        return ErrorKind.NETWORK_TIMEOUT
    return ErrorKind.NETWORK_UNAVAILABLE


def classify_status(status_code: int) -> ErrorKind:
    """Classify a non-success HTTP status code."""
    if status_code == 401:
        return ErrorKind.AUTH_REQUIRED
    if status_code == 403:
        return ErrorKind.AUTH_INVALID
    if status_code == 429:
        return ErrorKind.RATE_LIMIT_EXCEEDED
    if 400 <= status_code < 500:
        return ErrorKind.CLIENT_ERROR
    if status_code == 503:
        return ErrorKind.SERVER_UNAVAILABLE
    if 500 <= status_code < 600:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.UNKNOWN_ERROR


def status_message(status_code: int, remote_message: Optional[str] = None) -> str:
    """Return the remote message verbatim, else ``"<status> <status text>"``."""
    if remote_message:
        return remote_message
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = "Unknown Status"
    return f"{status_code} {phrase}"
