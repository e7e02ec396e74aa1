"""Error taxonomy shared by every layer of the scraper.

A failure is described by exactly one :class:`ErrorKind` plus a message.
:class:`SteelError` is the only exception type raised across the service
boundary; callers branch on ``err.kind`` rather than on subclasses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds, grouped as ``CATEGORY/DETAIL``."""

    NETWORK_UNAVAILABLE = "NETWORK/UNAVAILABLE"
    NETWORK_TIMEOUT = "NETWORK/TIMEOUT"
    NETWORK_DNS_FAILURE = "NETWORK/DNS_FAILURE"

    CONTENT_TRUNCATED = "CONTENT/TRUNCATED"
    CONTENT_EMPTY = "CONTENT/EMPTY"
    CONTENT_PARSE_FAILED = "CONTENT/PARSE_FAILED"

    AUTH_REQUIRED = "AUTH/REQUIRED"
    AUTH_INVALID = "AUTH/INVALID"

    RATE_LIMIT_EXCEEDED = "RATE_LIMIT/EXCEEDED"

    SERVER_ERROR = "SERVER/ERROR"
    SERVER_UNAVAILABLE = "SERVER/UNAVAILABLE"

    CLIENT_ERROR = "CLIENT/ERROR"

    UNKNOWN_ERROR = "UNKNOWN/ERROR"

    @property
    def category(self) -> str:
        """The group prefix, e.g. ``"NETWORK"``."""
        return self.value.split("/", 1)[0]

    def __str__(self) -> str:
        return self.value


class SteelError(Exception):
    """A classified failure: kind + message, optional metadata and cause."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        metadata: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.metadata = metadata
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"SteelError({self.kind.value!r}, {self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-friendly dict."""
        data: dict[str, Any] = {
            "name": type(self).__name__,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata
        if self.cause is not None:
            data["cause"] = {
                "name": type(self.cause).__name__,
                "message": str(self.cause),
            }
        return data
