"""Data models for the scrape pipeline.

``ScrapeRequest`` and ``ScrapeResult`` are plain dataclasses owned by the
core.  The remote API's reply is parsed with pydantic; only a body that is
not a JSON object is rejected, every field inside it is read leniently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from steel_scraper.errors import ErrorKind

# Representation kinds the remote API can produce.
FORMAT_HTML = "html"
FORMAT_READABILITY = "readability"
FORMAT_CLEANED_HTML = "cleaned_html"
FORMAT_MARKDOWN = "markdown"

SUPPORTED_FORMATS = (FORMAT_HTML, FORMAT_READABILITY, FORMAT_CLEANED_HTML, FORMAT_MARKDOWN)

# Richest human-readable representation; used when the caller asks for none.
DEFAULT_FORMAT = FORMAT_MARKDOWN


@dataclass(frozen=True)
class ScrapeRequest:
    """A single caller request.  ``formats[0]`` is the primary format."""

    url: str
    formats: tuple[str, ...] = (DEFAULT_FORMAT,)
    screenshot: bool = False
    pdf: bool = False
    proxy_url: Optional[str] = None
    delay: Optional[float] = None
    log_url: Optional[str] = None
    max_length: Optional[int] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("url must be a non-empty string")
        formats = tuple(self.formats or ()) or (DEFAULT_FORMAT,)
        unknown = [f for f in formats if f not in SUPPORTED_FORMATS]
        if unknown:
            raise ValueError(
                f"unsupported format(s) {unknown!r}; expected any of {list(SUPPORTED_FORMATS)}"
            )
        # frozen dataclass: bypass __setattr__ to store the defaulted tuple
        object.__setattr__(self, "formats", formats)
        if self.delay is not None and self.delay < 0:
            raise ValueError("delay must be non-negative")
        if self.max_length is not None and self.max_length <= 0:
            raise ValueError("max_length must be a positive integer")

    @property
    def primary_format(self) -> str:
        return self.formats[0]


# ---------------------------------------------------------------------------
# Remote API reply
# ---------------------------------------------------------------------------
# Only the top-level shape is strict: the body must be a JSON object.  Every
# field inside it degrades to empty/None rather than rejecting the reply.

class PageMetadata(BaseModel):
    """Page metadata, passed through unmodified."""

    model_config = ConfigDict(populate_by_name=True)

    title: Any = None
    description: Any = None
    language: Any = None
    og_image: Any = Field(default=None, alias="ogImage")
    og_title: Any = Field(default=None, alias="ogTitle")
    og_description: Any = Field(default=None, alias="ogDescription")
    published_timestamp: Any = None
    timestamp: Any = None


class PageLink(BaseModel):
    url: Optional[str] = None
    text: Optional[str] = None


class RemoteScrapeResponse(BaseModel):
    """Successful ``/v1/scrape`` reply body."""

    model_config = ConfigDict(populate_by_name=True)

    content: dict[str, Optional[str]] = Field(default_factory=dict)
    processing_time: Optional[float] = Field(default=None, alias="processingTime")
    metadata: Optional[PageMetadata] = None
    screenshot: Any = None
    pdf: Any = None
    links: Optional[list[PageLink]] = None

    @field_validator("content", mode="before")
    @classmethod
    def _lenient_content(cls, value: Any) -> dict[str, Optional[str]]:
        if not isinstance(value, dict):
            return {}
        return {str(k): v if isinstance(v, str) else None for k, v in value.items()}

    @field_validator("processing_time", mode="before")
    @classmethod
    def _lenient_processing_time(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    @field_validator("metadata", mode="before")
    @classmethod
    def _lenient_metadata(cls, value: Any) -> Optional[dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @field_validator("links", mode="before")
    @classmethod
    def _lenient_links(cls, value: Any) -> Optional[list[dict[str, Optional[str]]]]:
        if not isinstance(value, list):
            return None
        links = []
        for item in value:
            if not isinstance(item, dict):
                continue
            url, text = item.get("url"), item.get("text")
            links.append({
                "url": url if isinstance(url, str) else None,
                "text": text if isinstance(text, str) else None,
            })
        return links

    def longest_representation(self) -> int:
        """Length of the largest representation returned, 0 if none."""
        return max((len(v or "") for v in self.content.values()), default=0)


# ---------------------------------------------------------------------------
# Core output
# ---------------------------------------------------------------------------

@dataclass
class ScrapeMetadata:
    """Everything known about a successful scrape besides the content."""

    url: str
    timestamp: str
    formats: list[str]
    content_length: int
    returned_length: int
    truncated: bool
    verbose: bool
    warnings: Optional[list[str]] = None
    processing_time: Optional[float] = None
    content_type: str = "unknown"
    method: str = "full-browser-automation"
    # passed through from the remote API, each optional
    title: Any = None
    description: Any = None
    language: Any = None
    og_image: Any = None
    og_title: Any = None
    og_description: Any = None
    published_timestamp: Any = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "url": self.url,
            "timestamp": self.timestamp,
            "format": list(self.formats),
            "contentLength": self.content_length,
            "returnedLength": self.returned_length,
            "truncated": self.truncated,
            "verboseMode": self.verbose,
            "warnings": self.warnings,
            "processingTime": self.processing_time,
            "contentType": self.content_type,
            "method": self.method,
            "title": self.title,
            "description": self.description,
            "language": self.language,
            "ogImage": self.og_image,
            "ogTitle": self.og_title,
            "ogDescription": self.og_description,
            "publishedTimestamp": self.published_timestamp,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class ScrapeResult:
    """Outcome of one scrape call.

    ``url`` and ``timestamp`` are set on both paths.  On success ``data``,
    ``status_code`` and ``metadata`` are populated; on failure ``error`` and
    ``error_kind`` are, plus a best-effort ``status_code``.
    """

    success: bool
    url: str
    timestamp: str
    data: Optional[str] = None
    status_code: Optional[int] = None
    metadata: Optional[ScrapeMetadata] = None
    headers: dict[str, str] = field(default_factory=dict)
    screenshot: Optional[str] = None
    pdf: Optional[str] = None
    links: Optional[list[dict[str, Optional[str]]]] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_metadata: Optional[dict[str, Any]] = None

    @classmethod
    def failure(
        cls,
        url: str,
        timestamp: str,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        error_metadata: Optional[dict[str, Any]] = None,
    ) -> ScrapeResult:
        return cls(
            success=False,
            url=url,
            timestamp=timestamp,
            status_code=status_code,
            error=message,
            error_kind=kind,
            error_metadata=error_metadata,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, omitting absent fields."""
        data: dict[str, Any] = {
            "success": self.success,
            "url": self.url,
            "timestamp": self.timestamp,
            "statusCode": self.status_code,
        }
        if self.success:
            data["data"] = self.data
            data["metadata"] = self.metadata.to_dict() if self.metadata else None
            data["screenshot"] = self.screenshot
            data["pdf"] = self.pdf
            data["links"] = self.links
        else:
            data["error"] = self.error
            data["errorCode"] = self.error_kind.value if self.error_kind else None
            data["errorMetadata"] = self.error_metadata
        return {k: v for k, v in data.items() if v is not None}
