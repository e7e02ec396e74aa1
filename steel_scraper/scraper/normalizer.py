"""Length budgets derived from a partially-specified request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from steel_scraper.scraper.models import (
    DEFAULT_FORMAT,
    FORMAT_CLEANED_HTML,
    FORMAT_HTML,
    FORMAT_MARKDOWN,
    FORMAT_READABILITY,
)

# Default hard cutoff per primary format, in characters.
_SMART_DEFAULTS = {
    FORMAT_MARKDOWN: 8000,
    FORMAT_READABILITY: 10000,
    FORMAT_HTML: 15000,
    FORMAT_CLEANED_HTML: 12000,
}

# Share of the limit held back for metadata when the primary format is
# markdown, as whole percentages.
_METADATA_RESERVE_VERBOSE = 15
_METADATA_RESERVE_CLEAN = 10


@dataclass(frozen=True)
class NormalizedRequest:
    formats: tuple[str, ...]
    effective_max_length: int
    content_budget: int

    @property
    def primary_format(self) -> str:
        return self.formats[0]


def default_formats(formats: Optional[Sequence[str]]) -> tuple[str, ...]:
    """Return *formats* as a tuple, or the single default format if empty."""
    return tuple(formats or ()) or (DEFAULT_FORMAT,)


def smart_default_max_length(primary_format: str) -> int:
    """Default hard cutoff for *primary_format*; markdown's for unknown formats."""
    return _SMART_DEFAULTS.get(primary_format, _SMART_DEFAULTS[FORMAT_MARKDOWN])


def content_budget(max_length: int, primary_format: str, verbose: bool) -> int:
    """Threshold used by the near-limit cutoff heuristic.

    Only markdown reserves room for metadata; every other format gets the
    full *max_length*.
    """
    if primary_format != FORMAT_MARKDOWN:
        return max_length
    reserve = _METADATA_RESERVE_VERBOSE if verbose else _METADATA_RESERVE_CLEAN
    return max_length * (100 - reserve) // 100


def normalize_request(
    formats: Optional[Sequence[str]],
    max_length: Optional[int] = None,
    verbose: bool = False,
) -> NormalizedRequest:
    """Resolve the formats to send downstream and both length limits."""
    resolved = default_formats(formats)
    effective = max_length or smart_default_max_length(resolved[0])
    return NormalizedRequest(
        formats=resolved,
        effective_max_length=effective,
        content_budget=content_budget(effective, resolved[0], verbose),
    )
