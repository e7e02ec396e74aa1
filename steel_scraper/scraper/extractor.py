"""Post-processing of a remote reply: pick one representation, check it, cap it."""

from __future__ import annotations

import re
from typing import List, Mapping, Optional, Sequence, Tuple

from steel_scraper.scraper.models import FORMAT_MARKDOWN

# ---------------------------------------------------------------------------
# Quality heuristics
# ---------------------------------------------------------------------------
_HTML_MARKERS = ("<html", "<!DOCTYPE", "<head>", "<div", "<span", "<script")
_MARKDOWN_MARKERS = ("# ", "## ", "* ", "- ")
_TERMINAL_CHARS = (".", "!", "?", "]")

# Content at or above this share of the budget is "near the limit".
_NEAR_LIMIT_RATIO = 0.95
_SHORT_CONTENT_CHARS = 100
_LARGE_SOURCE_CHARS = 1000

WARNING_HTML_INSTEAD_OF_MARKDOWN = (
    "Markdown conversion failed - received HTML content instead of markdown. "
    "The remote API may not support markdown conversion for this page type. "
    "Try using format=['readability'] for a simpler text extraction."
)
WARNING_CUT_MID_SENTENCE = "Markdown content may be truncated mid-sentence"
WARNING_UNUSUALLY_SHORT = (
    "Markdown content is unusually short compared to original content - "
    "conversion may have failed"
)

# ---------------------------------------------------------------------------
# Truncation marker
# ---------------------------------------------------------------------------
_MARKER_TEMPLATE = "\n\n[CONTENT TRUNCATED: {total} characters total, showing first {shown} characters]"
_MARKER_RE = re.compile(
    r"\n\n\[CONTENT TRUNCATED: (\d+) characters total, showing first (\d+) characters\]\Z"
)


def select_content(content: Mapping[str, Optional[str]], formats: Sequence[str]) -> str:
    """Return the representation matching the primary format.

    Falls back to the first representation in *content* when the primary one
    is missing, and to ``""`` when *content* is empty.  Never raises.
    """
    primary = formats[0] if formats else None
    if primary is not None and content.get(primary):
        return content[primary] or ""
    for value in content.values():
        return value or ""
    return ""


def _looks_like_html(text: str) -> bool:
    return any(marker in text for marker in _HTML_MARKERS)


def _looks_like_markdown(text: str) -> bool:
    if any(marker in text for marker in _MARKDOWN_MARKERS):
        return True
    return "[" in text and "](" in text


def check_quality(
    content: str,
    primary_format: str,
    original_length: int,
    budget: int,
) -> List[str]:
    """Return warnings about likely conversion problems, in a fixed order.

    Only markdown output is inspected.  Each check runs independently:

    1. HTML markup with no markdown syntax — conversion silently failed.
    2. Content near *budget* that stops mid-sentence — upstream cutoff.
    3. Tiny content from a large page (*original_length*) — degraded output.
    """
    if primary_format != FORMAT_MARKDOWN:
        return []

    warnings: List[str] = []

    if _looks_like_html(content) and not _looks_like_markdown(content):
        warnings.append(WARNING_HTML_INSTEAD_OF_MARKDOWN)

    stripped = content.strip()
    if content and not stripped.endswith(_TERMINAL_CHARS):
        if len(content) >= budget * _NEAR_LIMIT_RATIO:
            warnings.append(WARNING_CUT_MID_SENTENCE)

    if len(content) < _SHORT_CONTENT_CHARS and original_length > _LARGE_SOURCE_CHARS:
        warnings.append(WARNING_UNUSUALLY_SHORT)

    return warnings


def truncate_content(content: str, max_length: int) -> Tuple[str, bool]:
    """Cap *content* at *max_length* characters and append a marker.

    Returns ``(text, truncated)``.  Text that already ends in a marker and
    whose body fits the limit is returned as-is, so re-applying is a no-op.
    """
    existing = _MARKER_RE.search(content)
    if existing is not None and existing.start() <= max_length:
        return content, True
    if len(content) <= max_length:
        return content, False
    marker = _MARKER_TEMPLATE.format(total=len(content), shown=max_length)
    return content[:max_length] + marker, True
