"""Render a :class:`ScrapeResult` as a text block for a tool response.

Compact mode returns the content itself (prefixed with any warnings) so a
model can read it directly; verbose mode adds a metadata header.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from steel_scraper.scraper.models import ScrapeResult


@dataclass(frozen=True)
class FormattedResponse:
    text: str
    is_error: bool = False


def format_success(result: ScrapeResult, verbose: bool) -> FormattedResponse:
    meta = result.metadata
    data = result.data or ""
    warnings = meta.warnings if meta and meta.warnings else []

    if not verbose:
        if warnings:
            return FormattedResponse(f"[WARNING: {'; '.join(warnings)}]\n\n{data}")
        return FormattedResponse(data)

    lines = [f"SUCCESS: Successfully scraped {result.url}"]
    if meta is not None:
        truncated = f" (truncated to {meta.returned_length} characters)" if meta.truncated else ""
        processing = f"{meta.processing_time}ms" if meta.processing_time is not None else "unknown"
        lines += [
            f"Method: {meta.method} (stealth browser, anti-detection)",
            f"Format: {', '.join(meta.formats) or 'unknown'}",
            f"Status Code: {result.status_code}",
            f"Processing Time: {processing}",
            f"Content Length: {meta.content_length} characters{truncated}",
        ]
        if warnings:
            lines.append(f"Warnings: {'; '.join(warnings)}")
        lines += [
            f"Content Type: {meta.content_type}",
            f"Timestamp: {meta.timestamp}",
        ]
        if meta.title:
            lines.append(f"Title: {meta.title}")
        if meta.description:
            lines.append(f"Description: {meta.description}")
        if meta.language:
            lines.append(f"Language: {meta.language}")
    if result.screenshot:
        lines.append("Screenshot: Available (base64)")
    if result.pdf:
        lines.append("PDF: Available (base64)")
    if result.links:
        lines.append(f"Links Found: {len(result.links)}")

    lines += ["", "SCRAPED CONTENT:", data]
    return FormattedResponse("\n".join(lines))


def format_failure(result: ScrapeResult, verbose: bool) -> FormattedResponse:
    target = result.url or "unknown URL"
    kind = result.error_kind.value if result.error_kind else None

    if not verbose:
        text = f"ERROR: Failed to scrape {target}"
        if kind:
            text += f" ({kind})"
        if result.error:
            text += f": {result.error}"
        return FormattedResponse(text, is_error=True)

    lines = [f"ERROR: Failed to scrape {target}"]
    if kind:
        lines.append(f"Error Code: {kind}")
    if result.error:
        lines.append(f"Error: {result.error}")
    lines.append(f"Status Code: {result.status_code or 'unknown'}")
    lines.append(f"Timestamp: {result.timestamp}")
    if result.error_metadata:
        try:
            rendered = json.dumps(result.error_metadata, indent=2)
        except (TypeError, ValueError):
            rendered = "Unable to serialize metadata"
        lines.append(f"Error Metadata: {rendered}")
    return FormattedResponse("\n".join(lines) + "\n", is_error=True)


def format_result(result: ScrapeResult, verbose: bool) -> FormattedResponse:
    """Dispatch to :func:`format_success` or :func:`format_failure`."""
    if result.success:
        return format_success(result, verbose)
    return format_failure(result, verbose)
