"""Tests for request normalisation (effective max length & content budget)."""

from __future__ import annotations

import pytest

from steel_scraper.scraper.normalizer import (
    content_budget,
    default_formats,
    normalize_request,
    smart_default_max_length,
)


class TestSmartDefaults:
    @pytest.mark.parametrize(
        "fmt, expected",
        [("markdown", 8000), ("readability", 10000), ("html", 15000), ("cleaned_html", 12000)],
    )
    def test_table(self, fmt: str, expected: int) -> None:
        assert smart_default_max_length(fmt) == expected
        assert normalize_request([fmt]).effective_max_length == expected

    def test_unknown_format_uses_markdown_default(self) -> None:
        assert smart_default_max_length("json") == 8000

    def test_keyed_by_primary_format(self) -> None:
        plan = normalize_request(["html", "markdown"])
        assert plan.effective_max_length == 15000
        assert plan.primary_format == "html"

    def test_explicit_max_length_wins(self) -> None:
        assert normalize_request(["html"], max_length=500).effective_max_length == 500


class TestDefaultFormats:
    def test_empty_defaults_to_markdown(self) -> None:
        assert default_formats([]) == ("markdown",)
        assert default_formats(None) == ("markdown",)

    def test_order_preserved(self) -> None:
        assert default_formats(["readability", "html"]) == ("readability", "html")


class TestContentBudget:
    def test_markdown_verbose_reserves_15_percent(self) -> None:
        assert content_budget(8000, "markdown", verbose=True) == 6800

    def test_markdown_clean_reserves_10_percent(self) -> None:
        assert content_budget(8000, "markdown", verbose=False) == 7200

    def test_floor_rounding(self) -> None:
        assert content_budget(101, "markdown", verbose=False) == 90

    @pytest.mark.parametrize("fmt", ["html", "readability", "cleaned_html"])
    def test_other_formats_use_full_length(self, fmt: str) -> None:
        assert content_budget(12345, fmt, verbose=True) == 12345

    def test_budget_never_changes_hard_cutoff(self) -> None:
        plan = normalize_request(["markdown"], verbose=True)
        assert plan.effective_max_length == 8000
        assert plan.content_budget == 6800
