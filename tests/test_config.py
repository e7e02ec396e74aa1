"""Tests for environment-driven settings."""

from __future__ import annotations

from steel_scraper.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("STEEL_API_URL", "STEEL_TIMEOUT", "STEEL_RETRIES"):
        monkeypatch.delenv(name, raising=False)

    config = Settings()

    assert config.steel_api_url == "http://localhost:3000"
    assert config.timeout_ms == 30000
    assert config.timeout_seconds == 30.0
    assert config.retries == 3


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("STEEL_API_URL", "https://steel.internal:8443")
    monkeypatch.setenv("STEEL_TIMEOUT", "4500")
    monkeypatch.setenv("STEEL_RETRIES", "0")

    config = Settings()

    assert config.steel_api_url == "https://steel.internal:8443"
    assert config.timeout_seconds == 4.5
    assert config.retries == 0
