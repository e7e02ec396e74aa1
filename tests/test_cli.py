"""Tests for the steel-scraper CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from cli.main import app
from steel_scraper.errors import ErrorKind, SteelError
from steel_scraper.formatter import FormattedResponse
from steel_scraper.scraper.models import ScrapeResult

runner = CliRunner()

_TIMESTAMP = "2024-01-01T00:00:00+00:00"


def _mock_service() -> MagicMock:
    service = MagicMock()
    service.base_url = "http://steel.test"
    service.scrape_with_browser = AsyncMock()
    service.health_check = AsyncMock()
    service.get_info = AsyncMock()
    return service


class TestScrapeCommand:
    def test_prints_rendered_content(self) -> None:
        with patch("cli.main.create_service", return_value=_mock_service()), \
                patch("cli.main.run_scrape", new=AsyncMock(return_value=FormattedResponse("# Hi"))) as run:
            result = runner.invoke(app, ["scrape", "https://example.com", "--format", "html"])

        assert result.exit_code == 0
        assert "# Hi" in result.stdout
        request = run.await_args.args[1]
        assert request.url == "https://example.com"
        assert request.formats == ("html",)

    def test_error_exit_code(self) -> None:
        failed = FormattedResponse("ERROR: Failed to scrape x", is_error=True)
        with patch("cli.main.create_service", return_value=_mock_service()), \
                patch("cli.main.run_scrape", new=AsyncMock(return_value=failed)):
            result = runner.invoke(app, ["scrape", "https://example.com"])

        assert result.exit_code == 1
        assert "ERROR: Failed to scrape x" in result.stdout

    def test_invalid_format_rejected(self) -> None:
        result = runner.invoke(app, ["scrape", "https://example.com", "--format", "json"])
        assert result.exit_code == 2
        assert "Invalid request" in result.stdout

    def test_json_output(self) -> None:
        service = _mock_service()
        service.scrape_with_browser.return_value = ScrapeResult.failure(
            url="https://example.com",
            timestamp=_TIMESTAMP,
            kind=ErrorKind.CLIENT_ERROR,
            message="Page not found",
            status_code=404,
        )
        with patch("cli.main.create_service", return_value=service):
            result = runner.invoke(app, ["scrape", "https://example.com", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["errorCode"] == "CLIENT/ERROR"
        assert payload["statusCode"] == 404


class TestHealthCommand:
    def test_healthy(self) -> None:
        service = _mock_service()
        service.health_check.return_value = True
        with patch("cli.main.create_service", return_value=service):
            result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "OK" in result.stdout

    def test_unhealthy(self) -> None:
        service = _mock_service()
        service.health_check.return_value = False
        with patch("cli.main.create_service", return_value=service):
            result = runner.invoke(app, ["health"])

        assert result.exit_code == 1
        assert "unreachable" in result.stdout


class TestInfoCommand:
    def test_prints_info(self) -> None:
        service = _mock_service()
        service.get_info.return_value = {"version": "1.2.3"}
        with patch("cli.main.create_service", return_value=service):
            result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"version": "1.2.3"}

    def test_reports_classified_error(self) -> None:
        service = _mock_service()
        service.get_info.side_effect = SteelError(ErrorKind.NETWORK_UNAVAILABLE, "Failed to get API info: refused")
        with patch("cli.main.create_service", return_value=service):
            result = runner.invoke(app, ["info"])

        assert result.exit_code == 1
        assert "(NETWORK/UNAVAILABLE)" in result.stdout


class TestServeCommand:
    def test_runs_server_built_from_settings(self) -> None:
        service = _mock_service()
        server = MagicMock()
        with patch("cli.main.create_service", return_value=service) as create, \
                patch("cli.main.build_server", return_value=server) as build:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        create.assert_called_once()
        build.assert_called_once_with(service)
        server.run.assert_called_once_with()
