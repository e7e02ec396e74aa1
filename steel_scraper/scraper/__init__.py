"""Scraper package — request normalisation, remote fetch & result post-processing."""

from steel_scraper.scraper.models import ScrapeMetadata, ScrapeRequest, ScrapeResult
from steel_scraper.scraper.service import ScraperService, create_service

__all__ = [
    "ScrapeRequest",
    "ScrapeResult",
    "ScrapeMetadata",
    "ScraperService",
    "create_service",
]
