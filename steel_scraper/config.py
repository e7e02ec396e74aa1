"""Connection settings for the remote steel API.

Each field reads an environment variable (``STEEL_API_URL``, ``STEEL_TIMEOUT``,
``STEEL_RETRIES``) when a :class:`Settings` is created.  A ``.env`` beside
``pyproject.toml`` is loaded first; variables already set in the process win.

The scraping core never reads :data:`settings` directly; entry points pass a
:class:`Settings` instance to :func:`~steel_scraper.scraper.service.create_service`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# <repo>/.env, next to the steel_scraper package
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Remote browser-automation API
    # ------------------------------------------------------------------
    steel_api_url: str = field(
        default_factory=lambda: os.environ.get("STEEL_API_URL", "http://localhost:3000")
    )
    timeout_ms: int = field(
        default_factory=lambda: int(os.environ.get("STEEL_TIMEOUT", "30000"))
    )
    retries: int = field(
        default_factory=lambda: int(os.environ.get("STEEL_RETRIES", "3"))
    )

    @property
    def timeout_seconds(self) -> float:
        """Request timeout converted to seconds for ``httpx``."""
        return self.timeout_ms / 1000


# Module-level singleton used by the entry points:
#   from steel_scraper.config import settings
settings = Settings()
