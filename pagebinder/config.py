"""Centralised settings for pagebinder.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_path_or_none(name: str) -> Path | None:
    value = os.environ.get(name, "").strip()
    return Path(value) if value else None


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Scratch storage
    # ------------------------------------------------------------------
    temp_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("CAPTURE_TEMP_DIR", "temp_pdfs"))
    )

    # ------------------------------------------------------------------
    # Retry policy
    # ------------------------------------------------------------------
    max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("MAX_ATTEMPTS", "3"))
    )
    timeout_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("TIMEOUT_RETRY_DELAY", "30.0"))
    )
    success_cooldown: float = field(
        default_factory=lambda: float(os.environ.get("SUCCESS_COOLDOWN", "10.0"))
    )

    # ------------------------------------------------------------------
    # Browser / rendering
    # ------------------------------------------------------------------
    headless: bool = field(default_factory=lambda: _env_bool("HEADLESS", "true"))
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NAVIGATION_TIMEOUT", "60.0"))
    )
    page_format: str = field(
        default_factory=lambda: os.environ.get("PAGE_FORMAT", "A4")
    )
    widen_selector: str = field(
        default_factory=lambda: os.environ.get(
            "WIDEN_SELECTOR", ".cloud-site-container, body"
        )
    )
    crawl_widen_selector: str = field(
        default_factory=lambda: os.environ.get(
            "CRAWL_WIDEN_SELECTOR", ".cloud-site-container"
        )
    )

    # ------------------------------------------------------------------
    # Link discovery
    # ------------------------------------------------------------------
    link_selector: str = field(
        default_factory=lambda: os.environ.get("LINK_SELECTOR", "a")
    )
    nav_selector: str = field(
        default_factory=lambda: os.environ.get("NAV_SELECTOR", "nav a")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_dir: Path | None = field(default_factory=lambda: _env_path_or_none("LOG_DIR"))

    @property
    def navigation_timeout_ms(self) -> int:
        """Navigation deadline in milliseconds, as Playwright expects it."""
        return int(self.navigation_timeout * 1000)

    @property
    def widen_css(self) -> str:
        """Style override that lifts max-width limits on the content container."""
        return f"{self.widen_selector} {{ max-width: none; }}"

    @property
    def crawl_widen_css(self) -> str:
        """Same override for base-URL crawls, which leave ``body`` alone."""
        return f"{self.crawl_widen_selector} {{ max-width: none; }}"


# Module-level singleton, import this everywhere:
#   from pagebinder.config import settings
settings = Settings()
