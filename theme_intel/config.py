"""Centralised settings for Theme Intel.

All runtime tuning (timeouts, politeness delays, retry policy, output
location) is resolved here in one place.  Values can be overridden via
environment variables or a `.env` file in the project root (loaded
automatically when this module is imported).

Per-run options (seed URL, page budget, ...) are *not* settings; they live in
:class:`~theme_intel.crawler.models.CrawlConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_root: Path = field(
        default_factory=lambda: Path(
            os.environ.get(
                "THEME_INTEL_OUTPUT_DIR", Path.cwd() / "out" / "theme_intel_prompt"
            )
        )
    )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "THEME_INTEL_USER_AGENT",
            "ThemeIntelligenceExtractor/1.0 (Design Token Analysis)",
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    robots_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ROBOTS_TIMEOUT", "5.0"))
    )

    # ------------------------------------------------------------------
    # Politeness / retry
    # ------------------------------------------------------------------
    page_delay: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_DELAY", "0.5"))
    )
    stylesheet_delay: float = field(
        default_factory=lambda: float(os.environ.get("STYLESHEET_DELAY", "0.3"))
    )
    retry_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("RETRY_MAX_ATTEMPTS", "3"))
    )
    retry_initial_delay: float = field(
        default_factory=lambda: float(os.environ.get("RETRY_INITIAL_DELAY", "1.0"))
    )

    # ------------------------------------------------------------------
    # Crawl defaults
    # ------------------------------------------------------------------
    default_max_pages: int = field(
        default_factory=lambda: int(os.environ.get("DEFAULT_MAX_PAGES", "6"))
    )

    # ------------------------------------------------------------------
    # Bundled pattern tables
    # ------------------------------------------------------------------
    @property
    def stack_detectors_path(self) -> Path:
        """Absolute path to the stack fingerprint table bundled with the package."""
        return Path(__file__).resolve().parent / "extraction" / "data" / "stack_detectors.json"

    @property
    def component_patterns_path(self) -> Path:
        """Absolute path to the component pattern table bundled with the package."""
        return Path(__file__).resolve().parent / "extraction" / "data" / "component_patterns.json"

    def ensure_output_root(self) -> None:
        """Create the output root directory if it does not exist."""
        self.output_root.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from theme_intel.config import settings
settings = Settings()
