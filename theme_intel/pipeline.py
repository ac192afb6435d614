"""End-to-end orchestration: validate → crawl → extract → report → write.

This is the one place that prints phase banners; the CLI and any other caller
go through :func:`run_extractor`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlsplit

import httpx

from theme_intel import __version__
from theme_intel.config import settings
from theme_intel.crawler import crawl
from theme_intel.crawler.fetcher import Sleeper
from theme_intel.crawler.models import OUTPUT_MODES, CrawlConfig
from theme_intel.extraction import extract
from theme_intel.report import (
    ThemeReport,
    build_theme_report,
    create_output_dir,
    render_design_system,
    write_outputs,
)

MAX_PAGES_LIMIT = 20

_BANNER = "=" * 40


@dataclass
class ExtractorOutput:
    report: ThemeReport
    markdown: str
    output_dir: Path
    written: List[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

def validate_input(
    theme_url: Optional[str],
    max_pages: Optional[int] = None,
    mode: Optional[str] = None,
) -> List[str]:
    """Return every problem with the supplied options (empty when valid)."""
    errors: List[str] = []

    if not theme_url:
        errors.append("themeUrl is required")
    else:
        try:
            parts = urlsplit(theme_url)
        except ValueError:
            parts = None
        if parts is None or not parts.scheme:
            errors.append("themeUrl must be a valid URL")
        elif parts.scheme.lower() not in ("http", "https"):
            errors.append("themeUrl must use http or https protocol")
        elif not parts.hostname:
            errors.append("themeUrl must be a valid URL")

    if max_pages is not None:
        if (
            not isinstance(max_pages, int)
            or isinstance(max_pages, bool)
            or not 1 <= max_pages <= MAX_PAGES_LIMIT
        ):
            errors.append(f"maxPages must be a number between 1 and {MAX_PAGES_LIMIT}")

    if mode is not None and mode not in OUTPUT_MODES:
        errors.append('mode must be "extract", "prompt", or "both"')

    return errors


def build_config(
    theme_url: Optional[str],
    max_pages: Optional[int] = None,
    same_origin_only: Optional[bool] = None,
    include_assets: Optional[bool] = None,
    mode: Optional[str] = None,
    notes: Optional[str] = None,
) -> CrawlConfig:
    """Validate the raw options and fill in defaults.

    Raises:
        ValueError: listing every validation problem at once.
    """
    errors = validate_input(theme_url, max_pages=max_pages, mode=mode)
    if errors:
        raise ValueError(f"Invalid input: {', '.join(errors)}")

    return CrawlConfig(
        theme_url=theme_url,
        max_pages=max_pages if max_pages is not None else settings.default_max_pages,
        same_origin_only=True if same_origin_only is None else same_origin_only,
        include_assets=False if include_assets is None else include_assets,
        mode=mode or "both",
        notes=notes or "",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def run_extractor(
    config: CrawlConfig,
    output_root: Optional[Path] = None,
    client: Optional[httpx.Client] = None,
    sleep: Sleeper = time.sleep,
) -> ExtractorOutput:
    """Run the whole pipeline for *config* and write the requested artefacts."""
    print(f"\n{_BANNER}\n Theme Intelligence Extractor v{__version__}\n{_BANNER}\n")
    print(f"[Config] URL: {config.theme_url}")
    print(f"[Config] Max Pages: {config.max_pages}")
    print(f"[Config] Same Origin Only: {config.same_origin_only}")
    print(f"[Config] Include Assets: {config.include_assets}")
    print(f"[Config] Mode: {config.mode}\n")

    print("[Phase 1/3] Crawling pages...")
    session = crawl(config, client=client, sleep=sleep)
    print(
        f"[Phase 1/3] Complete: {len(session.pages)} pages, "
        f"{len(session.css_contents)} CSS files\n"
    )

    print("[Phase 2/3] Extracting design tokens and patterns...")
    extraction = extract(session)
    tokens = extraction.tokens
    print("[Phase 2/3] Complete:")
    print(f"  - Stack signals: {len(extraction.stack_signals)}")
    print(f"  - Color tokens: {len(tokens.colors)}")
    print(f"  - Typography tokens: {len(tokens.typography)}")
    print(f"  - Spacing tokens: {len(tokens.spacing)}")
    print(f"  - Radius tokens: {len(tokens.radii)}")
    print(f"  - Shadow tokens: {len(tokens.shadows)}")
    print(f"  - Component patterns: {len(extraction.component_patterns)}")
    print(f"  - A11y signals: {len(extraction.accessibility_signals)}\n")

    print("[Phase 3/3] Generating outputs...")
    report = build_theme_report(session, extraction, config)
    markdown = render_design_system(report, config)
    output_dir = create_output_dir(output_root)
    written = write_outputs(output_dir, report, markdown, config.mode)

    print(f"\n{_BANNER}\n Extraction Complete\n{_BANNER}")
    print(f"Output directory: {output_dir}\n")

    return ExtractorOutput(report=report, markdown=markdown, output_dir=output_dir, written=written)
