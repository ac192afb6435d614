"""Extraction engine: runs every detector over a finished crawl session.

``extract`` is side-effect free and total: it never touches the network and
never raises on odd markup; a detector that finds nothing contributes an
empty (or omitted) result.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from theme_intel.crawler.models import CrawlSession
from theme_intel.extraction.accessibility import detect_accessibility_signals
from theme_intel.extraction.components import detect_component_patterns
from theme_intel.extraction.dedup import deduplicate_by
from theme_intel.extraction.layout import extract_layout_info
from theme_intel.extraction.models import DesignTokens, ExtractionResult, StackSignal
from theme_intel.extraction.stack import detect_stack
from theme_intel.extraction.tokens import (
    extract_colors,
    extract_css_variables,
    extract_radii,
    extract_shadows,
    extract_spacing,
    extract_typography,
)
from theme_intel.extraction.typography import extract_typography_scale, inline_styles

LARGE_PALETTE_THRESHOLD = 50


def css_units(session: CrawlSession) -> Iterator[Tuple[str, str]]:
    """Yield ``(css_text, source_url)`` for every inline block, then every stylesheet."""
    for page in session.pages:
        for css in inline_styles(page.html):
            yield css, page.final_url
    for url, css in session.css_contents.items():
        yield css, url


def extract_tokens(session: CrawlSession) -> DesignTokens:
    """Run the per-unit token extractors and deduplicate across units."""
    raw = DesignTokens()
    for css, url in css_units(session):
        raw.colors.extend(extract_colors(css, url))
        raw.typography.extend(extract_typography(css, url))
        raw.spacing.extend(extract_spacing(css, url))
        raw.radii.extend(extract_radii(css, url))
        raw.shadows.extend(extract_shadows(css, url))
        raw.custom_properties.extend(extract_css_variables(css, url))

    return DesignTokens(
        colors=deduplicate_by(raw.colors, lambda c: c.value),
        typography=deduplicate_by(raw.typography, lambda t: t.font_family or ""),
        spacing=deduplicate_by(raw.spacing, lambda s: s.name),
        radii=deduplicate_by(raw.radii, lambda r: r.value),
        shadows=deduplicate_by(raw.shadows, lambda s: s.value),
        custom_properties=deduplicate_by(raw.custom_properties, lambda p: p.value),
    )


def assess(
    session: CrawlSession,
    tokens: DesignTokens,
    stack_signals: List[StackSignal],
) -> Tuple[List[str], List[str]]:
    """Return ``(risks, notes)`` worth surfacing alongside the extracted facts."""
    risks: List[str] = []
    notes: List[str] = []

    if len(tokens.colors) > LARGE_PALETTE_THRESHOLD:
        risks.append(
            f"Large color palette detected ({LARGE_PALETTE_THRESHOLD}+ colors) - "
            "may indicate inconsistent design tokens"
        )
    names = {s.name for s in stack_signals}
    if "Bootstrap" in names and "Tailwind CSS" in names:
        risks.append(
            "Multiple CSS frameworks detected (Bootstrap + Tailwind) - may cause style conflicts"
        )
    if session.robots_txt_status == "blocked":
        risks.append("robots.txt blocks crawling - results may be incomplete")

    if not session.css_contents and session.pages:
        notes.append("No external CSS files were fetched - tokens extracted from inline styles only")
    failed_pages = sum(1 for p in session.pages if p.error)
    if failed_pages:
        notes.append(f"{failed_pages} page(s) failed to fetch")

    return risks, notes


def extract(session: CrawlSession) -> ExtractionResult:
    stack_signals = detect_stack(session)
    tokens = extract_tokens(session)
    risks, notes = assess(session, tokens, stack_signals)

    return ExtractionResult(
        stack_signals=stack_signals,
        tokens=tokens,
        typography_scale=extract_typography_scale(session),
        component_patterns=detect_component_patterns(session),
        accessibility_signals=detect_accessibility_signals(session),
        layout=extract_layout_info(session),
        risks=risks,
        notes=notes,
    )
