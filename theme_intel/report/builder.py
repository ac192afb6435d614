"""Condense a crawl session and its extraction result into a :class:`ThemeReport`."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from theme_intel import __version__
from theme_intel.crawler.models import CrawlConfig, CrawlSession
from theme_intel.extraction.models import ExtractionResult
from theme_intel.report.models import (
    AccessibilitySummary,
    ComponentSummary,
    HeadingScaleEntry,
    LayoutSummary,
    ReportMeta,
    ThemeReport,
    TypographySummary,
)

DEFAULT_APPROACH = "Standard CSS integration with design token centralization."

# Keyed by the name of the highest-confidence stack signal.
_APPROACHES = {
    "Tailwind CSS": (
        "Extend Tailwind configuration with extracted tokens. Create custom utilities "
        "for component variants. Use @apply for reusable patterns."
    ),
    "shadcn/ui": (
        "Update CSS variables in globals.css. Extend component variants using CVA. "
        "Add custom primitives following shadcn/ui patterns."
    ),
    "Bootstrap": (
        "Override Bootstrap Sass variables. Create custom utility classes for design "
        "system extensions."
    ),
    "Next.js": (
        "Centralize tokens in CSS variables or theme configuration. Create reusable "
        "component primitives. Use CSS Modules or styled-components for scoped styling."
    ),
}
_APPROACHES["React"] = _APPROACHES["Next.js"]

PRIMARY_FONT_LIMIT = 5


def recommend_approach(extraction: ExtractionResult) -> str:
    if not extraction.stack_signals:
        return DEFAULT_APPROACH
    return _APPROACHES.get(extraction.stack_signals[0].name, DEFAULT_APPROACH)


def build_theme_report(
    session: CrawlSession,
    extraction: ExtractionResult,
    config: CrawlConfig,
    now: Optional[datetime] = None,
) -> ThemeReport:
    generated_at = (now or datetime.now(timezone.utc)).isoformat()
    scale = extraction.typography_scale

    return ThemeReport(
        meta=ReportMeta(
            version=__version__,
            generated_at=generated_at,
            source_url=config.theme_url,
            pages_crawled=len(session.pages),
            crawl_duration=session.crawl_duration,
            robots_txt_status=session.robots_txt_status,
        ),
        stack_signals=extraction.stack_signals,
        tokens=extraction.tokens,
        typography_summary=TypographySummary(
            primary_fonts=[f.value for f in scale.font_families[:PRIMARY_FONT_LIMIT]],
            heading_scale=[HeadingScaleEntry(h.tag, h.font_size) for h in scale.headings],
            body_size=scale.body_text.font_size if scale.body_text else None,
        ),
        component_patterns=[
            ComponentSummary(p.name, p.type, p.class_patterns, p.states)
            for p in extraction.component_patterns
        ],
        accessibility_signals=[
            AccessibilitySummary(s.feature, s.present, s.details)
            for s in extraction.accessibility_signals
        ],
        layout=LayoutSummary(
            container_widths=[c.value for c in extraction.layout.container_widths],
            breakpoints=[b.value for b in extraction.layout.breakpoints],
            grid_system=extraction.layout.grid_system,
        ),
        risks=list(extraction.risks),
        notes=list(extraction.notes),
        recommended_approach=recommend_approach(extraction),
    )
