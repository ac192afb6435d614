"""Container widths, breakpoints and grid-system classification."""

from __future__ import annotations

import re
from typing import List, Tuple

from theme_intel.crawler.models import CrawlSession
from theme_intel.extraction.models import ExtractedValue, LayoutInfo, SourceInfo

_CONTAINER_RE = re.compile(r"\.container[^{]*\{[^}]*max-width\s*:\s*([^;}]+)", re.IGNORECASE)
_MEDIA_RE = re.compile(r"@media[^{]*\(\s*(?:min|max)-width\s*:\s*([^)]+)\)", re.IGNORECASE)

# (pattern, classification, evidence), highest priority first.
_GRID_RULES: List[Tuple[re.Pattern, str, str]] = [
    (re.compile(r"\.col-(?:xs|sm|md|lg|xl)-\d+", re.IGNORECASE), "bootstrap-grid", "Bootstrap grid classes"),
    (re.compile(r"display\s*:\s*grid", re.IGNORECASE), "css-grid", "CSS Grid (display: grid)"),
    (re.compile(r"display\s*:\s*flex", re.IGNORECASE), "flexbox", "Flexbox (display: flex)"),
]

# Evidence is reported in detection order: grid, flex, then bootstrap.
_EVIDENCE_ORDER = ("css-grid", "flexbox", "bootstrap-grid")


def classify_grid(css: str) -> Tuple[str, List[str]]:
    """Return ``(grid_system, evidence)`` for *css*.

    The first matching rule decides the classification; every matching rule
    contributes evidence.
    """
    hits = {name: evidence for pattern, name, evidence in _GRID_RULES if pattern.search(css)}
    grid_system = next((name for _, name, _ in _GRID_RULES if name in hits), "unknown")
    evidence = [hits[name] for name in _EVIDENCE_ORDER if name in hits]
    return grid_system, evidence


def extract_layout_info(session: CrawlSession) -> LayoutInfo:
    css = "\n".join(session.css_contents.values())
    layout = LayoutInfo()

    for m in _CONTAINER_RE.finditer(css):
        layout.container_widths.append(
            ExtractedValue(
                value=m.group(1).strip(),
                source=SourceInfo("css", session.start_url, m.group(0)[:80], 0.8),
            )
        )

    seen: set[str] = set()
    for m in _MEDIA_RE.finditer(css):
        bp = m.group(1).strip()
        if bp in seen:
            continue
        seen.add(bp)
        layout.breakpoints.append(
            ExtractedValue(
                value=bp,
                source=SourceInfo("css", session.start_url, m.group(0)[:60], 0.85),
            )
        )

    layout.grid_system, layout.grid_evidence = classify_grid(css)
    return layout
