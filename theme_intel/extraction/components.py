"""Recurring component class families and their interactive states."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from theme_intel.crawler.models import CrawlSession
from theme_intel.extraction.dedup import deduplicate_by
from theme_intel.extraction.models import ComponentPattern, SourceInfo
from theme_intel.extraction.patterns import ComponentType, load_component_types

MAX_CLASS_PATTERNS = 5
_NON_IDENT_RE = re.compile(r"[^a-zA-Z0-9_-]")


def base_class(fragment: str) -> str:
    """``".card-body:hover"`` → ``"card-body"``."""
    if fragment.startswith("."):
        fragment = fragment[1:]
    return _NON_IDENT_RE.split(fragment, maxsplit=1)[0]


def _has_state(css: str, klass: str, state: str) -> bool:
    return re.search(rf"\.{re.escape(klass)}[^{{]*:{state}", css, re.IGNORECASE) is not None


def detect_component_patterns(
    session: CrawlSession,
    component_types: Optional[Sequence[ComponentType]] = None,
) -> List[ComponentPattern]:
    """Match each component family against the fetched stylesheets.

    Families with no match are omitted.
    """
    if component_types is None:
        component_types = load_component_types()

    css = "\n".join(session.css_contents.values())
    patterns: List[ComponentPattern] = []

    for component in component_types:
        matches: List[str] = []
        for regex in component.patterns:
            matches.extend(m.group(0).rstrip("{").strip() for m in regex.finditer(css))
        if not matches:
            continue

        klass = base_class(matches[0])
        patterns.append(
            ComponentPattern(
                name=component.type,
                type=component.type,
                class_patterns=deduplicate_by(matches, lambda s: s)[:MAX_CLASS_PATTERNS],
                has_hover_state=_has_state(css, klass, "hover"),
                has_focus_state=_has_state(css, klass, "focus"),
                has_active_state=_has_state(css, klass, "active"),
                source=SourceInfo("css", session.start_url, matches[0], 0.7),
            )
        )

    return patterns
