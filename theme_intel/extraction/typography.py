"""Heading / body type scale and font-family inventory.

Behaviour worth knowing:

- Every ``h1``–``h6`` rule match is appended, so a heading level declared in
  several places appears several times.
- Only the *last* ``body`` rule survives; earlier matches are overwritten,
  not merged.
"""

from __future__ import annotations

import re
from typing import List, Optional

from theme_intel.crawler.models import CrawlSession
from theme_intel.extraction.models import (
    BodyTextStyle,
    ExtractedValue,
    HeadingStyle,
    SourceInfo,
    TypographyScale,
)
from theme_intel.extraction.tokens import FONT_FAMILY_RE

STYLE_BLOCK_RE = re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)
_HEADING_RE = re.compile(r"\b(h[1-6])\s*\{([^}]+)\}", re.IGNORECASE)
_BODY_RE = re.compile(r"\bbody\s*\{([^}]+)\}", re.IGNORECASE)


def inline_styles(html: str) -> List[str]:
    """Return the text of every ``<style>`` block in *html*."""
    return STYLE_BLOCK_RE.findall(html or "")


def session_css(session: CrawlSession) -> str:
    """Inline style blocks of every page followed by every fetched stylesheet."""
    chunks: List[str] = []
    for page in session.pages:
        chunks.extend(inline_styles(page.html))
    chunks.extend(session.css_contents.values())
    return "\n".join(chunks)


def _declaration(styles: str, prop: str) -> Optional[str]:
    match = re.search(rf"{prop}\s*:\s*([^;]+)", styles, re.IGNORECASE)
    return match.group(1).strip() if match else None


def extract_typography_scale(session: CrawlSession) -> TypographyScale:
    css = session_css(session)
    scale = TypographyScale()

    for m in _HEADING_RE.finditer(css):
        styles = m.group(2)
        scale.headings.append(
            HeadingStyle(
                tag=m.group(1).lower(),
                font_size=_declaration(styles, "font-size"),
                font_weight=_declaration(styles, "font-weight"),
                line_height=_declaration(styles, "line-height"),
                font_family=_declaration(styles, "font-family"),
                source=SourceInfo("css", session.start_url, m.group(0)[:100], 0.8),
            )
        )

    seen_fonts: set[str] = set()
    for m in FONT_FAMILY_RE.finditer(css):
        value = m.group(1).strip()
        if value in seen_fonts:
            continue
        seen_fonts.add(value)
        scale.font_families.append(
            ExtractedValue(
                value=value,
                source=SourceInfo("css", session.start_url, m.group(0)[:80], 0.75),
            )
        )

    for m in _BODY_RE.finditer(css):
        styles = m.group(1)
        scale.body_text = BodyTextStyle(
            font_size=_declaration(styles, "font-size"),
            line_height=_declaration(styles, "line-height"),
            font_family=_declaration(styles, "font-family"),
            source=SourceInfo("css", session.start_url, m.group(0)[:100], 0.8),
        )

    return scale
