"""Accessibility presence checks over markup and stylesheets.

Five independent checks, always reported in the same order whether or not
the feature is found.  Confidence is a step function of what was measured.
"""

from __future__ import annotations

import math
import re
from typing import List

from theme_intel.crawler.models import CrawlSession
from theme_intel.extraction.models import AccessibilitySignal, SourceInfo

_SKIP_LINK_RE = re.compile(r"skip[- ]?(?:to[- ]?)?(?:main|content|navigation)", re.IGNORECASE)
_FOCUS_VISIBLE_RE = re.compile(r":focus-visible", re.IGNORECASE)
_FOCUS_OUTLINE_RE = re.compile(r":focus[^}]*outline", re.IGNORECASE)
_ARIA_RE = re.compile(r"aria-[a-z]+=", re.IGNORECASE)
_IMG_RE = re.compile(r"<img[^>]*>", re.IGNORECASE)
_ALT_RE = re.compile(r"alt=", re.IGNORECASE)
_LANDMARKS = ("nav", "main", "header", "footer")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _skip_links(html: str, url: str) -> AccessibilitySignal:
    present = _SKIP_LINK_RE.search(html) is not None
    return AccessibilitySignal(
        feature="Skip Links",
        present=present,
        details="Skip navigation link detected" if present else None,
        source=SourceInfo("html", url, "skip-to-content pattern", 0.9 if present else 0.5),
    )


def _focus_styling(css: str, url: str) -> AccessibilitySignal:
    focus_visible = _FOCUS_VISIBLE_RE.search(css) is not None
    focus_outline = _FOCUS_OUTLINE_RE.search(css) is not None
    if focus_visible:
        details, confidence = "Uses :focus-visible pseudo-class", 0.9
    elif focus_outline:
        details, confidence = "Custom focus outline styling", 0.7
    else:
        details, confidence = None, 0.4
    return AccessibilitySignal(
        feature="Focus Visible Styling",
        present=focus_visible or focus_outline,
        details=details,
        source=SourceInfo("css", url, ":focus-visible or :focus outline", confidence),
    )


def _aria_attributes(html: str, url: str) -> AccessibilitySignal:
    count = len(_ARIA_RE.findall(html))
    if count > 20:
        confidence = 0.9
    elif count > 5:
        confidence = 0.7
    else:
        confidence = 0.4
    return AccessibilitySignal(
        feature="ARIA Attributes",
        present=count > 5,
        details=f"Found {count} ARIA attributes",
        source=SourceInfo("html", url, f"{count} aria-* attributes", confidence),
    )


def _image_alt_text(html: str, url: str) -> AccessibilitySignal:
    images = _IMG_RE.findall(html)
    with_alt = sum(1 for img in images if _ALT_RE.search(img))
    coverage = with_alt / len(images) if images else 1.0
    if coverage > 0.9:
        confidence = 0.9
    elif coverage > 0.7:
        confidence = 0.7
    else:
        confidence = 0.5
    return AccessibilitySignal(
        feature="Image Alt Text",
        present=coverage > 0.8,
        details=f"{with_alt}/{len(images)} images have alt text ({_round_half_up(coverage * 100)}%)",
        source=SourceInfo("html", url, "img alt attribute coverage", confidence),
    )


def _semantic_landmarks(html: str, url: str) -> AccessibilitySignal:
    count = sum(
        1 for tag in _LANDMARKS if re.search(rf"<{tag}[\s>]", html, re.IGNORECASE)
    )
    if count >= 3:
        confidence = 0.85
    elif count >= 2:
        confidence = 0.6
    else:
        confidence = 0.4
    return AccessibilitySignal(
        feature="Semantic HTML",
        present=count >= 3,
        details=f"Uses {count}/4 semantic landmarks (nav, main, header, footer)",
        source=SourceInfo("html", url, "semantic HTML elements", confidence),
    )


def detect_accessibility_signals(session: CrawlSession) -> List[AccessibilitySignal]:
    html = "\n".join(p.html for p in session.pages)
    css = "\n".join(session.css_contents.values())
    url = session.start_url
    return [
        _skip_links(html, url),
        _focus_styling(css, url),
        _aria_attributes(html, url),
        _image_alt_text(html, url),
        _semantic_landmarks(html, url),
    ]
