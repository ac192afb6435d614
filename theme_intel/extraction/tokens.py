"""Regex-based design-token extractors.

Each extractor scans a single CSS text unit (one inline ``<style>`` body or
one fetched stylesheet) and knows nothing about other units; the engine
concatenates per-unit results and deduplicates them afterwards.
"""

from __future__ import annotations

import re
from typing import Callable, List, Tuple

from theme_intel.extraction.models import (
    ColorToken,
    ExtractedValue,
    RadiusToken,
    ShadowToken,
    SourceInfo,
    SpacingToken,
    TypographyToken,
)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
CSS_VAR_RE = re.compile(r"--([a-zA-Z0-9_-]+)\s*:\s*([^;}\n]+)")
COLOR_RE = re.compile(r"#[a-fA-F0-9]{3,8}\b|rgba?\s*\([^)]+\)|hsla?\s*\([^)]+\)", re.IGNORECASE)
FONT_FAMILY_RE = re.compile(r"font-family\s*:\s*([^;}\n]+)", re.IGNORECASE)
BORDER_RADIUS_RE = re.compile(r"border-radius\s*:\s*([^;}\n]+)", re.IGNORECASE)
BOX_SHADOW_RE = re.compile(r"box-shadow\s*:\s*([^;}\n]+)", re.IGNORECASE)
_LENGTH_UNIT_RE = re.compile(r"-?\d*\.?\d+\s*(px|rem|em|%)", re.IGNORECASE)

# Ordered first-match-wins rules: "primary-background" is a background.
_USAGE_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"background|bg", re.IGNORECASE), "background"),
    (re.compile(r"foreground|fg|text", re.IGNORECASE), "foreground"),
    (re.compile(r"primary", re.IGNORECASE), "primary"),
    (re.compile(r"secondary", re.IGNORECASE), "secondary"),
    (re.compile(r"accent", re.IGNORECASE), "accent"),
    (re.compile(r"border", re.IGNORECASE), "border"),
]

_FORMAT_PREFIXES: List[Tuple[str, str]] = [
    ("#", "hex"),
    ("rgba", "rgba"),
    ("rgb", "rgb"),
    ("hsla", "hsla"),
    ("hsl", "hsl"),
]

_SPACING_NAME_RE = re.compile(r"spacing|space|gap|gutter", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Classification helpers
# ---------------------------------------------------------------------------

def get_color_format(value: str) -> str:
    lowered = value.lower()
    for prefix, fmt in _FORMAT_PREFIXES:
        if lowered.startswith(prefix):
            return fmt
    return "named"


def infer_color_usage(name: str) -> str:
    """Map a custom-property name to a usage category (first matching rule wins)."""
    for pattern, usage in _USAGE_RULES:
        if pattern.search(name):
            return usage
    return "unknown"


def classify_spacing_unit(value: str) -> str:
    match = _LENGTH_UNIT_RE.search(value)
    return match.group(1).lower() if match else "other"


def _css_source(source_url: str, snippet: str, confidence: float) -> SourceInfo:
    return SourceInfo(
        source_type="css",
        source_url=source_url,
        sample_snippet=snippet[:80],
        confidence=confidence,
    )


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

def extract_css_variables(css: str, source_url: str) -> List[ExtractedValue]:
    """Every ``--name: value`` declaration, recorded as ``"--name: value"``."""
    return [
        ExtractedValue(
            value=f"--{m.group(1)}: {m.group(2).strip()}",
            source=SourceInfo(
                source_type="css",
                source_url=source_url,
                sample_snippet=m.group(0)[:100],
                confidence=0.9,
            ),
        )
        for m in CSS_VAR_RE.finditer(css)
    ]


def extract_colors(css: str, source_url: str) -> List[ColorToken]:
    """Custom properties whose value contains a color literal.

    Only the first literal in a value is kept; within this unit a color value
    is reported once, under the first property that declared it.
    """
    colors: dict[str, ColorToken] = {}
    for m in CSS_VAR_RE.finditer(css):
        name, value = m.group(1), m.group(2).strip()
        color_match = COLOR_RE.search(value)
        if not color_match:
            continue
        color = color_match.group(0)
        if color in colors:
            continue
        colors[color] = ColorToken(
            name=f"--{name}",
            value=color,
            format=get_color_format(color),
            usage=infer_color_usage(name),
            source=_css_source(source_url, m.group(0), 0.85),
        )
    return list(colors.values())


def extract_typography(css: str, source_url: str) -> List[TypographyToken]:
    """One token per distinct ``font-family`` value in this unit."""
    tokens: List[TypographyToken] = []
    seen: set[str] = set()
    for m in FONT_FAMILY_RE.finditer(css):
        value = m.group(1).strip()
        if value in seen:
            continue
        seen.add(value)
        tokens.append(
            TypographyToken(
                name="font-family",
                font_family=value,
                source=_css_source(source_url, m.group(0), 0.8),
            )
        )
    return tokens


def _extract_named_or_literal(
    css: str,
    source_url: str,
    name_keyword: str,
    declaration_re: re.Pattern,
    declaration_name: str,
    keep_literal: Callable[[str], bool],
    factory: Callable[..., object],
) -> list:
    """Shared scan for radius- and shadow-like tokens.

    Custom properties whose name contains *name_keyword* are keyed by their
    ``--name``; direct declarations are keyed by their literal value.
    """
    found: dict[str, object] = {}
    for m in CSS_VAR_RE.finditer(css):
        name, value = m.group(1), m.group(2).strip()
        if name_keyword not in name.lower():
            continue
        key = f"--{name}"
        if key not in found:
            found[key] = factory(name=key, value=value, source=_css_source(source_url, m.group(0), 0.85))

    for m in declaration_re.finditer(css):
        value = m.group(1).strip()
        if value in found or value.startswith("var(") or not keep_literal(value):
            continue
        found[value] = factory(
            name=declaration_name,
            value=value,
            source=_css_source(source_url, m.group(0), 0.7),
        )
    return list(found.values())


def extract_radii(css: str, source_url: str) -> List[RadiusToken]:
    return _extract_named_or_literal(
        css, source_url, "radius", BORDER_RADIUS_RE, "border-radius",
        keep_literal=lambda value: True,
        factory=RadiusToken,
    )


def extract_shadows(css: str, source_url: str) -> List[ShadowToken]:
    return _extract_named_or_literal(
        css, source_url, "shadow", BOX_SHADOW_RE, "box-shadow",
        keep_literal=lambda value: value.lower() != "none",
        factory=ShadowToken,
    )


def extract_spacing(css: str, source_url: str) -> List[SpacingToken]:
    """Custom properties that look like spacing scale entries (``--space-4``, ``--gap``...)."""
    tokens: dict[str, SpacingToken] = {}
    for m in CSS_VAR_RE.finditer(css):
        name, value = m.group(1), m.group(2).strip()
        key = f"--{name}"
        if key in tokens or not _SPACING_NAME_RE.search(name):
            continue
        tokens[key] = SpacingToken(
            name=key,
            value=value,
            unit=classify_spacing_unit(value),
            source=_css_source(source_url, m.group(0), 0.8),
        )
    return list(tokens.values())
