"""Render a :class:`ThemeReport` as a Markdown design-system document."""

from __future__ import annotations

import re
from typing import Callable, Iterable, List

from theme_intel.crawler.models import CrawlConfig
from theme_intel.report.models import ThemeReport

CUSTOM_PROPERTY_LIMIT = 50
SHADOW_PREVIEW_LENGTH = 60

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")

_USAGE_ROWS = [
    ("Background", "background"),
    ("Foreground/Text", "foreground"),
    ("Primary", "primary"),
    ("Secondary", "secondary"),
    ("Accent", "accent"),
    ("Border", "border"),
    ("Other", "unknown"),
]

_CHECKLIST = """\
## 11. Implementation Checklist

Use this checklist when integrating this design system:

### Token Setup
- [ ] Import color tokens into your styling system
- [ ] Configure typography (font families, scale)
- [ ] Set up spacing/layout tokens
- [ ] Configure border-radius values
- [ ] Add shadow definitions

### Component Migration
- [ ] Identify components to update
- [ ] Apply color tokens to backgrounds, text, borders
- [ ] Update typography styles
- [ ] Apply spacing tokens
- [ ] Update border-radius values
- [ ] Add shadow effects where appropriate

### Quality Checks
- [ ] Verify color contrast meets accessibility standards
- [ ] Test responsive breakpoints
- [ ] Validate component states (hover, focus, active)
- [ ] Check keyboard navigation
- [ ] Test across browsers"""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _lines(items: Iterable, fmt: Callable[..., str], empty: str) -> str:
    rendered = [fmt(item) for item in items]
    return "\n".join(rendered) if rendered else empty


def _config_key(name: str) -> str:
    """``--color-primary`` -> ``color-primary`` for use as a Tailwind key."""
    return _NON_ALNUM_RE.sub("-", re.sub(r"^--", "", name))


def _truncate(value: str, limit: int) -> str:
    return value[:limit] + "..." if len(value) > limit else value


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _stack_section(report: ThemeReport) -> str:
    rows = _lines(
        report.stack_signals,
        lambda s: (
            f"| {s.name} | {s.category} | {s.confidence * 100:.0f}% "
            f"| {', '.join(s.evidence[:2])} |"
        ),
        "| No frameworks detected | - | - | - |",
    )
    return (
        "## 1. Tech Stack\n\n"
        "| Technology | Category | Confidence | Evidence |\n"
        "|------------|----------|------------|----------|\n"
        f"{rows}\n\n"
        f"**Recommended Integration Approach**: {report.recommended_approach}"
    )


def _color_tokens(report: ThemeReport) -> str:
    return _lines(
        report.tokens.colors,
        lambda c: f"  {c.name}: {c.value};" + (f" /* {c.usage} */" if c.usage != "unknown" else ""),
        "  /* No color tokens detected */",
    )


def _palette_section(report: ThemeReport, color_tokens: str) -> str:
    colors = report.tokens.colors
    usage_rows = "\n".join(
        f"| {label} | {sum(1 for c in colors if c.usage == usage)} |"
        for label, usage in _USAGE_ROWS
    )
    return (
        "## 2. Color Palette\n\n"
        f"### CSS Custom Properties ({len(colors)} colors detected)\n\n"
        f"```css\n:root {{\n{color_tokens}\n}}\n```\n\n"
        "### Color Usage Summary\n\n"
        "| Usage | Count |\n"
        "|-------|-------|\n"
        f"{usage_rows}"
    )


def _typography_section(report: ThemeReport) -> str:
    summary = report.typography_summary
    fonts = _lines(
        enumerate(summary.primary_fonts, start=1),
        lambda pair: f"{pair[0]}. `{pair[1]}`",
        "- No font families detected",
    )
    scale = _lines(
        summary.heading_scale,
        lambda h: f"| {h.tag} | {h.size or 'Not specified'} |",
        "| - | No heading styles detected |",
    )
    return (
        "## 3. Typography\n\n"
        f"### Font Families\n\n{fonts}\n\n"
        "### Type Scale\n\n"
        "| Element | Size |\n"
        "|---------|------|\n"
        f"{scale}\n\n"
        "### Body Text\n"
        f"- **Font Size**: {summary.body_size or 'Not detected'}"
    )


def _layout_section(report: ThemeReport) -> str:
    layout = report.layout
    breakpoints = _lines(layout.breakpoints, lambda b: f"- `{b}`", "- No breakpoints detected")
    containers = _lines(
        layout.container_widths, lambda c: f"- `{c}`", "- No container widths detected"
    )
    return (
        "## 4. Spacing & Layout\n\n"
        f"### Grid System\n- **Type**: {layout.grid_system or 'Unknown'}\n\n"
        f"### Breakpoints\n{breakpoints}\n\n"
        f"### Container Widths\n{containers}"
    )


def _radius_section(report: ThemeReport) -> str:
    rows = _lines(
        report.tokens.radii,
        lambda r: f"| `{r.name}` | `{r.value}` |",
        "| - | No border-radius tokens detected |",
    )
    return f"## 5. Border Radius\n\n| Token | Value |\n|-------|-------|\n{rows}"


def _shadow_section(report: ThemeReport) -> str:
    rows = _lines(
        report.tokens.shadows,
        lambda s: f"| `{s.name}` | `{_truncate(s.value, SHADOW_PREVIEW_LENGTH)}` |",
        "| - | No shadow tokens detected |",
    )
    return f"## 6. Shadows\n\n| Token | Value |\n|-------|-------|\n{rows}"


def _custom_property_section(report: ThemeReport) -> str:
    props = report.tokens.custom_properties
    body = _lines(
        props[:CUSTOM_PROPERTY_LIMIT],
        lambda p: f"  {p.value}",
        "  /* No custom properties detected */",
    )
    section = f"## 7. All CSS Custom Properties\n\n```css\n:root {{\n{body}\n}}\n```"
    if len(props) > CUSTOM_PROPERTY_LIMIT:
        section += (
            f"\n\n*Showing first {CUSTOM_PROPERTY_LIMIT} of {len(props)} properties. "
            "See theme_report.json for complete list.*"
        )
    return section


def _component_section(report: ThemeReport) -> str:
    body = "\n\n".join(
        f"### {_capitalize(p.name)}\n"
        f"- **Type**: {p.type}\n"
        f"- **Classes**: `{'`, `'.join(p.classes)}`\n"
        f"- **States**: {', '.join(p.states) if p.states else 'No state variants detected'}"
        for p in report.component_patterns
    )
    return f"## 8. Component Patterns\n\n{body or 'No component patterns detected.'}"


def _accessibility_section(report: ThemeReport) -> str:
    rows = "\n".join(
        f"| {s.feature} | {'✅ Yes' if s.present else '❌ No'} | {s.details or '-'} |"
        for s in report.accessibility_signals
    )
    return (
        "## 9. Accessibility\n\n"
        "| Feature | Present | Details |\n"
        "|---------|---------|---------|\n"
        f"{rows}"
    )


def _risk_section(report: ThemeReport, config: CrawlConfig) -> str:
    risks = _lines(report.risks, lambda r: f"- ⚠️ {r}", "- No significant risks identified")
    notes = _lines(report.notes, lambda n: f"- {n}", "- No additional notes")
    section = f"## 10. Risks & Considerations\n\n{risks}\n\n### Notes\n{notes}"
    if config.notes:
        section += f"\n\n### User Context\n{config.notes}"
    return section


def _quick_start_section(report: ThemeReport, color_tokens: str) -> str:
    summary = report.typography_summary
    radii = report.tokens.radii[:5]
    shadows = report.tokens.shadows[:3]

    css: List[str] = ["/* tokens.css */", ":root {", color_tokens, "", "  /* Typography */"]
    css.append(
        f"  --font-primary: {summary.primary_fonts[0]};"
        if summary.primary_fonts
        else "  /* Add font families */"
    )
    if summary.body_size:
        css.append(f"  --font-size-body: {summary.body_size};")
    css += ["", "  /* Border Radius */"]
    css.append(_lines(radii, lambda r: f"  {r.name}: {r.value};", "  /* Add border-radius tokens */"))
    css += ["", "  /* Shadows */"]
    css.append(_lines(shadows, lambda s: f"  {s.name}: {s.value};", "  /* Add shadow tokens */"))
    css.append("}")

    tw_colors = _lines(
        report.tokens.colors[:10],
        lambda c: f"        '{_config_key(c.name)}': '{c.value}',",
        "        // Add extracted colors",
    )
    if summary.primary_fonts:
        families = ", ".join(f"'{f.split(',')[0].strip()}'" for f in summary.primary_fonts)
        tw_fonts = f"        'primary': [{families}],"
    else:
        tw_fonts = "        // Add font families"
    tw_radii = _lines(
        radii,
        lambda r: f"        '{_config_key(r.name)}': '{r.value}',",
        "        // Add border-radius values",
    )
    tailwind = "\n".join([
        "// tailwind.config.js",
        "module.exports = {",
        "  theme: {",
        "    extend: {",
        "      colors: {",
        tw_colors,
        "      },",
        "      fontFamily: {",
        tw_fonts,
        "      },",
        "      borderRadius: {",
        tw_radii,
        "      },",
        "    },",
        "  },",
        "}",
    ])

    return (
        "## 12. Quick Start Code\n\n"
        "### CSS Variables Setup\n\n"
        "```css\n" + "\n".join(css) + "\n```\n\n"
        "### Tailwind Config (if using Tailwind)\n\n"
        "```javascript\n" + tailwind + "\n```"
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_design_system(report: ThemeReport, config: CrawlConfig) -> str:
    """Return the full design-system document for *report*.

    Every section is always present; empty detections render a placeholder
    row or line rather than being omitted.
    """
    meta = report.meta
    color_tokens = _color_tokens(report)

    header = (
        "# Design System Documentation\n\n"
        f"> **Source**: {meta.source_url}\n"
        f"> **Extracted**: {meta.generated_at}\n"
        f"> **Pages Analyzed**: {meta.pages_crawled}\n"
        f"> **Crawl Duration**: {meta.crawl_duration / 1000:.1f}s"
    )
    appendix = (
        "## Appendix: Source Information\n\n"
        f"- **URL Analyzed**: {meta.source_url}\n"
        f"- **Pages Crawled**: {meta.pages_crawled}\n"
        f"- **robots.txt Status**: {meta.robots_txt_status}\n"
        f"- **Extractor Version**: {meta.version}\n\n"
        "For complete data with confidence scores and source references, "
        "see `theme_report.json`."
    )
    footer = (
        "*Generated by Theme Intelligence Extractor. "
        "Analyzes publicly accessible HTML/CSS only.*"
    )

    sections = [
        header,
        _stack_section(report),
        _palette_section(report, color_tokens),
        _typography_section(report),
        _layout_section(report),
        _radius_section(report),
        _shadow_section(report),
        _custom_property_section(report),
        _component_section(report),
        _accessibility_section(report),
        _risk_section(report, config),
        _CHECKLIST,
        _quick_start_section(report, color_tokens),
        appendix,
        footer,
    ]
    return "\n\n---\n\n".join(sections) + "\n"
