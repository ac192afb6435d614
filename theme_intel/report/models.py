"""The report handed to renderers, plus its JSON-ready serialisation."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, List, Optional

from theme_intel.extraction.models import DesignTokens, ExtractedValue, StackSignal


@dataclass
class ReportMeta:
    version: str
    generated_at: str
    source_url: str
    pages_crawled: int
    crawl_duration: int  # milliseconds
    robots_txt_status: str


@dataclass
class HeadingScaleEntry:
    tag: str
    size: Optional[str] = None


@dataclass
class TypographySummary:
    primary_fonts: List[str] = field(default_factory=list)
    heading_scale: List[HeadingScaleEntry] = field(default_factory=list)
    body_size: Optional[str] = None


@dataclass
class ComponentSummary:
    name: str
    type: str
    classes: List[str]
    states: List[str]


@dataclass
class AccessibilitySummary:
    feature: str
    present: bool
    details: Optional[str] = None


@dataclass
class LayoutSummary:
    container_widths: List[str] = field(default_factory=list)
    breakpoints: List[str] = field(default_factory=list)
    grid_system: Optional[str] = None


@dataclass
class ThemeReport:
    meta: ReportMeta
    stack_signals: List[StackSignal]
    tokens: DesignTokens
    typography_summary: TypographySummary
    component_patterns: List[ComponentSummary]
    accessibility_signals: List[AccessibilitySummary]
    layout: LayoutSummary
    risks: List[str]
    notes: List[str]
    recommended_approach: str

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain JSON types with camelCase keys; ``None`` fields are dropped."""
        return to_jsonable(self)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_jsonable(obj: Any) -> Any:
    # Extracted values are flattened: {"value": ..., "sourceType": ..., ...}
    if isinstance(obj, ExtractedValue):
        return {"value": obj.value, **to_jsonable(obj.source)}
    if is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for f in fields(obj):
            value = getattr(obj, f.name)
            if value is not None:
                result[camel_case(f.name)] = to_jsonable(value)
        return result
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    if isinstance(obj, dict):
        return {key: to_jsonable(value) for key, value in obj.items()}
    return obj
