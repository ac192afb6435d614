"""Typed, sourced facts produced by the extraction phase.

Every fact carries a :class:`SourceInfo`: where it came from and how much the
heuristic that produced it should be trusted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

STACK_CATEGORIES = ("framework", "css-framework", "ui-library", "build-tool", "other")


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class SourceInfo:
    source_type: str
    source_url: str
    sample_snippet: str
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))


@dataclass(frozen=True)
class ExtractedValue:
    value: str
    source: SourceInfo


@dataclass
class StackSignal:
    name: str
    category: str
    confidence: float
    evidence: List[str] = field(default_factory=list)
    source_urls: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColorToken:
    name: str
    value: str
    format: str
    usage: str
    source: SourceInfo


@dataclass(frozen=True)
class TypographyToken:
    name: str
    source: SourceInfo
    font_family: Optional[str] = None


@dataclass(frozen=True)
class SpacingToken:
    name: str
    value: str
    unit: str
    source: SourceInfo


@dataclass(frozen=True)
class RadiusToken:
    name: str
    value: str
    source: SourceInfo


@dataclass(frozen=True)
class ShadowToken:
    name: str
    value: str
    source: SourceInfo


@dataclass
class DesignTokens:
    colors: List[ColorToken] = field(default_factory=list)
    typography: List[TypographyToken] = field(default_factory=list)
    spacing: List[SpacingToken] = field(default_factory=list)
    radii: List[RadiusToken] = field(default_factory=list)
    shadows: List[ShadowToken] = field(default_factory=list)
    custom_properties: List[ExtractedValue] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Typography scale
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HeadingStyle:
    tag: str
    source: SourceInfo
    font_size: Optional[str] = None
    font_weight: Optional[str] = None
    line_height: Optional[str] = None
    font_family: Optional[str] = None


@dataclass(frozen=True)
class BodyTextStyle:
    source: SourceInfo
    font_size: Optional[str] = None
    line_height: Optional[str] = None
    font_family: Optional[str] = None


@dataclass
class TypographyScale:
    headings: List[HeadingStyle] = field(default_factory=list)
    body_text: Optional[BodyTextStyle] = None
    font_families: List[ExtractedValue] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Components, accessibility, layout
# ---------------------------------------------------------------------------

@dataclass
class ComponentPattern:
    name: str
    type: str
    class_patterns: List[str]
    has_hover_state: bool
    has_focus_state: bool
    has_active_state: bool
    source: SourceInfo

    @property
    def states(self) -> List[str]:
        flags = (
            ("hover", self.has_hover_state),
            ("focus", self.has_focus_state),
            ("active", self.has_active_state),
        )
        return [name for name, present in flags if present]


@dataclass
class AccessibilitySignal:
    feature: str
    present: bool
    source: SourceInfo
    details: Optional[str] = None


@dataclass
class LayoutInfo:
    container_widths: List[ExtractedValue] = field(default_factory=list)
    breakpoints: List[ExtractedValue] = field(default_factory=list)
    grid_system: str = "unknown"
    grid_evidence: List[str] = field(default_factory=list)


@dataclass
class ExtractionResult:
    stack_signals: List[StackSignal] = field(default_factory=list)
    tokens: DesignTokens = field(default_factory=DesignTokens)
    typography_scale: TypographyScale = field(default_factory=TypographyScale)
    component_patterns: List[ComponentPattern] = field(default_factory=list)
    accessibility_signals: List[AccessibilitySignal] = field(default_factory=list)
    layout: LayoutInfo = field(default_factory=LayoutInfo)
    risks: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
