"""Tests for the regex-based design-token extractors."""

from __future__ import annotations

from dataclasses import fields

import pytest

from theme_intel.extraction.tokens import (
    classify_spacing_unit,
    extract_colors,
    extract_css_variables,
    extract_radii,
    extract_shadows,
    extract_spacing,
    extract_typography,
    get_color_format,
    infer_color_usage,
)

_URL = "https://example.com/site.css"


# ---------------------------------------------------------------------------
# Classification helpers
# ---------------------------------------------------------------------------

class TestColorClassification:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("#fff", "hex"),
            ("#102030", "hex"),
            ("rgb(1, 2, 3)", "rgb"),
            ("rgba(1, 2, 3, .5)", "rgba"),
            ("hsl(10 20% 30%)", "hsl"),
            ("HSLA(10, 20%, 30%, 1)", "hsla"),
            ("rebeccapurple", "named"),
        ],
    )
    def test_format(self, value: str, expected: str) -> None:
        assert get_color_format(value) == expected

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("color-primary-bg", "background"),
            ("background", "background"),
            ("text-muted", "foreground"),
            ("fg", "foreground"),
            ("brand-primary", "primary"),
            ("secondary", "secondary"),
            ("accent-2", "accent"),
            ("border-subtle", "border"),
            ("gray-500", "unknown"),
        ],
    )
    def test_usage_first_rule_wins(self, name: str, expected: str) -> None:
        assert infer_color_usage(name) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("4px", "px"), ("1.5rem", "rem"), (".5em", "em"), ("10%", "%"), ("calc(1vw + 2)", "other")],
    )
    def test_spacing_unit(self, value: str, expected: str) -> None:
        assert classify_spacing_unit(value) == expected


# ---------------------------------------------------------------------------
# Colors / custom properties
# ---------------------------------------------------------------------------

class TestExtractColors:
    def test_single_background_color(self) -> None:
        tokens = extract_colors(":root{--color-primary-bg:#102030;}", _URL)
        assert len(tokens) == 1
        token = tokens[0]
        assert token.name == "--color-primary-bg"
        assert token.value == "#102030"
        assert token.format == "hex"
        assert token.usage == "background"
        assert token.source.source_type == "css"
        assert token.source.source_url == _URL
        assert token.source.confidence == pytest.approx(0.85)

    def test_non_color_properties_are_ignored(self) -> None:
        assert extract_colors(":root{--gap: 4px; --font: Inter;}", _URL) == []

    def test_repeated_color_reported_once_per_unit(self) -> None:
        css = ":root{--a-bg:#fff;--b-text:#fff;--c:rgb(0,0,0)}"
        tokens = extract_colors(css, _URL)
        assert [(t.name, t.value) for t in tokens] == [("--a-bg", "#fff"), ("--c", "rgb(0,0,0)")]

    def test_first_literal_in_value_wins(self) -> None:
        tokens = extract_colors(":root{--gradient: linear-gradient(#111, #222)}", _URL)
        assert [t.value for t in tokens] == ["#111"]


class TestExtractCssVariables:
    def test_records_name_and_value(self) -> None:
        values = extract_css_variables(":root{--radius: 8px; --brand:  #abc ;}", _URL)
        assert [v.value for v in values] == ["--radius: 8px", "--brand: #abc"]
        assert all(v.source.confidence == pytest.approx(0.9) for v in values)

    def test_empty_css(self) -> None:
        assert extract_css_variables("", _URL) == []


# ---------------------------------------------------------------------------
# Typography / radii / shadows / spacing
# ---------------------------------------------------------------------------

class TestExtractTypography:
    def test_distinct_families_only(self) -> None:
        css = "body{font-family: Inter, sans-serif} p{font-family: Inter, sans-serif} code{font-family:monospace}"
        tokens = extract_typography(css, _URL)
        assert [t.font_family for t in tokens] == ["Inter, sans-serif", "monospace"]
        assert all(t.name == "font-family" for t in tokens)

    def test_tokens_hold_only_what_is_extracted(self) -> None:
        (token,) = extract_typography("body{font-family: Inter}", _URL)
        assert [f.name for f in fields(token)] == ["name", "source", "font_family"]
        assert token.source.source_url == _URL


class TestExtractRadii:
    def test_variables_and_literals(self) -> None:
        css = ":root{--radius-sm: 4px} .btn{border-radius: 8px} .card{border-radius: var(--radius-sm)}"
        tokens = extract_radii(css, _URL)
        assert [(t.name, t.value) for t in tokens] == [("--radius-sm", "4px"), ("border-radius", "8px")]
        assert tokens[0].source.confidence == pytest.approx(0.85)
        assert tokens[1].source.confidence == pytest.approx(0.7)

    def test_literal_repeats_collapse(self) -> None:
        css = ".a{border-radius: 8px} .b{border-radius: 8px}"
        assert len(extract_radii(css, _URL)) == 1


class TestExtractShadows:
    def test_none_and_var_are_skipped(self) -> None:
        css = (
            ":root{--shadow-md: 0 2px 4px rgba(0,0,0,.2)}"
            ".a{box-shadow: none} .b{box-shadow: var(--shadow-md)} .c{box-shadow: 0 0 1px #000}"
        )
        tokens = extract_shadows(css, _URL)
        assert [(t.name, t.value) for t in tokens] == [
            ("--shadow-md", "0 2px 4px rgba(0,0,0,.2)"),
            ("box-shadow", "0 0 1px #000"),
        ]


class TestExtractSpacing:
    def test_spacing_named_properties(self) -> None:
        css = ":root{--space-4: 1rem; --gap-lg: 24px; --gutter: 5%; --brand: #fff}"
        tokens = extract_spacing(css, _URL)
        assert [(t.name, t.value, t.unit) for t in tokens] == [
            ("--space-4", "1rem", "rem"),
            ("--gap-lg", "24px", "px"),
            ("--gutter", "5%", "%"),
        ]
