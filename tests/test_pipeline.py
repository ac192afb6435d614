"""Tests for input validation and the end-to-end extractor pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from theme_intel.crawler.models import CrawlConfig
from theme_intel.pipeline import ExtractorOutput, build_config, run_extractor, validate_input


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_BASE = "https://shop.example.com"

_HOME = """\
<html><head>
<link rel="stylesheet" href="/assets/app.css">
<script src="/_next/static/chunks/main.js"></script>
</head>
<body>
<a class="skip-link" href="#main">Skip to content</a>
<header></header><nav><a href="/about">About</a></nav><main id="main"></main><footer></footer>
<script id="__NEXT_DATA__" type="application/json">{}</script>
</body></html>
"""

_CSS = ":root{--color-primary:#0055ff;--radius:8px} .btn{color:red} .btn:hover{color:blue}"


def _mock_site(router=respx) -> None:
    router.get(f"{_BASE}/robots.txt").mock(return_value=httpx.Response(404))
    router.get(f"{_BASE}/").mock(return_value=httpx.Response(200, text=_HOME))
    router.get(f"{_BASE}/about").mock(return_value=httpx.Response(200, text="<html><body>About</body></html>"))
    router.get(f"{_BASE}/assets/app.css").mock(return_value=httpx.Response(200, text=_CSS))


# ---------------------------------------------------------------------------
# validate_input / build_config
# ---------------------------------------------------------------------------

class TestValidateInput:
    def test_valid_input_has_no_errors(self) -> None:
        assert validate_input("https://example.com", max_pages=6, mode="both") == []

    @pytest.mark.parametrize(
        "url, message",
        [
            ("", "themeUrl is required"),
            (None, "themeUrl is required"),
            ("example.com", "themeUrl must be a valid URL"),
            ("https://", "themeUrl must be a valid URL"),
            ("ftp://example.com", "themeUrl must use http or https protocol"),
        ],
    )
    def test_url_problems(self, url, message: str) -> None:
        assert validate_input(url) == [message]

    @pytest.mark.parametrize("max_pages", [0, 21, -1, True, 2.5])
    def test_max_pages_out_of_range(self, max_pages) -> None:
        assert validate_input("https://example.com", max_pages=max_pages) == [
            "maxPages must be a number between 1 and 20"
        ]

    @pytest.mark.parametrize("max_pages", [1, 20])
    def test_max_pages_bounds_are_inclusive(self, max_pages: int) -> None:
        assert validate_input("https://example.com", max_pages=max_pages) == []

    def test_bad_mode(self) -> None:
        assert validate_input("https://example.com", mode="pdf") == [
            'mode must be "extract", "prompt", or "both"'
        ]

    def test_collects_every_problem(self) -> None:
        assert len(validate_input("nope", max_pages=99, mode="x")) == 3


class TestBuildConfig:
    def test_defaults(self) -> None:
        config = build_config("https://example.com")
        assert config == CrawlConfig(
            theme_url="https://example.com",
            max_pages=6,
            same_origin_only=True,
            include_assets=False,
            mode="both",
            notes="",
        )

    def test_explicit_values(self) -> None:
        config = build_config(
            "https://example.com", max_pages=2, same_origin_only=False,
            include_assets=True, mode="prompt", notes="dark theme",
        )
        assert (config.max_pages, config.same_origin_only, config.include_assets) == (2, False, True)
        assert (config.mode, config.notes) == ("prompt", "dark theme")

    def test_invalid_input_raises(self) -> None:
        with pytest.raises(ValueError, match=r"^Invalid input: themeUrl must use http or https protocol, maxPages"):
            build_config("ftp://example.com", max_pages=50)


# ---------------------------------------------------------------------------
# run_extractor
# ---------------------------------------------------------------------------

class TestRunExtractor:
    def test_end_to_end(self, tmp_path: Path, capsys) -> None:
        config = CrawlConfig(theme_url=f"{_BASE}/", max_pages=2, include_assets=True)
        with respx.mock:
            _mock_site()
            output = run_extractor(config, output_root=tmp_path, sleep=MagicMock())

        assert isinstance(output, ExtractorOutput)
        assert output.output_dir.parent == tmp_path
        assert [p.name for p in output.written] == ["theme_report.json", "design_system.md"]

        data = json.loads((output.output_dir / "theme_report.json").read_text(encoding="utf-8"))
        assert data["meta"]["pagesCrawled"] == 2
        assert data["meta"]["robotsTxtStatus"] == "allowed"
        assert data["stackSignals"][0]["name"] == "Next.js"
        assert data["tokens"]["colors"][0]["value"] == "#0055ff"
        assert data["componentPatterns"][0]["states"] == ["hover"]

        md = (output.output_dir / "design_system.md").read_text(encoding="utf-8")
        assert md == output.markdown
        assert "Next.js" in md

        printed = capsys.readouterr().out
        assert f"[Robots] Checking {_BASE}/robots.txt" in printed
        assert "[Robots] No robots.txt available (HTTP 404); assuming allowed" in printed
        assert "[Phase 1/3] Crawling pages..." in printed
        assert "[Phase 1/3] Complete: 2 pages, 1 CSS files" in printed
        assert "[Output] Written:" in printed

    def test_extract_mode_writes_only_json(self, tmp_path: Path) -> None:
        config = CrawlConfig(theme_url=f"{_BASE}/", max_pages=1, mode="extract")
        with respx.mock(assert_all_called=False) as router:
            _mock_site(router)
            output = run_extractor(config, output_root=tmp_path, sleep=MagicMock())

        assert [p.name for p in output.written] == ["theme_report.json"]
        assert output.markdown.startswith("# Design System Documentation")
        assert output.report.notes == [
            "No external CSS files were fetched - tokens extracted from inline styles only"
        ]
