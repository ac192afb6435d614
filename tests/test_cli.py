"""Tests for the ``theme-intel`` CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()

_BASE = "https://example.com"
_HOME = '<html><head><link rel="stylesheet" href="/s.css"></head><body><main></main></body></html>'


def _mock_site() -> None:
    respx.get(f"{_BASE}/robots.txt").mock(return_value=httpx.Response(200, text="User-agent: *\nAllow: /"))
    respx.get(f"{_BASE}/").mock(return_value=httpx.Response(200, text=_HOME))
    respx.get(f"{_BASE}/s.css").mock(
        return_value=httpx.Response(200, text=":root{--brand-bg:#123456} .card{} .card:focus{}")
    )


class TestExtractCommand:
    def test_help_lists_options(self) -> None:
        result = runner.invoke(app, ["extract", "--help"])
        assert result.exit_code == 0
        for flag in ("--max-pages", "--same-origin-only", "--include-assets", "--mode", "--notes", "--output-dir"):
            assert flag in result.output

    def test_invalid_url_exits_1(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["extract", "ftp://example.com", "--output-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Invalid input: themeUrl must use http or https protocol" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_invalid_max_pages_exits_1(self) -> None:
        result = runner.invoke(app, ["extract", f"{_BASE}/", "--max-pages", "50"])
        assert result.exit_code == 1
        assert "maxPages must be a number between 1 and 20" in result.output

    def test_successful_run_writes_files(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr("theme_intel.crawler.crawler.settings.page_delay", 0.0)
        monkeypatch.setattr("theme_intel.crawler.crawler.settings.stylesheet_delay", 0.0)
        with respx.mock:
            _mock_site()
            result = runner.invoke(
                app,
                [
                    "extract", f"{_BASE}/",
                    "--max-pages", "1",
                    "--include-assets",
                    "--mode", "both",
                    "--notes", "Marketing site",
                    "--output-dir", str(tmp_path),
                ],
            )

        assert result.exit_code == 0, result.output
        assert "Summary:" in result.output
        assert "Risks: 0" in result.output
        (run_dir,) = list(tmp_path.iterdir())
        assert (run_dir / "theme_report.json").is_file()
        md = (run_dir / "design_system.md").read_text(encoding="utf-8")
        assert "### User Context\nMarketing site" in md
        assert "--brand-bg: #123456; /* background */" in md

    def test_options_reach_the_pipeline(self, tmp_path: Path) -> None:
        with patch("cli.main.run_extractor") as mock_run:
            mock_run.return_value.report.stack_signals = []
            mock_run.return_value.report.tokens.colors = []
            mock_run.return_value.report.tokens.typography = []
            mock_run.return_value.report.tokens.radii = []
            mock_run.return_value.report.tokens.shadows = []
            mock_run.return_value.report.risks = []
            mock_run.return_value.written = []
            result = runner.invoke(
                app,
                ["extract", f"{_BASE}/", "--any-origin", "-p", "3", "-m", "extract", "-o", str(tmp_path)],
            )

        assert result.exit_code == 0, result.output
        config = mock_run.call_args.args[0]
        assert config.same_origin_only is False
        assert config.max_pages == 3
        assert config.mode == "extract"
        assert mock_run.call_args.kwargs["output_root"] == tmp_path
