"""Theme Intel CLI: entry-point for the extractor.

Usage:
    python cli/main.py --help
    theme-intel extract https://example.com --max-pages 4 --include-assets
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from theme_intel.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from theme_intel.pipeline import build_config, run_extractor

app = typer.Typer(
    name="theme-intel",
    help="Extract design-system signals (stack, tokens, components) from a public site.",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Theme Intelligence Extractor."""


# ---------------------------------------------------------------------------
# Extract command
# ---------------------------------------------------------------------------
@app.command("extract")
def extract_cmd(
    url: str = typer.Argument(..., help="Theme URL to analyze (http or https)."),
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", "-p", help="Maximum pages to crawl (1-20, default 6)."
    ),
    same_origin_only: bool = typer.Option(
        True, "--same-origin-only/--any-origin", help="Only follow links on the seed origin."
    ),
    include_assets: bool = typer.Option(
        False, "--include-assets/--no-include-assets", help="Fetch linked stylesheets."
    ),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="Output mode: extract | prompt | both (default both)."
    ),
    notes: Optional[str] = typer.Option(
        None, "--notes", "-n", help="Free-text context appended to the design-system document."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Root directory for timestamped output folders."
    ),
) -> None:
    """Crawl URL, extract design signals and write the report files."""
    try:
        config = build_config(
            url,
            max_pages=max_pages,
            same_origin_only=same_origin_only,
            include_assets=include_assets,
            mode=mode,
            notes=notes,
        )
    except ValueError as exc:
        typer.echo(f"[extract] {exc}", err=True)
        raise typer.Exit(1)

    output = run_extractor(config, output_root=output_dir)

    typer.echo("Summary:")
    signals = output.report.stack_signals
    if signals:
        typer.echo(f"  Primary stack: {signals[0].name} ({signals[0].confidence * 100:.0f}% confidence)")
    tokens = output.report.tokens
    total = len(tokens.colors) + len(tokens.typography) + len(tokens.radii) + len(tokens.shadows)
    typer.echo(f"  Total tokens: {total}")
    typer.echo(f"  Risks: {len(output.report.risks)}")
    typer.echo("")
    typer.echo("Files:")
    for path in output.written:
        typer.echo(f"  {path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
