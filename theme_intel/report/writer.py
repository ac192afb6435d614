"""Write report artefacts into a timestamped output directory."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from theme_intel.config import settings
from theme_intel.report.models import ThemeReport

REPORT_FILENAME = "theme_report.json"
DESIGN_SYSTEM_FILENAME = "design_system.md"


def format_report_json(report: ThemeReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def create_output_dir(root: Optional[Path] = None, now: Optional[datetime] = None) -> Path:
    """Create and return ``<root>/<YYYY-MM-DDTHH-MM-SS>`` (UTC)."""
    if root is None:
        settings.ensure_output_root()
        root = settings.output_root
    root = Path(root)
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    output_dir = root / stamp
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def write_outputs(
    output_dir: Path,
    report: ThemeReport,
    markdown: str,
    mode: str,
) -> List[Path]:
    """Write the artefacts *mode* asks for and return their paths.

    ``extract`` writes the JSON report, ``prompt`` the Markdown document and
    ``both`` writes both.
    """
    if mode not in ("extract", "prompt", "both"):
        raise ValueError(f"Unknown output mode: {mode!r}")

    written: List[Path] = []
    if mode in ("extract", "both"):
        path = Path(output_dir) / REPORT_FILENAME
        path.write_text(format_report_json(report), encoding="utf-8")
        written.append(path)
    if mode in ("prompt", "both"):
        path = Path(output_dir) / DESIGN_SYSTEM_FILENAME
        path.write_text(markdown, encoding="utf-8")
        written.append(path)

    for path in written:
        print(f"[Output] Written: {path}")
    return written
