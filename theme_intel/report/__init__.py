"""Report package: condensed JSON report, Markdown document and file output."""

from theme_intel.report.builder import build_theme_report, recommend_approach
from theme_intel.report.markdown import render_design_system
from theme_intel.report.models import ThemeReport
from theme_intel.report.writer import create_output_dir, format_report_json, write_outputs

__all__ = [
    "ThemeReport",
    "build_theme_report",
    "create_output_dir",
    "format_report_json",
    "recommend_approach",
    "render_design_system",
    "write_outputs",
]
