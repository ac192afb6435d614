"""Extraction package — heuristic design-system facts from crawled HTML/CSS."""

from theme_intel.extraction.engine import extract
from theme_intel.extraction.models import ExtractionResult

__all__ = ["extract", "ExtractionResult"]
