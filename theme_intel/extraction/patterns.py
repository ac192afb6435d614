"""Loaders for the stack-fingerprint and component-pattern tables.

The tables are plain JSON shipped under ``theme_intel/extraction/data/`` so
new technologies or component families can be added (or a whole table
swapped) without touching detector logic.  Regexes are compiled
case-insensitively once per file.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

from theme_intel.config import settings
from theme_intel.extraction.models import STACK_CATEGORIES


@dataclass(frozen=True)
class Fingerprint:
    regex: re.Pattern
    weight: float
    description: str


@dataclass(frozen=True)
class StackDetector:
    name: str
    category: str
    fingerprints: Tuple[Fingerprint, ...]


@dataclass(frozen=True)
class ComponentType:
    type: str
    patterns: Tuple[re.Pattern, ...]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _read_table(path: Path) -> list:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Pattern table {path} must be a JSON list")
    return data


@lru_cache(maxsize=None)
def _load_stack_detectors(path: str) -> Tuple[StackDetector, ...]:
    detectors: List[StackDetector] = []
    for entry in _read_table(Path(path)):
        category = entry.get("category", "other")
        if category not in STACK_CATEGORIES:
            raise ValueError(f"Unknown stack category {category!r} for {entry.get('name')!r}")
        fingerprints = []
        for pattern in entry["patterns"]:
            weight = float(pattern["weight"])
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"Fingerprint weight out of range: {weight}")
            fingerprints.append(
                Fingerprint(
                    regex=re.compile(pattern["regex"], re.IGNORECASE),
                    weight=weight,
                    description=pattern["description"],
                )
            )
        detectors.append(StackDetector(entry["name"], category, tuple(fingerprints)))
    return tuple(detectors)


@lru_cache(maxsize=None)
def _load_component_types(path: str) -> Tuple[ComponentType, ...]:
    return tuple(
        ComponentType(
            type=entry["type"],
            patterns=tuple(re.compile(p, re.IGNORECASE) for p in entry["patterns"]),
        )
        for entry in _read_table(Path(path))
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_stack_detectors(path: Optional[Path] = None) -> Tuple[StackDetector, ...]:
    """Return the stack detector table at *path* (default: the bundled table)."""
    return _load_stack_detectors(str(path or settings.stack_detectors_path))


def load_component_types(path: Optional[Path] = None) -> Tuple[ComponentType, ...]:
    """Return the component pattern table at *path* (default: the bundled table)."""
    return _load_component_types(str(path or settings.component_patterns_path))
