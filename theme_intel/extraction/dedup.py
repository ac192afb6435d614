"""Order-preserving deduplication keyed by a caller-supplied function."""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, TypeVar

T = TypeVar("T")


def deduplicate_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for each distinct ``key(item)``; drop the rest."""
    seen: set = set()
    result: List[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result
