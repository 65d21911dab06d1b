"""Order-preserving collection helpers."""
from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Optional, TypeVar

__all__ = ["dedupe"]

T = TypeVar("T")


def dedupe(items: Iterable[T], key_fn: Optional[Callable[[T], Hashable]] = None) -> List[T]:
    """Drop repeats, keeping the first occurrence of each key.

    ``key_fn`` maps an item to its identity (e.g. the class_name/date/time
    triple of a roll-sheet class); items are their own key by default.

        dedupe(["Westside", "Eastside", "Westside"]) -> ["Westside", "Eastside"]
    """
    seen: set = set()
    kept: List[T] = []
    for item in items:
        key = item if key_fn is None else key_fn(item)
        if key in seen:
            continue
        seen.add(key)
        kept.append(item)
    return kept
