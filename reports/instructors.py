"""Instructor resolution shared by roll sheets and rosters.

A class lists one or more instructors. A name marked ``(sub)`` or with a
trailing ``*`` is the substitute actually teaching; the first unmarked name
is the scheduled instructor.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .constants import RE_HEADER_INSTRUCTOR, RE_INSTRUCTOR_LABEL, ROLLSHEET_FALLBACK_ITEMS
from .markup import Markup
from .text_utils import clean_text, has_sub_marker, normalize_instructor_name


@dataclass
class InstructorResolution:
    scheduled: Optional[str] = None
    actual: Optional[str] = None
    is_sub: bool = False
    raw: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.scheduled or self.actual)


def header_instructor(header_text: Optional[str]) -> Optional[str]:
    """Raw name after ' with ' in a class header, up to the next field label."""
    m = re.search(RE_HEADER_INSTRUCTOR, header_text or '', re.I)
    if not m:
        return None
    return m.group(1).strip() or None


def instructor_cell(block: Markup) -> Optional[Markup]:
    """Value cell of the 'Instructors:' header in a class block."""
    for th in block.find_all('th'):
        if re.search(RE_INSTRUCTOR_LABEL, th.clean_text(), re.I):
            return th.next_sibling()
    return None


def cell_names(cell: Optional[Markup]) -> List[str]:
    """Names listed in a cell: its <li> items, else its text lines."""
    if cell is None:
        return []
    items = [li.clean_text() for li in cell.find_all('li')]
    items = [item for item in items if item]
    return items or cell.lines()


def comma_list_items(block: Markup, limit: int = ROLLSHEET_FALLBACK_ITEMS) -> List[str]:
    """'Last, First' shaped list items among the first few <li> of a block."""
    items = (li.clean_text() for li in block.select('ul li')[:limit])
    return [item for item in items if item and ',' in item]


def resolve_instructors(names: Iterable[str], header: Optional[str] = None) -> InstructorResolution:
    """Resolve scheduled/actual instructors from a name list.

    Args:
        names: Raw names in listing order, markers included
        header: Raw header ``with`` suffix, used only when names is empty

    Returns:
        InstructorResolution; is_sub is set only when both a scheduled and a
        different substitute name were found.
    """
    cleaned = []
    for name in names:
        raw = re.sub(RE_INSTRUCTOR_LABEL, '', clean_text(name), flags=re.I).strip()
        normalized = normalize_instructor_name(raw)
        if normalized:
            cleaned.append((raw, normalized))

    sub = next((item for item in cleaned if has_sub_marker(item[0])), None)
    if sub:
        scheduled = next((norm for raw, norm in cleaned if not has_sub_marker(raw)), None)
        actual = sub[1]
        return InstructorResolution(
            scheduled=scheduled,
            actual=actual,
            is_sub=bool(scheduled and actual and scheduled != actual),
            raw=cleaned[0][0],
        )

    if cleaned:
        raw, name = cleaned[0]
        return InstructorResolution(scheduled=name, actual=name, raw=raw)

    if header:
        name = normalize_instructor_name(header)
        if name:
            return InstructorResolution(scheduled=name, actual=name, raw=clean_text(header))

    return InstructorResolution()
