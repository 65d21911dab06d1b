"""Instructor retention extraction.

Three strategies, tried in order until one yields rows:

1. Structural: an ``<h2>`` per instructor inside a table whose shaded
   summary row holds weekly booked counts then retained counts.
2. Regex over each table row's flattened text.
3. Regex over the raw source lines with tags stripped.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from core.text_utils import html_to_text

from .base import ReportParser
from .constants import (
    RE_RETENTION_ROW,
    RETENTION_BOOKED_SLICE,
    RETENTION_RETAINED_SLICE,
    RETENTION_SKIP_COLUMNS,
)
from .markup import Markup, body_rows
from .model import InstructorRetentionRow
from .text_utils import clean_text, surname_first_to_first_last

LOG = logging.getLogger(__name__)


def retention_percent(booked: Optional[int], retained: Optional[int]) -> Optional[float]:
    if not booked or retained is None:
        return None
    return round(retained / booked * 100, 2)


def _count(cell: str) -> Optional[int]:
    m = re.search(r'\d+', cell)
    return int(m.group(0)) if m else None


def _total(values: List[Optional[int]]) -> Optional[int]:
    """Last non-empty count of a block (the block's total column)."""
    present = [v for v in values if v is not None]
    return present[-1] if present else None


def _summary_row(table: Markup, h2: Markup) -> Optional[Markup]:
    shaded = table.select_one('tr.bg-shaded')
    if shaded is not None:
        return shaded
    header_row = h2.closest('tr')
    return next((r for r in body_rows(table) if r != header_row), None)


def _structural(doc: Markup, html: str) -> List[InstructorRetentionRow]:
    out: List[InstructorRetentionRow] = []
    for h2 in doc.find_all('h2'):
        name = h2.clean_text()
        if not name or name.lower() == 'totals':
            continue
        table = h2.closest('table')
        if table is None:
            continue
        row = _summary_row(table, h2)
        if row is None:
            continue
        cells = [td.clean_text(' ') for td in row.find_all('td')][RETENTION_SKIP_COLUMNS:]
        values = [_count(c) for c in cells]
        booked = _total(values[RETENTION_BOOKED_SLICE])
        retained = _total(values[RETENTION_RETAINED_SLICE])
        out.append(InstructorRetentionRow(
            instructor_name=surname_first_to_first_last(name),
            starting_headcount=booked,
            ending_headcount=retained,
            retention_percent=retention_percent(booked, retained),
        ))
    return out


def _match_line(text: str) -> Optional[InstructorRetentionRow]:
    m = re.match(RE_RETENTION_ROW, clean_text(text))
    if not m:
        return None
    name = m.group(1).strip()
    if not name:
        return None
    try:
        percent = float(m.group(4))
    except ValueError:
        percent = None
    return InstructorRetentionRow(
        instructor_name=surname_first_to_first_last(name),
        starting_headcount=int(m.group(2)),
        ending_headcount=int(m.group(3)),
        retention_percent=percent,
    )


def _row_text(doc: Markup, html: str) -> List[InstructorRetentionRow]:
    rows = (_match_line(tr.text(' ')) for tr in doc.select('table tr'))
    return [r for r in rows if r is not None]


def _raw_lines(doc: Markup, html: str) -> List[InstructorRetentionRow]:
    rows = (_match_line(html_to_text(line)) for line in html.split('\n'))
    return [r for r in rows if r is not None]


RETENTION_STRATEGIES = (
    _structural,
    _row_text,
    _raw_lines,
)


class RetentionParser(ReportParser):
    """Parser for the Instructor Retention report."""

    def extract(self, doc: Markup, html: str) -> List[InstructorRetentionRow]:
        for strategy in RETENTION_STRATEGIES:
            rows = strategy(doc, html)
            if rows:
                LOG.debug('retention rows=%d via %s', len(rows), strategy.__name__)
                return rows
        return []


# Functional API
def extract_instructor_retention(html: str) -> List[InstructorRetentionRow]:
    """Parse per-instructor booked/retained headcounts and retention percent."""
    return RetentionParser().parse(html)
