"""Roster parser: per-swimmer attendance entries from class sections.

Each ``page-break-inside`` section is one class. Its roll sheet table lists
swimmers; when the table header carries several dated columns, one entry is
emitted per swimmer per column.
"""
from __future__ import annotations

import datetime as _dt
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .base import ReportParser, extract_report_year
from .constants import (
    ABSENT_CLASS_MARKERS,
    ABSENT_IMAGE_MARKERS,
    ABSENT_TEXT_MARKERS,
    AUTO_ABSENT_IMAGE_MARKER,
    BALANCE_CELL_INDEX,
    CIRCLE_SLASH_GLYPHS,
    ICON_FLAGS,
    RE_CLOCK,
    RE_GROUP_LEVEL,
    RE_HEADER_DATE,
    RE_SECTION_RANGE,
    RE_ZONE,
)
from .instructors import (
    InstructorResolution,
    cell_names,
    header_instructor,
    instructor_cell,
    resolve_instructors,
)
from .markup import Markup, body_rows, header_cells, header_rows
from .model import ParsedRosterEntry
from .rollsheet import block_header, block_header_date, extract_class_name
from .text_utils import (
    capitalize_word,
    clean_text,
    extract_start_time,
    last_first_to_first_last,
    normalize_age_text,
    normalize_for_roster,
    normalize_time,
    parse_balance,
    parse_date_text,
)

LOG = logging.getLogger(__name__)

SECTION_SELECTOR = "div[style*='page-break-inside']"
TABLE_SELECTOR = 'table.table-roll-sheet'
ATTENDANCE_CELL_SELECTOR = 'td.date-time, td.cell-bordered'
ABSENT_CLASS_SELECTOR = ', '.join(f'[class*="{m}"]' for m in ABSENT_CLASS_MARKERS)


@dataclass
class SectionRange:
    """A 'M/D/YYYY -> M/D/YYYY' range printed inside a class section."""

    start_year: int
    start_month: int
    start_day: int
    end_year: int


@dataclass
class DateColumn:
    index: int
    date: str
    start_time: Optional[str] = None


# -- dates -------------------------------------------------------------------

def parse_section_range(text: str) -> Optional[SectionRange]:
    m = re.search(RE_SECTION_RANGE, text or '')
    if not m:
        return None
    return SectionRange(
        start_year=int(m.group(3)),
        start_month=int(m.group(1)),
        start_day=int(m.group(2)),
        end_year=int(m.group(6)),
    )


def infer_year(month: int, day: int, rng: Optional[SectionRange], report_year: Optional[int] = None) -> int:
    """Year for a header date printed without one.

    Within a range spanning two years, dates on or after the range start
    month/day belong to the start year, earlier ones to the end year.
    """
    if rng is None:
        return report_year or _dt.date.today().year
    if rng.start_year == rng.end_year:
        return rng.start_year
    if month > rng.start_month or (month == rng.start_month and day >= rng.start_day):
        return rng.start_year
    return rng.end_year


def header_date_time(
    text: str,
    rng: Optional[SectionRange],
    fallback_time: Optional[str],
    report_year: Optional[int] = None,
) -> Optional[Tuple[str, Optional[str]]]:
    """(ISO date, start time) encoded in a date column header cell."""
    t = clean_text(text)
    m = re.search(RE_HEADER_DATE, t)
    if not m:
        return None
    month, day = int(m.group(1)), int(m.group(2))
    year = int(m.group(3)) if m.group(3) else infer_year(month, day, rng, report_year)
    try:
        date_iso = _dt.date(year, month, day).isoformat()
    except ValueError:
        return None
    clock = re.search(RE_CLOCK, t, re.I)
    start = normalize_time(clock.group(0)) if clock else None
    return date_iso, start or fallback_time


def date_columns(
    table: Markup,
    rng: Optional[SectionRange],
    fallback_time: Optional[str],
    report_year: Optional[int] = None,
) -> List[DateColumn]:
    """Dated columns from the first header row that has any, colspan-expanded."""
    for row in header_rows(table):
        columns: List[DateColumn] = []
        index = 0
        for cell in row.find_all('th', 'td'):
            info = header_date_time(cell.text(' '), rng, fallback_time, report_year)
            if info:
                columns.append(DateColumn(index=index, date=info[0], start_time=info[1]))
            index += cell.colspan()
        if columns:
            return columns
    return []


# -- attendance --------------------------------------------------------------

def _image_blob(img: Markup, with_filename: bool) -> str:
    src = img.attr('src').lower()
    parts = [src, img.attr('alt').lower(), img.attr('title').lower()]
    if with_filename:
        parts.append(src.split('/')[-1])
    return ' '.join(parts)


def _images(cells: List[Markup]) -> List[Markup]:
    return [img for cell in cells for img in cell.find_all('img')]


def _has_glyph(text: str) -> bool:
    return any(g in text for g in CIRCLE_SLASH_GLYPHS)


def has_auto_absent_indicator(cells: List[Markup]) -> bool:
    """Cancelled-session marker: circle-slash glyph or a 'cancel' image."""
    if not cells:
        return False
    if _has_glyph(''.join(c.text() for c in cells).lower()):
        return True
    return any(AUTO_ABSENT_IMAGE_MARKER in _image_blob(img, True) for img in _images(cells))


def _absent_image(blob: str) -> bool:
    if any(marker in blob for marker in ABSENT_IMAGE_MARKERS):
        return True
    return 'circle' in blob and ('slash' in blob or 'strike' in blob)


def is_absent_cell(cells: List[Markup]) -> bool:
    """True only on a positive absence signal in the attendance cell(s)."""
    if not cells:
        return False
    text = ''.join(c.text() for c in cells).lower()
    if any(marker in text for marker in ABSENT_TEXT_MARKERS) or _has_glyph(text):
        return True
    for cell in cells:
        if cell.select('[style*="line-through"]') or cell.select(ABSENT_CLASS_SELECTOR):
            return True
    if has_auto_absent_indicator(cells):
        return True
    return any(_absent_image(_image_blob(img, False)) for img in _images(cells))


# -- section fields ----------------------------------------------------------

def section_program(section: Markup) -> Optional[str]:
    """Program label, expanded to 'GROUP: <Level> <n>' for group lessons."""
    cell = section.labelled_cell('Program:')
    if cell is None:
        return None
    span = cell.select_one('span')
    program = (span or cell).clean_text()
    if not program:
        return None
    if program.upper() != 'GROUP':
        return program
    m = re.search(RE_GROUP_LEVEL, section.text(' '), re.I)
    if not m:
        return 'GROUP'
    return f'GROUP: {capitalize_word(m.group(1))} {m.group(2)}'


def split_program_level(text: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    t = (text or '').strip()
    if not t:
        return None, None
    if t.upper().startswith('GROUP:'):
        return 'GROUP', t.split(':')[1].strip() or None
    if ':' in t:
        program, level = t.split(':', 1)
        return program.strip(), level.strip()
    return t, None


def section_zone(section: Markup) -> Optional[int]:
    cell = section.labelled_cell('Zone:')
    if cell is None:
        return None
    spans = cell.find_all('span')
    text = ''.join(s.text() for s in spans) if spans else cell.text()
    m = re.search(RE_ZONE, text, re.I)
    return int(m.group(1)) if m else None


def instructor_column(table: Markup) -> int:
    for idx, th in enumerate(header_cells(table)):
        if re.search(r'Instructor', th.clean_text(), re.I):
            return idx
    return -1


def row_flags(row: Markup) -> Dict[str, bool]:
    flags = dict.fromkeys(ICON_FLAGS.values(), False)
    for img in row.select('.icons img'):
        flag = ICON_FLAGS.get(img.attr('src').split('/')[-1])
        if flag:
            flags[flag] = True
    return flags


class RosterParser(ReportParser):
    """Parser for iClassPro roster / roll sheet exports with swimmer rows."""

    def extract(self, doc: Markup, html: str) -> List[ParsedRosterEntry]:
        report_year = extract_report_year(html)
        entries: List[ParsedRosterEntry] = []
        for section in doc.select(SECTION_SELECTOR):
            entries.extend(self._parse_section(section, report_year))
        LOG.debug('roster entries=%d', len(entries))
        return entries

    def _parse_section(self, section: Markup, report_year: Optional[int]) -> List[ParsedRosterEntry]:
        header = block_header(section)
        if not header:
            full = section.select_one('.full-width-header')
            header = full.clean_text(' ') if full else ''

        schedule = section.labelled_cell('Schedule:')
        start_time = extract_start_time(schedule.text() if schedule else '')
        if not start_time:
            LOG.debug('skipping section without a start time: %r', header)
            return []

        header_date = parse_date_text(block_header_date(section), report_year)
        section_who = resolve_instructors(
            cell_names(instructor_cell(section)), header_instructor(header)
        )
        program, level = split_program_level(section_program(section))

        shared = dict(
            class_name=extract_class_name(header) or None,
            program=program,
            level=level,
            zone=section_zone(section),
        )

        table = section.select_one(TABLE_SELECTOR)
        if table is None:
            return []
        columns = date_columns(table, parse_section_range(section.text(' ')), start_time, report_year)
        col_idx = instructor_column(table)

        entries: List[ParsedRosterEntry] = []
        for row in body_rows(table):
            name_el = row.select_one('.student-name strong')
            if name_el is None:
                continue
            swimmer = last_first_to_first_last(name_el.text())
            if not swimmer:
                continue
            cells = row.find_all('td')

            who = section_who
            if 0 <= col_idx < len(cells):
                who = resolve_instructors(cell_names(cells[col_idx])) or section_who

            info = row.select('.student-info')
            fields = dict(
                shared,
                swimmer_name=swimmer,
                age_text=normalize_age_text(' '.join(i.text() for i in info)),
                **_instructor_fields(who),
                **row_flags(row),
            )
            if len(cells) > BALANCE_CELL_INDEX:
                balance = parse_balance(cells[BALANCE_CELL_INDEX].text())
                fields['balance_amount'] = balance
                if balance:
                    fields['flag_owes'] = True

            if columns:
                for col in columns:
                    target = [cells[col.index]] if col.index < len(cells) else []
                    entries.append(ParsedRosterEntry(
                        class_date=col.date or header_date,
                        start_time=col.start_time or start_time,
                        attendance=0 if is_absent_cell(target) else None,
                        attendance_auto_absent=has_auto_absent_indicator(target),
                        **fields,
                    ))
            else:
                target = row.select(ATTENDANCE_CELL_SELECTOR)
                entries.append(ParsedRosterEntry(
                    class_date=header_date,
                    start_time=start_time,
                    attendance=0 if is_absent_cell(target) else None,
                    attendance_auto_absent=has_auto_absent_indicator(target),
                    **fields,
                ))
        return entries


def _instructor_fields(who: InstructorResolution) -> Dict[str, object]:
    raw = who.raw or who.actual
    return {
        'instructor_name': who.actual,
        'instructor_name_raw': raw,
        'instructor_name_norm': normalize_for_roster(raw) if raw else None,
        'scheduled_instructor': who.scheduled,
        'actual_instructor': who.actual,
        'is_sub': who.is_sub,
    }


# Functional API
def parse_roster_entries(html: str) -> List[ParsedRosterEntry]:
    """Parse per-swimmer attendance entries from a roster report.

    Args:
        html: Report document

    Returns:
        ParsedRosterEntry list; one per swimmer per dated column
    """
    return RosterParser().parse(html)
