"""Text, date and name normalization utilities for report parsing."""
from __future__ import annotations

import datetime as _dt
import hashlib
import re
from typing import Optional, Tuple

from core.text_utils import collapse_ws, normalize_unicode

from .constants import (
    NAME_TITLES,
    RE_AGE,
    RE_BALANCE,
    RE_CLOCK,
    RE_FULL_DATE,
    RE_MONTH_DAY,
    RE_TIME_RANGE,
    RE_US_DATE,
)


def clean_text(s: Optional[str]) -> str:
    """Collapse whitespace and trim; None becomes ''."""
    return collapse_ws(s or '')


def normalize_header(s: Optional[str]) -> str:
    """Lowercase and strip everything but letters and digits ('Student Name' -> 'studentname')."""
    return re.sub(r'[^a-z0-9]+', '', clean_text(s).lower())


# Same rule as headers: lowercase alphanumerics only
normalize_location_name = normalize_header


def _iso_date(year: int, month: int, day: int) -> Optional[str]:
    try:
        return _dt.date(year, month, day).isoformat()
    except ValueError:
        return None


def parse_us_date(s: Optional[str]) -> Optional[str]:
    """Parse the first M/D/YY or M/D/YYYY token to an ISO date.

    Two-digit years are taken as 20YY. Impossible dates return None.

    Examples:
        '2/5/26' -> '2026-02-05'
        'Drop: 02/05/2026' -> '2026-02-05'
    """
    if not s:
        return None
    m = re.search(RE_US_DATE, str(s))
    if not m:
        return None
    year = m.group(3)
    if len(year) == 2:
        year = f'20{year}'
    elif len(year) != 4:
        return None
    return _iso_date(int(year), int(m.group(1)), int(m.group(2)))


def parse_date_text(s: Optional[str], report_year: Optional[int] = None) -> Optional[str]:
    """Parse a header date: full M/D/YYYY, else M/D with the report year."""
    text = s or ''
    full = re.search(RE_FULL_DATE, text)
    if full:
        return _iso_date(int(full.group(3)), int(full.group(1)), int(full.group(2)))
    partial = re.search(RE_MONTH_DAY, text)
    if partial and report_year:
        return _iso_date(int(report_year), int(partial.group(1)), int(partial.group(2)))
    return None


def parse_money(s: Optional[str]) -> Optional[float]:
    """Parse a money cell like '$1,234.50' or '-$20'; None when nothing numeric remains."""
    raw = clean_text(s)
    if not raw:
        return None
    normalized = re.sub(r'[^0-9.\-]', '', raw)
    if not normalized:
        return None
    try:
        return float(normalized)
    except ValueError:
        return None


def parse_balance(s: Optional[str]) -> Optional[float]:
    """Extract the amount from a 'Balance: $12.50' fragment."""
    m = re.search(RE_BALANCE, s or '', re.I)
    if not m:
        return None
    try:
        return float(m.group(1).replace(',', ''))
    except ValueError:
        return None


def last_first_to_first_last(s: Optional[str]) -> str:
    """Reorder 'Last, First' to 'First Last'; other shapes are only whitespace-normalized."""
    t = clean_text(s)
    parts = t.split(',')
    if len(parts) >= 2:
        last = parts[0].strip()
        first = ','.join(parts[1:]).strip()
        return clean_text(f'{first} {last}')
    return t


def surname_first_to_first_last(s: Optional[str]) -> str:
    """Reorder 'Last First Middle' to 'First Middle Last' (first token is the surname).

    A comma marks the surname explicitly: 'Doe, John' -> 'John Doe'.
    """
    if ',' in (s or ''):
        return last_first_to_first_last(s)
    parts = clean_text(s).split()
    if len(parts) >= 2:
        return ' '.join(parts[1:] + parts[:1])
    return (s or '').strip()


def has_sub_marker(raw: Optional[str]) -> bool:
    """True for names carrying '(sub)' or a trailing '*'."""
    text = (raw or '').lower()
    return '(sub)' in text or re.search(r'\*\s*$', text) is not None


def strip_sub_markers(raw: Optional[str]) -> str:
    return re.sub(r'\(sub\)', '', raw or '', flags=re.I).replace('*', '').strip()


def normalize_instructor_name(raw: Optional[str]) -> str:
    """Display form of an instructor name: markers stripped, 'Last, First' reordered."""
    cleaned = strip_sub_markers(raw)
    if not cleaned:
        return ''
    return last_first_to_first_last(cleaned)


def normalize_name(raw: Optional[str]) -> str:
    """Canonical comparison key for a person name.

    Drops parentheticals and role titles, reorders 'Last, First', keeps
    lowercase letters only.

    Examples:
        'Smith, Jane (sub)' -> 'jane smith'
        'Coach Jane Smith' -> 'jane smith'
    """
    if not raw:
        return ''
    s = str(raw).lower().strip()
    s = re.sub(r'\([^)]*\)', ' ', s)
    s = s.replace('.', ' ')
    titles = '|'.join(NAME_TITLES)
    s = re.sub(rf'\b({titles})\b', ' ', s)
    parts = [p.strip() for p in s.split(',')]
    if len(parts) >= 2:
        s = ' '.join(parts[1:] + parts[:1])
    s = re.sub(r'[^a-z\s]', '', s)
    return clean_text(s)


def normalize_for_roster(raw: Optional[str]) -> str:
    """Lowercased instructor key stored alongside roster rows ('Smith, Jane (sub)' -> 'smith jane')."""
    s = (raw or '').lower()
    s = re.sub(r'\([^)]*\)', ' ', s)
    s = re.sub(r'[.,]', ' ', s)
    return clean_text(s)


def normalize_time(raw: Optional[str]) -> Optional[str]:
    """Normalize '4:30 pm' / '9am' / '16:05' to HH:MM:SS."""
    m = re.search(r'(\d{1,2})(?::(\d{2}))?\s*(am|pm)?', (raw or '').strip().lower())
    if not m:
        return None
    hour = int(m.group(1))
    minute = int(m.group(2) or 0)
    ampm = m.group(3)
    if ampm == 'pm' and hour != 12:
        hour += 12
    if ampm == 'am' and hour == 12:
        hour = 0
    return f'{hour:02d}:{minute:02d}:00'


def parse_schedule_times(text: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Parse '4:00 pm - 4:30 pm' style ranges to (start, end) HH:MM:SS.

    The end side inherits the start's am/pm when it has none.
    """
    m = re.search(RE_TIME_RANGE, text or '', re.I)
    if not m:
        return None, None
    start_ampm = m.group(3) or ''
    end_ampm = m.group(6) or start_ampm
    start = normalize_time(f'{m.group(1)}:{m.group(2) or "00"} {start_ampm}')
    end = normalize_time(f'{m.group(4)}:{m.group(5) or "00"} {end_ampm}')
    return start, end


def extract_start_time(text: Optional[str]) -> Optional[str]:
    """First clock time carrying am/pm, as HH:MM:SS."""
    m = re.search(RE_CLOCK, normalize_unicode(text or ''), re.I)
    if not m:
        return None
    return normalize_time(m.group(0))


def normalize_age_text(raw: Optional[str]) -> Optional[str]:
    """Pick the '5y 3m' part out of a student-info cell."""
    text = clean_text(raw)
    if not text:
        return None
    m = re.search(RE_AGE, text, re.I)
    return m.group(0) if m else text


def capitalize_word(s: str) -> str:
    return s[:1].upper() + s[1:].lower()


def report_fingerprint(html: str) -> str:
    """SHA-256 hex digest of the document text, used to spot repeated uploads."""
    return hashlib.sha256(html.encode('utf-8')).hexdigest()
