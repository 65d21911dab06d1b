"""Report metadata detection: report type, location label and date ranges."""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from core.collections import dedupe

from .base import ensure_html, first_result
from .constants import (
    RE_LOCATION_LABEL,
    RE_SCRIPT_LOCATIONS,
    RE_US_DATE_TOKEN,
    REPORT_TYPE_UNKNOWN,
    REPORT_TYPES,
    WARN_DATE_RANGE_NOT_DETECTED,
    WARN_LOCATION_NOT_DETECTED,
)
from .markup import Markup, body_of
from .model import DateRange, ReportMetadata
from .text_utils import clean_text, parse_us_date

LOG = logging.getLogger(__name__)


def detect_report_type(html: str) -> str:
    """Classify a report by the first matching title pattern."""
    for key, patterns in REPORT_TYPES:
        if any(re.search(p, html, re.I) for p in patterns):
            return key
    return REPORT_TYPE_UNKNOWN


def _location_from_header_cell(doc: Markup) -> Optional[str]:
    cell = doc.labelled_cell('Location')
    return clean_text(cell.text()) or None if cell else None


def _location_from_text(doc: Markup) -> Optional[str]:
    m = re.search(RE_LOCATION_LABEL, body_of(doc).visible_text('\n'), re.I)
    return clean_text(m.group(1)) or None if m else None


LOCATION_LABEL_STRATEGIES = (
    _location_from_header_cell,
    _location_from_text,
)


def parse_script_locations(html: str) -> List[str]:
    """Location names from embedded filter arrays, first appearance order."""
    names: List[str] = []
    for pattern in RE_SCRIPT_LOCATIONS:
        m = re.search(pattern, html, re.I | re.S)
        if not m:
            continue
        for chunk in m.group(1).split(','):
            name = clean_text(re.sub(r'[\[\]"\']', '', chunk))
            if name:
                names.append(name)
    return dedupe(names)


def find_date_ranges(text: str) -> List[DateRange]:
    """At most one range from the first two date tokens; a single token is a point range."""
    dates = re.findall(RE_US_DATE_TOKEN, text)
    if len(dates) >= 2:
        return [DateRange(start=dates[0], end=dates[1], raw=f'{dates[0]} - {dates[1]}')]
    if len(dates) == 1:
        return [DateRange(start=dates[0], raw=dates[0])]
    return []


def ordered_range(rng: DateRange) -> DateRange:
    """Swap a range printed end-first so start <= end."""
    start_iso = parse_us_date(rng.start or rng.raw)
    end_iso = parse_us_date(rng.end)
    if start_iso and end_iso and end_iso < start_iso:
        return DateRange(start=rng.end, end=rng.start, raw=rng.raw)
    return rng


def metadata_from_markup(doc: Markup, html: str) -> ReportMetadata:
    report_type = detect_report_type(html)
    label = first_result(LOCATION_LABEL_STRATEGIES, doc)
    script_names = parse_script_locations(html)

    warnings: List[str] = []
    if not label and not script_names:
        warnings.append(WARN_LOCATION_NOT_DETECTED)

    text = clean_text(body_of(doc).visible_text())
    date_ranges = [ordered_range(r) for r in find_date_ranges(text)]
    if not date_ranges:
        warnings.append(WARN_DATE_RANGE_NOT_DETECTED)

    LOG.debug('detected type=%s location=%r script_locations=%s ranges=%d',
              report_type, label, script_names, len(date_ranges))
    return ReportMetadata(
        report_type=report_type,
        detected_location_name=label or (script_names[0] if script_names else None),
        date_ranges=date_ranges,
        warnings=warnings,
    )


def detect_report_metadata(html: str) -> ReportMetadata:
    """Classify a report and pull its location label and date range.

    ``detected_location_ids`` is left empty; see ``reports.preflight``.

    Raises:
        ReportInputError: If html is not a non-blank string
    """
    html = ensure_html(html)
    return metadata_from_markup(Markup.parse(html), html)


def candidates_from_markup(doc: Markup, html: str) -> List[str]:
    label = first_result(LOCATION_LABEL_STRATEGIES, doc)
    out = ([label] if label else []) + parse_script_locations(html)
    return dedupe([clean_text(name) for name in out if clean_text(name)])


def detect_location_candidates(html: str) -> List[str]:
    """Location names worth matching: the label value, then script filter names."""
    html = ensure_html(html)
    return candidates_from_markup(Markup.parse(html), html)
