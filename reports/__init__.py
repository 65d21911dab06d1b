"""iClassPro report parsing.

Classifies vendor HTML reports (roll sheets, rosters, instructor retention,
aged accounts, drop lists, new enrollments, ACNE leads) and extracts typed
records from them. Everything here is pure: one HTML string in, dataclasses
out. Detection gaps come back as None fields, empty lists and warning codes;
only input that is not an HTML string raises ``ReportInputError``.
"""
from __future__ import annotations

import logging
from typing import Optional

# Public API - Data Model
from .model import (
    AcneLeadRow,
    AgedAccountsRow,
    DateRange,
    DropListRow,
    EnrollmentRow,
    InstructorRetentionRow,
    KnownLocation,
    ParsedClass,
    ParsedReport,
    ParsedRosterEntry,
    ReportMetadata,
    ReportParseResult,
)

# Public API - Constants
from .constants import (
    ICON_FLAGS,
    REPORT_KINDS,
    REPORT_TYPE_UNKNOWN,
    REPORT_TYPES,
    WARN_DATE_RANGE_NOT_DETECTED,
    WARN_LOCATION_NOT_DETECTED,
    WARN_NO_PARSER,
    WARN_NO_ROWS_PARSED,
    WARN_TABLE_NOT_FOUND,
)

# Public API - Text Utilities
from .text_utils import (
    clean_text,
    last_first_to_first_last,
    normalize_header,
    normalize_instructor_name,
    normalize_location_name,
    normalize_name,
    parse_money,
    parse_us_date,
    report_fingerprint,
)

# Public API - Parsers
from .base import ReportInputError, ReportParser, ensure_html
from .markup import Markup
from .metadata import (
    candidates_from_markup,
    detect_location_candidates,
    detect_report_metadata,
    detect_report_type,
    metadata_from_markup,
)
from .preflight import is_resolved, preflight_report, resolve_locations
from .rollsheet import RollSheetParser, parse_rollsheet
from .roster import RosterParser, parse_roster_entries
from .retention import RetentionParser, extract_instructor_retention
from .tabular import (
    AcneLeadsParser,
    AgedAccountsParser,
    DropListParser,
    EnrollmentParser,
    LocatedTable,
    TableReportParser,
    extract_acne_leads,
    extract_aged_accounts,
    extract_drop_list,
    extract_enrollment_events,
    locate_table,
)

LOG = logging.getLogger(__name__)

TABLE_PARSERS = {
    'aged_accounts': AgedAccountsParser,
    'drop_list': DropListParser,
    'new_enrollments': EnrollmentParser,
    'acne': AcneLeadsParser,
}
CLASS_REPORT_KINDS = ('roll_sheets', 'roster')


def parse_report(html: str, kind: Optional[str] = None) -> ParsedReport:
    """Classify a report and run the matching extractor(s).

    Args:
        html: Report document
        kind: Force a report type (one of REPORT_KINDS); 'auto' or None
              uses the detected type

    Returns:
        ParsedReport. Roll sheet and roster reports fill ``classes`` and
        ``entries``; every other known type fills ``rows``.

    Raises:
        ReportInputError: If html is not a non-blank string or kind is unknown
    """
    html = ensure_html(html)
    k = (kind or '').strip().lower()
    if k not in ('', 'auto') and k not in REPORT_KINDS:
        raise ReportInputError(f'Unknown report kind: {kind}')

    doc = Markup.parse(html)
    meta = metadata_from_markup(doc, html)
    if k not in ('', 'auto'):
        meta.report_type = k
    report = ParsedReport(metadata=meta)
    report_type = meta.report_type

    if report_type in CLASS_REPORT_KINDS:
        report.classes = RollSheetParser().extract(doc, html)
        report.entries = RosterParser().extract(doc, html)
        if not report.classes and not report.entries:
            report.warnings.append(WARN_NO_ROWS_PARSED)
    elif report_type == 'instructor_retention':
        report.rows = RetentionParser().extract(doc, html)
        if not report.rows:
            report.warnings.append(WARN_NO_ROWS_PARSED)
    elif report_type in TABLE_PARSERS:
        result = TABLE_PARSERS[report_type]().extract(doc, html)
        report.rows = result.rows
        report.warnings.extend(result.warnings)
    else:
        report.warnings.append(WARN_NO_PARSER)

    LOG.debug('parsed %s: classes=%d entries=%d rows=%d warnings=%s', report_type,
              len(report.classes), len(report.entries), len(report.rows), report.warnings)
    return report


__all__ = [
    # Data Model
    'AcneLeadRow',
    'AgedAccountsRow',
    'DateRange',
    'DropListRow',
    'EnrollmentRow',
    'InstructorRetentionRow',
    'KnownLocation',
    'ParsedClass',
    'ParsedReport',
    'ParsedRosterEntry',
    'ReportMetadata',
    'ReportParseResult',
    # Constants
    'ICON_FLAGS',
    'REPORT_KINDS',
    'REPORT_TYPE_UNKNOWN',
    'REPORT_TYPES',
    'TABLE_PARSERS',
    'WARN_DATE_RANGE_NOT_DETECTED',
    'WARN_LOCATION_NOT_DETECTED',
    'WARN_NO_PARSER',
    'WARN_NO_ROWS_PARSED',
    'WARN_TABLE_NOT_FOUND',
    # Text Utilities
    'clean_text',
    'last_first_to_first_last',
    'normalize_header',
    'normalize_instructor_name',
    'normalize_location_name',
    'normalize_name',
    'parse_money',
    'parse_us_date',
    'report_fingerprint',
    # Parsers (OO)
    'Markup',
    'ReportInputError',
    'ReportParser',
    'RollSheetParser',
    'RosterParser',
    'RetentionParser',
    'TableReportParser',
    'AgedAccountsParser',
    'DropListParser',
    'EnrollmentParser',
    'AcneLeadsParser',
    'LocatedTable',
    # Functions
    'ensure_html',
    'candidates_from_markup',
    'metadata_from_markup',
    'detect_report_type',
    'detect_report_metadata',
    'detect_location_candidates',
    'resolve_locations',
    'preflight_report',
    'is_resolved',
    'parse_rollsheet',
    'parse_roster_entries',
    'extract_instructor_retention',
    'locate_table',
    'extract_aged_accounts',
    'extract_drop_list',
    'extract_enrollment_events',
    'extract_acne_leads',
    'parse_report',
]
