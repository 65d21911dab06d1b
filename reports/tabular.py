"""Generic table reports: aged accounts, drop list, new enrollments, ACNE leads.

The data table is the first one with a header row (>= 2 ``th`` cells, or
>= 2 ``td`` cells). Each field maps to the first header column whose
normalized text contains one of the field's aliases.
"""
from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .base import ReportParser, ensure_html
from .constants import (
    ACNE_ALIASES,
    AGED_ACCOUNTS_ALIASES,
    AGING_BUCKETS,
    AGING_SKIP_HEADERS,
    AGING_TOTAL_LABEL,
    DROP_LIST_ALIASES,
    ENROLLMENT_ALIASES,
    TOTAL_ROW_LABELS,
    WARN_NO_ROWS_PARSED,
    WARN_TABLE_NOT_FOUND,
)
from .markup import Markup, cell_texts
from .model import (
    AcneLeadRow,
    AgedAccountsRow,
    DropListRow,
    EnrollmentRow,
    ReportParseResult,
)
from .text_utils import clean_text, normalize_header, parse_money, parse_us_date

LOG = logging.getLogger(__name__)

Aliases = Mapping[str, Sequence[str]]


@dataclass
class LocatedTable:
    """Header-to-column map plus the cell texts of every data row."""

    header_map: Dict[str, int] = field(default_factory=dict)
    data_rows: List[List[str]] = field(default_factory=list)

    def get(self, cells: List[str], key: str) -> str:
        idx = self.header_map.get(key)
        if idx is None or idx >= len(cells):
            return ''
        return clean_text(cells[idx])


def map_headers(headers: Sequence[str], aliases: Aliases) -> Dict[str, int]:
    """Map each field to the first normalized header containing one of its aliases."""
    out: Dict[str, int] = {}
    for key, names in aliases.items():
        wanted = [normalize_header(name) for name in names]
        for idx, header in enumerate(headers):
            if header and any(w in header for w in wanted):
                out[key] = idx
                break
    return out


def _header_row(rows: List[Markup]) -> Optional[Tuple[int, List[Markup]]]:
    for idx, tr in enumerate(rows):
        ths = tr.find_all('th')
        nodes = ths if len(ths) >= 2 else tr.find_all('td')
        if len(nodes) >= 2:
            return idx, nodes
    return None


def find_table(doc: Markup, aliases: Aliases) -> Optional[LocatedTable]:
    for table in doc.find_all('table'):
        rows = table.find_all('tr')
        found = _header_row(rows)
        if found is None:
            continue
        idx, nodes = found
        headers = [normalize_header(node.clean_text()) for node in nodes]
        data = [cells for cells in (cell_texts(tr) for tr in rows[idx + 1:]) if cells]
        return LocatedTable(header_map=map_headers(headers, aliases), data_rows=data)
    return None


def locate_table(html: str, aliases: Aliases) -> Optional[LocatedTable]:
    """Find the first table with a header row and resolve aliases against it."""
    return find_table(Markup.parse(ensure_html(html)), aliases)


class TableReportParser(ReportParser):
    """Base for header-alias driven table reports."""

    aliases: Aliases = MappingProxyType({})

    def extract(self, doc: Markup, html: str) -> ReportParseResult:
        table = find_table(doc, self.aliases)
        if table is None:
            return ReportParseResult(warnings=[WARN_TABLE_NOT_FOUND])
        rows = [row for row in (self.build_row(table, cells) for cells in table.data_rows) if row is not None]
        LOG.debug('%s columns=%s rows=%d/%d', type(self).__name__, table.header_map,
                  len(rows), len(table.data_rows))
        return ReportParseResult(rows=rows, warnings=[] if rows else [WARN_NO_ROWS_PARSED])

    @abstractmethod
    def build_row(self, table: LocatedTable, cells: List[str]) -> Optional[Any]:
        """Typed row from one data row's cell texts, or None to drop it."""
        pass


def _bucket_columns(headers: Sequence[str]) -> List[Tuple[str, int]]:
    columns: List[Tuple[str, int]] = []
    for idx, header in enumerate(headers):
        if not header or any(skip in header for skip in AGING_SKIP_HEADERS):
            continue
        label = next((name for frag, name in AGING_BUCKETS if frag in header), None)
        if label is None and header == AGING_TOTAL_LABEL.lower():
            label = AGING_TOTAL_LABEL
        if label is not None:
            columns.append((label, idx))
    return columns


def guardian_aging_rows(doc: Markup) -> List[AgedAccountsRow]:
    """Bucket sums from a per-guardian aged accounts table.

    Each guardian row carries one column per aging bucket. Columns are
    summed over all rows except the 'Totals' row; the Total column (or,
    without one, the bucket sum) is shared as every row's ``total``.
    """
    for table in doc.find_all('table'):
        rows = table.find_all('tr')
        if len(rows) < 2:
            continue
        headers = [normalize_header(c.clean_text()) for c in rows[0].find_all('th', 'td')]
        has_guardian = any('guardian' in h for h in headers)
        if not (has_guardian and any('current' in h or 'total' in h for h in headers)):
            continue
        columns = _bucket_columns(headers)
        if not columns:
            continue

        sums: Dict[str, float] = {}
        column_total = 0.0
        for tr in rows[1:]:
            cells = cell_texts(tr)
            if not cells or cells[0].lower().startswith('totals'):
                continue
            for label, idx in columns:
                if label != AGING_TOTAL_LABEL:
                    sums.setdefault(label, 0.0)
                value = parse_money(cells[idx]) if idx < len(cells) else None
                if value is None:
                    continue
                if label == AGING_TOTAL_LABEL:
                    column_total += value
                else:
                    sums[label] += value

        overall = round(column_total or sum(sums.values()), 2)
        out = [AgedAccountsRow(bucket=label, amount=round(amount, 2), total=overall)
               for label, amount in sums.items()]
        if out:
            return out
    return []


class AgedAccountsParser(TableReportParser):
    aliases = AGED_ACCOUNTS_ALIASES

    def extract(self, doc: Markup, html: str) -> ReportParseResult:
        buckets = guardian_aging_rows(doc)
        if buckets:
            LOG.debug('aged accounts: guardian-level table, buckets=%d', len(buckets))
            return ReportParseResult(rows=buckets)
        return super().extract(doc, html)

    def build_row(self, table: LocatedTable, cells: List[str]) -> Optional[AgedAccountsRow]:
        bucket = table.get(cells, 'bucket')
        if not bucket or bucket.lower() in TOTAL_ROW_LABELS:
            return None
        amount = parse_money(table.get(cells, 'amount'))
        total = parse_money(table.get(cells, 'total'))
        return AgedAccountsRow(bucket=bucket, amount=amount, total=total if total is not None else amount)


class DropListParser(TableReportParser):
    aliases = DROP_LIST_ALIASES

    def build_row(self, table: LocatedTable, cells: List[str]) -> Optional[DropListRow]:
        name = table.get(cells, 'swimmer')
        if not name:
            return None
        return DropListRow(
            swimmer_name=name,
            drop_date=parse_us_date(table.get(cells, 'date')),
            reason=table.get(cells, 'reason') or None,
        )


class EnrollmentParser(TableReportParser):
    aliases = ENROLLMENT_ALIASES

    def build_row(self, table: LocatedTable, cells: List[str]) -> Optional[EnrollmentRow]:
        name = table.get(cells, 'swimmer')
        if not name:
            return None
        return EnrollmentRow(swimmer_name=name, event_date=parse_us_date(table.get(cells, 'date')))


class AcneLeadsParser(TableReportParser):
    aliases = ACNE_ALIASES

    def build_row(self, table: LocatedTable, cells: List[str]) -> Optional[AcneLeadRow]:
        name = table.get(cells, 'name')
        if not name:
            return None
        return AcneLeadRow(
            full_name=name,
            lead_date=parse_us_date(table.get(cells, 'date')),
            email=table.get(cells, 'email') or None,
            phone=table.get(cells, 'phone') or None,
        )


# Functional API
def extract_aged_accounts(html: str) -> ReportParseResult:
    return AgedAccountsParser().parse(html)


def extract_drop_list(html: str) -> ReportParseResult:
    return DropListParser().parse(html)


def extract_enrollment_events(html: str) -> ReportParseResult:
    """Rows of the New Enrollments report."""
    return EnrollmentParser().parse(html)


def extract_acne_leads(html: str) -> ReportParseResult:
    """Guardian leads from the ACNE (accounts created, not enrolled) report."""
    return AcneLeadsParser().parse(html)
