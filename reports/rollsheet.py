"""Roll sheet parser: one ParsedClass per scheduled class block."""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from core.collections import dedupe

from .base import ReportParser, extract_report_year, first_result
from .constants import RE_CLASS_ON_DAY, RE_CLASS_WITH
from .instructors import comma_list_items, header_instructor, instructor_cell, resolve_instructors
from .markup import Markup
from .model import ParsedClass
from .text_utils import clean_text, parse_date_text, parse_schedule_times

LOG = logging.getLogger(__name__)


def extract_class_name(header: str) -> str:
    """Class name from a block header.

    'Beginner 1 on Monday: 4:00 pm' -> 'Beginner 1'
    'Starfish with Smith, Jane' -> 'Starfish'
    """
    text = clean_text(header)
    for pattern in (RE_CLASS_ON_DAY, RE_CLASS_WITH):
        m = re.match(pattern, text, re.I)
        if m:
            return m.group(1).strip()
    return text


def class_blocks(doc: Markup) -> List[Markup]:
    blocks = doc.select('.condensed-mode > div')
    if blocks:
        return blocks
    return [child for container in doc.select('.condensed-mode') for child in container.children()]


def block_header(block: Markup) -> str:
    span = block.select_one('.full-width-header span')
    return span.clean_text() if span else ''


def block_header_date(block: Markup) -> str:
    spans = block.select('.full-width-header .no-wrap span')
    return spans[-1].clean_text() if spans else ''


def _schedule_from_label(block: Markup) -> Optional[str]:
    cell = block.labelled_cell('Schedule:')
    return cell.clean_text() or None if cell else None


def _schedule_from_details(block: Markup) -> Optional[str]:
    text = ' '.join(t.text() for t in block.select('table.schedule-details'))
    return clean_text(text) or None


SCHEDULE_STRATEGIES = (
    _schedule_from_label,
    _schedule_from_details,
)


def _listed_instructors(block: Markup) -> List[str]:
    cell = instructor_cell(block)
    if cell is None:
        return []
    return [name for name in (li.clean_text() for li in cell.find_all('li')) if name]


INSTRUCTOR_LIST_STRATEGIES = (
    _listed_instructors,
    comma_list_items,
)


def _class_date(block: Markup, header_date: str, report_year: Optional[int]) -> Optional[str]:
    found = parse_date_text(header_date, report_year)
    if found:
        return found
    label = block.select_one('.class-date')
    return parse_date_text(label.clean_text(), report_year) if label else None


def class_key(item: ParsedClass) -> Tuple[str, str, str]:
    return (item.class_name, item.class_date or '', item.start_time or '')


class RollSheetParser(ReportParser):
    """Parser for iClassPro roll sheet exports (condensed mode)."""

    def extract(self, doc: Markup, html: str) -> List[ParsedClass]:
        report_year = extract_report_year(html)
        classes: List[ParsedClass] = []
        blocks = class_blocks(doc)
        for block in blocks:
            item = self._parse_block(block, report_year)
            if item is not None:
                classes.append(item)
        out = dedupe(classes, key_fn=class_key)
        LOG.debug('rollsheet blocks=%d classes=%d unique=%d', len(blocks), len(classes), len(out))
        return out

    def _parse_block(self, block: Markup, report_year: Optional[int]) -> Optional[ParsedClass]:
        header = block_header(block)
        class_name = extract_class_name(header)
        if not class_name:
            return None

        schedule_text = first_result(SCHEDULE_STRATEGIES, block) or header
        start_time, end_time = parse_schedule_times(schedule_text)

        names = first_result(INSTRUCTOR_LIST_STRATEGIES, block) or []
        who = resolve_instructors(names, header_instructor(header))

        return ParsedClass(
            class_name=class_name,
            schedule_text=schedule_text or None,
            class_date=_class_date(block, block_header_date(block), report_year),
            start_time=start_time,
            end_time=end_time,
            scheduled_instructor=who.scheduled,
            actual_instructor=who.actual,
            is_sub=who.is_sub,
        )


# Functional API
def parse_rollsheet(html: str) -> List[ParsedClass]:
    """Parse scheduled classes from a roll sheet report.

    Args:
        html: Report document

    Returns:
        ParsedClass list, deduplicated by (class_name, class_date, start_time)
    """
    return RollSheetParser().parse(html)
