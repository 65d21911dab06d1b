"""Data model for parsed report records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, TypeVar, Union

RowT = TypeVar('RowT')


@dataclass
class DateRange:
    """A date range as printed in the report (M/D/YYYY strings)."""

    start: Optional[str] = None
    end: Optional[str] = None
    raw: Optional[str] = None


@dataclass
class ReportMetadata:
    """Classification of one uploaded report document."""

    report_type: str
    detected_location_name: Optional[str] = None
    detected_location_ids: List[str] = field(default_factory=list)
    date_ranges: List[DateRange] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class KnownLocation:
    id: str
    name: str
    code: str = ''

    @classmethod
    def coerce(cls, value: Union['KnownLocation', Mapping[str, Any]]) -> 'KnownLocation':
        """Accept a KnownLocation or a mapping with id/name/code keys."""
        if isinstance(value, KnownLocation):
            return value
        return cls(
            id=str(value.get('id') or ''),
            name=str(value.get('name') or ''),
            code=str(value.get('code') or ''),
        )


@dataclass
class ParsedClass:
    """One scheduled class occurrence from a roll sheet."""

    class_name: str
    schedule_text: Optional[str] = None
    class_date: Optional[str] = None      # YYYY-MM-DD
    start_time: Optional[str] = None      # HH:MM:SS
    end_time: Optional[str] = None
    scheduled_instructor: Optional[str] = None
    actual_instructor: Optional[str] = None
    is_sub: bool = False


@dataclass
class ParsedRosterEntry:
    """One swimmer's attendance record for one class occurrence."""

    swimmer_name: str
    class_date: Optional[str] = None
    start_time: Optional[str] = None
    class_name: Optional[str] = None
    age_text: Optional[str] = None
    program: Optional[str] = None
    level: Optional[str] = None

    instructor_name: Optional[str] = None
    instructor_name_raw: Optional[str] = None
    instructor_name_norm: Optional[str] = None
    scheduled_instructor: Optional[str] = None
    actual_instructor: Optional[str] = None
    is_sub: bool = False
    zone: Optional[int] = None

    # 0 = absence detected, None = unknown
    attendance: Optional[int] = None
    attendance_auto_absent: bool = False

    flag_first_time: bool = False
    flag_makeup: bool = False
    flag_policy: bool = False
    flag_owes: bool = False
    flag_trial: bool = False
    balance_amount: Optional[float] = None


@dataclass
class InstructorRetentionRow:
    instructor_name: str
    starting_headcount: Optional[int] = None
    ending_headcount: Optional[int] = None
    retention_percent: Optional[float] = None


@dataclass
class AgedAccountsRow:
    bucket: str
    amount: Optional[float] = None
    total: Optional[float] = None


@dataclass
class DropListRow:
    swimmer_name: str
    drop_date: Optional[str] = None
    reason: Optional[str] = None


@dataclass
class EnrollmentRow:
    swimmer_name: str
    event_date: Optional[str] = None


@dataclass
class AcneLeadRow:
    full_name: str
    lead_date: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class ReportParseResult(Generic[RowT]):
    rows: List[RowT] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class ParsedReport:
    """Everything the router could extract from one document."""

    metadata: ReportMetadata
    classes: List[ParsedClass] = field(default_factory=list)
    entries: List[ParsedRosterEntry] = field(default_factory=list)
    rows: List[Any] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
