"""Constants for the report parsers.

Regex patterns and lookup tables shared across extractors.
"""
from types import MappingProxyType

# Report type classification, checked in order; first hit wins.
# "Roster" must stay after the more specific roll sheet patterns.
REPORT_TYPES = (
    ('instructor_retention', (r'Instructor Retention',)),
    ('aged_accounts', (r'Aged Accounts',)),
    ('drop_list', (r'Drop List',)),
    ('new_enrollments', (r'New Enrollments', r'New Enrollment', r'Enrollment List')),
    ('acne', (r'ACNE', r'Accounts Created Not Enrolled', r'Phonebook Report', r'Family Phonebook')),
    ('roll_sheets', (r'Roll Sheets', r'Rollsheet', r'Roster History')),
    ('roster', (r'Roster',)),
)
REPORT_TYPE_UNKNOWN = 'unknown'
REPORT_KINDS = tuple(key for key, _ in REPORT_TYPES)

# Warning codes
WARN_LOCATION_NOT_DETECTED = 'location_not_detected'
WARN_DATE_RANGE_NOT_DETECTED = 'date_range_not_detected'
WARN_TABLE_NOT_FOUND = 'table_not_found'
WARN_NO_ROWS_PARSED = 'no_rows_parsed'
WARN_NO_PARSER = 'no_parser_for_report_type'

# Dates and times
RE_US_DATE = r'(\d{1,2})/(\d{1,2})/(\d{2,4})'
RE_US_DATE_TOKEN = r'\b\d{1,2}/\d{1,2}/\d{2,4}\b'
RE_FULL_DATE = r'(\d{1,2})/(\d{1,2})/(\d{4})'
RE_MONTH_DAY = r'(\d{1,2})/(\d{1,2})'
RE_HEADER_DATE = r'(\d{1,2})/(\d{1,2})(?:/(\d{4}))?'
RE_SECTION_RANGE = r'(\d{1,2})/(\d{1,2})/(\d{4})\s*(?:→|->|–|—|-)\s*(\d{1,2})/(\d{1,2})/(\d{4})'
RE_REPORT_YEAR = r'"startDate"\s*:\s*"(\d{4})-(\d{2})-(\d{2})'
RE_TIME_RANGE = r'(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\s*[–—-]\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)?'
RE_CLOCK = r'(\d{1,2})(?::(\d{2}))?\s*(am|pm)'

# Metadata detection
RE_LOCATION_LABEL = r'Location:\s*([^|\n\r]+)'
RE_SCRIPT_LOCATIONS = (
    r'locations\s*:\s*\[(.*?)\]',
    r'filters\.locations\s*=\s*\[(.*?)\]',
)

# Class headers
RE_CLASS_ON_DAY = r'^(.+?)\s+on\s+\w+\s*:'
RE_CLASS_WITH = r'^(.+?)\s+with\s+'
RE_HEADER_INSTRUCTOR = r'\s+with\s+(.+?)(?:\s{2,}|Zone:|Program:|Schedule:|Capacity:|Ages:|$)'
RE_INSTRUCTOR_LABEL = r'^Instructors?:'

# Roster cells
RE_GROUP_LEVEL = r'GROUP:\s*(Beginner|Intermediate|Advanced|Swimmer)\s*(\d+)'
RE_ZONE = r'Zone\s*(\d+)'
RE_BALANCE = r'Balance:\s*\$?([-\d,.]+)'
RE_AGE = r'\d+\s*y\s*\d+\s*m|\d+\s*y|\d+\s*m'
BALANCE_CELL_INDEX = 3

# Icon filename -> roster flag attribute
ICON_FLAGS = MappingProxyType({
    '1st-ever.png': 'flag_first_time',
    'balance.png': 'flag_owes',
    'birthday.png': 'flag_makeup',
    'makeup.png': 'flag_makeup',
    'policy.png': 'flag_policy',
    'trial.png': 'flag_trial',
})

# Attendance cues
CIRCLE_SLASH_GLYPHS = ('ø', '⌀', '⊘')
ABSENT_TEXT_MARKERS = ('absent', 'no show', 'noshow')
ABSENT_CLASS_MARKERS = ('absent', 'no-show', 'noshow', 'strike')
ABSENT_IMAGE_MARKERS = ('x-modifier', 'absent', 'no-show', 'noshow')
AUTO_ABSENT_IMAGE_MARKER = 'cancel'

# Instructor names
NAME_TITLES = ('coach', 'sub', 'deck', 'instructor')
ROLLSHEET_FALLBACK_ITEMS = 5

# Retention
RE_RETENTION_ROW = r'^(.*?)\s+(\d+)\s+\d+(?:\.\d+)?%\s+(\d+)\s+([\d.]+)%'
RETENTION_SKIP_COLUMNS = 2
RETENTION_BOOKED_SLICE = slice(0, 7)
RETENTION_RETAINED_SLICE = slice(8, 15)

# Generic tabular header aliases
AGED_ACCOUNTS_ALIASES = MappingProxyType({
    'bucket': ('bucket', 'aging bucket', 'agingbucket', 'age bucket', 'aging'),
    'amount': ('amount', 'balance', 'current balance', 'currentbalance', 'ar', 'total balance'),
    'total': ('total', 'total balance', 'totalbalance'),
})
DROP_LIST_ALIASES = MappingProxyType({
    'date': ('drop date',),
    'swimmer': ('student', 'swimmer', 'child'),
    'reason': ('reason', 'drop reason', 'notes'),
})
ENROLLMENT_ALIASES = MappingProxyType({
    'date': ('start date', 'enrollment date', 'created date', 'new enrollment'),
    'swimmer': ('student', 'swimmer', 'child'),
})
ACNE_ALIASES = MappingProxyType({
    'date': ('account created', 'created', 'lead date', 'date'),
    'name': ('guardian', 'guardians', 'account', 'lead', 'name'),
    'email': ('email', 'email address'),
    'phone': ('primary phone', 'phone', 'phone number', 'mobile'),
})
TOTAL_ROW_LABELS = ('total', 'grand total', 'totals')

# Guardian-level aged accounts: (normalized header fragment, bucket label), checked in order
AGING_BUCKETS = (
    ('unappliedcredit', 'Unapplied Credit'),
    ('current', 'Current'),
    ('130', '1-30'),
    ('3160', '31-60'),
    ('6190', '61-90'),
    ('91', '91+'),
)
AGING_SKIP_HEADERS = ('guardian', 'phone', 'address', 'email', 'lastpaymentdate', 'lastpayment')
AGING_TOTAL_LABEL = 'Total'
