"""Sample iClassPro report documents used across the report tests."""

from __future__ import annotations

KNOWN_LOCATIONS = [
    {"id": "loc-west", "name": "Westside Aquatics", "code": "WEST"},
    {"id": "loc-east", "name": "Eastside Swim Center", "code": "EAST"},
]


ROLLSHEET_HTML = """<html><head>
<script>var filters = {"startDate":"2026-02-01", locations: ['Westside Aquatics']};</script>
<style>.condensed-mode { font-size: 9px; }</style>
</head><body>
<h1>Roll Sheets</h1>
<p>Location: Westside Aquatics</p>
<p>02/01/2026 - 02/07/2026</p>
<div class="condensed-mode">
  <div>
    <div class="full-width-header">
      <span>Beginner 1 on Monday: 4:00 pm with Smith, Jane</span>
      <span class="no-wrap"><span>Mon</span><span>2/2</span></span>
    </div>
    <table>
      <tr><th>Schedule:</th><td>4:00 pm - 4:30 pm</td></tr>
      <tr><th>Instructors:</th><td><ul><li>Smith, Jane</li><li>Doe, John (sub)</li></ul></td></tr>
    </table>
  </div>
  <div>
    <div class="full-width-header">
      <span>Beginner 1 on Monday: 4:00 pm with Smith, Jane</span>
      <span class="no-wrap"><span>Mon</span><span>2/2</span></span>
    </div>
    <table>
      <tr><th>Schedule:</th><td>4:00 pm - 4:30 pm</td></tr>
      <tr><th>Instructors:</th><td><ul><li>Smith, Jane</li><li>Doe, John (sub)</li></ul></td></tr>
    </table>
  </div>
  <div>
    <div class="full-width-header"><span>Starfish with Lee, Amy</span></div>
    <div class="class-date">02/07/2026</div>
    <table class="schedule-details"><tr><td>Sat 9:00 am - 9:30 am</td></tr></table>
  </div>
</div>
</body></html>
"""


ROSTER_HTML = """<html><head>
<script>var filters = {"startDate":"2026-02-01"};</script>
</head><body>
<h1>Roster</h1>
<p>Location: Eastside Swim Center</p>
<p>02/01/2026 - 02/14/2026</p>
<div style="page-break-inside: avoid">
  <div class="full-width-header">
    <span>Beginner 1 on Monday: 4:00 pm with Smith, Jane</span>
    <span class="no-wrap"><span>2/2/2026</span></span>
  </div>
  <table>
    <tr><th>Schedule:</th><td>Mon 4:00 pm - 4:30 pm</td></tr>
    <tr><th>Program:</th><td><span>GROUP</span></td></tr>
    <tr><th>Zone:</th><td><span>Zone 2</span></td></tr>
    <tr><th>Instructors:</th><td><ul><li>Smith, Jane</li><li>Doe, John (sub)</li></ul></td></tr>
  </table>
  <p>GROUP: beginner 1</p>
  <table class="table-roll-sheet">
    <thead><tr>
      <th>Student</th><th>Info</th><th>Icons</th><th>Balance</th><th>2/2</th><th>2/9</th>
    </tr></thead>
    <tbody>
      <tr>
        <td class="student-name"><strong>Roe, Jane</strong></td>
        <td class="student-info">5y 3m</td>
        <td class="icons"><img src="/images/icons/1st-ever.png"></td>
        <td>Balance: $12.50</td>
        <td class="date-time">absent</td>
        <td class="date-time"></td>
      </tr>
      <tr>
        <td class="student-name"><strong>Poe, Max</strong></td>
        <td class="student-info">7y</td>
        <td class="icons"><img src="/images/icons/trial.png"></td>
        <td></td>
        <td class="date-time">⊘</td>
        <td class="date-time"></td>
      </tr>
    </tbody>
  </table>
</div>
<div style="page-break-inside: avoid">
  <div class="full-width-header"><span>Private Lesson with Lee, Amy</span></div>
  <table><tr><th>Schedule:</th><td>TBD</td></tr></table>
  <table class="table-roll-sheet">
    <tbody><tr><td class="student-name"><strong>Skipped, Kid</strong></td></tr></tbody>
  </table>
</div>
</body></html>
"""


def retention_html(summary_cells):
    """Instructor Retention report with one instructor block.

    summary_cells are the 15 data cells after the two leading label cells.
    """
    tds = "".join(f"<td>{c}</td>" for c in summary_cells)
    return f"""<html><body>
<h1>Instructor Retention</h1>
<table>
  <tr><td colspan="17"><h2>Doe, John</h2></td></tr>
  <tr><td>Week</td><td></td>{"".join(f"<td>W{i}</td>" for i in range(15))}</tr>
  <tr class="bg-shaded"><td>Totals</td><td></td>{tds}</tr>
</table>
</body></html>
"""


RETENTION_ROW_TEXT_HTML = """<html><body>
<h1>Instructor Retention</h1>
<table>
  <tr><th>Instructor</th><th>Booked</th><th>%</th><th>Retained</th><th>Retention</th></tr>
  <tr><td>Smith Jane</td><td>10</td><td>50%</td><td>8</td><td>80.0%</td></tr>
</table>
</body></html>
"""


RETENTION_RAW_LINES_HTML = """<html><body>
<h1>Instructor Retention</h1>
<p>Lee Amy 12 40% 9 75.0%</p>
</body></html>
"""


DROP_LIST_HTML = """<html><body>
<h1>Drop List</h1>
<p>Location: Westside Aquatics</p>
<p>01/01/2024 - 01/31/2024</p>
<table>
  <tr><th>Drop Date</th><th>Student Name</th><th>Reason</th></tr>
  <tr><td>01/02/2024</td><td>Jane Roe</td><td>Moved</td></tr>
</table>
</body></html>
"""


ENROLLMENT_HTML = """<html><body>
<h1>New Enrollments</h1>
<table>
  <thead><tr><th>Student Name</th><th>Start Date</th><th>Class</th></tr></thead>
  <tbody>
    <tr><td>Max Poe</td><td>2/5/26</td><td>Starfish</td></tr>
    <tr><td></td><td>2/6/26</td><td>Starfish</td></tr>
  </tbody>
</table>
</body></html>
"""


ACNE_HTML = """<html><body>
<h1>Accounts Created Not Enrolled</h1>
<table>
  <tr><th>Guardian</th><th>Created</th><th>Email</th><th>Phone</th></tr>
  <tr><td>Pat Roe</td><td>03/04/2026</td><td>pat@example.com</td><td>555-0100</td></tr>
  <tr><td>Sam Poe</td><td></td><td></td><td></td></tr>
</table>
</body></html>
"""


AGED_ACCOUNTS_HTML = """<html><body>
<h1>Aged Accounts</h1>
<table>
  <tr><th>Aging Bucket</th><th>Balance</th><th>Total</th></tr>
  <tr><td>Current</td><td>$100.00</td><td>$150.00</td></tr>
  <tr><td>1-30</td><td>$50.00</td><td></td></tr>
  <tr><td>Total</td><td>$150.00</td><td>$150.00</td></tr>
</table>
</body></html>
"""


GUARDIAN_AGED_ACCOUNTS_HTML = """<html><body>
<h1>Aged Accounts</h1>
<table>
  <tr>
    <th>Guardian</th><th>Phone</th><th>Current</th><th>1-30</th>
    <th>31-60</th><th>61-90</th><th>91+</th><th>Total</th>
  </tr>
  <tr>
    <td>Doe, Jane</td><td>555-0101</td><td>$10.00</td><td>$5.00</td>
    <td></td><td></td><td></td><td>$15.00</td>
  </tr>
  <tr>
    <td>Roe, Max</td><td>555-0102</td><td>$20.00</td><td></td>
    <td>$0.00</td><td></td><td>$4.50</td><td>$24.50</td>
  </tr>
  <tr>
    <td>Totals</td><td></td><td>$30.00</td><td>$5.00</td>
    <td>$0.00</td><td>$0.00</td><td>$4.50</td><td>$39.50</td>
  </tr>
</table>
</body></html>
"""


UNKNOWN_HTML = """<html><body>
<h1>Staff Payroll</h1>
<p>Nothing to see here.</p>
</body></html>
"""
