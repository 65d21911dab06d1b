"""Tests for instructor retention extraction."""

import unittest

from reports import InstructorRetentionRow, RetentionParser, extract_instructor_retention
from reports.retention import retention_percent

from tests.reports_tests.fixtures import (
    RETENTION_RAW_LINES_HTML,
    RETENTION_ROW_TEXT_HTML,
    retention_html,
)


def _summary(booked_at=None, retained_at=None):
    cells = ["" for _ in range(15)]
    for idx, value in (booked_at or {}).items():
        cells[idx] = value
    for idx, value in (retained_at or {}).items():
        cells[idx] = value
    for idx in range(10, 15):
        cells[idx] = cells[idx] or "-"
    return cells


class TestRetentionPercent(unittest.TestCase):
    def test_percent(self):
        self.assertEqual(retention_percent(20, 18), 90.0)
        self.assertEqual(retention_percent(3, 1), 33.33)

    def test_zero_retained_is_zero_percent(self):
        self.assertEqual(retention_percent(5, 0), 0.0)

    def test_missing_counts(self):
        self.assertIsNone(retention_percent(0, 5))
        self.assertIsNone(retention_percent(None, 5))
        self.assertIsNone(retention_percent(5, None))


class TestStructuralRetention(unittest.TestCase):
    def test_block_totals(self):
        html = retention_html(_summary({6: "20"}, {9: "18"}))
        rows = extract_instructor_retention(html)
        self.assertEqual(rows, [InstructorRetentionRow(
            instructor_name="John Doe",
            starting_headcount=20,
            ending_headcount=18,
            retention_percent=90.0,
        )])

    def test_last_value_of_each_block_is_total(self):
        html = retention_html(_summary({0: "4", 3: "7", 5: "12"}, {8: "10"}))
        (row,) = extract_instructor_retention(html)
        self.assertEqual((row.starting_headcount, row.ending_headcount), (12, 10))
        self.assertEqual(row.retention_percent, 83.33)

    def test_missing_retained_block(self):
        html = retention_html(_summary({6: "20"}))
        (row,) = extract_instructor_retention(html)
        self.assertEqual(row.starting_headcount, 20)
        self.assertIsNone(row.ending_headcount)
        self.assertIsNone(row.retention_percent)

    def test_totals_heading_is_skipped(self):
        html = retention_html(_summary({6: "20"}, {9: "18"})).replace("Doe, John", "Totals")
        self.assertEqual(RetentionParser().parse(html), [])


class TestTextRetention(unittest.TestCase):
    def test_row_text_strategy(self):
        rows = extract_instructor_retention(RETENTION_ROW_TEXT_HTML)
        self.assertEqual(rows, [InstructorRetentionRow("Jane Smith", 10, 8, 80.0)])

    def test_raw_line_strategy(self):
        rows = extract_instructor_retention(RETENTION_RAW_LINES_HTML)
        self.assertEqual(rows, [InstructorRetentionRow("Amy Lee", 12, 9, 75.0)])

    def test_nothing_matches(self):
        self.assertEqual(extract_instructor_retention("<p>Instructor Retention</p>"), [])


if __name__ == "__main__":
    unittest.main()
