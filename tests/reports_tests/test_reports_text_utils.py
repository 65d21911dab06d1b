"""Tests for reports/text_utils.py normalization helpers."""

import unittest

from reports.text_utils import (
    clean_text,
    extract_start_time,
    has_sub_marker,
    last_first_to_first_last,
    normalize_age_text,
    normalize_for_roster,
    normalize_header,
    normalize_instructor_name,
    normalize_location_name,
    normalize_name,
    normalize_time,
    parse_balance,
    parse_date_text,
    parse_money,
    parse_schedule_times,
    parse_us_date,
    report_fingerprint,
    surname_first_to_first_last,
)


class TestParseUsDate(unittest.TestCase):
    def test_two_digit_year_is_2000s(self):
        self.assertEqual(parse_us_date("2/5/26"), "2026-02-05")

    def test_four_digit_year(self):
        self.assertEqual(parse_us_date("02/05/2026"), "2026-02-05")

    def test_finds_first_token_in_text(self):
        self.assertEqual(parse_us_date("Dropped on 1/2/2024 (moved)"), "2024-01-02")

    def test_three_digit_year_rejected(self):
        self.assertIsNone(parse_us_date("1/2/202"))

    def test_impossible_date_rejected(self):
        self.assertIsNone(parse_us_date("2/30/2026"))

    def test_empty_and_none(self):
        self.assertIsNone(parse_us_date(""))
        self.assertIsNone(parse_us_date(None))
        self.assertIsNone(parse_us_date("no date here"))


class TestParseDateText(unittest.TestCase):
    def test_full_date_wins(self):
        self.assertEqual(parse_date_text("Mon 2/2/2025", 2026), "2025-02-02")

    def test_month_day_uses_report_year(self):
        self.assertEqual(parse_date_text("2/2", 2026), "2026-02-02")

    def test_month_day_without_year_is_none(self):
        self.assertIsNone(parse_date_text("2/2"))


class TestHeadersAndNames(unittest.TestCase):
    def test_normalize_header(self):
        self.assertEqual(normalize_header("Student Name"), "studentname")
        self.assertEqual(normalize_header(" 1-30 Days "), "130days")
        self.assertEqual(normalize_header(None), "")

    def test_location_name_uses_header_rule(self):
        self.assertEqual(normalize_location_name("West-Side  Aquatics!"), "westsideaquatics")

    def test_clean_text(self):
        self.assertEqual(clean_text("  a \n\t b c "), "a b c")
        self.assertEqual(clean_text(None), "")

    def test_last_first_reorder(self):
        self.assertEqual(last_first_to_first_last("Smith, Jane"), "Jane Smith")
        self.assertEqual(last_first_to_first_last("Jane  Smith"), "Jane Smith")

    def test_surname_first_reorder(self):
        self.assertEqual(surname_first_to_first_last("Doe John Paul"), "John Paul Doe")
        self.assertEqual(surname_first_to_first_last("Doe, John"), "John Doe")
        self.assertEqual(surname_first_to_first_last("Cher"), "Cher")

    def test_normalize_name_drops_titles_and_parentheticals(self):
        self.assertEqual(normalize_name("Smith, Jane (sub)"), "jane smith")
        self.assertEqual(normalize_name("Coach Jane Smith"), "jane smith")
        self.assertEqual(normalize_name("J. R. Smith"), "j r smith")
        self.assertEqual(normalize_name(None), "")

    def test_normalize_instructor_name(self):
        self.assertEqual(normalize_instructor_name("Doe, John (sub)"), "John Doe")
        self.assertEqual(normalize_instructor_name("Doe, John*"), "John Doe")
        self.assertEqual(normalize_instructor_name("(sub)"), "")

    def test_sub_markers(self):
        self.assertTrue(has_sub_marker("Doe, John (SUB)"))
        self.assertTrue(has_sub_marker("Doe, John *"))
        self.assertFalse(has_sub_marker("Doe, John"))

    def test_normalize_for_roster(self):
        self.assertEqual(normalize_for_roster("Smith, Jane (sub)"), "smith jane")


class TestTimes(unittest.TestCase):
    def test_normalize_time(self):
        self.assertEqual(normalize_time("4:30 pm"), "16:30:00")
        self.assertEqual(normalize_time("12 am"), "00:00:00")
        self.assertEqual(normalize_time("12:15 pm"), "12:15:00")
        self.assertEqual(normalize_time("16:05"), "16:05:00")
        self.assertIsNone(normalize_time("noon"))

    def test_schedule_range_end_inherits_meridiem(self):
        self.assertEqual(parse_schedule_times("4:00 - 4:30 pm"), ("04:00:00", "16:30:00"))
        self.assertEqual(parse_schedule_times("4:00 pm - 4:30"), ("16:00:00", "16:30:00"))

    def test_schedule_range_missing(self):
        self.assertEqual(parse_schedule_times("TBD"), (None, None))

    def test_extract_start_time_handles_en_dash(self):
        self.assertEqual(extract_start_time("Mon 9:15 am–9:45 am"), "09:15:00")
        self.assertIsNone(extract_start_time("Mon 9:15"))


class TestMoneyAndMisc(unittest.TestCase):
    def test_parse_money(self):
        self.assertEqual(parse_money("$1,234.50"), 1234.5)
        self.assertEqual(parse_money("-$20"), -20.0)
        self.assertIsNone(parse_money("n/a"))
        self.assertIsNone(parse_money(""))

    def test_parse_balance(self):
        self.assertEqual(parse_balance("Balance: $1,012.50"), 1012.5)
        self.assertIsNone(parse_balance("Paid in full"))

    def test_normalize_age_text(self):
        self.assertEqual(normalize_age_text("Age 5y 3m (Beginner)"), "5y 3m")
        self.assertEqual(normalize_age_text("unknown"), "unknown")
        self.assertIsNone(normalize_age_text("  "))

    def test_fingerprint_is_stable_sha256(self):
        a = report_fingerprint("<html></html>")
        self.assertEqual(a, report_fingerprint("<html></html>"))
        self.assertEqual(len(a), 64)
        self.assertNotEqual(a, report_fingerprint("<html> </html>"))


if __name__ == "__main__":
    unittest.main()
