"""
Unit tests for the text helpers.

Covers script reversal, whitespace handling, years, times of day and the
symbol tables.
"""

import unittest

from repy.model import GroupType, Weekday
from repy.text import (
    dedupe_spaces,
    fix_two_digit_year,
    format_time_of_day,
    group_type_from_word,
    hours_field_from_descriptor,
    normalize_cell,
    parse_time_of_day,
    reverse_script,
    weekday_from_letter,
)


class TestStrings(unittest.TestCase):
    def test_reverse_script(self) -> None:
        self.assertEqual(reverse_script("עדימ ןוסחא תוכרעמ"), "מערכות אחסון מידע")
        self.assertEqual(reverse_script(""), "")

    def test_dedupe_spaces_collapses_only_with_double_space(self) -> None:
        self.assertEqual(dedupe_spaces("  a   b  c "), "a b c")
        # no double space: only trimmed, the tab survives
        self.assertEqual(dedupe_spaces(" a b\tc "), "a b\tc")

    def test_normalize_cell(self) -> None:
        self.assertEqual(normalize_cell(' רגדי.ג   ר"ד '), 'ד"ר ג.ידגר')


class TestNumbers(unittest.TestCase):
    def test_fix_two_digit_year(self) -> None:
        self.assertEqual(fix_two_digit_year(16), 2016)
        self.assertEqual(fix_two_digit_year(99), 2099)
        self.assertEqual(fix_two_digit_year(100), 100)
        self.assertEqual(fix_two_digit_year(2016), 2016)

    def test_parse_time_of_day(self) -> None:
        self.assertEqual(parse_time_of_day("6.30"), 390)
        self.assertEqual(parse_time_of_day(" 6.30"), 390)
        self.assertEqual(parse_time_of_day("16.30"), 16 * 60 + 30)
        self.assertEqual(parse_time_of_day("16.00"), 960)

    def test_parse_time_of_day_rejects_garbage(self) -> None:
        for bad in ("630", "6.3x", "", "1.2.3", "-1.30"):
            with self.assertRaises(ValueError):
                parse_time_of_day(bad)

    def test_format_time_of_day(self) -> None:
        self.assertEqual(format_time_of_day(0), "00:00")
        self.assertEqual(format_time_of_day(60), "01:00")
        self.assertEqual(format_time_of_day(90), "01:30")

    def test_time_of_day_survives_formatting(self) -> None:
        for minutes in (0, 60, 90, 1439):
            self.assertEqual(parse_time_of_day(format_time_of_day(minutes)), minutes)


class TestSymbolTables(unittest.TestCase):
    def test_weekdays(self) -> None:
        self.assertEqual(weekday_from_letter("א"), Weekday.SUNDAY)
        self.assertEqual(weekday_from_letter("ש"), Weekday.SATURDAY)
        with self.assertRaises(ValueError):
            weekday_from_letter("ז")

    def test_group_types(self) -> None:
        self.assertEqual(group_type_from_word("האצרה"), GroupType.LECTURE)
        # both spellings of "tutorial" appear in reports
        self.assertEqual(group_type_from_word("ליגרת"), GroupType.TUTORIAL)
        self.assertEqual(group_type_from_word("לוגרת"), GroupType.TUTORIAL)
        self.assertEqual(group_type_from_word("הדבעמ"), GroupType.LAB)
        with self.assertRaises(ValueError):
            group_type_from_word("ןימס")

    def test_hour_descriptors(self) -> None:
        self.assertEqual(hours_field_from_descriptor("פ"), "project")
        with self.assertRaises(ValueError):
            hours_field_from_descriptor("x")


if __name__ == "__main__":
    unittest.main()
