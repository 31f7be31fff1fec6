import unittest

from repy.lines import (
    BLANK_LINE_1,
    is_separator_line,
    match_event,
    match_faculty_name,
    match_faculty_semester,
    match_hours_and_points,
    match_id_and_name,
    match_lecturer_in_charge,
    match_location,
    match_sports_event,
    match_sports_semester,
    match_teacher,
    match_test_date,
)


class TestHeaderLines(unittest.TestCase):
    def test_faculty_name_and_semester(self) -> None:
        m = match_faculty_name("|        בשחמה יעדמל הטלוקפה - תועש תכרעמ |")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.name.strip(), "בשחמה יעדמל הטלוקפה")

        s = match_faculty_semester('|                     ז"עשת ףרוח רטסמס |')
        self.assertIsNotNone(s)
        assert s is not None
        self.assertEqual(s.semester.strip(), 'ז"עשת ףרוח')

    def test_sports_semester(self) -> None:
        s = match_sports_semester('|     ז"עשת ףרוח רטסמס - טרופס תועוצקמ |')
        self.assertIsNotNone(s)
        assert s is not None
        self.assertEqual(s.semester.strip(), 'ז"עשת ףרוח')

    def test_id_and_name(self) -> None:
        m = match_id_and_name("|                עדימ ןוסחא תוכרעמ  234322 |")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.course_id, "234322")
        self.assertEqual(m.name.strip(), "עדימ ןוסחא תוכרעמ")

    def test_id_and_name_needs_five_digits(self) -> None:
        self.assertIsNone(match_id_and_name("|                עדימ ןוסחא תוכרעמ  2343 |"))

    def test_hours_and_points(self) -> None:
        m = match_hours_and_points("|3.0 :קנ          1-ת 2-ה:עובשב הארוה תועש |")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.points, "3.0")
        self.assertEqual(m.hours.split(), ["1-ת", "2-ה"])


class TestHeadInfoLines(unittest.TestCase):
    def test_test_dates(self) -> None:
        first = match_test_date("|             11/02/16 'ה  םוי: ןושאר דעומ |")
        self.assertEqual(tuple(first), ("11", "02", "16"))

        second = match_test_date("|             08/03/16 'ג  םוי:   ינש דעומ |")
        self.assertEqual(tuple(second), ("08", "03", "16"))

    def test_lecturer_in_charge(self) -> None:
        m = match_lecturer_in_charge('|         ןהכ לאינד ר"ד : יארחא הרומ |')
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.name.strip(), 'ןהכ לאינד ר"ד')

    def test_separator_lines(self) -> None:
        self.assertTrue(is_separator_line("|                              ----------- |"))
        self.assertTrue(is_separator_line(BLANK_LINE_1))
        self.assertFalse(is_separator_line("|             11/02/16 'ה  םוי: ןושאר דעומ |"))


class TestGroupLines(unittest.TestCase):
    def test_event_opening_a_group(self) -> None:
        m = match_event("|      בואט 005  17.30-18.30'ג :ליגרת  11  |")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual((m.start_hour, m.start_minute), ("17", "30"))
        self.assertEqual((m.end_hour, m.end_minute), ("18", "30"))
        self.assertEqual(m.weekday, "ג")
        self.assertEqual(m.group_type, "ליגרת")
        self.assertEqual(m.group_id, "11")
        self.assertEqual(m.location.strip(), "בואט 005")

    def test_event_without_group_fields(self) -> None:
        m = match_event("|      בואט 009  14.30-15.30'ה              |")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.group_type, "")
        self.assertEqual(m.group_id, "")

    def test_placeholder_group_is_not_an_event(self) -> None:
        self.assertIsNone(match_event("|                     -        :ליגרת  13  |"))

    def test_teacher_line(self) -> None:
        m = match_teacher('|                רגדי.ג    ר"ד : הצרמ      |')
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.role, "lecturer")
        self.assertEqual(m.name.strip(), 'רגדי.ג    ר"ד')

        tutor = match_teacher("|                  ןהכ .א : לגרתמ      |")
        self.assertIsNotNone(tutor)
        assert tutor is not None
        self.assertEqual(tutor.role, "tutor")

    def test_sports_event(self) -> None:
        m = match_sports_event("|              םלוא  10.30-12.30'א  םירבג  11 |")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.weekday, "א")
        self.assertEqual(m.description.strip(), "םירבג")
        self.assertEqual(m.group_id, "11")

    def test_location(self) -> None:
        parts = match_location("בואט 009 ")
        self.assertEqual(tuple(parts), ("בואט", "009"))
        self.assertIsNone(match_location("םלוא"))


if __name__ == "__main__":
    unittest.main()
