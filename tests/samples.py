"""
Small REPY report fragments shared by the tests.

Lines are in visual order, exactly as they are printed in the report.
"""

from pathlib import Path
from typing import List

from repy.lines import (
    COURSE_SEP,
    FACULTY_SEP,
    GROUP_SEP_1,
    GROUP_SEP_2,
    SPORTS_BLANK_LINE_2,
    SPORTS_COURSE_SEP,
    SPORTS_FACULTY_SEP,
)

DATA_DIR = Path(__file__).resolve().parent / "data"

FACULTY_NAME_LINE = "|        בשחמה יעדמל הטלוקפה - תועש תכרעמ |"
FACULTY_NAME = "הפקולטה למדעי המחשב"
SEMESTER_LINE = '|                     ז"עשת ףרוח רטסמס |'
SEMESTER = 'חורף תשע"ז'

HOURS_LINE = "|3.0 :קנ          1-ת 2-ה:עובשב הארוה תועש |"
TEST_DATE_LINE = "|             11/02/16 'ה  םוי: ןושאר דעומ |"
LECTURE_LINE = "|      בואט 009  10.30-12.30'ג :האצרה      |"

SPORTS_SEMESTER_LINE = '|     ז"עשת ףרוח רטסמס - טרופס תועוצקמ |'


def fixture_lines(name: str) -> List[str]:
    return (DATA_DIR / name).read_text(encoding="utf-8").splitlines()


def course_block(course_id: int, visual_name: str = "עדימ ןוסחא תוכרעמ") -> List[str]:
    return [
        COURSE_SEP,
        f"|                {visual_name}  {course_id} |",
        HOURS_LINE,
        COURSE_SEP,
        TEST_DATE_LINE,
        GROUP_SEP_1,
        GROUP_SEP_2,
        LECTURE_LINE,
        COURSE_SEP,
    ]


def faculty_lines(*courses: List[str]) -> List[str]:
    lines = ["", FACULTY_SEP, FACULTY_NAME_LINE, SEMESTER_LINE, FACULTY_SEP]
    for block in courses:
        lines.extend(block)
    lines.append("")
    return lines


def sports_faculty_lines() -> List[str]:
    return [
        "",
        SPORTS_FACULTY_SEP,
        SPORTS_SEMESTER_LINE,
        SPORTS_FACULTY_SEP,
        SPORTS_COURSE_SEP,
        "|                      לסרודכ  394800 |",
        "|1.0 :קנ     2-ת:עובשב הארוה תועש |",
        SPORTS_COURSE_SEP,
        SPORTS_BLANK_LINE_2,
        "|              םלוא  10.30-12.30'א  םירבג  11 |",
        "|                    12.30-14.30'ג              |",
        SPORTS_BLANK_LINE_2,
        "|              םלוא  16.30-18.30'ד  םישנ  12 |",
        SPORTS_COURSE_SEP,
        "",
    ]
