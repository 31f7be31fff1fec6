"""
Line classification for REPY reports.

Two kinds of things live here:

- literal lines (separators and blank fillers) that must match byte for byte
- one match_* function per line grammar, returning a small NamedTuple with
  the raw captured substrings, or None if the line is of another kind

Nothing here reverses text or converts numbers. The parser decides which
grammars to try at each point and how to normalize each captured field.

All Hebrew in the patterns is in visual (reversed) order, exactly as it
appears in the report.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


# ---------------------------------------------------------------------------
# Literal lines
# ---------------------------------------------------------------------------

FACULTY_SEP = "+==========================================+"
COURSE_SEP = "+------------------------------------------+"
GROUP_SEP_1 = "|               ++++++                  .סמ|"
GROUP_SEP_2 = "|                                     םושיר|"
BLANK_LINE_1 = "|                               -----      |"
BLANK_LINE_2 = "|                                          |"

SPORTS_FACULTY_SEP = "+===============================================================+"
SPORTS_COURSE_SEP = "+---------------------------------------------------------------+"
SPORTS_BLANK_LINE_1 = "|                                             -----------       |"
SPORTS_BLANK_LINE_2 = "|                                                               |"

# Lines that end a course's free-text block, in either sub-format.
HEAD_INFO_TERMINATORS = frozenset(
    [GROUP_SEP_1, COURSE_SEP, SPORTS_COURSE_SEP, BLANK_LINE_2, SPORTS_BLANK_LINE_2]
)

SPORTS_FACULTY_NAME = "מקצועות ספורט"


@dataclass(frozen=True)
class Dialect:
    """
    Literal lines of one report sub-format.
    """

    name: str
    faculty_sep: str
    course_sep: str
    blank_lines: Tuple[str, ...]
    sports: bool


ORDINARY = Dialect(
    name="ordinary",
    faculty_sep=FACULTY_SEP,
    course_sep=COURSE_SEP,
    blank_lines=(BLANK_LINE_1, BLANK_LINE_2),
    sports=False,
)

SPORTS = Dialect(
    name="sports",
    faculty_sep=SPORTS_FACULTY_SEP,
    course_sep=SPORTS_COURSE_SEP,
    blank_lines=(SPORTS_BLANK_LINE_1, SPORTS_BLANK_LINE_2),
    sports=True,
)


# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------

FACULTY_NAME_RE = re.compile(r"\| *([א-ת\-\.,\* ]+) *- *תועש תכרעמ *\|")
FACULTY_SEMESTER_RE = re.compile(r'\| *([א-ת" ]+) +רטסמס *\|')
SPORTS_SEMESTER_RE = re.compile(r'\| *([א-ת" ]+) +רטסמס *- *טרופס תועוצקמ *\|')

ID_AND_NAME_RE = re.compile(r"\| *(.*) +([0-9]{5,6}) +\|")
HOURS_AND_POINTS_RE = re.compile(
    r"\| *([0-9]+\.[0-9]+) *:קנ *(([0-9]+-[התפמ] *)+):עובשב הארוה תועש *\|"
)

# The exam time printed at the end of these lines is not captured.
TEST_DATE_RE = re.compile(
    r"\|.*([0-9]{2})/([0-9]{2})/([0-9]{2}) *'. +םוי *:.*דעומ +\|"
)
LECTURER_IN_CHARGE_RE = re.compile(r"\| *(.*) : *יארחא *הרומ *\|")
SEPARATOR_LINE_RE = re.compile(r"\| +-+ *\|")

TEACHER_RE = re.compile(r"\| *(.*) *: *(הצרמ|לגרתמ) *\|")

_TIMES = (
    r"(?P<start_hour>[0-9]{1,2})\.(?P<start_minute>[0-9]{2})- *"
    r"(?P<end_hour>[0-9]{1,2})\.(?P<end_minute>[0-9]{2})'"
    r"(?P<weekday>[אבגדהוש])"
)

EVENT_RE = re.compile(
    r"\| *"
    r"(?P<location>.*) +"
    + _TIMES
    + r" "
    r"(:(?P<group_type>[א-ת]+))?"
    r" +(?P<group_id>[0-9]+)? "
    r"*\|"
)

SPORTS_EVENT_RE = re.compile(
    r"\| *"
    r"(?P<location>.*)? +"
    + _TIMES
    + r" +"
    r"(?P<description>[א-ת\.\- \"']+)? +"
    r"(?P<group_id>[0-9]+)? "
    r"*\|"
)

TEACHER_ROLES = {"הצרמ": "lecturer", "לגרתמ": "tutor"}

# "<building> <room>" inside a location cell
STANDARD_LOCATION_RE = re.compile(r"([א-ת\.]+) ([0-9]+)")


class FacultyNameLine(NamedTuple):
    name: str


class SemesterLine(NamedTuple):
    semester: str


class IDAndNameLine(NamedTuple):
    name: str
    course_id: str


class HoursAndPointsLine(NamedTuple):
    points: str
    hours: str


class ExamDateLine(NamedTuple):
    day: str
    month: str
    year: str


class LecturerInChargeLine(NamedTuple):
    name: str


class TeacherLine(NamedTuple):
    name: str
    role: str


class EventLine(NamedTuple):
    location: str
    start_hour: str
    start_minute: str
    end_hour: str
    end_minute: str
    weekday: str
    group_type: str
    group_id: str


class SportsEventLine(NamedTuple):
    location: str
    start_hour: str
    start_minute: str
    end_hour: str
    end_minute: str
    weekday: str
    description: str
    group_id: str


class LocationParts(NamedTuple):
    building: str
    room: str


def is_separator_line(line: str) -> bool:
    """
    Dashed filler lines inside a course's free-text block.
    """
    return SEPARATOR_LINE_RE.search(line) is not None


def match_faculty_name(line: str) -> Optional[FacultyNameLine]:
    m = FACULTY_NAME_RE.search(line)
    if m is None:
        return None
    return FacultyNameLine(m.group(1))


def match_faculty_semester(line: str) -> Optional[SemesterLine]:
    m = FACULTY_SEMESTER_RE.search(line)
    if m is None:
        return None
    return SemesterLine(m.group(1))


def match_sports_semester(line: str) -> Optional[SemesterLine]:
    m = SPORTS_SEMESTER_RE.search(line)
    if m is None:
        return None
    return SemesterLine(m.group(1))


def match_id_and_name(line: str) -> Optional[IDAndNameLine]:
    """
    ID and name come from a single pattern, so they match (or fail) together.
    """
    m = ID_AND_NAME_RE.search(line)
    if m is None:
        return None
    return IDAndNameLine(name=m.group(1), course_id=m.group(2))


def match_hours_and_points(line: str) -> Optional[HoursAndPointsLine]:
    m = HOURS_AND_POINTS_RE.search(line)
    if m is None:
        return None
    return HoursAndPointsLine(points=m.group(1), hours=m.group(2))


def match_test_date(line: str) -> Optional[ExamDateLine]:
    m = TEST_DATE_RE.search(line)
    if m is None:
        return None
    return ExamDateLine(day=m.group(1), month=m.group(2), year=m.group(3))


def match_lecturer_in_charge(line: str) -> Optional[LecturerInChargeLine]:
    m = LECTURER_IN_CHARGE_RE.search(line)
    if m is None:
        return None
    return LecturerInChargeLine(m.group(1))


def match_teacher(line: str) -> Optional[TeacherLine]:
    m = TEACHER_RE.search(line)
    if m is None:
        return None
    return TeacherLine(name=m.group(1), role=TEACHER_ROLES[m.group(2)])


def match_event(line: str) -> Optional[EventLine]:
    m = EVENT_RE.search(line)
    if m is None:
        return None
    return EventLine(**m.groupdict(default=""))


def match_sports_event(line: str) -> Optional[SportsEventLine]:
    m = SPORTS_EVENT_RE.search(line)
    if m is None:
        return None
    return SportsEventLine(**m.groupdict(default=""))


def match_location(text: str) -> Optional[LocationParts]:
    m = STANDARD_LOCATION_RE.search(text)
    if m is None:
        return None
    return LocationParts(building=m.group(1), room=m.group(2))
