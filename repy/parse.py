"""
Parsing (REPY text -> Catalog).

The report is read strictly top to bottom through one Cursor. The nesting of
the report drives the parse:

    catalog -> faculty -> course -> (head info, groups) -> group -> event

Important rules (DO NOT CHANGE):
- A broken course never aborts its faculty: the error is logged as a warning
  and the cursor skips ahead to the next course separator.
- A broken faculty header aborts the whole parse.
- Events are only ever attached to the most recently opened group.
"""

from __future__ import annotations

from enum import Enum
from typing import BinaryIO, Iterable, Optional, Union

from repy.cursor import Cursor, LoggerLike
from repy.decode import REPY_ENCODING, check_encoding, iter_lines
from repy.errors import FatalParseError, ParseError
from repy.lines import (
    BLANK_LINE_1,
    BLANK_LINE_2,
    COURSE_SEP,
    FACULTY_SEP,
    GROUP_SEP_1,
    GROUP_SEP_2,
    HEAD_INFO_TERMINATORS,
    ORDINARY,
    SPORTS,
    SPORTS_BLANK_LINE_2,
    SPORTS_COURSE_SEP,
    SPORTS_FACULTY_NAME,
    SPORTS_FACULTY_SEP,
    Dialect,
    EventLine,
    SportsEventLine,
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
from repy.model import Catalog, Course, Date, Event, Faculty, Group, GroupType, Weekday
from repy.text import (
    collapse_spaces,
    fix_two_digit_year,
    group_type_from_word,
    hours_field_from_descriptor,
    normalize_cell,
    reverse_script,
    weekday_from_letter,
)


# The first group of a course is usually printed without its number.
FIRST_GROUP_ID = 10


class Phase(Enum):
    AWAITING_FACULTY = "awaiting faculty"
    FACULTY_HEADER = "faculty header"
    AWAITING_COURSE = "awaiting course"
    COURSE_HEADER = "course header"
    COURSE_METADATA = "course metadata"
    GROUP_BLOCK = "group block"
    DONE = "done"


class Parser:
    """
    Builds a Catalog from a stream of decoded report lines.

    One Parser handles exactly one report. To parse several reports (also
    concurrently), create one Parser each.
    """

    def __init__(self, lines: Iterable[str], logger: Optional[LoggerLike] = None) -> None:
        self.cursor = Cursor(lines, logger)
        self.phase = Phase.AWAITING_FACULTY
        self.group_id = FIRST_GROUP_ID

    # -----------------------------------------------------------------------
    # Catalog / faculties
    # -----------------------------------------------------------------------

    def parse_catalog(self) -> Catalog:
        """
        Parse faculties until the input runs out.

        Any ParseError that escapes a faculty aborts the whole parse.
        """
        catalog: Catalog = []

        while True:
            try:
                faculty = self.parse_faculty()
            except ParseError as err:
                raise ParseError(self.cursor.line, "failed to parse a faculty") from err

            if faculty is None:
                break

            self.cursor.info("Parsed %s", faculty)
            catalog.append(faculty)

        self.phase = Phase.DONE
        return catalog

    def parse_faculty(self) -> Optional[Faculty]:
        """
        Parse one faculty, or return None if only blank lines are left.
        """
        cur = self.cursor
        self.phase = Phase.AWAITING_FACULTY

        while cur.text().strip() == "":
            if not cur.advance():
                return None

        self.phase = Phase.FACULTY_HEADER

        if cur.text() == SPORTS_FACULTY_SEP:
            faculty = self._parse_sports_faculty_header()
            dialect = SPORTS
        elif cur.text() == FACULTY_SEP:
            faculty = self._parse_faculty_header()
            dialect = ORDINARY
        else:
            raise ParseError(cur.line, f"Expected faculty separator, but got {cur.text()!r}")

        self._parse_courses(faculty, dialect)
        return faculty

    def _parse_faculty_header(self) -> Faculty:
        cur = self.cursor
        faculty = Faculty()

        try:
            cur.expect(FACULTY_SEP)
        except ParseError as err:
            raise ParseError(cur.line, "didn't find 1st faculty separator line in faculty") from err

        m = match_faculty_name(cur.text())
        if m is None:
            raise ParseError(cur.line, f"Line {cur.text()!r} doesn't match faculty name pattern")
        faculty.name = normalize_cell(m.name)
        cur.advance()

        s = match_faculty_semester(cur.text())
        if s is None:
            raise ParseError(cur.line, f"Line {cur.text()!r} doesn't match faculty semester pattern")
        faculty.semester = normalize_cell(s.semester)
        cur.advance()

        try:
            cur.expect(FACULTY_SEP)
        except ParseError as err:
            raise ParseError(cur.line, "didn't find 2nd faculty separator line in faculty") from err

        return faculty

    def _parse_sports_faculty_header(self) -> Faculty:
        cur = self.cursor
        cur.info("Started scanning sports faculty")

        try:
            cur.expect(SPORTS_FACULTY_SEP)
        except ParseError as err:
            raise ParseError(cur.line, "didn't find 1st faculty separator line in sports faculty") from err

        m = match_sports_semester(cur.text())
        if m is None:
            raise ParseError(cur.line, f"Line {cur.text()!r} doesn't match sports semester pattern")
        cur.advance()

        faculty = Faculty(name=SPORTS_FACULTY_NAME, semester=normalize_cell(m.semester))

        try:
            cur.expect(SPORTS_FACULTY_SEP)
        except ParseError as err:
            raise ParseError(cur.line, "didn't find 2nd faculty separator line in sports faculty") from err

        return faculty

    def _parse_courses(self, faculty: Faculty, dialect: Dialect) -> None:
        """
        Course loop of one faculty, including recovery from broken courses.
        """
        cur = self.cursor

        while True:
            first_line = cur.line
            try:
                course = self.parse_course(dialect)
            except ParseError as err:
                cur.warning(
                    "Failed to parse a %s course in faculty %s (%s): %s",
                    dialect.name,
                    faculty.name,
                    self.phase.value,
                    err,
                )
                self._skip_to_next_course(dialect, first_line)
                continue

            if course is None:
                return

            faculty.courses.append(course)

    def _skip_to_next_course(self, dialect: Dialect, first_line: int) -> None:
        """
        Drop input up to the next course separator, end of faculty or end of input.
        """
        cur = self.cursor

        while cur.text() not in (dialect.course_sep, ""):
            if not cur.advance():
                break

        cur.warning("Skipped to next course, dropped lines %d-%d", first_line, cur.line)

    # -----------------------------------------------------------------------
    # Courses
    # -----------------------------------------------------------------------

    def parse_course(self, dialect: Dialect = ORDINARY) -> Optional[Course]:
        """
        Parse one course, or return None at the end of the faculty.

        Precondition: the cursor is on the course's opening separator (or
        directly on its id-and-name line). Postcondition: the cursor is on
        the first line after the course's closing separator.
        """
        cur = self.cursor
        self.phase = Phase.AWAITING_COURSE
        self.group_id = FIRST_GROUP_ID

        while cur.text() == dialect.course_sep:
            cur.advance()

        if cur.text() == "":
            return None

        course = Course()
        self.phase = Phase.COURSE_HEADER

        try:
            self._parse_id_and_name(course)
        except ParseError as err:
            raise ParseError(cur.line, f"failed to parse ID and name in {dialect.name} course") from err

        try:
            self._parse_hours_and_points(course)
        except ParseError as err:
            cur.warning("Invalid hours and points line in course %d: %s", course.id, err)
            cur.advance()

        try:
            cur.expect(dialect.course_sep)
        except ParseError as err:
            raise ParseError(cur.line, "didn't find expected course separator when parsing course") from err

        self.phase = Phase.COURSE_METADATA
        try:
            self._parse_head_info(course)
        except ParseError as err:
            raise ParseError(cur.line, f"failed to parse head info of course {course.id}") from err

        self.phase = Phase.GROUP_BLOCK
        try:
            if dialect.sports:
                self._parse_sports_groups(course)
            else:
                self._parse_groups(course)
        except ParseError as err:
            raise ParseError(cur.line, f"failed to parse groups for course {course.id}") from err

        cur.debug("Got all %d groups for course %d", len(course.groups), course.id)
        return course

    def _parse_id_and_name(self, course: Course) -> None:
        cur = self.cursor
        m = match_id_and_name(cur.text())
        if m is None:
            raise ParseError(cur.line, f"Line {cur.text()!r} doesn't match id-and-name pattern")

        course.name = normalize_cell(m.name)
        course.id = cur.parse_uint(m.course_id)
        cur.advance()

    def _parse_hours_and_points(self, course: Course) -> None:
        cur = self.cursor
        m = match_hours_and_points(cur.text())
        if m is None:
            raise ParseError(cur.line, f"Line {cur.text()!r} doesn't match hours-and-points pattern")

        course.academic_points = cur.parse_float(m.points)

        # e.g. "1-ת 2-ה": one tutorial hour, two lecture hours
        for descriptor in m.hours.split():
            count, _, letter = descriptor.partition("-")
            try:
                attr = hours_field_from_descriptor(letter)
            except ValueError as err:
                raise ParseError(cur.line, f"couldn't parse total-hours {m.hours!r}: {err}") from None
            setattr(course.weekly_hours, attr, cur.parse_uint(count))

        cur.advance()

    def _parse_head_info(self, course: Course) -> None:
        """
        Free text, exam dates and lecturer in charge, up to the group block.
        """
        cur = self.cursor
        notes = []

        while cur.text() not in HEAD_INFO_TERMINATORS:
            text = cur.text()

            date = match_test_date(text)
            lecturer = match_lecturer_in_charge(text) if date is None else None

            if is_separator_line(text):
                pass
            elif date is not None:
                # The exam time at the end of the line is dropped.
                course.test_dates.append(
                    Date(
                        year=fix_two_digit_year(cur.parse_uint(date.year)),
                        month=cur.parse_uint(date.month),
                        day=cur.parse_uint(date.day),
                    )
                )
            elif lecturer is not None:
                course.lecturer_in_charge = normalize_cell(lecturer.name)
            else:
                notes.append(reverse_script(text.strip("| ")) + "\n")

            if not cur.advance():
                raise ParseError(cur.line, "Reached end of input in course head info")

        course.notes = "".join(notes).strip()

    # -----------------------------------------------------------------------
    # Groups and events
    # -----------------------------------------------------------------------

    def _parse_groups(self, course: Course) -> None:
        cur = self.cursor

        if cur.text() not in (GROUP_SEP_1, BLANK_LINE_2):
            cur.warning(
                "Expected either %r or %r, got %r; skipping groups of course %d",
                GROUP_SEP_1,
                BLANK_LINE_2,
                cur.text(),
                course.id,
            )
            return

        while True:
            text = cur.text()

            if text == GROUP_SEP_1:
                cur.advance()
                try:
                    cur.expect(GROUP_SEP_2)
                except ParseError as err:
                    raise ParseError(cur.line, "didn't find 2nd expected group separator") from err
                # Every separated block of groups starts at the next multiple of ten
                if self.group_id > FIRST_GROUP_ID:
                    self.group_id = (self.group_id // 10) * 10 + 10
            elif text == COURSE_SEP:
                cur.advance()
                return
            elif text in (BLANK_LINE_1, BLANK_LINE_2):
                cur.advance()
            elif self._parse_event_line(course):
                pass
            elif self._parse_teacher_line(course):
                cur.advance()
            else:
                cur.warning("Ignored group line %r", text)
                if not cur.advance():
                    raise ParseError(cur.line, "Reached end of input in group block")

    def _parse_event_line(self, course: Course) -> bool:
        """
        Returns True iff the current line was consumed as an event line.

        A line that also names a group type opens a new group first.
        """
        cur = self.cursor
        m = match_event(cur.text())
        if m is None:
            return False

        event = self._event_from_line(m)

        if m.group_type:
            try:
                group_type = group_type_from_word(m.group_type)
            except ValueError as err:
                cur.warning("Failed to parse group type %r: %s", m.group_type, err)
                return False

            if m.group_id:
                group_id = cur.parse_uint(m.group_id)
            else:
                group_id = self.group_id
            self.group_id = group_id + 1

            course.groups.append(Group(id=group_id, type=group_type))

        self._attach_event(course, event)
        cur.advance()
        return True

    def _parse_teacher_line(self, course: Course) -> bool:
        cur = self.cursor
        m = match_teacher(cur.text())
        if m is None:
            return False

        name = normalize_cell(collapse_spaces(m.name))
        if not course.groups:
            cur.warning("No group to add %s %r to", m.role, name)
        else:
            course.groups[-1].teachers.append(name)
        return True

    def _parse_sports_groups(self, course: Course) -> None:
        cur = self.cursor

        if cur.text() != SPORTS_BLANK_LINE_2:
            cur.warning("Expected %r, got %r; skipping groups of course %d", SPORTS_BLANK_LINE_2, cur.text(), course.id)
            return

        while True:
            text = cur.text()

            if text in SPORTS.blank_lines:
                cur.advance()
                continue

            if text == SPORTS_COURSE_SEP:
                cur.advance()
                return

            m = match_sports_event(text)
            if m is None:
                cur.warning("Ignored sports line %r", text)
                if not cur.advance():
                    raise ParseError(cur.line, "Reached end of input in sports group block")
                continue

            event = self._event_from_line(m)

            if m.group_id:
                course.groups.append(
                    Group(
                        id=cur.parse_uint(m.group_id),
                        type=GroupType.SPORT,
                        description=normalize_cell(collapse_spaces(m.description)),
                    )
                )

            self._attach_event(course, event)
            cur.advance()

    def _attach_event(self, course: Course, event: Event) -> None:
        if not course.groups:
            self.cursor.warning("Couldn't establish a group, nowhere to add event %r", self.cursor.text())
            return
        course.groups[-1].events.append(event)

    def _event_from_line(self, m: Union[EventLine, SportsEventLine]) -> Event:
        cur = self.cursor
        return Event(
            day=self._weekday(m.weekday),
            start_minute=cur.parse_uint(m.start_hour) * 60 + cur.parse_uint(m.start_minute),
            end_minute=cur.parse_uint(m.end_hour) * 60 + cur.parse_uint(m.end_minute),
            location=self._location(m.location),
        )

    def _weekday(self, letter: str) -> Weekday:
        try:
            return weekday_from_letter(letter)
        except ValueError as err:
            raise FatalParseError(self.cursor.line, str(err)) from None

    def _location(self, text: str) -> str:
        """
        "<building> <room>" cells become "<building> <room number>".
        """
        parts = match_location(text)
        if parts is None:
            return normalize_cell(text)
        return f"{normalize_cell(parts.building)} {self.cursor.parse_uint(parts.room)}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_lines(lines: Iterable[str], logger: Optional[LoggerLike] = None) -> Catalog:
    """
    Parse already decoded report lines (visual order, as printed).
    """
    return Parser(lines, logger).parse_catalog()


def parse_text(text: str, logger: Optional[LoggerLike] = None) -> Catalog:
    return parse_lines(text.splitlines(), logger)


def read_file(
    repy: Union[BinaryIO, bytes],
    logger: Optional[LoggerLike] = None,
    encoding: str = REPY_ENCODING,
) -> Catalog:
    """
    Decode a raw REPY report (bytes or binary stream) and parse it.
    """
    encoding = check_encoding(encoding)
    return parse_lines(iter_lines(repy, encoding), logger)
