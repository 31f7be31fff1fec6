"""
Text normalization helpers for REPY table cells.

REPY is a print job of a right-to-left report stored in visual order, so
every Hebrew text cell has to be reversed before it reads correctly. The
helpers here are stateless; anything that needs a line number for its error
message lives on the cursor instead.
"""

from __future__ import annotations

import re
from typing import Dict

from repy.model import GroupType, Weekday


# ---------------------------------------------------------------------------
# Symbol tables
# ---------------------------------------------------------------------------

WEEKDAY_LETTERS: Dict[str, Weekday] = {
    "א": Weekday.SUNDAY,
    "ב": Weekday.MONDAY,
    "ג": Weekday.TUESDAY,
    "ד": Weekday.WEDNESDAY,
    "ה": Weekday.THURSDAY,
    "ו": Weekday.FRIDAY,
    "ש": Weekday.SATURDAY,
}

# Group type words appear in visual order, as they are printed in the report.
GROUP_TYPE_WORDS: Dict[str, GroupType] = {
    "האצרה": GroupType.LECTURE,
    "לוגרת": GroupType.TUTORIAL,
    "ליגרת": GroupType.TUTORIAL,
    "הדבעמ": GroupType.LAB,
}

# Values are WeeklyHours attribute names.
HOUR_DESCRIPTORS: Dict[str, str] = {
    "ה": "lecture",
    "ת": "tutorial",
    "מ": "lab",
    "פ": "project",
}


def weekday_from_letter(letter: str) -> Weekday:
    """
    Raises ValueError for letters outside the weekday table.
    """
    try:
        return WEEKDAY_LETTERS[letter]
    except KeyError:
        raise ValueError(f"Invalid weekday letter {letter!r}") from None


def group_type_from_word(word: str) -> GroupType:
    """
    Raises ValueError for unknown group type words.
    """
    try:
        return GROUP_TYPE_WORDS[word]
    except KeyError:
        raise ValueError(f"Invalid group type {word!r}") from None


def hours_field_from_descriptor(letter: str) -> str:
    """
    Raises ValueError for unknown hour descriptors.
    """
    try:
        return HOUR_DESCRIPTORS[letter]
    except KeyError:
        raise ValueError(f"Invalid hour descriptor {letter!r}") from None


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def reverse_script(s: str) -> str:
    """
    Convert a visually stored right-to-left segment into reading order.

    Works on code points (str), never on encoded bytes.
    """
    return s[::-1]


def collapse_spaces(s: str) -> str:
    return " ".join(s.split())


def dedupe_spaces(s: str) -> str:
    """
    Trim, and collapse whitespace runs only if a double space is present.

    A string that is already single-spaced is returned exactly as trimmed.
    """
    s = s.strip()
    if "  " in s:
        return collapse_spaces(s)
    return s


def normalize_cell(s: str) -> str:
    """
    Standard treatment for a free-text table cell: reverse, then dedupe.
    """
    return dedupe_spaces(reverse_script(s))


# ---------------------------------------------------------------------------
# Numbers, dates and times
# ---------------------------------------------------------------------------


def fix_two_digit_year(year: int) -> int:
    if year < 100:
        return 2000 + year
    return year


_TIME_SEPARATOR = re.compile(r"[.:]")


def parse_time_of_day(s: str) -> int:
    """
    Convert 'H.MM' (as printed in REPY) or 'HH:MM' to minutes since midnight.

    Surrounding whitespace is tolerated. Raises ValueError otherwise.
    """
    sections = _TIME_SEPARATOR.split(s.strip())
    if len(sections) != 2:
        raise ValueError(f"Invalid time of day: {s!r}")

    result = 0
    for section in sections:
        if not section.isascii() or not section.isdigit():
            raise ValueError(f"Invalid time of day: {s!r}")
        result = result * 60 + int(section)
    return result


def format_time_of_day(minutes: int) -> str:
    """
    Render minutes since midnight as 'HH:MM'.
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
