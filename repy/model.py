"""
Central data model for a parsed REPY catalog.

A Catalog is a plain list of Faculty objects, in the order they appear in the
report. Everything below a faculty is built incrementally by the parser and
is not touched again once the next sibling starts.

to_dict() defines the JSON field names. External consumers rely on them, so
they must stay stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List


class Weekday(IntEnum):
    # Same numbering as the JSON output: 0 = Sunday
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class GroupType(Enum):
    LECTURE = "lecture"
    TUTORIAL = "tutorial"
    LAB = "lab"
    SPORT = "sport"


@dataclass
class WeeklyHours:
    lecture: int = 0
    tutorial: int = 0
    lab: int = 0
    project: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "lecture": self.lecture,
            "tutorial": self.tutorial,
            "lab": self.lab,
            "project": self.project,
        }


@dataclass(frozen=True)
class Date:
    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_dict(self) -> Dict[str, int]:
        return {"year": self.year, "month": self.month, "day": self.day}


@dataclass
class Event:
    """
    One weekly slot of a group. Times are minutes since midnight.
    """

    day: Weekday
    start_minute: int
    end_minute: int
    location: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": int(self.day),
            "start_minute": self.start_minute,
            "end_minute": self.end_minute,
            "location": self.location,
        }


@dataclass
class Group:
    """
    A recurring meeting series. ``description`` is only filled for sports.
    """

    id: int
    type: GroupType
    teachers: List[str] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "teachers": list(self.teachers),
            "events": [e.to_dict() for e in self.events],
            "description": self.description,
        }


@dataclass
class Course:
    id: int = 0
    name: str = ""
    academic_points: float = 0.0
    weekly_hours: WeeklyHours = field(default_factory=WeeklyHours)
    lecturer_in_charge: str = ""
    test_dates: List[Date] = field(default_factory=list)
    notes: str = ""
    groups: List[Group] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "academic_points": self.academic_points,
            "weekly_hours": self.weekly_hours.to_dict(),
            "lecturer_in_charge": self.lecturer_in_charge,
            "test_dates": [d.to_dict() for d in self.test_dates],
            "notes": self.notes,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass
class Faculty:
    name: str = ""
    semester: str = ""
    courses: List[Course] = field(default_factory=list)

    def __str__(self) -> str:
        return f"faculty({self.name}, {len(self.courses)})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "semester": self.semester,
            "courses": [c.to_dict() for c in self.courses],
        }


Catalog = List[Faculty]


def catalog_to_dicts(catalog: Catalog) -> List[Dict[str, Any]]:
    return [f.to_dict() for f in catalog]
