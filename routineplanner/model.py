"""
Central data model definitions used across the project.

This module defines the canonical structure of sections, time intervals,
routine entries and display items so that:
- all modules share the same field names
- parsing, conflict checking, layout and UI layers agree on one shape
- the code stays readable and beginner-friendly
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple


class Weekday(str, Enum):
    """
    The seven day names as they appear in the schedule CSV.

    Order follows the institutional week (Saturday first).
    """

    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"

    @classmethod
    def from_name(cls, name: str) -> Optional["Weekday"]:
        """
        Case-insensitive lookup, e.g. 'monday' -> Weekday.MONDAY.
        Returns None for anything that is not one of the seven names.
        """
        wanted = name.strip().lower()
        for day in cls:
            if day.value.lower() == wanted:
                return day
        return None

    @property
    def short(self) -> str:
        return self.value[:3]


ALL_DAYS: Tuple[Weekday, ...] = tuple(Weekday)

# Only these days are shown on the weekly grid
GRID_DAYS: Tuple[Weekday, ...] = ALL_DAYS[:5]

# Institutional day window shown on the grid: 08:30 - 16:30
GRID_START = 8 * 60 + 30
GRID_END = 16 * 60 + 30
GRID_TOTAL = GRID_END - GRID_START


class Role(str, Enum):
    PRIMARY = "primary"
    BACKUP = "backup"


@dataclass(frozen=True)
class TimeInterval:
    """
    One weekly meeting of a section, e.g. Saturday 08:30-09:50.

    Minutes are counted from midnight. The original 'HH:MM' text is kept
    so display code never has to re-derive it.
    """

    day: Weekday
    start_min: int
    end_min: int
    start_label: str
    end_label: str

    def __post_init__(self) -> None:
        if not (0 <= self.start_min < self.end_min < 1440):
            raise ValueError(
                f"Invalid interval {self.start_label}-{self.end_label}: "
                f"need 0 <= start < end < 1440"
            )

    @property
    def label(self) -> str:
        return f"{self.start_label}-{self.end_label}"

    @property
    def duration(self) -> int:
        return self.end_min - self.start_min


@dataclass
class Section:
    """
    One offering of a course (specific faculty / time / room).

    An empty `intervals` tuple means the schedule is "TBA".
    """

    course_code: str
    course_name: str
    section_label: str
    faculty: str = ""
    room: str = ""
    intervals: Tuple[TimeInterval, ...] = ()
    schedule_raw: str = ""

    @property
    def section_id(self) -> str:
        return f"{self.course_code}-{self.section_label}"

    @classmethod
    def from_selection(cls, event: Mapping[str, Any]) -> "Section":
        """
        Build a Section from a selection event:
        {code, name, section, faculty, room, slots}
        """
        return cls(
            course_code=str(event.get("code", "")),
            course_name=str(event.get("name", "")),
            section_label=str(event.get("section", "")),
            faculty=str(event.get("faculty", "") or ""),
            room=str(event.get("room", "") or ""),
            intervals=tuple(event.get("slots") or ()),
        )


@dataclass
class CourseGroup:
    """
    All sections of one course code, in the order they appear in the catalogue.
    """

    course_code: str
    course_name: str
    sections: List[Section] = field(default_factory=list)


@dataclass(frozen=True)
class PaletteColor:
    """
    One hue of the course palette. CSS and terminal styles derive from `rgb`.
    """

    name: str
    rgb: Tuple[int, int, int]

    @property
    def background(self) -> str:
        r, g, b = self.rgb
        return f"rgba({r},{g},{b},0.85)"

    @property
    def border(self) -> str:
        r, g, b = self.rgb
        return f"rgba({r},{g},{b},1)"

    @property
    def text(self) -> str:
        return "#fff"

    @property
    def style(self) -> str:
        r, g, b = self.rgb
        return f"bold white on rgb({r},{g},{b})"


@dataclass(frozen=True)
class RoutineEntry:
    """
    A section accepted into the routine. Only RoutineManager creates these.
    """

    id: str
    course_code: str
    course_name: str
    section_label: str
    faculty: str
    room: str
    intervals: Tuple[TimeInterval, ...]
    color: PaletteColor
    role: Role

    @property
    def is_backup(self) -> bool:
        return self.role is Role.BACKUP

    def intervals_on(self, day: Weekday) -> List[TimeInterval]:
        return [iv for iv in self.intervals if iv.day == day]


@dataclass
class DisplayItem:
    """
    One block on the weekly grid.

    `grouped_backups` holds same-course backups that overlap the anchor and
    are shown collapsed under it. `lane`/`total_lanes` split the day column
    horizontally.
    Vertical percentages are relative to the GRID_START-GRID_END window.
    """

    anchor_entry: RoutineEntry
    anchor_interval: TimeInterval
    grouped_backups: List[Tuple[RoutineEntry, TimeInterval]] = field(default_factory=list)
    lane: int = 0
    total_lanes: int = 1

    @property
    def width_percent(self) -> float:
        return 100.0 / self.total_lanes

    @property
    def left_percent(self) -> float:
        return self.lane * self.width_percent

    @property
    def top_percent(self) -> float:
        return (self.anchor_interval.start_min - GRID_START) / GRID_TOTAL * 100

    @property
    def height_percent(self) -> float:
        return self.anchor_interval.duration / GRID_TOTAL * 100
