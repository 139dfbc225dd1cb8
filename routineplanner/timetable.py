"""
Terminal rendering of the weekly grid.

Takes the output of layout.layout() and builds a rich Table with one column
per grid day. Each block shows its time, course and section, the lane it was
put in when the day needs more than one lane, and how many backups are
stacked under it.
"""

from __future__ import annotations

from typing import Dict, List, Union

from rich import box
from rich.table import Table
from rich.text import Text

from routineplanner.model import GRID_DAYS, DisplayItem, RoutineEntry, Section, Weekday


def format_item(item: DisplayItem) -> str:
    entry = item.anchor_entry
    iv = item.anchor_interval
    line = f"{iv.label} {entry.course_code} §{entry.section_label}"
    if entry.is_backup:
        line += " (BK)"
    if item.total_lanes > 1:
        line += f" [{item.lane + 1}/{item.total_lanes}]"
    n = len(item.grouped_backups)
    if n:
        line += f" +{n} backup{'s' if n > 1 else ''}"
    return line


def schedule_text(item: Union[Section, RoutineEntry]) -> str:
    """
    Weekly meetings as "Sat 08:30-09:50, Tue 08:30-09:50", or "TBA".
    """
    return ", ".join(f"{iv.day.short} {iv.label}" for iv in item.intervals) or "TBA"


def format_entry_line(entry: RoutineEntry) -> str:
    """
    One-line summary for list views, e.g.
    'CSE101-1 | Intro to CS | Sat 08:30-09:50, Tue 08:30-09:50 | 304 | primary'
    """
    parts = [entry.id, entry.course_name, schedule_text(entry)]
    if entry.room:
        parts.append(entry.room)
    if entry.faculty:
        parts.append(entry.faculty)
    parts.append(entry.role.value)
    return " | ".join(parts)


def _cell(items: List[DisplayItem]) -> Text:
    text = Text()
    for item in sorted(items, key=lambda it: (it.anchor_interval.start_min, it.lane)):
        if text:
            text.append("\n")
        text.append(format_item(item), style=item.anchor_entry.color.style)
        for backup, iv in item.grouped_backups:
            text.append(f"\n  ↳ {iv.label} {backup.course_code} §{backup.section_label}")
    return text


def build_timetable(days_layout: Dict[Weekday, List[DisplayItem]]) -> Table:
    table = Table(box=box.SIMPLE, show_lines=False)
    for day in GRID_DAYS:
        table.add_column(day.short, vertical="top")
    table.add_row(*[_cell(days_layout.get(day, [])) for day in GRID_DAYS])
    return table
