"""
Unit tests for the terminal timetable.

The grid has one column per schedulable day (Sat-Wed); stacked backups
are counted on the primary block.
"""

import io
import unittest

from rich.console import Console

from routineplanner.layout import layout
from routineplanner.model import Section, Weekday
from routineplanner.parse import parse_schedule
from routineplanner.routine import RoutineManager
from routineplanner.timetable import build_timetable, format_entry_line, format_item, schedule_text


def _section(code: str, label: str, schedule: str) -> Section:
    return Section(code, f"{code} name", label, room="304", intervals=tuple(parse_schedule(schedule)))


class TestTimetable(unittest.TestCase):
    def setUp(self) -> None:
        self.m = RoutineManager()
        self.m.add_section(_section("CSE101", "1", "Saturday 08:30-09:50 | Tuesday 08:30-09:50"))
        self.m.add_section(_section("CSE101", "2", "Saturday 09:00-10:20"))
        self.m.add_section(_section("CSE220", "1", "Sunday 08:30-09:50"))

    def test_format_item_shows_backups(self) -> None:
        days = layout(self.m.routine)
        (item,) = days[Weekday.SATURDAY]
        self.assertEqual(format_item(item), "08:30-09:50 CSE101 §1 +1 backup")

    def test_format_entry_line(self) -> None:
        line = format_entry_line(self.m.routine[0])
        self.assertEqual(line, "CSE101-1 | CSE101 name | Sat 08:30-09:50, Tue 08:30-09:50 | 304 | primary")

    def test_schedule_text(self) -> None:
        self.assertEqual(schedule_text(self.m.routine[0]), "Sat 08:30-09:50, Tue 08:30-09:50")
        self.assertEqual(schedule_text(Section("MAT101", "Calculus", "1")), "TBA")

    def test_build_timetable_renders_days(self) -> None:
        buf = io.StringIO()
        Console(file=buf, width=200, color_system=None).print(build_timetable(layout(self.m.routine)))
        out = buf.getvalue()
        for day in ("Sat", "Sun", "Mon", "Tue", "Wed"):
            self.assertIn(day, out)
        self.assertIn("CSE220 §1", out)


if __name__ == "__main__":
    unittest.main()
