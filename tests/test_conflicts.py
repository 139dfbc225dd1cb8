"""
Unit tests for conflict detection.

Definition used here:
- A conflict exists if two intervals overlap in time on the same weekday.
- Touching endpoints (end == start) is NOT a conflict.
"""

import unittest

from routineplanner.conflicts import find_conflict, find_conflicts, intervals_overlap
from routineplanner.model import PaletteColor, Role, RoutineEntry, Section, TimeInterval, Weekday
from routineplanner.parse import parse_schedule

GREY = PaletteColor("grey", (128, 128, 128))


def _iv(day: Weekday, start: int, end: int) -> TimeInterval:
    return TimeInterval(day, start, end, f"{start // 60:02d}:{start % 60:02d}", f"{end // 60:02d}:{end % 60:02d}")


def _section(code: str, label: str, schedule: str) -> Section:
    return Section(code, f"{code} name", label, intervals=tuple(parse_schedule(schedule)))


def _entry(code: str, label: str, schedule: str, role: Role = Role.PRIMARY) -> RoutineEntry:
    return RoutineEntry(
        id=f"{code}-{label}",
        course_code=code,
        course_name=f"{code} name",
        section_label=label,
        faculty="",
        room="",
        intervals=tuple(parse_schedule(schedule)),
        color=GREY,
        role=role,
    )


class TestIntervalsOverlap(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        a = _iv(Weekday.MONDAY, 600, 660)
        b = _iv(Weekday.MONDAY, 630, 720)
        self.assertTrue(intervals_overlap(a, b))

    def test_no_overlap_touching_end(self) -> None:
        # end == start is allowed (no overlap)
        a = _iv(Weekday.MONDAY, 600, 660)
        b = _iv(Weekday.MONDAY, 660, 720)
        self.assertFalse(intervals_overlap(a, b))
        self.assertFalse(intervals_overlap(b, a))

    def test_different_day_no_conflict(self) -> None:
        a = _iv(Weekday.MONDAY, 600, 660)
        b = _iv(Weekday.TUESDAY, 600, 660)
        self.assertFalse(intervals_overlap(a, b))

    def test_symmetry(self) -> None:
        samples = [
            _iv(Weekday.SUNDAY, 510, 590),
            _iv(Weekday.SUNDAY, 580, 700),
            _iv(Weekday.SUNDAY, 590, 670),
            _iv(Weekday.SUNDAY, 520, 530),
            _iv(Weekday.MONDAY, 510, 590),
        ]
        for a in samples:
            for b in samples:
                self.assertEqual(intervals_overlap(a, b), intervals_overlap(b, a))

    def test_containment_is_overlap(self) -> None:
        outer = _iv(Weekday.SATURDAY, 510, 690)
        inner = _iv(Weekday.SATURDAY, 540, 600)
        self.assertTrue(intervals_overlap(outer, inner))


class TestFindConflict(unittest.TestCase):
    def test_returns_none_without_overlap(self) -> None:
        existing = [_entry("CSE220", "1", "Sunday 08:30-09:50")]
        candidate = _section("CSE101", "1", "Saturday 08:30-09:50")
        self.assertIsNone(find_conflict(candidate, existing))

    def test_returns_first_conflicting_entry(self) -> None:
        existing = [
            _entry("MAT101", "1", "Monday 08:30-09:50"),
            _entry("CSE220", "1", "Saturday 09:00-10:00"),
            _entry("PHY101", "1", "Saturday 08:30-09:50"),
        ]
        candidate = _section("CSE101", "1", "Saturday 08:30-09:50")
        hit = find_conflict(candidate, existing)
        self.assertIsNotNone(hit)
        assert hit is not None
        self.assertEqual(hit.id, "CSE220-1")

    def test_same_course_is_skipped_when_asked(self) -> None:
        existing = [_entry("CSE101", "1", "Saturday 08:30-09:50")]
        candidate = _section("CSE101", "2", "Saturday 08:30-09:50")

        self.assertIsNotNone(find_conflict(candidate, existing))
        self.assertIsNone(find_conflict(candidate, existing, exclude_same_course_code=True))

    def test_empty_candidate_never_conflicts(self) -> None:
        existing = [_entry("CSE220", "1", "Saturday 08:30-09:50")]
        self.assertIsNone(find_conflict(_section("CSE101", "1", "TBA"), existing))


class TestFindConflicts(unittest.TestCase):
    def test_pairs_reported_once(self) -> None:
        sections = [
            _section("A", "1", "Monday 10:00-11:00"),
            _section("B", "1", "Monday 10:30-12:00"),
            _section("C", "1", "Tuesday 10:00-11:00"),
        ]
        confs = find_conflicts(sections)
        self.assertEqual(len(confs), 1)
        a, b = confs[0]
        self.assertEqual((a.section_id, b.section_id), ("A-1", "B-1"))

    def test_same_course_pairs_ignored(self) -> None:
        sections = [
            _section("A", "1", "Monday 10:00-11:00"),
            _section("A", "2", "Monday 10:00-11:00"),
        ]
        self.assertEqual(find_conflicts(sections), [])


if __name__ == "__main__":
    unittest.main()
