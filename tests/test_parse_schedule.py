"""
Unit tests for schedule string parsing.

Parsing rules:
- "<Weekday> HH:MM-HH:MM" segments become intervals, in segment order
- room tokens and malformed segments are skipped, never an error
- "Schedule TBA", "TBA" and empty text give no intervals
"""

import io
import unittest
from contextlib import redirect_stdout

from routineplanner.model import Weekday
from routineplanner.parse import (
    clean_room_label,
    main,
    minutes_to_label,
    parse_schedule,
    parse_segment,
    read_schedule_rows,
    time_to_minutes,
)


class TestParseSchedule(unittest.TestCase):
    def test_two_days_and_room_token(self) -> None:
        slots = parse_schedule("Saturday 08:30-09:50 | Tuesday 08:30-09:50 | 304")

        self.assertEqual(len(slots), 2)
        self.assertEqual([s.day for s in slots], [Weekday.SATURDAY, Weekday.TUESDAY])
        for s in slots:
            self.assertEqual(s.start_min, 510)
            self.assertEqual(s.end_min, 590)
            self.assertEqual(s.start_label, "08:30")
            self.assertEqual(s.end_label, "09:50")

    def test_tba_and_empty(self) -> None:
        self.assertEqual(parse_schedule("Schedule TBA"), [])
        self.assertEqual(parse_schedule("schedule tba"), [])
        self.assertEqual(parse_schedule("  TBA "), [])
        self.assertEqual(parse_schedule(""), [])
        self.assertEqual(parse_schedule(None), [])

    def test_lab_room_token_is_dropped(self) -> None:
        slots = parse_schedule("Sunday 14:00-16:30 | 627 - Computer Lab")
        self.assertEqual(len(slots), 1)
        self.assertEqual(slots[0].day, Weekday.SUNDAY)
        self.assertEqual((slots[0].start_min, slots[0].end_min), (840, 990))

    def test_day_name_is_case_normalized(self) -> None:
        iv = parse_segment("wEdNeSdAy 08:30-11:00")
        self.assertIsNotNone(iv)
        assert iv is not None
        self.assertIs(iv.day, Weekday.WEDNESDAY)
        self.assertEqual(iv.day.value, "Wednesday")

    def test_whitespace_around_dash(self) -> None:
        iv = parse_segment("Monday 9:00 - 10:15")
        self.assertIsNotNone(iv)
        assert iv is not None
        self.assertEqual((iv.start_min, iv.end_min), (540, 615))
        self.assertEqual(iv.start_label, "9:00")

    def test_friday_and_thursday_are_valid_targets(self) -> None:
        slots = parse_schedule("Thursday 10:00-11:00 | Friday 10:00-11:00")
        self.assertEqual([s.day for s in slots], [Weekday.THURSDAY, Weekday.FRIDAY])

    def test_bad_segments_are_skipped(self) -> None:
        slots = parse_schedule("Funday 08:30-09:50 | Monday 25:00-26:00 | Monday 10:00-09:00 | Monday 11:00-12:00")
        self.assertEqual(len(slots), 1)
        self.assertEqual(slots[0].label, "11:00-12:00")

    def test_segment_order_is_kept(self) -> None:
        slots = parse_schedule("Tuesday 11:00-12:00 | Saturday 08:30-09:50")
        self.assertEqual([s.day for s in slots], [Weekday.TUESDAY, Weekday.SATURDAY])


class TestHelpers(unittest.TestCase):
    def test_time_to_minutes(self) -> None:
        self.assertEqual(time_to_minutes("08:30"), 510)
        self.assertEqual(time_to_minutes("16:30"), 990)
        with self.assertRaises(ValueError):
            time_to_minutes("0830")
        with self.assertRaises(ValueError):
            time_to_minutes("24:00")

    def test_minutes_to_label(self) -> None:
        self.assertEqual(minutes_to_label(510), "8:30 AM")
        self.assertEqual(minutes_to_label(720), "12:00 PM")
        self.assertEqual(minutes_to_label(870), "2:30 PM")
        self.assertEqual(minutes_to_label(0), "12:00 AM")

    def test_clean_room_label(self) -> None:
        self.assertEqual(clean_room_label("727 - Computer Lab"), "727 (Lab)")
        self.assertEqual(clean_room_label("727-computer lab"), "727 (Lab)")
        self.assertEqual(clean_room_label("304"), "304")
        self.assertEqual(clean_room_label(""), "")
        self.assertEqual(clean_room_label(None), "")

    def test_read_schedule_rows_trims_headers_and_values(self) -> None:
        text = (
            " Course Code , Course Name,Section,Faculty,Room,Schedule\n"
            " CSE101 , Intro to CS ,1,ABC,304, Saturday 08:30-09:50 \n"
            ",,,,,\n"
        )
        rows = read_schedule_rows(text.splitlines(keepends=True))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["Course Code"], "CSE101")
        self.assertEqual(rows[0]["Course Name"], "Intro to CS")
        self.assertEqual(rows[0]["Schedule"], "Saturday 08:30-09:50")


class TestParseCLI(unittest.TestCase):
    def test_main_prints_intervals(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["Saturday 08:30-09:50 | 304"])
        out = buf.getvalue()
        self.assertIn("1 interval(s)", out)
        self.assertIn("Saturday 08:30-09:50 (510-590)", out)


if __name__ == "__main__":
    unittest.main()
