"""
Parsing (schedule CSV text -> structured intervals).

- Reads the "Schedule" field of each CSV row
- Extracts EACH "<Weekday> HH:MM-HH:MM" segment as exactly ONE TimeInterval
- Drops everything else in the field (room numbers, "627 - Computer Lab")

Schedule field format (examples):

    "Saturday 08:30-09:50 | Tuesday 08:30-09:50 | 304"
    "Sunday 14:00-16:30 | 627 - Computer Lab"
    "Wednesday 08:30-11:00 | 729"
    "Schedule TBA"

Important rules (DO NOT CHANGE):
- 1 segment = 1 interval
- A bad segment is skipped, it never fails the whole row
- No timezone / DST logic
"""

from __future__ import annotations

import argparse
import csv
import re
from typing import Dict, Iterable, List, Optional

from routineplanner.model import TimeInterval, Weekday


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_TBA_VALUES = {"", "SCHEDULE TBA", "TBA"}

_DAY_ALTERNATION = "|".join(day.value for day in Weekday)

_SEGMENT_RE = re.compile(
    rf"^({_DAY_ALTERNATION})\s+(\d{{1,2}}:\d{{2}})\s*-\s*(\d{{1,2}}:\d{{2}})$",
    re.IGNORECASE,
)

_LAB_SUFFIX_RE = re.compile(r"\s*-\s*computer\s*lab\s*$", re.IGNORECASE)


def time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def minutes_to_label(minutes: int) -> str:
    """
    Format minutes since midnight as a 12-hour label, e.g. 870 -> '2:30 PM'.
    """
    h, m = divmod(minutes, 60)
    ampm = "PM" if h >= 12 else "AM"
    display_h = h - 12 if h > 12 else (12 if h == 0 else h)
    return f"{display_h}:{m:02d} {ampm}"


# ---------------------------------------------------------------------------
# Schedule parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_segment(segment: str) -> Optional[TimeInterval]:
    """
    Parses exactly one "<Weekday> HH:MM-HH:MM" segment into one interval.
    Returns None for anything else.
    """
    match = _SEGMENT_RE.match(segment.strip())
    if not match:
        return None

    day = Weekday.from_name(match.group(1))
    if day is None:
        return None

    start_label, end_label = match.group(2), match.group(3)
    try:
        start = time_to_minutes(start_label)
        end = time_to_minutes(end_label)
    except ValueError:
        return None

    # end <= start cannot be placed on a grid, treat like a room token
    if end <= start:
        return None

    return TimeInterval(
        day=day,
        start_min=start,
        end_min=end,
        start_label=start_label,
        end_label=end_label,
    )


def parse_schedule(raw: Optional[str]) -> List[TimeInterval]:
    """
    Parses the "Schedule" field into a list of intervals (segment order).

    "Schedule TBA", "TBA" and empty text give an empty list.
    """
    if raw is None or raw.strip().upper() in _TBA_VALUES:
        return []

    intervals: List[TimeInterval] = []
    for part in raw.split("|"):
        interval = parse_segment(part)
        if interval is not None:
            intervals.append(interval)
        # else it's a room token like "304" -> skip it
    return intervals


def clean_room_label(raw: Optional[str]) -> str:
    """
    Normalise a room string from the CSV.

        "727 - Computer Lab" -> "727 (Lab)"
        "304"                -> "304"
    """
    if not raw:
        return ""
    cleaned, n = _LAB_SUFFIX_RE.subn("", raw)
    cleaned = cleaned.strip()
    return f"{cleaned} (Lab)" if n else cleaned


# ---------------------------------------------------------------------------
# CSV rows
# ---------------------------------------------------------------------------


def read_schedule_rows(lines: Iterable[str]) -> List[Dict[str, str]]:
    """
    Read CSV text (header row first) into string-keyed rows.

    Header names and values are trimmed, fully empty rows are skipped.
    """
    reader = csv.DictReader(lines)
    if reader.fieldnames is not None:
        reader.fieldnames = [name.strip() for name in reader.fieldnames]

    rows: List[Dict[str, str]] = []
    for row in reader:
        clean = {
            str(k).strip(): (v or "").strip()
            for k, v in row.items()
            if k is not None and isinstance(v, str)
        }
        if not any(clean.values()):
            continue
        rows.append(clean)
    return rows


# ---------------------------------------------------------------------------
# CLI connection
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="routineplanner.parse",
        description="Parse schedule strings and print the extracted intervals",
    )
    p.add_argument("schedule", nargs="+", help='Schedule text, e.g. "Saturday 08:30-09:50 | 304"')
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    for raw in args.schedule:
        intervals = parse_schedule(raw)
        print(f"{raw!r}: {len(intervals)} interval(s)")
        for iv in intervals:
            print(f"  - {iv.day.value} {iv.label} ({iv.start_min}-{iv.end_min})")


if __name__ == "__main__":
    main()
