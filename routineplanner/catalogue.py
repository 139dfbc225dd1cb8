"""
Course catalogue: flat CSV rows -> sections grouped by course code.

Expected CSV columns:

    Course Code, Course Name, Section, Faculty, Room, Schedule

Rows without a course code or course name are ignored. No validity or
conflict checks happen here, it is pure aggregation plus a few search
helpers used by the CLI / interactive UI.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from routineplanner.model import ALL_DAYS, CourseGroup, Section, Weekday
from routineplanner.parse import clean_room_label, parse_schedule, read_schedule_rows


Catalogue = Dict[str, CourseGroup]
SectionHit = Tuple[CourseGroup, Section]


class CatalogueLoadError(Exception):
    """
    The catalogue file could not be read. No routine operations are possible.
    """


def _field(row: Mapping[str, str], key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value).strip()


def row_to_section(row: Mapping[str, str]) -> Optional[Section]:
    """
    Convert one CSV row to a Section, or None if code/name is missing.
    """
    code = _field(row, "Course Code")
    name = _field(row, "Course Name")
    if not code or not name:
        return None

    schedule_raw = _field(row, "Schedule")
    return Section(
        course_code=code,
        course_name=name,
        section_label=_field(row, "Section"),
        faculty=_field(row, "Faculty"),
        room=clean_room_label(_field(row, "Room")),
        intervals=tuple(parse_schedule(schedule_raw)),
        schedule_raw=schedule_raw,
    )


def index_catalogue(rows: Iterable[Mapping[str, str]]) -> Catalogue:
    """
    Group rows by course code. Sections keep their first-seen order.
    """
    catalogue: Catalogue = {}
    for row in rows:
        section = row_to_section(row)
        if section is None:
            continue

        group = catalogue.get(section.course_code)
        if group is None:
            group = CourseGroup(course_code=section.course_code, course_name=section.course_name)
            catalogue[section.course_code] = group
        group.sections.append(section)

    return catalogue


def load_catalogue(path: str | Path) -> Catalogue:
    """
    Read a schedule CSV file and index it.

    Raises CatalogueLoadError if the file is missing or unreadable.
    """
    csv_path = Path(path)
    try:
        with csv_path.open(encoding="utf-8-sig", newline="") as fh:
            rows = read_schedule_rows(fh)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise CatalogueLoadError(f"Failed to load CSV {csv_path}: {exc}") from exc

    return index_catalogue(rows)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def search_courses(catalogue: Catalogue, query: str, limit: Optional[int] = None) -> List[CourseGroup]:
    """
    Case-insensitive substring match on course code or course name.
    An empty query returns every course.
    """
    q = (query or "").strip().lower()
    groups = sorted(catalogue.values(), key=lambda g: g.course_code)
    if q:
        groups = [g for g in groups if q in g.course_code.lower() or q in g.course_name.lower()]
    return groups[:limit] if limit is not None else groups


def find_section(catalogue: Catalogue, section_id: str) -> Optional[Section]:
    """
    Resolve "CODE-SECTION" (e.g. "CSE 1111-A") to a Section.
    """
    code, sep, label = section_id.strip().rpartition("-")
    if not sep:
        return None

    group = catalogue.get(code.strip())
    if group is None:
        # course codes are usually upper-case in the CSV
        group = catalogue.get(code.strip().upper())
    if group is None:
        return None

    for section in group.sections:
        if section.section_label == label.strip():
            return section
    return None


def filter_sections_by_faculty(groups: Iterable[CourseGroup], query: str) -> List[SectionHit]:
    q = (query or "").strip().lower()
    if not q:
        return []
    return [(g, s) for g in groups for s in g.sections if s.faculty and q in s.faculty.lower()]


def filter_sections_by_time(
    groups: Iterable[CourseGroup],
    day: Optional[Weekday] = None,
    time_label: Optional[str] = None,
) -> List[SectionHit]:
    """
    Sections with at least one interval on `day` and/or labelled `time_label`
    ("HH:MM-HH:MM"). With neither filter given, nothing matches.
    """
    if day is None and not time_label:
        return []

    hits: List[SectionHit] = []
    for g in groups:
        for s in g.sections:
            if any(
                (day is None or iv.day == day) and (not time_label or iv.label == time_label)
                for iv in s.intervals
            ):
                hits.append((g, s))
    return hits


def unique_days(groups: Iterable[CourseGroup]) -> List[Weekday]:
    days = {iv.day for g in groups for s in g.sections for iv in s.intervals}
    return [d for d in ALL_DAYS if d in days]


def unique_time_labels(groups: Iterable[CourseGroup]) -> List[str]:
    return sorted({iv.label for g in groups for s in g.sections for iv in s.intervals})
