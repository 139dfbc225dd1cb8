"""
Conflict detection.

Given the intervals of a candidate section and the entries already in the
routine, detect overlaps on the same weekday.
Overlap rule:
    start < other_end AND end > other_start

Touching endpoints (one class ends at 09:50, the next starts at 09:50)
are NOT a conflict.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, TypeVar, Union

from routineplanner.model import RoutineEntry, Section, TimeInterval


Scheduled = TypeVar("Scheduled", bound=Union[Section, RoutineEntry])


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def intervals_overlap(a: TimeInterval, b: TimeInterval) -> bool:
    """
    True if both intervals fall on the same weekday and overlap in time.
    """
    if a.day != b.day:
        return False
    return _overlaps(a.start_min, a.end_min, b.start_min, b.end_min)


def find_conflict(
    candidate: Section,
    existing_entries: Iterable[RoutineEntry],
    exclude_same_course_code: bool = False,
) -> Optional[RoutineEntry]:
    """
    Return the first existing entry that collides with the candidate, or None.

    Iteration order is: existing entries in routine order, then candidate
    intervals, then the entry's intervals.
    """
    for existing in existing_entries:
        if exclude_same_course_code and existing.course_code == candidate.course_code:
            continue
        for c_iv in candidate.intervals:
            for e_iv in existing.intervals:
                if intervals_overlap(c_iv, e_iv):
                    return existing
    return None


def find_conflicts(entries: Sequence[Scheduled]) -> list[tuple[Scheduled, Scheduled]]:
    """
    Find colliding pairs (A,B) among sections or routine entries,
    each pair appears once (i<j).

    Entries of the same course code never count as a collision.
    """
    conflicts: list[tuple[Scheduled, Scheduled]] = []

    # O(n^2) is fine for typical routine sizes
    for i in range(len(entries)):
        a = entries[i]
        for j in range(i + 1, len(entries)):
            b = entries[j]
            if a.course_code == b.course_code:
                continue
            if any(intervals_overlap(x, y) for x in a.intervals for y in b.intervals):
                conflicts.append((a, b))

    return conflicts
