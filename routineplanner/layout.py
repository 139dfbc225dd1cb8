"""
Calendar layout (routine -> placement on the weekly grid).

For every grid day (Saturday-Wednesday):

1. Collect the (entry, interval) pairs that fall on that day.
2. Grouping: a primary claims the backups of its own course whose interval
   overlaps the primary's. They are shown as one block ("stack").
   Everything unclaimed becomes its own block.
3. Lanes: blocks are sorted by start time and greedily put into the lowest
   lane that is free again (lane end <= block start). Every block of the day
   then gets the final lane count so the renderer can split the column width.

The result is recomputed from scratch on every call.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from routineplanner.conflicts import intervals_overlap
from routineplanner.model import (
    GRID_DAYS,
    GRID_START,
    GRID_TOTAL,
    DisplayItem,
    Role,
    RoutineEntry,
    TimeInterval,
    Weekday,
)


def vertical_position(interval: TimeInterval) -> Tuple[float, float]:
    """
    (top %, height %) of an interval inside the grid window.
    """
    top = (interval.start_min - GRID_START) / GRID_TOTAL * 100
    height = (interval.end_min - interval.start_min) / GRID_TOTAL * 100
    return top, height


def _pairs_for_day(routine: Iterable[RoutineEntry], day: Weekday) -> List[Tuple[RoutineEntry, TimeInterval]]:
    pairs: List[Tuple[RoutineEntry, TimeInterval]] = []
    for entry in routine:
        for iv in entry.intervals:
            if iv.day == day:
                pairs.append((entry, iv))
    return pairs


def _group(pairs: List[Tuple[RoutineEntry, TimeInterval]]) -> List[DisplayItem]:
    claimed: set[int] = set()
    items: List[DisplayItem] = []

    for i, (entry, iv) in enumerate(pairs):
        if i in claimed or entry.role is not Role.PRIMARY:
            continue
        claimed.add(i)

        backups: List[Tuple[RoutineEntry, TimeInterval]] = []
        for j, (other, other_iv) in enumerate(pairs):
            if j in claimed:
                continue
            if other.role is not Role.BACKUP or other.course_code != entry.course_code:
                continue
            if intervals_overlap(iv, other_iv):
                claimed.add(j)
                backups.append((other, other_iv))

        items.append(DisplayItem(anchor_entry=entry, anchor_interval=iv, grouped_backups=backups))

    # standalone backups, backups at another time than their primary
    for i, (entry, iv) in enumerate(pairs):
        if i not in claimed:
            items.append(DisplayItem(anchor_entry=entry, anchor_interval=iv))

    return items


def _assign_lanes(items: List[DisplayItem]) -> None:
    lane_ends: List[int] = []

    for item in sorted(items, key=lambda it: it.anchor_interval.start_min):
        start = item.anchor_interval.start_min
        for lane, end in enumerate(lane_ends):
            if end <= start:
                item.lane = lane
                lane_ends[lane] = item.anchor_interval.end_min
                break
        else:
            item.lane = len(lane_ends)
            lane_ends.append(item.anchor_interval.end_min)

    for item in items:
        item.total_lanes = len(lane_ends)


def lay_out_day(routine: Iterable[RoutineEntry], day: Weekday) -> List[DisplayItem]:
    """
    Display items for one day with `lane` / `total_lanes` filled in.
    """
    items = _group(_pairs_for_day(routine, day))
    _assign_lanes(items)
    return items


def layout(routine: Iterable[RoutineEntry]) -> Dict[Weekday, List[DisplayItem]]:
    """
    Display items for every grid day. Days without classes map to [].
    """
    entries = list(routine)
    return {day: lay_out_day(entries, day) for day in GRID_DAYS}
