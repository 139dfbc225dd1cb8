"""
Routine state: the student's working set of chosen sections.

RoutineManager owns the routine and the palette counter. Every admission
decision is made here:

    duplicate?  -> rejected (warning)
    TBA?        -> rejected (warning)
    conflict?   -> rejected (error), only against OTHER course codes
    otherwise   -> admitted as primary (first of its course) or backup

Rejections are returned as values (AdmissionResult), never raised.
Observers registered with subscribe() get one Notification per outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from routineplanner.conflicts import find_conflict
from routineplanner.model import PaletteColor, Role, RoutineEntry, Section


PALETTE: Tuple[PaletteColor, ...] = (
    PaletteColor("indigo", (99, 102, 241)),
    PaletteColor("purple", (168, 85, 247)),
    PaletteColor("pink", (236, 72, 153)),
    PaletteColor("teal", (20, 184, 166)),
    PaletteColor("amber", (245, 158, 11)),
    PaletteColor("green", (34, 197, 94)),
    PaletteColor("red", (239, 68, 68)),
    PaletteColor("sky", (14, 165, 233)),
    PaletteColor("orange", (249, 115, 22)),
    PaletteColor("emerald", (16, 185, 129)),
)


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Outcome(str, Enum):
    DUPLICATE = "duplicate"
    UNSCHEDULED = "unscheduled"
    CONFLICT = "conflict"
    ADMITTED_PRIMARY = "admitted_primary"
    ADMITTED_BACKUP = "admitted_backup"
    REMOVED = "removed"
    CLEARED = "cleared"


_SEVERITY = {
    Outcome.DUPLICATE: Severity.WARNING,
    Outcome.UNSCHEDULED: Severity.WARNING,
    Outcome.CONFLICT: Severity.ERROR,
    Outcome.ADMITTED_PRIMARY: Severity.SUCCESS,
    Outcome.ADMITTED_BACKUP: Severity.SUCCESS,
    Outcome.REMOVED: Severity.SUCCESS,
    Outcome.CLEARED: Severity.SUCCESS,
}


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity
    outcome: Outcome


@dataclass(frozen=True)
class AdmissionResult:
    """
    Result of RoutineManager.add_section().

    `entry` is set when admitted, `conflict` when rejected for a time clash.
    """

    outcome: Outcome
    candidate: Section
    entry: Optional[RoutineEntry] = None
    conflict: Optional[RoutineEntry] = None

    @property
    def admitted(self) -> bool:
        return self.outcome in (Outcome.ADMITTED_PRIMARY, Outcome.ADMITTED_BACKUP)

    @property
    def severity(self) -> Severity:
        return _SEVERITY[self.outcome]

    @property
    def message(self) -> str:
        code = self.candidate.course_code
        section = self.candidate.section_label

        if self.outcome is Outcome.DUPLICATE:
            return f"{code} Section {section} is already in your routine."
        if self.outcome is Outcome.UNSCHEDULED:
            return f"{code} Section {section} has a TBA schedule and cannot be added."
        if self.outcome is Outcome.CONFLICT:
            other = self.conflict
            assert other is not None
            return (
                f"Time Conflict! {code}-{section} overlaps with "
                f'"{other.course_name}" ({other.course_code}-{other.section_label}).'
            )
        if self.outcome is Outcome.ADMITTED_BACKUP:
            return f"Added {code} Sec {section} as Backup"
        return f"Added {code} Section {section}!"

    def to_notification(self) -> Notification:
        return Notification(self.message, self.severity, self.outcome)


Observer = Callable[[Notification], None]


class RoutineManager:
    """
    Owns the routine for one session.

    Lifecycle: create -> add_section / remove_section -> clear.
    """

    def __init__(self, palette: Sequence[PaletteColor] = PALETTE) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette: Tuple[PaletteColor, ...] = tuple(palette)
        self._entries: List[RoutineEntry] = []
        self._color_counter = 0
        self._observers: List[Observer] = []

    # -- read access --------------------------------------------------------

    @property
    def routine(self) -> Tuple[RoutineEntry, ...]:
        return tuple(self._entries)

    def get(self, entry_id: str) -> Optional[RoutineEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RoutineEntry]:
        return iter(tuple(self._entries))

    def __contains__(self, entry_id: object) -> bool:
        return any(entry.id == entry_id for entry in self._entries)

    # -- observers ----------------------------------------------------------

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, notification: Notification) -> None:
        for observer in list(self._observers):
            observer(notification)

    # -- mutation -----------------------------------------------------------

    def _same_course(self, course_code: str) -> Optional[RoutineEntry]:
        for entry in self._entries:
            if entry.course_code == course_code:
                return entry
        return None

    def _next_color(self) -> PaletteColor:
        color = self._palette[self._color_counter % len(self._palette)]
        self._color_counter += 1
        return color

    def add_section(self, candidate: Section) -> AdmissionResult:
        """
        Try to admit a section. The routine only changes when admitted.
        """
        result = self._admit(candidate)
        self._notify(result.to_notification())
        return result

    def _admit(self, candidate: Section) -> AdmissionResult:
        entry_id = candidate.section_id

        if entry_id in self:
            return AdmissionResult(Outcome.DUPLICATE, candidate)

        if not candidate.intervals:
            return AdmissionResult(Outcome.UNSCHEDULED, candidate)

        sibling = self._same_course(candidate.course_code)
        role = Role.PRIMARY if sibling is None else Role.BACKUP

        # backups of a course may overlap their own course's other sections
        conflict = find_conflict(candidate, self._entries, exclude_same_course_code=True)
        if conflict is not None:
            return AdmissionResult(Outcome.CONFLICT, candidate, conflict=conflict)

        color = sibling.color if sibling is not None else self._next_color()

        entry = RoutineEntry(
            id=entry_id,
            course_code=candidate.course_code,
            course_name=candidate.course_name,
            section_label=candidate.section_label,
            faculty=candidate.faculty,
            room=candidate.room,
            intervals=tuple(candidate.intervals),
            color=color,
            role=role,
        )
        self._entries.append(entry)

        outcome = Outcome.ADMITTED_PRIMARY if role is Role.PRIMARY else Outcome.ADMITTED_BACKUP
        return AdmissionResult(outcome, candidate, entry=entry)

    def remove_section(self, entry_id: str) -> Optional[RoutineEntry]:
        """
        Remove an entry by id. Unknown ids are a no-op and return None.
        """
        entry = self.get(entry_id)
        if entry is None:
            return None

        self._entries.remove(entry)
        self._notify(
            Notification(
                f"Removed {entry.course_code} Section {entry.section_label}.",
                _SEVERITY[Outcome.REMOVED],
                Outcome.REMOVED,
            )
        )
        return entry

    def clear(self) -> None:
        """
        Empty the routine and restart the palette from its first color.
        """
        had_entries = bool(self._entries)
        self._entries.clear()
        self._color_counter = 0
        if had_entries:
            self._notify(Notification("Routine cleared.", _SEVERITY[Outcome.CLEARED], Outcome.CLEARED))
