from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from routineplanner.catalogue import (
    Catalogue,
    SectionHit,
    filter_sections_by_faculty,
    filter_sections_by_time,
    search_courses,
    unique_days,
    unique_time_labels,
)
from routineplanner.layout import layout
from routineplanner.model import CourseGroup
from routineplanner.routine import Notification, RoutineManager, Severity
from routineplanner.timetable import build_timetable, format_entry_line, schedule_text


_SEVERITY_STYLE = {
    Severity.SUCCESS: "bold green",
    Severity.WARNING: "bold yellow",
    Severity.ERROR: "bold red",
}

_SUGGESTION_LIMIT = 6


def _pick_index(console: Console, prompt: str, n: int) -> Optional[int]:
    """
    Ask for a 1-based number; returns a 0-based index or None.
    """
    pick = console.input(prompt).strip()
    if pick.isdigit() and 1 <= int(pick) <= n:
        return int(pick) - 1
    return None


def run_interactive(
    catalogue: Catalogue,
    manager: Optional[RoutineManager] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Interactive menu loop. The routine lives as long as the session.
    """
    # RoutineManager defines __len__, an empty one is falsy
    if console is None:
        console = Console()
    if manager is None:
        manager = RoutineManager()

    def show(note: Notification) -> None:
        console.print(note.message, markup=False, style=_SEVERITY_STYLE[note.severity])

    manager.subscribe(show)
    try:
        while True:
            _print_header(console, catalogue, manager)

            choice = console.input(
                "\n[1] Search + add section\n"
                "[2] Find sections by faculty / time\n"
                "[3] View routine\n"
                "[4] Remove a section\n"
                "[5] Timetable\n"
                "[6] Clear routine\n"
                "[0] Exit\n"
                "Select: "
            ).strip()

            if choice == "0":
                console.print("Bye.")
                return

            if choice == "1":
                _flow_search_add(console, catalogue, manager)
            elif choice == "2":
                _flow_advanced_search(console, catalogue, manager)
            elif choice == "3":
                _flow_view_routine(console, manager)
            elif choice == "4":
                _flow_remove(console, manager)
            elif choice == "5":
                _flow_timetable(console, manager)
            elif choice == "6":
                _flow_clear(console, manager)
            else:
                console.print("Invalid choice.")
    finally:
        manager.unsubscribe(show)


def _print_header(console: Console, catalogue: Catalogue, manager: RoutineManager) -> None:
    n_sections = sum(len(g.sections) for g in catalogue.values())
    console.print("\n=== Routine Planner (interactive) ===", style="bold")
    console.print(f"Catalogue: {len(catalogue)} courses / {n_sections} sections")
    console.print(f"Routine  : {len(manager)} section(s) added")


def _sections_table(hits: List[SectionHit]) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Section")
    table.add_column("Course")
    table.add_column("Faculty")
    table.add_column("Room")
    table.add_column("Schedule")
    for i, (g, s) in enumerate(hits, start=1):
        table.add_row(
            str(i),
            escape(s.section_id),
            escape(g.course_name),
            escape(s.faculty or "-"),
            escape(s.room or "-"),
            schedule_text(s),
        )
    return table


def _add_from_hits(console: Console, hits: List[SectionHit], manager: RoutineManager) -> None:
    console.print(_sections_table(hits))
    idx = _pick_index(console, "Add section # (blank = cancel): ", len(hits))
    if idx is None:
        return
    manager.add_section(hits[idx][1])


def _flow_search_add(console: Console, catalogue: Catalogue, manager: RoutineManager) -> None:
    query = console.input("Search course code or name: ").strip()
    if not query:
        return

    matches = search_courses(catalogue, query)
    if not matches:
        console.print("No results.")
        return

    group: CourseGroup
    if len(matches) == 1:
        group = matches[0]
    else:
        for i, g in enumerate(matches[:_SUGGESTION_LIMIT], start=1):
            console.print(f"{i}) {g.course_code} | {g.course_name}", markup=False)
        if len(matches) > _SUGGESTION_LIMIT:
            console.print(f"... and {len(matches) - _SUGGESTION_LIMIT} more, refine your search")
        idx = _pick_index(console, "Choose course # (blank = cancel): ", min(len(matches), _SUGGESTION_LIMIT))
        if idx is None:
            return
        group = matches[idx]

    _add_from_hits(console, [(group, s) for s in group.sections], manager)


def _flow_advanced_search(console: Console, catalogue: Catalogue, manager: RoutineManager) -> None:
    groups = search_courses(catalogue, console.input("Limit to courses matching (blank = all): "))
    if not groups:
        console.print("No results.")
        return

    mode = console.input(escape("[f] By faculty  [t] By time: ")).strip().lower()
    if mode == "f":
        hits = filter_sections_by_faculty(groups, console.input("Faculty name: "))
    elif mode == "t":
        days = unique_days(groups)
        for i, d in enumerate(days, start=1):
            console.print(f"{i}) {d.value}")
        day_idx = _pick_index(console, "Day # (blank = any): ", len(days))

        times = unique_time_labels(groups)
        for i, t in enumerate(times, start=1):
            console.print(f"{i}) {t}")
        time_idx = _pick_index(console, "Time # (blank = any): ", len(times))

        hits = filter_sections_by_time(
            groups,
            day=days[day_idx] if day_idx is not None else None,
            time_label=times[time_idx] if time_idx is not None else None,
        )
    else:
        console.print("Invalid choice.")
        return

    if not hits:
        console.print("No matching sections.")
        return
    _add_from_hits(console, hits, manager)


def _flow_view_routine(console: Console, manager: RoutineManager) -> None:
    if not len(manager):
        console.print("Routine is empty.")
        return
    for entry in manager.routine:
        console.print(f"- {format_entry_line(entry)}", markup=False, style=entry.color.style)


def _flow_remove(console: Console, manager: RoutineManager) -> None:
    entries = manager.routine
    if not entries:
        console.print("Routine is empty.")
        return
    for i, entry in enumerate(entries, start=1):
        console.print(f"{i}) {format_entry_line(entry)}", markup=False)
    idx = _pick_index(console, "Remove # (blank = cancel): ", len(entries))
    if idx is None:
        return
    manager.remove_section(entries[idx].id)


def _flow_timetable(console: Console, manager: RoutineManager) -> None:
    if not len(manager):
        console.print("Routine is empty.")
        return
    console.print(build_timetable(layout(manager.routine)))


def _flow_clear(console: Console, manager: RoutineManager) -> None:
    if not len(manager):
        console.print("Routine is empty.")
        return
    confirm = console.input(escape("Clear the whole routine? [y/N]: ")).strip().lower()
    if confirm == "y":
        manager.clear()
