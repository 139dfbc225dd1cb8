"""
CLI (Command Line Interface).

This module provides quick terminal commands for power users and for testing, e.g.:

    routineplanner search <text>
    routineplanner sections <course_code>
    routineplanner plan <CODE-SECTION> [<CODE-SECTION> ...]
    routineplanner conflicts <CODE-SECTION> [<CODE-SECTION> ...]
    routineplanner fetch --url <csv url>
    routineplanner interactive

Note:
- The routine only lives for one run (nothing is saved between runs)
- The interactive UI lives in routineplanner/interactive.py
- Apart from the timetable grid this CLI prints plain text
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

import requests
from rich.console import Console

from routineplanner.catalogue import (
    Catalogue,
    CatalogueLoadError,
    find_section,
    load_catalogue,
    search_courses,
)
from routineplanner.conflicts import find_conflicts
from routineplanner.fetch import RAW_CSV, fetch_catalogue
from routineplanner.layout import layout
from routineplanner.model import Section
from routineplanner.routine import Notification, RoutineManager
from routineplanner.timetable import build_timetable, format_entry_line, schedule_text


_SEVERITY_PREFIX = {
    "success": "✓",
    "warning": "!",
    "error": "⚠",
}


def _default_catalogue_path() -> Path:
    """
    Return the catalogue CSV path, overridable via ROUTINEPLANNER_CATALOGUE.
    """
    env = os.environ.get("ROUTINEPLANNER_CATALOGUE", "").strip()
    return Path(env) if env else RAW_CSV


def _print_notification(note: Notification) -> None:
    print(f"{_SEVERITY_PREFIX[note.severity.value]} {note.message}")


def _cmd_search(args: argparse.Namespace, catalogue: Catalogue) -> int:
    """
    Search courses by substring match in course code or course name.
    """
    query = (args.text or "").strip()
    if not query:
        print("Please provide a search text.")
        return 1

    matches = search_courses(catalogue, query)
    if not matches:
        print("No results.")
        return 0

    # show max 20
    for group in matches[:20]:
        n = len(group.sections)
        print(f"{group.course_code} | {group.course_name} ({n} section{'s' if n != 1 else ''})")
    if len(matches) > 20:
        print(f"... and {len(matches) - 20} more results")

    return 0


def _cmd_sections(args: argparse.Namespace, catalogue: Catalogue) -> int:
    """
    List all sections of one course.
    """
    code = (args.course_code or "").strip()
    group = catalogue.get(code) or catalogue.get(code.upper())
    if group is None:
        print(f"Unknown course: {code}")
        return 1

    print(f"{group.course_code} | {group.course_name}")
    for s in group.sections:
        room = s.room or "-"
        faculty = s.faculty or "-"
        print(f"  {s.section_id} | {faculty} | {room} | {schedule_text(s)}")
    return 0


def _resolve_sections(ids: list[str], catalogue: Catalogue) -> list[Section]:
    out: list[Section] = []
    for raw_id in ids:
        section = find_section(catalogue, raw_id)
        if section is None:
            print(f"Unknown section: {raw_id}")
            continue
        out.append(section)
    return out


def _cmd_plan(args: argparse.Namespace, catalogue: Catalogue) -> int:
    """
    Build a routine from the given sections (in order) and print the grid.
    """
    manager = RoutineManager()
    manager.subscribe(_print_notification)

    for section in _resolve_sections(args.section_ids, catalogue):
        manager.add_section(section)

    if not len(manager):
        print("Routine is empty.")
        return 0

    print(f"\nRoutine ({len(manager)} section{'s' if len(manager) != 1 else ''}):")
    for entry in manager.routine:
        print(f"- {format_entry_line(entry)}")

    Console().print(build_timetable(layout(manager.routine)))
    return 0


def _cmd_conflicts(args: argparse.Namespace, catalogue: Catalogue) -> int:
    """
    Print every clash between the given sections (different courses only).
    """
    sections = _resolve_sections(args.section_ids, catalogue)

    confs = find_conflicts(sections)
    if not confs:
        print("No conflicts found.")
        return 0

    print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        print(f"- {a.section_id} ({schedule_text(a)})  <->  {b.section_id} ({schedule_text(b)})")

    return 0


def _cmd_fetch(args: argparse.Namespace) -> int:
    """
    Download the schedule CSV to the catalogue path.
    """
    try:
        fetch_catalogue(args.url.strip(), out_path=args.catalogue, refresh=args.refresh)
    except (requests.RequestException, UnicodeDecodeError, OSError) as exc:
        print(f"Download failed: {exc}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="routineplanner", description="Routine planner CLI")
    parser.add_argument(
        "--catalogue",
        "-c",
        type=Path,
        default=_default_catalogue_path(),
        help="Path to the schedule CSV",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search for courses")
    p_search.add_argument("text", type=str, help="Search text")

    p_sections = sub.add_parser("sections", help="List sections of a course")
    p_sections.add_argument("course_code", type=str, help="Course code (e.g. CSE 1111)")

    p_plan = sub.add_parser("plan", help="Add sections to a routine and show the weekly grid")
    p_plan.add_argument("section_ids", nargs="+", help="Section ids, CODE-SECTION (e.g. CSE101-A)")

    p_conf = sub.add_parser("conflicts", help="Show time conflicts between sections")
    p_conf.add_argument("section_ids", nargs="+", help="Section ids, CODE-SECTION")

    p_fetch = sub.add_parser("fetch", help="Download the schedule CSV")
    p_fetch.add_argument("--url", "-u", type=str, required=True, help="URL of the schedule CSV")
    p_fetch.add_argument("--refresh", action="store_true", help="Overwrite an existing file")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))

    try:
        catalogue = load_catalogue(args.catalogue)
    except CatalogueLoadError as exc:
        print(f"Failed to load schedule: {exc}")
        raise SystemExit(1)

    if args.command == "search":
        raise SystemExit(_cmd_search(args, catalogue))
    if args.command == "sections":
        raise SystemExit(_cmd_sections(args, catalogue))
    if args.command == "plan":
        raise SystemExit(_cmd_plan(args, catalogue))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args, catalogue))

    if args.command == "interactive":
        from routineplanner.interactive import run_interactive

        run_interactive(catalogue)
        raise SystemExit(0)

    raise SystemExit(2)
