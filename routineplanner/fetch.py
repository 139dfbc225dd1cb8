from __future__ import annotations

import argparse
from pathlib import Path

import requests


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
RAW_DIR = PACKAGE_DIR / "data" / "raw"
RAW_CSV = RAW_DIR / "schedule.csv"


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_catalogue(
    url: str,
    out_path: str | Path = RAW_CSV,
    refresh: bool = False,
    timeout: float = 30,
) -> Path:
    """
    Download the schedule CSV and cache it locally.

    Returns the path of the cached file. An existing file is kept unless
    `refresh` is set.
    """
    out_file = Path(out_path)

    if out_file.exists() and not refresh:
        print(f"SKIP  {out_file.name} (already cached)")
        return out_file

    print(f"FETCH {url}")
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()

    out_file.parent.mkdir(parents=True, exist_ok=True)
    # utf-8-sig so a BOM from spreadsheet exports does not end up in the header
    out_file.write_text(resp.content.decode("utf-8-sig"), encoding="utf-8")
    print(f"Saved to: {out_file}")
    return out_file


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="routineplanner.fetch", description="Download the course schedule CSV")
    p.add_argument("--url", "-u", type=str, required=True, help="URL of the schedule CSV")
    p.add_argument("--out", type=Path, default=RAW_CSV, help="Where to store the CSV")
    p.add_argument("--refresh", action="store_true", help="Re-download and overwrite an existing file")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    fetch_catalogue(args.url.strip(), out_path=args.out, refresh=args.refresh)


if __name__ == "__main__":
    main()
