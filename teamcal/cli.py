"""
CLI (Command Line Interface).

Quick terminal commands around the month layout engine:

    teamcal layout --year 2025 --month 3 --events schedules.json
    teamcal show   --year 2025 --month 3 --api http://localhost:3000
    teamcal export out.json --month 3 --events schedules.json

Events come either from a JSON file holding a list of schedule records or
from the team REST API (month-scoped read). The API URL and token default to
the TEAMCAL_API_URL / TEAMCAL_TOKEN environment variables.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

import requests

from teamcal.client import DEFAULT_API_URL, default_token, fetch_month_schedules
from teamcal.export_json import export_layout_to_json
from teamcal.grid import MONDAY, SUNDAY
from teamcal.ingest import events_from_records
from teamcal.layout import build_month_layout, label_visible
from teamcal.model import EventValidationError, MonthLayout

WEEK_STARTS = {"sun": SUNDAY, "mon": MONDAY}


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _load_records(args: argparse.Namespace) -> list[Any]:
    """
    Load raw schedule records from --events or from the API.

    Raises OSError/ValueError for broken files and requests exceptions for
    API failures; the caller turns them into an exit code.
    """
    if args.events:
        data = json.loads(Path(args.events).read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{args.events}: expected a JSON list of schedules")
        return data

    token = args.token or default_token()
    return fetch_month_schedules(args.api, args.year, args.month, token=token)


def _build_layout(args: argparse.Namespace) -> MonthLayout:
    records = _load_records(args)
    events, warnings = events_from_records(records)
    for w in warnings:
        _eprint(f"Warning: {w}")
    return build_month_layout(args.year, args.month, events, week_start=WEEK_STARTS[args.week_start])


def _cmd_layout(layout: MonthLayout) -> int:
    """
    Print one line per bar, week by week.
    """
    print(f"Layout {layout.year}-{layout.month:02d}: {len(layout.weeks)} weeks")
    for week in layout.weeks:
        print(f"\nWeek {week.window.start.isoformat()} .. {week.window.end.isoformat()} (lanes: {week.total_slots})")
        if not week.events:
            print("  (no events)")
            continue
        for p in week.events:
            flags = ("<" if p.is_continues_left else " ") + (">" if p.is_continues_right else " ")
            title = p.event.title if label_visible(p, p.start_idx) else ""
            print(
                f"  lane {p.slot_index} | cols {p.start_idx}-{p.end_idx} (span {p.span}) {flags}"
                f" | {p.fill_percent:5.1f}% | {p.event.id} {title}".rstrip()
            )
    for w in layout.warnings:
        print(f"Warning: {w}")
    return 0


def _cmd_show(layout: MonthLayout) -> int:
    from teamcal.render import render_month

    render_month(layout)
    return 0


def _cmd_export(args: argparse.Namespace, layout: MonthLayout) -> int:
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .json path.")
        return 1

    n = export_layout_to_json(layout, out_path)
    print(f"Exported {n} event bars to: {out_path}")
    return 0


def _add_source_args(p: argparse.ArgumentParser) -> None:
    today = date.today()
    p.add_argument("--year", "-y", type=int, default=today.year, help="Year (default: current)")
    p.add_argument("--month", "-m", type=int, default=today.month, help="Month 1-12 (default: current)")
    p.add_argument("--events", "-e", type=str, default=None, help="JSON file with schedule records")
    p.add_argument("--api", type=str, default=DEFAULT_API_URL, help="Team API base URL")
    p.add_argument("--token", type=str, default=None, help="Bearer token (default: $TEAMCAL_TOKEN)")
    p.add_argument("--week-start", choices=sorted(WEEK_STARTS), default="sun", help="First day of the week")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="teamcal", description="Team calendar month layout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_layout = sub.add_parser("layout", help="Print the month layout as text")
    _add_source_args(p_layout)

    p_show = sub.add_parser("show", help="Render the month layout in the terminal")
    _add_source_args(p_show)

    p_export = sub.add_parser("export", help="Export the month layout to JSON")
    p_export.add_argument("out", type=str, help="Output file path (e.g. layout.json)")
    _add_source_args(p_export)

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not 1 <= args.month <= 12:
        _eprint(f"Invalid month: {args.month}")
        raise SystemExit(1)

    try:
        layout = _build_layout(args)
    except EventValidationError as e:
        _eprint(f"Invalid event data: {e}")
        raise SystemExit(1)
    except requests.RequestException as e:
        _eprint(f"Could not load schedules from {args.api}: {e}")
        raise SystemExit(1)
    except (OSError, ValueError) as e:
        _eprint(f"Could not load schedules: {e}")
        raise SystemExit(1)

    if args.command == "layout":
        raise SystemExit(_cmd_layout(layout))
    if args.command == "show":
        raise SystemExit(_cmd_show(layout))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, layout))

    raise SystemExit(2)
