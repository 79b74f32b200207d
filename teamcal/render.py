"""
Terminal preview of a month layout (rich).

One table per week: day numbers as header, one row per lane. A bar shows its
label (title + fill) on its label cell and a bar glyph on the other days it
spans. Arrows mark bars that continue into the previous/next week.
"""

from __future__ import annotations

import re
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from teamcal.layout import label_visible
from teamcal.model import DEFAULT_COLOR, MonthLayout, PositionedEvent, WeekLayout

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _color(p: PositionedEvent) -> str:
    c = p.event.display_color
    return c if HEX_COLOR.match(c) else DEFAULT_COLOR


def _cell(p: PositionedEvent, day_idx: int) -> Text:
    style = f"bold {_color(p)}"
    left = "◀" if p.is_continues_left and day_idx == p.start_idx else ""
    right = "▶" if p.is_continues_right and day_idx == p.end_idx else ""

    if label_visible(p, day_idx):
        title = p.event.title or "(no title)"
        return Text(f"{left}{title} {p.fill_percent:.0f}%{right}", style=style)
    return Text(f"{left}━━━━{right}", style=style)


def week_table(week: WeekLayout) -> Table:
    table = Table(box=box.SIMPLE, expand=True)
    for cell in week.window.days:
        label = f"{DAY_ABBR[cell.date.weekday()]} {cell.date.day}"
        table.add_column(label, style=None if cell.is_current_month else "dim", ratio=1)

    rows: list[list[Text]] = [[Text("") for _ in range(7)] for _ in range(week.total_slots)]
    for p in week.events:
        for day_idx in range(p.start_idx, p.end_idx + 1):
            rows[p.slot_index][day_idx] = _cell(p, day_idx)

    for row in rows:
        table.add_row(*row)
    return table


def render_month(layout: MonthLayout, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(f"[bold]=== {layout.year}-{layout.month:02d} ===[/]")
    for week in layout.weeks:
        console.print(week_table(week))
    for w in layout.warnings:
        console.print(f"[yellow]Warning:[/] {w}")
