"""
JSON export of a month layout.

The file is what a rendering collaborator (web view, e-ink panel, ...) needs:
day cells per week and, per bar, geometry, continuation flags, lane and fill.
Keys are sorted so the same layout always produces the same bytes.
"""

from __future__ import annotations

import json
from pathlib import Path

from teamcal.layout import label_visible
from teamcal.model import MonthLayout


def layout_to_dict(layout: MonthLayout) -> dict:
    data = layout.to_dict()
    for week, week_data in zip(layout.weeks, data["weeks"]):
        for p, bar in zip(week.events, week_data["events"]):
            bar["label_idx"] = p.start_idx if label_visible(p, p.start_idx) else None
    return data


def export_layout_to_json(layout: MonthLayout, out_path: str | Path) -> int:
    """
    Write the layout to `out_path`. Returns number of exported bars.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    data = layout_to_dict(layout)
    out.write_text(json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True) + "\n", encoding="utf-8")
    return sum(len(w.events) for w in layout.weeks)
