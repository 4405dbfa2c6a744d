from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import List

from ..data.roster import Roster
from ..models.timetable import Grid


def table_csv(roster: Roster, grid: Grid, teacher_label: str = "Teacher") -> str:
    # Two header rows: day names over their slot blocks, then 1-based slot numbers.
    # Only the first classroom per teacher and cell is shown.
    day_header: List[str] = [""]
    slot_header: List[str] = [teacher_label]
    for d in grid.days:
        day_header.append(d)
        day_header.extend([""] * (len(grid.slots) - 1))
        slot_header.extend(str(i + 1) for i in range(len(grid.slots)))

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(day_header)
    writer.writerow(slot_header)
    for t in roster:
        row = [t.name]
        for d in grid.days:
            for s in grid.slots:
                entry = next((a for a in grid.cell(d, s) if a.teacher == t.name), None)
                row.append(entry.classroom if entry else "")
        writer.writerow(row)
    return buf.getvalue()


def write_table_csv(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "timetable.csv"
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path
