from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

from ..errors import DecodeError
from ..models.timetable import Grid
from .codec import decode, encode
from .roster import Roster


def load_document(
    path: Path, days: Sequence[str] | None = None, slots: Sequence[str] | None = None
) -> Tuple[Roster, Grid]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DecodeError(f"Cannot read {path}: {exc}") from exc
    return decode(text, days, slots)


def write_document(roster: Roster, grid: Grid, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(encode(roster, grid))
