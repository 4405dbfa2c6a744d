from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from ..scheduler.allocate import Shortfall


def shortfall_entries(shortfall: List[Shortfall]) -> Dict[str, int]:
    return {f"{s.teacher}:{s.classroom}": s.missing for s in shortfall}


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "validation.json").open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"clash_count: {report.get('clash_count')}")
    lines.append(f"assignment_count: {report.get('assignment_count')}")
    violations = report.get("violations_by_rule", {})
    lines.append("violations_by_rule:")
    if isinstance(violations, dict):
        for k, v in violations.items():
            lines.append(f"  - {k}: {len(v)}")
    unmet = report.get("unmet_weekly_loads", {})
    if isinstance(unmet, dict):
        lines.append(f"unmet_weekly_loads: {len(unmet)} entries")
        for k, v in unmet.items():
            lines.append(f"  - {k}: {v}")
    return "\n".join(lines)
