from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .models.period import DAYS, TIME_SLOTS


@dataclass
class Settings:
    days: List[str] = field(default_factory=lambda: list(DAYS))
    time_slots: List[str] = field(default_factory=lambda: list(TIME_SLOTS))
    spread_days: bool = False
    database_url: str = "sqlite:///staffgrid.db"
    log_level: str = "INFO"
    log_dir: str = "logs"


def _project_root() -> Path:
    # staffgrid/config.py -> project root is parents[1]
    return Path(__file__).resolve().parents[1]


def _as_flag(flat: Dict[str, Any], key: str, default: bool) -> bool:
    value = flat.get(key, default)
    if isinstance(value, bool):
        return value
    logging.getLogger(__name__).warning(
        f"Ignoring non-boolean {key} = {value!r}; using {default}"
    )
    return default


def load_settings(project_root: Path | str | None = None) -> Settings:
    """Load settings from configs/staffgrid.toml if present, else defaults.

    Keys may sit at the top level or under [scheduler], [storage] and
    [logging]:
      - days, time_slots, spread_days
      - database_url
      - log_level, log_dir
    A relative sqlite path in database_url is resolved against the project root.
    """
    base = Settings()
    root: Path = _project_root() if project_root is None else Path(project_root)
    cfg = root / "configs" / "staffgrid.toml"
    if not cfg.exists():
        return base
    try:
        data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logging.getLogger(__name__).warning(f"Ignoring unreadable {cfg}: {exc}")
        return base

    flat: Dict[str, Any] = {}
    for section in ("scheduler", "storage", "logging"):
        if isinstance(data.get(section), dict):
            flat.update(data[section])
    flat.update({k: v for k, v in data.items() if not isinstance(v, dict)})

    url = str(flat.get("database_url", base.database_url))
    prefix = "sqlite:///"
    if url.startswith(prefix) and not url[len(prefix):].startswith(("/", ":memory:")):
        url = prefix + str(root / url[len(prefix):])

    return Settings(
        days=[str(d) for d in flat.get("days", base.days)],
        time_slots=[str(s) for s in flat.get("time_slots", base.time_slots)],
        spread_days=_as_flag(flat, "spread_days", base.spread_days),
        database_url=url,
        log_level=str(flat.get("log_level", base.log_level)).upper(),
        log_dir=str(flat.get("log_dir", base.log_dir)),
    )
