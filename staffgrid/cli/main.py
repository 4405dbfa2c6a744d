from __future__ import annotations

import logging
from pathlib import Path

import typer

from ..config import Settings, load_settings
from ..data.loader import load_document, write_document
from ..errors import ConflictError, DecodeError, PersistenceError, ValidationError
from ..render.csv_out import write_table_csv
from ..session import Scheduler
from ..validate.report import format_validation_report, write_validation_report


def _setup_logging(project_root: Path, settings: Settings) -> None:
    logs_dir = project_root / settings.log_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "staffgrid.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def run_pipeline(
    project_root: Path,
    *,
    roster_path: Path | None = None,
    outputs_dir: Path | None = None,
    log_level: int | None = None,
    spread_days: bool | None = None,
) -> tuple[str, str, str]:
    """Generate a grid for a roster document and write the outputs.

    Reads ``data/roster.json`` unless ``roster_path`` is given and writes
    timetable.csv, validation.json, schedule.json and audit.txt. Returns the
    CSV text, the formatted validation report and the audit text.
    """
    settings = load_settings(project_root)
    _setup_logging(project_root, settings)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    if spread_days is not None:
        settings.spread_days = spread_days

    roster, _ = load_document(
        roster_path or project_root / "data" / "roster.json",
        settings.days,
        settings.time_slots,
    )
    session = Scheduler(roster, settings=settings)
    result = session.generate()
    report = session.validate()

    outputs_dir = outputs_dir or project_root / "outputs"
    write_validation_report(report, outputs_dir)
    csv = session.export_table()
    write_table_csv(csv, outputs_dir)
    write_document(session.roster, session.grid, outputs_dir / "json" / "schedule.json")

    audit_text = "\n".join(["Placements:"] + result.audit)
    with (outputs_dir / "audit.txt").open("w", encoding="utf-8") as f:
        f.write(audit_text)

    return csv, format_validation_report(report), audit_text


app = typer.Typer(add_completion=False, help="Weekly teacher/classroom timetable generator")


def _open(root: Path) -> Scheduler:
    settings = load_settings(root)
    _setup_logging(root, settings)
    try:
        return Scheduler.open(settings)
    except PersistenceError as exc:
        typer.echo(f"Cannot open store: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _report_save(session: Scheduler) -> None:
    if not session.last_save_ok:
        typer.echo(f"Warning: changes were not saved ({session.last_error})", err=True)
        raise typer.Exit(code=2)


@app.command("import-doc")
def cli_import_doc(
    path: Path = typer.Argument(..., help="Document exported by export-doc"),
    root: Path = typer.Option(Path("."), help="Project root holding configs/"),
) -> None:
    session = _open(root)
    try:
        session.import_document(path.read_text(encoding="utf-8"))
    except (OSError, DecodeError) as exc:
        typer.echo(f"Import failed, nothing changed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    _report_save(session)
    typer.echo(f"Imported {len(session.roster)} teachers, {len(session.grid)} assignments")


@app.command("export-doc")
def cli_export_doc(
    path: Path = typer.Argument(..., help="Where to write the document"),
    root: Path = typer.Option(Path("."), help="Project root holding configs/"),
) -> None:
    session = _open(root)
    write_document(session.roster, session.grid, path)
    typer.echo(f"Wrote {path}")


@app.command("generate")
def cli_generate(
    root: Path = typer.Option(Path("."), help="Project root holding configs/"),
    spread_days: bool | None = typer.Option(
        None, "--spread-days/--fill-days", help="Balance hours per day instead of per week"
    ),
) -> None:
    session = _open(root)
    if spread_days is not None:
        session.settings.spread_days = spread_days
    result = session.generate()
    typer.echo(f"Placed {len(result.grid)} assignments")
    for gap in result.shortfall:
        typer.echo(f"  shortfall {gap.teacher} {gap.classroom}: {gap.placed}/{gap.requested}")
    _report_save(session)


@app.command("move")
def cli_move(
    day: str,
    slot: str,
    index: int,
    new_day: str,
    new_slot: str,
    root: Path = typer.Option(Path("."), help="Project root holding configs/"),
) -> None:
    session = _open(root)
    try:
        session.move(day, slot, index, new_day, new_slot)
    except (ConflictError, ValidationError) as exc:
        typer.echo(f"Move rejected: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    _report_save(session)
    typer.echo(f"Moved {day} {slot} #{index} -> {new_day} {new_slot}")


@app.command("export-csv")
def cli_export_csv(
    out: Path | None = typer.Option(None, help="Directory for timetable.csv; stdout if omitted"),
    root: Path = typer.Option(Path("."), help="Project root holding configs/"),
) -> None:
    session = _open(root)
    csv = session.export_table()
    if out is None:
        typer.echo(csv, nl=False)
    else:
        typer.echo(f"Wrote {write_table_csv(csv, out)}")


@app.command("validate")
def cli_validate(
    root: Path = typer.Option(Path("."), help="Project root holding configs/"),
) -> None:
    session = _open(root)
    report = session.validate()
    typer.echo(format_validation_report(report))
    if report.get("clash_count"):
        raise typer.Exit(code=1)
