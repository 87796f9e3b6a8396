"""legdata CLI application with Typer."""

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

from legdata import __version__
from legdata.bootstrap import bootstrap_application
from legdata.config import get_settings, set_settings
from legdata.ingest.discover import discover_daybreak_files
from legdata.model.daybreak import ClassificationError, DaybreakFile, NotFoundError
from legdata.utils.cli_output import json_response

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]

app = typer.Typer(
    name="legdata",
    help="Offline-first legislative data ingest CLI",
    add_completion=True,
    no_args_is_help=True,
)
daybreak_app = typer.Typer(help="Daybreak file staging and archival")
app.add_typer(daybreak_app, name="daybreak")
spotcheck_app = typer.Typer(help="Spot-check reports against reference data")
app.add_typer(spotcheck_app, name="spotcheck")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"legdata version {__version__}")
        raise typer.Exit()


def _describe(record: DaybreakFile) -> str:
    report_date = record.report_date.isoformat() if record.report_date else "undated"
    status = "archived" if record.archived else "staged"
    return f"{record.doc_type.name:<14} {report_date:<10} {status:<8} {record.file_path}"


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Override data directory"),
    ] = None,
) -> None:
    """legdata - Offline-first legislative data ingest CLI."""
    settings = get_settings()
    if data_dir:
        settings.data_dir = data_dir
    set_settings(settings)


@daybreak_app.command("inspect")
def daybreak_inspect(
    path: Annotated[Path, typer.Argument(help="Daybreak file to inspect")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Emit a schema-stamped JSON document"),
    ] = False,
) -> None:
    """Classify a daybreak file and show its report date."""
    try:
        record = DaybreakFile(path)
    except (NotFoundError, ClassificationError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if json_output:
        entry = record.to_manifest_entry()
        typer.echo(json_response("daybreak_file", 1, **entry.model_dump(mode="json")))
        return

    typer.echo(repr(record))
    if record.report_date is None:
        typer.secho(
            f"Warning: report date could not be parsed from {record.file_name}",
            fg=typer.colors.YELLOW,
        )


@daybreak_app.command("scan")
def daybreak_scan(
    path: Annotated[Path, typer.Argument(help="Directory to scan for daybreak files")],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Recursively scan directories"),
    ] = False,
) -> None:
    """List the daybreak files found under a directory."""
    container = bootstrap_application()
    try:
        records = list(
            discover_daybreak_files(path, container.storage_port, recursive=recursive)
        )
    except (FileNotFoundError, ClassificationError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    for record in records:
        typer.echo(_describe(record))
    typer.secho(f"Found {len(records)} daybreak files", fg=typer.colors.GREEN)


@daybreak_app.command("stage")
def daybreak_stage(
    source: Annotated[Path, typer.Argument(help="Directory holding incoming daybreak files")],
) -> None:
    """Move incoming daybreak files into the staging directory."""
    container = bootstrap_application()
    try:
        staged = container.staging_service.stage(source)
    except (FileNotFoundError, NotADirectoryError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=2) from exc

    for record in staged:
        typer.echo(_describe(record))
    staging_dir = container.settings.get_daybreak_staging_dir()
    typer.secho(f"Staged {len(staged)} daybreak files into {staging_dir}", fg=typer.colors.GREEN)


@daybreak_app.command("archive")
def daybreak_archive() -> None:
    """Archive every staged daybreak file."""
    container = bootstrap_application()
    try:
        archived = container.staging_service.archive_pending()
    except FileExistsError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    for record in archived:
        typer.echo(_describe(record))
    typer.secho(f"Archived {len(archived)} daybreak files", fg=typer.colors.GREEN)


@daybreak_app.command("list")
def daybreak_list(
    pending: Annotated[
        bool,
        typer.Option("--pending", help="Only show files that have not been archived"),
    ] = False,
) -> None:
    """List daybreak files recorded in the manifest."""
    container = bootstrap_application()
    service = container.staging_service
    records = service.pending() if pending else service.load_manifest()

    if not records:
        typer.secho("No daybreak files recorded", fg=typer.colors.YELLOW)
        return
    for record in records:
        typer.echo(_describe(record))


@spotcheck_app.command("calendar")
def spotcheck_calendar(
    start: Annotated[
        datetime,
        typer.Option("--start", formats=DATE_FORMATS, help="Start of the reference range"),
    ],
    end: Annotated[
        datetime,
        typer.Option("--end", formats=DATE_FORMATS, help="End of the reference range"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report as JSON to this path"),
    ] = None,
) -> None:
    """Compare local calendars against production reference calendars."""
    container = bootstrap_application()
    try:
        report = container.prod_calendar_report_service.generate_report(start, end)
    except ValueError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.secho(
        f"Checked {len(report.checked)} calendars "
        f"({len(report.deferred)} deferred, notes: {report.notes})",
        fg=typer.colors.BLUE,
    )
    for mismatch in report.mismatches:
        typer.secho(
            f"{mismatch.calendar_id} {mismatch.mismatch_type}: "
            f"reference={mismatch.reference_value!r} observed={mismatch.observed_value!r}",
            fg=typer.colors.YELLOW,
        )
    if report.is_clean:
        typer.secho("No mismatches found", fg=typer.colors.GREEN)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json_response("calendar_report", 1, **report.model_dump(mode="json")),
            encoding="utf-8",
        )
        typer.secho(f"Report written to {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
