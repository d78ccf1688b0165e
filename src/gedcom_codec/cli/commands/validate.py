from __future__ import annotations

from pathlib import Path

import typer

from gedcom_codec.cli.utils import console, exit_with_error, issues_table, read_text, write_json
from gedcom_codec.core.exceptions import GedcomError
from gedcom_codec.parser_core import GedcomReader


def validate_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the import-preview report as JSON",
    ),
):
    """
    Check a GEDCOM file without importing it. Exits 1 when it has errors.
    """
    try:
        text = read_text(gedcom)
    except GedcomError as exc:
        exit_with_error(str(exc))

    report = GedcomReader().validate(text)

    if as_json:
        write_json(report.to_dict(), out=None, pretty=True)
    else:
        console.print(
            f"People: [bold]{report.people_count}[/bold]  "
            f"Families: [bold]{report.families_count}[/bold]"
        )
        if report.errors:
            console.print(issues_table("Errors", report.errors, "bold red"))
        if report.warnings:
            console.print(issues_table("Warnings", report.warnings, "yellow"))
        if report.incomplete:
            console.print("[yellow]File has no TRLR record; it may be truncated.[/yellow]")
        console.print("[green]Ready to import[/green]" if report.ready else "[red]Not ready to import[/red]")

    if not report.ready:
        raise typer.Exit(code=1)
