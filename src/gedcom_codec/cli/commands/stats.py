from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from gedcom_codec.cli.utils import console, load_gedcom


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    result = load_gedcom(gedcom, verbose=verbose)

    living = sum(1 for p in result.individuals if p.living)
    notes = sum(1 for p in result.individuals if p.notes) + sum(1 for f in result.families if f.notes)

    table = Table(title="GEDCOM Statistics")
    table.add_column("Entity", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Individuals", str(len(result.individuals)))
    table.add_row("Living", str(living))
    table.add_row("Deceased", str(len(result.individuals) - living))
    table.add_row("Families", str(len(result.families)))
    table.add_row("Divorced", str(sum(1 for f in result.families if f.divorced)))
    table.add_row("With notes", str(notes))
    table.add_row("Warnings", str(len(result.warnings)))

    console.print(table)
