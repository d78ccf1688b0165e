from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gedcom_codec.cli.utils import console, exit_with_error, load_gedcom
from gedcom_codec.core.exceptions import SerializationError
from gedcom_codec.exporter import GedcomWriter, export_to_file


def convert_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Parse a GEDCOM file and write it back out in normalized GEDCOM 5.5.1.
    """
    result = load_gedcom(gedcom, verbose=verbose)
    writer = GedcomWriter()

    try:
        if out:
            export_to_file(result.individuals, result.families, out, writer=writer)
        else:
            text = writer.serialize(result.individuals, result.families)
            typer.echo(text, nl=False)
    except SerializationError as exc:
        exit_with_error(str(exc))

    if verbose:
        console.log(f"Converted {len(result.individuals)} individuals, {len(result.families)} families")
