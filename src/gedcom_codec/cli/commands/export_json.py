from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gedcom_codec.cli.utils import console, load_gedcom, write_json
from gedcom_codec.exporter import build_result_dict


def export_json_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Export parsed GEDCOM data to JSON (stdout by default).
    """
    result = load_gedcom(gedcom, verbose=verbose)

    if verbose:
        console.log("Exporting JSON")

    write_json(build_result_dict(result), out=out, pretty=pretty)

    if verbose:
        console.log("Export complete")
