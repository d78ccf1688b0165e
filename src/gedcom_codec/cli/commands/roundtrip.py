from __future__ import annotations

from pathlib import Path

import typer

from gedcom_codec.cli.utils import console, exit_with_error, load_gedcom
from gedcom_codec.core.exceptions import GedcomError
from gedcom_codec.entities import canonical_graph, graph_differences
from gedcom_codec.exporter import GedcomWriter
from gedcom_codec.parser_core import GedcomReader


def roundtrip_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Check that parse -> serialize -> parse preserves every entity and link,
    and that serializing twice gives identical text. Exits 1 on a mismatch.
    """
    first = load_gedcom(gedcom, verbose=verbose)
    writer = GedcomWriter()

    try:
        text = writer.serialize(first.individuals, first.families)
        second = GedcomReader().parse(text)
        text_again = writer.serialize(second.individuals, second.families)
    except GedcomError as exc:
        exit_with_error(f"round trip failed: {exc}")

    problems = graph_differences(
        canonical_graph(first.individuals, first.families),
        canonical_graph(second.individuals, second.families),
    )
    if text != text_again:
        problems.append("re-serialized text differs from the first serialization")

    if problems:
        for problem in problems:
            console.print(f"[red]-[/red] {problem}")
        exit_with_error(f"{len(problems)} difference(s) after round trip")

    console.print(
        f"[green]Round trip OK[/green]: {len(first.individuals)} individuals, "
        f"{len(first.families)} families"
    )
