
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Iterable

import typer
from rich.console import Console
from rich.table import Table

from gedcom_codec.core.exceptions import GedcomError
from gedcom_codec.entities.models import Issue, ParseResult
from gedcom_codec.loader import read_gedcom_file
from gedcom_codec.parser_core import GedcomReader

console = Console()
err_console = Console(stderr=True)


def read_text(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(path)
    return read_gedcom_file(path)


def load_gedcom(path: Path, *, verbose: bool = False) -> ParseResult:
    """
    Parse a GEDCOM file, turning hard errors into a clean CLI exit.
    """
    t0 = time.perf_counter()

    try:
        result = GedcomReader().parse(read_text(path))
    except GedcomError as exc:
        exit_with_error(str(exc))

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded GEDCOM in {elapsed:.2f}s")

    return result


def exit_with_error(message: str, code: int = 1):
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=code)


def issues_table(title: str, issues: Iterable[Issue], style: str) -> Table:
    table = Table(title=title, title_style=style)
    table.add_column("Line", justify="right")
    table.add_column("Message")
    for issue in issues:
        table.add_row("" if issue.line is None else str(issue.line), issue.message)
    return table


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
