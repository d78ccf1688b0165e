
from __future__ import annotations

import typer

from gedcom_codec.cli.commands import (
    convert_command,
    export_json_command,
    roundtrip_command,
    stats_command,
    validate_command,
)

app = typer.Typer(
    name="gedcom-codec",
    help="GEDCOM 5.5.1 reader, validator, and writer",
    add_completion=False,
)

app.command("validate")(validate_command)
app.command("stats")(stats_command)
app.command("convert")(convert_command)
app.command("export-json")(export_json_command)
app.command("roundtrip")(roundtrip_command)


def main():
    app()


if __name__ == "__main__":
    main()
