"""
CLI command modules for gedcom_codec.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_codec.cli.commands.convert import convert_command
from gedcom_codec.cli.commands.export_json import export_json_command
from gedcom_codec.cli.commands.roundtrip import roundtrip_command
from gedcom_codec.cli.commands.stats import stats_command
from gedcom_codec.cli.commands.validate import validate_command

__all__ = [
    "convert_command",
    "export_json_command",
    "roundtrip_command",
    "stats_command",
    "validate_command",
]
