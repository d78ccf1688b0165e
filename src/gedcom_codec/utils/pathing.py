# src/gedcom_codec/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union


# This file lives at <project_root>/src/gedcom_codec/utils/pathing.py
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """
    Return the absolute path to the project root directory, the one that
    holds src/, tests/, config/ and mock_files/.
    """
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Resolve a path relative to the project root.

    Examples:
        resolve_project_path("mock_files/two_generations.ged")
        resolve_project_path(Path("config") / "gedcom_codec.yml")
    """
    return project_root() / Path(relative)


def mock_file_path(filename: Union[str, Path]) -> Path:
    """Return the absolute path to a file under the top-level mock_files/ directory."""
    return resolve_project_path(Path("mock_files") / filename)


def logs_dir(configured: Union[str, Path]) -> Path:
    """Resolve the configured logs directory; relative paths hang off the project root."""
    path = Path(configured)
    return path if path.is_absolute() else resolve_project_path(path)
