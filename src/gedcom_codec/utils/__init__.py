# src/gedcom_codec/utils/__init__.py

from .pathing import (
    logs_dir,
    mock_file_path,
    project_root,
    resolve_project_path,
)

__all__ = [
    "logs_dir",
    "mock_file_path",
    "project_root",
    "resolve_project_path",
]
