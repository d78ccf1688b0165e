import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gedcom_codec.config import CodecConfig  # noqa: E402
from gedcom_codec.core.context import ParseContext  # noqa: E402
from gedcom_codec.loader import build_tree, reconstruct_values, tokenize_text  # noqa: E402
from gedcom_codec.logging import get_logger  # noqa: E402
from gedcom_codec.utils import mock_file_path  # noqa: E402


HEADER = "\n".join(
    [
        "0 HEAD",
        "1 SOUR tests",
        "1 GEDC",
        "2 VERS 5.5.1",
        "2 FORM LINEAGE-LINKED",
        "1 CHAR UTF-8",
    ]
)


def gedcom(*lines: str, trailer: bool = True) -> str:
    """Wrap record lines in a valid HEAD / TRLR envelope."""
    body = [HEADER, *lines]
    if trailer:
        body.append("0 TRLR")
    return "\n".join(body) + "\n"


def make_config(**sections) -> CodecConfig:
    return CodecConfig(sections)


@pytest.fixture
def ctx() -> ParseContext:
    return ParseContext(config=make_config(), logger=get_logger("tests"))


@pytest.fixture
def collecting_ctx() -> ParseContext:
    return ParseContext(config=make_config(), logger=get_logger("tests"), fail_fast=False)


@pytest.fixture
def records_from():
    """Build folded level-0 records from GEDCOM text."""

    def _build(text: str):
        tree = build_tree(tokenize_text(text))
        return reconstruct_values(tree.records)

    return _build


@pytest.fixture
def tree_from():
    """Build a folded GEDCOMTree from GEDCOM text."""

    def _build(text: str):
        tree = build_tree(tokenize_text(text))
        reconstruct_values(tree.records)
        return tree

    return _build


@pytest.fixture
def mock_text():
    def _read(name: str) -> str:
        return mock_file_path(name).read_text(encoding="utf-8")

    return _read
