# tests/test_segmenter.py

from __future__ import annotations

import pytest

from gedcom_codec.core.exceptions import InvalidNestingError
from gedcom_codec.loader import segment_lines, tokenize_file, tokenize_text
from gedcom_codec.utils import mock_file_path


def test_mock_file_exists() -> None:
    path = mock_file_path("two_generations.ged")
    assert path.is_file(), f"Expected GEDCOM file at: {path}"


def test_segment_lines_builds_top_level_records() -> None:
    records = segment_lines(tokenize_file(mock_file_path("two_generations.ged")))

    assert records[0].tag == "HEAD"
    assert records[-1].tag == "TRLR"
    assert all(r.level == 0 for r in records)
    assert sum(1 for r in records if r.tag == "INDI") == 5
    assert sum(1 for r in records if r.tag == "FAM") == 2


def test_children_attach_to_nearest_shallower_node() -> None:
    records = segment_lines(tokenize_text("0 A\n1 B\n2 C\n1 D\n2 E\n0 F\n"))

    a, f = records
    assert [c.tag for c in a.children] == ["B", "D"]
    assert [c.tag for c in a.children[0].children] == ["C"]
    assert [c.tag for c in a.children[1].children] == ["E"]
    assert f.children == []


def test_dropping_several_levels_at_once() -> None:
    records = segment_lines(tokenize_text("0 A\n1 B\n2 C\n3 D\n1 E\n"))
    assert [c.tag for c in records[0].children] == ["B", "E"]


def test_level_jump_raises_with_line() -> None:
    with pytest.raises(InvalidNestingError) as excinfo:
        segment_lines(tokenize_text("0 @I1@ INDI\n1 BIRT\n3 DATE 1900\n"))
    assert excinfo.value.line == 3


def test_first_line_must_be_level_zero() -> None:
    with pytest.raises(InvalidNestingError) as excinfo:
        segment_lines(tokenize_text("1 NAME John\n"))
    assert excinfo.value.line == 1


def test_iter_subtree_is_depth_first() -> None:
    records = segment_lines(tokenize_text("0 A\n1 B\n2 C\n1 D\n"))
    assert [n.tag for n in records[0].iter_subtree()] == ["A", "B", "C", "D"]


def test_deep_nesting_does_not_recurse() -> None:
    depth = 3000
    lines = [f"{level} T{level}" for level in range(depth)]
    records = segment_lines(tokenize_text("\n".join(lines)))
    assert sum(1 for _ in records[0].iter_subtree()) == depth
