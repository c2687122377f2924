"""Tests for JSONL serialization."""

from __future__ import annotations

from pathlib import Path

import pytest

from picsplit.data.serialization import (
    DeserializationError,
    read_jsonlines,
    stream_jsonlines,
    write_jsonlines,
)
from picsplit.lists import ExperimentList


def test_write_and_read(tmp_path: Path) -> None:
    """Test records are written one per line and read back in order."""
    path = tmp_path / "nested" / "lists.jsonl"
    first = ExperimentList(name="list_a", list_number=0, item_refs=["p1"])
    second = ExperimentList(name="list_b", list_number=1, item_refs=["p2"])

    write_jsonlines([first, second], path)

    assert len(path.read_text().strip().split("\n")) == 2
    loaded = read_jsonlines(path, ExperimentList)
    assert [exp_list.item_refs for exp_list in loaded] == [["p1"], ["p2"]]
    assert loaded[0].id == first.id


def test_append(tmp_path: Path) -> None:
    """Test appending keeps earlier records."""
    path = tmp_path / "lists.jsonl"
    write_jsonlines([ExperimentList(name="a", list_number=0)], path)
    write_jsonlines([ExperimentList(name="b", list_number=1)], path, append=True)
    assert [r.name for r in stream_jsonlines(path, ExperimentList)] == ["a", "b"]


def test_blank_lines_skipped(tmp_path: Path) -> None:
    """Test blank lines are ignored."""
    path = tmp_path / "lists.jsonl"
    record = ExperimentList(name="a", list_number=0).model_dump_json()
    path.write_text(f"\n{record}\n\n", encoding="utf-8")
    assert len(read_jsonlines(path, ExperimentList)) == 1


def test_invalid_line_reports_line_number(tmp_path: Path) -> None:
    """Test invalid records raise DeserializationError with the line number."""
    path = tmp_path / "lists.jsonl"
    record = ExperimentList(name="a", list_number=0).model_dump_json()
    path.write_text(f"{record}\n{{not json\n", encoding="utf-8")

    with pytest.raises(DeserializationError, match="line 2") as exc_info:
        read_jsonlines(path, ExperimentList)

    assert exc_info.value.line_number == 2
