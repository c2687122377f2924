"""Tests for loading and selecting candidate stimuli."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from picsplit.config.data import DataConfig
from picsplit.errors import PoolValidationError
from picsplit.items.loading import (
    build_pool,
    items_from_frame,
    load_items,
    merge_tables,
    select_candidates,
)
from picsplit.items.models import StimulusItem

COVARIATES = ["name_agreement", "frequency", "aoa"]


def _candidate(label: str, agreement: float) -> StimulusItem:
    return StimulusItem(
        item_id=label,
        label=label,
        covariates={"name_agreement": agreement, "frequency": 3.0, "aoa": 5.0},
    )


class TestLoadItems:
    """Tests for load_items()."""

    def test_single_table(self, candidates_csv: Path) -> None:
        """Test reading a comma-separated table."""
        items = load_items(
            DataConfig(files=[candidates_csv], id_column="item_id"), COVARIATES
        )
        assert len(items) == 14
        assert items[0].item_id == "pic00"
        assert items[0].label == "word0"
        assert set(items[0].covariates) == set(COVARIATES)

    def test_decimal_comma(self, tmp_path: Path) -> None:
        """Test semicolon-separated tables with decimal commas."""
        path = tmp_path / "norms.csv"
        path.write_text(
            "label;name_agreement;frequency;aoa\n"
            "apple;0,12;4,5;3,25\n"
            "ball;0,5;5;2,75\n",
            encoding="utf-8",
        )
        items = load_items(
            DataConfig(files=[path], separator=";", decimal=","), COVARIATES
        )
        assert [item.item_id for item in items] == ["apple", "ball"]
        assert items[0].covariates == pytest.approx(
            {"name_agreement": 0.12, "frequency": 4.5, "aoa": 3.25}
        )

    def test_merges_tables_on_label(self, tmp_path: Path) -> None:
        """Test per-measure tables are inner-joined on the label."""
        agreement = tmp_path / "agreement.csv"
        agreement.write_text(
            "label,name_agreement\napple,0.1\nball,0.2\ncat,0.3\n", encoding="utf-8"
        )
        norms = tmp_path / "norms.csv"
        norms.write_text(
            "label,frequency,aoa\nball,5.0,2.0\napple,4.0,3.0\ndog,3.0,4.0\n",
            encoding="utf-8",
        )

        items = load_items(DataConfig(files=[agreement, norms]), COVARIATES)

        assert [item.label for item in items] == ["apple", "ball"]
        assert items[1].covariates["frequency"] == 5.0

    def test_missing_label_column(self, tmp_path: Path) -> None:
        """Test a table without the label column is rejected."""
        path = tmp_path / "bad.csv"
        path.write_text("word,aoa\napple,3\n", encoding="utf-8")
        with pytest.raises(PoolValidationError, match="label column"):
            load_items(DataConfig(files=[path]), ["aoa"])

    def test_no_files(self) -> None:
        """Test at least one table is required."""
        with pytest.raises(PoolValidationError, match="No input tables"):
            load_items(DataConfig(files=[]), COVARIATES)


class TestItemsFromFrame:
    """Tests for items_from_frame()."""

    def test_drops_missing_and_repeated(self) -> None:
        """Test incomplete rows and repeated labels are dropped."""
        frame = pd.DataFrame(
            {
                "label": ["apple", "ball", "apple", "cat"],
                "aoa": [3.0, None, 4.0, 5.0],
            }
        )
        items = items_from_frame(frame, ["aoa"], label_column="label")
        assert [(item.label, item.covariates["aoa"]) for item in items] == [
            ("apple", 3.0),
            ("cat", 5.0),
        ]

    def test_string_values_converted(self) -> None:
        """Test text columns with decimal commas and blanks are parsed."""
        frame = pd.DataFrame({"label": ["a", "b", "c"], "aoa": ["3,5", " ", "4.25"]})
        items = items_from_frame(frame, ["aoa"], label_column="label", decimal=",")
        assert [item.covariates["aoa"] for item in items] == pytest.approx([3.5, 4.25])

    def test_comma_rejected_with_decimal_point(self) -> None:
        """Test grouped thousands are rejected when the decimal mark is a point."""
        frame = pd.DataFrame({"label": ["a", "b"], "frequency": ["1,250", "3.5"]})
        with pytest.raises(PoolValidationError, match="1,250"):
            items_from_frame(frame, ["frequency"], label_column="label")

    def test_extra_columns_kept_when_present(self) -> None:
        """Test optional columns ride along without dropping rows."""
        frame = pd.DataFrame(
            {
                "label": ["a", "b"],
                "aoa": [3.0, 4.0],
                "name_agreement": [0.2, None],
            }
        )
        items = items_from_frame(
            frame,
            ["aoa"],
            label_column="label",
            extra_columns=["name_agreement", "absent"],
        )
        assert [item.covariates for item in items] == [
            {"aoa": 3.0, "name_agreement": 0.2},
            {"aoa": 4.0},
        ]

    def test_non_numeric_rejected(self) -> None:
        """Test a non-numeric covariate value is fatal."""
        frame = pd.DataFrame({"label": ["a", "b"], "aoa": ["3.5", "early"]})
        with pytest.raises(PoolValidationError, match="early"):
            items_from_frame(frame, ["aoa"], label_column="label")

    def test_missing_columns(self) -> None:
        """Test missing covariate columns are reported."""
        frame = pd.DataFrame({"label": ["a"]})
        with pytest.raises(PoolValidationError, match="aoa"):
            items_from_frame(frame, ["aoa"], label_column="label")


class TestMergeTables:
    """Tests for merge_tables()."""

    def test_first_table_wins_shared_columns(self) -> None:
        """Test columns are not duplicated from later tables."""
        left = pd.DataFrame({"label": ["a", "b"], "aoa": [1.0, 2.0]})
        right = pd.DataFrame({"label": ["a", "b"], "aoa": [9.0, 9.0], "f": [3.0, 4.0]})
        merged = merge_tables([left, right], "label")
        assert list(merged.columns) == ["label", "aoa", "f"]
        assert merged["aoa"].tolist() == [1.0, 2.0]


class TestSelectCandidates:
    """Tests for select_candidates()."""

    def test_ranks_by_name_agreement(self) -> None:
        """Test the lowest H values are kept, ties ordered by label."""
        items = [
            _candidate("dog", 0.4),
            _candidate("cat", 0.1),
            _candidate("bee", 0.1),
            _candidate("ant", 0.9),
        ]
        selected = select_candidates(items, 2, "name_agreement")
        assert [item.label for item in selected] == ["bee", "cat"]

    def test_threshold_filters(self) -> None:
        """Test candidates above the threshold are excluded."""
        items = [_candidate(f"w{i}", i / 10) for i in range(6)]
        selected = select_candidates(items, 4, "name_agreement", name_agreement_max=0.3)
        assert [item.label for item in selected] == ["w0", "w1", "w2", "w3"]

    def test_too_few_after_threshold(self) -> None:
        """Test a threshold leaving too few candidates is fatal."""
        items = [_candidate(f"w{i}", i / 10) for i in range(6)]
        with pytest.raises(PoolValidationError, match="Only 3"):
            select_candidates(items, 4, "name_agreement", name_agreement_max=0.2)

    def test_odd_pool_size(self) -> None:
        """Test odd pool sizes are rejected."""
        items = [_candidate(f"w{i}", 0.1) for i in range(6)]
        with pytest.raises(PoolValidationError, match="even"):
            select_candidates(items, 3, "name_agreement")

    def test_bound_on_unknown_agreement_column(self) -> None:
        """Test a bound needs the ranking covariate on every candidate."""
        with pytest.raises(PoolValidationError, match="no 'h'"):
            select_candidates(
                [_candidate("a", 0.1), _candidate("b", 0.2)],
                2,
                "h",
                name_agreement_max=0.5,
            )

    def test_partial_agreement_values(self) -> None:
        """Test ranking fails when only some candidates carry name agreement."""
        items = [
            _candidate("a", 0.1),
            StimulusItem(item_id="b", label="b", covariates={"aoa": 5.0}),
        ]
        with pytest.raises(PoolValidationError, match="no 'name_agreement'"):
            select_candidates(items, 2, "name_agreement")

    def test_input_order_without_agreement(self) -> None:
        """Test candidates keep input order when none has name agreement."""
        items = [
            StimulusItem(item_id=label, label=label, covariates={"aoa": 5.0})
            for label in ["dog", "cat", "bee", "ant"]
        ]
        selected = select_candidates(items, 2, "name_agreement")
        assert [item.label for item in selected] == ["dog", "cat"]

    def test_input_order_too_few(self) -> None:
        """Test the pool size is still enforced without ranking."""
        items = [
            StimulusItem(item_id="a", label="a", covariates={"aoa": 5.0}),
            StimulusItem(item_id="b", label="b", covariates={"aoa": 4.0}),
        ]
        with pytest.raises(PoolValidationError, match="4 required"):
            select_candidates(items, 4, "name_agreement")


class TestBuildPool:
    """Tests for build_pool()."""

    def test_valid_pool(self) -> None:
        """Test a valid selection becomes a pool."""
        pool = build_pool([_candidate("a", 0.1), _candidate("b", 0.2)], COVARIATES)
        assert pool.covariate_names == tuple(COVARIATES)

    def test_invalid_pool_wrapped(self) -> None:
        """Test model validation errors surface as PoolValidationError."""
        with pytest.raises(PoolValidationError, match="even"):
            build_pool([_candidate("a", 0.1)], COVARIATES)
