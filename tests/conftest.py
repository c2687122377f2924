"""Root pytest configuration for picsplit tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
import pytest
from click.testing import CliRunner

from picsplit.items.models import StimulusItem, StimulusPool

COVARIATES = ("name_agreement", "frequency", "aoa")


def make_pool(
    n_items: int, seed: int = 0, covariates: Sequence[str] = COVARIATES
) -> StimulusPool:
    """Build a pool of items with normally distributed covariates."""
    rng = np.random.default_rng(seed)
    values = rng.normal(loc=2.0, scale=1.0, size=(n_items, len(covariates)))
    items = tuple(
        StimulusItem(
            item_id=f"p{i:03d}",
            label=f"word{i}",
            covariates={
                name: float(value) for name, value in zip(covariates, row, strict=True)
            },
        )
        for i, row in enumerate(values)
    )
    return StimulusPool(items=items, covariate_names=tuple(covariates))


@pytest.fixture
def pool_factory() -> Callable[..., StimulusPool]:
    """Provide a factory for random pools."""
    return make_pool


@pytest.fixture
def four_item_pool() -> StimulusPool:
    """Provide the four-item pool with vectors [1,0], [0,1], [1,1], [-1,-1]."""
    vectors = {"a": (1.0, 0.0), "b": (0.0, 1.0), "c": (1.0, 1.0), "d": (-1.0, -1.0)}
    items = tuple(
        StimulusItem(
            item_id=item_id, label=f"label_{item_id}", covariates={"x": x, "y": y}
        )
        for item_id, (x, y) in vectors.items()
    )
    return StimulusPool(items=items, covariate_names=("x", "y"))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click test runner."""
    return CliRunner()


@pytest.fixture
def candidates_csv(tmp_path: Path) -> Path:
    """Write a candidate table of 14 pictures and return its path."""
    rng = np.random.default_rng(7)
    lines = ["item_id,label,name_agreement,frequency,aoa"]
    for i in range(14):
        agreement = rng.uniform(0.0, 1.5)
        frequency = rng.uniform(1.0, 6.0)
        aoa = rng.uniform(2.0, 12.0)
        lines.append(f"pic{i:02d},word{i},{agreement:.3f},{frequency:.3f},{aoa:.3f}")
    path = tmp_path / "candidates.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clear_picsplit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove PICSPLIT_* variables so tests see only their own settings."""
    for key in list(os.environ):
        if key.startswith("PICSPLIT_"):
            monkeypatch.delenv(key)
