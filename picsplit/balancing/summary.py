"""Descriptive statistics of the two selected lists.

Statistics are computed on the raw (non-standardized) covariates. Rounding
only happens when rows are produced for display.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

from picsplit.balancing.search import Partition
from picsplit.items.models import StimulusPool

GROUP_NAMES = ("list_a", "list_b")


class GroupSummary(BaseModel):
    """Mean and sample SD of each covariate within one list.

    Attributes
    ----------
    name : str
        List name.
    item_ids : tuple[str, ...]
        Items in the list, in list order.
    means : dict[str, float]
        Mean per covariate.
    sds : dict[str, float]
        Sample standard deviation (ddof=1) per covariate; NaN for a
        single-item list.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    item_ids: tuple[str, ...]
    means: dict[str, float]
    sds: dict[str, float]

    @property
    def size(self) -> int:
        """Number of items in the list."""
        return len(self.item_ids)


def describe(values: np.ndarray) -> tuple[float, float]:
    """Return mean and sample standard deviation of a 1-D array.

    Examples
    --------
    >>> describe(np.array([1.0, 2.0, 3.0]))
    (2.0, 1.0)
    """
    values = np.asarray(values, dtype=float)
    mean = float(values.mean())
    sd = float(values.std(ddof=1)) if values.size > 1 else float("nan")
    return mean, sd


def summarize_group(
    name: str,
    item_ids: Sequence[str],
    matrix: np.ndarray,
    covariate_names: Sequence[str],
) -> GroupSummary:
    """Summarize raw covariate rows of one list.

    Parameters
    ----------
    name : str
        List name.
    item_ids : Sequence[str]
        Item ids, one per row of ``matrix``.
    matrix : np.ndarray
        Raw covariates, shape (n_items, n_covariates).
    covariate_names : Sequence[str]
        Column names.

    Returns
    -------
    GroupSummary
        Per-covariate means and SDs.
    """
    means: dict[str, float] = {}
    sds: dict[str, float] = {}
    for j, covariate in enumerate(covariate_names):
        means[covariate], sds[covariate] = describe(matrix[:, j])
    return GroupSummary(name=name, item_ids=tuple(item_ids), means=means, sds=sds)


class SummaryTable(BaseModel):
    """Per-list descriptive statistics for a chosen partition.

    Attributes
    ----------
    covariate_names : tuple[str, ...]
        Covariates in column order.
    groups : tuple[GroupSummary, ...]
        One summary per list (list A first).
    score : float
        Score of the summarized partition.
    """

    model_config = ConfigDict(frozen=True)

    covariate_names: tuple[str, ...]
    groups: tuple[GroupSummary, ...]
    score: float

    def columns(self) -> list[str]:
        """Return the statistic column names (``<covariate>_mean``, ``_sd``)."""
        columns: list[str] = []
        for covariate in self.covariate_names:
            columns.extend([f"{covariate}_mean", f"{covariate}_sd"])
        return columns

    def rows(self, precision: int | None = 2) -> list[dict[str, str | int | float]]:
        """Return one display row per list.

        Parameters
        ----------
        precision : int | None, default=2
            Decimal places; None leaves values unrounded.

        Returns
        -------
        list[dict[str, str | int | float]]
            Rows with ``list``, ``n`` and the statistic columns.
        """
        rows: list[dict[str, str | int | float]] = []
        for group in self.groups:
            row: dict[str, str | int | float] = {"list": group.name, "n": group.size}
            for covariate in self.covariate_names:
                for suffix, value in (
                    ("mean", group.means[covariate]),
                    ("sd", group.sds[covariate]),
                ):
                    row[f"{covariate}_{suffix}"] = (
                        value if precision is None else round(value, precision)
                    )
            rows.append(row)
        return rows

    def to_frame(self, precision: int | None = None) -> pd.DataFrame:
        """Return the statistics as a DataFrame indexed by list name."""
        return pd.DataFrame(self.rows(precision=precision)).set_index("list")


def summarize_partition(pool: StimulusPool, partition: Partition) -> SummaryTable:
    """Compute per-list statistics of the raw covariates.

    Parameters
    ----------
    pool : StimulusPool
        The partitioned pool.
    partition : Partition
        Chosen partition (positions into ``pool``).

    Returns
    -------
    SummaryTable
        Statistics for list A then list B.

    Raises
    ------
    ValueError
        If the partition does not cover the pool exactly.
    """
    if not partition.covers(len(pool)):
        raise ValueError("Partition does not cover the pool exactly")

    raw = pool.covariate_matrix()
    ids = pool.ids
    groups = tuple(
        summarize_group(
            name,
            [ids[i] for i in positions],
            raw[list(positions)],
            pool.covariate_names,
        )
        for name, positions in zip(
            GROUP_NAMES, (partition.group_a, partition.group_b), strict=True
        )
    )
    return SummaryTable(
        covariate_names=pool.covariate_names, groups=groups, score=partition.score
    )
