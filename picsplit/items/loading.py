"""Loading candidate stimuli from delimited tables.

Tables are read with pandas. Several tables (e.g. one per measure) are
inner-joined on the label column. Locale-formatted numbers using a decimal
comma are converted, rows with missing covariates are dropped and duplicate
labels are reduced to their first occurrence.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
import pandas as pd
from pydantic import ValidationError

from picsplit.config.data import DataConfig
from picsplit.errors import PoolValidationError
from picsplit.items.models import StimulusItem, StimulusPool

logger = logging.getLogger(__name__)


def _read_table(path: Path, config: DataConfig) -> pd.DataFrame:
    """Read one delimited file as strings-or-numbers."""
    frame = pd.read_csv(path, sep=config.separator, decimal=config.decimal)
    frame.columns = [str(column).strip() for column in frame.columns]
    if config.label_column not in frame.columns:
        raise PoolValidationError(
            f"{path}: missing label column {config.label_column!r}"
        )
    frame = frame.dropna(subset=[config.label_column])
    frame[config.label_column] = frame[config.label_column].astype(str).str.strip()
    return frame


def _to_numeric(column: pd.Series, name: str, decimal: str = ".") -> pd.Series:
    """Convert a covariate column to floats, keeping blanks as missing.

    Commas in text values are read as decimal marks only when ``decimal`` is
    ``","``; otherwise a value such as ``"1,250"`` is rejected.

    Raises
    ------
    PoolValidationError
        If a non-blank value cannot be parsed as a number.
    """
    if pd.api.types.is_numeric_dtype(column):
        return column.astype(float)

    text = column.map(lambda v: v.strip() if isinstance(v, str) else v)
    if decimal == ",":
        # decimal commas left in text columns, e.g. "3,5"
        text = text.map(lambda v: v.replace(",", ".") if isinstance(v, str) else v)
    text = text.replace("", np.nan)

    values = pd.to_numeric(text, errors="coerce").astype(float)
    bad = text.notna() & values.isna()
    if bad.any():
        examples = column[bad].head(3).tolist()
        raise PoolValidationError(
            f"Non-numeric values in covariate {name!r}: {examples}"
        )
    return values


def merge_tables(frames: Sequence[pd.DataFrame], label_column: str) -> pd.DataFrame:
    """Inner-join tables on the label column.

    Columns already present in an earlier table are not taken again from
    later tables.

    Parameters
    ----------
    frames : Sequence[pd.DataFrame]
        Tables to join, in priority order.
    label_column : str
        Join key.

    Returns
    -------
    pd.DataFrame
        Joined table.
    """
    if not frames:
        raise PoolValidationError("No input tables given")

    merged = frames[0]
    for frame in frames[1:]:
        new_columns = [c for c in frame.columns if c not in merged.columns]
        right = frame[[label_column, *new_columns]].drop_duplicates(
            subset=label_column, keep="first"
        )
        merged = merged.merge(right, on=label_column, how="inner")
    return merged


def items_from_frame(
    frame: pd.DataFrame,
    covariates: Sequence[str],
    label_column: str,
    id_column: str | None = None,
    decimal: str = ".",
    extra_columns: Sequence[str] = (),
) -> list[StimulusItem]:
    """Clean a candidate table and convert it to stimulus items.

    Parameters
    ----------
    frame : pd.DataFrame
        Candidate table.
    covariates : Sequence[str]
        Covariate columns to keep.
    label_column : str
        Column holding labels.
    id_column : str | None
        Column holding identifiers; labels are used when None.
    decimal : str
        Decimal mark of text values.
    extra_columns : Sequence[str]
        Numeric columns kept on the items when the table has them, without
        being required or used to drop rows (e.g. name agreement used only
        for ranking).

    Returns
    -------
    list[StimulusItem]
        Items in table order, without missing covariates or repeated labels.

    Raises
    ------
    PoolValidationError
        If required columns are missing or a covariate is non-numeric.
    """
    required = [label_column, *covariates]
    if id_column is not None:
        required.append(id_column)
    missing_columns = [c for c in required if c not in frame.columns]
    if missing_columns:
        raise PoolValidationError(f"Missing columns: {missing_columns}")

    extras = [
        c for c in extra_columns if c in frame.columns and c not in covariates
    ]
    frame = frame.copy()
    for name in [*covariates, *extras]:
        frame[name] = _to_numeric(frame[name], name, decimal)

    complete = frame.dropna(subset=list(covariates))
    if len(complete) < len(frame):
        logger.info(
            f"Dropped {len(frame) - len(complete)} rows with missing covariates"
        )

    unique = complete.drop_duplicates(subset=label_column, keep="first")
    if len(unique) < len(complete):
        logger.info(f"Dropped {len(complete) - len(unique)} rows with repeated labels")

    items: list[StimulusItem] = []
    for row in unique.to_dict(orient="records"):
        label = str(row[label_column])
        item_id = str(row[id_column]).strip() if id_column is not None else label
        values = {name: float(row[name]) for name in covariates}
        values.update(
            {name: float(row[name]) for name in extras if pd.notna(row[name])}
        )
        try:
            items.append(StimulusItem(item_id=item_id, label=label, covariates=values))
        except ValidationError as e:
            raise PoolValidationError(f"Invalid item {item_id!r}: {e}") from e
    return items


def load_items(
    config: DataConfig,
    covariates: Sequence[str],
    extra_columns: Sequence[str] = (),
) -> list[StimulusItem]:
    """Read, merge and clean the configured candidate tables.

    Parameters
    ----------
    config : DataConfig
        Input table settings.
    covariates : Sequence[str]
        Covariate columns to keep.
    extra_columns : Sequence[str]
        Optional numeric columns kept when present.

    Returns
    -------
    list[StimulusItem]
        Cleaned candidate items.
    """
    frames = []
    for path in config.files:
        logger.info(f"Reading candidates from {path}")
        frames.append(_read_table(path, config))
    merged = merge_tables(frames, config.label_column)
    items = items_from_frame(
        merged,
        covariates,
        label_column=config.label_column,
        id_column=config.id_column,
        decimal=config.decimal,
        extra_columns=extra_columns,
    )
    logger.info(f"Loaded {len(items)} candidate items")
    return items


def select_candidates(
    items: Sequence[StimulusItem],
    pool_size: int,
    name_agreement_column: str,
    name_agreement_max: float | None = None,
) -> list[StimulusItem]:
    """Select the pool from the candidates with the best name agreement.

    Candidates above ``name_agreement_max`` are discarded. The rest are
    ranked by name agreement (lower H first, ties by label) and the first
    ``pool_size`` are kept. When no candidate carries a name agreement value
    and no bound is set, the first ``pool_size`` candidates are kept in input
    order.

    Parameters
    ----------
    items : Sequence[StimulusItem]
        Candidate items.
    pool_size : int
        Number of items to keep (2N).
    name_agreement_column : str
        Covariate holding the name agreement H index.
    name_agreement_max : float | None
        Upper bound on H; None disables the filter.

    Returns
    -------
    list[StimulusItem]
        Selected items, ranked.

    Raises
    ------
    PoolValidationError
        If pool_size is odd or too few candidates pass the filter.
    """
    if pool_size < 2 or pool_size % 2 != 0:
        raise PoolValidationError(f"Pool size must be even and >= 2, got {pool_size}")

    ranked_by_input = name_agreement_max is None and not any(
        name_agreement_column in item.covariates for item in items
    )
    if ranked_by_input:
        if len(items) < pool_size:
            raise PoolValidationError(
                f"Only {len(items)} candidates available, {pool_size} required"
            )
        logger.info(
            f"No {name_agreement_column!r} values; keeping the first {pool_size} "
            f"of {len(items)} candidates"
        )
        return list(items[:pool_size])

    for item in items:
        if name_agreement_column not in item.covariates:
            raise PoolValidationError(
                f"Item {item.item_id!r} has no {name_agreement_column!r} value"
            )

    eligible = [
        item
        for item in items
        if name_agreement_max is None
        or item.covariates[name_agreement_column] <= name_agreement_max
    ]
    if len(eligible) < pool_size:
        raise PoolValidationError(
            f"Only {len(eligible)} candidates pass the name agreement filter, "
            f"{pool_size} required"
        )

    ranked = sorted(
        eligible, key=lambda item: (item.covariates[name_agreement_column], item.label)
    )
    logger.info(
        f"Selected {pool_size} of {len(eligible)} eligible candidates "
        f"({len(items)} total)"
    )
    return ranked[:pool_size]


def build_pool(
    items: Sequence[StimulusItem], covariates: Sequence[str]
) -> StimulusPool:
    """Validate items into an immutable pool.

    Parameters
    ----------
    items : Sequence[StimulusItem]
        Pool items in order.
    covariates : Sequence[str]
        Covariates used for balancing.

    Returns
    -------
    StimulusPool
        Validated pool.

    Raises
    ------
    PoolValidationError
        If any pool precondition is violated.
    """
    try:
        return StimulusPool(items=tuple(items), covariate_names=tuple(covariates))
    except ValidationError as e:
        raise PoolValidationError(f"Invalid pool: {e}") from e
