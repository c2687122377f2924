"""Data models for candidate picture stimuli and the candidate pool.

A pool is the fixed, ordered set of items that the balancing procedure
splits into two lists. Pool order matters: it defines the positions used by
the similarity table and the leftover order of the second list.
"""

from __future__ import annotations

import math
from functools import cached_property

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class StimulusItem(BaseModel):
    """A candidate picture with its word and covariate values.

    Attributes
    ----------
    item_id : str
        Stable unique identifier (e.g. picture file stem).
    label : str
        Canonical word naming the picture.
    covariates : dict[str, float]
        Raw covariate values keyed by covariate name.

    Examples
    --------
    >>> item = StimulusItem(
    ...     item_id="p001",
    ...     label="apple",
    ...     covariates={"name_agreement": 0.12, "frequency": 4.3, "aoa": 3.1},
    ... )
    >>> item.covariates["aoa"]
    3.1
    """

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(..., description="Unique item identifier")
    label: str = Field(..., description="Canonical word")
    covariates: dict[str, float] = Field(..., description="Raw covariate values")

    @field_validator("item_id", "label")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        """Validate string fields are non-empty.

        Parameters
        ----------
        v : str
            String to validate.

        Returns
        -------
        str
            Validated string (whitespace stripped).

        Raises
        ------
        ValueError
            If string is empty or contains only whitespace.
        """
        if not v or not v.strip():
            raise ValueError("Field must be non-empty")
        return v.strip()

    @field_validator("covariates")
    @classmethod
    def validate_finite(cls, v: dict[str, float]) -> dict[str, float]:
        """Validate all covariate values are finite numbers.

        Raises
        ------
        ValueError
            If any value is NaN or infinite.
        """
        bad = [name for name, value in v.items() if not math.isfinite(value)]
        if bad:
            raise ValueError(f"Non-finite covariate values for {bad}")
        return v


class StimulusPool(BaseModel):
    """The ordered candidate pool of 2N items split into two lists of N.

    Attributes
    ----------
    items : tuple[StimulusItem, ...]
        Items in pool order.
    covariate_names : tuple[str, ...]
        Covariates used for balancing, in column order.

    Examples
    --------
    >>> pool = StimulusPool(
    ...     items=(
    ...         StimulusItem(item_id="a", label="cat", covariates={"x": 1.0}),
    ...         StimulusItem(item_id="b", label="dog", covariates={"x": 2.0}),
    ...     ),
    ...     covariate_names=("x",),
    ... )
    >>> pool.half_size
    1
    >>> pool.covariate_matrix().tolist()
    [[1.0], [2.0]]
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[StimulusItem, ...]
    covariate_names: tuple[str, ...]

    @field_validator("covariate_names")
    @classmethod
    def validate_covariate_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate there is at least one covariate and names are unique."""
        if not v:
            raise ValueError("At least one covariate is required")
        if len(v) != len(set(v)):
            raise ValueError(f"Duplicate covariate names: {v}")
        return v

    @model_validator(mode="after")
    def validate_pool(self) -> StimulusPool:
        """Validate pool size, uniqueness and covariate coverage.

        Returns
        -------
        StimulusPool
            Validated pool.

        Raises
        ------
        ValueError
            If the pool is empty or odd-sized, ids or labels repeat, or an
            item lacks one of the pool's covariates.
        """
        n_items = len(self.items)
        if n_items < 2 or n_items % 2 != 0:
            raise ValueError(f"Pool size must be even and >= 2, got {n_items}")

        ids = [item.item_id for item in self.items]
        if len(ids) != len(set(ids)):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            raise ValueError(f"Duplicate item ids: {duplicates}")

        labels = [item.label for item in self.items]
        if len(labels) != len(set(labels)):
            duplicates = sorted({lab for lab in labels if labels.count(lab) > 1})
            raise ValueError(f"Duplicate labels: {duplicates}")

        expected = set(self.covariate_names)
        for item in self.items:
            missing = expected - set(item.covariates)
            if missing:
                raise ValueError(
                    f"Item {item.item_id!r} is missing covariates {sorted(missing)}"
                )
        return self

    def __len__(self) -> int:
        return len(self.items)

    @property
    def half_size(self) -> int:
        """Size N of each list."""
        return len(self.items) // 2

    @property
    def ids(self) -> list[str]:
        """Item identifiers in pool order."""
        return [item.item_id for item in self.items]

    @property
    def labels(self) -> list[str]:
        """Item labels in pool order."""
        return [item.label for item in self.items]

    @cached_property
    def _positions(self) -> dict[str, int]:
        return {item.item_id: i for i, item in enumerate(self.items)}

    def index_of(self, item_id: str) -> int:
        """Return the pool position of an item.

        Parameters
        ----------
        item_id : str
            Item identifier.

        Returns
        -------
        int
            0-based position in pool order.

        Raises
        ------
        KeyError
            If the item is not in the pool.
        """
        return self._positions[item_id]

    def covariate_matrix(self) -> np.ndarray:
        """Return raw covariate values as an (n_items, n_covariates) array.

        Returns
        -------
        np.ndarray
            Float array, rows in pool order, columns in covariate_names order.
        """
        return np.array(
            [
                [item.covariates[name] for name in self.covariate_names]
                for item in self.items
            ],
            dtype=float,
        )
