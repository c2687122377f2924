"""Partition search configuration models for the picsplit package."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchConfig(BaseModel):
    """Configuration for the randomized partition search.

    Parameters
    ----------
    iterations : int
        Number of random bipartitions to score.
    seed : int
        Seed for the random generator.
    batch_size : int
        Iterations scored per vectorised batch. Does not change the result.
    n_workers : int
        Worker processes. Each worker searches a contiguous share of the
        iterations with its own spawned seed.

    Examples
    --------
    >>> config = SearchConfig()
    >>> config.iterations
    1000000
    >>> config.seed
    42
    """

    iterations: int = Field(default=1_000_000, ge=1, description="Iteration budget")
    seed: int = Field(default=42, ge=0, description="Random seed")
    batch_size: int = Field(default=10_000, ge=1, description="Batch size")
    n_workers: int = Field(default=1, ge=1, description="Worker processes")
