"""Candidate pool configuration models for the picsplit package."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_COVARIATES = ["name_agreement", "frequency", "aoa"]


def _default_covariates() -> list[str]:
    """Return the default covariate names."""
    return list(DEFAULT_COVARIATES)


class PoolConfig(BaseModel):
    """Configuration for selecting the candidate pool.

    Parameters
    ----------
    pool_size : int
        Number of items in the pool (2N). Must be even.
    covariates : list[str]
        Covariates the two lists are matched on.
    name_agreement_column : str
        Covariate used to filter and rank candidates.
    name_agreement_max : float | None
        Upper bound on name agreement (H index); lower H means higher
        agreement. None keeps every candidate.

    Examples
    --------
    >>> config = PoolConfig()
    >>> config.pool_size
    310
    >>> config.covariates
    ['name_agreement', 'frequency', 'aoa']
    """

    pool_size: int = Field(default=310, ge=2, description="Pool size (2N)")
    covariates: list[str] = Field(
        default_factory=_default_covariates, description="Matched covariates"
    )
    name_agreement_column: str = Field(
        default="name_agreement", description="Name agreement covariate"
    )
    name_agreement_max: float | None = Field(
        default=None, description="Maximum name agreement (H) for candidates"
    )

    @field_validator("pool_size")
    @classmethod
    def validate_even(cls, v: int) -> int:
        """Validate pool size is even.

        Parameters
        ----------
        v : int
            Pool size to validate.

        Returns
        -------
        int
            Validated pool size.

        Raises
        ------
        ValueError
            If pool size is odd.
        """
        if v % 2 != 0:
            raise ValueError(f"pool_size must be even, got {v}")
        return v

    @field_validator("covariates")
    @classmethod
    def validate_covariates(cls, v: list[str]) -> list[str]:
        """Validate covariate names are non-empty and unique."""
        names = [name.strip() for name in v]
        if not names or any(not name for name in names):
            raise ValueError("covariates must be non-empty names")
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate covariates: {names}")
        return names
