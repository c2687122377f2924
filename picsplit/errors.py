"""Exception classes for the picsplit pipeline.

All failures are fatal: the pipeline stops and reports instead of
continuing with partial or default data.
"""

from __future__ import annotations


class PicsplitError(Exception):
    """Base exception for all picsplit errors.

    Parameters
    ----------
    message : str
        Error message.
    """


class PoolValidationError(PicsplitError, ValueError):
    """Raised when the candidate pool violates a precondition.

    Covers missing or non-numeric covariates, duplicate identifiers or
    labels, odd pool sizes, and candidate pools that are too small.
    """


class DegenerateCovariateError(PicsplitError, ValueError):
    """Raised when a covariate cannot be standardized.

    Parameters
    ----------
    message : str
        Error message.
    covariate : str | None
        Name of the offending covariate.

    Examples
    --------
    >>> error = DegenerateCovariateError("zero variance", covariate="aoa")
    >>> str(error)
    "zero variance (covariate 'aoa')"
    """

    def __init__(self, message: str, covariate: str | None = None) -> None:
        self.message = message
        self.covariate = covariate
        if covariate is not None:
            message = f"{message} (covariate {covariate!r})"
        super().__init__(message)


class SimilarityLookupError(PicsplitError, LookupError):
    """Raised when a similarity is requested for a pair outside the table."""


class ConfigError(PicsplitError):
    """Raised when a configuration file or override is invalid."""
