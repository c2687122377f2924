"""Column-wise z-score standardization of covariates."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from picsplit.errors import DegenerateCovariateError, PoolValidationError

logger = logging.getLogger(__name__)


def zscore(
    matrix: np.ndarray, covariate_names: Sequence[str] | None = None
) -> np.ndarray:
    """Standardize each column to mean 0 and standard deviation 1.

    Means and sample standard deviations (ddof=1) are computed over the
    whole pool. The input array is not modified.

    Parameters
    ----------
    matrix : np.ndarray
        Raw values, shape (n_items, n_covariates).
    covariate_names : Sequence[str] | None
        Column names used in error messages.

    Returns
    -------
    np.ndarray
        Standardized copy of ``matrix``.

    Raises
    ------
    PoolValidationError
        If the matrix is not 2-D, has fewer than two rows, or holds
        non-finite values.
    DegenerateCovariateError
        If a column has zero variance.

    Examples
    --------
    >>> zscore(np.array([[1.0], [2.0], [3.0]])).ravel().tolist()
    [-1.0, 0.0, 1.0]
    """
    values = np.asarray(matrix, dtype=float)
    if values.ndim != 2 or values.shape[0] < 2:
        raise PoolValidationError(
            f"Expected a 2-D matrix with at least two rows, got shape {values.shape}"
        )
    if not np.all(np.isfinite(values)):
        raise PoolValidationError("Covariate matrix contains non-finite values")

    names = (
        list(covariate_names)
        if covariate_names is not None
        else [f"column_{j}" for j in range(values.shape[1])]
    )

    means = values.mean(axis=0)
    sds = values.std(axis=0, ddof=1)
    for j, sd in enumerate(sds):
        if not np.isfinite(sd) or sd == 0.0:
            raise DegenerateCovariateError(
                "Cannot standardize a covariate with zero variance",
                covariate=names[j],
            )

    n_items, n_covariates = values.shape
    logger.debug(f"Standardized {n_covariates} covariates over {n_items} items")
    return (values - means) / sds
