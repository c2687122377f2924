"""Tests for covariate standardization."""

from __future__ import annotations

import numpy as np
import pytest

from picsplit.balancing.normalize import zscore
from picsplit.errors import DegenerateCovariateError, PoolValidationError


class TestZscore:
    """Tests for zscore()."""

    def test_columns_have_zero_mean_and_unit_sd(self) -> None:
        """Test every column is standardized over the whole pool."""
        rng = np.random.default_rng(3)
        raw = rng.normal(loc=[5.0, -2.0, 100.0], scale=[1.0, 0.3, 20.0], size=(50, 3))

        normalized = zscore(raw)

        np.testing.assert_allclose(normalized.mean(axis=0), 0.0, atol=1e-12)
        np.testing.assert_allclose(normalized.std(axis=0, ddof=1), 1.0, rtol=1e-12)

    def test_known_values(self) -> None:
        """Test a column with known standardized values."""
        normalized = zscore(np.array([[1.0], [2.0], [3.0]]))
        np.testing.assert_allclose(normalized.ravel(), [-1.0, 0.0, 1.0])

    def test_input_not_mutated(self) -> None:
        """Test the raw matrix is left unchanged."""
        raw = np.array([[1.0, 10.0], [2.0, 20.0], [4.0, 25.0]])
        copy = raw.copy()
        zscore(raw)
        np.testing.assert_array_equal(raw, copy)

    def test_zero_variance_names_covariate(self) -> None:
        """Test a constant column is fatal and identifies the covariate."""
        raw = np.array([[1.0, 3.0], [2.0, 3.0], [3.0, 3.0]])

        with pytest.raises(DegenerateCovariateError, match="frequency") as exc_info:
            zscore(raw, ["aoa", "frequency"])

        assert exc_info.value.covariate == "frequency"

    def test_zero_variance_without_names(self) -> None:
        """Test unnamed columns are reported by position."""
        with pytest.raises(DegenerateCovariateError, match="column_0"):
            zscore(np.array([[1.0], [1.0]]))

    def test_non_finite_values_rejected(self) -> None:
        """Test missing values are a precondition violation."""
        with pytest.raises(PoolValidationError, match="non-finite"):
            zscore(np.array([[1.0], [np.nan], [3.0]]))

    @pytest.mark.parametrize("shape", [(3,), (1, 2)])
    def test_bad_shape_rejected(self, shape: tuple[int, ...]) -> None:
        """Test 1-D input and single-row input are rejected."""
        with pytest.raises(PoolValidationError):
            zscore(np.ones(shape))
