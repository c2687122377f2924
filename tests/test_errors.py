"""Tests for picsplit exception classes."""

from __future__ import annotations

import pytest

from picsplit.errors import (
    ConfigError,
    DegenerateCovariateError,
    PicsplitError,
    PoolValidationError,
    SimilarityLookupError,
)


@pytest.mark.parametrize(
    ("error_class", "builtin"),
    [
        (PoolValidationError, ValueError),
        (DegenerateCovariateError, ValueError),
        (SimilarityLookupError, LookupError),
        (ConfigError, Exception),
    ],
)
def test_hierarchy(error_class: type[Exception], builtin: type[Exception]) -> None:
    """Test errors derive from PicsplitError and the matching builtin."""
    error = error_class("boom")
    assert isinstance(error, PicsplitError)
    assert isinstance(error, builtin)


def test_degenerate_covariate_message() -> None:
    """Test the offending covariate is named in the message."""
    error = DegenerateCovariateError("zero variance", covariate="aoa")
    assert error.covariate == "aoa"
    assert str(error) == "zero variance (covariate 'aoa')"


def test_degenerate_covariate_without_name() -> None:
    """Test the message is unchanged without a covariate."""
    error = DegenerateCovariateError("zero norm")
    assert error.covariate is None
    assert str(error) == "zero norm"
