"""
Exceptions and warnings raised by mlregression.

Every error derives from RegressionError, and also from the builtin it
specializes (ValueError, IndexError, LinAlgError), so callers can catch
either.
"""

import numpy as np


class RegressionError(Exception):
    """Base class for all mlregression errors."""
    pass


class ValidationError(RegressionError, ValueError):
    """Input is non-numeric, non-finite, empty or otherwise unusable."""
    pass


class DimensionError(ValidationError):
    """
    Array shapes are wrong or inconsistent.

    Raised when the design matrix and response disagree on the number of
    observations, when there are more predictors than observations, or
    when new data does not have one column per coefficient.
    """
    pass


class CoefficientIndexError(RegressionError, IndexError):
    """Coefficient index outside [0, p)."""

    def __init__(self, index, n_params: int):
        super().__init__(
            f"coefficient index {index} out of range for {n_params} coefficients"
        )
        self.index = index
        self.n_params = n_params


class SingularMatrixError(RegressionError, np.linalg.LinAlgError):
    """
    Triangular factor R is numerically singular.

    Attributes
    ----------
    rank : int or None
        Numerical rank estimated from the diagonal of R
    expected_rank : int or None
        Number of columns in the design matrix
    """

    def __init__(self, message: str, rank=None, expected_rank=None):
        super().__init__(message)
        self.rank = rank
        self.expected_rank = expected_rank


class RankDeficiencyWarning(UserWarning):
    """Design matrix appears to be rank deficient; coefficients are unstable."""
    pass


class DegenerateResponseWarning(RuntimeWarning):
    """Response is constant (SST == 0), so R² is undefined."""
    pass


__all__ = [
    "RegressionError",
    "ValidationError",
    "DimensionError",
    "CoefficientIndexError",
    "SingularMatrixError",
    "RankDeficiencyWarning",
    "DegenerateResponseWarning",
]
