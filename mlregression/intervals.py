"""
Confidence intervals for regression coefficients.

Intervals are built from a coefficient, a t-value and a standard error
that the caller supplies. Nothing here estimates standard errors.
"""

import numpy as np
from typing import Tuple
from scipy import stats

from .exceptions import ValidationError


def confidence_interval(coefficient: float, t_value: float,
                        standard_error: float) -> Tuple[float, float]:
    """
    Interval coefficient -/+ t * standard_error.

    The pair is ordered (low, high) whatever the sign of t_value.

    Examples
    --------
    >>> confidence_interval(5.0, 2.0, 1.0)
    (3.0, 7.0)
    >>> confidence_interval(5.0, -2.0, 1.0)
    (3.0, 7.0)
    """
    left = coefficient - t_value * standard_error
    right = coefficient + t_value * standard_error
    return (float(min(left, right)), float(max(left, right)))


def confidence_intervals(coefficients, t_values, standard_errors):
    """
    Vectorized confidence_interval.

    Scalars broadcast against arrays.

    Returns
    -------
    (lower, upper) : tuple of ndarray
    """
    coefficients = np.asarray(coefficients, dtype=np.float64)
    half_width = (np.asarray(t_values, dtype=np.float64)
                  * np.asarray(standard_errors, dtype=np.float64))
    left = coefficients - half_width
    right = coefficients + half_width
    return np.minimum(left, right), np.maximum(left, right)


def t_quantile(level: float, df: float) -> float:
    """
    Two-sided critical value of Student's t.

    Parameters
    ----------
    level : float
        Confidence level in (0, 1), e.g. 0.95
    df : float
        Degrees of freedom (> 0), typically the model's df_residual

    Returns
    -------
    float
        t such that P(|T| <= t) == level
    """
    if not 0.0 < level < 1.0:
        raise ValidationError(f"level must be in (0, 1), got {level}")
    if not df > 0:
        raise ValidationError(f"df must be positive, got {df}")
    return float(stats.t.ppf(0.5 + level / 2.0, df))


__all__ = ["confidence_interval", "confidence_intervals", "t_quantile"]
