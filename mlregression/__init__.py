"""
mlregression: multiple linear regression by QR least squares.

Fits y = X beta by Householder QR, reports SSE, SST and R², and builds
coefficient confidence intervals from caller-supplied t-values and
standard errors.
"""

__version__ = "1.0.0"

# Import main user-facing API
from .model import RegressionModel, regress
from ._core import LeastSquaresSolver, qr_decomposition
from .intervals import confidence_interval, confidence_intervals, t_quantile
from .exceptions import (
    RegressionError,
    ValidationError,
    DimensionError,
    CoefficientIndexError,
    SingularMatrixError,
    RankDeficiencyWarning,
    DegenerateResponseWarning,
)

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'RegressionModel',
    'regress',
    'LeastSquaresSolver',
    'qr_decomposition',
    'confidence_interval',
    'confidence_intervals',
    't_quantile',
    'RegressionError',
    'ValidationError',
    'DimensionError',
    'CoefficientIndexError',
    'SingularMatrixError',
    'RankDeficiencyWarning',
    'DegenerateResponseWarning',
    'get_backend',
    'list_available_backends',
]
