"""
Reference backend: pure NumPy Householder QR.
"""

import numpy as np
from typing import Optional

from .base import (
    CPUBackend,
    LeastSquaresResult,
    QRDecomposition,
    default_tol,
    numerical_rank,
)
from ..reference.qr import householder_qr, back_substitution


class ReferenceBackendFP64(CPUBackend):
    """
    Backend built on mlregression.reference.qr.

    No LAPACK calls in the decomposition; slow for large p but easy to
    audit. Q is never formed during a fit.
    """

    def __init__(self):
        self.name = "reference_fp64"
        self.precision = "fp64"

    def qr_decomposition(self, X, tol=None):
        n, p = X.shape
        if tol is None:
            tol = default_tol(n, p, np.finfo(np.float64).eps)
        house = householder_qr(X)
        return QRDecomposition(
            Q=house.thin_q(),
            R=house.R,
            rank=numerical_rank(np.diag(house.R), tol),
            tol=tol,
        )

    def fit_least_squares(
        self,
        X: np.ndarray,
        y: np.ndarray,
        tol: Optional[float] = None,
        singular_ok: bool = True
    ) -> LeastSquaresResult:
        n, p = X.shape
        if tol is None:
            tol = default_tol(n, p, np.finfo(np.float64).eps)

        house = householder_qr(X)
        R = house.R
        rank = numerical_rank(np.diag(R), tol)
        self._check_rank(rank, p, singular_ok)
        self._check_pivots(np.diag(R), rank)

        qty = house.apply_qt(y)
        coef = back_substitution(R, qty[:p])

        fitted = X @ coef
        residuals = y - fitted

        return LeastSquaresResult(
            coef=coef,
            fitted_values=fitted,
            residuals=residuals,
            rank=rank,
            df_residual=n - rank,
            qr_R=R,
            qr_tol=tol,
            backend=self.name,
        )

    def get_device_info(self) -> dict:
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__} (Householder reference)',
        }
