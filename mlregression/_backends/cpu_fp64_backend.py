"""
CPU backend using NumPy + SciPy.

LAPACK Householder QR (geqrf) followed by a triangular solve.
"""

import numpy as np
from scipy.linalg import qr, solve_triangular
from typing import Optional

from .base import (
    CPUBackend,
    LeastSquaresResult,
    QRDecomposition,
    default_tol,
    numerical_rank,
)


class CPUBackendFP64(CPUBackend):
    """
    CPU backend using NumPy + SciPy.

    Default backend. Always uses FP64 precision.
    """

    def __init__(self):
        self.name = "cpu_fp64"
        self.precision = "fp64"

    def qr_decomposition(self, X, tol=None):
        n, p = X.shape
        if tol is None:
            tol = default_tol(n, p, np.finfo(np.float64).eps)
        Q, R = qr(X, mode='economic')
        return QRDecomposition(
            Q=Q,
            R=R,
            rank=numerical_rank(np.diag(R), tol),
            tol=tol,
        )

    def fit_least_squares(
        self,
        X: np.ndarray,
        y: np.ndarray,
        tol: Optional[float] = None,
        singular_ok: bool = True
    ) -> LeastSquaresResult:
        """
        Fit by QR using NumPy/LAPACK.

        Complete implementation - all computation stays in NumPy.
        """
        n, p = X.shape

        decomp = self.qr_decomposition(X, tol=tol)
        R = decomp.R
        self._check_rank(decomp.rank, p, singular_ok)
        self._check_pivots(np.diag(R), decomp.rank)

        # Solve R beta = Q'y
        qty = decomp.Q.T @ y
        coef = solve_triangular(R, qty, lower=False)

        fitted = X @ coef
        residuals = y - fitted

        return LeastSquaresResult(
            coef=coef,
            fitted_values=fitted,
            residuals=residuals,
            rank=decomp.rank,
            df_residual=n - decomp.rank,
            qr_R=R,
            qr_tol=decomp.tol,
            backend=self.name,
        )

    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }
