"""
Abstract base classes for backends.

Defines the interface all backends must implement.
"""

from abc import ABC, abstractmethod
import warnings
import numpy as np
from typing import Optional
from dataclasses import dataclass

from ..exceptions import SingularMatrixError, RankDeficiencyWarning
from .._utils import find_stack_level


@dataclass
class QRDecomposition:
    """Thin QR factors of a design matrix."""
    Q: np.ndarray            # Orthonormal columns (n x p)
    R: np.ndarray            # Upper triangular (p x p)
    rank: int                # Numerical rank from |diag(R)|
    tol: float               # Relative tolerance used


@dataclass
class LeastSquaresResult:
    """Complete least-squares results."""
    coef: np.ndarray
    fitted_values: np.ndarray
    residuals: np.ndarray    # y - X beta
    rank: int
    df_residual: int
    qr_R: np.ndarray
    qr_tol: float
    backend: str


def default_tol(n: int, p: int, eps: float) -> float:
    """Relative rank tolerance, as in numpy.linalg.matrix_rank."""
    return max(n, p) * eps


def numerical_rank(R_diag: np.ndarray, tol: float) -> int:
    """Count diagonal entries of R above tol relative to the largest."""
    R_diag = np.abs(R_diag)
    largest = R_diag.max() if R_diag.size else 0.0
    if largest == 0:
        return 0
    return int(np.sum(R_diag > tol * largest))


class BackendBase(ABC):
    """Abstract base class for all backends."""

    name = "base"
    precision = "fp64"

    @abstractmethod
    def qr_decomposition(
        self,
        X: np.ndarray,
        tol: Optional[float] = None,
    ) -> QRDecomposition:
        """
        Thin QR decomposition of X (n x p, n >= p).

        Returns numpy arrays regardless of where the work was done.
        """
        pass

    @abstractmethod
    def fit_least_squares(
        self,
        X: np.ndarray,
        y: np.ndarray,
        tol: Optional[float] = None,
        singular_ok: bool = True
    ) -> LeastSquaresResult:
        """
        Solve min ||X beta - y||^2 by QR decomposition.

        Backends implement ALL computation internally using their
        native types, only converting at entry/exit.

        Parameters
        ----------
        X : ndarray, shape (n, p)
            Design matrix (intercept column supplied by the caller)
        y : ndarray, shape (n,)
            Response vector
        tol : float, optional
            Relative tolerance for rank determination
        singular_ok : bool
            If False, raise SingularMatrixError when rank < p

        Returns
        -------
        LeastSquaresResult
            Complete results (all numpy arrays)
        """
        pass

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass

    def _check_rank(self, rank: int, p: int, singular_ok: bool) -> None:
        if rank >= p:
            return
        if not singular_ok:
            raise SingularMatrixError(
                f"Singular fit: rank {rank} < {p} columns",
                rank=rank,
                expected_rank=p,
            )
        warnings.warn(
            f"Design matrix is rank deficient (rank {rank} < {p} columns); "
            f"coefficients are not unique",
            RankDeficiencyWarning,
            stacklevel=find_stack_level(),
        )

    @staticmethod
    def _check_pivots(R_diag: np.ndarray, rank: int) -> None:
        zero = np.flatnonzero(R_diag == 0)
        if zero.size:
            raise SingularMatrixError(
                f"singular matrix: zero pivot at diagonal {int(zero[0])}",
                rank=rank,
                expected_rank=len(R_diag),
            )

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"


class CPUBackend(BackendBase):
    """CPU backend base class (always FP64)."""
    pass


class GPUBackend(BackendBase):
    """GPU backend base class."""
    pass
