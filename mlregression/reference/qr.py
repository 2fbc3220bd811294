"""
Householder QR decomposition in plain NumPy.

Self-contained reference for the LAPACK path: no SciPy, no pivoting.
Used by the 'reference' backend and to cross-check the CPU backend.
"""

import numpy as np
from typing import List, Tuple
from dataclasses import dataclass, field

from ..exceptions import SingularMatrixError


@dataclass
class HouseholderQR:
    """Result of Householder QR decomposition."""
    R: np.ndarray                # Upper triangular factor (p x p)
    reflectors: List[np.ndarray] = field(repr=False)  # v_k, unit norm, length n - k
    shape: Tuple[int, int] = (0, 0)

    def apply_qt(self, b: np.ndarray) -> np.ndarray:
        """Compute Q'b without forming Q (full length n)."""
        b = np.array(b, dtype=np.float64)
        for k, v in enumerate(self.reflectors):
            b[k:] -= 2.0 * v * (v @ b[k:])
        return b

    def thin_q(self) -> np.ndarray:
        """Form the n x p orthonormal factor explicitly."""
        n, p = self.shape
        Q = np.eye(n, p)
        for k in reversed(range(len(self.reflectors))):
            v = self.reflectors[k]
            Q[k:, :] -= 2.0 * np.outer(v, v @ Q[k:, :])
        return Q


def householder_qr(X: np.ndarray) -> HouseholderQR:
    """
    Thin QR decomposition X = QR via Householder reflections.

    Parameters
    ----------
    X : ndarray, shape (n, p), n >= p
        Matrix to decompose (not modified)

    Returns
    -------
    result : HouseholderQR
        R factor and the reflectors that define Q

    Notes
    -----
    Each step k reflects column k below the diagonal onto a multiple of
    e_1. The sign of the target is chosen opposite to the leading entry
    so that v = x - alpha * e_1 never suffers cancellation.
    """
    A = np.array(X, dtype=np.float64)
    n, p = A.shape
    reflectors = []

    for k in range(p):
        x = A[k:, k]
        norm_x = np.linalg.norm(x)
        v = x.copy()
        if norm_x == 0.0:
            # Column already zero below the diagonal: identity reflector
            v[:] = 0.0
            reflectors.append(v)
            continue
        alpha = -np.copysign(norm_x, x[0])
        v[0] -= alpha
        v /= np.linalg.norm(v)
        A[k:, k:] -= 2.0 * np.outer(v, v @ A[k:, k:])
        reflectors.append(v)

    R = np.triu(A[:p, :p])
    return HouseholderQR(R=R, reflectors=reflectors, shape=(n, p))


def back_substitution(R: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Solve R x = b for upper triangular R.

    Raises
    ------
    SingularMatrixError
        If a diagonal entry of R is exactly zero
    """
    p = R.shape[0]
    x = np.zeros(p, dtype=np.float64)
    for i in range(p - 1, -1, -1):
        if R[i, i] == 0.0:
            raise SingularMatrixError(
                f"singular matrix: zero pivot at diagonal {i}",
                expected_rank=p,
            )
        x[i] = (b[i] - R[i, i + 1:] @ x[i + 1:]) / R[i, i]
    return x


def lstsq_householder(X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Least-squares solution of X beta = y: R beta = (Q'y)[:p]."""
    qr = householder_qr(X)
    p = X.shape[1]
    qty = qr.apply_qt(y)
    return back_substitution(qr.R, qty[:p])
