"""
QR decomposition.

Backend-agnostic interface to QR factorization.
"""

from typing import Optional

from .._backends import get_backend, QRDecomposition
from .._utils import check_array, check_overdetermined


def qr_decomposition(
    X,
    tol: Optional[float] = None,
    backend=None,
) -> QRDecomposition:
    """
    Thin QR decomposition X = QR.

    Delegates to backend-specific implementation.

    Parameters
    ----------
    X : array-like, shape (n, p), n >= p
        Matrix to decompose
    tol : float, optional
        Relative tolerance for rank determination
    backend : str or Backend, optional
        Computational backend (default 'cpu')

    Returns
    -------
    result : QRDecomposition
        Q (n x p), R (p x p), numerical rank and tolerance
    """
    X = check_array(X, 'X')
    check_overdetermined(X)
    backend = get_backend('cpu' if backend is None else backend)
    return backend.qr_decomposition(X, tol=tol)


__all__ = ["QRDecomposition", "qr_decomposition"]
