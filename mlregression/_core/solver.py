"""
Least-squares solver.

Validates inputs, then delegates to a backend for the computation.
"""

import logging
import numpy as np
from typing import Optional, Union

from .._backends import get_backend, BackendBase, LeastSquaresResult
from .._utils import check_array, check_vector, check_consistent_length, check_overdetermined

logger = logging.getLogger(__name__)


class LeastSquaresSolver:
    """
    Solve min ||X beta - y||^2 by QR decomposition.

    Parameters
    ----------
    backend : str or Backend, default='cpu'
        Computational backend: 'cpu', 'reference', 'auto', 'gpu'
    use_fp64 : bool, optional
        GPU precision preference (CPU backends are always FP64)
    tol : float, optional
        Relative tolerance for rank determination
    singular_ok : bool, default=True
        If False, a rank-deficient design matrix raises
        SingularMatrixError instead of warning

    Examples
    --------
    >>> solver = LeastSquaresSolver()
    >>> beta = solver.solve(X, y)
    """

    def __init__(
        self,
        backend: Union[str, BackendBase] = 'cpu',
        use_fp64: Optional[bool] = None,
        tol: Optional[float] = None,
        singular_ok: bool = True,
    ):
        self.backend = get_backend(backend, use_fp64=use_fp64)
        self.tol = tol
        self.singular_ok = singular_ok

    def fit(self, X, y) -> LeastSquaresResult:
        """
        Fit and return the full backend result.

        Parameters
        ----------
        X : array-like, shape (n, p)
            Design matrix, including any intercept column
        y : array-like, shape (n,)
            Response vector

        Returns
        -------
        LeastSquaresResult

        Raises
        ------
        DimensionError
            If X and y disagree on n, or p > n
        ValidationError
            If inputs are empty, non-numeric or non-finite
        SingularMatrixError
            If R has a zero pivot, or rank < p with singular_ok=False
        """
        X = check_array(X, 'X')
        y = check_vector(y, 'y')
        check_consistent_length(X, y)
        check_overdetermined(X)

        result = self.backend.fit_least_squares(
            X, y,
            tol=self.tol,
            singular_ok=self.singular_ok,
        )
        logger.debug(
            "least squares on %s: n=%d p=%d rank=%d",
            result.backend, X.shape[0], X.shape[1], result.rank,
        )
        return result

    def solve(self, X, y) -> np.ndarray:
        """Coefficient vector beta, length p."""
        return self.fit(X, y).coef

    def __repr__(self):
        return f"LeastSquaresSolver(backend={self.backend.name!r})"
