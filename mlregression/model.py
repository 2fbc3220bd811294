"""
Multiple linear regression model.

This is the user-facing API: fit once, then query coefficients and
goodness of fit.
"""

import logging
import operator
import warnings
import numpy as np
import pandas as pd
from typing import Optional, Sequence, Tuple, Union

from ._core.solver import LeastSquaresSolver
from ._utils import check_array, read_only
from .exceptions import (
    CoefficientIndexError,
    DegenerateResponseWarning,
    DimensionError,
)
from .intervals import confidence_interval, confidence_intervals

logger = logging.getLogger(__name__)


class RegressionModel:
    """
    Ordinary least-squares fit of y on the columns of X.

    The design matrix is used as given: include a column of ones if the
    model should have an intercept. The fit happens once, in the
    constructor; afterwards the model is read-only.

    Examples
    --------
    >>> import numpy as np
    >>> from mlregression import RegressionModel
    >>>
    >>> x = np.arange(10.0)
    >>> X = np.column_stack([np.ones(10), x])
    >>> model = RegressionModel(X, 2 + 3 * x)
    >>>
    >>> model.coefficient(1)      # slope
    >>> model.r_squared()
    >>> RegressionModel.confidence_interval(model.coefficient(1), 2.31, 0.05)
    """

    def __init__(
        self,
        X: Union[np.ndarray, pd.DataFrame],
        y: Union[np.ndarray, pd.Series],
        names: Optional[Sequence[str]] = None,
        backend: str = 'cpu',
        use_fp64: Optional[bool] = None,
        tol: Optional[float] = None,
        singular_ok: bool = True,
    ):
        """
        Fit the model.

        Parameters
        ----------
        X : array-like or DataFrame, shape (n, p)
            Design matrix. DataFrame column names label the coefficients.
        y : array-like or Series, shape (n,)
            Response vector
        names : sequence of str, optional
            Coefficient labels; defaults to DataFrame columns or x0..x{p-1}
        backend : str
            Computational backend: 'cpu', 'reference', 'auto', 'gpu'
        use_fp64 : bool, optional
            GPU precision preference
        tol : float, optional
            Relative tolerance for rank determination
        singular_ok : bool
            If False, a rank-deficient X raises SingularMatrixError

        Raises
        ------
        DimensionError
            If X and y have different numbers of observations
        """
        solver = LeastSquaresSolver(
            backend=backend,
            use_fp64=use_fp64,
            tol=tol,
            singular_ok=singular_ok,
        )
        result = solver.fit(X, y)

        y_values = np.asarray(y, dtype=np.float64).ravel()
        self._n, self._p = len(y_values), len(result.coef)
        self._names = self._resolve_names(X, names, self._p)

        # Total variation to be accounted for. The mean of a constant
        # response need not round to the constant itself.
        if np.ptp(y_values) == 0:
            self._sst = 0.0
        else:
            deviations = y_values - y_values.mean()
            self._sst = float(deviations @ deviations)

        # Variation not accounted for
        residuals = np.asarray(result.residuals, dtype=np.float64)
        self._sse = float(residuals @ residuals)

        self._beta = read_only(result.coef)
        self._fitted = read_only(result.fitted_values)
        self._residuals = read_only(residuals)
        self._rank = result.rank
        self._backend_name = result.backend

        logger.debug(
            "fitted %d x %d model: SSE=%g SST=%g", self._n, self._p,
            self._sse, self._sst,
        )

    @staticmethod
    def _resolve_names(X, names, p):
        if names is None:
            if isinstance(X, pd.DataFrame):
                return [str(c) for c in X.columns]
            return [f'x{i}' for i in range(p)]
        names = [str(name) for name in names]
        if len(names) != p:
            raise DimensionError(f"got {len(names)} names for {p} columns")
        return names

    # === Queries ===

    def coefficient(self, j: int) -> float:
        """
        The j-th fitted coefficient, 0 <= j < p.

        Negative indices are rejected rather than counted from the end.
        """
        j = operator.index(j)
        if not 0 <= j < self._p:
            raise CoefficientIndexError(j, self._p)
        return float(self._beta[j])

    def r_squared(self) -> float:
        """
        Coefficient of determination, 1 - SSE/SST.

        Returns nan with a DegenerateResponseWarning when y is constant
        (SST == 0).
        """
        if self._sst == 0.0:
            warnings.warn(
                "response is constant (SST == 0); R-squared is undefined",
                DegenerateResponseWarning,
                stacklevel=2,
            )
            return float('nan')
        return 1.0 - self._sse / self._sst

    def sse(self) -> float:
        """Residual sum of squares."""
        return self._sse

    def sst(self) -> float:
        """Total sum of squares around the mean of y."""
        return self._sst

    @staticmethod
    def confidence_interval(coefficient: float, t_value: float,
                            standard_error: float) -> Tuple[float, float]:
        """Interval coefficient -/+ t * standard_error, ordered (low, high)."""
        return confidence_interval(coefficient, t_value, standard_error)

    def conf_int(self, t_values, std_errors) -> pd.DataFrame:
        """
        Confidence intervals for every coefficient.

        Parameters
        ----------
        t_values : float or sequence of float
            t-value per coefficient (a scalar applies to all)
        std_errors : float or sequence of float
            Standard error per coefficient, computed by the caller

        Returns
        -------
        DataFrame
            Columns 'lower' and 'upper', indexed by coefficient name
        """
        for name, values in (('t_values', t_values), ('std_errors', std_errors)):
            size = np.size(values)
            if np.ndim(values) > 1 or size not in (1, self._p):
                raise DimensionError(
                    f"{name} must be a scalar or have {self._p} entries, got {size}"
                )
        lower, upper = confidence_intervals(
            self._beta,
            np.ravel(t_values) if np.ndim(t_values) else t_values,
            np.ravel(std_errors) if np.ndim(std_errors) else std_errors,
        )
        return pd.DataFrame({'lower': lower, 'upper': upper}, index=self._names)

    def predict(self, newdata) -> np.ndarray:
        """
        Predicted response X_new @ beta.

        newdata must have one column per coefficient (including any
        intercept column).
        """
        if isinstance(newdata, pd.DataFrame) and set(self._names) <= set(newdata.columns):
            newdata = newdata[self._names]
        X_new = check_array(newdata, 'newdata')
        if X_new.shape[1] != self._p:
            raise DimensionError(
                f"newdata has {X_new.shape[1]} columns, model has {self._p} coefficients"
            )
        return X_new @ self._beta

    # === Properties ===

    @property
    def coefficients(self) -> np.ndarray:
        """Fitted coefficients (read-only)."""
        return self._beta

    @property
    def coef(self) -> pd.Series:
        """Named coefficients (pandas Series)."""
        return pd.Series(self._beta, index=self._names)

    @property
    def names(self) -> list:
        return list(self._names)

    @property
    def n_obs(self) -> int:
        return self._n

    @property
    def n_params(self) -> int:
        return self._p

    @property
    def rank(self) -> int:
        """Numerical rank of X estimated during the fit."""
        return self._rank

    @property
    def df_residual(self) -> int:
        return self._n - self._rank

    @property
    def fitted_values(self) -> np.ndarray:
        return self._fitted

    @property
    def residuals(self) -> np.ndarray:
        """Observed minus fitted, y - X beta."""
        return self._residuals

    @property
    def backend_name(self) -> str:
        return self._backend_name

    def __repr__(self):
        return f"RegressionModel(n={self._n}, p={self._p}, SSE={self._sse:.6g}, SST={self._sst:.6g})"


def regress(X, y, **kwargs) -> RegressionModel:
    """
    Fit a multiple linear regression (convenience function).

    Parameters
    ----------
    X : array-like or DataFrame
        Design matrix, including any intercept column
    y : array-like or Series
        Response
    **kwargs
        Additional arguments passed to RegressionModel

    Returns
    -------
    RegressionModel
        Fitted model object

    Examples
    --------
    >>> model = regress(X, y)
    >>> model.coef
    >>> model.conf_int(t_values=2.05, std_errors=[5.38, 0.0019])
    """
    return RegressionModel(X, y, **kwargs)
