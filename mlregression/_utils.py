"""
Utility functions.
"""

import inspect
import os

import numpy as np

from .exceptions import ValidationError, DimensionError

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


def find_stack_level() -> int:
    """
    Number of frames between the caller and the first frame outside
    this package, for use as a ``warnings.warn`` stacklevel.
    """
    frame = inspect.currentframe()
    level = 0
    try:
        while frame is not None:
            if not frame.f_code.co_filename.startswith(_PACKAGE_DIR):
                break
            frame = frame.f_back
            level += 1
    finally:
        del frame
    return level


def _as_float_array(a, name, dtype):
    try:
        a = np.asarray(a)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e
    if a.dtype == object or not (
        np.issubdtype(a.dtype, np.number) or np.issubdtype(a.dtype, np.bool_)
    ):
        raise ValidationError(f"{name}: non-numeric dtype {a.dtype}")
    return a.astype(dtype, copy=False)


def check_array(X, name='X', dtype=np.float64):
    """Validate array input."""
    X = _as_float_array(X, name, dtype)
    if X.ndim != 2:
        raise DimensionError(f"{name} must be 2-dimensional, got shape {X.shape}")
    if X.size == 0:
        raise ValidationError(f"{name} is empty (shape {X.shape})")
    if not np.all(np.isfinite(X)):
        raise ValidationError(f"{name} contains NaN or Inf")
    return X


def check_vector(y, name='y', dtype=np.float64):
    """Validate vector input. An (n, 1) column is flattened."""
    y = _as_float_array(y, name, dtype)
    if y.ndim == 2 and y.shape[1] == 1:
        y = y.ravel()
    if y.ndim != 1:
        raise DimensionError(f"{name} must be 1-dimensional, got shape {y.shape}")
    if y.size == 0:
        raise ValidationError(f"{name} is empty")
    if not np.all(np.isfinite(y)):
        raise ValidationError(f"{name} contains NaN or Inf")
    return y


def check_consistent_length(X, y, names=('X', 'y')):
    """Check that X has one row per element of y."""
    if X.shape[0] != y.shape[0]:
        raise DimensionError(
            f"dimensions don't agree: {names[0]} has {X.shape[0]} rows, "
            f"{names[1]} has {y.shape[0]} entries"
        )


def check_overdetermined(X, name='X'):
    """Least squares needs at least as many observations as predictors."""
    n, p = X.shape
    if p > n:
        raise DimensionError(
            f"{name} has {p} columns but only {n} rows; need n >= p"
        )


def read_only(a):
    """Return a read-only view of an array."""
    view = a.view()
    view.flags.writeable = False
    return view
