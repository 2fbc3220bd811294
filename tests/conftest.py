"""
Shared test data.
"""

import json
from pathlib import Path

import numpy as np
import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name):
    """Load a test fixture from JSON."""
    with open(FIXTURES_DIR / f"{name}.json", 'r') as f:
        return json.load(f)


@pytest.fixture
def sample_data():
    """The 32 x 5 example dataset with its t-values and standard errors."""
    fixture = load_fixture("sample_regression")
    return {
        'X': np.array(fixture["X"], dtype=np.float64),
        'y': np.array(fixture["y"], dtype=np.float64),
        'names': fixture["names"],
        't_values': np.array(fixture["t_values"]),
        'std_errors': np.array(fixture["std_errors"]),
    }


@pytest.fixture
def line_data():
    """y = 2 + 3x + small noise over 10 points, with intercept column."""
    np.random.seed(42)
    x = np.arange(10, dtype=np.float64)
    X = np.column_stack([np.ones(10), x])
    y = 2.0 + 3.0 * x + 0.01 * np.random.randn(10)
    return X, y


@pytest.fixture
def random_design():
    """Well-conditioned 100 x 4 design with intercept and known beta."""
    np.random.seed(0)
    n = 100
    X = np.column_stack([np.ones(n), np.random.randn(n, 3)])
    beta_true = np.array([0.5, 1.0, 2.0, -1.5])
    y = X @ beta_true + 0.1 * np.random.randn(n)
    return X, y, beta_true
