"""
Core algorithms (backend-agnostic).
"""

from .qr import QRDecomposition, qr_decomposition
from .solver import LeastSquaresSolver

__all__ = [
    "QRDecomposition",
    "qr_decomposition",
    "LeastSquaresSolver",
]
