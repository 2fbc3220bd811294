"""
Reference implementation (pure NumPy).

Slow but dependency-light; the CPU backend is validated against it.
"""

from .qr import HouseholderQR, householder_qr, back_substitution, lstsq_householder

__all__ = [
    "HouseholderQR",
    "householder_qr",
    "back_substitution",
    "lstsq_householder",
]
