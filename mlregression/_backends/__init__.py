"""
Backend selection and management.

Provides a unified interface to the CPU (LAPACK), reference (pure NumPy)
and NVIDIA GPU (PyTorch) least-squares engines.
"""

import logging
from typing import Optional

from .base import BackendBase, LeastSquaresResult, QRDecomposition
from .cpu_fp64_backend import CPUBackendFP64
from .reference_backend import ReferenceBackendFP64
from .precision_detector import (
    detect_gpu_capabilities,
    recommend_precision,
    GPUCapabilities,
)

logger = logging.getLogger(__name__)

# PyTorch is optional
try:
    from .gpu_backend import PyTorchBackend
    import torch  # noqa: F401
    PYTORCH_AVAILABLE = True
except ImportError:
    PYTORCH_AVAILABLE = False

BACKEND_NAMES = ('auto', 'cpu', 'reference', 'gpu', 'pytorch')


def get_backend(backend: str = 'cpu', use_fp64: Optional[bool] = None) -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str
        Backend selection:
        - 'cpu': NumPy/SciPy LAPACK QR (FP64)
        - 'reference': pure NumPy Householder QR (FP64)
        - 'auto': PyTorch on a CUDA GPU with full-rate FP64, else 'cpu'
        - 'gpu' / 'pytorch': PyTorch on CUDA

    use_fp64 : bool or None
        GPU precision preference:
        - None: Auto-detect from hardware
        - True: Force FP64
        - False: Allow FP32
        Ignored by the CPU backends, which are always FP64.

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend = get_backend('auto')
    >>> backend = get_backend('pytorch', use_fp64=False)
    """
    if isinstance(backend, BackendBase):
        return backend

    if backend == 'cpu':
        return CPUBackendFP64()

    elif backend == 'reference':
        return ReferenceBackendFP64()

    elif backend == 'auto':
        caps = detect_gpu_capabilities()
        if (caps.has_gpu and PYTORCH_AVAILABLE
                and recommend_precision(caps, use_fp64)):
            logger.debug("auto backend: %s supports FP64, using PyTorch", caps.gpu_name)
            return PyTorchBackend(use_fp64=True)
        logger.debug("auto backend: using CPU (%s)", caps.gpu_name)
        return CPUBackendFP64()

    elif backend in ('gpu', 'pytorch'):
        if not PYTORCH_AVAILABLE:
            raise RuntimeError(
                "PyTorch backend unavailable.\n"
                "Install: pip install torch"
            )
        caps = detect_gpu_capabilities()
        if not caps.has_gpu:
            raise RuntimeError(
                "No CUDA GPU detected.\n"
                "Options:\n"
                "  - Use backend='cpu'\n"
                "  - Install PyTorch with CUDA"
            )
        return PyTorchBackend(use_fp64=recommend_precision(caps, use_fp64))

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: {', '.join(repr(b) for b in BACKEND_NAMES)}"
        )


def list_available_backends() -> list:
    """List names of available backends."""
    backends = ['cpu', 'reference']
    if PYTORCH_AVAILABLE and detect_gpu_capabilities().has_gpu:
        backends.append('pytorch')
    return backends


__all__ = [
    'get_backend',
    'list_available_backends',
    'BackendBase',
    'LeastSquaresResult',
    'QRDecomposition',
    'GPUCapabilities',
    'detect_gpu_capabilities',
    'PYTORCH_AVAILABLE',
]
