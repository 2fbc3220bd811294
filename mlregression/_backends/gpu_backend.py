"""
GPU backend using PyTorch.

NVIDIA CUDA GPUs only. FP64 on data center GPUs, FP32 elsewhere.
"""

import numpy as np
import warnings
from typing import Optional, Any

from .base import (
    GPUBackend,
    LeastSquaresResult,
    QRDecomposition,
    default_tol,
    numerical_rank,
)


class PyTorchBackend(GPUBackend):
    """
    PyTorch GPU backend.

    Keeps all computation on GPU using torch tensors.
    Only converts at entry (numpy -> torch) and exit (torch -> numpy).

    Requirements:
    - NVIDIA GPU with CUDA support
    - PyTorch with CUDA enabled
    """

    def __init__(self, use_fp64: bool = True, device: Optional[str] = None):
        """Initialize PyTorch backend."""
        try:
            import torch
            self.torch = torch
        except ImportError:
            raise ImportError(
                "PyTorch required for GPU backend. "
                "Install: pip install torch"
            )

        self.precision = "fp64" if use_fp64 else "fp32"
        self.name = f"pytorch_{self.precision}"
        self.dtype = torch.float64 if use_fp64 else torch.float32
        self.device = self._select_device(device)

        if use_fp64 and self.device.type == 'cuda':
            from .precision_detector import detect_gpu_capabilities, PrecisionSupport
            caps = detect_gpu_capabilities()
            if caps.fp64_support == PrecisionSupport.GIMPED_FP64:
                warnings.warn(
                    f"Using FP64 on {caps.gpu_name} with gimped FP64 support. "
                    f"This will be ~{int(1/caps.fp64_throughput_ratio)}x slower than FP32.",
                    UserWarning
                )

    def _select_device(self, requested: Optional[str]) -> Any:
        """Select CUDA GPU device. Fails if CUDA unavailable."""
        torch = self.torch

        if requested:
            device = torch.device(requested)

            # QR on Metal has no FP64 and no LAPACK-backed kernels
            if device.type == 'mps':
                raise ValueError(
                    "PyTorch backend does not support Apple MPS (Metal). "
                    "Use get_backend('cpu')"
                )

            return device

        if not torch.cuda.is_available():
            raise RuntimeError(
                "PyTorch backend requires NVIDIA CUDA GPU.\n"
                "Options:\n"
                "  1. Use get_backend('cpu') for CPU (FP64)\n"
                "  2. Install CUDA-enabled PyTorch"
            )

        return torch.device('cuda')

    def _to_device(self, a: np.ndarray):
        return self.torch.from_numpy(np.ascontiguousarray(a)).to(
            device=self.device, dtype=self.dtype
        )

    def _tol(self, n: int, p: int, tol: Optional[float]) -> float:
        if tol is not None:
            return tol
        return default_tol(n, p, self.torch.finfo(self.dtype).eps)

    def qr_decomposition(self, X, tol=None):
        n, p = X.shape
        tol = self._tol(n, p, tol)
        Q, R = self.torch.linalg.qr(self._to_device(X), mode='reduced')
        R_np = R.cpu().numpy()
        return QRDecomposition(
            Q=Q.cpu().numpy(),
            R=R_np,
            rank=numerical_rank(np.diag(R_np), tol),
            tol=tol,
        )

    def fit_least_squares(
        self,
        X: np.ndarray,
        y: np.ndarray,
        tol: Optional[float] = None,
        singular_ok: bool = True
    ) -> LeastSquaresResult:
        """
        Fit on GPU.

        ALL computation happens on GPU with torch tensors.
        Only convert at boundaries (entry/exit).
        """
        torch = self.torch
        n, p = X.shape
        tol = self._tol(n, p, tol)

        # Convert to GPU tensors ONCE at entry
        X_gpu = self._to_device(X)
        y_gpu = self._to_device(y)

        Q, R = torch.linalg.qr(X_gpu, mode='reduced')

        R_diag = torch.diagonal(R).cpu().numpy()
        rank = numerical_rank(R_diag, tol)
        self._check_rank(rank, p, singular_ok)
        self._check_pivots(R_diag, rank)

        # Solve R beta = Q'y (on GPU)
        qty = Q.T @ y_gpu
        coef = torch.linalg.solve_triangular(
            R,
            qty.unsqueeze(1),  # Make it (p, 1) instead of (p,)
            upper=True
        ).squeeze(1)

        fitted = X_gpu @ coef
        residuals = y_gpu - fitted

        # Convert ONCE at exit
        return LeastSquaresResult(
            coef=coef.cpu().numpy().astype(np.float64),
            fitted_values=fitted.cpu().numpy().astype(np.float64),
            residuals=residuals.cpu().numpy().astype(np.float64),
            rank=rank,
            df_residual=n - rank,
            qr_R=R.cpu().numpy().astype(np.float64),
            qr_tol=tol,
            backend=self.name,
        )

    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'gpu',
            'precision': self.precision,
            'device': str(self.device),
            'library': f'PyTorch {self.torch.__version__}',
        }
