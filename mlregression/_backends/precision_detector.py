"""
Hardware precision capability detection.

Decides whether a CUDA GPU runs FP64 fast enough for the GPU backend to
solve least squares in double precision, or should fall back to FP32.
"""

import warnings
from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum


class PrecisionSupport(Enum):
    """FP64 support level for hardware."""
    NO_GPU = "no_gpu"
    GIMPED_FP64 = "gimped_fp64"
    FULL_FP64 = "full_fp64"


@dataclass(frozen=True)
class GPUCapabilities:
    """
    What the detected device offers for FP64 work.

    ``fp64_throughput_ratio`` is FP64 throughput as a fraction of FP32.
    """
    has_gpu: bool
    gpu_name: str
    fp64_support: PrecisionSupport
    fp64_throughput_ratio: float
    recommended_fp64: bool


CPU_ONLY = GPUCapabilities(False, "CPU only", PrecisionSupport.NO_GPU, 1.0, True)

# (name markers, FP64:FP32 throughput) checked in order; first match wins.
# Ratios of 1/2 are data center parts, the rest are consumer cards.
_FP64_RATES = (
    (('A100', 'A800', 'H100', 'H800', 'H200', 'V100', 'P100'), 1 / 2),
    (('RTX 50', 'RTX 40', 'RTX 30'), 1 / 64),
    (('RTX 20', 'GTX'), 1 / 32),
)
_UNKNOWN_RATE = 1 / 32


def _support_for(ratio: float) -> PrecisionSupport:
    if ratio >= 1 / 2:
        return PrecisionSupport.FULL_FP64
    return PrecisionSupport.GIMPED_FP64


def classify_nvidia_gpu(gpu_name: str) -> Tuple[PrecisionSupport, float, bool]:
    """
    Classify an NVIDIA device by name.

    Returns
    -------
    (support_level, throughput_ratio, recommended)
        FP64 is recommended only at full rate.
    """
    upper = gpu_name.upper()
    ratio = next(
        (rate for markers, rate in _FP64_RATES
         if any(marker in upper for marker in markers)),
        None,
    )
    if ratio is None:
        warnings.warn(
            f"Unknown NVIDIA GPU '{gpu_name}'; treating its FP64 as "
            f"1/{round(1 / _UNKNOWN_RATE)} rate"
        )
        ratio = _UNKNOWN_RATE
    support = _support_for(ratio)
    return support, ratio, support is PrecisionSupport.FULL_FP64


def detect_gpu_capabilities() -> GPUCapabilities:
    """Capabilities of CUDA device 0, or CPU_ONLY without torch or CUDA."""
    try:
        import torch
    except ImportError:
        return CPU_ONLY
    if not torch.cuda.is_available():
        return CPU_ONLY

    name = torch.cuda.get_device_name(0)
    return GPUCapabilities(True, name, *classify_nvidia_gpu(name))


def recommend_precision(capabilities: GPUCapabilities,
                        user_preference: Optional[bool]) -> bool:
    """True for FP64; an explicit user preference always wins."""
    if user_preference is not None:
        return user_preference
    return capabilities.recommended_fp64
