"""
Test the PyTorch backend.

Runs on the torch CPU device wherever torch is installed, and on CUDA
when an NVIDIA GPU is present. Results must match the LAPACK backend.
"""

import pytest
import numpy as np

torch = pytest.importorskip("torch")

from mlregression import RegressionModel, SingularMatrixError
from mlregression._backends import get_backend
from mlregression._backends.gpu_backend import PyTorchBackend

CUDA_AVAILABLE = torch.cuda.is_available()


class TestPyTorchOnCPUDevice:
    """The torch code path, without needing a GPU."""

    def test_backend_creation(self):
        backend = PyTorchBackend(use_fp64=True, device='cpu')
        assert backend.name == "pytorch_fp64"
        assert backend.precision == "fp64"

        info = backend.get_device_info()
        assert info['backend'] == 'gpu'
        assert info['device'] == 'cpu'

    def test_fp32_name(self):
        backend = PyTorchBackend(use_fp64=False, device='cpu')
        assert backend.name == "pytorch_fp32"

    def test_rejects_mps(self):
        with pytest.raises(ValueError, match="does not support Apple MPS"):
            PyTorchBackend(device='mps')

    def test_vs_cpu_consistency(self, random_design):
        X, y, _ = random_design
        cpu_result = get_backend('cpu').fit_least_squares(X, y)
        torch_result = PyTorchBackend(device='cpu').fit_least_squares(X, y)

        np.testing.assert_allclose(torch_result.coef, cpu_result.coef, rtol=1e-10)
        np.testing.assert_allclose(torch_result.residuals, cpu_result.residuals, atol=1e-10)
        assert torch_result.rank == cpu_result.rank
        assert torch_result.coef.dtype == np.float64

    def test_fp32_close_to_cpu(self, random_design):
        X, y, _ = random_design
        cpu_result = get_backend('cpu').fit_least_squares(X, y)
        torch_result = PyTorchBackend(use_fp64=False, device='cpu').fit_least_squares(X, y)
        np.testing.assert_allclose(torch_result.coef, cpu_result.coef, rtol=1e-4, atol=1e-4)

    def test_qr_decomposition(self, random_design):
        X, _, _ = random_design
        decomp = PyTorchBackend(device='cpu').qr_decomposition(X)
        np.testing.assert_allclose(decomp.Q @ decomp.R, X, atol=1e-12)
        assert decomp.rank == 4

    def test_zero_pivot(self):
        X = np.column_stack([np.ones(5), np.zeros(5)])
        backend = PyTorchBackend(device='cpu')
        with pytest.raises(SingularMatrixError):
            backend.fit_least_squares(X, np.arange(5.0), singular_ok=False)

    def test_model_with_backend_instance(self, line_data):
        X, y = line_data
        model = RegressionModel(X, y, backend=PyTorchBackend(device='cpu'))
        assert model.backend_name == 'pytorch_fp64'
        assert model.coefficient(1) == pytest.approx(3.0, abs=0.01)


@pytest.mark.skipif(not CUDA_AVAILABLE, reason="CUDA GPU not available")
class TestPyTorchOnCUDA:
    """Test PyTorch CUDA backend (NVIDIA GPUs only)."""

    def test_gpu_device_info(self):
        info = get_backend('gpu').get_device_info()
        assert info['backend'] == 'gpu'
        assert 'cuda' in str(info['device']).lower()

    def test_gpu_vs_cpu_consistency(self, random_design):
        X, y, _ = random_design
        cpu_result = get_backend('cpu').fit_least_squares(X, y)
        gpu_result = get_backend('gpu', use_fp64=False).fit_least_squares(X, y)

        # FP32 tolerance
        np.testing.assert_allclose(gpu_result.coef, cpu_result.coef, rtol=1e-4, atol=1e-4)
        assert cpu_result.rank == gpu_result.rank
