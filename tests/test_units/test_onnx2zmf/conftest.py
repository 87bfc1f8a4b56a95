"""Shared pytest configuration and fixtures for onnx2zmf unit tests.

This module provides:
- Saved model fixtures (path to an ``.onnx`` file in ``tmp_path``)
- In-memory model fixtures
"""

import onnx
import pytest

from tests.test_units.test_onnx2zmf.fixtures.synthetic_models import SyntheticONNXModels

# ===== Saved Model Fixtures =====


@pytest.fixture
def linear_model(tmp_path):
    """Create and save Linear ONNX model."""
    model = SyntheticONNXModels.create_linear_model()
    path = tmp_path / "linear.onnx"
    onnx.save(model, str(path))
    return str(path)


@pytest.fixture
def matmul_relu_model(tmp_path):
    """Create and save MatMul + Relu ONNX model."""
    model = SyntheticONNXModels.create_matmul_relu_model()
    path = tmp_path / "matmul_relu.onnx"
    onnx.save(model, str(path))
    return str(path)


@pytest.fixture
def reshape_model(tmp_path):
    """Create and save Reshape ONNX model."""
    model = SyntheticONNXModels.create_reshape_model()
    path = tmp_path / "reshape.onnx"
    onnx.save(model, str(path))
    return str(path)


@pytest.fixture
def quantized_model(tmp_path):
    """Create and save quantized MatMul ONNX model."""
    model = SyntheticONNXModels.create_quantized_model()
    path = tmp_path / "quantized.onnx"
    onnx.save(model, str(path))
    return str(path)


# ===== In-Memory Model Fixtures =====


@pytest.fixture
def unsqueeze_add_proto():
    """Unsqueeze + Add model with an INT64 constant and a float bias."""
    return SyntheticONNXModels.create_unsqueeze_add_model()


@pytest.fixture
def rms_norm_proto():
    """SimplifiedLayerNormalization + Softmax model."""
    return SyntheticONNXModels.create_rms_norm_model()
