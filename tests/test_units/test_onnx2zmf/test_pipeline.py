"""Tests for model loading and the ONNX2ZMF facade.

Test Coverage:
- TestLoading: 4 tests - File and buffer loading, checker, invalid input
- TestFacade: 3 tests - End-to-end conversion through ONNX2ZMF
- TestExternalDataModels: 1 test - Weights saved beside the model file
"""

import numpy as np
import onnx
import pytest

from onnx2zmf import ONNX2ZMF, ConversionConfig
from onnx2zmf.errors import DecodeError
from onnx2zmf.normalize import load_onnx_model, load_onnx_model_from_bytes
from onnx2zmf.zmf import load_zmf_model
from tests.test_units.test_onnx2zmf.fixtures.synthetic_models import SyntheticONNXModels


class TestLoading:
    """Test ONNX model loading."""

    def test_load_from_file(self, linear_model):
        model = load_onnx_model(linear_model, check_model=True)
        assert isinstance(model, onnx.ModelProto)
        assert len(model.graph.initializer) == 2

    def test_load_from_bytes(self):
        data = SyntheticONNXModels.create_identity_model().SerializeToString()
        model = load_onnx_model_from_bytes(data)
        assert model.graph.node[0].op_type == "Identity"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_onnx_model(tmp_path / "missing.onnx")

    def test_corrupted_bytes(self):
        with pytest.raises(DecodeError, match="Failed to parse ONNX model"):
            load_onnx_model_from_bytes(b"\xff\xff\xff\xff")


class TestFacade:
    """Test conversion through ONNX2ZMF."""

    def test_writes_zmf_next_to_input(self, tmp_path, matmul_relu_model):
        result = ONNX2ZMF().convert(matmul_relu_model)
        saved = load_zmf_model(tmp_path / "matmul_relu.zmf")
        assert saved.graph.parameters == result.graph.parameters
        assert [node.op_type for node in saved.graph.nodes] == ["MatMul", "Relu"]

    def test_verbose_prints(self, tmp_path, identity_model, capsys):
        ONNX2ZMF(verbose=True).convert(identity_model, tmp_path / "out.zmf")
        out = capsys.readouterr().out
        assert "Loaded:" in out
        assert "Generated:" in out

    def test_check_model_config(self, tmp_path, linear_model):
        converter = ONNX2ZMF(config=ConversionConfig(check_model=True))
        result = converter.convert(linear_model, tmp_path / "checked.zmf")
        assert len(result.graph.nodes) == 1


class TestExternalDataModels:
    """Test models whose weights live in a side file."""

    def test_external_weights(self, tmp_path):
        model = SyntheticONNXModels.create_matmul_relu_model()
        path = tmp_path / "external.onnx"
        onnx.save(
            model,
            str(path),
            save_as_external_data=True,
            all_tensors_to_one_file=True,
            location="external.bin",
            size_threshold=0,
        )

        result = ONNX2ZMF().convert(path)
        expected = np.arange(12, dtype=np.float32).reshape(4, 3)
        np.testing.assert_array_equal(result.graph.parameters["W"].to_numpy(), expected)
