"""Tests for the onnx2zmf command line interface.

Test Coverage:
- TestConvertCommand: 4 tests - Output path, verbosity and strict attributes
- TestInspectCommand: 3 tests - Type inference and explicit type
- TestErrors: 2 tests - Error message and exit status
"""

import onnx
import onnx.helper as onnx_helper
import pytest
from onnx import TensorProto

from onnx2zmf.cli import main
from onnx2zmf.zmf import load_zmf_model
from tests.test_units.test_onnx2zmf.fixtures.synthetic_models import SyntheticONNXModels


@pytest.fixture
def constant_model(tmp_path):
    """Model whose Constant node has a tensor-valued attribute."""
    model = SyntheticONNXModels.create_identity_model()
    value = onnx_helper.make_tensor("value", TensorProto.FLOAT, [1], [1.0])
    model.graph.node.append(
        onnx_helper.make_node("Constant", inputs=[], outputs=["C"], name="const", value=value)
    )
    path = tmp_path / "constant.onnx"
    onnx.save(model, str(path))
    return path


class TestConvertCommand:
    """Test the convert subcommand."""

    def test_default_output(self, tmp_path, linear_model):
        assert main(["convert", linear_model]) == 0
        model = load_zmf_model(tmp_path / "linear.zmf")
        assert set(model.graph.parameters) == {"W", "B"}

    def test_explicit_output(self, tmp_path, reshape_model):
        target = tmp_path / "out" / "model.zmf"
        target.parent.mkdir()
        assert main(["convert", reshape_model, "--output", str(target)]) == 0
        assert load_zmf_model(target).graph.nodes[0].attributes["shape"].value == (1, -1, 4)

    def test_verbose(self, tmp_path, linear_model, capsys):
        assert main(["convert", linear_model, "--verbose"]) == 0
        out = capsys.readouterr().out
        assert "Converted 1 nodes" in out
        assert "linear.zmf" in out

    def test_strict_attributes(self, constant_model, capsys):
        assert main(["convert", str(constant_model)]) == 0
        assert main(["convert", str(constant_model), "--strict-attributes"]) == 1
        assert "Failed to convert node 'const'" in capsys.readouterr().err


class TestInspectCommand:
    """Test the inspect subcommand."""

    def test_onnx_from_extension(self, linear_model, capsys):
        assert main(["inspect", linear_model]) == 0
        assert "IR version: 8" in capsys.readouterr().out

    def test_zmf_from_extension(self, tmp_path, linear_model, capsys):
        main(["convert", linear_model])
        capsys.readouterr()
        assert main(["inspect", str(tmp_path / "linear.zmf")]) == 0
        assert "Producer: onnx2zmf" in capsys.readouterr().out

    def test_explicit_type(self, tmp_path, linear_model, capsys):
        target = tmp_path / "linear.bin"
        main(["convert", linear_model, "--output", str(target)])
        capsys.readouterr()
        assert main(["inspect", str(target), "--type", "zmf"]) == 0
        assert "Graph has 2 parameters." in capsys.readouterr().out


class TestErrors:
    """Test error reporting."""

    def test_missing_input(self, tmp_path, capsys):
        assert main(["convert", str(tmp_path / "missing.onnx")]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_invalid_zmf(self, tmp_path, capsys):
        path = tmp_path / "broken.zmf"
        path.write_bytes(b"\xff\xff\xff\xff")
        assert main(["inspect", str(path)]) == 1
        assert "Invalid ZMF model" in capsys.readouterr().err
