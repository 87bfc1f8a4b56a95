"""Tests for reading externally stored tensor payloads.

Test Coverage:
- TestParseExternalDataInfo: 5 tests - Key/value parsing
- TestLoadExternalData: 7 tests - File resolution and byte ranges
"""

import pytest
from onnx import StringStringEntryProto, TensorProto

from onnx2zmf.convert import ExternalDataInfo, load_external_data, parse_external_data_info
from onnx2zmf.errors import ExternalDataError


def _entries(**values):
    return [StringStringEntryProto(key=key, value=value) for key, value in values.items()]


def _external_tensor(**values):
    tensor = TensorProto(name="weight", data_type=TensorProto.FLOAT, dims=[5])
    tensor.data_location = TensorProto.EXTERNAL
    tensor.external_data.extend(_entries(**values))
    return tensor


@pytest.fixture
def data_file(tmp_path):
    """20-byte side file next to a (virtual) model file."""
    path = tmp_path / "weights.bin"
    path.write_bytes(bytes(range(20)))
    return path


class TestParseExternalDataInfo:
    """Test parsing of the external_data entries."""

    def test_all_keys(self):
        info = parse_external_data_info(_entries(location="w.bin", offset="10", length="5"))
        assert info == ExternalDataInfo(location="w.bin", offset=10, length=5)

    def test_defaults(self):
        info = parse_external_data_info(_entries(location="w.bin"))
        assert info.offset == 0
        assert info.length == 0

    def test_empty_values_mean_zero(self):
        info = parse_external_data_info(_entries(location="w.bin", offset="", length=""))
        assert (info.offset, info.length) == (0, 0)

    def test_invalid_offset(self):
        with pytest.raises(ExternalDataError, match="Invalid offset value: abc"):
            parse_external_data_info(_entries(location="w.bin", offset="abc"))

    def test_missing_location(self):
        with pytest.raises(ExternalDataError, match="location not specified"):
            parse_external_data_info(_entries(offset="0"))


class TestLoadExternalData:
    """Test reading payload bytes from the side file."""

    def test_offset_and_length(self, tmp_path, data_file):
        tensor = _external_tensor(location="weights.bin", offset="10", length="5")
        data = load_external_data(tensor, tmp_path / "model.onnx")
        assert data == bytes([10, 11, 12, 13, 14])

    def test_whole_file(self, tmp_path, data_file):
        tensor = _external_tensor(location="weights.bin")
        assert load_external_data(tensor, tmp_path / "model.onnx") == bytes(range(20))

    def test_offset_without_length(self, tmp_path, data_file):
        tensor = _external_tensor(location="weights.bin", offset="15")
        assert load_external_data(tensor, tmp_path / "model.onnx") == bytes(range(15, 20))

    def test_absolute_location(self, data_file):
        tensor = _external_tensor(location=str(data_file), length="2")
        assert load_external_data(tensor) == b"\x00\x01"

    def test_length_past_end(self, tmp_path, data_file):
        tensor = _external_tensor(location="weights.bin", offset="0", length="100")
        with pytest.raises(ExternalDataError, match="Failed to read 100 bytes"):
            load_external_data(tensor, tmp_path / "model.onnx")

    def test_offset_at_end_of_file(self, tmp_path, data_file):
        tensor = _external_tensor(location="weights.bin", offset="20")
        with pytest.raises(ExternalDataError, match="exceeds file size"):
            load_external_data(tensor, tmp_path / "model.onnx")

    def test_missing_file(self, tmp_path):
        tensor = _external_tensor(location="missing.bin")
        with pytest.raises(ExternalDataError, match="missing.bin"):
            load_external_data(tensor, tmp_path / "model.onnx")
