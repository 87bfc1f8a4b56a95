"""Tests for integer constant decoding.

Test Coverage:
- TestFieldPrecedence: 4 tests - int64_data, int32_data and raw_data order
- TestRawDecoding: 4 tests - Little-endian signed decoding
- TestRejections: 2 tests - Wrong dtype and truncated payloads
"""

import numpy as np
import onnx.helper as onnx_helper
import pytest
from onnx import TensorProto, numpy_helper

from onnx2zmf.convert import extract_int64_data
from onnx2zmf.errors import DecodeError, UnsupportedFeatureError


class TestFieldPrecedence:
    """Test which TensorProto field the values are read from."""

    def test_int64_data_field(self):
        tensor = onnx_helper.make_tensor("t", TensorProto.INT64, [3], [1, -2, 3])
        assert extract_int64_data(tensor) == [1, -2, 3]

    def test_int32_data_field(self):
        tensor = onnx_helper.make_tensor("t", TensorProto.INT32, [2], [7, -8])
        assert extract_int64_data(tensor) == [7, -8]

    def test_int64_data_wins_over_raw_data(self):
        tensor = onnx_helper.make_tensor("t", TensorProto.INT64, [1], [5])
        tensor.raw_data = np.array([9], dtype="<i8").tobytes()
        assert extract_int64_data(tensor) == [5]

    def test_empty_tensor(self):
        tensor = onnx_helper.make_tensor("t", TensorProto.INT64, [0], [])
        assert extract_int64_data(tensor) == []


class TestRawDecoding:
    """Test decoding of raw_data payloads."""

    def test_int64_raw(self):
        tensor = numpy_helper.from_array(np.array([0, -1, 4], dtype=np.int64), name="t")
        assert extract_int64_data(tensor) == [0, -1, 4]

    def test_int32_raw_is_signed(self):
        tensor = numpy_helper.from_array(np.array([-1, 2], dtype=np.int32), name="t")
        assert extract_int64_data(tensor) == [-1, 2]

    def test_int64_extremes(self):
        values = [np.iinfo(np.int64).min, np.iinfo(np.int64).max]
        tensor = numpy_helper.from_array(np.array(values, dtype=np.int64), name="t")
        assert extract_int64_data(tensor) == values

    def test_result_is_python_ints(self):
        tensor = numpy_helper.from_array(np.array([1, 2], dtype=np.int32), name="t")
        assert all(type(value) is int for value in extract_int64_data(tensor))


class TestRejections:
    """Test error cases."""

    def test_float_tensor_rejected(self):
        tensor = numpy_helper.from_array(np.array([1.0], dtype=np.float32), name="t")
        with pytest.raises(UnsupportedFeatureError, match="FLOAT"):
            extract_int64_data(tensor)

    def test_truncated_raw_data(self):
        tensor = TensorProto(name="t", data_type=TensorProto.INT64, dims=[1])
        tensor.raw_data = b"\x01\x02\x03"
        with pytest.raises(DecodeError, match="not a multiple of 8"):
            extract_int64_data(tensor)
