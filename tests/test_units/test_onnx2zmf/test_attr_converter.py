"""Tests for ONNX attribute conversion.

Test Coverage:
- TestSupportedKinds: 6 tests - Scalar and list attribute kinds
- TestUnsupportedKinds: 4 tests - Lenient and strict handling
- TestInvalidText: 2 tests - Non-UTF-8 string bytes
"""

import onnx.helper as onnx_helper
import pytest
from onnx import AttributeProto, TensorProto

from onnx2zmf.convert import CONVERT_ATTR_MAP, convert_attribute
from onnx2zmf.errors import DecodeError, UnsupportedFeatureError
from onnx2zmf.zmf import Attribute, AttributeKind


class TestSupportedKinds:
    """Test attribute kinds with a ZMF representation."""

    def test_float(self):
        attr = onnx_helper.make_attribute("alpha", 0.25)
        assert convert_attribute(attr) == Attribute(AttributeKind.FLOAT, 0.25)

    def test_int(self):
        attr = onnx_helper.make_attribute("axis", -1)
        assert convert_attribute(attr) == Attribute(AttributeKind.INT, -1)

    def test_string_is_decoded(self):
        attr = onnx_helper.make_attribute("mode", "constant")
        result = convert_attribute(attr)
        assert result.kind is AttributeKind.STRING
        assert result.value == "constant"

    def test_floats(self):
        attr = onnx_helper.make_attribute("scales", [1.0, 2.0])
        assert convert_attribute(attr) == Attribute(AttributeKind.FLOATS, (1.0, 2.0))

    def test_ints(self):
        attr = onnx_helper.make_attribute("perm", [0, 2, 1])
        assert convert_attribute(attr) == Attribute.from_ints([0, 2, 1])

    def test_strings(self):
        attr = onnx_helper.make_attribute("names", ["a", "b"])
        assert convert_attribute(attr) == Attribute(AttributeKind.STRINGS, ("a", "b"))


class TestUnsupportedKinds:
    """Test attribute kinds without a ZMF representation."""

    @pytest.fixture
    def tensor_attr(self):
        value = onnx_helper.make_tensor("value", TensorProto.FLOAT, [1], [1.0])
        return onnx_helper.make_attribute("value", value)

    def test_tensor_dropped_when_lenient(self, tensor_attr):
        assert convert_attribute(tensor_attr) is None

    def test_tensor_raises_when_strict(self, tensor_attr):
        with pytest.raises(UnsupportedFeatureError, match="TENSOR"):
            convert_attribute(tensor_attr, strict=True)

    def test_undefined_type_raises_when_strict(self):
        attr = AttributeProto(name="x", type=AttributeProto.UNDEFINED)
        with pytest.raises(UnsupportedFeatureError):
            convert_attribute(attr, strict=True)

    def test_map_covers_only_plain_kinds(self):
        assert set(CONVERT_ATTR_MAP) == {
            AttributeProto.FLOAT,
            AttributeProto.INT,
            AttributeProto.STRING,
            AttributeProto.FLOATS,
            AttributeProto.INTS,
            AttributeProto.STRINGS,
        }


class TestInvalidText:
    """Test string attributes whose bytes are not UTF-8."""

    def test_string(self):
        attr = AttributeProto(name="mode", type=AttributeProto.STRING, s=b"\xff\xfe")
        with pytest.raises(DecodeError, match="UTF-8"):
            convert_attribute(attr)

    def test_strings(self):
        attr = AttributeProto(name="names", type=AttributeProto.STRINGS, strings=[b"ok", b"\xc3"])
        with pytest.raises(DecodeError, match="UTF-8"):
            convert_attribute(attr)
