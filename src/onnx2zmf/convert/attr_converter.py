"""ONNX node attribute conversion."""

__docformat__ = "restructuredtext"
__all__ = ["CONVERT_ATTR_MAP", "convert_attribute"]

from collections.abc import Callable

from onnx import AttributeProto

from onnx2zmf.errors import DecodeError, UnsupportedFeatureError
from onnx2zmf.zmf.types import Attribute


def _decode_text(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as error:
        raise DecodeError(f"Attribute bytes are not valid UTF-8: {error}") from error


# Attribute type converters
CONVERT_ATTR_MAP: dict[int, Callable[[AttributeProto], Attribute]] = {
    AttributeProto.FLOAT: lambda x: Attribute.from_float(x.f),
    AttributeProto.INT: lambda x: Attribute.from_int(x.i),
    AttributeProto.STRING: lambda x: Attribute.from_string(_decode_text(x.s)),
    AttributeProto.FLOATS: lambda x: Attribute.from_floats(x.floats),
    AttributeProto.INTS: lambda x: Attribute.from_ints(x.ints),
    AttributeProto.STRINGS: lambda x: Attribute.from_strings(
        [_decode_text(s) for s in x.strings]
    ),
}


def _type_name(attr_type: int) -> str:
    try:
        return AttributeProto.AttributeType.Name(attr_type)
    except ValueError:
        return str(attr_type)


def convert_attribute(attr: AttributeProto, strict: bool = False) -> Attribute | None:
    """Convert an ONNX attribute to a ZMF attribute.

    Tensor, graph, sparse tensor and type proto attributes (and their list
    forms) have no ZMF representation. Sub-graphs are never converted.

    :param attr: ONNX attribute
    :param strict: Raise for unsupported kinds instead of returning None
    :return: ZMF attribute, or None if the kind is unsupported and not strict
    :raises UnsupportedFeatureError: If the kind is unsupported and ``strict`` is set
    :raises DecodeError: If a string attribute is not valid UTF-8
    """
    convert = CONVERT_ATTR_MAP.get(attr.type)
    if convert is None:
        if strict:
            raise UnsupportedFeatureError(
                f"Unsupported ONNX attribute type for ZMF: {_type_name(attr.type)}"
            )
        return None
    return convert(attr)
