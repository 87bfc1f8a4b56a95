"""Shared helpers for the conversion stage."""

__docformat__ = "restructuredtext"
__all__ = ["dtype_name"]

from onnx import TensorProto


def dtype_name(data_type: int) -> str:
    """Get the ONNX name of a tensor dtype code.

    :param data_type: ``TensorProto.DataType`` value
    :return: Name such as "FLOAT" or "INT64", or the raw code if unknown
    """
    try:
        return TensorProto.DataType.Name(data_type)
    except ValueError:
        return str(data_type)
