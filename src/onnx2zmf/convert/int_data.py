"""Integer payload decoding for constant tensors."""

__docformat__ = "restructuredtext"
__all__ = ["INTEGER_DTYPES", "extract_int64_data"]

import numpy as np
from onnx import TensorProto

from onnx2zmf.convert._utils import dtype_name
from onnx2zmf.errors import DecodeError, UnsupportedFeatureError

INTEGER_DTYPES = (TensorProto.INT32, TensorProto.INT64)

# Little-endian element layout of raw_data
_RAW_DTYPES = {
    TensorProto.INT32: np.dtype("<i4"),
    TensorProto.INT64: np.dtype("<i8"),
}


def extract_int64_data(tensor: TensorProto) -> list[int]:
    """Decode an INT32 or INT64 tensor into a flat list of integers.

    The typed ``int64_data`` field is used when populated, then
    ``int32_data`` (widened), then ``raw_data``.

    :param tensor: ONNX tensor
    :return: Tensor values in row-major order
    :raises UnsupportedFeatureError: If the tensor is not INT32 or INT64
    :raises DecodeError: If ``raw_data`` is not a whole number of elements
    """
    dtype = tensor.data_type
    if dtype not in INTEGER_DTYPES:
        raise UnsupportedFeatureError(
            f"Tensor is not of type INT64 or INT32, but {dtype_name(dtype)}"
        )

    if len(tensor.int64_data) > 0:
        return list(tensor.int64_data)
    if len(tensor.int32_data) > 0:
        return [int(value) for value in tensor.int32_data]

    raw_data = tensor.raw_data
    if not raw_data:
        return []

    element = _RAW_DTYPES[dtype]
    if len(raw_data) % element.itemsize != 0:
        raise DecodeError(
            f"raw_data length {len(raw_data)} is not a multiple of {element.itemsize} "
            f"for {dtype_name(dtype)}"
        )
    return np.frombuffer(raw_data, dtype=element).astype(np.int64).tolist()
