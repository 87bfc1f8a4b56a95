"""ONNX tensor to ZMF tensor conversion."""

__docformat__ = "restructuredtext"
__all__ = ["FLOAT_DTYPES", "convert_dtype", "convert_tensor"]

from pathlib import Path

import numpy as np
from onnx import TensorProto

from onnx2zmf.convert._utils import dtype_name
from onnx2zmf.convert.external_data import load_external_data
from onnx2zmf.errors import UnsupportedFeatureError
from onnx2zmf.zmf.types import DataType, Quantization, Tensor

# ONNX dtype to ZMF dtype mapping
_ONNX_TO_ZMF_DTYPE = {
    TensorProto.FLOAT: DataType.FLOAT32,
    TensorProto.FLOAT16: DataType.FLOAT16,
    TensorProto.BFLOAT16: DataType.BFLOAT16,
    TensorProto.DOUBLE: DataType.FLOAT64,
    TensorProto.INT32: DataType.INT32,
    TensorProto.INT64: DataType.INT64,
}

FLOAT_DTYPES = (
    TensorProto.FLOAT,
    TensorProto.FLOAT16,
    TensorProto.BFLOAT16,
    TensorProto.DOUBLE,
)

# Typed protobuf field holding the values when raw_data is not used.
# FLOAT16 and BFLOAT16 keep their 16-bit patterns in int32_data.
_TYPED_FIELDS = {
    TensorProto.FLOAT: ("float_data", "<f4"),
    TensorProto.FLOAT16: ("int32_data", "<u2"),
    TensorProto.BFLOAT16: ("int32_data", "<u2"),
    TensorProto.DOUBLE: ("double_data", "<f8"),
    TensorProto.INT32: ("int32_data", "<i4"),
    TensorProto.INT64: ("int64_data", "<i8"),
}


def convert_dtype(onnx_dtype: int) -> DataType:
    """Convert ONNX dtype code to ZMF dtype.

    :param onnx_dtype: ONNX data type code
    :return: ZMF dtype
    :raises UnsupportedFeatureError: If the dtype has no ZMF equivalent
    """
    zmf_dtype = _ONNX_TO_ZMF_DTYPE.get(onnx_dtype)
    if zmf_dtype is None:
        raise UnsupportedFeatureError(f"Unsupported tensor data type: {dtype_name(onnx_dtype)}")
    return zmf_dtype


def _embedded_payload(tensor: TensorProto) -> bytes:
    """Get the little-endian payload of a tensor stored inside the model.

    :param tensor: ONNX tensor
    :return: ``raw_data`` if set, else the typed field packed little-endian
    """
    if tensor.raw_data:
        return tensor.raw_data
    field_name, element = _TYPED_FIELDS[tensor.data_type]
    values = getattr(tensor, field_name)
    if len(values) == 0:
        return b""
    return np.asarray(values).astype(element).tobytes()


def convert_tensor(
    tensor: TensorProto,
    model_path: str | Path | None = None,
    quantization: dict[str, Quantization] | None = None,
) -> Tensor:
    """Convert ONNX tensor to ZMF tensor.

    Payload bytes are copied without any byte-order change.

    :param tensor: ONNX tensor
    :param model_path: Path of the ONNX file, for resolving external data
    :param quantization: Quantization records by tensor name
    :return: ZMF tensor
    """
    zmf_dtype = convert_dtype(tensor.data_type)

    if len(tensor.external_data) > 0:
        data = load_external_data(tensor, model_path)
    else:
        data = _embedded_payload(tensor)

    quant = quantization.get(tensor.name) if quantization else None
    return Tensor(dtype=zmf_dtype, shape=tuple(tensor.dims), data=data, quant=quant)
