"""Quantization annotation processing.

ONNX graphs attach quantization parameters to tensors through
``GraphProto.quantization_annotation``: each annotation names a tensor and
maps the roles ``SCALE_TENSOR`` and ``ZERO_POINT_TENSOR`` to initializers.
Both parameters must be scalars stored in ``raw_data``.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "SCALE_TENSOR",
    "ZERO_POINT_TENSOR",
    "extract_quantization_info",
    "extract_scalar_float",
    "extract_scalar_int64",
]

import numpy as np
from onnx import GraphProto, TensorProto

from onnx2zmf.convert._utils import dtype_name
from onnx2zmf.errors import DecodeError, UnresolvedReferenceError, with_context
from onnx2zmf.zmf.types import Quantization

SCALE_TENSOR = "SCALE_TENSOR"
ZERO_POINT_TENSOR = "ZERO_POINT_TENSOR"


def _check_scalar(tensor: TensorProto, data_type: int, nbytes: int) -> None:
    if len(tensor.dims) != 0:
        raise DecodeError(f"Expected scalar tensor, got shape {list(tensor.dims)}")
    if tensor.data_type != data_type:
        raise DecodeError(
            f"Expected {dtype_name(data_type)} tensor, got type {dtype_name(tensor.data_type)}"
        )
    if len(tensor.raw_data) != nbytes:
        raise DecodeError(
            f"Expected {nbytes} bytes for {dtype_name(data_type)}, "
            f"got {len(tensor.raw_data)} bytes"
        )


def extract_scalar_float(tensor: TensorProto) -> float:
    """Decode a 0-d FLOAT tensor holding exactly 4 raw bytes.

    :param tensor: ONNX tensor
    :return: Scalar value
    """
    _check_scalar(tensor, TensorProto.FLOAT, 4)
    return float(np.frombuffer(tensor.raw_data, dtype="<f4")[0])


def extract_scalar_int64(tensor: TensorProto) -> int:
    """Decode a 0-d INT64 tensor holding exactly 8 raw bytes.

    :param tensor: ONNX tensor
    :return: Scalar value
    """
    _check_scalar(tensor, TensorProto.INT64, 8)
    return int(np.frombuffer(tensor.raw_data, dtype="<i8")[0])


_ROLE_EXTRACTORS = {
    SCALE_TENSOR: ("scale", extract_scalar_float),
    ZERO_POINT_TENSOR: ("zero point", extract_scalar_int64),
}


def extract_quantization_info(
    graph: GraphProto, initializers: dict[str, TensorProto]
) -> dict[str, Quantization]:
    """Collect quantization parameters for every annotated tensor.

    An all-zero scale and zero point cannot be told apart from "not
    quantized", so no record is produced for it.

    :param graph: ONNX graph
    :param initializers: Initializers by name
    :return: Quantization records by annotated tensor name
    :raises UnresolvedReferenceError: If a parameter initializer is missing
    :raises DecodeError: If a parameter is not a well-formed scalar
    """
    quantization: dict[str, Quantization] = {}

    for annotation in graph.quantization_annotation:
        tensor_name = annotation.tensor_name
        values = {SCALE_TENSOR: 0.0, ZERO_POINT_TENSOR: 0}

        for param in annotation.quant_parameter_tensor_names:
            role, param_name = param.key, param.value
            param_tensor = initializers.get(param_name)
            if param_tensor is None:
                raise UnresolvedReferenceError(
                    f"Quantization parameter {role} tensor '{param_name}' "
                    f"not found for '{tensor_name}'"
                )
            if role not in _ROLE_EXTRACTORS:
                continue

            label, extract = _ROLE_EXTRACTORS[role]
            try:
                values[role] = extract(param_tensor)
            except DecodeError as error:
                context = f"Failed to extract {label} for '{tensor_name}'"
                raise with_context(error, context) from error

        scale, zero_point = values[SCALE_TENSOR], values[ZERO_POINT_TENSOR]
        if scale != 0 or zero_point != 0:
            quantization[tensor_name] = Quantization(scale=scale, zero_point=zero_point)

    return quantization
