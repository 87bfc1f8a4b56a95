"""Stage 1: ONNX Model Loading.

This module loads ONNX models and indexes their graphs for conversion.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "extract_onnx_opset_version",
    "get_onnx_initializers",
    "get_onnx_value_infos",
    "get_value_info_shape",
    "load_onnx_model",
    "load_onnx_model_from_bytes",
    "make_initializer_value_infos",
]

from onnx2zmf.normalize.normalize import load_onnx_model, load_onnx_model_from_bytes
from onnx2zmf.normalize.utils import (
    extract_onnx_opset_version,
    get_onnx_initializers,
    get_onnx_value_infos,
    get_value_info_shape,
    make_initializer_value_infos,
)
