"""Stage 2: ONNX to ZMF Conversion.

Translates ONNX graphs into ZMF graphs: nodes, attributes, floating-point
parameters and quantization annotations.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "CONSTANT_PROMOTION_RULES",
    "CONVERT_ATTR_MAP",
    "ConversionContext",
    "ExternalDataInfo",
    "convert_attribute",
    "convert_dtype",
    "convert_node",
    "convert_onnx_to_zmf",
    "convert_tensor",
    "extract_int64_data",
    "extract_quantization_info",
    "load_external_data",
    "parse_external_data_info",
]

from onnx2zmf.convert.attr_converter import CONVERT_ATTR_MAP, convert_attribute
from onnx2zmf.convert.external_data import (
    ExternalDataInfo,
    load_external_data,
    parse_external_data_info,
)
from onnx2zmf.convert.graph_converter import convert_onnx_to_zmf
from onnx2zmf.convert.int_data import extract_int64_data
from onnx2zmf.convert.node_converter import CONSTANT_PROMOTION_RULES, convert_node
from onnx2zmf.convert.quantization import extract_quantization_info
from onnx2zmf.convert.tensor_converter import convert_dtype, convert_tensor
from onnx2zmf.convert.types import ConversionContext
