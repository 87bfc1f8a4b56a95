__docformat__ = "restructuredtext"
__version__ = "0.1.0"
__all__ = [
    "ConversionConfig",
    "ConversionError",
    "ONNX2ZMF",
    "convert_onnx_to_zmf",
]

from onnx2zmf._onnx2zmf import ONNX2ZMF
from onnx2zmf.config import ConversionConfig
from onnx2zmf.convert import convert_onnx_to_zmf
from onnx2zmf.errors import ConversionError
