"""Model Inspection.

Text summaries of ONNX inputs and converted ZMF outputs.
"""

__docformat__ = "restructuredtext"
__all__ = ["format_zmf_model", "inspect_onnx", "inspect_zmf"]

from onnx2zmf.inspect.inspector import format_zmf_model, inspect_onnx, inspect_zmf
