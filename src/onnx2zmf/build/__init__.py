"""Torch Layer Builder (experimental).

Builds ``torch.nn`` layers from converted ZMF nodes.
"""

__docformat__ = "restructuredtext"
__all__ = ["LAYER_CONSTRUCTORS", "build_torch_layers", "tensor_to_torch"]

from onnx2zmf.build.layers import LAYER_CONSTRUCTORS, build_torch_layers, tensor_to_torch
