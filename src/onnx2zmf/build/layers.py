"""Torch layer construction from ZMF nodes.

Each supported operator maps to a constructor that turns one ZMF node, plus
the graph parameters, into an ``nn.Module``. Layers are built only; wiring
them into a forward pass is left to the caller.
"""

__docformat__ = "restructuredtext"
__all__ = ["LAYER_CONSTRUCTORS", "Reshape", "Transpose", "build_torch_layers", "tensor_to_torch"]

from collections.abc import Callable

import torch
from torch import nn

from onnx2zmf.errors import (
    ConversionError,
    UnresolvedReferenceError,
    UnsupportedFeatureError,
    with_context,
)
from onnx2zmf.zmf.types import Attribute, DataType, Node, Tensor, ZMFModel

_TORCH_DTYPES = {
    DataType.FLOAT32: torch.float32,
    DataType.FLOAT16: torch.float16,
    DataType.BFLOAT16: torch.bfloat16,
    DataType.FLOAT64: torch.float64,
    DataType.INT32: torch.int32,
    DataType.INT64: torch.int64,
}


def tensor_to_torch(tensor: Tensor) -> torch.Tensor:
    """Decode a ZMF tensor into a torch tensor.

    :param tensor: ZMF tensor
    :return: Tensor with ``tensor.shape`` and matching dtype
    """
    dtype = _TORCH_DTYPES.get(tensor.dtype)
    if dtype is None:
        raise UnsupportedFeatureError(f"Cannot decode tensor of type {tensor.dtype.name}")
    if not tensor.data:
        return torch.empty(tensor.shape, dtype=dtype)
    # frombuffer needs a writable buffer it can share
    values = torch.frombuffer(bytearray(tensor.data), dtype=dtype)
    return values.reshape(tensor.shape)


class Reshape(nn.Module):
    def __init__(self, shape: tuple[int, ...]):
        super().__init__()
        self.shape = shape

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.reshape(x, self.shape)

    def extra_repr(self) -> str:
        return f"shape={self.shape}"


class Transpose(nn.Module):
    def __init__(self, perm: tuple[int, ...]):
        super().__init__()
        self.perm = perm

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return x.permute(*self.perm)

    def extra_repr(self) -> str:
        return f"perm={self.perm}"


def _get_attr(node: Node, name: str, default=None):
    attribute: Attribute | None = node.attributes.get(name)
    if attribute is None:
        return default
    return attribute.value


def _require_attr(node: Node, name: str):
    value = _get_attr(node, name)
    if value is None:
        raise UnresolvedReferenceError(f"{node.op_type} node requires attribute '{name}'")
    return value


def _require_parameter(node: Node, index: int, parameters: dict[str, Tensor]) -> torch.Tensor:
    if len(node.inputs) <= index:
        raise UnresolvedReferenceError(f"{node.op_type} node has no input {index}")
    name = node.inputs[index]
    tensor = parameters.get(name)
    if tensor is None:
        raise UnresolvedReferenceError(f"Parameter '{name}' not found")
    return tensor_to_torch(tensor)


def _build_softmax(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    return nn.Softmax(dim=_get_attr(node, "axis", -1))


def _build_gelu(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    return nn.GELU(approximate=_get_attr(node, "approximate", "none"))


def _build_reshape(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    return Reshape(_require_attr(node, "shape"))


def _build_transpose(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    return Transpose(_require_attr(node, "perm"))


def _make_linear(weight: torch.Tensor, bias: torch.Tensor | None) -> nn.Linear:
    """Create a Linear layer from an (out_features, in_features) weight."""
    out_features, in_features = weight.shape
    linear = nn.Linear(in_features, out_features, bias=bias is not None, dtype=weight.dtype)
    with torch.no_grad():
        linear.weight.copy_(weight)
        if bias is not None:
            linear.bias.copy_(bias.reshape(out_features))
    return linear


def _build_matmul(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    weight = _require_parameter(node, 1, parameters)
    if weight.dim() != 2:
        raise UnsupportedFeatureError(f"MatMul weight must be 2-D, got shape {tuple(weight.shape)}")
    # MatMul weights are (in_features, out_features)
    return _make_linear(weight.T, None)


def _build_gemm(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    if _get_attr(node, "transA", 0):
        raise UnsupportedFeatureError("Gemm with transA=1 is not supported")
    weight = _require_parameter(node, 1, parameters)
    if weight.dim() != 2:
        raise UnsupportedFeatureError(f"Gemm weight must be 2-D, got shape {tuple(weight.shape)}")
    if not _get_attr(node, "transB", 0):
        weight = weight.T
    weight = weight * _get_attr(node, "alpha", 1.0)

    bias = None
    if len(node.inputs) > 2 and node.inputs[2]:
        bias = _require_parameter(node, 2, parameters) * _get_attr(node, "beta", 1.0)
        if bias.numel() != weight.shape[0]:
            raise UnsupportedFeatureError(
                f"Gemm bias with {bias.numel()} elements does not match "
                f"{weight.shape[0]} output features"
            )
    return _make_linear(weight, bias)


def _build_rms_norm(node: Node, parameters: dict[str, Tensor]) -> nn.Module:
    scale = _require_parameter(node, 1, parameters)
    layer = nn.RMSNorm(
        tuple(scale.shape), eps=_get_attr(node, "epsilon", 1e-5), dtype=scale.dtype
    )
    with torch.no_grad():
        layer.weight.copy_(scale)
    return layer


LayerConstructor = Callable[[Node, dict[str, Tensor]], nn.Module]

LAYER_CONSTRUCTORS: dict[str, LayerConstructor] = {
    "Relu": lambda node, parameters: nn.ReLU(),
    "Sigmoid": lambda node, parameters: nn.Sigmoid(),
    "Tanh": lambda node, parameters: nn.Tanh(),
    "Gelu": _build_gelu,
    "Softmax": _build_softmax,
    "Reshape": _build_reshape,
    "Transpose": _build_transpose,
    "MatMul": _build_matmul,
    "Gemm": _build_gemm,
    "RMSNorm": _build_rms_norm,
    "SimplifiedLayerNormalization": _build_rms_norm,
}


def build_torch_layers(
    model: ZMFModel, skip_unsupported: bool = False
) -> dict[str, nn.Module]:
    """Build one torch layer per ZMF node.

    :param model: ZMF model
    :param skip_unsupported: Skip nodes with no layer constructor instead of raising
    :return: Layers keyed by node name, in node order
    :raises UnsupportedFeatureError: On an unknown op type (unless skipped)
    """
    parameters = model.graph.parameters
    layers: dict[str, nn.Module] = {}
    for node in model.graph.nodes:
        constructor = LAYER_CONSTRUCTORS.get(node.op_type)
        if constructor is None:
            if skip_unsupported:
                continue
            raise UnsupportedFeatureError(f"No layer constructor for op type '{node.op_type}'")
        try:
            layers[node.name] = constructor(node, parameters)
        except ConversionError as error:
            raise with_context(error, f"Failed to build layer for node '{node.name}'") from error
    return layers
