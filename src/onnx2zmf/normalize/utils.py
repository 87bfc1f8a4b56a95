"""Lookup indices over an ONNX graph."""

__docformat__ = "restructuredtext"
__all__ = [
    "extract_onnx_opset_version",
    "get_onnx_initializers",
    "get_onnx_value_infos",
    "get_value_info_shape",
    "make_initializer_value_infos",
]

import warnings

import onnx.helper as onnx_helper
from onnx import GraphProto, ModelProto, TensorProto, ValueInfoProto


def get_onnx_initializers(
    graph: GraphProto, warn_on_duplicates: bool = True
) -> dict[str, TensorProto]:
    """Index initializer tensors by name.

    Later initializers replace earlier ones with the same name.

    :param graph: ONNX graph
    :param warn_on_duplicates: Warn when a name is seen twice
    :return: Dictionary mapping initializer names to TensorProto
    """
    initializers: dict[str, TensorProto] = {}
    for init in graph.initializer:
        if warn_on_duplicates and init.name in initializers:
            warnings.warn(
                f"Duplicate initializer name '{init.name}'; keeping the last occurrence.",
                UserWarning,
                stacklevel=2,
            )
        initializers[init.name] = init
    return initializers


def get_onnx_value_infos(graph: GraphProto) -> dict[str, ValueInfoProto]:
    """Index declared value-infos by name.

    Inputs are indexed first, then outputs, then intermediate value-infos,
    each overriding entries of the same name.

    :param graph: ONNX graph
    :return: Dictionary mapping tensor names to ValueInfoProto
    """
    value_infos: dict[str, ValueInfoProto] = {}
    for info in graph.input:
        value_infos[info.name] = info
    for info in graph.output:
        value_infos[info.name] = info
    for info in graph.value_info:
        value_infos[info.name] = info
    return value_infos


def make_initializer_value_infos(
    initializers: dict[str, TensorProto],
) -> dict[str, ValueInfoProto]:
    """Synthesize a value-info for each initializer from its dtype and dims.

    :param initializers: Initializers by name
    :return: Dictionary mapping initializer names to ValueInfoProto
    """
    return {
        name: onnx_helper.make_tensor_value_info(name, tensor.data_type, list(tensor.dims))
        for name, tensor in initializers.items()
    }


def get_value_info_shape(value_info: ValueInfoProto) -> tuple[int, ...]:
    """Get the static shape of a value-info.

    Symbolic (``dim_param``) and unset dimensions resolve to 0.

    :param value_info: ONNX value-info
    :return: Shape tuple
    """
    return tuple(dim.dim_value for dim in value_info.type.tensor_type.shape.dim)


def extract_onnx_opset_version(model: ModelProto) -> int:
    """Extract the opset version of the first declared opset import.

    :param model: ONNX model
    :return: Opset version, 0 if the model declares none
    """
    if not model.opset_import:
        return 0
    return model.opset_import[0].version  # type: ignore[no-any-return]
