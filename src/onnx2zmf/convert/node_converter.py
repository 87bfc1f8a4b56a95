"""ONNX node to ZMF node conversion.

Constant integer inputs are folded into attributes: ZMF consumers read
shapes, axes and permutations from a node's attributes, never from runtime
tensors. A few operators name the promoted attribute after the ONNX input it
replaces (``axes``, ``perm``, ``shape``); every other constant integer input
becomes an attribute keyed by the initializer's own name.
"""

__docformat__ = "restructuredtext"
__all__ = ["CONSTANT_PROMOTION_RULES", "convert_node", "normalize_reshape_shape"]

from collections.abc import Callable

from onnx import NodeProto, TensorProto

from onnx2zmf.convert.attr_converter import convert_attribute
from onnx2zmf.convert.int_data import INTEGER_DTYPES, extract_int64_data
from onnx2zmf.convert.types import ConversionContext
from onnx2zmf.errors import (
    ConversionError,
    StructuralError,
    UnresolvedReferenceError,
    with_context,
)
from onnx2zmf.zmf.types import Attribute, Node

PromotionRule = Callable[[NodeProto, dict[str, Attribute], ConversionContext], set[str]]


def _get_int_initializer(name: str, context: ConversionContext) -> TensorProto | None:
    """Get an INT32/INT64 initializer by name.

    :param name: Tensor name
    :param context: Conversion context
    :return: Initializer, or None if ``name`` is not an integer initializer
    """
    initializer = context.initializers.get(name)
    if initializer is None or initializer.data_type not in INTEGER_DTYPES:
        return None
    return initializer


def _promote_second_input(
    node: NodeProto,
    attributes: dict[str, Attribute],
    context: ConversionContext,
    attr_name: str,
    transform: Callable[[list[int]], list[int]] | None = None,
) -> set[str]:
    """Store the second input of ``node`` as attribute ``attr_name``.

    :param node: ONNX node
    :param attributes: Attributes of the node being built
    :param context: Conversion context
    :param attr_name: Attribute to create
    :param transform: Optional rewrite applied to the decoded values
    :return: Names of consumed inputs
    """
    if len(node.input) < 2:
        return set()
    input_name = node.input[1]
    initializer = _get_int_initializer(input_name, context)
    if initializer is None:
        return set()

    values = extract_int64_data(initializer)
    if transform is not None:
        values = transform(values)
    attributes[attr_name] = Attribute.from_ints(values)
    return {input_name}


def _promote_reduce_sum(
    node: NodeProto, attributes: dict[str, Attribute], context: ConversionContext
) -> set[str]:
    """ReduceSum: second input holds the reduction axes."""
    return _promote_second_input(node, attributes, context, "axes")


def _promote_transpose(
    node: NodeProto, attributes: dict[str, Attribute], context: ConversionContext
) -> set[str]:
    """Transpose: explicit perm, then perm input, then reversed axes."""
    if "perm" in attributes:
        return set()

    consumed = _promote_second_input(node, attributes, context, "perm")
    if consumed:
        return consumed

    if not node.input:
        raise StructuralError(
            f"Transpose node '{node.name}' has no inputs to infer permutation from"
        )
    input_name = node.input[0]
    value_info = context.value_infos.get(input_name)
    if value_info is None:
        raise UnresolvedReferenceError(
            f"Could not find value info for Transpose input '{input_name}' to infer permutation"
        )
    rank = len(value_info.type.tensor_type.shape.dim)
    attributes["perm"] = Attribute.from_ints(reversed(range(rank)))
    return set()


def normalize_reshape_shape(shape: list[int]) -> list[int]:
    """Rewrite batch-relative Reshape targets to a fixed batch of 1.

    Only two patterns are rewritten: ``[0, -1, k]`` with ``k > 0`` becomes
    ``[1, -1, k]`` and ``[0, -1]`` becomes ``[1, -1]``. Any other shape is
    returned unchanged.

    :param shape: Decoded Reshape target shape
    :return: Shape to store on the ZMF node
    """
    if len(shape) == 3 and shape[0] == 0 and shape[1] == -1 and shape[2] > 0:
        return [1, -1, shape[2]]
    if len(shape) == 2 and shape[0] == 0 and shape[1] == -1:
        return [1, -1]
    return list(shape)


def _promote_reshape(
    node: NodeProto, attributes: dict[str, Attribute], context: ConversionContext
) -> set[str]:
    """Reshape: second input holds the target shape."""
    return _promote_second_input(node, attributes, context, "shape", normalize_reshape_shape)


CONSTANT_PROMOTION_RULES: dict[str, PromotionRule] = {
    "ReduceSum": _promote_reduce_sum,
    "Transpose": _promote_transpose,
    "Reshape": _promote_reshape,
}


def _convert_node_attributes(node: NodeProto, context: ConversionContext) -> dict[str, Attribute]:
    """Convert node-native attributes, dropping kinds ZMF cannot hold.

    :param node: ONNX node
    :param context: Conversion context
    :return: Converted attributes by name
    """
    strict = context.config.strict_attributes
    attributes: dict[str, Attribute] = {}
    for onnx_attr in node.attribute:
        try:
            zmf_attr = convert_attribute(onnx_attr, strict=strict)
        except ConversionError as error:
            raise with_context(error, f"Failed to convert attribute '{onnx_attr.name}'") from error
        if zmf_attr is not None:
            attributes[onnx_attr.name] = zmf_attr
    return attributes


def convert_node(node: NodeProto, context: ConversionContext) -> Node:
    """Convert ONNX node to ZMF node.

    Steps:
    1. Convert node-native attributes
    2. Apply the operator's promotion rule, if any
    3. Promote remaining INT32/INT64 initializer inputs to attributes keyed by
       the input name; keep every other input, in order

    :param node: ONNX node
    :param context: Conversion context
    :return: ZMF node
    """
    attributes = _convert_node_attributes(node, context)

    rule = CONSTANT_PROMOTION_RULES.get(node.op_type)
    consumed = rule(node, attributes, context) if rule is not None else set()

    inputs: list[str] = []
    for input_name in node.input:
        if input_name in consumed:
            continue

        initializer = _get_int_initializer(input_name, context)
        if initializer is None:
            # Runtime value or non-integer initializer (e.g. float weights)
            inputs.append(input_name)
            continue

        try:
            values = extract_int64_data(initializer)
        except ConversionError as error:
            raise with_context(error, f"Failed to get data for constant '{input_name}'") from error
        attributes[input_name] = Attribute.from_ints(values)

    return Node(
        name=node.name,
        op_type=node.op_type,
        inputs=inputs,
        outputs=list(node.output),
        attributes=attributes,
    )
