"""ZMF Graph Type Definitions.

Defines the target graph as frozen dataclasses. Values are built once per
conversion and handed to the serializer unchanged; no ONNX objects are
referenced from here.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "Attribute",
    "AttributeKind",
    "DataType",
    "Graph",
    "Metadata",
    "Node",
    "Quantization",
    "Tensor",
    "ValueInfo",
    "ZMFModel",
]

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

import numpy as np


class DataType(IntEnum):
    """ZMF tensor element type.

    Values match the ``zmf.Tensor.DataType`` enum of the wire schema.
    """

    UNDEFINED = 0
    FLOAT32 = 1
    FLOAT16 = 2
    BFLOAT16 = 3
    FLOAT64 = 4
    INT32 = 5
    INT64 = 6

    @property
    def numpy_dtype(self) -> np.dtype:
        """Little-endian numpy dtype of one element.

        bfloat16 has no numpy equivalent and decodes to its 16-bit pattern.
        """
        if self is DataType.UNDEFINED:
            raise ValueError("UNDEFINED has no element type")
        return np.dtype(_NUMPY_DTYPES[self])

    @property
    def is_floating_point(self) -> bool:
        return self in (DataType.FLOAT32, DataType.FLOAT16, DataType.BFLOAT16, DataType.FLOAT64)


_NUMPY_DTYPES = {
    DataType.FLOAT32: "<f4",
    DataType.FLOAT16: "<f2",
    DataType.BFLOAT16: "<u2",
    DataType.FLOAT64: "<f8",
    DataType.INT32: "<i4",
    DataType.INT64: "<i8",
}


class AttributeKind(Enum):
    """Kind of value held by a ZMF attribute.

    :cvar FLOAT: Single float
    :cvar INT: Single integer
    :cvar STRING: Text
    :cvar FLOATS: Tuple of floats
    :cvar INTS: Tuple of integers
    :cvar STRINGS: Tuple of text values
    """

    FLOAT = "f"
    INT = "i"
    STRING = "s"
    FLOATS = "floats"
    INTS = "ints"
    STRINGS = "strings"


@dataclass(frozen=True)
class Attribute:
    """Node attribute value.

    :param kind: Value kind
    :param value: ``float``, ``int``, ``str`` or a tuple of one of those
    """

    kind: AttributeKind
    value: Any

    @classmethod
    def from_float(cls, value: float) -> "Attribute":
        return cls(AttributeKind.FLOAT, float(value))

    @classmethod
    def from_int(cls, value: int) -> "Attribute":
        return cls(AttributeKind.INT, int(value))

    @classmethod
    def from_string(cls, value: str) -> "Attribute":
        return cls(AttributeKind.STRING, str(value))

    @classmethod
    def from_floats(cls, values) -> "Attribute":
        return cls(AttributeKind.FLOATS, tuple(float(v) for v in values))

    @classmethod
    def from_ints(cls, values) -> "Attribute":
        return cls(AttributeKind.INTS, tuple(int(v) for v in values))

    @classmethod
    def from_strings(cls, values) -> "Attribute":
        return cls(AttributeKind.STRINGS, tuple(str(v) for v in values))


@dataclass(frozen=True)
class Quantization:
    """Per-tensor quantization parameters.

    :param scale: float32 scale
    :param zero_point: int64 zero point
    """

    scale: float
    zero_point: int


@dataclass(frozen=True)
class Tensor:
    """Tensor with a raw little-endian payload.

    :param dtype: Element type
    :param shape: Dimensions
    :param data: Raw payload bytes
    :param quant: Quantization parameters, if the tensor is quantized
    """

    dtype: DataType
    shape: tuple[int, ...]
    data: bytes
    quant: Quantization | None = None

    def to_numpy(self) -> np.ndarray:
        """Decode the payload into an array of ``shape``.

        :return: Array with the tensor values (bfloat16 as uint16 bit patterns)
        """
        array = np.frombuffer(self.data, dtype=self.dtype.numpy_dtype)
        return array.reshape(self.shape)


@dataclass(frozen=True)
class ValueInfo:
    """Declared graph input or output.

    :param name: Tensor name
    :param shape: Static shape, unknown dimensions are 0
    """

    name: str
    shape: tuple[int, ...]


@dataclass(frozen=True)
class Node:
    """Single operator in a ZMF graph.

    :param name: Node name
    :param op_type: Operator type (e.g., "Reshape", "MatMul")
    :param inputs: Runtime inputs (constants consumed as attributes are removed)
    :param outputs: Output tensor names
    :param attributes: Attributes by name
    """

    name: str
    op_type: str
    inputs: list[str]
    outputs: list[str]
    attributes: dict[str, Attribute] = field(default_factory=dict)


@dataclass(frozen=True)
class Graph:
    """ZMF computation graph.

    :param nodes: Nodes in execution order
    :param parameters: Floating-point weights by name
    :param inputs: Graph inputs
    :param outputs: Graph outputs
    """

    nodes: list[Node]
    parameters: dict[str, Tensor]
    inputs: list[ValueInfo]
    outputs: list[ValueInfo]


@dataclass(frozen=True)
class Metadata:
    """Producer identity and source opset.

    :param producer_name: Tool that produced the model
    :param producer_version: Version of that tool
    :param opset_version: Opset of the source ONNX model
    """

    producer_name: str
    producer_version: str
    opset_version: int


@dataclass(frozen=True)
class ZMFModel:
    """Complete ZMF model: graph plus metadata."""

    graph: Graph
    metadata: Metadata
