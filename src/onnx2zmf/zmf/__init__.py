"""ZMF target format: graph types and protobuf serialization."""

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
    "deserialize_zmf_model",
    "load_zmf_model",
    "save_zmf_model",
    "serialize_zmf_model",
]

from onnx2zmf.zmf.serialize import (
    deserialize_zmf_model,
    load_zmf_model,
    save_zmf_model,
    serialize_zmf_model,
)
from onnx2zmf.zmf.types import (
    Attribute,
    AttributeKind,
    DataType,
    Graph,
    Metadata,
    Node,
    Quantization,
    Tensor,
    ValueInfo,
    ZMFModel,
)
