"""ZMF model (de)serialization."""

__docformat__ = "restructuredtext"
__all__ = [
    "deserialize_zmf_model",
    "load_zmf_model",
    "save_zmf_model",
    "serialize_zmf_model",
]

from pathlib import Path

from google.protobuf.message import DecodeError as ProtobufDecodeError

from onnx2zmf.errors import DecodeError, with_context
from onnx2zmf.zmf.schema import ModelMessage
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


def _write_attribute(message, attribute: Attribute) -> None:
    kind = attribute.kind
    if kind is AttributeKind.FLOAT:
        message.f = attribute.value
    elif kind is AttributeKind.INT:
        message.i = attribute.value
    elif kind is AttributeKind.STRING:
        message.s = attribute.value
    elif kind is AttributeKind.FLOATS:
        message.floats.val.extend(attribute.value)
    elif kind is AttributeKind.INTS:
        message.ints.val.extend(attribute.value)
    elif kind is AttributeKind.STRINGS:
        message.strings.val.extend(attribute.value)
    else:
        raise ValueError(f"Unknown attribute kind {kind}")


def _write_tensor(message, tensor: Tensor) -> None:
    message.dtype = int(tensor.dtype)
    message.shape.extend(tensor.shape)
    message.data = tensor.data
    if tensor.quant is not None:
        message.quant.scale = tensor.quant.scale
        message.quant.zero_point = tensor.quant.zero_point


def _write_value_infos(messages, value_infos: list[ValueInfo]) -> None:
    for info in value_infos:
        messages.add(name=info.name, shape=list(info.shape))


def serialize_zmf_model(model: ZMFModel) -> bytes:
    """Encode a ZMF model to protobuf bytes.

    :param model: ZMF model
    :return: Serialized ``zmf.Model``
    """
    message = ModelMessage()
    message.metadata.producer_name = model.metadata.producer_name
    message.metadata.producer_version = model.metadata.producer_version
    message.metadata.opset_version = model.metadata.opset_version

    graph = model.graph
    for node in graph.nodes:
        node_message = message.graph.nodes.add(
            name=node.name,
            op_type=node.op_type,
            inputs=list(node.inputs),
            outputs=list(node.outputs),
        )
        for key, attribute in node.attributes.items():
            _write_attribute(node_message.attributes[key], attribute)

    for name, tensor in graph.parameters.items():
        _write_tensor(message.graph.parameters[name], tensor)

    _write_value_infos(message.graph.inputs, graph.inputs)
    _write_value_infos(message.graph.outputs, graph.outputs)

    return message.SerializeToString()


def _read_attribute(message) -> Attribute:
    which = message.WhichOneof("value")
    if which == "f":
        return Attribute.from_float(message.f)
    if which == "i":
        return Attribute.from_int(message.i)
    if which == "s":
        return Attribute.from_string(message.s)
    if which == "floats":
        return Attribute.from_floats(message.floats.val)
    if which == "ints":
        return Attribute.from_ints(message.ints.val)
    if which == "strings":
        return Attribute.from_strings(message.strings.val)
    raise DecodeError("Attribute has no value set")


def _read_tensor(message) -> Tensor:
    quant = None
    if message.HasField("quant"):
        quant = Quantization(scale=message.quant.scale, zero_point=message.quant.zero_point)
    return Tensor(
        dtype=DataType(message.dtype),
        shape=tuple(message.shape),
        data=bytes(message.data),
        quant=quant,
    )


def deserialize_zmf_model(data: bytes) -> ZMFModel:
    """Decode protobuf bytes into a ZMF model.

    :param data: Serialized ``zmf.Model``
    :return: ZMF model
    :raises DecodeError: If the bytes are not a valid ``zmf.Model``
    """
    message = ModelMessage()
    try:
        message.ParseFromString(data)
    except ProtobufDecodeError as error:
        raise DecodeError(f"Invalid ZMF model: {error}") from error

    nodes = []
    for node_message in message.graph.nodes:
        attributes = {}
        for key, attribute_message in node_message.attributes.items():
            try:
                attributes[key] = _read_attribute(attribute_message)
            except DecodeError as error:
                context = f"Node '{node_message.name}' attribute '{key}'"
                raise with_context(error, context) from error
        nodes.append(
            Node(
                name=node_message.name,
                op_type=node_message.op_type,
                inputs=list(node_message.inputs),
                outputs=list(node_message.outputs),
                attributes=attributes,
            )
        )

    graph = Graph(
        nodes=nodes,
        parameters={name: _read_tensor(t) for name, t in message.graph.parameters.items()},
        inputs=[ValueInfo(info.name, tuple(info.shape)) for info in message.graph.inputs],
        outputs=[ValueInfo(info.name, tuple(info.shape)) for info in message.graph.outputs],
    )
    metadata = Metadata(
        producer_name=message.metadata.producer_name,
        producer_version=message.metadata.producer_version,
        opset_version=message.metadata.opset_version,
    )
    return ZMFModel(graph=graph, metadata=metadata)


def save_zmf_model(model: ZMFModel, path: str | Path) -> None:
    """Serialize a ZMF model to file.

    :param model: ZMF model
    :param path: Destination path
    """
    Path(path).write_bytes(serialize_zmf_model(model))


def load_zmf_model(path: str | Path) -> ZMFModel:
    """Load a ZMF model from file.

    :param path: Path to ``.zmf`` file
    :return: ZMF model
    """
    return deserialize_zmf_model(Path(path).read_bytes())
