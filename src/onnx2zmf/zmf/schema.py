"""ZMF protobuf wire schema.

The schema is declared here as a ``FileDescriptorProto`` and registered in a
private descriptor pool, so message classes are available without a
generated ``_pb2`` module. Equivalent ``.proto`` source::

    syntax = "proto3";
    package zmf;

    message Model    { Graph graph = 1; Metadata metadata = 2; }
    message Metadata { string producer_name = 1; string producer_version = 2;
                       int64 opset_version = 3; }
    message Graph    { repeated Node nodes = 1; map<string, Tensor> parameters = 2;
                       repeated ValueInfo inputs = 3; repeated ValueInfo outputs = 4; }
    message Node     { string name = 1; string op_type = 2; repeated string inputs = 3;
                       repeated string outputs = 4; map<string, Attribute> attributes = 5; }
    message Attribute {
      oneof value { float f = 1; int64 i = 2; string s = 3;
                    Floats floats = 4; Ints ints = 5; Strings strings = 6; }
    }
    message Floats   { repeated float val = 1; }
    message Ints     { repeated int64 val = 1; }
    message Strings  { repeated string val = 1; }
    message Tensor {
      enum DataType { UNDEFINED = 0; FLOAT32 = 1; FLOAT16 = 2; BFLOAT16 = 3;
                      FLOAT64 = 4; INT32 = 5; INT64 = 6; }
      DataType dtype = 1; repeated int64 shape = 2; bytes data = 3; Quantization quant = 4;
    }
    message Quantization { float scale = 1; int64 zero_point = 2; }
    message ValueInfo { string name = 1; repeated int64 shape = 2; }
"""

__docformat__ = "restructuredtext"
__all__ = [
    "AttributeMessage",
    "GraphMessage",
    "ModelMessage",
    "NodeMessage",
    "TensorMessage",
    "ValueInfoMessage",
]

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from onnx2zmf.zmf.types import DataType

_PACKAGE = "zmf"

_Field = descriptor_pb2.FieldDescriptorProto

_SCALAR = _Field.LABEL_OPTIONAL
_REPEATED = _Field.LABEL_REPEATED


def _add_fields(message: descriptor_pb2.DescriptorProto, fields: list[tuple]) -> None:
    """Append field declarations to a message descriptor.

    :param message: Message descriptor to extend
    :param fields: ``(name, number, type, label, type_name)`` tuples; ``type_name``
        is the fully qualified message or enum name, or None for scalars
    """
    for name, number, field_type, label, type_name in fields:
        field = message.field.add(name=name, number=number, type=field_type, label=label)
        if type_name is not None:
            field.type_name = type_name


def _add_map_entry(
    message: descriptor_pb2.DescriptorProto, field_name: str, number: int, value_type: str
) -> None:
    """Declare a ``map<string, value_type>`` field on ``message``.

    :param message: Owning message descriptor
    :param field_name: Name of the map field
    :param number: Field number
    :param value_type: Fully qualified message name of the map values
    """
    entry_name = "".join(part.capitalize() for part in field_name.split("_")) + "Entry"
    entry = message.nested_type.add(name=entry_name)
    entry.options.map_entry = True
    _add_fields(
        entry,
        [
            ("key", 1, _Field.TYPE_STRING, _SCALAR, None),
            ("value", 2, _Field.TYPE_MESSAGE, _SCALAR, value_type),
        ],
    )
    _add_fields(
        message,
        [
            (
                field_name,
                number,
                _Field.TYPE_MESSAGE,
                _REPEATED,
                f".{_PACKAGE}.{message.name}.{entry_name}",
            )
        ],
    )


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="zmf.proto", package=_PACKAGE, syntax="proto3"
    )

    def message(name: str) -> descriptor_pb2.DescriptorProto:
        return file_proto.message_type.add(name=name)

    def ref(name: str) -> str:
        return f".{_PACKAGE}.{name}"

    _add_fields(
        message("Model"),
        [
            ("graph", 1, _Field.TYPE_MESSAGE, _SCALAR, ref("Graph")),
            ("metadata", 2, _Field.TYPE_MESSAGE, _SCALAR, ref("Metadata")),
        ],
    )
    _add_fields(
        message("Metadata"),
        [
            ("producer_name", 1, _Field.TYPE_STRING, _SCALAR, None),
            ("producer_version", 2, _Field.TYPE_STRING, _SCALAR, None),
            ("opset_version", 3, _Field.TYPE_INT64, _SCALAR, None),
        ],
    )

    graph = message("Graph")
    _add_fields(graph, [("nodes", 1, _Field.TYPE_MESSAGE, _REPEATED, ref("Node"))])
    _add_map_entry(graph, "parameters", 2, ref("Tensor"))
    _add_fields(
        graph,
        [
            ("inputs", 3, _Field.TYPE_MESSAGE, _REPEATED, ref("ValueInfo")),
            ("outputs", 4, _Field.TYPE_MESSAGE, _REPEATED, ref("ValueInfo")),
        ],
    )

    node = message("Node")
    _add_fields(
        node,
        [
            ("name", 1, _Field.TYPE_STRING, _SCALAR, None),
            ("op_type", 2, _Field.TYPE_STRING, _SCALAR, None),
            ("inputs", 3, _Field.TYPE_STRING, _REPEATED, None),
            ("outputs", 4, _Field.TYPE_STRING, _REPEATED, None),
        ],
    )
    _add_map_entry(node, "attributes", 5, ref("Attribute"))

    attribute = message("Attribute")
    attribute.oneof_decl.add(name="value")
    _add_fields(
        attribute,
        [
            ("f", 1, _Field.TYPE_FLOAT, _SCALAR, None),
            ("i", 2, _Field.TYPE_INT64, _SCALAR, None),
            ("s", 3, _Field.TYPE_STRING, _SCALAR, None),
            ("floats", 4, _Field.TYPE_MESSAGE, _SCALAR, ref("Floats")),
            ("ints", 5, _Field.TYPE_MESSAGE, _SCALAR, ref("Ints")),
            ("strings", 6, _Field.TYPE_MESSAGE, _SCALAR, ref("Strings")),
        ],
    )
    for field in attribute.field:
        field.oneof_index = 0

    _add_fields(message("Floats"), [("val", 1, _Field.TYPE_FLOAT, _REPEATED, None)])
    _add_fields(message("Ints"), [("val", 1, _Field.TYPE_INT64, _REPEATED, None)])
    _add_fields(message("Strings"), [("val", 1, _Field.TYPE_STRING, _REPEATED, None)])

    tensor = message("Tensor")
    data_type = tensor.enum_type.add(name="DataType")
    for member in DataType:
        data_type.value.add(name=member.name, number=member.value)
    _add_fields(
        tensor,
        [
            ("dtype", 1, _Field.TYPE_ENUM, _SCALAR, ref("Tensor.DataType")),
            ("shape", 2, _Field.TYPE_INT64, _REPEATED, None),
            ("data", 3, _Field.TYPE_BYTES, _SCALAR, None),
            ("quant", 4, _Field.TYPE_MESSAGE, _SCALAR, ref("Quantization")),
        ],
    )

    _add_fields(
        message("Quantization"),
        [
            ("scale", 1, _Field.TYPE_FLOAT, _SCALAR, None),
            ("zero_point", 2, _Field.TYPE_INT64, _SCALAR, None),
        ],
    )
    _add_fields(
        message("ValueInfo"),
        [
            ("name", 1, _Field.TYPE_STRING, _SCALAR, None),
            ("shape", 2, _Field.TYPE_INT64, _REPEATED, None),
        ],
    )
    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_descriptor().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_PACKAGE}.{name}"))


ModelMessage = _message_class("Model")
GraphMessage = _message_class("Graph")
NodeMessage = _message_class("Node")
AttributeMessage = _message_class("Attribute")
TensorMessage = _message_class("Tensor")
ValueInfoMessage = _message_class("ValueInfo")
