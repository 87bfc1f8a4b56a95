"""Conversion context shared by the node and graph converters."""

__docformat__ = "restructuredtext"
__all__ = ["ConversionContext"]

from dataclasses import dataclass, field

from onnx import TensorProto, ValueInfoProto

from onnx2zmf.config import ConversionConfig


@dataclass(frozen=True)
class ConversionContext:
    """Graph-level lookups needed to convert a single node.

    Built once per conversion and only read afterwards.

    :param initializers: Initializers by name (last duplicate wins)
    :param value_infos: Declared and initializer-derived value-infos by name
    :param config: Conversion options
    """

    initializers: dict[str, TensorProto]
    value_infos: dict[str, ValueInfoProto]
    config: ConversionConfig = field(default_factory=ConversionConfig)
