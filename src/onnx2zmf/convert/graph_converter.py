"""ONNX model to ZMF model conversion."""

__docformat__ = "restructuredtext"
__all__ = ["PRODUCER_NAME", "PRODUCER_VERSION", "convert_onnx_to_zmf"]

from pathlib import Path

from onnx import GraphProto, ModelProto, ValueInfoProto

from onnx2zmf import __version__
from onnx2zmf.config import ConversionConfig
from onnx2zmf.convert.node_converter import convert_node
from onnx2zmf.convert.quantization import extract_quantization_info
from onnx2zmf.convert.tensor_converter import FLOAT_DTYPES, convert_tensor
from onnx2zmf.convert.types import ConversionContext
from onnx2zmf.errors import ConversionError, StructuralError, with_context
from onnx2zmf.normalize import (
    extract_onnx_opset_version,
    get_onnx_initializers,
    get_onnx_value_infos,
    get_value_info_shape,
    make_initializer_value_infos,
)
from onnx2zmf.zmf.types import Graph, Metadata, Node, ValueInfo, ZMFModel

PRODUCER_NAME = "onnx2zmf"
PRODUCER_VERSION = __version__


def _convert_value_infos(value_infos) -> list[ValueInfo]:
    return [ValueInfo(name=vi.name, shape=get_value_info_shape(vi)) for vi in value_infos]


def _check_graph_structure(graph: GraphProto, nodes: list[Node]) -> None:
    """Check unique node outputs and that every graph output has a source.

    :param graph: ONNX graph
    :param nodes: Converted nodes
    :raises StructuralError: On a duplicate output or an unproduced graph output
    """
    producers: dict[str, str] = {}
    for node in nodes:
        for output in node.outputs:
            if not output:
                # Omitted optional output
                continue
            if output in producers:
                raise StructuralError(
                    f"Output '{output}' is produced by both node '{producers[output]}' "
                    f"and node '{node.name}'"
                )
            producers[output] = node.name

    available = set(producers)
    available.update(vi.name for vi in graph.input)
    available.update(init.name for init in graph.initializer)
    for output in graph.output:
        if output.name not in available:
            raise StructuralError(f"Graph output '{output.name}' is not produced by any node")


def convert_onnx_to_zmf(
    model: ModelProto,
    model_path: str | Path | None = None,
    config: ConversionConfig | None = None,
) -> ZMFModel:
    """Convert ONNX model to ZMF model.

    Steps:
    1. Index initializers and value-infos
    2. Collect quantization parameters
    3. Convert nodes in order, folding integer constants into attributes
    4. Check graph structure
    5. Convert floating-point initializers into parameters

    :param model: ONNX model
    :param model_path: Path of the ONNX file, for resolving external data
    :param config: Conversion options (defaults if None)
    :return: ZMF model
    :raises ConversionError: If any part of the model cannot be converted
    """
    if config is None:
        config = ConversionConfig()
    if model is None or not model.HasField("graph"):
        raise StructuralError("ONNX model has no graph")
    graph = model.graph

    initializers = get_onnx_initializers(
        graph, warn_on_duplicates=config.warn_on_duplicate_initializers
    )
    value_infos: dict[str, ValueInfoProto] = get_onnx_value_infos(graph)
    value_infos.update(make_initializer_value_infos(initializers))
    context = ConversionContext(initializers=initializers, value_infos=value_infos, config=config)

    quantization = extract_quantization_info(graph, initializers)

    nodes = []
    for onnx_node in graph.node:
        try:
            nodes.append(convert_node(onnx_node, context))
        except ConversionError as error:
            raise with_context(error, f"Failed to convert node '{onnx_node.name}'") from error

    _check_graph_structure(graph, nodes)

    parameters = {}
    for name, initializer in initializers.items():
        if initializer.data_type not in FLOAT_DTYPES:
            continue
        try:
            parameters[name] = convert_tensor(initializer, model_path, quantization)
        except ConversionError as error:
            raise with_context(error, f"Failed to convert float initializer '{name}'") from error

    zmf_graph = Graph(
        nodes=nodes,
        parameters=parameters,
        inputs=_convert_value_infos(graph.input),
        outputs=_convert_value_infos(graph.output),
    )
    metadata = Metadata(
        producer_name=PRODUCER_NAME,
        producer_version=PRODUCER_VERSION,
        opset_version=extract_onnx_opset_version(model),
    )
    return ZMFModel(graph=zmf_graph, metadata=metadata)
