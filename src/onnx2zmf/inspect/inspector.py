"""Human-readable summaries of ONNX and ZMF model files."""

__docformat__ = "restructuredtext"
__all__ = ["format_zmf_model", "inspect_onnx", "inspect_zmf"]

from pathlib import Path

from onnx2zmf.normalize import extract_onnx_opset_version, get_value_info_shape, load_onnx_model
from onnx2zmf.zmf import Attribute, AttributeKind, ZMFModel, load_zmf_model


def _format_shape(shape) -> str:
    return "[" + ", ".join(str(dim) for dim in shape) + "]"


def _format_attribute(attribute: Attribute) -> str:
    if attribute.kind in (AttributeKind.FLOATS, AttributeKind.INTS, AttributeKind.STRINGS):
        return "[" + ", ".join(str(v) for v in attribute.value) + "]"
    return str(attribute.value)


def inspect_onnx(path: str | Path) -> str:
    """Summarize an ONNX model file.

    :param path: Path to ONNX file
    :return: Multi-line summary
    """
    model = load_onnx_model(path)
    graph = model.graph

    lines = [
        f"Inspecting ONNX model from: {path}",
        f"IR version: {model.ir_version}",
        f"Opset version: {extract_onnx_opset_version(model)}",
        f"Graph has {len(graph.node)} nodes.",
        f"Graph has {len(graph.initializer)} initializers.",
        "",
        "Inputs:",
    ]
    lines.extend(f"- {vi.name}: {_format_shape(get_value_info_shape(vi))}" for vi in graph.input)
    lines.append("Outputs:")
    lines.extend(f"- {vi.name}: {_format_shape(get_value_info_shape(vi))}" for vi in graph.output)
    return "\n".join(lines)


def format_zmf_model(model: ZMFModel) -> str:
    """Summarize a ZMF model.

    :param model: ZMF model
    :return: Multi-line summary
    """
    metadata = model.metadata
    graph = model.graph

    lines = [
        f"Producer: {metadata.producer_name} {metadata.producer_version}",
        f"Opset version: {metadata.opset_version}",
        f"Graph has {len(graph.nodes)} nodes.",
        f"Graph has {len(graph.parameters)} parameters.",
        "",
        "Nodes:",
    ]
    for node in graph.nodes:
        lines.append(f"- Node: {node.name}, OpType: {node.op_type}")
        lines.append(f"  Inputs: {node.inputs}")
        lines.append(f"  Outputs: {node.outputs}")
        if node.attributes:
            lines.append("  Attributes:")
            for name in sorted(node.attributes):
                lines.append(f"    - {name}: {_format_attribute(node.attributes[name])}")

    if graph.parameters:
        lines.append("")
        lines.append("Parameters:")
        for name in sorted(graph.parameters):
            tensor = graph.parameters[name]
            line = f"- {name}: {tensor.dtype.name} {_format_shape(tensor.shape)}"
            if tensor.quant is not None:
                line += f" (scale={tensor.quant.scale}, zero_point={tensor.quant.zero_point})"
            lines.append(line)
    return "\n".join(lines)


def inspect_zmf(path: str | Path) -> str:
    """Summarize a ZMF model file.

    :param path: Path to ``.zmf`` file
    :return: Multi-line summary
    """
    model = load_zmf_model(path)
    return f"Inspecting ZMF model from: {path}\n" + format_zmf_model(model)
