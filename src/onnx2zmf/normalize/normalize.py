"""ONNX model loading."""

__docformat__ = "restructuredtext"
__all__ = ["load_onnx_model", "load_onnx_model_from_bytes"]

from pathlib import Path

import onnx
from google.protobuf.message import DecodeError as ProtobufDecodeError
from onnx import ModelProto

from onnx2zmf.errors import DecodeError


def _check_model(model: ModelProto) -> None:
    """Check ONNX model validity using onnx.checker.

    :param model: Input ONNX model
    :raises ValueError: If model is invalid
    """
    try:
        onnx.checker.check_model(model)
    except (onnx.checker.ValidationError, ValueError, AttributeError, TypeError) as error:
        raise ValueError(f"Invalid ONNX model: {error}") from error


def load_onnx_model(onnx_path: str | Path, check_model: bool = False) -> ModelProto:
    """Load an ONNX model from file without resolving external data.

    External tensor payloads are left as references; the converter reads
    them relative to ``onnx_path`` itself.

    :param onnx_path: Path to ONNX file
    :param check_model: Whether to validate model with onnx.checker
    :return: Loaded model
    """
    try:
        model = onnx.load(str(onnx_path), load_external_data=False)
    except ProtobufDecodeError as error:
        raise DecodeError(f"Failed to parse ONNX model {onnx_path}: {error}") from error

    if check_model:
        _check_model(model)

    return model


def load_onnx_model_from_bytes(data: bytes, check_model: bool = False) -> ModelProto:
    """Deserialize an ONNX model from a byte buffer.

    :param data: Serialized ``ModelProto``
    :param check_model: Whether to validate model with onnx.checker
    :return: Loaded model
    """
    try:
        model = onnx.load_model_from_string(data)
    except ProtobufDecodeError as error:
        raise DecodeError(f"Failed to parse ONNX model: {error}") from error

    if check_model:
        _check_model(model)

    return model
