"""Reading tensor payloads stored outside the model file."""

__docformat__ = "restructuredtext"
__all__ = ["ExternalDataInfo", "load_external_data", "parse_external_data_info"]

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from onnx import StringStringEntryProto, TensorProto

from onnx2zmf.errors import ExternalDataError


@dataclass(frozen=True)
class ExternalDataInfo:
    """Location of an external tensor payload.

    :param location: File path, absolute or relative to the model directory
    :param offset: Byte offset into the file (0 = start)
    :param length: Number of bytes to read (0 = until end of file)
    """

    location: str
    offset: int = 0
    length: int = 0


def _parse_int(key: str, value: str) -> int:
    if value == "":
        return 0
    try:
        return int(value, 10)
    except ValueError as error:
        raise ExternalDataError(f"Invalid {key} value: {value}") from error


def parse_external_data_info(entries: Iterable[StringStringEntryProto]) -> ExternalDataInfo:
    """Parse the key/value list of a tensor's ``external_data`` field.

    Unknown keys (e.g. "checksum") are ignored.

    :param entries: ``TensorProto.external_data`` entries
    :return: Parsed location, offset and length
    :raises ExternalDataError: If location is missing or a number is malformed
    """
    location = ""
    offset = 0
    length = 0
    for entry in entries:
        if entry.key == "location":
            location = entry.value
        elif entry.key == "offset":
            offset = _parse_int("offset", entry.value)
        elif entry.key == "length":
            length = _parse_int("length", entry.value)

    if not location:
        raise ExternalDataError("External data location not specified")
    return ExternalDataInfo(location=location, offset=offset, length=length)


def _resolve_location(location: str, model_path: str | Path | None) -> Path:
    path = Path(location)
    if path.is_absolute():
        return path
    model_dir = Path(model_path).parent if model_path else Path()
    return model_dir / path


def load_external_data(tensor: TensorProto, model_path: str | Path | None = None) -> bytes:
    """Read the external payload of a tensor.

    :param tensor: ONNX tensor with ``external_data`` entries
    :param model_path: Path of the ONNX file the tensor belongs to
    :return: Payload bytes
    :raises ExternalDataError: If the file cannot be read or the range is invalid
    """
    info = parse_external_data_info(tensor.external_data)
    external_path = _resolve_location(info.location, model_path)

    try:
        with open(external_path, "rb") as file:
            if info.length > 0:
                if info.offset > 0:
                    file.seek(info.offset)
                data = file.read(info.length)
                if len(data) != info.length:
                    raise ExternalDataError(
                        f"Failed to read {info.length} bytes at offset {info.offset} "
                        f"from external file {external_path}: got {len(data)} bytes"
                    )
                return data

            data = file.read()
    except OSError as error:
        raise ExternalDataError(
            f"Failed to read external data file {external_path}: {error}"
        ) from error

    if info.offset > 0:
        if len(data) <= info.offset:
            raise ExternalDataError(f"Offset {info.offset} exceeds file size {len(data)}")
        data = data[info.offset :]
    return data
