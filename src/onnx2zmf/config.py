"""Conversion options."""

__docformat__ = "restructuredtext"
__all__ = ["ConversionConfig"]

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionConfig:
    """Options controlling a single ONNX to ZMF conversion.

    :param strict_attributes: Raise on attribute kinds ZMF cannot hold
        (tensor, graph, sparse tensor, type proto) instead of dropping them
    :param warn_on_duplicate_initializers: Emit a ``UserWarning`` when two
        initializers share a name (the last one is kept either way)
    :param check_model: Validate the ONNX model with ``onnx.checker`` on load
    """

    strict_attributes: bool = False
    warn_on_duplicate_initializers: bool = True
    check_model: bool = False
