"""Conversion error taxonomy.

Every error raised by the conversion pipeline derives from
:class:`ConversionError`. Errors are re-raised by each layer with the
offending node, tensor, or parameter name prepended to the message, keeping
the error class so callers can still tell the categories apart.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ConversionError",
    "DecodeError",
    "ExternalDataError",
    "StructuralError",
    "UnresolvedReferenceError",
    "UnsupportedFeatureError",
    "with_context",
]


class ConversionError(ValueError):
    """Base class for all ONNX to ZMF conversion errors."""


class StructuralError(ConversionError):
    """The model graph is missing or structurally invalid."""


class UnresolvedReferenceError(ConversionError):
    """A tensor, value-info, or initializer name does not resolve."""


class UnsupportedFeatureError(ConversionError, NotImplementedError):
    """A dtype or attribute kind lies outside the supported subset."""


class DecodeError(ConversionError):
    """A tensor payload cannot be decoded with its declared dtype."""


class ExternalDataError(ConversionError):
    """Externally stored tensor data cannot be located or read."""


def with_context(error: ConversionError, context: str) -> ConversionError:
    """Return a copy of ``error`` whose message is prefixed with ``context``.

    Use as ``raise with_context(error, "...") from error``.

    :param error: Error raised by a lower layer
    :param context: Description of the object being converted
    :return: New error of the same class
    """
    return type(error)(f"{context}: {error}")
