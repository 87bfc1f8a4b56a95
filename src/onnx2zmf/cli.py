"""Command line interface for onnx2zmf.

Usage:
    onnx2zmf convert model.onnx                     # Writes model.zmf
    onnx2zmf convert model.onnx --output out.zmf --verbose
    onnx2zmf inspect model.zmf                      # Type from extension
    onnx2zmf inspect model.bin --type onnx
"""

__docformat__ = "restructuredtext"
__all__ = ["main"]

import argparse
import sys
from pathlib import Path

from onnx2zmf._onnx2zmf import ONNX2ZMF
from onnx2zmf.config import ConversionConfig
from onnx2zmf.inspect import inspect_onnx, inspect_zmf


def _parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="onnx2zmf", description="Convert ONNX models to the ZMF format."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert an ONNX model to ZMF")
    convert_parser.add_argument("input", type=Path, help="Input ONNX model")
    convert_parser.add_argument(
        "--output", "-o", type=Path, default=None, help="Output ZMF file (default: <input>.zmf)"
    )
    convert_parser.add_argument(
        "--strict-attributes",
        action="store_true",
        help="Fail on attribute types ZMF cannot represent instead of dropping them",
    )
    convert_parser.add_argument("--verbose", "-v", action="store_true", help="Print progress")

    inspect_parser = subparsers.add_parser("inspect", help="Summarize an ONNX or ZMF model")
    inspect_parser.add_argument("file", type=Path, help="Model file")
    inspect_parser.add_argument(
        "--type",
        choices=["onnx", "zmf"],
        default=None,
        help="File type (default: inferred from extension)",
    )

    return parser.parse_args(argv)


def _run_convert(args: argparse.Namespace) -> int:
    config = ConversionConfig(strict_attributes=args.strict_attributes)
    converter = ONNX2ZMF(verbose=args.verbose, config=config)
    converter.convert(args.input, args.output)
    return 0


def _run_inspect(args: argparse.Namespace) -> int:
    file_type = args.type
    if file_type is None:
        file_type = "onnx" if args.file.suffix.lower() == ".onnx" else "zmf"

    if file_type == "onnx":
        print(inspect_onnx(args.file))
    else:
        print(inspect_zmf(args.file))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the onnx2zmf command line tool."""
    args = _parse_arguments(argv)

    try:
        if args.command == "convert":
            return _run_convert(args)
        return _run_inspect(args)
    except (ValueError, OSError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
