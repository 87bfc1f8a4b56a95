__docformat__ = "restructuredtext"
__all__ = ["ONNX2ZMF"]

from pathlib import Path

from onnx2zmf.config import ConversionConfig
from onnx2zmf.zmf import ZMFModel


class ONNX2ZMF:
    def __init__(self, verbose: bool = False, config: ConversionConfig | None = None):
        self.verbose = verbose
        self.config = config if config is not None else ConversionConfig()

    def convert(self, onnx_path: str | Path, target_path: str | Path | None = None) -> ZMFModel:
        """Convert ONNX model file to ZMF model file.

        :param onnx_path: Path to input ONNX model
        :param target_path: Path to save ZMF model (default: ``<stem>.zmf``
            next to the input)
        :return: Converted ZMF model
        """
        # Stage 1: Load ONNX model
        from onnx2zmf.normalize import load_onnx_model

        model = load_onnx_model(onnx_path, check_model=self.config.check_model)
        if self.verbose:
            print(f"Loaded: {onnx_path} ({len(model.graph.node)} nodes)")

        # Stage 2: Convert to ZMF
        from onnx2zmf.convert import convert_onnx_to_zmf

        zmf_model = convert_onnx_to_zmf(model, model_path=onnx_path, config=self.config)

        # Stage 3: Serialize
        from onnx2zmf.zmf import save_zmf_model

        if target_path is None:
            target_path = Path(onnx_path).with_suffix(".zmf")
        save_zmf_model(zmf_model, target_path)

        if self.verbose:
            print(f"Converted {len(zmf_model.graph.nodes)} nodes")
            print(f"Saved {len(zmf_model.graph.parameters)} parameters")
            print(f"Generated: {target_path}")

        return zmf_model

    @staticmethod
    def inspect(path: str | Path) -> str:
        """Summarize an ONNX or ZMF model file.

        Files ending in ``.onnx`` are read as ONNX, anything else as ZMF.

        :param path: Path to model file
        :return: Multi-line summary
        """
        from onnx2zmf.inspect import inspect_onnx, inspect_zmf

        if Path(path).suffix.lower() == ".onnx":
            return inspect_onnx(path)
        return inspect_zmf(path)
