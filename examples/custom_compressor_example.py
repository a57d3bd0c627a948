"""
Example Custom Compressor Plugin
================================

Demonstrates how to add a compressor to the estimator, either at runtime
or through the ``compresstimator.compressors`` entry point group:

    entry_points={
        "compresstimator.compressors": [
            "xz=examples.custom_compressor_example:XzCompressor",
        ],
    }
"""

import logging
import lzma
import sys
from typing import BinaryIO

from compressors import Compressor, CompressorInfo, get_compressor_registry

logger = logging.getLogger(__name__)


class XzCompressor(Compressor):
    """
    Example compressor using the xz container.

    The encoder must write into the sink without closing it, and its output
    must only depend on the input so estimates are repeatable.
    """
    NAME = "xz"
    DEFAULT_LEVEL = 0
    MIN_LEVEL = 0
    MAX_LEVEL = 9
    DESCRIPTION = "xz (LZMA2), example plugin"

    def open(self, sink: BinaryIO) -> BinaryIO:
        return lzma.LZMAFile(sink, mode='wb', format=lzma.FORMAT_XZ, preset=self.level)


def register_custom_compressors():
    """Register the example compressors with the process-wide registry"""
    get_compressor_registry().register(CompressorInfo(
        name=XzCompressor.NAME,
        compressor_class=XzCompressor,
        source="custom",
        description=XzCompressor.DESCRIPTION,
    ))
    logger.info("Custom compressors registered successfully")


if __name__ == "__main__":
    from compresstimator import Estimator

    register_custom_compressors()
    estimator = Estimator().with_compressor("xz")
    for path in sys.argv[1:]:
        print(f"{path}\t{estimator.estimate_file(path):.2f}x")
