"""
LZ4 frame compressor.
"""

from typing import BinaryIO

import lz4.frame

from .base import Compressor


class LZ4Compressor(Compressor):
    """LZ4 frame format; levels below 3 select the fast mode"""

    NAME = "lz4"
    DEFAULT_LEVEL = 1
    MIN_LEVEL = lz4.frame.COMPRESSIONLEVEL_MIN
    MAX_LEVEL = lz4.frame.COMPRESSIONLEVEL_MAX
    DESCRIPTION = "LZ4 frame format (fast mode)"

    def open(self, sink: BinaryIO) -> BinaryIO:
        return lz4.frame.LZ4FrameFile(sink, mode='wb', compression_level=self.level)
