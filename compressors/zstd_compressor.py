"""
Zstandard compressor.
"""

from typing import BinaryIO

import zstandard as zstd

from .base import Compressor


class ZstdCompressor(Compressor):
    NAME = "zstd"
    DEFAULT_LEVEL = 1
    # Negative levels are the fast modes; ZSTD_minCLevel() is -(1 << 17)
    MIN_LEVEL = -(1 << 17)
    MAX_LEVEL = zstd.MAX_COMPRESSION_LEVEL
    DESCRIPTION = "Zstandard"

    def open(self, sink: BinaryIO) -> BinaryIO:
        compressor = zstd.ZstdCompressor(level=self.level)
        return compressor.stream_writer(sink, closefd=False)
