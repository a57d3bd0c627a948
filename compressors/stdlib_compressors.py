"""
Compressors backed by the standard library (gzip and bzip2).
"""

import bz2
import gzip
from typing import BinaryIO

from .base import Compressor


class GzipCompressor(Compressor):
    """Deflate in a gzip container; mtime is pinned so output is reproducible"""

    NAME = "gzip"
    DEFAULT_LEVEL = 1
    MIN_LEVEL = 0
    MAX_LEVEL = 9
    DESCRIPTION = "gzip (deflate)"

    def open(self, sink: BinaryIO) -> BinaryIO:
        return gzip.GzipFile(fileobj=sink, mode='wb', compresslevel=self.level, mtime=0)


class Bzip2Compressor(Compressor):
    NAME = "bzip2"
    DEFAULT_LEVEL = 1
    MIN_LEVEL = 1
    MAX_LEVEL = 9
    DESCRIPTION = "bzip2 (Burrows-Wheeler)"

    def open(self, sink: BinaryIO) -> BinaryIO:
        return bz2.BZ2File(sink, mode='wb', compresslevel=self.level)
