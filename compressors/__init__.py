"""
Compressors for the compression ratio estimator.

Any deterministic streaming compressor can be plugged in by subclassing
Compressor and registering it, either at runtime or through the
``compresstimator.compressors`` entry point group.
"""

from .base import Compressor
from .lz4_compressor import LZ4Compressor
from .zstd_compressor import ZstdCompressor
from .stdlib_compressors import GzipCompressor, Bzip2Compressor
from .registry import (
    CompressorRegistry,
    CompressorInfo,
    UnknownCompressorError,
    get_compressor_registry,
)

__all__ = [
    'Compressor',
    'LZ4Compressor',
    'ZstdCompressor',
    'GzipCompressor',
    'Bzip2Compressor',
    'CompressorRegistry',
    'CompressorInfo',
    'UnknownCompressorError',
    'get_compressor_registry',
]
