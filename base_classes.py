"""
Base Classes for Compresstimator
================================

Contains core data structures shared by the sampler, the compressors
and the estimator.
"""

import io
from dataclasses import dataclass
from enum import Enum


class ConfidenceLevel(Enum):
    """Discrete statistical confidence levels and their z-scores"""
    C80 = (80, 1.28)
    C85 = (85, 1.44)
    C90 = (90, 1.65)
    C95 = (95, 1.96)
    C99 = (99, 2.58)

    @property
    def percent(self) -> int:
        return self.value[0]

    @property
    def z_score(self) -> float:
        return self.value[1]

    @classmethod
    def from_percent(cls, percent: int) -> "ConfidenceLevel":
        """Look up a level by its percentage (80, 85, 90, 95 or 99)."""
        for level in cls:
            if level.percent == percent:
                return level
        choices = ", ".join(str(level.percent) for level in cls)
        raise ValueError(f"Unsupported confidence level {percent}%, expected one of: {choices}")


class ShortReadError(OSError):
    """A read came up short of the caller-supplied length.

    offset is where the failed read started, relative to the stream position
    the estimate began at; expected is the number of bytes wanted at that
    offset and received the number actually read there.
    """

    def __init__(self, offset: int, expected: int, received: int):
        super().__init__(
            f"Short read at offset {offset}: expected {expected} bytes, got {received}"
        )
        self.offset = offset
        self.expected = expected
        self.received = received


class ByteCounter(io.RawIOBase):
    """
    Write-only sink that discards its payload and counts bytes.

    Used as the destination of a compressor so that the compressed size
    can be measured without keeping the compressed data around.
    """

    def __init__(self):
        super().__init__()
        self.written = 0

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        with memoryview(b) as view:
            size = view.nbytes
        self.written += size
        return size

    def flush(self) -> None:
        pass


@dataclass
class SampleReport:
    """What a single sampling run read and how well it compressed"""
    total_length: int
    block_size: int
    blocks: int
    samples: int
    bytes_read: int = 0
    compressed_bytes: int = 0
    exhaustive: bool = False

    @property
    def ratio(self) -> float:
        """Compressed size over bytes read, capped at 1.0."""
        if self.bytes_read == 0:
            return 1.0
        return min(self.compressed_bytes / self.bytes_read, 1.0)
