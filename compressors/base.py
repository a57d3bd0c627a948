"""
Compressor capability used by the estimator.

A compressor wraps a sink in a writable encoder. Closing the encoder
finalises the compressed frame but leaves the sink open so its byte
count can still be read.
"""

import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


class Compressor(ABC):
    """Abstract base class for streaming compressors

    MIN_LEVEL and MAX_LEVEL bound the accepted levels; None leaves that
    side unbounded.
    """

    NAME = ""
    DEFAULT_LEVEL = 1
    MIN_LEVEL: Optional[int] = None
    MAX_LEVEL: Optional[int] = None
    DESCRIPTION = ""

    def __init__(self, level: Optional[int] = None):
        level = self.DEFAULT_LEVEL if level is None else level
        self.check_level(level)
        self.level = level

    @classmethod
    def check_level(cls, level: int) -> None:
        """Raise ValueError unless level is usable with this compressor."""
        name = cls.NAME or cls.__name__
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError(f"{name} compression level must be an integer, got {level!r}")
        if cls.MIN_LEVEL is not None and level < cls.MIN_LEVEL:
            raise ValueError(f"{name} compression level {level} is below the minimum of {cls.MIN_LEVEL}")
        if cls.MAX_LEVEL is not None and level > cls.MAX_LEVEL:
            raise ValueError(f"{name} compression level {level} is above the maximum of {cls.MAX_LEVEL}")

    @abstractmethod
    def open(self, sink: BinaryIO) -> BinaryIO:
        """Return a writable encoder that compresses into sink.

        The encoder is used as a context manager; closing it must finish
        the compressed stream without closing sink.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level})"
