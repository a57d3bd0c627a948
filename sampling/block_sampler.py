"""
Block sampling of seekable streams.

Decides between reading a whole stream and reading an evenly spaced,
deterministic subset of fixed-size blocks, and feeds the chosen bytes
into a compressor encoder.
"""

import io
import logging
from typing import BinaryIO, List

from base_classes import SampleReport, ShortReadError
from estimator_configs import EstimatorConfig
from sampling.sample_size import sample_size

logger = logging.getLogger(__name__)

# Sampling only pays off when it touches well under this fraction of the input
EXHAUSTIVE_FACTOR = 4


def _readinto_exact(stream: BinaryIO, view: memoryview) -> int:
    """Fill view from stream, returning the number of bytes read before EOF."""
    filled = 0
    while filled < len(view):
        n = stream.readinto(view[filled:])
        if not n:
            break
        filled += n
    return filled


class BlockSampler:
    """
    Feeds either all of a stream or a stride of its blocks to an encoder.

    The stride depends only on the length and configuration, so repeated
    runs over the same input always read the same offsets.
    """

    def __init__(self, config: EstimatorConfig):
        self.config = config

    def _counts(self, length: int):
        blocks = length // self.config.block_size
        samples = sample_size(blocks, self.config.margin_of_error, self.config.confidence)
        return blocks, samples

    def _is_exhaustive(self, length: int, samples: int) -> bool:
        return samples == 0 or length < samples * self.config.block_size * EXHAUSTIVE_FACTOR

    def plan(self, length: int) -> List[int]:
        """
        Offsets (relative to the start position) of the blocks to read.

        An empty list means the whole input would be read instead.
        """
        if length < 0:
            raise ValueError("length cannot be negative")
        blocks, samples = self._counts(length)
        if self._is_exhaustive(length, samples):
            return []
        step = self.config.block_size * (blocks // samples)
        return [step * i for i in range(samples)]

    def run(self, stream: BinaryIO, length: int, encoder: BinaryIO) -> SampleReport:
        """
        Read from the current position of stream and write into encoder.

        Args:
            stream: Readable, seekable binary stream
            length: Bytes available from the current position
            encoder: Writable compressor encoder

        Returns:
            SampleReport with everything but the compressed size filled in

        Raises:
            ShortReadError: If the stream holds fewer bytes than length claims
        """
        if length < 0:
            raise ValueError("length cannot be negative")

        block_size = self.config.block_size
        blocks, samples = self._counts(length)
        report = SampleReport(
            total_length=length,
            block_size=block_size,
            blocks=blocks,
            samples=samples,
        )
        buf = bytearray(block_size)
        view = memoryview(buf)

        if self._is_exhaustive(length, samples):
            report.exhaustive = True
            logger.debug(f"Reading all {length} bytes ({blocks} blocks, {samples} samples needed)")
            remaining = length
            while remaining > 0:
                offset = length - remaining
                chunk = view[:min(remaining, block_size)]
                n = _readinto_exact(stream, chunk)
                if n < len(chunk):
                    raise ShortReadError(offset, len(chunk), n)
                encoder.write(chunk)
                report.bytes_read += n
                remaining -= n
            return report

        start = stream.tell()
        step = block_size * (blocks // samples)
        logger.debug(f"Sampling {samples} of {blocks} blocks, stride {step} bytes")
        for i in range(samples):
            offset = step * i
            stream.seek(start + offset, io.SEEK_SET)
            n = _readinto_exact(stream, view)
            if n < block_size:
                raise ShortReadError(offset, block_size, n)
            encoder.write(buf)
            report.bytes_read += block_size
        return report
