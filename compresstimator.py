"""
Compresstimator
===============

Estimates how compressible a file or stream is without compressing all
of it. A deterministic stride of fixed-size blocks, sized for a chosen
margin of error and confidence level, is fed through a fast compressor
and the compressed-to-original ratio is extrapolated from those blocks.

Usage:
    from compresstimator import Estimator

    estimator = Estimator().with_margin_of_error(0.05)
    ratio = estimator.estimate_file("big_file.dat")
"""

import io
import logging
import os
from dataclasses import replace
from typing import BinaryIO, Optional, Union

from base_classes import ByteCounter, ConfidenceLevel, SampleReport
from compressors import Compressor, get_compressor_registry
from estimator_configs import EstimatorConfig
from sampling import BlockSampler

__version__ = "1.0.0"

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, os.PathLike]


def _is_path(source) -> bool:
    return isinstance(source, (str, bytes, os.PathLike))


class Estimator:
    """
    Compression ratio estimator with a configured block size, margin of
    error and confidence level.

    Ratios are compressed size over original size, so smaller is better
    and 1.0 means no benefit. Configuration mutators return the estimator
    for chaining::

        est = Estimator().with_block_size(8192).with_confidence(ConfidenceLevel.C99)
    """

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config if config is not None else EstimatorConfig()
        # Fail fast on an unknown compressor or a level it cannot use
        self._make_compressor(self.config)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def with_block_size(self, block_size: int) -> "Estimator":
        """Use block_size bytes per sample; ideally a multiple of the filesystem block size."""
        self.config = replace(self.config, block_size=block_size)
        return self

    def with_margin_of_error(self, margin_of_error: float) -> "Estimator":
        """Set the acceptable error, a fraction strictly between 0 and 1."""
        self.config = replace(self.config, margin_of_error=margin_of_error)
        return self

    def with_confidence(self, confidence: ConfidenceLevel) -> "Estimator":
        self.config = replace(self.config, confidence=confidence)
        return self

    def with_compressor(self, algorithm: str, level: Optional[int] = None) -> "Estimator":
        """Switch to another registered compressor, at its default level unless given."""
        if level is None:
            level = get_compressor_registry().get(algorithm).compressor_class.DEFAULT_LEVEL
        config = replace(self.config, algorithm=algorithm, compression_level=level)
        self._make_compressor(config)
        self.config = config
        return self

    @staticmethod
    def _make_compressor(config: EstimatorConfig) -> Compressor:
        return get_compressor_registry().create(config.algorithm, config.compression_level)

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------

    def estimate_report(self, stream: BinaryIO, length: int) -> SampleReport:
        """
        Sample length bytes from the current position of stream.

        Returns:
            SampleReport describing the bytes read and their compressed size
        """
        config = self.config
        compressor = self._make_compressor(config)
        if length == 0:
            return SampleReport(total_length=0, block_size=config.block_size, blocks=0,
                                samples=0, exhaustive=True)

        sampler = BlockSampler(config)
        output = ByteCounter()
        with compressor.open(output) as encoder:
            report = sampler.run(stream, length, encoder)
        report.compressed_bytes = output.written

        logger.debug(
            f"Estimated ratio {report.ratio:.4f} from {report.bytes_read} of {length} bytes "
            f"({'exhaustive' if report.exhaustive else f'{report.samples} samples'}, {compressor!r})"
        )
        return report

    def estimate(self, stream: BinaryIO, length: int) -> float:
        """
        Estimate the compression ratio of the seekable stream holding length
        bytes from its current position.

        Returns:
            Ratio in [0, 1]; 1.0 for empty input
        """
        return self.estimate_report(stream, length).ratio

    def estimate_auto_length(self, stream: BinaryIO) -> float:
        """Estimate the ratio of everything from the current position to the end of stream."""
        position = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(position, io.SEEK_SET)
        return self.estimate(stream, end - position)

    def estimate_file(self, path: PathLike) -> float:
        """Estimate the ratio of a file, taking its length from the filesystem."""
        with open(path, 'rb') as f:
            length = os.fstat(f.fileno()).st_size
            return self.estimate(f, length)

    def estimate_file_len(self, path: PathLike, length: int) -> float:
        """Estimate the ratio of a file whose length is already known."""
        with open(path, 'rb') as f:
            return self.estimate(f, length)

    def ground_truth(self, stream: BinaryIO) -> float:
        """
        Exhaustively compress the rest of stream and return the achieved ratio.

        Only meant for validating estimates; reads everything.
        """
        config = self.config
        chunk = stream.read(config.block_size)
        if not chunk:
            return 1.0

        compressor = self._make_compressor(config)
        output = ByteCounter()
        read_bytes = 0
        # Same write sizes as the sampler so both paths agree on fully read input
        with compressor.open(output) as encoder:
            while chunk:
                encoder.write(chunk)
                read_bytes += len(chunk)
                chunk = stream.read(config.block_size)

        ratio = min(output.written / read_bytes, 1.0)
        logger.debug(f"Exhaustive ratio {ratio:.4f} over {read_bytes} bytes")
        return ratio

    def ground_truth_file(self, path: PathLike) -> float:
        with open(path, 'rb') as f:
            return self.ground_truth(f)

    # ------------------------------------------------------------------
    # Path-or-stream entry points
    # ------------------------------------------------------------------

    def estimate_compression_ratio(self, source: Union[PathLike, BinaryIO],
                                   known_length: Optional[int] = None) -> float:
        """Estimate the ratio of a path or a seekable binary stream."""
        if _is_path(source):
            if known_length is None:
                return self.estimate_file(source)
            return self.estimate_file_len(source, known_length)
        if known_length is None:
            return self.estimate_auto_length(source)
        return self.estimate(source, known_length)

    def exhaustive_compression_ratio(self, source: Union[PathLike, BinaryIO]) -> float:
        """Compress all of a path or stream and return the exact ratio."""
        if _is_path(source):
            return self.ground_truth_file(source)
        return self.ground_truth(source)


def estimate_compression_ratio(source: Union[PathLike, BinaryIO],
                               known_length: Optional[int] = None,
                               config: Optional[EstimatorConfig] = None) -> float:
    """Estimate a compression ratio with a one-off estimator."""
    return Estimator(config).estimate_compression_ratio(source, known_length)


def exhaustive_compression_ratio(source: Union[PathLike, BinaryIO],
                                 config: Optional[EstimatorConfig] = None) -> float:
    """Compute the exact compression ratio with a one-off estimator."""
    return Estimator(config).exhaustive_compression_ratio(source)
