"""
Estimator Configurations
========================

Validated configuration values for the compression ratio estimator and
pre-configured settings for common trade-offs between speed and accuracy.
"""

from dataclasses import dataclass
import logging

from base_classes import ConfidenceLevel

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 4096


@dataclass(frozen=True)
class EstimatorConfig:
    """Configuration settings for a compression ratio estimate"""

    # Sampling settings
    block_size: int = DEFAULT_BLOCK_SIZE  # should be a multiple of the filesystem block size
    margin_of_error: float = 0.10
    confidence: ConfidenceLevel = ConfidenceLevel.C95

    # Compressor settings
    algorithm: str = 'lz4'
    compression_level: int = 1

    def __post_init__(self) -> None:
        """Validate configuration parameters"""
        if isinstance(self.block_size, bool) or not isinstance(self.block_size, int) or self.block_size <= 0:
            raise ValueError("block_size must be a positive integer")
        if not 0.0 < self.margin_of_error < 1.0:
            raise ValueError("margin_of_error must be between 0 and 1 (exclusive)")
        if not isinstance(self.confidence, ConfidenceLevel):
            raise ValueError(f"Invalid confidence: {self.confidence!r}")
        if not self.algorithm:
            raise ValueError("algorithm cannot be empty")
        # The range depends on the compressor and is checked when it is created
        if isinstance(self.compression_level, bool) or not isinstance(self.compression_level, int):
            raise ValueError("compression_level must be an integer")


class ConfigPresets:
    """Pre-configured settings for common use cases"""

    @staticmethod
    def default() -> EstimatorConfig:
        """4KiB blocks, ±10% at 95% confidence"""
        return EstimatorConfig()

    @staticmethod
    def fast() -> EstimatorConfig:
        """
        Fewer, larger reads for very large inputs
        - 16KiB blocks
        - ±15% at 90% confidence
        """
        return EstimatorConfig(
            block_size=16 * 1024,
            margin_of_error=0.15,
            confidence=ConfidenceLevel.C90,
        )

    @staticmethod
    def accurate() -> EstimatorConfig:
        """
        Tighter estimate at the cost of more reads
        - ±5% at 99% confidence
        """
        return EstimatorConfig(
            margin_of_error=0.05,
            confidence=ConfidenceLevel.C99,
        )

    @staticmethod
    def reference() -> EstimatorConfig:
        """Fixed settings of the original command-line tool (±15% at 90%, lz4 level 1)"""
        return EstimatorConfig(
            margin_of_error=0.15,
            confidence=ConfidenceLevel.C90,
            algorithm='lz4',
            compression_level=1,
        )


PRESETS = {
    'default': ConfigPresets.default,
    'fast': ConfigPresets.fast,
    'accurate': ConfigPresets.accurate,
    'reference': ConfigPresets.reference,
}


def get_preset(name: str) -> EstimatorConfig:
    """Return the preset configuration called name."""
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset: {name} (choose from {', '.join(sorted(PRESETS))})") from None
    logger.debug(f"Using preset configuration '{name}'")
    return factory()
