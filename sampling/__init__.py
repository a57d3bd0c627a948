"""
Block sampling for the compression ratio estimator.
"""

from .sample_size import sample_size
from .block_sampler import BlockSampler

__all__ = [
    'sample_size',
    'BlockSampler',
]
