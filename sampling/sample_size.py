"""
Sample size calculation for block sampling.

Cochran's formula with the finite population correction, assuming the
worst-case proportion of 0.5.
"""

import math

from base_classes import ConfidenceLevel


def sample_size(population: int, margin_of_error: float, confidence: ConfidenceLevel) -> int:
    """
    Minimum number of blocks to sample from a population of blocks.

    Args:
        population: Number of whole blocks available
        margin_of_error: Acceptable error as a fraction in (0, 1)
        confidence: Confidence level of the estimate

    Returns:
        Number of blocks to read, 0 for an empty population
    """
    if population < 0:
        raise ValueError("population cannot be negative")
    if not 0.0 < margin_of_error < 1.0:
        raise ValueError("margin_of_error must be between 0 and 1 (exclusive)")
    if population == 0:
        return 0

    n_naught = 0.25 * (confidence.z_score / margin_of_error) ** 2
    return math.ceil((population * n_naught) / (n_naught + population - 1))
