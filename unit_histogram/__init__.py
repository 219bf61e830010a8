"""
Unit Histogram.

A fixed-resolution histogram over the normalized interval [0, 1] with
incremental accumulation, bulk transforms, rescaling that carries rounding
error from bin to bin, and deterministic one-dimensional k-means over its
bins.

Key design decisions:
  - Bin i represents the value i / (N - 1); samples are clamped to [0, 1]
    and counted in the nearest bin (halves round up).
  - The histogram owns a private copy of its counts so `total` always
    equals the sum of the bins.
  - K-means seeds from equal-width slices of the bin range, breaks exact
    ties by a fixed policy and stops after at most 20 rounds, so identical
    input always gives identical means.
"""

from unit_histogram.core.histogram import Histogram
from unit_histogram.core.kmeans import KMeansConfig, KMeansResult, compute_kmeans
from unit_histogram.core.exceptions import (
    ArithmeticDegenerateError,
    DegenerateInputError,
    HistogramError,
    InsufficientDataError,
    InvalidClusterCountError,
    InvalidConfigurationError,
)

__all__ = [
    "Histogram",
    "KMeansConfig",
    "KMeansResult",
    "compute_kmeans",
    "HistogramError",
    "InvalidConfigurationError",
    "InvalidClusterCountError",
    "DegenerateInputError",
    "InsufficientDataError",
    "ArithmeticDegenerateError",
]
