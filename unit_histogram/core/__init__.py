"""Core histogram and clustering modules."""

from unit_histogram.core.histogram import Histogram, round_half_up
from unit_histogram.core.kmeans import (
    KMeansConfig,
    KMeansResult,
    approximately,
    compute_kmeans,
)

__all__ = [
    "Histogram",
    "round_half_up",
    "KMeansConfig",
    "KMeansResult",
    "approximately",
    "compute_kmeans",
]
