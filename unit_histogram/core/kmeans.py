"""
One-dimensional k-means over the bins of a [0, 1] histogram.

  0. seed each group at the non-empty bin nearest to the middle of its
     equal-width slice of the bin range;
  1. assign every bin to the closest group mean;
  2. move each group to the count-weighted average of its bins;
  3. repeat until no mean moves, or the iteration cap is reached.

Bins are weighted by their counts only in step 2; assignment looks at bin
positions alone. A group that ends up with no weight keeps its previous
mean.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from unit_histogram.common.utils import log_analysis, log_debug
from unit_histogram.config import (
    APPROX_EPSILON_MULTIPLIER,
    DEFAULT_CLUSTER_COUNT,
    KMEANS_MAX_ITERATIONS,
)
from unit_histogram.core.exceptions import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidClusterCountError,
)
from unit_histogram.utils.validation import (
    validate_cluster_count,
    validate_max_iterations,
)

if TYPE_CHECKING:
    from unit_histogram.core.histogram import Histogram

# Smallest positive (subnormal) double
SMALLEST_DOUBLE = sys.float_info.min * sys.float_info.epsilon


@dataclass
class KMeansConfig:
    """Configuration for histogram k-means."""

    k: int = DEFAULT_CLUSTER_COUNT  # Number of clusters
    max_iterations: int = KMEANS_MAX_ITERATIONS  # Assignment/update rounds, at most 20
    enable_debug: bool = False  # Log every iteration

    def __post_init__(self):
        if not isinstance(self.k, (int, np.integer)) or isinstance(self.k, bool):
            raise InvalidClusterCountError(f"k must be an integer, got {type(self.k).__name__}")
        if self.k <= 0:
            raise InvalidClusterCountError(f"k must be > 0, got {self.k}")
        self.max_iterations = validate_max_iterations(self.max_iterations)


@dataclass
class KMeansResult:
    """Result of a k-means run."""

    means: list[float]  # Final group means, in seeding order
    assignments: np.ndarray  # Group index of every bin after the last round
    iterations: int  # Rounds executed
    converged: bool  # False when the iteration cap stopped the loop


def approximately(a: float, b: float) -> bool:
    """True when a and b differ by no more than floating-point noise."""
    tolerance = max(
        SMALLEST_DOUBLE * max(abs(a), abs(b)),
        SMALLEST_DOUBLE * APPROX_EPSILON_MULTIPLIER,
    )
    return abs(b - a) < tolerance


def index_of_nearest_non_empty(counts: np.ndarray, start: int) -> Optional[int]:
    """
    Nearest index to start whose count is positive.

    Looks at start - d before start + d for d = 0, 1, 2, ... so the lower
    bin wins when two are equally far. Returns None for an all-empty array.
    """
    size = len(counts)
    distance = 0
    while start - distance >= 0 or start + distance < size:
        below = start - distance
        if below >= 0 and counts[below] > 0:
            return below
        above = start + distance
        if above < size and counts[above] > 0:
            return above
        distance += 1
    return None


def initial_group_means(counts: np.ndarray, values: np.ndarray, k: int) -> np.ndarray:
    """
    Seed k group means from the middles of k equal-width slices of the bins.

    Every group must start on its own bin.

    Raises:
        DegenerateInputError: No bin holds any data.
        InsufficientDataError: Two slices reach the same non-empty bin.
    """
    interval = len(counts) // k
    means = np.empty(k, dtype=float)
    seed_indices = []
    for r in range(k):
        index = index_of_nearest_non_empty(counts, r * interval + interval // 2)
        if index is None:
            raise DegenerateInputError("Cannot compute k-means with no data")
        seed_indices.append(index)
        means[r] = values[index]

    if len(set(seed_indices)) < k:
        raise InsufficientDataError(
            f"k-means seeding found only {len(set(seed_indices))} distinct non-empty bins "
            f"for k={k} (seed bins {seed_indices})"
        )
    return means


def break_tie(tied_groups: Sequence[int]) -> int:
    """
    Choose among groups at exactly the same distance from a bin.

    The highest even group index wins; with no even index among them, the
    lowest index wins.
    """
    even = [g for g in tied_groups if g % 2 == 0]
    if even:
        return int(max(even))
    return int(min(tied_groups))


def nearest_group_index(value: float, group_means: np.ndarray) -> int:
    """Index of the group mean closest to value."""
    distances = np.abs(group_means - value)
    tied = np.flatnonzero(distances == distances.min())
    return break_tie(tied)


def update_groups(values: np.ndarray, group_means: np.ndarray) -> np.ndarray:
    """Assign every bin to its nearest group."""
    return np.array([nearest_group_index(v, group_means) for v in values], dtype=np.int64)


def mean_for_group(
    counts: np.ndarray,
    values: np.ndarray,
    assignments: np.ndarray,
    group_index: int,
    default_mean: float,
) -> float:
    """Count-weighted mean of the bins assigned to group_index, or default_mean if they are all empty."""
    members = assignments == group_index
    weights = np.where(members, counts, 0)
    count = int(weights.sum())
    if count == 0:
        return float(default_mean)
    return float(np.sum(weights * values) / count)


def compute_kmeans(histogram: "Histogram", config: Optional[KMeansConfig] = None) -> KMeansResult:
    """
    Cluster the bins of histogram into config.k groups.

    Works on a snapshot of the counts; the histogram is not modified.

    Raises:
        InvalidClusterCountError: k is larger than the number of bins.
        DegenerateInputError: Every bin is empty.
        InsufficientDataError: Fewer non-empty bins than k, or seeding
            reaches fewer than k distinct bins.
        ArithmeticDegenerateError: The histogram has a single bin.
    """
    config = config or KMeansConfig()
    counts = np.array(histogram.data, dtype=np.int64)
    k = validate_cluster_count(config.k, counts.size)

    non_empty = int(np.count_nonzero(counts))
    if non_empty == 0:
        raise DegenerateInputError("Cannot compute k-means with no data")
    if non_empty < k:
        raise InsufficientDataError(
            f"k-means needs at least {k} non-empty bins, found {non_empty}"
        )

    values = histogram.bin_values()
    group_means = initial_group_means(counts, values, k)

    if config.enable_debug:
        log_analysis(f"[KMeans] k={k}, bins={counts.size}, non-empty={non_empty}")
        log_debug(f"[KMeans] Seeds: {group_means.tolist()}")

    iterations = 0
    converged = False
    while True:
        changed = False
        assignments = update_groups(values, group_means)
        for group_index in range(k):
            new_mean = mean_for_group(
                counts, values, assignments, group_index, group_means[group_index]
            )
            changed |= not approximately(new_mean, group_means[group_index])
            group_means[group_index] = new_mean
        iterations += 1

        if config.enable_debug:
            log_debug(f"[KMeans] Iteration {iterations}: means={group_means.tolist()}, changed={changed}")

        if not changed:
            converged = True
            break
        if iterations >= config.max_iterations:
            break

    if config.enable_debug and not converged:
        log_debug(f"[KMeans] Stopped at iteration cap ({config.max_iterations})")

    return KMeansResult(
        means=[float(m) for m in group_means],
        assignments=assignments,
        iterations=iterations,
        converged=converged,
    )


__all__ = [
    "KMeansConfig",
    "KMeansResult",
    "SMALLEST_DOUBLE",
    "approximately",
    "break_tie",
    "compute_kmeans",
    "index_of_nearest_non_empty",
    "initial_group_means",
    "mean_for_group",
    "nearest_group_index",
    "update_groups",
]
