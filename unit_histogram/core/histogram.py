"""
Fixed-resolution histogram over the normalized interval [0, 1].

Bin i stands for the value i / (N - 1); a sample is counted in the bin
nearest to it after clamping to [0, 1]. Besides accumulation the histogram
supports bulk transforms, rescaling with carried rounding error, first/last
bin range queries and one-dimensional k-means over its bins.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, Union

import numpy as np
import pandas as pd

from unit_histogram.config import (
    DEFAULT_THRESHOLD,
    KMEANS_MAX_ITERATIONS,
    MIN_SCAN_START_INDEX,
    RANGE_NOT_FOUND,
)
from unit_histogram.core.exceptions import (
    ArithmeticDegenerateError,
    InvalidConfigurationError,
)
from unit_histogram.core.kmeans import KMeansConfig, compute_kmeans
from unit_histogram.utils.validation import (
    validate_bin_count,
    validate_counts,
    validate_sample,
    validate_samples,
    validate_scale_factor,
)


# Largest count a bin can hold
MAX_COUNT = int(np.iinfo(np.int64).max)


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves going up (never to even)."""
    # floor(x + 0.5) rounds 0.49999999999999994 up to 1
    whole = math.floor(x)
    return int(whole) + (1 if x - whole >= 0.5 else 0)


class Histogram:
    """
    Integer counts over N bins spanning [0, 1].

    Args:
        bins: Either the number of bins (all counts start at zero) or an
            existing sequence of non-negative integer counts. A sequence is
            copied, so later changes to it do not reach the histogram.
    """

    def __init__(self, bins: Union[int, Iterable[int], np.ndarray]):
        if isinstance(bins, (int, np.integer)):
            self._bins = np.zeros(validate_bin_count(bins), dtype=np.int64)
            self._total = 0
        else:
            self._bins = validate_counts(bins)
            self._total = int(self._bins.sum())

    @classmethod
    def from_samples(cls, values: Iterable[float], bin_count: int) -> "Histogram":
        """Build a histogram of bin_count bins and accumulate values into it."""
        histogram = cls(validate_bin_count(bin_count))
        histogram.add_samples(values)
        return histogram

    # ------------------------------------------------------------------
    # Container
    # ------------------------------------------------------------------

    @property
    def total(self) -> int:
        """Sum of all bin counts."""
        return self._total

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the bin counts."""
        view = self._bins.view()
        view.flags.writeable = False
        return view

    @property
    def bin_count(self) -> int:
        return int(self._bins.size)

    def __len__(self) -> int:
        return self.bin_count

    def __repr__(self) -> str:
        return f"Histogram(bins={self.bin_count}, total={self._total})"

    def reset(self) -> None:
        """Zero every bin and the total."""
        self._bins[:] = 0
        self._total = 0

    def to_series(self) -> pd.Series:
        """Counts as a pandas Series indexed by bin value."""
        if self.bin_count == 1:
            index = [0.0]
        else:
            index = self.bin_values()
        return pd.Series(
            self._bins.copy(),
            index=pd.Index(index, name="value"),
            name="count",
        )

    # ------------------------------------------------------------------
    # Address mapping
    # ------------------------------------------------------------------

    def get_address(self, value: float) -> int:
        """Index of the bin nearest to value, after clamping it to [0, 1]."""
        clamped = min(1.0, max(0.0, validate_sample(value)))
        return round_half_up(clamped * (self.bin_count - 1))

    def get_value(self, index: int) -> float:
        """
        Value represented by bin index, i.e. index / (N - 1).

        Raises:
            ArithmeticDegenerateError: The histogram has a single bin.
            IndexError: index is outside [0, N - 1].
        """
        if self.bin_count == 1:
            raise ArithmeticDegenerateError("get_value is undefined for a single-bin histogram")
        if not 0 <= index < self.bin_count:
            raise IndexError(f"bin index {index} out of range [0, {self.bin_count - 1}]")
        return index / (self.bin_count - 1)

    def bin_values(self) -> np.ndarray:
        """get_value for every bin, as a float array."""
        if self.bin_count == 1:
            raise ArithmeticDegenerateError("bin values are undefined for a single-bin histogram")
        return np.arange(self.bin_count, dtype=float) / (self.bin_count - 1)

    # ------------------------------------------------------------------
    # Accumulation and bulk transforms
    # ------------------------------------------------------------------

    def add_data(self, value: float) -> None:
        """Count one sample."""
        self._bins[self.get_address(value)] += 1
        self._total += 1

    def add_samples(self, values: Iterable[float]) -> None:
        """Count many samples at once; same mapping as add_data."""
        samples = validate_samples(values)
        if samples.size == 0:
            return
        clamped = np.clip(samples, 0.0, 1.0)
        scaled = clamped * (self.bin_count - 1)
        whole = np.floor(scaled)
        addresses = (whole + (scaled - whole >= 0.5)).astype(np.int64)
        self._bins += np.bincount(addresses, minlength=self.bin_count)
        self._total += int(samples.size)

    def apply(self, func: Callable[[int], int]) -> None:
        """
        Replace every count c with func(c).

        func must return non-negative integers. All results are computed
        before any bin is written, so a bad result leaves the histogram as
        it was.
        """
        new_counts = []
        for count in self._bins.tolist():
            result = func(count)
            if not isinstance(result, (int, np.integer)) or isinstance(result, bool):
                raise InvalidConfigurationError(
                    f"apply function must return an integer, got {type(result).__name__}"
                )
            if result < 0:
                raise InvalidConfigurationError(
                    f"apply function must return a non-negative count, got {result}"
                )
            if result > MAX_COUNT:
                raise InvalidConfigurationError(
                    f"apply function result {result} does not fit in a bin (max {MAX_COUNT})"
                )
            new_counts.append(int(result))

        self._total += sum(new_counts) - sum(self._bins.tolist())
        self._bins[:] = np.array(new_counts, dtype=np.int64)

    def scale(self, factor: float) -> None:
        """
        Multiply every count by factor, carrying each bin's rounding error
        into the next bin so the scaled total stays within 0.5 of
        factor * total.

        Raises:
            InvalidConfigurationError: A scaled count does not fit in a bin.
                The histogram is left unchanged.
        """
        factor = validate_scale_factor(factor)
        scaled = np.empty_like(self._bins)
        error = 0.0
        for i, count in enumerate(self._bins.tolist()):
            target = count * factor + error
            if not math.isfinite(target) or target >= MAX_COUNT:
                raise InvalidConfigurationError(
                    f"scaled count {target} of bin {i} does not fit in a bin (max {MAX_COUNT})"
                )
            rounded = round_half_up(target)
            scaled[i] = rounded
            error = target - rounded
        self._bins[:] = scaled
        self._total = int(self._bins.sum())

    # ------------------------------------------------------------------
    # Range queries
    # ------------------------------------------------------------------

    def min(self, threshold: int = DEFAULT_THRESHOLD, *, include_first: bool = False) -> float:
        """
        Value of the lowest bin holding more than threshold samples.

        Bin 0 is skipped unless include_first is set. Returns -1 when no
        bin qualifies.
        """
        start = 0 if include_first else MIN_SCAN_START_INDEX
        for i in range(start, self.bin_count):
            if self._bins[i] > threshold:
                return self.get_value(i)
        return RANGE_NOT_FOUND

    def max(self, threshold: int = DEFAULT_THRESHOLD) -> float:
        """Value of the highest bin holding more than threshold samples, or -1."""
        for i in range(self.bin_count - 1, -1, -1):
            if self._bins[i] > threshold:
                return self.get_value(i)
        return RANGE_NOT_FOUND

    # ------------------------------------------------------------------
    # Clustering
    # ------------------------------------------------------------------

    def kmeans(
        self,
        k: int,
        *,
        max_iterations: int = KMEANS_MAX_ITERATIONS,
        enable_debug: bool = False,
    ) -> list[float]:
        """Cluster means of the bins, in seeding order. See compute_kmeans."""
        config = KMeansConfig(k=k, max_iterations=max_iterations, enable_debug=enable_debug)
        return compute_kmeans(self, config).means


__all__ = ["MAX_COUNT", "Histogram", "round_half_up"]
