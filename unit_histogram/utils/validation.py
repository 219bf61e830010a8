"""
Argument validation shared by the histogram container and k-means.

Every check raises an InvalidConfigurationError (a ValueError) with a
message naming the offending argument and value.
"""

from __future__ import annotations

import math
from typing import Iterable, Union

import numpy as np

from unit_histogram.config import KMEANS_MAX_ITERATIONS, MIN_BIN_COUNT
from unit_histogram.core.exceptions import (
    InvalidClusterCountError,
    InvalidConfigurationError,
)


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def validate_bin_count(bin_count) -> int:
    """Return bin_count as int, or raise if it is not an integer >= 1."""
    if not _is_integer(bin_count):
        raise InvalidConfigurationError(
            f"bin_count must be an integer, got {type(bin_count).__name__}"
        )
    if bin_count < MIN_BIN_COUNT:
        raise InvalidConfigurationError(
            f"bin_count must be at least {MIN_BIN_COUNT}, got {bin_count}"
        )
    return int(bin_count)


def validate_counts(counts: Union[Iterable[int], np.ndarray]) -> np.ndarray:
    """
    Copy a count sequence into a fresh one-dimensional int64 array.

    Float arrays are accepted only when every entry is a whole number.
    The returned array never aliases the caller's data.
    """
    arr = np.array(list(counts) if not isinstance(counts, np.ndarray) else counts, copy=True)

    if arr.ndim != 1:
        raise InvalidConfigurationError(f"counts must be one-dimensional, got {arr.ndim} dimensions")
    if arr.size < MIN_BIN_COUNT:
        raise InvalidConfigurationError("counts must contain at least one bin")

    if arr.dtype.kind == "f":
        if not np.all(np.isfinite(arr)) or not np.all(arr == np.floor(arr)):
            raise InvalidConfigurationError("counts must be whole numbers")
    elif arr.dtype.kind not in "iu":
        raise InvalidConfigurationError(f"counts must be integers, got dtype {arr.dtype}")

    if np.any(arr < 0):
        raise InvalidConfigurationError("counts must be non-negative")

    return arr.astype(np.int64)


def validate_sample(value) -> float:
    """Return value as float; NaN cannot be mapped to a bin."""
    value = float(value)
    if math.isnan(value):
        raise InvalidConfigurationError("sample value must not be NaN")
    return value


def validate_samples(values) -> np.ndarray:
    """Vector form of validate_sample."""
    arr = np.asarray(values if isinstance(values, np.ndarray) else list(values), dtype=float)
    arr = arr.reshape(-1)
    if np.any(np.isnan(arr)):
        raise InvalidConfigurationError("sample values must not be NaN")
    return arr


def validate_scale_factor(factor) -> float:
    """Return factor as float, or raise if it is negative or not finite."""
    factor = float(factor)
    if not math.isfinite(factor):
        raise InvalidConfigurationError(f"scale factor must be finite, got {factor}")
    if factor < 0:
        raise InvalidConfigurationError(f"scale factor must be >= 0, got {factor}")
    return factor


def validate_cluster_count(k, bin_count: int) -> int:
    """k must lie in [1, bin_count]."""
    if not _is_integer(k):
        raise InvalidClusterCountError(f"k must be an integer, got {type(k).__name__}")
    if k <= 0:
        raise InvalidClusterCountError(f"k must be > 0, got {k}")
    if k > bin_count:
        raise InvalidClusterCountError(
            f"k must not exceed the bin count ({bin_count}), got {k}"
        )
    return int(k)


def validate_max_iterations(max_iterations) -> int:
    if not _is_integer(max_iterations) or max_iterations < 1:
        raise InvalidConfigurationError(
            f"max_iterations must be a positive integer, got {max_iterations}"
        )
    if max_iterations > KMEANS_MAX_ITERATIONS:
        raise InvalidConfigurationError(
            f"max_iterations must not exceed {KMEANS_MAX_ITERATIONS}, got {max_iterations}"
        )
    return int(max_iterations)


__all__ = [
    "validate_bin_count",
    "validate_counts",
    "validate_sample",
    "validate_samples",
    "validate_scale_factor",
    "validate_cluster_count",
    "validate_max_iterations",
]
