"""
Command-line argument parser for histogram k-means.

This module defines all command-line options and their default values.
"""

import argparse
from typing import Optional, Sequence

from unit_histogram.config import (
    DEFAULT_BIN_COUNT,
    DEFAULT_CLUSTER_COUNT,
    DEFAULT_SAMPLE_COLUMN,
    DEFAULT_THRESHOLD,
    KMEANS_MAX_ITERATIONS,
)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for histogram k-means."""
    parser = argparse.ArgumentParser(
        description="Histogram K-Means over samples in [0, 1]",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Sample source
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--values",
        type=float,
        nargs="+",
        help="Sample values (clamped to [0, 1])",
    )
    source.add_argument(
        "--file",
        type=str,
        help="CSV file holding the samples",
    )
    parser.add_argument(
        "--column",
        type=str,
        default=DEFAULT_SAMPLE_COLUMN,
        help="CSV column with the samples (default: first column)",
    )

    # Histogram parameters
    parser.add_argument(
        "--bins",
        type=int,
        default=DEFAULT_BIN_COUNT,
        help=f"Number of histogram bins (default: {DEFAULT_BIN_COUNT})",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help=f"Count a bin must exceed for min/max (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Rescale all counts by this factor before clustering",
    )

    # Clustering parameters
    parser.add_argument(
        "--k",
        type=int,
        default=DEFAULT_CLUSTER_COUNT,
        help=f"Number of clusters (default: {DEFAULT_CLUSTER_COUNT})",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=KMEANS_MAX_ITERATIONS,
        dest="max_iterations",
        help=f"K-means iteration cap, at most {KMEANS_MAX_ITERATIONS} (default: {KMEANS_MAX_ITERATIONS})",
    )

    # Display options
    parser.add_argument(
        "--show-bins",
        action="store_true",
        dest="show_bins",
        help="Print every non-empty bin with a text bar",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every k-means iteration",
    )

    return parser.parse_args(argv)
