"""
Display utilities for the histogram CLI.

This module provides formatted display functions for the run configuration,
the histogram contents and the k-means result.
"""

import argparse

from colorama import Fore

from unit_histogram.common.utils import (
    color_text,
    format_bar,
    format_value,
    log_analysis,
    log_data,
)
from unit_histogram.core.histogram import Histogram
from unit_histogram.core.kmeans import KMeansResult


def display_configuration(args: argparse.Namespace, sample_count: int) -> None:
    """
    Display configuration information.

    Args:
        args: Parsed command-line arguments
        sample_count: Number of samples loaded
    """
    log_analysis("=" * 80)
    log_analysis("HISTOGRAM K-MEANS")
    log_analysis("=" * 80)
    log_analysis("Configuration:")
    log_data(f"  Samples: {sample_count}")
    log_data(f"  Bins: {args.bins}")
    log_data(f"  K: {args.k}")
    log_data(f"  Threshold: {args.threshold}")
    log_data(f"  Scale: {args.scale if args.scale is not None else 'none'}")


def display_histogram_summary(histogram: Histogram, threshold: int, show_bins: bool = False) -> None:
    """
    Display total and occupied range of the histogram.

    Args:
        histogram: Histogram to summarize
        threshold: Count a bin must exceed to count as occupied
        show_bins: Also print every non-empty bin with a bar
    """
    log_analysis("\n" + "-" * 80)
    log_analysis("HISTOGRAM")
    log_analysis("-" * 80)
    log_data(f"Bins: {len(histogram)}")
    log_data(f"Total: {histogram.total}")
    log_data(f"Min: {format_value(histogram.min(threshold))}")
    log_data(f"Max: {format_value(histogram.max(threshold))}")

    if not show_bins:
        return

    series = histogram.to_series()
    max_count = int(series.max())
    for value, count in series[series > 0].items():
        bar = color_text(format_bar(int(count), max_count), Fore.GREEN)
        log_data(f"  {value:.4f} | {int(count):>8} | {bar}")


def display_clusters(result: KMeansResult) -> None:
    """
    Display k-means means in cluster order.

    Args:
        result: Result of compute_kmeans
    """
    log_analysis("\n" + "-" * 80)
    log_analysis("CLUSTERS")
    log_analysis("-" * 80)

    if result.converged:
        status = color_text(f"converged after {result.iterations} iteration(s)", Fore.GREEN)
    else:
        status = color_text(f"stopped at iteration cap ({result.iterations})", Fore.YELLOW)
    log_data(f"Status: {status}")

    for index, mean in enumerate(result.means):
        members = int((result.assignments == index).sum())
        log_data(f"  k{index}: mean={format_value(mean)} | bins={members}")
