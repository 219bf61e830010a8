"""
Histogram K-Means Main Program

Builds a [0, 1] histogram from samples and clusters its bins:
- Loads samples from the command line or a CSV file
- Accumulates them into a fixed number of bins, optionally rescaled
- Displays the occupied range and the k-means cluster means
"""

import sys
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from unit_histogram.common.utils import configure_windows_stdio

# Fix encoding issues on Windows for interactive CLI runs only
configure_windows_stdio()

from colorama import init as colorama_init

from unit_histogram.cli import (
    display_clusters,
    display_configuration,
    display_histogram_summary,
    parse_args,
)
from unit_histogram.common.utils import (
    log_error,
    log_info,
    log_progress,
    log_success,
    log_warn,
)
from unit_histogram.core.exceptions import HistogramError
from unit_histogram.core.histogram import Histogram
from unit_histogram.core.kmeans import KMeansConfig, compute_kmeans

colorama_init(autoreset=True)


def load_samples(values: Optional[Sequence[float]], file: Optional[str], column: Optional[str]) -> np.ndarray:
    """
    Load sample values from the command line or a CSV file.

    Non-numeric and missing CSV cells are dropped with a warning.

    Args:
        values: Values given with --values
        file: CSV path given with --file
        column: CSV column name; the first column when None

    Returns:
        Float array of samples
    """
    if values is not None:
        return np.asarray(values, dtype=float)

    df = pd.read_csv(file)
    if len(df.columns) == 0:
        raise ValueError(f"No columns found in {file}")

    column = column or df.columns[0]
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in {file}")

    numeric = pd.to_numeric(df[column], errors="coerce")
    dropped = int(numeric.isna().sum())
    if dropped:
        log_warn(f"Dropped {dropped} non-numeric value(s) from column '{column}'")
    return numeric.dropna().to_numpy(dtype=float)


class HistogramAnalyzer:
    """
    Histogram K-Means Orchestrator.

    Loads samples, builds the histogram and runs the clustering for the
    parsed command-line arguments.
    """

    def __init__(self, args):
        self.args = args

    def get_kmeans_config(self) -> KMeansConfig:
        """Create KMeansConfig from arguments."""
        return KMeansConfig(
            k=self.args.k,
            max_iterations=self.args.max_iterations,
            enable_debug=self.args.debug,
        )

    def build_histogram(self, samples: np.ndarray) -> Histogram:
        """Accumulate samples and apply the optional rescale."""
        histogram = Histogram.from_samples(samples, self.args.bins)
        if self.args.scale is not None:
            log_progress(f"Scaling counts by {self.args.scale}...")
            histogram.scale(self.args.scale)
        return histogram

    def run(self) -> int:
        """Run the analysis. Returns the process exit code."""
        try:
            samples = load_samples(self.args.values, self.args.file, self.args.column)
            source = self.args.file or "command line"
            log_info(f"Loaded {len(samples)} sample(s) from {source}")
            display_configuration(self.args, len(samples))

            log_progress("Building histogram...")
            histogram = self.build_histogram(samples)
            display_histogram_summary(histogram, self.args.threshold, self.args.show_bins)

            log_progress("Computing k-means...")
            result = compute_kmeans(histogram, self.get_kmeans_config())
            display_clusters(result)
        except (HistogramError, OSError, ValueError) as e:
            log_error(f"Analysis failed: {e}")
            return 1

        log_success("Done")
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    return HistogramAnalyzer(args).run()


if __name__ == "__main__":
    sys.exit(main())
