"""
CLI tools for the histogram.

This module provides the command-line interface for building a histogram
from samples and clustering it.
"""

from unit_histogram.cli.argument_parser import parse_args
from unit_histogram.cli.display import (
    display_clusters,
    display_configuration,
    display_histogram_summary,
)

__all__ = [
    "parse_args",
    "display_configuration",
    "display_histogram_summary",
    "display_clusters",
]
