"""
Configuration constants for all components.

Organized by component:
1. Histogram Configuration
2. K-Means Configuration
3. CLI Configuration
"""

# ============================================================================
# HISTOGRAM CONFIGURATION
# ============================================================================

DEFAULT_BIN_COUNT = 101  # 101 bins puts a bin on every 0.01 step of [0, 1]
MIN_BIN_COUNT = 1
DEFAULT_THRESHOLD = 0  # Range queries look for counts strictly above this

# Returned by min()/max() when no bin qualifies
RANGE_NOT_FOUND = -1.0

# min() starts its scan here; max() always covers every bin
MIN_SCAN_START_INDEX = 1


# ============================================================================
# K-MEANS CONFIGURATION
# ============================================================================

DEFAULT_CLUSTER_COUNT = 2
KMEANS_MAX_ITERATIONS = 20  # Hard cap on assignment/update rounds

# Floor of the "approximately equal" tolerance, in multiples of the
# smallest positive double
APPROX_EPSILON_MULTIPLIER = 8


# ============================================================================
# CLI CONFIGURATION
# ============================================================================

DEFAULT_SAMPLE_COLUMN = None  # None means "first column of the CSV"
SUMMARY_BAR_WIDTH = 40  # Width of the text bars in the histogram preview
