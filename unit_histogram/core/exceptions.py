"""
Error types raised by the histogram and its clustering routine.

All errors derive from HistogramError and also from the builtin the caller
would naturally catch (ValueError, ZeroDivisionError), so existing
``except ValueError`` handlers keep working.
"""


class HistogramError(Exception):
    """Base class for all histogram errors."""


class InvalidConfigurationError(HistogramError, ValueError):
    """Bad construction or call argument (bin count, counts, factor, sample)."""


class InvalidClusterCountError(InvalidConfigurationError):
    """k is not in [1, bin_count]."""


class DegenerateInputError(HistogramError, ValueError):
    """The histogram holds no data a cluster seed can be drawn from."""


class InsufficientDataError(DegenerateInputError):
    """Fewer distinct non-empty bins than requested clusters."""


class ArithmeticDegenerateError(HistogramError, ZeroDivisionError):
    """Bin index to value conversion on a single-bin histogram."""


__all__ = [
    "HistogramError",
    "InvalidConfigurationError",
    "InvalidClusterCountError",
    "DegenerateInputError",
    "InsufficientDataError",
    "ArithmeticDegenerateError",
]
