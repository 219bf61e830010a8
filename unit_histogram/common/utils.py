"""
Common utility functions for the histogram tools.

This module provides utilities organized into the following categories:
- System: Platform-specific configuration
- Formatting: Value and bar rendering for console output
- Logging: Colored console messages
"""

import io
import os
import sys
from typing import Optional

from colorama import Fore, Style

from unit_histogram.config import SUMMARY_BAR_WIDTH

# ============================================================================
# SYSTEM UTILITIES
# ============================================================================

def configure_windows_stdio() -> None:
    """
    Configure Windows stdio encoding for UTF-8 support.

    Only applies to interactive CLI runs, not during pytest.
    """
    if sys.platform != "win32":
        return
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return
    if not hasattr(sys.stdout, "buffer") or isinstance(sys.stdout, io.TextIOWrapper):
        return
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")


# ============================================================================
# FORMATTING UTILITIES
# ============================================================================

def color_text(text: str, color: str = Fore.WHITE, style: str = Style.NORMAL) -> str:
    """
    Applies color and style to text using colorama.

    Args:
        text: Text to format
        color: Colorama Fore color (default: Fore.WHITE)
        style: Colorama Style (default: Style.NORMAL)

    Returns:
        Formatted text string with color and style codes
    """
    return f"{style}{color}{text}{Style.RESET_ALL}"


def format_value(value: Optional[float], precision: int = 4) -> str:
    """
    Formats a position on [0, 1] for display.

    The -1 "not found" sentinel of the range queries and missing values
    are shown as "N/A".
    """
    if value is None or value != value or value < 0:
        return "N/A"
    return f"{value:.{precision}f}"


def format_bar(count: int, max_count: int, width: int = SUMMARY_BAR_WIDTH) -> str:
    """Render count as a bar of '#' scaled so max_count fills width."""
    if max_count <= 0 or count <= 0:
        return ""
    return "#" * max(1, round(width * count / max_count))


# ============================================================================
# LOGGING UTILITIES
# ============================================================================

def log_info(message: str) -> None:
    """Print informational message with blue color."""
    print(color_text(message, Fore.BLUE))


def log_success(message: str) -> None:
    """Print success message with green color."""
    print(color_text(message, Fore.GREEN))


def log_error(message: str) -> None:
    """Print error message with red color and bright style."""
    print(color_text(message, Fore.RED, Style.BRIGHT))


def log_warn(message: str) -> None:
    """Print warning message with yellow color."""
    print(color_text(message, Fore.YELLOW))


def log_debug(message: str) -> None:
    """Print debug message with white color."""
    print(color_text(message, Fore.WHITE))


def log_data(message: str) -> None:
    """Print data-related message with cyan color."""
    print(color_text(message, Fore.CYAN))


def log_analysis(message: str) -> None:
    """Print analysis-related message with magenta color."""
    print(color_text(message, Fore.MAGENTA))


def log_progress(message: str) -> None:
    """Print progress update message with yellow color."""
    print(color_text(message, Fore.YELLOW))
