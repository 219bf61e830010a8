"""
Tests for common utils module.
"""
from colorama import Fore, Style

from unit_histogram.common.utils import (
    color_text,
    format_bar,
    format_value,
    log_analysis,
    log_data,
    log_debug,
    log_error,
    log_info,
    log_progress,
    log_success,
    log_warn,
)


def test_color_text_wraps_with_reset():
    text = color_text("hello", Fore.GREEN)

    assert text.startswith(f"{Style.NORMAL}{Fore.GREEN}")
    assert "hello" in text
    assert text.endswith(Style.RESET_ALL)


def test_format_value():
    assert format_value(0.25) == "0.2500"
    assert format_value(1.0, precision=2) == "1.00"
    assert format_value(0.0) == "0.0000"


def test_format_value_missing():
    assert format_value(None) == "N/A"
    assert format_value(-1.0) == "N/A"
    assert format_value(float("nan")) == "N/A"


def test_format_bar():
    assert format_bar(10, 10, width=20) == "#" * 20
    assert format_bar(5, 10, width=20) == "#" * 10
    assert format_bar(1, 1000, width=20) == "#"
    assert format_bar(0, 10) == ""
    assert format_bar(3, 0) == ""


def test_log_functions_print_message(capsys):
    for log in (log_info, log_success, log_error, log_warn, log_debug, log_data, log_analysis, log_progress):
        log("message from test")

    out = capsys.readouterr().out
    assert out.count("message from test") == 8
