"""Utility functions for AdlTransfer (adltransfer)."""

import os

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]


def format_number(value):
    """Format a number with at most two fractional digits, trailing zeros trimmed."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_size(size):
    """Convert a signed byte count into a human readable string such as ``1.5 KB``."""
    if size == 0:
        return f"0 {SIZE_UNITS[0]}"

    num_bytes = abs(size)
    # floor(log1024(num_bytes)) without floating point error
    place = min((num_bytes.bit_length() - 1) // 10, len(SIZE_UNITS) - 1)
    value = round(num_bytes / 1024**place, 1)
    if size < 0:
        value = -value
    return f"{format_number(value)} {SIZE_UNITS[place]}"


def format_percent(done, total):
    """Return ``done`` as a percentage of ``total``."""
    if total <= 0:
        return format_number(100.0)
    return format_number(done / total * 100.0)


def validate_path_exists(path):
    """Check if a path exists and return its type."""
    if not os.path.exists(path):
        return None
    elif os.path.isfile(path):
        return "file"
    elif os.path.isdir(path):
        return "directory"
    else:
        return "other"


def truncate_path(path, max_length=40):
    """Truncate a file path with ellipses if it's too long."""
    if len(path) <= max_length:
        return path

    # Try to keep the filename and some parent directory info
    filename = os.path.basename(path)
    if len(filename) >= max_length - 3:
        return f"...{filename[-(max_length-3):]}"

    remaining_space = max_length - len(filename) - 4  # "..." and "/"
    dir_part = os.path.dirname(path)[:remaining_space]
    return f"...{dir_part}/{filename}"
