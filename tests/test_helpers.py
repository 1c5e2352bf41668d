"""
Tests for adltransfer.utils.helpers.

Covers size formatting, percentage formatting and local path checks.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from adltransfer.utils.helpers import (
    format_number,
    format_percent,
    format_size,
    truncate_path,
    validate_path_exists,
)


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1, "1 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (-2048, "-2 KB"),
        (268435456, "256 MB"),
        (2684354560, "2.5 GB"),
        (1024**5, "1 PB"),
        (1024**6, "1 EB"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    """Test known byte counts."""
    assert format_size(size) == expected


def test_format_size_clamps_to_largest_unit() -> None:
    """Test that values beyond exabytes stay in EB."""
    assert format_size(1024**7) == "1024 EB"


def test_format_size_rounds_to_one_decimal() -> None:
    """Test rounding to a single fractional digit."""
    assert format_size(1100) == "1.1 KB"
    assert format_size(1024 * 1024 - 1) == "1024 KB"


@pytest.mark.parametrize("size", [1, 999, 5000, 123456789, 98765432101, 2**50 + 7])
def test_format_size_picks_largest_unit_below_1024(size: int) -> None:
    """Test that the chosen unit keeps the value below 1024 and within 0.1 units."""
    units = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]
    number, unit = format_size(size).split(" ")
    place = units.index(unit)

    assert size / 1024**place < 1024
    assert place == 0 or size / 1024**place >= 1
    assert abs(float(number) - size / 1024**place) <= 0.05 + 1e-9


def test_format_size_keeps_sign() -> None:
    """Test that negative sizes mirror positive ones."""
    assert format_size(-1536) == "-" + format_size(1536)


def test_format_number_trims_zeros() -> None:
    """Test trailing zero trimming."""
    assert format_number(50.0) == "50"
    assert format_number(12.5) == "12.5"
    assert format_number(33.3333) == "33.33"


def test_format_percent() -> None:
    """Test percentage formatting."""
    assert format_percent(1, 2) == "50"
    assert format_percent(1, 3) == "33.33"
    assert format_percent(0, 0) == "100"


def test_validate_path_exists(tmp_path: Path) -> None:
    """Test detection of files, directories and missing paths."""
    file_path = tmp_path / "file.txt"
    file_path.write_text("data")

    assert validate_path_exists(str(file_path)) == "file"
    assert validate_path_exists(str(tmp_path)) == "directory"
    assert validate_path_exists(str(tmp_path / "missing")) is None


def test_truncate_path() -> None:
    """Test that long paths keep their file name."""
    assert truncate_path("short.txt") == "short.txt"

    truncated = truncate_path("/very/long/directory/structure/for/testing/file.txt", 30)
    assert truncated.startswith("...")
    assert truncated.endswith("/file.txt")
    assert len(truncated) <= 30
