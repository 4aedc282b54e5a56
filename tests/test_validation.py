"""
Unit tests for validation utilities.

Tests validation functions for file names, upload metadata and view settings.
"""

import pytest
from utils.validation import (
    validate_csv_filename,
    validate_page_size,
    validate_short_row_policy,
    parse_tags,
    normalize_description,
)


def test_validate_csv_filename_valid():
    """Test CSV names are accepted regardless of case."""
    assert validate_csv_filename("research.csv") == (True, "")
    assert validate_csv_filename("RESEARCH.CSV") == (True, "")


def test_validate_csv_filename_missing():
    is_valid, error_msg = validate_csv_filename("")
    assert is_valid == False
    assert error_msg == "No file selected"


def test_validate_csv_filename_wrong_extension():
    """Test non-CSV names are rejected."""
    for name in ["data.txt", "data.csv.bak", "csv"]:
        is_valid, error_msg = validate_csv_filename(name)
        assert is_valid == False
        assert "Please upload a CSV file" in error_msg


def test_validate_page_size_valid():
    """Test validation of valid page sizes."""
    assert validate_page_size(1)[0] == True
    assert validate_page_size(20)[0] == True
    assert validate_page_size(500)[0] == True


def test_validate_page_size_invalid():
    """Test validation of invalid page sizes."""
    assert validate_page_size(0)[0] == False
    assert validate_page_size(-10)[0] == False
    assert validate_page_size(501)[0] == False


def test_validate_short_row_policy():
    assert validate_short_row_policy("skip") == (True, "")
    assert validate_short_row_policy("error") == (True, "")

    is_valid, error_msg = validate_short_row_policy("pad")
    assert is_valid == False
    assert "pad" in error_msg


@pytest.mark.parametrize("raw,expected", [
    ("research, blockchain, Q3-2024", ["research", "blockchain", "Q3-2024"]),
    ("single", ["single"]),
    ("a,,b, ,", ["a", "b"]),
    ("", None),
    ("   ", None),
    (" , ,", None),
    (None, None),
])
def test_parse_tags(raw, expected):
    """Test tag splitting drops empty entries."""
    assert parse_tags(raw) == expected


def test_normalize_description():
    assert normalize_description("  Q3 research  ") == "Q3 research"
    assert normalize_description("\n\t ") is None
    assert normalize_description(None) is None
