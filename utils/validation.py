"""
Validation utilities for upload input.

Provides validation functions for file names, upload metadata and view settings.
"""

from typing import List, Optional, Tuple


def validate_csv_filename(filename: str) -> Tuple[bool, str]:
    """
    Validate that an uploaded file is a CSV file.

    Args:
        filename: Name of the uploaded file

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not filename:
        return False, "No file selected"

    if not filename.lower().endswith(".csv"):
        return False, "Invalid file format. Please upload a CSV file."

    return True, ""


def validate_page_size(page_size: int) -> Tuple[bool, str]:
    """
    Validate page size parameter.

    Args:
        page_size: Rows per page

    Returns:
        Tuple of (is_valid, error_message)
    """
    if page_size < 1:
        return False, "Page size must be greater than 0"

    if page_size > 500:
        return False, "Page size cannot exceed 500"

    return True, ""


SHORT_ROW_POLICIES = ["skip", "error"]


def validate_short_row_policy(policy: str) -> Tuple[bool, str]:
    if policy not in SHORT_ROW_POLICIES:
        return False, f"Invalid short row policy: {policy}. Must be one of {SHORT_ROW_POLICIES}"
    return True, ""


def parse_tags(tags: Optional[str]) -> Optional[List[str]]:
    """
    Split a comma-separated tag string.

    Args:
        tags: Raw tag input, e.g. "research, blockchain, Q3-2024"

    Returns:
        List of stripped, non-empty tags, or None if there are none
    """
    if not tags or not tags.strip():
        return None

    parsed = [tag.strip() for tag in tags.split(",") if tag.strip()]
    return parsed or None


def normalize_description(description: Optional[str]) -> Optional[str]:
    """Strip a description, returning None when nothing is left."""
    if not description or not description.strip():
        return None
    return description.strip()
