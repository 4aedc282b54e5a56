"""
FileRecord model for DataFlow Analytics.

An uploaded dataset together with its metadata and cached quality-issue count.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .row import Row


VALID_STATUSES = ("processing", "success", "error")


@dataclass(frozen=True)
class FileRecord:
    """
    An uploaded CSV file and its parsed rows.

    Attributes:
        id: Unique identifier
        name: Original file name
        size: File size in bytes
        upload_date: ISO-8601 upload timestamp
        uploader: Display label of the uploader
        rows: Parsed rows in file order
        quality_issue_count: Number of rows with at least one quality problem,
            computed once at ingestion
        status: processing/success/error
        description: Optional free-text description
        tags: Optional tag list
    """

    id: str
    name: str
    size: int
    upload_date: str
    uploader: str
    rows: Tuple[Row, ...] = ()
    quality_issue_count: int = 0
    status: str = "success"
    description: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        """Validate status and normalise sequences to tuples."""
        if self.status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status: {self.status}. Must be one of {list(VALID_STATUSES)}"
            )
        # frozen dataclass, so go through object.__setattr__
        object.__setattr__(self, "rows", tuple(self.rows))
        if self.tags is not None:
            object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_clean(self) -> bool:
        return self.quality_issue_count == 0

    @property
    def formatted_size(self) -> str:
        return format_file_size(self.size)


def format_file_size(size: int) -> str:
    """
    Format a byte count for display.

    Args:
        size: Size in bytes

    Returns:
        String such as "0 Bytes", "512 Bytes", "1.5 KB" or "2 MB"
    """
    if size <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB"]
    index = 0
    value = float(size)
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1

    # Two decimals with trailing zeros dropped
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {units[index]}"
