"""
Row data model for DataFlow Analytics.

Represents a single research-annotation record parsed from an uploaded CSV.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple


# Column names in their canonical (positional fallback) order
ROW_FIELDS: Tuple[str, ...] = ("proj_id", "question", "output", "updated", "source")


@dataclass(frozen=True)
class Row:
    """
    Represents a single research-annotation record.

    Attributes:
        project_id: Project identifier (column ``proj_id``)
        question: Question text
        output: Answer text
        updated_at: Last-updated timestamp, kept as the raw string (column ``updated``)
        source: Source of the record
    """

    project_id: str = ""
    question: str = ""
    output: str = ""
    updated_at: str = ""
    source: str = ""

    def get(self, column: str) -> str:
        """
        Get a field value by its column name.

        Args:
            column: One of ROW_FIELDS

        Returns:
            Field value

        Raises:
            KeyError: If column is not a known field
        """
        return FIELD_ACCESSORS[column](self)

    def as_dict(self) -> Dict[str, str]:
        """Return the row keyed by column name, in column order."""
        return {column: self.get(column) for column in ROW_FIELDS}


FIELD_ACCESSORS: Dict[str, Callable[[Row], str]] = {
    "proj_id": lambda row: row.project_id,
    "question": lambda row: row.question,
    "output": lambda row: row.output,
    "updated": lambda row: row.updated_at,
    "source": lambda row: row.source,
}
