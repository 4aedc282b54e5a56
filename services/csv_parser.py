"""
CSVParser for research-annotation uploads.

Turns raw comma-separated text into Row objects. Splitting is naive: no
quoting, no escaped commas, no embedded newlines.
"""

import logging
from typing import List

from models import Row, ROW_FIELDS
from utils.performance import monitor_performance
from utils.validation import validate_short_row_policy

logger = logging.getLogger(__name__)

MIN_VALUES_PER_ROW = len(ROW_FIELDS)


class CSVParseError(ValueError):
    """Raised when CSV text is empty or malformed."""


class CSVParser:
    """
    Parses CSV text into rows.

    Attributes:
        short_row_policy: "skip" drops data lines with fewer than five values,
            "error" rejects the whole input
        skipped_lines: 1-based source line numbers dropped by the last parse,
            counting blank lines too
    """

    def __init__(self, short_row_policy: str = "skip"):
        """
        Initialize CSVParser.

        Args:
            short_row_policy: How to handle data lines with fewer than five values

        Raises:
            ValueError: If short_row_policy is not supported
        """
        is_valid, error_msg = validate_short_row_policy(short_row_policy)
        if not is_valid:
            raise ValueError(error_msg)

        self.short_row_policy = short_row_policy
        self.skipped_lines: List[int] = []

    @monitor_performance("csv_parse")
    def parse(self, text: str) -> List[Row]:
        """
        Parse CSV text.

        Args:
            text: Decoded file content; the first non-blank line is the header

        Returns:
            Rows in input order

        Raises:
            CSVParseError: If fewer than two non-blank lines remain, or a short
                row is found under the "error" policy
        """
        self.skipped_lines = []
        numbered_lines = [
            (line_number, line)
            for line_number, line in enumerate((text or "").split("\n"), start=1)
            if line.strip()
        ]

        if len(numbered_lines) < 2:
            raise CSVParseError("The CSV file appears to be empty or incorrectly formatted.")

        headers = [name.strip().lower() for name in numbered_lines[0][1].split(",")]
        column_indices = [
            headers.index(column) if column in headers else position
            for position, column in enumerate(ROW_FIELDS)
        ]

        rows = []
        for line_number, line in numbered_lines[1:]:
            values = [value.strip() for value in line.split(",")]

            if len(values) < MIN_VALUES_PER_ROW:
                if self.short_row_policy == "error":
                    raise CSVParseError(
                        f"Line {line_number} has {len(values)} values, "
                        f"expected at least {MIN_VALUES_PER_ROW}"
                    )
                self.skipped_lines.append(line_number)
                logger.warning(
                    f"Skipping line {line_number}: {len(values)} values, "
                    f"expected at least {MIN_VALUES_PER_ROW}"
                )
                continue

            fields = [
                values[index] if index < len(values) else ""
                for index in column_indices
            ]
            rows.append(Row(*fields))

        logger.info(
            f"Parsed {len(rows)} rows ({len(self.skipped_lines)} short rows skipped)"
        )
        return rows


def parse_csv(text: str) -> List[Row]:
    """Parse CSV text with the default (skip) short-row policy."""
    return CSVParser().parse(text)
