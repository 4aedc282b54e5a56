"""QualityIssue model: one detected defect tied to a row and column."""

from dataclasses import dataclass


EMPTY_FIELD = "empty_field"
INVALID_DATE = "invalid_date"
SHORT_QUESTION = "short_question"
MISSING_OUTPUT = "missing_output"
FLAGGED_OUTPUT = "flagged_output"

ISSUE_TYPES = (EMPTY_FIELD, INVALID_DATE, SHORT_QUESTION, MISSING_OUTPUT, FLAGGED_OUTPUT)


@dataclass(frozen=True)
class QualityIssue:
    """
    A single data-quality finding.

    Attributes:
        issue_type: One of ISSUE_TYPES
        message: Human-readable description
        line_number: 1-based CSV line of the row (the header is line 1)
        column: Column name the issue refers to
    """

    issue_type: str
    message: str
    line_number: int
    column: str
