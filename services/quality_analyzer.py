"""
QualityAnalyzer for data-quality checks.

Enumerates quality issues per row, computes the quality score and the
per-row summary count cached on each FileRecord.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from models import Row, QualityIssue, ROW_FIELDS, ISSUE_TYPES
from models.quality_issue import (
    EMPTY_FIELD,
    INVALID_DATE,
    SHORT_QUESTION,
    MISSING_OUTPUT,
    FLAGGED_OUTPUT,
)
from utils.dates import is_valid_date
from utils.performance import monitor_performance


MIN_QUESTION_LENGTH = 10
FLAG_MARKER = "?"

# Line number of the first data row (the header is line 1)
FIRST_DATA_LINE = 2


def round_half_up(value: float) -> int:
    """Round halves toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def compute_score(total_rows: int, issue_count: int) -> int:
    """
    Compute the quality score.

    Each issue, not each offending row, takes one row's worth off the score,
    so the result can go below zero.

    Args:
        total_rows: Number of rows analysed
        issue_count: Number of issues found

    Returns:
        Score, 100 for an empty row set
    """
    if total_rows == 0:
        return 100
    clean_rows = total_rows - issue_count
    return round_half_up((clean_rows / total_rows) * 100)


def grade_for_score(score: int) -> str:
    """Map a score to its report badge."""
    if score >= 90:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Poor"


def has_quality_issue(row: Row) -> bool:
    """
    Check whether a row has at least one quality problem.

    Args:
        row: Row to check

    Returns:
        True if any field is empty, the question is short or only "?", the
        output is missing or flagged, or the date is invalid
    """
    if any(not row.get(column) for column in ROW_FIELDS):
        return True
    if len(row.question) < MIN_QUESTION_LENGTH or row.question.strip() == FLAG_MARKER:
        return True
    if not row.output or FLAG_MARKER in row.output:
        return True
    return not is_valid_date(row.updated_at)


def count_rows_with_issues(rows: Sequence[Row]) -> int:
    """Count rows for which has_quality_issue holds."""
    return sum(1 for row in rows if has_quality_issue(row))


@dataclass
class QualityReport:
    """
    Result of a quality analysis.

    Attributes:
        total_rows: Number of rows analysed
        issues: All issues in row order, then rule order
        score: Quality score (may be negative)
    """

    total_rows: int
    issues: List[QualityIssue] = field(default_factory=list)
    score: int = 100

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def clean_rows(self) -> int:
        return self.total_rows - len(self.issues)

    @property
    def grade(self) -> str:
        return grade_for_score(self.score)

    def count_by_type(self, issue_type: str) -> int:
        return sum(1 for issue in self.issues if issue.issue_type == issue_type)

    @property
    def type_counts(self) -> Dict[str, int]:
        """Issue counts keyed by issue type, in ISSUE_TYPES order."""
        return {issue_type: self.count_by_type(issue_type) for issue_type in ISSUE_TYPES}

    def recent_issues(self, limit: int = 10) -> List[QualityIssue]:
        return self.issues[:limit]


class QualityAnalyzer:
    """
    Runs the quality rules over a row sequence.

    Rules per row, in order: empty field (each column), invalid date, short
    question, question that is only "?", missing output, flagged output.
    """

    def check_row(self, row: Row, line_number: int) -> List[QualityIssue]:
        """
        Run all rules against one row.

        Args:
            row: Row to check
            line_number: CSV line of the row

        Returns:
            Issues found for this row, in rule order
        """
        issues = []

        for column in ROW_FIELDS:
            if not row.get(column).strip():
                issues.append(QualityIssue(
                    EMPTY_FIELD, f"Empty {column} field", line_number, column
                ))

        if row.updated_at and not is_valid_date(row.updated_at):
            issues.append(QualityIssue(
                INVALID_DATE, f"Invalid date format: {row.updated_at}", line_number, "updated"
            ))

        if row.question and len(row.question) < MIN_QUESTION_LENGTH:
            issues.append(QualityIssue(
                SHORT_QUESTION,
                f"Question too short ({len(row.question)} chars)",
                line_number,
                "question",
            ))

        if row.question and row.question.strip() == FLAG_MARKER:
            issues.append(QualityIssue(
                SHORT_QUESTION, 'Question is only "?"', line_number, "question"
            ))

        if not row.output.strip():
            issues.append(QualityIssue(
                MISSING_OUTPUT, "Missing output data", line_number, "output"
            ))

        if row.output and FLAG_MARKER in row.output:
            issues.append(QualityIssue(
                FLAGGED_OUTPUT, 'Output contains "?" - may need review', line_number, "output"
            ))

        return issues

    def find_issues(self, rows: Sequence[Row]) -> List[QualityIssue]:
        issues = []
        for index, row in enumerate(rows):
            issues.extend(self.check_row(row, index + FIRST_DATA_LINE))
        return issues

    @monitor_performance("quality_analyze")
    def analyze(self, rows: Sequence[Row]) -> QualityReport:
        """
        Analyse a row sequence.

        Args:
            rows: Parsed rows

        Returns:
            QualityReport with the full issue list and score
        """
        issues = self.find_issues(rows)
        return QualityReport(
            total_rows=len(rows),
            issues=issues,
            score=compute_score(len(rows), len(issues)),
        )


def analyze_quality(rows: Sequence[Row]) -> Tuple[List[QualityIssue], int]:
    """
    Analyse rows and return (issues, score).
    """
    report = QualityAnalyzer().analyze(rows)
    return report.issues, report.score
