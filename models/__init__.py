"""Data models for DataFlow Analytics."""

from .row import Row, ROW_FIELDS
from .quality_issue import QualityIssue, ISSUE_TYPES
from .file_record import FileRecord, format_file_size
from .view_state import ViewState
from .application_state import ApplicationState

__all__ = [
    "Row",
    "ROW_FIELDS",
    "QualityIssue",
    "ISSUE_TYPES",
    "FileRecord",
    "format_file_size",
    "ViewState",
    "ApplicationState",
]
