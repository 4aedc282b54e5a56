"""
Application state model for DataFlow Analytics.

Manages the per-session state of the application: uploaded files, the
selected file, the current table view and configuration settings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from utils.validation import validate_page_size, validate_short_row_policy

from .file_record import FileRecord
from .view_state import DEFAULT_PAGE_SIZE, ViewState


DEFAULT_UPLOADER = "Current User"


@dataclass
class ApplicationState:
    """
    Session state container.

    Attributes:
        files: Uploaded files in upload order
        selected_file_id: Id of the file shown in the preview, if any
        view_state: Current table view parameters
        page_size: Rows per preview page
        uploader: Uploader label stamped on new files
        short_row_policy: What the CSV parser does with short rows (skip/error)
        quality_reports: Quality reports already computed, keyed by file id.
            A file's rows never change, so its report is computed once.
    """

    files: List[FileRecord] = field(default_factory=list)
    selected_file_id: Optional[str] = None
    view_state: ViewState = field(default_factory=ViewState)
    page_size: int = DEFAULT_PAGE_SIZE
    uploader: str = DEFAULT_UPLOADER
    short_row_policy: str = "skip"
    quality_reports: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        """
        Validate settings.

        Raises:
            ValueError: If page_size or short_row_policy is invalid
        """
        for is_valid, error_msg in (
            validate_page_size(self.page_size),
            validate_short_row_policy(self.short_row_policy),
        ):
            if not is_valid:
                raise ValueError(error_msg)

        if self.view_state.page_size != self.page_size:
            self.view_state = ViewState(page_size=self.page_size)

    def add_file(self, file_record: FileRecord):
        """Append a newly ingested file and select it."""
        self.files.append(file_record)
        self.select_file(file_record.id)

    def get_file(self, file_id: str) -> Optional[FileRecord]:
        for file_record in self.files:
            if file_record.id == file_id:
                return file_record
        return None

    def select_file(self, file_id: str):
        """
        Select a file for preview and reset the table view.

        Raises:
            ValueError: If file_id is not found
        """
        if self.get_file(file_id) is None:
            raise ValueError(f"File with id {file_id} not found")
        self.selected_file_id = file_id
        self.view_state = ViewState(page_size=self.page_size)

    def get_selected_file(self) -> Optional[FileRecord]:
        """Get the currently selected file."""
        if self.selected_file_id is None:
            return None
        return self.get_file(self.selected_file_id)

    def delete_file(self, file_id: str):
        """
        Remove a file from the collection.

        Clears the selection when the deleted file was selected.

        Raises:
            ValueError: If file_id is not found
        """
        file_record = self.get_file(file_id)
        if file_record is None:
            raise ValueError(f"File with id {file_id} not found")

        self.files.remove(file_record)
        self.quality_reports.pop(file_id, None)
        if self.selected_file_id == file_id:
            self.selected_file_id = None
            self.view_state = ViewState(page_size=self.page_size)

    def get_file_count(self) -> int:
        return len(self.files)
