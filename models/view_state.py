"""
ViewState model for the data preview table.

Holds the search, filter, sort and page parameters applied to a file's rows.
Every change produces a new ViewState; the query pipeline keeps no state.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

from .row import ROW_FIELDS


SORT_ASC = "asc"
SORT_DESC = "desc"
VALID_SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class ViewState:
    """
    Immutable table view parameters.

    Attributes:
        search: Free-text search over question and output
        project_filter: Exact proj_id to keep, or None for all projects
        source_filter: Exact source to keep, or None for all sources
        sort_field: Column to sort by, or None
        sort_direction: "asc", "desc" or None
        page: 1-based page number
        page_size: Rows per page
    """

    search: str = ""
    project_filter: Optional[str] = None
    source_filter: Optional[str] = None
    sort_field: Optional[str] = None
    sort_direction: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        """
        Validate view parameters.

        Raises:
            ValueError: If sort field, sort direction, page or page size is invalid
        """
        if self.sort_field is not None and self.sort_field not in ROW_FIELDS:
            raise ValueError(
                f"Invalid sort field: {self.sort_field}. Must be one of {list(ROW_FIELDS)}"
            )
        if self.sort_direction is not None and self.sort_direction not in VALID_SORT_DIRECTIONS:
            raise ValueError(
                f"Invalid sort direction: {self.sort_direction}. "
                f"Must be one of {list(VALID_SORT_DIRECTIONS)} or None"
            )
        if self.page < 1:
            raise ValueError(f"Page must be at least 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"Page size must be at least 1, got {self.page_size}")

    @property
    def is_sorted(self) -> bool:
        return self.sort_field is not None and self.sort_direction is not None

    def with_search(self, search: str) -> "ViewState":
        return replace(self, search=search or "", page=1)

    def with_project_filter(self, project_id: Optional[str]) -> "ViewState":
        return replace(self, project_filter=project_id or None, page=1)

    def with_source_filter(self, source: Optional[str]) -> "ViewState":
        return replace(self, source_filter=source or None, page=1)

    def with_page(self, page: int) -> "ViewState":
        return replace(self, page=page)

    def toggle_sort(self, field: str) -> "ViewState":
        """
        Advance the sort state for a column.

        Cycle per column: none -> asc -> desc -> none. Toggling a different
        column starts again at asc. The page always resets to 1.

        Args:
            field: Column name to toggle

        Returns:
            New ViewState
        """
        if field not in ROW_FIELDS:
            raise ValueError(f"Invalid sort field: {field}. Must be one of {list(ROW_FIELDS)}")

        if self.sort_field != field or self.sort_direction is None:
            return replace(self, sort_field=field, sort_direction=SORT_ASC, page=1)
        if self.sort_direction == SORT_ASC:
            return replace(self, sort_direction=SORT_DESC, page=1)
        return replace(self, sort_field=None, sort_direction=None, page=1)

    def clamp_page(self, filtered_count: int) -> "ViewState":
        """
        Clamp the page number to the pages available for a filtered row count.

        Args:
            filtered_count: Number of rows after search and filters

        Returns:
            ViewState with page in [1, max(1, ceil(filtered_count / page_size))]
        """
        last_page = max(1, math.ceil(filtered_count / self.page_size))
        page = min(max(self.page, 1), last_page)
        if page == self.page:
            return self
        return replace(self, page=page)

    def cleared(self) -> "ViewState":
        """Reset search, filters, sort and page, keeping the page size."""
        return ViewState(page_size=self.page_size)
