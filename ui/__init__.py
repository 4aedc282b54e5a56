"""UI components for DataFlow Analytics."""

from .layout import (
    create_main_layout,
    get_global_css
)
from .event_handlers import (
    handle_csv_upload,
    handle_file_select,
    handle_file_delete,
    handle_search,
    handle_project_filter,
    handle_source_filter,
    handle_sort,
    handle_clear_filters,
    handle_page,
    build_view
)

__all__ = [
    "create_main_layout",
    "get_global_css",
    "handle_csv_upload",
    "handle_file_select",
    "handle_file_delete",
    "handle_search",
    "handle_project_filter",
    "handle_source_filter",
    "handle_sort",
    "handle_clear_filters",
    "handle_page",
    "build_view"
]
