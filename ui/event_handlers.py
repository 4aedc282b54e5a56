"""
Event handlers for UI components.

Handles user interactions and state updates. Handlers take and return the
session ApplicationState; rendering is collected in build_view.
"""

import logging
from typing import Dict, Any, List, Optional, Tuple

from models import ApplicationState, FileRecord
from services import FileIngestor, QualityAnalyzer, QualityReport, QueryPipeline, RenderEngine, CSVParseError
from services.query_pipeline import unique_values

logger = logging.getLogger(__name__)

ALL_FILTER = "__all__"


def generate_status_html(status_text: str) -> str:
    """Wrap a status message for the upload status panel."""
    return f'<div class="load-status">{status_text}</div>'


def handle_csv_upload(
    file_path: Optional[str],
    description: str = "",
    tags: str = "",
    app_state: Optional[ApplicationState] = None,
) -> Tuple[ApplicationState, str]:
    """
    Handle CSV file upload with comprehensive error handling.

    Args:
        file_path: Path to uploaded CSV file
        description: Optional description entered in the upload form
        tags: Optional comma-separated tags
        app_state: Current application state (a new one is created if None)

    Returns:
        Tuple of (app_state, status message HTML)
    """
    if app_state is None:
        app_state = ApplicationState()

    if not file_path:
        return app_state, generate_status_html("⚠️ Please upload a CSV file first")

    ingestor = FileIngestor(
        uploader=app_state.uploader,
        short_row_policy=app_state.short_row_policy,
    )

    try:
        file_record = ingestor.ingest_path(file_path, description=description, tags=tags)
    except FileNotFoundError as e:
        logger.warning(f"Upload rejected: {e}")
        return app_state, generate_status_html(f"❌ File not found: {e}")
    except CSVParseError as e:
        logger.warning(f"Upload rejected: {e}")
        return app_state, generate_status_html(f"❌ Invalid CSV format: {e}")
    except ValueError as e:
        logger.warning(f"Upload rejected: {e}")
        return app_state, generate_status_html(f"❌ Upload failed: {e}")

    app_state.add_file(file_record)
    return app_state, generate_status_html(
        f"✅ Processed {file_record.row_count} rows with "
        f"{file_record.quality_issue_count} quality issues."
    )


def handle_file_select(file_id: Optional[str], app_state: ApplicationState) -> ApplicationState:
    """Select a file for preview; unknown or empty ids leave the state unchanged."""
    if file_id and app_state.get_file(file_id) is not None:
        app_state.select_file(file_id)
    return app_state


def handle_file_delete(file_id: Optional[str], app_state: ApplicationState) -> Tuple[ApplicationState, str]:
    """
    Delete a file from the session.

    Returns:
        Tuple of (app_state, status message HTML)
    """
    if not file_id:
        return app_state, generate_status_html("⚠️ No file selected")

    file_record = app_state.get_file(file_id)
    if file_record is None:
        return app_state, generate_status_html(f"❌ File not found: {file_id}")

    app_state.delete_file(file_id)
    return app_state, generate_status_html(f"🗑️ Deleted {file_record.name}")


def handle_search(search_text: str, app_state: ApplicationState) -> ApplicationState:
    app_state.view_state = app_state.view_state.with_search(search_text)
    return app_state


def handle_project_filter(value: Optional[str], app_state: ApplicationState) -> ApplicationState:
    project_id = None if value in (None, "", ALL_FILTER) else value
    app_state.view_state = app_state.view_state.with_project_filter(project_id)
    return app_state


def handle_source_filter(value: Optional[str], app_state: ApplicationState) -> ApplicationState:
    source = None if value in (None, "", ALL_FILTER) else value
    app_state.view_state = app_state.view_state.with_source_filter(source)
    return app_state


def handle_sort(field: str, app_state: ApplicationState) -> ApplicationState:
    """Cycle sorting for a column (none -> asc -> desc -> none)."""
    app_state.view_state = app_state.view_state.toggle_sort(field)
    return app_state


def handle_clear_filters(app_state: ApplicationState) -> ApplicationState:
    app_state.view_state = app_state.view_state.cleared()
    return app_state


def handle_page(direction: str, app_state: ApplicationState) -> ApplicationState:
    """
    Move to the previous or next page.

    Args:
        direction: "prev" or "next"
        app_state: Current application state

    Returns:
        Updated application state (page clamped to the available pages)
    """
    view_state = app_state.view_state
    if direction == "prev":
        page = max(1, view_state.page - 1)
    else:
        page = view_state.page + 1

    file_record = app_state.get_selected_file()
    filtered_total = 0
    if file_record is not None:
        # Ordering does not change the count
        filtered_total = len(QueryPipeline().match(file_record.rows, view_state))

    app_state.view_state = view_state.with_page(page).clamp_page(filtered_total)
    return app_state


def get_quality_report(app_state: ApplicationState, file_record: FileRecord) -> QualityReport:
    """Quality report of a file, analysed on first request and cached in the session."""
    report = app_state.quality_reports.get(file_record.id)
    if report is None:
        report = QualityAnalyzer().analyze(file_record.rows)
        app_state.quality_reports[file_record.id] = report
    return report


def build_filter_choices(values: List[str], all_label: str) -> List[Tuple[str, str]]:
    """Dropdown choices: the "all" option followed by each distinct value."""
    return [(all_label, ALL_FILTER)] + [(value, value) for value in values]


def build_file_choices(app_state: ApplicationState) -> List[Tuple[str, str]]:
    """Choices for the file selector, labelled with name and issue badge."""
    choices = []
    for file_record in app_state.files:
        badge = "Clean" if file_record.is_clean else f"{file_record.quality_issue_count} issues"
        choices.append((f"{file_record.name} ({badge})", file_record.id))
    return choices


def build_view(app_state: ApplicationState) -> Dict[str, Any]:
    """
    Compute everything the page displays for the current state.

    Clamps the page to the filtered row count before querying.

    Returns:
        Dictionary with file_list_html, file_choices, selected_file_id,
        quality_html, table, row_counter, page_info, project_choices,
        source_choices, sort_labels and view_state
    """
    render_engine = RenderEngine()
    file_record = app_state.get_selected_file()
    view_state = app_state.view_state

    view = {
        'file_list_html': render_engine.render_file_list(app_state.files, app_state.selected_file_id),
        'file_choices': build_file_choices(app_state),
        'selected_file_id': app_state.selected_file_id,
        'sort_labels': render_engine.render_sort_headers(view_state.sort_field, view_state.sort_direction),
        'project_choices': build_filter_choices([], "All Projects"),
        'source_choices': build_filter_choices([], "All Sources"),
    }

    if file_record is None:
        empty_message = (
            "Upload your first CSV file to get started."
            if not app_state.files
            else "Select a file to preview its data and quality metrics."
        )
        view.update({
            'quality_html': f'<div class="quality-report empty">{empty_message}</div>',
            'table': render_engine.render_table([]),
            'row_counter': "0 of 0 rows",
            'page_info': "Page 1 of 1",
            'view_state': view_state,
        })
        return view

    pipeline = QueryPipeline()
    filtered = pipeline.filter_rows(file_record.rows, view_state)
    view_state = view_state.clamp_page(len(filtered))
    app_state.view_state = view_state

    result = pipeline.page_of(filtered, view_state)
    report = get_quality_report(app_state, file_record)

    view.update({
        'quality_html': render_engine.render_quality_report(report),
        'table': render_engine.render_table(result.rows),
        'row_counter': f"{result.filtered_total} of {file_record.row_count} rows",
        'page_info': f"Page {result.page} of {max(1, result.total_pages)}",
        'project_choices': build_filter_choices(unique_values(file_record.rows, "proj_id"), "All Projects"),
        'source_choices': build_filter_choices(unique_values(file_record.rows, "source"), "All Sources"),
        'view_state': view_state,
    })
    return view

