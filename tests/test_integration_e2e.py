"""
End-to-end integration tests for the complete workflow.

Tests the full workflow: Upload CSV → Review quality → Search/filter/sort → Page → Delete
"""

import tempfile
import os
from models import ApplicationState, ViewState
from utils.performance import get_monitor
from ui.event_handlers import (
    ALL_FILTER,
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


def create_test_csv(num_rows=45):
    """Helper to create a test CSV file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False, encoding='utf-8') as f:
        f.write("proj_id,question,output,updated,source\n")
        for i in range(num_rows):
            project = "solana" if i % 2 == 0 else "ethereum"
            source = "docs" if i % 3 == 0 else "forum"
            f.write(f"{project},Question number {i:02d},Answer {i},2024-01-{(i % 28) + 1:02d},{source}\n")
        return f.name


def test_complete_workflow():
    """
    Test complete workflow for a single file:
    Upload → View → Search → Filter → Sort → Page → Clear → Delete
    """
    csv_path = create_test_csv(45)

    try:
        # Step 1: Upload
        app_state, msg = handle_csv_upload(csv_path, app_state=ApplicationState())
        assert "✅ Processed 45 rows with 0 quality issues." in msg

        # Step 2: Initial view
        view = build_view(app_state)
        assert view['row_counter'] == "45 of 45 rows"
        assert view['page_info'] == "Page 1 of 3"
        assert len(view['table']) == 20
        assert "Quality Score: 100%" in view['quality_html']
        assert view['project_choices'] == [
            ("All Projects", ALL_FILTER), ("solana", "solana"), ("ethereum", "ethereum")
        ]

        # Step 3: Page forward past the end is clamped
        for _ in range(5):
            app_state = handle_page("next", app_state)
        assert app_state.view_state.page == 3
        view = build_view(app_state)
        assert len(view['table']) == 5

        # Step 4: Search resets the page
        app_state = handle_search("question number 1", app_state)
        assert app_state.view_state.page == 1
        view = build_view(app_state)
        assert view['row_counter'] == "10 of 45 rows"

        # Step 5: Filters narrow the result
        app_state = handle_project_filter("solana", app_state)
        app_state = handle_source_filter("docs", app_state)
        view = build_view(app_state)
        questions = list(view['table']['Question'])
        assert questions == ["Question number 12", "Question number 18"]

        # Step 6: Sort descending by question
        app_state = handle_sort("question", app_state)
        app_state = handle_sort("question", app_state)
        view = build_view(app_state)
        assert list(view['table']['Question']) == ["Question number 18", "Question number 12"]
        assert view['sort_labels'][1] == "Question ↓"

        # Step 7: "All" option removes a filter
        app_state = handle_project_filter(ALL_FILTER, app_state)
        assert app_state.view_state.project_filter is None

        # Step 8: Clear everything
        app_state = handle_clear_filters(app_state)
        view = build_view(app_state)
        assert view['row_counter'] == "45 of 45 rows"

        # Step 9: Delete
        app_state, msg = handle_file_delete(app_state.selected_file_id, app_state)
        assert "Deleted" in msg
        view = build_view(app_state)
        assert view['row_counter'] == "0 of 0 rows"
        assert "Upload your first CSV file" in view['quality_html']

    finally:
        os.unlink(csv_path)


def test_switching_files_resets_view():
    """Test selecting another file starts from a fresh view."""
    first_path = create_test_csv(5)
    second_path = create_test_csv(30)

    try:
        app_state, _ = handle_csv_upload(first_path, app_state=ApplicationState())
        first_id = app_state.selected_file_id
        app_state, _ = handle_csv_upload(second_path, app_state=app_state)

        app_state = handle_page("next", app_state)
        assert app_state.view_state.page == 2

        app_state = handle_file_select(first_id, app_state)
        assert app_state.view_state.page == 1

        view = build_view(app_state)
        assert view['row_counter'] == "5 of 5 rows"
        assert len(view['file_choices']) == 2
    finally:
        os.unlink(first_path)
        os.unlink(second_path)


def test_filter_change_clamps_page():
    """Test the page is clamped when filters shrink the result."""
    csv_path = create_test_csv(45)

    try:
        app_state, _ = handle_csv_upload(csv_path, app_state=ApplicationState())
        app_state.view_state = ViewState(source_filter="docs", page=3)
        view = build_view(app_state)
        assert app_state.view_state.page == 1
        assert view['row_counter'] == "15 of 45 rows"
    finally:
        os.unlink(csv_path)


def test_quality_issues_are_reported():
    """Test a file with defects shows them in the report and table."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False, encoding='utf-8') as f:
        f.write("proj_id,question,output,updated,source\n")
        f.write("solana,?,,not a date,docs\n")
        f.write("solana,What is the staking yield,About seven percent,2024-01-15,docs\n")
        csv_path = f.name

    try:
        app_state, msg = handle_csv_upload(csv_path, app_state=ApplicationState())
        assert "with 1 quality issues" in msg

        view = build_view(app_state)
        assert "Invalid dates: 1" in view['quality_html']
        assert "Row 2" in view['quality_html']
        assert list(view['table']['Review']) == ["⚠️", ""]
    finally:
        os.unlink(csv_path)


def test_refresh_reuses_quality_report_and_sorts_once():
    """Test repeated refreshes analyse a file once and sort once per view."""
    csv_path = create_test_csv(45)

    try:
        app_state, _ = handle_csv_upload(csv_path, app_state=ApplicationState())
        app_state = handle_sort("updated", app_state)
        monitor = get_monitor()
        monitor.clear()

        build_view(app_state)
        app_state = handle_page("next", app_state)
        view = build_view(app_state)

        assert monitor.get_stats("quality_analyze")['count'] == 1
        assert monitor.get_stats("filter_rows")['count'] == 2
        assert app_state.selected_file_id in app_state.quality_reports
        assert "Quality Score: 100%" in view['quality_html']

        app_state, _ = handle_file_delete(app_state.selected_file_id, app_state)
        assert app_state.quality_reports == {}
    finally:
        os.unlink(csv_path)
