"""
UI layout components for DataFlow Analytics.

Defines the two-column Gradio layout: upload and file management on the
left, quality report and data preview on the right.
"""

import gradio as gr
from typing import Dict, Any

from models import ROW_FIELDS
from services.render_engine import COLUMN_TITLES
from ui.event_handlers import ALL_FILTER


GLOBAL_CSS = """
<style>
.gradio-container {
    font-size: 16px !important;
}

/* 上传状态 */
.load-status {
    padding: 8px 12px;
    border: 1px solid #1976d2;
    border-radius: 6px;
    background: #f5f9ff;
}

/* 文件列表 */
.file-list-container {
    max-height: 480px;
    overflow-y: auto;
    border: 1px solid #1976d2;
    border-radius: 8px;
    padding: 8px;
}
.file-list-container .tag {
    display: inline-block;
    padding: 1px 8px;
    margin: 2px;
    border-radius: 10px;
    background: #e3f2fd;
    font-size: 12px;
}

/* 质量报告 */
.quality-report {
    padding: 12px 15px;
    border: 1px solid #1976d2;
    border-radius: 8px;
    background: #fafafa;
}
.quality-report .grade {
    font-size: 14px;
    padding: 2px 8px;
    border-radius: 10px;
    background: #eeeeee;
}

.column-title {
    background: #e3f2fd;
    padding: 8px 12px;
    border-radius: 6px;
    border-left: 4px solid #1976d2;
    font-weight: bold;
}
</style>
"""


def get_global_css() -> str:
    return GLOBAL_CSS


def create_header(components: Dict[str, Any]) -> None:
    """Title row with usage notes."""
    with gr.Row():
        with gr.Column(scale=2):
            gr.Markdown("# 📊 DataFlow Analytics")
            gr.Markdown("Research data management and quality review")
        with gr.Column(scale=3):
            with gr.Accordion("📖 How to use", open=False):
                gr.Markdown("""
**1. Upload:** choose a `.csv` file with `proj_id`, `question`, `output`, `updated` and `source` columns. Optionally add a description and comma-separated tags first.

**2. Review quality:** the quality report lists empty fields, invalid dates, short questions, missing output and output still containing `?`.

**3. Explore:** search questions and outputs, filter by project or source, click a column button to cycle ascending / descending / unsorted.
                """)
    gr.HTML('<hr style="border: 2px solid #1976d2; margin: 3px 0;">')


def create_upload_column(components: Dict[str, Any]) -> None:
    """Upload form and file manager."""
    gr.HTML('<div class="column-title">📁 Upload CSV File</div>')
    components['description_input'] = gr.Textbox(
        label="Description (Optional)",
        placeholder="e.g., Q3 Research Data, User Feedback Analysis...",
        lines=2
    )
    components['tags_input'] = gr.Textbox(
        label="Tags (Optional)",
        placeholder="e.g., research, blockchain, Q3-2024",
        info="Separate tags with commas"
    )
    components['csv_upload'] = gr.File(
        label="Upload CSV file",
        file_types=[".csv"],
        type="filepath",
        height=100
    )
    components['upload_status'] = gr.HTML(
        '<div class="load-status">📁 Waiting for a CSV file</div>'
    )

    gr.HTML('<div class="column-title">🗂️ File Manager</div>')
    components['file_selector'] = gr.Dropdown(
        choices=[],
        label="Selected file",
        interactive=True
    )
    components['delete_btn'] = gr.Button("🗑️ Delete selected file", size="sm", variant="stop")
    components['file_list'] = gr.HTML(
        '<div class="file-list-container empty">No files uploaded yet</div>'
    )


def create_preview_column(components: Dict[str, Any]) -> None:
    """Quality report and data preview table."""
    gr.HTML('<div class="column-title">🧪 Data Quality Report</div>')
    components['quality_report'] = gr.HTML(
        '<div class="quality-report empty">Upload your first CSV file to get started.</div>'
    )

    gr.HTML('<div class="column-title">👁️ Data Preview</div>')
    with gr.Row():
        components['search_input'] = gr.Textbox(
            label="Search",
            placeholder="Search questions and outputs...",
            scale=2
        )
        components['project_filter'] = gr.Dropdown(
            choices=[("All Projects", ALL_FILTER)],
            value=ALL_FILTER,
            label="Project ID",
            scale=1
        )
        components['source_filter'] = gr.Dropdown(
            choices=[("All Sources", ALL_FILTER)],
            value=ALL_FILTER,
            label="Source",
            scale=1
        )
        components['clear_btn'] = gr.Button("Clear Filters", scale=1)

    with gr.Row():
        for column in ROW_FIELDS:
            components[f'sort_btn_{column}'] = gr.Button(
                f"{COLUMN_TITLES[column]} ↕",
                size="sm"
            )

    components['row_counter'] = gr.Markdown("0 of 0 rows")
    components['data_table'] = gr.Dataframe(
        headers=[COLUMN_TITLES[column] for column in ROW_FIELDS] + ["Review"],
        interactive=False,
        wrap=True
    )

    with gr.Row():
        components['prev_btn'] = gr.Button("◀ Previous", size="sm")
        components['page_info'] = gr.Markdown("Page 1 of 1")
        components['next_btn'] = gr.Button("Next ▶", size="sm")


def create_main_layout() -> Dict[str, Any]:
    """
    Build the full page layout.

    Returns:
        Dictionary of all UI components keyed by name
    """
    components = {}

    gr.HTML(get_global_css())
    create_header(components)

    with gr.Row():
        with gr.Column(scale=1):
            create_upload_column(components)
        with gr.Column(scale=3):
            create_preview_column(components)

    return components
