"""
RenderEngine for file list, quality report and preview table output.

Produces the HTML snippets and DataFrames that the Gradio components display.
"""

import html
from typing import List, Optional, Sequence

import markdown
import pandas as pd

from models import FileRecord, Row, ROW_FIELDS
from models.quality_issue import (
    EMPTY_FIELD,
    INVALID_DATE,
    SHORT_QUESTION,
    MISSING_OUTPUT,
    FLAGGED_OUTPUT,
)
from services.quality_analyzer import QualityReport, has_quality_issue
from utils.dates import format_display_date


COLUMN_TITLES = {
    "proj_id": "Project ID",
    "question": "Question",
    "output": "Output",
    "updated": "Updated",
    "source": "Source",
}

ISSUE_LABELS = {
    EMPTY_FIELD: ("❌", "Empty cells"),
    INVALID_DATE: ("📅", "Invalid dates"),
    SHORT_QUESTION: ("💬", "Short questions"),
    MISSING_OUTPUT: ("⚠️", "Missing output"),
    FLAGGED_OUTPUT: ("❓", 'Output with "?"'),
}

GRADE_COLORS = {
    "Excellent": "#4CAF50",
    "Good": "#FF9800",
    "Fair": "#FF9800",
    "Poor": "#F44336",
}

SORT_MARKERS = {None: "↕", "asc": "↑", "desc": "↓"}


class RenderEngine:
    """
    Rendering engine for the file manager, quality report and data preview.
    """

    def __init__(self):
        """Initialize RenderEngine with Markdown processor."""
        self.md = markdown.Markdown(extensions=['extra', 'nl2br', 'sane_lists'])

    def render_markdown(self, text: Optional[str]) -> str:
        """
        Render a user-supplied description as Markdown.

        Raw HTML in the input is escaped before conversion.
        """
        if not text:
            return ""
        try:
            return self.md.convert(html.escape(text))
        finally:
            self.md.reset()

    def render_file_list(self, files: Sequence[FileRecord], selected_id: Optional[str]) -> str:
        """
        Generate HTML for the uploaded file list.

        Args:
            files: Uploaded files
            selected_id: Id of the selected file

        Returns:
            HTML string
        """
        if not files:
            return '<div class="file-list-container empty">No files uploaded yet</div>'

        parts = ['<div class="file-list-container">']
        for file_record in files:
            selected = file_record.id == selected_id
            if file_record.is_clean:
                badge = '<span class="badge clean" style="color: #4CAF50;">Clean</span>'
            else:
                badge = (
                    f'<span class="badge issues" style="color: #F44336;">'
                    f'{file_record.quality_issue_count} issues</span>'
                )

            parts.append(
                f'<div class="file-item{" selected" if selected else ""}" data-file-id="{file_record.id}" '
                f'style="padding: 10px; margin: 5px 0; border-left: 4px solid '
                f'{"#1976d2" if selected else "#e0e0e0"}; '
                f'background: {"#E3F2FD" if selected else "#ffffff"};">'
                f'<div style="font-weight: bold;">{html.escape(file_record.name)} {badge}</div>'
                f'<div style="font-size: 13px; color: #666;">'
                f'{file_record.formatted_size} • {file_record.row_count} rows • '
                f'{html.escape(file_record.uploader)} • {html.escape(file_record.upload_date[:16])}'
                f'</div>'
            )
            if file_record.description:
                parts.append(
                    f'<div class="file-description">{self.render_markdown(file_record.description)}</div>'
                )
            if file_record.tags:
                tags_html = " ".join(
                    f'<span class="tag">{html.escape(tag)}</span>' for tag in file_record.tags
                )
                parts.append(f'<div class="file-tags">{tags_html}</div>')
            parts.append('</div>')

        parts.append('</div>')
        return "".join(parts)

    def render_quality_report(self, report: QualityReport, limit: int = 10) -> str:
        """
        Generate HTML for the data quality report.

        Args:
            report: QualityReport of the selected file
            limit: Number of issues to list individually

        Returns:
            HTML string
        """
        color = GRADE_COLORS[report.grade]
        parts = [
            '<div class="quality-report">',
            f'<div class="quality-score" style="font-size: 24px; font-weight: bold; color: {color};">'
            f'Quality Score: {report.score}% <span class="grade">{report.grade}</span></div>',
            f'<div class="quality-totals">{report.clean_rows} clean rows | '
            f'{report.issue_count} issues found | {report.total_rows} total rows</div>',
        ]

        if not report.issues:
            parts.append(
                f'<div class="quality-success">✅ Data Quality Excellent! All {report.total_rows} '
                f'rows passed quality checks with no issues found.</div>'
            )
            parts.append('</div>')
            return "".join(parts)

        parts.append('<div class="issue-summary"><b>Issue Summary</b><ul>')
        for issue_type, count in report.type_counts.items():
            if count > 0:
                icon, label = ISSUE_LABELS[issue_type]
                parts.append(f'<li>{icon} {label}: {count}</li>')
        parts.append('</ul></div>')

        parts.append('<div class="recent-issues"><b>Recent Issues</b><ul>')
        for issue in report.recent_issues(limit):
            icon, _ = ISSUE_LABELS[issue.issue_type]
            parts.append(
                f'<li>{icon} Row {issue.line_number} • {html.escape(issue.column)}: '
                f'{html.escape(issue.message)}</li>'
            )
        parts.append('</ul>')
        if report.issue_count > limit:
            parts.append(f'<div class="more-issues">And {report.issue_count - limit} more issues...</div>')
        parts.append('</div></div>')
        return "".join(parts)

    def render_table(self, rows: Sequence[Row]) -> pd.DataFrame:
        """
        Build the preview table for one page of rows.

        Dates are shown in display format when they parse; a trailing
        "Review" column marks rows with quality problems.
        """
        records = []
        for row in rows:
            record = {COLUMN_TITLES[column]: row.get(column) for column in ROW_FIELDS}
            record[COLUMN_TITLES["updated"]] = format_display_date(row.updated_at)
            record["Review"] = "⚠️" if has_quality_issue(row) else ""
            records.append(record)

        columns = [COLUMN_TITLES[column] for column in ROW_FIELDS] + ["Review"]
        return pd.DataFrame(records, columns=columns)

    def render_sort_headers(self, sort_field: Optional[str], sort_direction: Optional[str]) -> List[str]:
        """Button labels for the sortable columns, with the active direction marked."""
        labels = []
        for column in ROW_FIELDS:
            direction = sort_direction if column == sort_field else None
            labels.append(f"{COLUMN_TITLES[column]} {SORT_MARKERS[direction]}")
        return labels
