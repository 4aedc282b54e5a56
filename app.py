"""
DataFlow Analytics
Research data upload, preview and quality review.

Main entry point for the Gradio application.
"""

import gradio as gr
from models import ApplicationState, ROW_FIELDS
from ui.layout import create_main_layout
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


def main():
    """Main application entry point."""
    with gr.Blocks(title="DataFlow Analytics", theme=gr.themes.Soft()) as app:

        # Application State
        app_state = gr.State(ApplicationState())

        components = create_main_layout()

        sort_buttons = [components[f'sort_btn_{column}'] for column in ROW_FIELDS]

        # Everything that changes when the state changes
        view_outputs = [
            app_state,
            components['file_list'],
            components['file_selector'],
            components['quality_report'],
            components['data_table'],
            components['row_counter'],
            components['page_info'],
            components['search_input'],
            components['project_filter'],
            components['source_filter'],
        ] + sort_buttons

        def refresh(state):
            view = build_view(state)
            view_state = view['view_state']
            return [
                state,
                view['file_list_html'],
                gr.update(choices=view['file_choices'], value=view['selected_file_id']),
                view['quality_html'],
                view['table'],
                view['row_counter'],
                view['page_info'],
                gr.update(value=view_state.search),
                gr.update(choices=view['project_choices'], value=view_state.project_filter or ALL_FILTER),
                gr.update(choices=view['source_choices'], value=view_state.source_filter or ALL_FILTER),
            ] + [gr.update(value=label) for label in view['sort_labels']]

        # ========== Event Handlers ==========

        # CSV Upload Handler
        def on_csv_upload(file_path, description, tags, state):
            state, status_html = handle_csv_upload(file_path, description, tags, state)
            outputs = refresh(state)
            # Clear the form only after a successful upload
            if "✅" in status_html:
                return outputs + [status_html, "", ""]
            return outputs + [status_html, gr.update(), gr.update()]

        components['csv_upload'].upload(
            fn=on_csv_upload,
            inputs=[
                components['csv_upload'],
                components['description_input'],
                components['tags_input'],
                app_state
            ],
            outputs=view_outputs + [
                components['upload_status'],
                components['description_input'],
                components['tags_input']
            ]
        )

        # File management
        components['file_selector'].input(
            fn=lambda file_id, state: refresh(handle_file_select(file_id, state)),
            inputs=[components['file_selector'], app_state],
            outputs=view_outputs
        )

        def on_delete(file_id, state):
            state, status_html = handle_file_delete(file_id, state)
            return refresh(state) + [status_html]

        components['delete_btn'].click(
            fn=on_delete,
            inputs=[components['file_selector'], app_state],
            outputs=view_outputs + [components['upload_status']]
        )

        # Search and filters
        components['search_input'].input(
            fn=lambda text, state: refresh(handle_search(text, state)),
            inputs=[components['search_input'], app_state],
            outputs=view_outputs
        )

        components['project_filter'].input(
            fn=lambda value, state: refresh(handle_project_filter(value, state)),
            inputs=[components['project_filter'], app_state],
            outputs=view_outputs
        )

        components['source_filter'].input(
            fn=lambda value, state: refresh(handle_source_filter(value, state)),
            inputs=[components['source_filter'], app_state],
            outputs=view_outputs
        )

        components['clear_btn'].click(
            fn=lambda state: refresh(handle_clear_filters(state)),
            inputs=[app_state],
            outputs=view_outputs
        )

        # Sorting: each column button cycles asc -> desc -> none
        for column, button in zip(ROW_FIELDS, sort_buttons):
            button.click(
                fn=lambda state, column=column: refresh(handle_sort(column, state)),
                inputs=[app_state],
                outputs=view_outputs
            )

        # Pagination
        components['prev_btn'].click(
            fn=lambda state: refresh(handle_page("prev", state)),
            inputs=[app_state],
            outputs=view_outputs
        )

        components['next_btn'].click(
            fn=lambda state: refresh(handle_page("next", state)),
            inputs=[app_state],
            outputs=view_outputs
        )

        # Footer
        gr.HTML('<hr style="border: 1px solid #e0e0e0; margin: 20px 0;">')
        gr.Markdown("✅ Ready. Upload a CSV file to start reviewing data quality.")

    return app


if __name__ == "__main__":
    app = main()
    app.launch(
        show_error=True,
        quiet=False
    )
