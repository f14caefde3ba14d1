"""
UI layout components for the Audio Evaluation Review Workbench.

Defines the Gradio layout: header with statistics, display controls,
data controls, the paged card list and the sample detail panel.
"""

import gradio as gr
from typing import Dict, Any

from models.preferences import DEFAULT_FONT_SIZE


GLOBAL_CSS = """
<style>
/* Cards container */
.cards-container {
    display: flex;
    flex-direction: column;
    gap: 16px;
    padding: 8px;
    border-radius: 8px;
}

.cards-container.grid-view {
    display: grid;
    grid-template-columns: repeat(auto-fill, minmax(360px, 1fr));
}

/* Sample card */
.audio-card {
    border: 1px solid #1976d2;
    border-radius: 8px;
    padding: 12px 16px;
    background: #ffffff;
}

.audio-card.playing {
    border-width: 3px;
    box-shadow: 0 0 8px rgba(25, 118, 210, 0.4);
}

.audio-card.audio-error {
    border-color: #f44336;
}

.sample-info {
    font-weight: bold;
    color: #1976d2;
    margin-bottom: 8px;
}

.audio-player {
    width: 100%;
    margin-bottom: 8px;
}

.text-section h3 {
    font-size: 14px !important;
    margin: 6px 0 2px 0;
    color: #555;
}

.text-content, .modal-text-content {
    line-height: 1.6;
    white-space: pre-wrap;
}

.ground-truth .text-content {
    border-left: 3px solid #4CAF50;
    padding-left: 8px;
}

.prediction .text-content {
    border-left: 3px solid #ff9800;
    padding-left: 8px;
}

/* Dark theme */
.cards-container[data-theme="dark"] {
    background: #121212;
}

.cards-container[data-theme="dark"] .audio-card {
    background: #1e1e1e;
    color: #e0e0e0;
    border-color: #90caf9;
}

.cards-container[data-theme="dark"] .text-section h3 {
    color: #bdbdbd;
}

/* Pagination and statistics */
.pagination-info, .stats-panel {
    display: flex;
    justify-content: space-between;
    gap: 16px;
    padding: 8px 12px;
    font-weight: bold;
}

.stat-label {
    color: #666;
    margin-right: 6px;
}

.load-status, .error {
    padding: 10px 15px;
    border-radius: 6px;
    border: 2px solid #90caf9;
    background: #fafafa;
}

.error {
    border-color: #f44336;
    color: #d32f2f;
}

.empty-state {
    padding: 24px;
    text-align: center;
    color: #9E9E9E;
}
</style>
"""


def get_global_css() -> str:
    """Return the global stylesheet"""
    return GLOBAL_CSS


def create_header(components: Dict[str, Any]) -> None:
    """Title and statistics row"""
    with gr.Row():
        with gr.Column(scale=3):
            gr.Markdown("# 🎧 Audio Evaluation Review")
        with gr.Column(scale=2):
            components['stats_display'] = gr.HTML('<div class="stats-panel">Total Samples 0</div>')


def create_display_controls(components: Dict[str, Any]) -> None:
    """Font size, view and theme controls"""
    with gr.Row():
        components['font_decrease_btn'] = gr.Button("A−", size="sm")
        components['font_size_display'] = gr.Markdown(f"{DEFAULT_FONT_SIZE}px")
        components['font_increase_btn'] = gr.Button("A+", size="sm")
        components['list_view_btn'] = gr.Button("☰ List", size="sm")
        components['grid_view_btn'] = gr.Button("▦ Grid", size="sm")
        components['dark_mode_btn'] = gr.Button("🌙 Dark", size="sm")


def create_data_controls(components: Dict[str, Any]) -> None:
    """Results upload, retry and export"""
    with gr.Row():
        with gr.Column(scale=3):
            components['data_upload'] = gr.File(
                label="📁 Evaluation results (JSON or CSV)",
                file_types=[".json", ".csv"],
                type="filepath"
            )
        with gr.Column(scale=2):
            components['upload_status'] = gr.HTML('<div class="load-status">Waiting for evaluation data</div>')
            with gr.Row():
                components['retry_btn'] = gr.Button("🔄 Retry", size="sm")
                components['export_btn'] = gr.Button("📥 Export order", size="sm")
            components['export_file'] = gr.File(label="Export download", visible=False)


def create_pagination_controls(components: Dict[str, Any]) -> None:
    with gr.Row():
        components['prev_page_btn'] = gr.Button("← Previous", interactive=False)
        components['pagination_info'] = gr.HTML('<div class="pagination-info">Page 0 of 0</div>')
        components['next_page_btn'] = gr.Button("Next →", interactive=False)


def create_detail_panel(components: Dict[str, Any]) -> None:
    """Sample selector and the detail panel it opens"""
    with gr.Row():
        components['sample_number_input'] = gr.Number(
            label="Sample #",
            value=1,
            minimum=1,
            precision=0
        )
        components['open_detail_btn'] = gr.Button("🔍 Open sample")

    with gr.Group(visible=False) as detail_group:
        components['detail_group'] = detail_group
        components['detail_title'] = gr.Markdown("")
        components['detail_audio'] = gr.Audio(type="filepath", interactive=False, label="Audio")
        with gr.Row():
            with gr.Column():
                gr.Markdown("**Ground Truth**")
                components['detail_ground_truth'] = gr.HTML("")
            with gr.Column():
                gr.Markdown("**Model Prediction**")
                components['detail_prediction'] = gr.HTML("")
        gr.Markdown("**Differences** (red: missed by the model, green: added by the model)")
        components['detail_diff'] = gr.HTML("")
        with gr.Row():
            components['prev_sample_btn'] = gr.Button("← Previous sample")
            components['close_detail_btn'] = gr.Button("✖ Close")
            components['next_sample_btn'] = gr.Button("Next sample →")


def create_review_layout() -> Dict[str, Any]:
    """
    Build the complete review layout.

    Returns:
        Dictionary of the UI components handlers are wired to
    """
    components = {}

    gr.HTML(get_global_css())

    create_header(components)
    create_display_controls(components)
    create_data_controls(components)
    create_pagination_controls(components)

    components['cards_display'] = gr.HTML('<div class="cards-container list-view"></div>')

    create_detail_panel(components)

    return components
