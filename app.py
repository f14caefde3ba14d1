"""
Audio Evaluation Review Workbench

Main entry point for the Gradio application.
"""

import logging
import os
import random
import tempfile
from typing import Optional

import gradio as gr

from models import ApplicationState
from services import DiffEngine, ExportManager, PreferenceStore, RenderEngine
from ui.layout import create_review_layout
from ui.event_handlers import (
    dark_mode_button_label,
    format_font_size,
    get_page_view,
    get_stats_html,
    handle_close_detail,
    handle_dark_mode_toggle,
    handle_data_load,
    handle_export,
    handle_font_change,
    handle_navigate_detail,
    handle_open_detail,
    handle_page_navigation,
    handle_retry_load,
    handle_view_change
)
from utils.config import AppConfig
from utils.performance import get_monitor

logger = logging.getLogger(__name__)


def main(config: Optional[AppConfig] = None, rng: Optional[random.Random] = None):
    """Build the application."""
    config = config or AppConfig.from_env()

    render_engine = RenderEngine(audio_dir=config.audio_dir)
    diff_engine = DiffEngine()
    store = PreferenceStore(config.prefs_path)
    export_manager = ExportManager(output_dir=tempfile.gettempdir())

    with gr.Blocks(title="Audio Evaluation Review") as app:

        app_state = gr.State(ApplicationState(max_retries=config.max_retries))

        components = create_review_layout()

        page_outputs = [
            components['cards_display'],
            components['pagination_info'],
            components['prev_page_btn'],
            components['next_page_btn']
        ]

        load_outputs = [
            app_state,
            components['upload_status'],
            components['stats_display'],
            *page_outputs,
            components['detail_group'],
            components['font_size_display'],
            components['dark_mode_btn']
        ]

        detail_outputs = [
            app_state,
            components['detail_group'],
            components['detail_title'],
            components['detail_audio'],
            components['detail_ground_truth'],
            components['detail_prediction'],
            components['detail_diff'],
            *page_outputs
        ]

        def page_updates(state):
            cards_html, pagination_html, has_previous, has_next = get_page_view(state, render_engine)
            return (
                cards_html, pagination_html,
                gr.update(interactive=has_previous), gr.update(interactive=has_next)
            )

        def after_load(state, status_msg):
            preferences = state.preferences
            if status_msg.startswith("❌"):
                status_html = render_engine.render_error(status_msg)
            else:
                status_html = render_engine.render_status(status_msg)
            return (
                state,
                status_html,
                get_stats_html(state, render_engine, diff_engine),
                *page_updates(state),
                gr.update(visible=False),
                format_font_size(preferences.font_size),
                dark_mode_button_label(preferences.dark_mode)
            )

        def detail_updates(result):
            state, visible, title, audio, ground_truth, prediction, diff, cards, pagination, has_prev, has_next = result
            return (
                state, gr.update(visible=visible), title, audio, ground_truth, prediction, diff,
                cards, pagination, gr.update(interactive=has_prev), gr.update(interactive=has_next)
            )

        # ========== Loading ==========

        def on_startup(state):
            state.preferences = store.load()
            if not os.path.isfile(config.data_path):
                logger.info(f"No results file at {config.data_path}; waiting for upload")
                return after_load(state, "Waiting for evaluation data")
            new_state, msg = handle_data_load(config.data_path, state, config, rng)
            get_monitor().log_stats()
            return after_load(new_state, msg)

        app.load(fn=on_startup, inputs=[app_state], outputs=load_outputs)

        def on_upload(file_path, state):
            new_state, msg = handle_data_load(file_path, state, config, rng)
            return after_load(new_state, msg)

        components['data_upload'].upload(
            fn=render_engine.render_loading,
            outputs=[components['upload_status']]
        ).then(
            fn=on_upload,
            inputs=[components['data_upload'], app_state],
            outputs=load_outputs
        )

        def on_retry(state):
            new_state, msg = handle_retry_load(state, config, rng)
            return after_load(new_state, msg)

        components['retry_btn'].click(fn=on_retry, inputs=[app_state], outputs=load_outputs)

        # ========== Pagination ==========

        def on_page(direction, state):
            state, *_ = handle_page_navigation(direction, state, render_engine)
            return (state, *page_updates(state))

        components['prev_page_btn'].click(
            fn=lambda state: on_page("prev", state),
            inputs=[app_state],
            outputs=[app_state, *page_outputs]
        )

        components['next_page_btn'].click(
            fn=lambda state: on_page("next", state),
            inputs=[app_state],
            outputs=[app_state, *page_outputs]
        )

        # ========== Detail view ==========

        components['open_detail_btn'].click(
            fn=lambda number, state: detail_updates(
                handle_open_detail(number, state, render_engine, diff_engine)
            ),
            inputs=[components['sample_number_input'], app_state],
            outputs=detail_outputs
        )

        components['prev_sample_btn'].click(
            fn=lambda state: detail_updates(handle_navigate_detail(-1, state, render_engine, diff_engine)),
            inputs=[app_state],
            outputs=detail_outputs
        )

        components['next_sample_btn'].click(
            fn=lambda state: detail_updates(handle_navigate_detail(1, state, render_engine, diff_engine)),
            inputs=[app_state],
            outputs=detail_outputs
        )

        def on_close(state):
            state, visible, audio = handle_close_detail(state)
            return state, gr.update(visible=visible), audio

        components['close_detail_btn'].click(
            fn=on_close,
            inputs=[app_state],
            outputs=[app_state, components['detail_group'], components['detail_audio']]
        )

        # ========== Display preferences ==========

        components['font_increase_btn'].click(
            fn=lambda state: handle_font_change("increase", state, store, render_engine),
            inputs=[app_state],
            outputs=[app_state, components['cards_display'], components['font_size_display']]
        )

        components['font_decrease_btn'].click(
            fn=lambda state: handle_font_change("decrease", state, store, render_engine),
            inputs=[app_state],
            outputs=[app_state, components['cards_display'], components['font_size_display']]
        )

        components['list_view_btn'].click(
            fn=lambda state: handle_view_change("list", state, store, render_engine),
            inputs=[app_state],
            outputs=[app_state, components['cards_display']]
        )

        components['grid_view_btn'].click(
            fn=lambda state: handle_view_change("grid", state, store, render_engine),
            inputs=[app_state],
            outputs=[app_state, components['cards_display']]
        )

        components['dark_mode_btn'].click(
            fn=lambda state: handle_dark_mode_toggle(state, store, render_engine),
            inputs=[app_state],
            outputs=[app_state, components['cards_display'], components['dark_mode_btn']]
        )

        # ========== Export ==========

        def on_export(state):
            file_path, status_msg = handle_export(state, export_manager)
            return (
                gr.update(value=file_path, visible=file_path is not None),
                render_engine.render_status(status_msg)
            )

        components['export_btn'].click(
            fn=on_export,
            inputs=[app_state],
            outputs=[components['export_file'], components['upload_status']]
        )

    return app


def launch_options(config: AppConfig) -> dict:
    """
    Keyword arguments for app.launch().

    The theme and the single-playback head script are launch settings
    since Gradio 6.
    """
    render_engine = RenderEngine(audio_dir=config.audio_dir)
    return {
        'theme': gr.themes.Soft(),
        'head': render_engine.get_head(),
        'show_error': True,
        'quiet': False,
        'allowed_paths': [os.path.abspath(config.audio_dir)]
    }


if __name__ == "__main__":
    config = AppConfig.from_env()
    app = main(config)
    app.launch(**launch_options(config))
