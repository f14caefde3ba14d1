"""
End-to-end integration tests for the review workflow.

Tests the full workflow: Load results → Reorder → Page → Inspect sample →
Adjust display → Export
"""

import json
import os
import random
import tempfile
import warnings

import pytest

from services import DiffEngine, ExportManager, PreferenceStore, RenderEngine
from services.reorder_engine import count_violations
from ui.event_handlers import (
    RETRIES_EXHAUSTED_MESSAGE,
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
    handle_view_change,
)
from utils.config import AppConfig


def create_results_file(num_rows=100, payload=None):
    """Helper to create a results JSON file."""
    if payload is None:
        payload = {
            'results': [
                {
                    'path': f'/eval/run1/sample_{i}.wav',
                    'ground_truth': f'the reference sentence number {i}',
                    'prediction': f'the predicted sentence number {i}'
                }
                for i in range(1, num_rows + 1)
            ]
        }
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False, encoding='utf-8') as f:
        json.dump(payload, f)
        return f.name


@pytest.fixture
def workspace():
    with tempfile.TemporaryDirectory() as temp_dir:
        yield {
            'config': AppConfig(prefs_path=os.path.join(temp_dir, "prefs.json"), audio_dir=temp_dir),
            'render_engine': RenderEngine(audio_dir=temp_dir),
            'diff_engine': DiffEngine(),
            'store': PreferenceStore(os.path.join(temp_dir, "prefs.json")),
            'export_manager': ExportManager(output_dir=temp_dir),
            'dir': temp_dir,
        }


def test_complete_review_workflow(workspace):
    """
    Load 100 samples, page through them, inspect one sample, change the
    display and export the presentation order.
    """
    results_path = create_results_file(100)
    render_engine = workspace['render_engine']
    diff_engine = workspace['diff_engine']

    try:
        # Step 1: Load and reorder
        app_state, msg = handle_data_load(results_path, None, workspace['config'], random.Random(0))
        assert msg == "✅ Loaded 100 samples"
        assert len(app_state.records) == 100
        assert app_state.last_repair.converged
        assert count_violations(app_state.records) == 0

        # Step 2: First page
        cards_html, pagination_html, has_previous, has_next = get_page_view(app_state, render_engine)
        assert "Page 1 of 10" in pagination_html
        assert "Showing 1-10 of 100 samples" in pagination_html
        assert "Sample #1" in cards_html and "Sample #10" in cards_html
        assert has_previous is False and has_next is True

        # Step 3: Paging
        app_state, cards_html, pagination_html, has_previous, has_next = handle_page_navigation(
            "next", app_state, render_engine
        )
        assert "Page 2 of 10" in pagination_html
        assert "Sample #11" in cards_html
        assert has_previous is True

        # Step 4: Open sample 35 from another page
        result = handle_open_detail(35, app_state, render_engine, diff_engine)
        app_state, visible, title, audio, ground_truth_html, prediction_html, diff_html = result[:7]
        assert len(result) == 11
        assert visible is True
        assert title.startswith("### Sample #35 Analysis")
        assert audio is None
        assert app_state.detail_index == 34
        assert app_state.paginator.current_page == 3
        assert "diff-missing" in diff_html

        record = app_state.records[34]
        assert record.ground_truth in ground_truth_html
        assert record.prediction in prediction_html

        # Step 5: Step to the next sample, then close
        result = handle_navigate_detail(1, app_state, render_engine, diff_engine)
        assert result[0].detail_index == 35
        assert result[2].startswith("### Sample #36 Analysis")

        app_state, visible, audio = handle_close_detail(app_state)
        assert visible is False
        assert audio is None
        assert app_state.detail_index is None

        # Step 6: Display preferences are applied and saved
        app_state, cards_html, font_label = handle_font_change("increase", app_state, workspace['store'], render_engine)
        assert font_label == "20px"
        assert "font-size: 20px" in cards_html

        app_state, cards_html = handle_view_change("grid", app_state, workspace['store'], render_engine)
        assert "grid-view" in cards_html

        app_state, cards_html, label = handle_dark_mode_toggle(app_state, workspace['store'], render_engine)
        assert 'data-theme="dark"' in cards_html
        assert label == "☀️ Light"

        saved = workspace['store'].load()
        assert (saved.font_size, saved.view, saved.dark_mode) == (20, "grid", True)

        # Step 7: Export the order
        export_path, msg = handle_export(app_state, workspace['export_manager'])
        assert msg.startswith("✅")
        with open(export_path, 'r', encoding='utf-8') as f:
            document = json.load(f)
        assert [entry['path'] for entry in document['results']] == [r.path for r in app_state.records]
    finally:
        os.unlink(results_path)


def test_stats_panel(workspace):
    results_path = create_results_file(4)
    try:
        app_state, _ = handle_data_load(results_path, None, workspace['config'], random.Random(0))
        stats_html = get_stats_html(app_state, workspace['render_engine'], workspace['diff_engine'])

        assert ">4<" in stats_html
        assert "20.0%" in stats_html
    finally:
        os.unlink(results_path)


def test_page_navigation_bounds(workspace):
    results_path = create_results_file(15)
    render_engine = workspace['render_engine']
    try:
        app_state, _ = handle_data_load(results_path, None, workspace['config'], random.Random(0))

        app_state, _, pagination_html, _, _ = handle_page_navigation("prev", app_state, render_engine)
        assert "Page 1 of 2" in pagination_html

        handle_page_navigation("next", app_state, render_engine)
        app_state, _, pagination_html, has_previous, has_next = handle_page_navigation(
            "next", app_state, render_engine
        )
        assert "Page 2 of 2" in pagination_html
        assert "Showing 11-15 of 15 samples" in pagination_html
        assert has_next is False
    finally:
        os.unlink(results_path)


def test_same_seed_same_order(workspace):
    results_path = create_results_file(100)
    try:
        first, _ = handle_data_load(results_path, None, workspace['config'], random.Random(5))
        second, _ = handle_data_load(results_path, None, workspace['config'], random.Random(5))
        assert first.records == second.records
    finally:
        os.unlink(results_path)


def test_config_seed_used_without_rng(workspace):
    results_path = create_results_file(100)
    config = workspace['config']
    config.seed = 99
    try:
        first, _ = handle_data_load(results_path, None, config)
        second, _ = handle_data_load(results_path, None, config)
        assert first.records == second.records
    finally:
        os.unlink(results_path)


def test_invalid_sample_number_keeps_detail_closed(workspace):
    results_path = create_results_file(5)
    render_engine = workspace['render_engine']
    try:
        app_state, _ = handle_data_load(results_path, None, workspace['config'], random.Random(0))

        result = handle_open_detail(6, app_state, render_engine, workspace['diff_engine'])
        assert result[1] is False
        assert result[0].detail_index is None

        result = handle_open_detail(None, app_state, render_engine, workspace['diff_engine'])
        assert result[1] is False
    finally:
        os.unlink(results_path)


def test_detail_navigation_stops_at_last_sample(workspace):
    results_path = create_results_file(3)
    render_engine = workspace['render_engine']
    diff_engine = workspace['diff_engine']
    try:
        app_state, _ = handle_data_load(results_path, None, workspace['config'], random.Random(0))
        handle_open_detail(3, app_state, render_engine, diff_engine)

        result = handle_navigate_detail(1, app_state, render_engine, diff_engine)

        assert result[0].detail_index == 2
        assert result[1] is True
    finally:
        os.unlink(results_path)


def test_detail_plays_local_audio(workspace):
    results_path = create_results_file(2)
    audio_path = os.path.join(workspace['dir'], "sample_00002.wav")
    with open(audio_path, 'wb') as f:
        f.write(b"RIFF")
    try:
        app_state, _ = handle_data_load(results_path, None, workspace['config'], random.Random(0))
        number = [r.sample_id for r in app_state.records].index(2) + 1

        result = handle_open_detail(number, app_state, workspace['render_engine'], workspace['diff_engine'])

        assert result[3] == f"{workspace['dir']}/sample_00002.wav"
    finally:
        os.unlink(results_path)


def test_missing_file_message(workspace):
    app_state, msg = handle_data_load("/nonexistent/results.json", None, workspace['config'])

    assert msg == "❌ Data file not found. Please check if the file exists."
    assert app_state.records == []


def test_invalid_format_message(workspace):
    results_path = create_results_file(payload={'samples': []})
    try:
        app_state, msg = handle_data_load(results_path, None, workspace['config'])
        assert msg == "❌ Invalid data format. Please check the JSON file."
    finally:
        os.unlink(results_path)


def test_empty_results_message(workspace):
    results_path = create_results_file(payload={'results': []})
    try:
        app_state, msg = handle_data_load(results_path, None, workspace['config'])

        assert msg == "⚠️ The results file contains no samples"
        cards_html, pagination_html, _, _ = get_page_view(app_state, workspace['render_engine'])
        assert "No samples loaded" in cards_html
        assert "Page 0 of 0" in pagination_html
    finally:
        os.unlink(results_path)


def test_no_file_chosen(workspace):
    _, msg = handle_data_load("", None, workspace['config'])
    assert msg == "⚠️ Please choose a results file"


def test_retry_budget(workspace):
    config = workspace['config']
    app_state, _ = handle_data_load("/nonexistent/results.json", None, config)

    for attempt in range(1, config.max_retries + 1):
        app_state, msg = handle_retry_load(app_state, config)
        assert app_state.retry_count == attempt
        assert msg.startswith("❌ Data file not found")

    app_state, msg = handle_retry_load(app_state, config)
    assert msg == f"❌ {RETRIES_EXHAUSTED_MESSAGE}"
    assert app_state.retry_count == config.max_retries


def test_retry_success_resets_budget(workspace):
    config = workspace['config']
    results_path = create_results_file(5)
    try:
        app_state, _ = handle_data_load(results_path, None, config, random.Random(0))
        app_state.retry_count = 2

        app_state, msg = handle_retry_load(app_state, config, random.Random(0))

        assert msg == "✅ Loaded 5 samples"
        assert app_state.retry_count == 0
    finally:
        os.unlink(results_path)


def test_preferences_survive_reload(workspace):
    results_path = create_results_file(5)
    try:
        app_state, _ = handle_data_load(results_path, None, workspace['config'], random.Random(0))
        handle_view_change("grid", app_state, workspace['store'], workspace['render_engine'])

        reloaded, _ = handle_data_load(results_path, app_state, workspace['config'], random.Random(1))

        assert reloaded.preferences.view == "grid"
    finally:
        os.unlink(results_path)


def test_export_without_records(workspace):
    app_state, _ = handle_data_load("", None, workspace['config'])

    export_path, msg = handle_export(app_state, workspace['export_manager'])

    assert export_path is None
    assert msg == "⚠️ No samples to export"


def test_app_builds(workspace):
    import gradio as gr
    from app import main

    app = main(workspace['config'], random.Random(0))

    assert isinstance(app, gr.Blocks)


def test_app_builds_without_launch_warnings(workspace):
    from app import main

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        main(workspace['config'], random.Random(0))

    messages = [str(w.message) for w in caught]
    assert not [m for m in messages if "launch()" in m]


def test_launch_options(workspace):
    from app import launch_options

    options = launch_options(workspace['config'])

    assert options['head'] == workspace['render_engine'].get_head()
    assert "<script>" in options['head']
    assert options['theme'] is not None
    assert options['allowed_paths'] == [os.path.abspath(workspace['dir'])]
    assert options['show_error'] is True
