"""
Event handlers for UI components.

Plain functions over ApplicationState; app.py wires them to Gradio events
and turns the returned flags into ``gr.update`` calls.
"""

import logging
import os
import random
from typing import Optional, Tuple

import gradio as gr

from models import ApplicationState
from services import (
    DataManager,
    DiffEngine,
    ExportManager,
    Paginator,
    PreferenceStore,
    RenderEngine,
    ReorderEngine,
)
from services.render_engine import map_audio_path
from utils.config import AppConfig
from utils.performance import measure_time
from utils.validation import validate_index_bounds, validate_view_mode

logger = logging.getLogger(__name__)

RETRIES_EXHAUSTED_MESSAGE = "Failed to load data after multiple attempts. Please refresh the page."


def describe_load_error(error: Exception) -> str:
    """Map a loading exception to the message shown to the reviewer."""
    if isinstance(error, FileNotFoundError):
        return "Data file not found. Please check if the file exists."
    if isinstance(error, ValueError) and "Invalid data format" in str(error):
        return "Invalid data format. Please check the JSON file."
    return "Failed to load evaluation data."


def handle_data_load(
    file_path: str,
    app_state: Optional[ApplicationState] = None,
    config: Optional[AppConfig] = None,
    rng: Optional[random.Random] = None
) -> Tuple[ApplicationState, str]:
    """
    Load a results file, reorder it and start paging from the first page.

    Args:
        file_path: Path to the results file
        app_state: Previous state; its preferences and retry count carry over
        config: Runtime settings (defaults when omitted)
        rng: Random source for the shuffle; seeded from config when omitted

    Returns:
        Tuple of (new app_state, status message)
    """
    config = config or AppConfig()
    previous = app_state or ApplicationState(max_retries=config.max_retries)

    new_state = ApplicationState(
        paginator=Paginator(page_size=config.cards_per_page),
        source_path=file_path or "",
        retry_count=previous.retry_count,
        max_retries=config.max_retries,
        preferences=previous.preferences,
    )

    if not file_path:
        return new_state, "⚠️ Please choose a results file"

    try:
        data_manager = DataManager(file_path)
        records = data_manager.load()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error loading data from {file_path}: {e}")
        message = describe_load_error(e)
        gr.Warning(message)
        return new_state, f"❌ {message}"

    engine = ReorderEngine(
        rng=rng if rng is not None else random.Random(config.seed),
        max_repair_attempts=config.repair_attempts
    )
    new_state.records = engine.reorder(records)
    new_state.last_repair = engine.last_repair
    new_state.paginator.reset(new_state.records)
    new_state.retry_count = 0

    logger.info(f"Successfully loaded {len(new_state.records)} audio samples with reordering applied")

    if not new_state.records:
        return new_state, "⚠️ The results file contains no samples"

    return new_state, f"✅ Loaded {len(new_state.records)} samples"


def handle_retry_load(
    app_state: ApplicationState,
    config: Optional[AppConfig] = None,
    rng: Optional[random.Random] = None
) -> Tuple[ApplicationState, str]:
    """
    Retry the last load while the retry budget lasts.

    Returns:
        Tuple of (app_state, status message)
    """
    config = config or AppConfig()

    if not app_state.can_retry():
        gr.Warning(RETRIES_EXHAUSTED_MESSAGE)
        return app_state, f"❌ {RETRIES_EXHAUSTED_MESSAGE}"

    app_state.retry_count += 1
    logger.info(f"Retry attempt {app_state.retry_count}/{app_state.max_retries}")

    return handle_data_load(app_state.source_path or config.data_path, app_state, config, rng)


def get_page_view(app_state: ApplicationState, render_engine: RenderEngine) -> Tuple[str, str, bool, bool]:
    """
    Render the current page.

    Returns:
        Tuple of (cards_html, pagination_html, has_previous, has_next)
    """
    paginator = app_state.paginator or Paginator()
    page = paginator.current_page_view()

    with measure_time("render_page"):
        cards_html = render_engine.render_page(page, app_state.preferences)

    return (
        cards_html,
        render_engine.render_pagination_info(page),
        paginator.has_previous,
        paginator.has_next
    )


def get_stats_html(app_state: ApplicationState, render_engine: RenderEngine, diff_engine: DiffEngine) -> str:
    """Header statistics for the loaded records."""
    if not app_state.records:
        return render_engine.render_stats(0, None)

    return render_engine.render_stats(
        app_state.get_total_loaded(),
        diff_engine.corpus_word_error_rate(app_state.records)
    )


def handle_page_navigation(
    direction: str,
    app_state: ApplicationState,
    render_engine: RenderEngine
) -> Tuple[ApplicationState, str, str, bool, bool]:
    """
    Handle previous/next page buttons.

    Args:
        direction: "prev" or "next"
        app_state: Current application state

    Returns:
        Tuple of (app_state, cards_html, pagination_html, has_previous, has_next)
    """
    if direction not in ["prev", "next"]:
        gr.Warning(f"Invalid navigation direction: {direction}")
        return (app_state, *get_page_view(app_state, render_engine))

    paginator = app_state.paginator
    if paginator is None or paginator.total_items == 0:
        gr.Warning("No samples loaded", duration=1.0)
        return (app_state, *get_page_view(app_state, render_engine))

    if direction == "prev" and not paginator.previous():
        gr.Info("Already on the first page", duration=1.0)
    elif direction == "next" and not paginator.next():
        gr.Info("Already on the last page", duration=1.0)

    return (app_state, *get_page_view(app_state, render_engine))


def load_detail_to_ui(
    app_state: ApplicationState,
    render_engine: RenderEngine,
    diff_engine: DiffEngine
) -> Tuple[str, Optional[str], str, str, str]:
    """
    Build the detail view for the selected record.

    Returns:
        Tuple of (title_markdown, audio_file, ground_truth_html, prediction_html, diff_html);
        audio_file is None when the mapped file is not on disk
    """
    record = app_state.get_detail_record()
    if record is None:
        return "", None, "", "", ""

    font_size = app_state.preferences.font_size
    audio_file = map_audio_path(record.path, render_engine.audio_dir)
    if not os.path.isfile(audio_file):
        audio_file = None

    diff = diff_engine.compute_diff(record.ground_truth, record.prediction)
    wer = diff_engine.word_error_rate(record.ground_truth, record.prediction)

    return (
        f"{render_engine.render_detail_title(app_state.detail_index)} (WER {wer * 100:.1f}%)",
        audio_file,
        render_engine.render_text(record.ground_truth, font_size),
        render_engine.render_text(record.prediction, font_size),
        render_engine.render_diff_tags(diff, font_size)
    )


def handle_open_detail(
    display_number,
    app_state: ApplicationState,
    render_engine: RenderEngine,
    diff_engine: DiffEngine
) -> Tuple:
    """
    Open the detail view for the card showing ``display_number``.

    The paginator follows to the page holding that record.

    Returns:
        Tuple of (app_state, detail_visible, title, audio, ground_truth_html,
        prediction_html, diff_html, cards_html, pagination_html, has_previous, has_next)
    """
    total = len(app_state.records)
    try:
        index = int(display_number) - 1
    except (TypeError, ValueError):
        index = -1

    is_valid, error_msg = validate_index_bounds(index, total)
    if not is_valid:
        gr.Warning(f"Invalid sample number: {display_number}", duration=1.0)
        logger.debug(error_msg)
        visible = app_state.get_detail_record() is not None
        return (
            app_state, visible,
            *load_detail_to_ui(app_state, render_engine, diff_engine),
            *get_page_view(app_state, render_engine)
        )

    app_state.detail_index = index
    if app_state.paginator is not None:
        app_state.paginator.go_to(app_state.paginator.page_of(index))

    return (
        app_state, True,
        *load_detail_to_ui(app_state, render_engine, diff_engine),
        *get_page_view(app_state, render_engine)
    )


def handle_navigate_detail(
    direction: int,
    app_state: ApplicationState,
    render_engine: RenderEngine,
    diff_engine: DiffEngine
) -> Tuple:
    """
    Step the detail view by ``direction`` (-1 or +1); out of range is a no-op.

    Returns:
        Same tuple as ``handle_open_detail``
    """
    if app_state.detail_index is None:
        return (
            app_state, False,
            *load_detail_to_ui(app_state, render_engine, diff_engine),
            *get_page_view(app_state, render_engine)
        )

    new_index = app_state.detail_index + direction
    if 0 <= new_index < len(app_state.records):
        return handle_open_detail(new_index + 1, app_state, render_engine, diff_engine)

    return (
        app_state, True,
        *load_detail_to_ui(app_state, render_engine, diff_engine),
        *get_page_view(app_state, render_engine)
    )


def handle_close_detail(app_state: ApplicationState) -> Tuple[ApplicationState, bool, None]:
    """
    Close the detail view.

    Returns:
        Tuple of (app_state, detail_visible, audio_value); clearing the audio stops playback
    """
    app_state.detail_index = None
    return app_state, False, None


def format_font_size(font_size: int) -> str:
    return f"{font_size}px"


def handle_font_change(
    action: str,
    app_state: ApplicationState,
    store: PreferenceStore,
    render_engine: RenderEngine
) -> Tuple[ApplicationState, str, str]:
    """
    Increase or decrease the transcript font size.

    Args:
        action: "increase" or "decrease"

    Returns:
        Tuple of (app_state, cards_html, font_size_label)
    """
    preferences = app_state.preferences
    changed = preferences.increase_font_size() if action == "increase" else preferences.decrease_font_size()
    if changed:
        store.save(preferences)

    cards_html = get_page_view(app_state, render_engine)[0]
    return app_state, cards_html, format_font_size(preferences.font_size)


def handle_view_change(
    view: str,
    app_state: ApplicationState,
    store: PreferenceStore,
    render_engine: RenderEngine
) -> Tuple[ApplicationState, str]:
    """
    Switch between list and grid layout.

    Returns:
        Tuple of (app_state, cards_html)
    """
    is_valid, error_msg = validate_view_mode(view)
    if not is_valid:
        gr.Warning(error_msg, duration=1.0)
    else:
        app_state.preferences.set_view(view)
        store.save(app_state.preferences)

    return app_state, get_page_view(app_state, render_engine)[0]


def dark_mode_button_label(dark_mode: bool) -> str:
    return "☀️ Light" if dark_mode else "🌙 Dark"


def handle_dark_mode_toggle(
    app_state: ApplicationState,
    store: PreferenceStore,
    render_engine: RenderEngine
) -> Tuple[ApplicationState, str, str]:
    """
    Toggle the dark theme.

    Returns:
        Tuple of (app_state, cards_html, button_label)
    """
    dark_mode = app_state.preferences.toggle_dark_mode()
    store.save(app_state.preferences)

    return app_state, get_page_view(app_state, render_engine)[0], dark_mode_button_label(dark_mode)


def handle_export(app_state: ApplicationState, export_manager: ExportManager) -> Tuple[Optional[str], str]:
    """
    Export the presentation order to JSON.

    Returns:
        Tuple of (file_path, status_message)
    """
    if not app_state.records:
        gr.Warning("No samples to export", duration=2.0)
        return None, "⚠️ No samples to export"

    try:
        file_path = export_manager.export_to_json(app_state.records, app_state.source_path or "export")
    except (ValueError, PermissionError) as e:
        gr.Warning(f"Export failed: {str(e)}")
        return None, f"❌ Export failed: {str(e)}"

    gr.Info(f"Exported {len(app_state.records)} samples", duration=2.0)
    return file_path, f"✅ Exported to: {file_path}"
