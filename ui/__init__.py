"""UI components for the Audio Evaluation Review Workbench."""

from .layout import create_review_layout, get_global_css
from .event_handlers import (
    handle_data_load,
    handle_retry_load,
    get_page_view,
    get_stats_html,
    handle_page_navigation,
    load_detail_to_ui,
    handle_open_detail,
    handle_navigate_detail,
    handle_close_detail,
    handle_font_change,
    handle_view_change,
    handle_dark_mode_toggle,
    handle_export
)

__all__ = [
    "create_review_layout",
    "get_global_css",
    "handle_data_load",
    "handle_retry_load",
    "get_page_view",
    "get_stats_html",
    "handle_page_navigation",
    "load_detail_to_ui",
    "handle_open_detail",
    "handle_navigate_detail",
    "handle_close_detail",
    "handle_font_change",
    "handle_view_change",
    "handle_dark_mode_toggle",
    "handle_export"
]
