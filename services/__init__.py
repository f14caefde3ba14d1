"""Business logic services for the Audio Evaluation Review Workbench."""

from .data_manager import DataManager
from .diff_engine import DiffEngine
from .export_manager import ExportManager
from .paginator import Paginator
from .preference_store import PreferenceStore
from .render_engine import RenderEngine
from .reorder_engine import ReorderEngine

__all__ = [
    "DataManager",
    "DiffEngine",
    "ExportManager",
    "Paginator",
    "PreferenceStore",
    "RenderEngine",
    "ReorderEngine",
]
