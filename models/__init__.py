"""Data models for the Audio Evaluation Review Workbench."""

from .record import EvaluationRecord
from .page import Page
from .preferences import Preferences
from .application_state import ApplicationState

__all__ = ["EvaluationRecord", "Page", "Preferences", "ApplicationState"]
