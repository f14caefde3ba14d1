"""
PreferenceStore for persisting display preferences.

Preferences live in a small JSON file. Failing to read or write it never
interrupts a review session: the problem is logged and defaults are used.
"""

import json
import logging
import os

from models import Preferences
from utils.validation import validate_font_size, validate_view_mode

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Reads and writes Preferences as JSON.

    Attributes:
        path: Location of the preferences file
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Preferences:
        """
        Load saved preferences.

        Values that are missing or out of range fall back to defaults.
        """
        preferences = Preferences()

        if not os.path.exists(self.path):
            return preferences

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                saved = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load preferences from {self.path}: {e}")
            return preferences

        if not isinstance(saved, dict):
            logger.warning(f"Ignoring malformed preferences file {self.path}")
            return preferences

        font_size = saved.get('font_size')
        if validate_font_size(font_size)[0]:
            preferences.font_size = font_size

        view = saved.get('view')
        if validate_view_mode(view)[0]:
            preferences.view = view

        if isinstance(saved.get('dark_mode'), bool):
            preferences.dark_mode = saved['dark_mode']

        return preferences

    def save(self, preferences: Preferences) -> bool:
        """
        Persist preferences.

        Returns:
            True on success, False if the file could not be written
        """
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(preferences.to_dict(), f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save preferences to {self.path}: {e}")
            return False

        return True
