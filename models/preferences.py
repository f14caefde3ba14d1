"""
Display preference model.

Font size, card layout and theme chosen by the reviewer.
"""

from dataclasses import dataclass, asdict

MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 28
DEFAULT_FONT_SIZE = 18
FONT_SIZE_STEP = 2

VIEW_MODES = ("list", "grid")
DEFAULT_VIEW = "list"


@dataclass
class Preferences:
    """
    Reviewer display preferences.

    Attributes:
        font_size: Transcript font size in pixels
        view: Card layout, ``list`` or ``grid``
        dark_mode: Whether the dark theme is active
    """

    font_size: int = DEFAULT_FONT_SIZE
    view: str = DEFAULT_VIEW
    dark_mode: bool = False

    def increase_font_size(self) -> bool:
        """Step the font size up; returns False when already at the maximum."""
        if self.font_size < MAX_FONT_SIZE:
            self.font_size = min(self.font_size + FONT_SIZE_STEP, MAX_FONT_SIZE)
            return True
        return False

    def decrease_font_size(self) -> bool:
        """Step the font size down; returns False when already at the minimum."""
        if self.font_size > MIN_FONT_SIZE:
            self.font_size = max(self.font_size - FONT_SIZE_STEP, MIN_FONT_SIZE)
            return True
        return False

    def set_view(self, view: str) -> None:
        if view not in VIEW_MODES:
            raise ValueError(f"Invalid view: {view}. Must be one of {list(VIEW_MODES)}")
        self.view = view

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def to_dict(self) -> dict:
        return asdict(self)
