"""Page model: one window of the reordered sequence."""

from dataclasses import dataclass, field
from typing import List

from .record import EvaluationRecord


@dataclass(frozen=True)
class Page:
    """
    A contiguous slice of the reordered sequence.

    Attributes:
        items: Records shown on this page, in presentation order
        page_index: Zero-based page number
        total_pages: Number of pages for the whole sequence
        start_index: Global index of the first item
        total_items: Length of the whole sequence
    """

    items: List[EvaluationRecord] = field(default_factory=list)
    page_index: int = 0
    total_pages: int = 0
    start_index: int = 0
    total_items: int = 0

    @property
    def end_index(self) -> int:
        """Exclusive global index of the last item."""
        return self.start_index + len(self.items)

    @property
    def range_label(self) -> str:
        if not self.items:
            return f"Showing 0 of {self.total_items} samples"
        return f"Showing {self.start_index + 1}-{self.end_index} of {self.total_items} samples"

    @property
    def page_label(self) -> str:
        if self.total_pages == 0:
            return "Page 0 of 0"
        return f"Page {self.page_index + 1} of {self.total_pages}"

    def display_number(self, local_index: int) -> int:
        """Positional number shown on a card; unrelated to the sample id."""
        return self.start_index + local_index + 1
