"""
Paginator for the reordered sample sequence.

Slices the presentation order into fixed-size pages and tracks which page
is shown.
"""

from typing import List, Optional, Sequence

from models import EvaluationRecord, Page

CARDS_PER_PAGE = 10


class Paginator:
    """
    Fixed-size paging over a sequence of records.

    Attributes:
        page_size: Number of cards per page
        sequence: Records being paged, in presentation order
        current_page: Zero-based index of the page shown
    """

    def __init__(self, sequence: Optional[Sequence[EvaluationRecord]] = None, page_size: int = CARDS_PER_PAGE):
        """
        Initialize Paginator.

        Args:
            sequence: Records to page over (empty when omitted)
            page_size: Cards per page (default: 10)

        Raises:
            ValueError: If page_size is not positive
        """
        if page_size < 1:
            raise ValueError(f"Invalid page size: {page_size}. Must be at least 1")

        self.page_size = page_size
        self.sequence: List[EvaluationRecord] = []
        self.current_page = 0
        self.reset(sequence or [])

    def reset(self, sequence: Sequence[EvaluationRecord]):
        """Page over a new sequence, starting again from the first page."""
        self.sequence = list(sequence)
        self.current_page = 0

    @property
    def total_items(self) -> int:
        return len(self.sequence)

    @property
    def total_pages(self) -> int:
        return (self.total_items + self.page_size - 1) // self.page_size

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    def next(self) -> bool:
        """
        Move to the next page.

        Returns:
            True if the page changed, False when already on the last page
        """
        if self.has_next:
            self.current_page += 1
            return True
        return False

    def previous(self) -> bool:
        """
        Move to the previous page.

        Returns:
            True if the page changed, False when already on the first page
        """
        if self.has_previous:
            self.current_page -= 1
            return True
        return False

    def go_to(self, page_index: int) -> int:
        """Jump to a page, clamped to the valid range. Returns the new page."""
        if self.total_pages == 0:
            self.current_page = 0
        else:
            self.current_page = max(0, min(page_index, self.total_pages - 1))
        return self.current_page

    def page_of(self, global_index: int) -> int:
        """Page index holding the record at ``global_index``."""
        return global_index // self.page_size

    def current_slice(self) -> List[EvaluationRecord]:
        start = self.current_page * self.page_size
        end = min(start + self.page_size, self.total_items)
        return self.sequence[start:end]

    def current_page_view(self) -> Page:
        """Build the Page shown for the current page index."""
        return Page(
            items=self.current_slice(),
            page_index=self.current_page,
            total_pages=self.total_pages,
            start_index=self.current_page * self.page_size,
            total_items=self.total_items,
        )

    def display_number(self, local_index: int) -> int:
        """Number shown on the card at ``local_index`` of the current page."""
        return self.current_page * self.page_size + local_index + 1
