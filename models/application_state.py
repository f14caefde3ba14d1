"""
Application state model for the Audio Evaluation Review Workbench.

Holds everything one review session needs: the reordered records, the
paginator over them, the detail view selection and load bookkeeping.
"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from services.paginator import Paginator
    from services.reorder_engine import RepairResult

from .preferences import Preferences
from .record import EvaluationRecord


@dataclass
class ApplicationState:
    """
    Session state container.

    Attributes:
        records: Reordered records for this session
        paginator: Paginator over ``records``
        source_path: Path of the loaded results file
        detail_index: Global index shown in the detail view, or None
        retry_count: Load retries used since the last successful load
        max_retries: Retry budget for loading
        last_repair: Outcome of the adjacency repair for this load
        preferences: Display preferences for this session
    """

    records: List[EvaluationRecord] = field(default_factory=list)
    paginator: Optional["Paginator"] = None
    source_path: str = ""
    detail_index: Optional[int] = None
    retry_count: int = 0
    max_retries: int = 3
    last_repair: Optional["RepairResult"] = None
    preferences: Preferences = field(default_factory=Preferences)

    def get_detail_record(self) -> Optional[EvaluationRecord]:
        """Get the record open in the detail view."""
        if self.detail_index is not None and 0 <= self.detail_index < len(self.records):
            return self.records[self.detail_index]
        return None

    def get_total_loaded(self) -> int:
        return len(self.records)

    def can_retry(self) -> bool:
        return self.retry_count < self.max_retries
