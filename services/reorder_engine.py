"""
ReorderEngine for sample presentation order.

Turns the loaded evaluation results into the order reviewers see them in:
the prioritized samples are shuffled to the front, the ordinary samples keep
their order in the middle and the end group is placed last. A bounded repair
pass then breaks up neighbouring samples with consecutive numbers from the
same mixed range.
"""

import logging
import random
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from models import EvaluationRecord
from utils.performance import monitor_performance

logger = logging.getLogger(__name__)

SAMPLE_PATH_PATTERN = re.compile(r'sample_([0-9]+)\.wav\Z')

REPAIR_MAX_ATTEMPTS = 100

# Positional slices (0-based, end exclusive) into the loaded results.
FRONT_FIRST_SLICE = slice(0, 15)
FRONT_SECOND_SLICE = slice(69, 88)
ORDINARY_SLICES = (slice(15, 59), slice(88, None))
END_SLICE = slice(59, 69)


@dataclass(frozen=True)
class SampleRange:
    """
    Closed interval of sample numbers with a placement role.

    Attributes:
        name: Short label (R1..R5)
        low: Lowest sample number in the range
        high: Highest sample number, or None for an open upper bound
        role: ``front``, ``ordinary`` or ``end``
        adjacency_sensitive: Whether consecutive numbers may not sit side by side
    """

    name: str
    low: int
    high: Optional[int]
    role: str
    adjacency_sensitive: bool

    def contains(self, sample_id: int) -> bool:
        if sample_id < self.low:
            return False
        return self.high is None or sample_id <= self.high


RANGES = (
    SampleRange("R1", 1, 15, "front", True),
    SampleRange("R2", 70, 88, "front", True),
    SampleRange("R3", 16, 59, "ordinary", False),
    SampleRange("R4", 89, None, "ordinary", False),
    SampleRange("R5", 60, 69, "end", True),
)

PROBLEMATIC_RANGES = tuple(r for r in RANGES if r.adjacency_sensitive)


def extract_sample_id(path: str) -> int:
    """
    Parse the sample number out of an audio path.

    ``foo/sample_00042.wav`` gives 42. Paths that do not end in
    ``sample_<digits>.wav`` give 0.
    """
    match = SAMPLE_PATH_PATTERN.search(path)
    if match:
        return int(match.group(1))
    return 0


def classify_sample_id(sample_id: int) -> Optional[SampleRange]:
    """Return the range a sample number belongs to, or None (e.g. for 0)."""
    for sample_range in RANGES:
        if sample_range.contains(sample_id):
            return sample_range
    return None


def same_problematic_range_adjacent(id_a: int, id_b: int) -> bool:
    """
    Check whether two sample numbers may not be shown next to each other.

    True only when they differ by exactly one and both lie in the same
    adjacency-sensitive range (R1, R2 or R5).
    """
    if abs(id_a - id_b) != 1:
        return False
    return any(r.contains(id_a) and r.contains(id_b) for r in PROBLEMATIC_RANGES)


@dataclass
class Partition:
    """
    The four positional groups of a results sequence.

    Attributes:
        front_first: Positions 0-14
        front_second: Positions 69-87
        ordinary: Positions 15-58 followed by 88 onwards
        end: Positions 59-68
    """

    front_first: List[EvaluationRecord] = field(default_factory=list)
    front_second: List[EvaluationRecord] = field(default_factory=list)
    ordinary: List[EvaluationRecord] = field(default_factory=list)
    end: List[EvaluationRecord] = field(default_factory=list)

    def sizes(self) -> tuple:
        return len(self.front_first), len(self.front_second), len(self.ordinary), len(self.end)


def partition(records: Sequence[EvaluationRecord]) -> Partition:
    """
    Split records into groups by their position in the loaded sequence.

    Grouping is positional, not by parsed sample number. Slices clamp, so
    short inputs just produce shorter or empty groups.
    """
    records = list(records)
    ordinary = []
    for ordinary_slice in ORDINARY_SLICES:
        ordinary.extend(records[ordinary_slice])

    return Partition(
        front_first=records[FRONT_FIRST_SLICE],
        front_second=records[FRONT_SECOND_SLICE],
        ordinary=ordinary,
        end=records[END_SLICE],
    )


def shuffle(items: Sequence, rng: Optional[random.Random] = None) -> list:
    """
    Return a uniformly shuffled copy of ``items`` (Fisher-Yates).

    Args:
        items: Sequence to shuffle; left untouched
        rng: Random source; a fresh unseeded one when omitted

    Returns:
        New list with the same elements in random order
    """
    rng = rng if rng is not None else random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


@dataclass
class RepairResult:
    """
    Outcome of an adjacency repair pass.

    Attributes:
        records: Repaired sequence
        converged: True when no flagged neighbours remain
        attempts: Outer attempts spent fixing violations
        swaps: Swaps actually performed
    """

    records: List[EvaluationRecord]
    converged: bool
    attempts: int
    swaps: int


def _first_violation(sample_ids: List[int]) -> Optional[int]:
    for i in range(len(sample_ids) - 1):
        if same_problematic_range_adjacent(sample_ids[i], sample_ids[i + 1]):
            return i
    return None


def _first_swap_target(sample_ids: List[int], i: int) -> Optional[int]:
    anchor = sample_ids[i]
    for j in range(i + 2, len(sample_ids)):
        if not same_problematic_range_adjacent(anchor, sample_ids[j]):
            return j
    return None


def repair(records: Sequence[EvaluationRecord], max_attempts: int = REPAIR_MAX_ATTEMPTS) -> RepairResult:
    """
    Break up neighbouring records with consecutive numbers from one mixed range.

    Each attempt fixes the leftmost flagged pair by swapping its right-hand
    record with the leftmost record further on that does not clash with the
    left-hand one, then rescans from the start. Stops when no pair is flagged
    or after ``max_attempts`` attempts; in the latter case the sequence is
    returned as is and may still contain violations.

    Args:
        records: Candidate sequence; left untouched
        max_attempts: Attempt budget

    Returns:
        RepairResult with the repaired copy and convergence details
    """
    result = list(records)
    sample_ids = [extract_sample_id(record.path) for record in result]
    attempts = 0
    swaps = 0

    while attempts < max_attempts:
        i = _first_violation(sample_ids)
        if i is None:
            break

        j = _first_swap_target(sample_ids, i)
        if j is not None:
            result[i + 1], result[j] = result[j], result[i + 1]
            sample_ids[i + 1], sample_ids[j] = sample_ids[j], sample_ids[i + 1]
            swaps += 1

        attempts += 1

    converged = _first_violation(sample_ids) is None
    return RepairResult(records=result, converged=converged, attempts=attempts, swaps=swaps)


def count_violations(records: Sequence[EvaluationRecord]) -> int:
    """Count neighbouring pairs flagged by ``same_problematic_range_adjacent``."""
    sample_ids = [extract_sample_id(record.path) for record in records]
    return sum(
        1 for i in range(len(sample_ids) - 1)
        if same_problematic_range_adjacent(sample_ids[i], sample_ids[i + 1])
    )


def has_residual_violations(records: Sequence[EvaluationRecord]) -> bool:
    return count_violations(records) > 0


class ReorderEngine:
    """
    Builds the presentation order for a loaded results sequence.

    Pipeline: partition, shuffle the two front groups together, append the
    ordinary group and then the end group, and run the repair pass.

    Attributes:
        rng: Random source used for the shuffle
        max_repair_attempts: Attempt budget for the repair pass
        last_repair: RepairResult of the most recent reorder, if any
    """

    def __init__(self, rng: Optional[random.Random] = None, max_repair_attempts: int = REPAIR_MAX_ATTEMPTS):
        self.rng = rng if rng is not None else random.Random()
        self.max_repair_attempts = max_repair_attempts
        self.last_repair: Optional[RepairResult] = None

    @monitor_performance("reorder")
    def reorder(self, records: Sequence[EvaluationRecord]) -> List[EvaluationRecord]:
        """
        Produce the presentation order for ``records``.

        Returns:
            New list with the same records; length always matches the input
        """
        groups = partition(records)
        prioritized = shuffle(groups.front_first + groups.front_second, self.rng)
        candidate = prioritized + groups.ordinary + groups.end

        outcome = repair(candidate, self.max_repair_attempts)
        self.last_repair = outcome

        front_first, front_second, ordinary, end = groups.sizes()
        logger.info(
            f"Reordered samples: {front_first} (1-15) + {front_second} (70-88) shuffled, "
            f"{ordinary} remaining, {end} (60-69) at end; "
            f"repair used {outcome.attempts} attempts, {outcome.swaps} swaps"
        )
        if not outcome.converged:
            logger.warning(
                f"Adjacency repair stopped after {outcome.attempts} attempts with "
                f"{count_violations(outcome.records)} neighbouring pairs left"
            )

        return outcome.records


def reorder(records: Sequence[EvaluationRecord], rng: Optional[random.Random] = None) -> List[EvaluationRecord]:
    """Reorder with a one-off engine; see ``ReorderEngine.reorder``."""
    return ReorderEngine(rng=rng).reorder(records)
