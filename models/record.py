"""
Evaluation record model for the Audio Evaluation Review Workbench.

Represents a single audio sample together with its reference transcript
and the model's transcription.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EvaluationRecord:
    """
    A single ground truth / prediction pair for one audio file.

    Records are created once when the results file is loaded and are never
    mutated afterwards, only reordered.

    Attributes:
        path: Path of the audio file, normally ending in ``sample_<n>.wav``
        ground_truth: Reference transcript
        prediction: Model transcript
    """

    path: str
    ground_truth: str
    prediction: str

    @property
    def sample_id(self) -> int:
        """Sample number parsed from the path (0 when the path is malformed)."""
        from services.reorder_engine import extract_sample_id
        return extract_sample_id(self.path)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "ground_truth": self.ground_truth,
            "prediction": self.prediction,
        }
