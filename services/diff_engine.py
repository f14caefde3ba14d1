"""
DiffEngine for transcript comparison.

Compares a model prediction against its ground truth: word-level diff
marking with <false>/<true> tags, edit distances and word error rate.
"""

import difflib
import re
from typing import List, Sequence

from models import EvaluationRecord
from utils.performance import monitor_performance


def edit_distance(reference: Sequence, hypothesis: Sequence) -> int:
    """
    Levenshtein distance between two token sequences.

    Works on strings (character level) as well as word lists.
    """
    if len(reference) < len(hypothesis):
        reference, hypothesis = hypothesis, reference

    previous = list(range(len(hypothesis) + 1))
    for i, ref_token in enumerate(reference, start=1):
        current = [i]
        for j, hyp_token in enumerate(hypothesis, start=1):
            if ref_token == hyp_token:
                current.append(previous[j - 1])
            else:
                current.append(min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,   # insertion
                    previous[j] + 1       # deletion
                ))
        previous = current

    return previous[-1]


class DiffEngine:
    """
    Transcript comparison engine.

    Word-level comparison between ground truth and prediction. Words the
    prediction missed are wrapped in <false> tags, words it added in <true>.
    """

    def __init__(self, lowercase: bool = True):
        """
        Initialize DiffEngine.

        Args:
            lowercase: Ignore case when counting word errors
        """
        self.lowercase = lowercase

    def _split_into_words(self, text: str) -> List[str]:
        """Split into word and non-word runs so joined output keeps spacing."""
        return re.findall(r'(\w+|\W+)', text)

    def normalize_words(self, text: str) -> List[str]:
        """Words used for error counting; punctuation is ignored."""
        words = re.findall(r"\w+(?:'\w+)?", text)
        if self.lowercase:
            words = [w.lower() for w in words]
        return words

    @monitor_performance("compute_diff")
    def compute_diff(self, ground_truth: str, prediction: str) -> str:
        """
        Compare a prediction to its ground truth and return tagged text.

        Args:
            ground_truth: Reference transcript
            prediction: Model transcript

        Returns:
            Text with <false> (missing from prediction) and <true> (added by
            prediction) tags; unchanged text preserved as-is
        """
        if not ground_truth and not prediction:
            return ""
        if not ground_truth:
            return f"<true>{prediction}</true>"
        if not prediction:
            return f"<false>{ground_truth}</false>"

        reference_words = self._split_into_words(ground_truth)
        predicted_words = self._split_into_words(prediction)

        matcher = difflib.SequenceMatcher(None, reference_words, predicted_words, autojunk=False)

        result_parts = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == 'equal':
                result_parts.append(''.join(reference_words[i1:i2]))
            elif tag == 'delete':
                result_parts.append(f"<false>{''.join(reference_words[i1:i2])}</false>")
            elif tag == 'insert':
                result_parts.append(f"<true>{''.join(predicted_words[j1:j2])}</true>")
            elif tag == 'replace':
                result_parts.append(
                    f"<false>{''.join(reference_words[i1:i2])}</false>"
                    f"<true>{''.join(predicted_words[j1:j2])}</true>"
                )

        return ''.join(result_parts)

    def word_errors(self, ground_truth: str, prediction: str) -> int:
        return edit_distance(self.normalize_words(ground_truth), self.normalize_words(prediction))

    def character_distance(self, ground_truth: str, prediction: str) -> int:
        return edit_distance(ground_truth, prediction)

    def word_error_rate(self, ground_truth: str, prediction: str) -> float:
        """
        WER of one prediction.

        Returns:
            Word edits divided by reference word count. An empty reference
            gives 0.0 for an empty prediction and 1.0 otherwise.
        """
        reference_words = self.normalize_words(ground_truth)
        errors = self.word_errors(ground_truth, prediction)
        if not reference_words:
            return 0.0 if errors == 0 else 1.0
        return errors / len(reference_words)

    @monitor_performance("corpus_wer")
    def corpus_word_error_rate(self, records: Sequence[EvaluationRecord]) -> float:
        """
        WER over many records: total word edits over total reference words.

        Returns:
            0.0 when there are no reference words at all
        """
        total_errors = 0
        total_words = 0
        for record in records:
            total_errors += self.word_errors(record.ground_truth, record.prediction)
            total_words += len(self.normalize_words(record.ground_truth))

        if total_words == 0:
            return 0.0
        return total_errors / total_words

    def strip_tags(self, text: str) -> str:
        """Remove all <false> and <true> tags from text."""
        return re.sub(r'</?(?:false|true)>', '', text)
