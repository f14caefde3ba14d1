"""
ExportManager for presentation-order export.

Writes the reordered sequence of a review session to JSON so the same
order can be shared or reviewed again.
"""

import json
import os
from datetime import datetime
from typing import List, Dict, Any, Sequence

from models import EvaluationRecord


class ExportManager:
    """
    Exports a reordered sequence to a JSON file.

    The file keeps the input document shape (a ``results`` list, now in
    presentation order) and adds an ``order`` list mapping each display
    number to its sample number and path.
    """

    def __init__(self, output_dir: str = "."):
        """
        Initialize ExportManager.

        Args:
            output_dir: Directory export files are written to
        """
        self.output_dir = output_dir

    def build_document(self, records: Sequence[EvaluationRecord]) -> Dict[str, Any]:
        order: List[Dict[str, Any]] = [
            {
                "display_number": position,
                "sample_id": record.sample_id,
                "path": record.path
            }
            for position, record in enumerate(records, start=1)
        ]
        return {
            "results": [record.to_dict() for record in records],
            "order": order
        }

    def export_to_json(self, records: Sequence[EvaluationRecord], original_filename: str) -> str:
        """
        Generate the export file.

        Args:
            records: Records in presentation order
            original_filename: Name of the loaded results file

        Returns:
            Path to the generated JSON file

        Raises:
            ValueError: If there are no records to export
            PermissionError: If the file cannot be written
        """
        if not records:
            raise ValueError("No samples to export")

        # {original_name}_order_{timestamp}_{count}.json
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = os.path.splitext(os.path.basename(original_filename))[0] or "export"
        output_path = os.path.join(self.output_dir, f"{base_name}_order_{timestamp}_{len(records)}.json")

        document = self.build_document(records)

        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
        except PermissionError:
            raise PermissionError(f"Cannot write file: {output_path}")

        return output_path
