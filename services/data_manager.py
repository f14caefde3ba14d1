"""
DataManager for loading evaluation results.

Reads the results document (JSON with a ``results`` list, or a CSV export
with the same columns) into EvaluationRecord objects in file order.
"""

import json
import logging
import os
from typing import List

import pandas as pd

from models import EvaluationRecord
from utils.performance import monitor_performance
from utils.validation import REQUIRED_FIELDS, validate_results_payload, validate_record_fields

logger = logging.getLogger(__name__)


class DataManager:
    """
    Loads evaluation results from disk.

    Attributes:
        data_path: Path to the results file
        records: Records from the last load, in file order
        total_rows: Number of records in the file
    """

    def __init__(self, data_path: str):
        """
        Initialize DataManager.

        Args:
            data_path: Path to a ``.json`` results document or a ``.csv`` export

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        self.data_path = data_path
        self.records: List[EvaluationRecord] = []
        self.total_rows = 0

        if not data_path or not os.path.isfile(data_path):
            raise FileNotFoundError(f"Data file not found: {data_path}")

    def _is_csv(self) -> bool:
        return os.path.splitext(self.data_path)[1].lower() == '.csv'

    def _read_csv(self) -> pd.DataFrame:
        try:
            # Try UTF-8 first
            return pd.read_csv(self.data_path, encoding='utf-8', dtype=str, keep_default_na=False)
        except UnicodeDecodeError:
            # Fallback to GBK encoding
            try:
                return pd.read_csv(self.data_path, encoding='gbk', dtype=str, keep_default_na=False)
            except Exception as e:
                raise ValueError(f"Could not read CSV file, encoding error: {str(e)}")
        except pd.errors.EmptyDataError:
            return pd.DataFrame(columns=REQUIRED_FIELDS)
        except Exception as e:
            raise ValueError(f"Failed to read CSV file: {str(e)}")

    def _read_json(self) -> pd.DataFrame:
        try:
            with open(self.data_path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"Invalid data format: {str(e)}")

        is_valid, error_msg = validate_results_payload(payload)
        if not is_valid:
            raise ValueError(error_msg)

        results = payload['results']
        if not results:
            return pd.DataFrame(columns=REQUIRED_FIELDS)

        bad_entries = [i for i, entry in enumerate(results) if not isinstance(entry, dict)]
        if bad_entries:
            raise ValueError(f"Invalid data format: entries {bad_entries[:10]} are not objects")

        return pd.DataFrame(results)

    def _read_frame(self) -> pd.DataFrame:
        df = self._read_csv() if self._is_csv() else self._read_json()

        is_valid, error_msg = validate_record_fields(list(df.columns))
        if not is_valid:
            raise ValueError(error_msg)

        incomplete = df[REQUIRED_FIELDS].isna().any(axis=1)
        if incomplete.any():
            rows = [int(i) for i in df.index[incomplete][:10]]
            raise ValueError(f"Invalid data format: entries {rows} are missing required fields")

        return df

    @monitor_performance("load_results")
    def load(self) -> List[EvaluationRecord]:
        """
        Load every record from the file.

        Returns:
            List of EvaluationRecord objects in file order

        Raises:
            ValueError: If the file is not a valid results document
        """
        df = self._read_frame()

        records = [
            EvaluationRecord(
                path=str(row['path']),
                ground_truth=str(row['ground_truth']),
                prediction=str(row['prediction'])
            )
            for _, row in df.iterrows()
        ]

        self.records = records
        self.total_rows = len(records)
        logger.info(f"Loaded {self.total_rows} evaluation records from {self.data_path}")

        return records
