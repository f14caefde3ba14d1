"""
Unit tests for DataManager.

Tests loading JSON and CSV results, edge cases, and error conditions.
"""

import json
import os
import tempfile

import pandas as pd
import pytest

from services import DataManager


def create_test_json(num_rows: int, payload=None) -> str:
    """Helper function to create a results JSON file."""
    if payload is None:
        payload = {
            'results': [
                {
                    'path': f'/data/sample_{i}.wav',
                    'ground_truth': f'reference text {i}',
                    'prediction': f'predicted text {i}'
                }
                for i in range(1, num_rows + 1)
            ]
        }
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False, encoding='utf-8') as f:
        json.dump(payload, f)
        return f.name


def create_test_csv(num_rows: int, encoding='utf-8') -> str:
    """Helper function to create a results CSV file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as f:
        csv_path = f.name
    df = pd.DataFrame({
        'path': [f'sample_{i}.wav' for i in range(1, num_rows + 1)],
        'ground_truth': [f'参考 {i}' for i in range(1, num_rows + 1)],
        'prediction': [f'预测 {i}' for i in range(1, num_rows + 1)]
    })
    df.to_csv(csv_path, index=False, encoding=encoding)
    return csv_path


class TestDataManagerInitialization:
    """Test DataManager initialization."""

    def test_init_with_missing_file(self):
        with pytest.raises(FileNotFoundError, match="Data file not found"):
            DataManager('/nonexistent/results.json')

    def test_init_with_empty_path(self):
        with pytest.raises(FileNotFoundError):
            DataManager('')

    def test_init_does_not_read(self):
        json_path = create_test_json(3)
        try:
            manager = DataManager(json_path)
            assert manager.records == []
            assert manager.total_rows == 0
        finally:
            os.remove(json_path)


class TestJsonLoading:
    """Test loading the JSON results document."""

    def test_load_keeps_file_order(self):
        json_path = create_test_json(12)
        try:
            manager = DataManager(json_path)
            records = manager.load()

            assert len(records) == 12
            assert manager.total_rows == 12
            assert [r.sample_id for r in records] == list(range(1, 13))
            assert records[0].ground_truth == 'reference text 1'
            assert records[0].prediction == 'predicted text 1'
        finally:
            os.remove(json_path)

    def test_extra_fields_ignored(self):
        json_path = create_test_json(0, payload={
            'results': [{'path': 'sample_1.wav', 'ground_truth': 'a', 'prediction': 'b', 'wer': 0.5}]
        })
        try:
            records = DataManager(json_path).load()
            assert records[0].to_dict() == {'path': 'sample_1.wav', 'ground_truth': 'a', 'prediction': 'b'}
        finally:
            os.remove(json_path)

    def test_empty_results(self):
        json_path = create_test_json(0, payload={'results': []})
        try:
            assert DataManager(json_path).load() == []
        finally:
            os.remove(json_path)

    def test_missing_results_key(self):
        json_path = create_test_json(0, payload={'items': []})
        try:
            with pytest.raises(ValueError, match="Invalid data format"):
                DataManager(json_path).load()
        finally:
            os.remove(json_path)

    def test_results_not_a_list(self):
        json_path = create_test_json(0, payload={'results': 'nope'})
        try:
            with pytest.raises(ValueError, match="Invalid data format"):
                DataManager(json_path).load()
        finally:
            os.remove(json_path)

    def test_entry_missing_field(self):
        json_path = create_test_json(0, payload={
            'results': [
                {'path': 'sample_1.wav', 'ground_truth': 'a', 'prediction': 'b'},
                {'path': 'sample_2.wav', 'ground_truth': 'c'}
            ]
        })
        try:
            with pytest.raises(ValueError, match="missing required fields"):
                DataManager(json_path).load()
        finally:
            os.remove(json_path)

    def test_entry_not_an_object(self):
        json_path = create_test_json(0, payload={'results': [['sample_1.wav', 'a', 'b']]})
        try:
            with pytest.raises(ValueError, match="Invalid data format"):
                DataManager(json_path).load()
        finally:
            os.remove(json_path)

    def test_malformed_json(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write('{"results": [')
            json_path = f.name
        try:
            with pytest.raises(ValueError, match="Invalid data format"):
                DataManager(json_path).load()
        finally:
            os.remove(json_path)


class TestCsvLoading:
    """Test loading a CSV export of the same results."""

    def test_load_utf8(self):
        csv_path = create_test_csv(5)
        try:
            records = DataManager(csv_path).load()

            assert len(records) == 5
            assert records[2].ground_truth == '参考 3'
        finally:
            os.remove(csv_path)

    def test_load_gbk(self):
        csv_path = create_test_csv(3, encoding='gbk')
        try:
            records = DataManager(csv_path).load()
            assert records[0].prediction == '预测 1'
        finally:
            os.remove(csv_path)

    def test_empty_text_kept_as_string(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False, encoding='utf-8') as f:
            f.write("path,ground_truth,prediction\n")
            f.write("sample_1.wav,hello,\n")
            csv_path = f.name
        try:
            records = DataManager(csv_path).load()
            assert records[0].prediction == ''
        finally:
            os.remove(csv_path)

    def test_missing_columns(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as f:
            csv_path = f.name
        try:
            pd.DataFrame({'path': ['sample_1.wav'], 'text': ['a']}).to_csv(csv_path, index=False)
            with pytest.raises(ValueError, match="missing fields"):
                DataManager(csv_path).load()
        finally:
            os.remove(csv_path)

    def test_empty_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as f:
            csv_path = f.name
        try:
            assert DataManager(csv_path).load() == []
        finally:
            os.remove(csv_path)
