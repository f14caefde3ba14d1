"""
Validation utilities for input data.

Checks the structure of loaded results and the values coming from UI controls.
"""

from typing import Any, Tuple, List

from models.preferences import MIN_FONT_SIZE, MAX_FONT_SIZE, VIEW_MODES

REQUIRED_FIELDS = ['path', 'ground_truth', 'prediction']


def validate_results_payload(payload: Any) -> Tuple[bool, str]:
    """
    Validate the top-level structure of a results document.

    Args:
        payload: Parsed JSON document

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(payload, dict):
        return False, "Invalid data format: expected a JSON object"

    if 'results' not in payload:
        return False, "Invalid data format: missing 'results'"

    if not isinstance(payload['results'], list):
        return False, "Invalid data format: 'results' must be a list"

    return True, ""


def validate_record_fields(columns: List[str]) -> Tuple[bool, str]:
    """
    Validate that result entries carry every required field.

    Args:
        columns: Field (column) names present in the results

    Returns:
        Tuple of (is_valid, error_message)
    """
    missing = [name for name in REQUIRED_FIELDS if name not in columns]

    if missing:
        return False, f"Invalid data format: missing fields {missing}. Required: {REQUIRED_FIELDS}"

    return True, ""


def validate_font_size(font_size: Any) -> Tuple[bool, str]:
    if not isinstance(font_size, int) or isinstance(font_size, bool):
        return False, "Font size must be an integer"

    if font_size < MIN_FONT_SIZE or font_size > MAX_FONT_SIZE:
        return False, f"Font size must be between {MIN_FONT_SIZE} and {MAX_FONT_SIZE}"

    return True, ""


def validate_view_mode(view: Any) -> Tuple[bool, str]:
    if view not in VIEW_MODES:
        return False, f"View must be one of {list(VIEW_MODES)}"

    return True, ""


def validate_index_bounds(index: int, total: int) -> Tuple[bool, str]:
    """
    Validate that index is within bounds.

    Args:
        index: Index to validate
        total: Total number of items

    Returns:
        Tuple of (is_valid, error_message)
    """
    if index < 0:
        return False, "Index cannot be negative"

    if index >= total:
        return False, f"Index {index} out of range (total: {total})"

    return True, ""
