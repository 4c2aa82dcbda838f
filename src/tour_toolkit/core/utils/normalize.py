"""
Key Normalization

Absorbs producer inconsistency in key casing (``Question`` vs ``question``)
by lower-casing the first character of every mapping key.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any


def _lower_first(key: Any) -> Any:
    if isinstance(key, str) and key:
        return key[0].lower() + key[1:]
    return key


def normalize_keys(value: Any) -> Any:
    """
    Recursively lower-case the first letter of every mapping key.

    Lists and tuples are walked element by element (tuples come back as
    lists, matching what a JSON round trip would give). Primitives, None and
    date/datetime values pass through unchanged. Idempotent.

    Args:
        value: Any JSON-compatible value

    Returns:
        Structurally identical value with normalized keys

    Example:
        >>> normalize_keys({"Question": "Q", "Options": [{"IsCorrect": True}]})
        {'question': 'Q', 'options': [{'isCorrect': True}]}
    """
    if value is None or isinstance(value, (date, datetime)):
        return value
    if isinstance(value, dict):
        return {_lower_first(k): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_keys(v) for v in value]
    return value
