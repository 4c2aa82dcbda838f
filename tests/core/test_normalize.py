"""Unit tests for key normalization."""

from datetime import date, datetime

import pytest

from tour_toolkit.core.utils import normalize_keys


class TestNormalizeKeys:

    def test_normalize_when_nested_then_lowers_every_first_letter(self):
        raw = {"Question": "Q", "Options": [{"Text": "A", "IsCorrect": True}]}
        assert normalize_keys(raw) == {
            "question": "Q",
            "options": [{"text": "A", "isCorrect": True}],
        }

    def test_normalize_when_already_lower_then_no_op(self):
        value = {"question": "Q", "options": [{"text": "A", "isCorrect": False}]}
        assert normalize_keys(value) == value

    @pytest.mark.parametrize("value", [
        {"A": {"B": [{"C": 1}, "x", None]}},
        [{"QUIZ": [{"Type": "true-false"}]}],
        {1: "one", "": "empty"},
    ])
    def test_normalize_when_applied_twice_then_idempotent(self, value):
        once = normalize_keys(value)
        assert normalize_keys(once) == once

    def test_normalize_when_values_are_strings_then_untouched(self):
        assert normalize_keys({"Key": "Value"}) == {"key": "Value"}

    def test_normalize_when_primitives_then_passthrough(self):
        today = date(2024, 1, 1)
        now = datetime(2024, 1, 1, 12, 0)
        assert normalize_keys(None) is None
        assert normalize_keys(today) is today
        assert normalize_keys(now) is now
        assert normalize_keys(3.5) == 3.5
        assert normalize_keys("Text") == "Text"

    def test_normalize_when_non_string_keys_then_unchanged(self):
        assert normalize_keys({1: {"A": 2}}) == {1: {"a": 2}}
