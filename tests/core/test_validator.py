"""
Unit Tests for Schema Validation

Tests for the quiz validator module.
"""

import pytest

from tour_toolkit.core.schemas.validator import (
    ValidationError,
    is_valid_quiz,
    validate_quiz,
)


class TestValidateQuiz:
    """Tests for validate_quiz function."""

    @pytest.fixture
    def valid_quiz(self) -> list:
        return [
            {
                "question": "Which people carved Petra?",
                "type": "multiple-choice",
                "options": [
                    {"text": "Nabataeans", "isCorrect": True},
                    {"text": "Romans", "isCorrect": False},
                ],
            }
        ]

    def test_validate_when_valid_then_passes(self, valid_quiz):
        validate_quiz(valid_quiz)
        assert is_valid_quiz(valid_quiz)

    def test_validate_when_empty_list_then_raises_error(self):
        with pytest.raises(ValidationError):
            validate_quiz([])

    def test_validate_when_not_list_then_raises_error(self):
        assert not is_valid_quiz({"question": "Q"})

    def test_validate_when_unknown_type_then_raises_with_path(self, valid_quiz):
        valid_quiz[0]["type"] = "short-answer"
        with pytest.raises(ValidationError) as exc_info:
            validate_quiz(valid_quiz)
        assert exc_info.value.path == "0.type"

    def test_validate_when_is_correct_not_bool_then_raises_with_path(self, valid_quiz):
        valid_quiz[0]["options"][1]["isCorrect"] = "false"
        with pytest.raises(ValidationError) as exc_info:
            validate_quiz(valid_quiz)
        assert exc_info.value.path == "0.options.1.isCorrect"

    def test_validate_when_blank_question_then_raises_error(self, valid_quiz):
        valid_quiz[0]["question"] = "   "
        assert not is_valid_quiz(valid_quiz)

    def test_validate_when_options_empty_then_raises_error(self, valid_quiz):
        valid_quiz[0]["options"] = []
        assert not is_valid_quiz(valid_quiz)

    def test_validate_when_multiple_errors_then_all_collected(self, valid_quiz):
        valid_quiz[0]["type"] = "bogus"
        valid_quiz[0]["options"] = []
        with pytest.raises(ValidationError) as exc_info:
            validate_quiz(valid_quiz)
        assert len(exc_info.value.errors) == 2
