"""
Unit Tests for Tour Models

Tests for QuizQuestion, Landmark and Tour validation and serialization.
"""

import math

import pytest

from tour_toolkit.core.models import (
    IconType,
    Landmark,
    QuestionType,
    QuizOption,
    QuizQuestion,
    Tour,
    parse_coords,
)
from tour_toolkit.ingestion.fallback import INTRO_LANDMARK


class TestQuizQuestion:
    """Tests for QuizQuestion dataclass."""

    def test_init_when_blank_question_then_raises_error(self):
        with pytest.raises(ValueError, match="non-empty"):
            QuizQuestion("   ", QuestionType.TRUE_FALSE, (QuizOption("True", True),))

    def test_init_when_no_options_then_raises_error(self):
        with pytest.raises(ValueError, match="at least one option"):
            QuizQuestion("Q", QuestionType.MULTIPLE_CHOICE, ())

    def test_init_when_type_is_plain_string_then_raises_error(self):
        with pytest.raises(ValueError, match="Invalid question type"):
            QuizQuestion("Q", "true-false", (QuizOption("True", True),))

    def test_init_when_no_correct_option_then_accepts(self):
        """Exactly-one-correct is not enforced at construction."""
        q = QuizQuestion("Q", QuestionType.MULTIPLE_CHOICE, (QuizOption("A", False), QuizOption("B", False)))
        assert q.correct_option is None
        assert q.correct_index == -1

    def test_correct_index_when_second_option_correct_then_returns_one(self):
        q = QuizQuestion("Q", QuestionType.MULTIPLE_CHOICE, (QuizOption("A", False), QuizOption("B", True)))
        assert q.correct_index == 1
        assert q.correct_option.text == "B"

    def test_to_dict_when_serialized_then_uses_camel_case(self, true_false_question):
        d = true_false_question.to_dict()
        assert d == {
            "question": "Petra is in Jordan.",
            "type": "true-false",
            "options": [
                {"text": "True", "isCorrect": True},
                {"text": "False", "isCorrect": False},
            ],
        }
        assert QuizQuestion.from_dict(d) == true_false_question


class TestParseCoords:
    """Tests for parse_coords helper."""

    def test_parse_when_numeric_strings_then_converts(self):
        assert parse_coords(["30.33", "35.44"]) == (30.33, 35.44)

    @pytest.mark.parametrize("raw", [
        [30.33, None],
        [math.nan, 1.0],
        [1.0, math.inf],
        ["abc", 1.0],
        ["", 1.0],
        [True, 1.0],
        [10**400, 1.0],
        ["1e400", 1.0],
        [1.0],
        [1.0, 2.0, 3.0],
        "30.33,35.44",
        None,
    ])
    def test_parse_when_unusable_then_returns_none(self, raw):
        assert parse_coords(raw) is None


class TestLandmark:
    """Tests for Landmark dataclass."""

    def test_init_when_coords_list_then_normalized_to_tuple(self, landmark_factory):
        landmark = landmark_factory(1, coords=["1.5", 2])
        assert landmark.coords == (1.5, 2.0)
        hash(landmark.coords)

    def test_init_when_nan_coords_then_raises_error(self, landmark_factory):
        with pytest.raises(ValueError, match="finite"):
            landmark_factory(1, coords=(math.nan, 0.0))

    def test_init_when_bool_id_then_raises_error(self, landmark_factory):
        with pytest.raises(ValueError, match="id must be an integer"):
            landmark_factory(True)

    def test_init_when_empty_quiz_then_raises_error(self, landmark_factory):
        with pytest.raises(ValueError, match="quiz"):
            landmark_factory(1, quiz=())

    def test_is_gated_when_quiz_and_block_navigation_then_true(self, landmark_factory, true_false_question):
        assert landmark_factory(1, quiz=(true_false_question,), block_navigation=True).is_gated
        assert not landmark_factory(1, quiz=(true_false_question,)).is_gated
        assert not landmark_factory(1, block_navigation=True).is_gated

    def test_to_dict_when_round_tripped_then_equal(self, landmark_factory, true_false_question):
        landmark = landmark_factory(
            7, "Petra", aliases=("Jordan",), icon_type=IconType.WATER,
            video_url="https://v", quiz=(true_false_question,), block_navigation=True,
        )
        d = landmark.to_dict()
        assert d["imageUrl"] == "https://example.com/img.jpg"
        assert d["iconType"] == "water"
        assert d["coords"] == [10.0, 20.0]
        assert Landmark.from_dict(d) == landmark

    def test_to_dict_when_no_quiz_then_key_omitted(self, landmark_factory):
        assert "quiz" not in landmark_factory(1).to_dict()


class TestIconType:

    def test_parse_when_unknown_then_monument(self):
        assert IconType.parse("volcano") is IconType.MONUMENT
        assert IconType.parse(None) is IconType.MONUMENT
        assert IconType.parse("nature") is IconType.NATURE


class TestTour:
    """Tests for Tour invariants."""

    def test_init_when_empty_then_raises_error(self):
        with pytest.raises(ValueError, match="intro"):
            Tour(landmarks=())

    def test_init_when_first_not_intro_then_raises_error(self, landmark_factory):
        with pytest.raises(ValueError, match="must start with the intro"):
            Tour(landmarks=(landmark_factory(1),))

    def test_init_when_duplicate_ids_then_raises_error(self, landmark_factory):
        with pytest.raises(ValueError, match="Duplicate landmark id"):
            Tour.from_parts(INTRO_LANDMARK, (landmark_factory(1), landmark_factory(1, "Other")))

    def test_init_when_intro_has_quiz_then_raises_error(self, landmark_factory, true_false_question):
        intro = landmark_factory(0, quiz=(true_false_question,))
        with pytest.raises(ValueError, match="Intro"):
            Tour(landmarks=(intro,))

    def test_append_when_called_then_returns_new_tour(self, scenario_tour, landmark_factory):
        extended = scenario_tour.append(landmark_factory(9))
        assert len(extended) == 4
        assert len(scenario_tour) == 3
        assert extended.index_of(9) == 3

    def test_replace_body_when_called_then_keeps_intro(self, scenario_tour, landmark_factory):
        replaced = scenario_tour.replace_body([landmark_factory(5)])
        assert replaced.intro == INTRO_LANDMARK
        assert [l.id for l in replaced] == [0, 5]

    def test_index_of_when_unknown_then_none(self, scenario_tour):
        assert scenario_tour.index_of(42) is None
