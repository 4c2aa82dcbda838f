"""
Module: quiz

Purpose:
    Provides the QuizOption and QuizQuestion dataclasses - the canonical
    quiz shape every ingestion path converges on. Immutable, validated on
    construction.

Key Classes:
    - QuestionType: multiple-choice / true-false
    - QuizOption: One answer option with its correctness flag
    - QuizQuestion: Question text, type and ordered options

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.landmarks.Landmark
    - ingestion.quiz_parser
    - navigation.quiz_session
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class QuestionType(str, Enum):
    """Type of quiz question."""
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class QuizOption:
    """
    Single answer option.

    Attributes:
        text: Display text of the option
        is_correct: Whether choosing this option is a correct answer
    """

    text: str
    is_correct: bool

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise ValueError(f"Option text must be a string: {self.text!r}")
        if not isinstance(self.is_correct, bool):
            raise ValueError(f"isCorrect must be a bool: {self.is_correct!r}")

    def to_dict(self) -> dict:
        return {"text": self.text, "isCorrect": self.is_correct}

    @classmethod
    def from_dict(cls, data: dict) -> QuizOption:
        return cls(text=data["text"], is_correct=data["isCorrect"])


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """
    Quiz question (immutable).

    Attributes:
        question: Question text (never blank)
        type: MULTIPLE_CHOICE or TRUE_FALSE
        options: Ordered, non-empty tuple of options

    Invariants:
        - question is a non-empty string
        - options is non-empty
        - "exactly one correct option" is NOT enforced; the parsers only
          guarantee structural validity

    Example:
        >>> q = QuizQuestion(
        ...     question="Petra is in Jordan",
        ...     type=QuestionType.TRUE_FALSE,
        ...     options=(QuizOption("True", True), QuizOption("False", False)),
        ... )
        >>> q.correct_option.text
        'True'
    """

    question: str
    type: QuestionType
    options: tuple[QuizOption, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.question, str) or not self.question.strip():
            raise ValueError(f"Question text must be a non-empty string: {self.question!r}")
        if not isinstance(self.type, QuestionType):
            raise ValueError(f"Invalid question type: {self.type!r}")
        if not self.options:
            raise ValueError("Question must have at least one option")

    @property
    def correct_option(self) -> Optional[QuizOption]:
        """First option flagged correct, or None if the producer marked none."""
        return next((o for o in self.options if o.is_correct), None)

    @property
    def correct_index(self) -> int:
        """Index of the first correct option, -1 when there is none."""
        return next((i for i, o in enumerate(self.options) if o.is_correct), -1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "type": self.type.value,
            "options": [o.to_dict() for o in self.options],
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuizQuestion:
        """
        Deserialize from the canonical (camelCase) dictionary shape.

        Raises:
            KeyError / ValueError: If the dictionary is not canonical
        """
        return cls(
            question=data["question"],
            type=QuestionType(data["type"]),
            options=tuple(QuizOption.from_dict(o) for o in data["options"]),
        )
