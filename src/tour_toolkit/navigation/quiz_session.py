"""
Module: navigation.quiz_session

Purpose:
    Taking a landmark quiz: select an option, check it, move on, and build
    the submission summary posted to the results endpoint.

Key Classes:
    - QuizSession: Per-quiz progress and scoring
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from tour_toolkit.core.models import QuizQuestion


class QuizSession:
    """
    Progress through one quiz.

    A question is scored when checked: +1 if the selected option is the
    question's (first) correct option.

    Example:
        >>> session = QuizSession(landmark.quiz)
        >>> session.select(0)
        >>> session.check_answer()
        True
        >>> session.advance()
        False
        >>> session.summary()["score"]
        100
    """

    def __init__(self, questions: Sequence[QuizQuestion]) -> None:
        if not questions:
            raise ValueError("Quiz must have at least one question")
        self.questions = tuple(questions)
        self.current_index = 0
        self.selected_index: Optional[int] = None
        self.answered = False
        self.correct_answers = 0
        self.finished = False
        self._answers: List[Dict[str, Any]] = []

    @property
    def current_question(self) -> QuizQuestion:
        return self.questions[self.current_index]

    def select(self, option_index: int) -> None:
        """Select an option; ignored once the question has been checked."""
        if self.finished:
            raise ValueError("Quiz is already finished")
        if not 0 <= option_index < len(self.current_question.options):
            raise ValueError(f"Option index out of range: {option_index}")
        if not self.answered:
            self.selected_index = option_index

    def check_answer(self) -> bool:
        """
        Score the selected option.

        Raises:
            ValueError: If no option is selected or the question was checked
        """
        if self.selected_index is None:
            raise ValueError("No option selected")
        if self.answered:
            raise ValueError("Question already checked")

        question = self.current_question
        is_correct = self.selected_index == question.correct_index
        self.answered = True
        if is_correct:
            self.correct_answers += 1

        correct = question.correct_option
        self._answers.append({
            "questionIndex": self.current_index,
            "questionText": question.question,
            "selectedAnswer": question.options[self.selected_index].text,
            "correctAnswer": correct.text if correct else "",
            "isCorrect": is_correct,
        })
        return is_correct

    def advance(self) -> bool:
        """
        Move to the next question.

        Returns:
            True if another question follows, False if the quiz is finished
        """
        self.answered = False
        self.selected_index = None
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            return True
        self.finished = True
        return False

    @property
    def score(self) -> int:
        """Rounded percentage of correct answers."""
        return round(self.correct_answers / len(self.questions) * 100)

    def verdict(self) -> str:
        total = len(self.questions)
        if self.correct_answers == total:
            return "Perfect score! You're a true expert."
        if self.correct_answers > total / 2:
            return "Great job! You know your stuff."
        return "A good start! Keep exploring to learn more."

    def summary(self, completed_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Submission summary in the results endpoint's format."""
        completed_at = completed_at or datetime.now(timezone.utc)
        return {
            "totalQuestions": len(self.questions),
            "correctAnswers": self.correct_answers,
            "score": self.score,
            "answers": list(self._answers),
            "completedAt": completed_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
