"""
Module: ingestion.quiz_parser

Purpose:
    Parse the two quiz shapes found in tour sources into the canonical
    QuizQuestion tuple. Quizzes are optional enrichments: a malformed quiz
    never aborts loading of its landmark, it degrades to "no quiz" plus a
    diagnostic.

Key Functions:
    - parse_builder_quiz(): Location-builder questions ({text, type, options, answer})
    - parse_legacy_quiz(): Canonical-shaped list or JSON string of one

Dependencies:
    - json (std)
    - tour_toolkit.core.utils.normalize_keys: Key case tolerance
    - tour_toolkit.core.schemas.validator: Structural validation

Used By:
    - ingestion.coercers: All four landmark coercers
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from tour_toolkit.core.models import QuestionType, QuizOption, QuizQuestion
from tour_toolkit.core.schemas.validator import ValidationError, validate_quiz
from tour_toolkit.core.utils.normalize import normalize_keys

from .diagnostics import DiagnosticsCollector, IssueKind, report

logger = logging.getLogger(__name__)


Quiz = tuple[QuizQuestion, ...]

BUILDER_SHORT_ANSWER = "short_answer"
BUILDER_TRUE_FALSE = "true_false"
BUILDER_MULTIPLE_CHOICE = "multiple_choice"


# ─────────────────────────────────────────────────────────────────────────────
# Builder format
# ─────────────────────────────────────────────────────────────────────────────

def _builder_question(item: Any) -> Optional[QuizQuestion]:
    """Convert one builder question; None when unsupported or unusable."""
    if not isinstance(item, dict):
        return None
    text = item.get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    if item.get("answer") is None or not item.get("type"):
        return None

    question_type = str(item["type"]).strip().lower()
    answer = str(item["answer"]).strip()

    if question_type == BUILDER_TRUE_FALSE:
        normalized_answer = answer.lower()
        return QuizQuestion(
            question=text,
            type=QuestionType.TRUE_FALSE,
            options=(
                QuizOption("True", normalized_answer == "true"),
                QuizOption("False", normalized_answer == "false"),
            ),
        )

    if question_type == BUILDER_MULTIPLE_CHOICE:
        raw_options = item.get("options")
        if not isinstance(raw_options, list) or not raw_options:
            return None
        options = []
        for option in raw_options:
            option_text = str(option).strip()
            options.append(QuizOption(option_text, option_text == answer))
        return QuizQuestion(
            question=text,
            type=QuestionType.MULTIPLE_CHOICE,
            options=tuple(options),
        )

    # short_answer (and anything unknown) has no downstream representation
    return None


def parse_builder_quiz(
    questions: Any,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
    source: str = "builder",
) -> Optional[Quiz]:
    """
    Parse location-builder questions into canonical quiz questions.

    Rules:
    - short_answer questions are dropped
    - true_false becomes True/False options; correctness is a
      case-insensitive match of `answer` against "true"/"false"
    - multiple_choice maps each option string to an option that is correct
      when it equals `answer` exactly (surrounding whitespace ignored)

    Args:
        questions: List of builder question dicts
        diagnostics: Optional sink for dropped-question diagnostics
        source: Source label used in diagnostics

    Returns:
        Tuple of QuizQuestion, or None if nothing usable survives

    Example:
        >>> quiz = parse_builder_quiz([{"text": "Q", "type": "true_false", "answer": "TRUE"}])
        >>> [o.is_correct for o in quiz[0].options]
        [True, False]
    """
    if not isinstance(questions, list) or not questions:
        return None

    parsed: list[QuizQuestion] = []
    for i, item in enumerate(questions):
        question = _builder_question(item)
        if question is not None:
            parsed.append(question)
            continue
        if isinstance(item, dict) and str(item.get("type", "")).strip().lower() == BUILDER_SHORT_ANSWER:
            logger.debug(f"[{source}] Dropping short_answer question {i}")
        else:
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                f"Dropping unusable quiz question {i}",
                index=i, raw=item,
            )

    return tuple(parsed) if parsed else None


# ─────────────────────────────────────────────────────────────────────────────
# Legacy (canonical-shaped) format
# ─────────────────────────────────────────────────────────────────────────────

def parse_legacy_quiz(
    value: Any,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
    source: str = "legacy",
    index: Optional[int] = None,
) -> Optional[Quiz]:
    """
    Parse a canonical-shaped quiz, tolerating key case and JSON strings.

    Process:
    1. Empty/absent input → None
    2. Strings must hold a JSON array; otherwise (or on bad JSON) warn → None
    3. Normalize keys ("Question" → "question", "IsCorrect" → "isCorrect")
    4. Validate the whole quiz; any failure discards it (raw and normalized
       forms are reported)

    Never raises.

    Args:
        value: List of question dicts, tuple of QuizQuestion, or JSON string
        diagnostics: Optional sink for rejected quizzes
        source: Source label used in diagnostics
        index: Position of the owning record, for diagnostics

    Returns:
        Tuple of QuizQuestion, or None
    """
    if not value:
        return None

    # Already canonical objects
    if isinstance(value, (list, tuple)) and all(isinstance(q, QuizQuestion) for q in value):
        return tuple(value)

    parsed = value
    if isinstance(parsed, str):
        stripped = parsed.strip()
        if not (stripped.startswith("[") and stripped.endswith("]")):
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                "Quiz data is a non-JSON string, skipping",
                index=index, raw=value,
            )
            return None
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError as e:
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                f"Failed to parse quiz data string: {e}",
                index=index, raw=value,
            )
            return None

    normalized = normalize_keys(parsed)

    try:
        validate_quiz(normalized)
    except ValidationError as e:
        if isinstance(parsed, list) and parsed:
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                f"Invalid quiz data structure: {e}",
                index=index, raw=parsed, normalized=normalized,
            )
        else:
            logger.debug(f"[{source}] Ignoring empty or non-list quiz value: {e}")
        return None

    try:
        return tuple(QuizQuestion.from_dict(q) for q in normalized)
    except (KeyError, ValueError) as e:
        report(
            diagnostics, IssueKind.RECORD_INVALID, source,
            f"Quiz failed model validation: {e}",
            index=index, raw=parsed, normalized=normalized,
        )
        return None
