"""
Schema Validation Utilities

Validates untrusted quiz data against the canonical quiz schema.

Quizzes arrive from dataset rows, persisted overlay records and uploaded
files. All of them must pass the same structural check before a
QuizQuestion is built:

- every question has non-empty string text
- type is "multiple-choice" or "true-false"
- options is a non-empty array of {text: string, isCorrect: boolean}

Validation is all-or-nothing per quiz: a single bad question rejects the
whole quiz.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_quiz(data: Any) -> None:
    """
    Validate a key-normalized quiz against the canonical schema.

    Args:
        data: Candidate quiz (already passed through normalize_keys)

    Raises:
        ValidationError: With the path of the first failure and every
            error message found
    """
    schema = _load_schema("quiz")
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if not errors:
        return

    first = errors[0]
    path = ".".join(str(p) for p in first.absolute_path)
    raise ValidationError(
        f"Quiz schema validation failed at {path or '<root>'}: {first.message}",
        path=path,
        errors=[e.message for e in errors],
    )


def is_valid_quiz(data: Any) -> bool:
    """Boolean form of validate_quiz()."""
    try:
        validate_quiz(data)
    except ValidationError:
        return False
    return True
