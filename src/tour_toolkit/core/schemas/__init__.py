"""
Schema validation for untrusted quiz payloads.
"""

from .validator import ValidationError, is_valid_quiz, validate_quiz

__all__ = [
    "ValidationError",
    "is_valid_quiz",
    "validate_quiz",
]
