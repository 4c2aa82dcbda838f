"""
Landmark Tour Core Package

Shared data models and utilities used by ingestion and navigation.

- models: frozen Landmark / QuizQuestion / Tour dataclasses
- utils: key normalization for producer-inconsistent JSON
- schemas: structural quiz validation
"""

from .models import IconType, Landmark, QuestionType, QuizOption, QuizQuestion, Tour

__all__ = [
    "IconType",
    "Landmark",
    "QuestionType",
    "QuizOption",
    "QuizQuestion",
    "Tour",
]
