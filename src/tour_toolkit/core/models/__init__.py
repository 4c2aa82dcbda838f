"""
Core Models Package

Immutable, validated data models that serve as the single source of truth
for every ingestion path and for navigation.

All models in this package are frozen dataclasses. A Tour is never mutated:
append() and replace_body() return new instances, so navigation state can
hold a Tour without defensive copies.
"""

from .quiz import QuestionType, QuizOption, QuizQuestion
from .landmarks import Coords, IconType, Landmark, INTRO_ID, parse_coords
from .tour import Tour

__all__ = [
    "QuestionType",
    "QuizOption",
    "QuizQuestion",
    "Coords",
    "IconType",
    "Landmark",
    "INTRO_ID",
    "parse_coords",
    "Tour",
]
