"""Navigation state machine, Qt driver and quiz sessions."""

from .navigator import QuizResultReporter, TourNavigator
from .quiz_session import QuizSession
from .state import NavigationState, QuizGate

__all__ = [
    "NavigationState",
    "QuizGate",
    "QuizResultReporter",
    "QuizSession",
    "TourNavigator",
]
