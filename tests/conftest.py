import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import tour_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from tour_toolkit.config import TourConfig
from tour_toolkit.core.models import Landmark, QuestionType, QuizOption, QuizQuestion, Tour
from tour_toolkit.ingestion.diagnostics import DiagnosticsCollector
from tour_toolkit.ingestion.fallback import INTRO_LANDMARK


# Common test fixtures
@pytest.fixture
def config(tmp_path: Path) -> TourConfig:
    """Fast timings and an overlay store under tmp_path."""
    return TourConfig(overlay_path=tmp_path / "custom_locations.json", slide_ms=5, fade_ms=5)


@pytest.fixture
def diagnostics() -> DiagnosticsCollector:
    return DiagnosticsCollector()


@pytest.fixture
def fixed_clock():
    """Clock returning a constant millisecond timestamp."""
    return lambda: 1_700_000_000_000


@pytest.fixture
def true_false_question() -> QuizQuestion:
    return QuizQuestion(
        question="Petra is in Jordan.",
        type=QuestionType.TRUE_FALSE,
        options=(QuizOption("True", True), QuizOption("False", False)),
    )


def make_landmark(landmark_id: int, name: str = "", **kwargs) -> Landmark:
    """Build a landmark with sensible defaults."""
    name = name or f"Landmark {landmark_id}"
    defaults = dict(
        title=name.upper(),
        description="",
        image_url="https://example.com/img.jpg",
        coords=(10.0, 20.0),
    )
    defaults.update(kwargs)
    return Landmark(id=landmark_id, name=name, **defaults)


@pytest.fixture
def scenario_tour(true_false_question) -> Tour:
    """[Intro, L1 (no quiz), L2 (quiz, block_navigation)]."""
    return Tour.from_parts(INTRO_LANDMARK, (
        make_landmark(1, "Plain"),
        make_landmark(2, "Gated", quiz=(true_false_question,), block_navigation=True),
    ))


@pytest.fixture
def landmark_factory():
    return make_landmark
