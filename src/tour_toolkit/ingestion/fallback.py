"""
Built-in tour content: the synthetic intro landmark that heads every tour,
and the fallback landmarks used when no external source is available.
"""

from __future__ import annotations

from tour_toolkit.core.models import (
    INTRO_ID,
    IconType,
    Landmark,
    QuestionType,
    QuizOption,
    QuizQuestion,
    Tour,
)


INTRO_LANDMARK = Landmark(
    id=INTRO_ID,
    name="Introduction",
    title="WELCOME TO THE JOURNEY",
    description=(
        "<p>Travel from landmark to landmark across the map. "
        "Use <strong>Next</strong> and <strong>Previous</strong> to move along the tour, "
        "or pick any marker to jump straight to it.</p>"
    ),
    image_url="https://picsum.photos/seed/journey/1200/800",
    coords=(20.0, 0.0),
)


FALLBACK_LANDMARKS: tuple[Landmark, ...] = (
    Landmark(
        id=1,
        name="Petra",
        title="PETRA",
        description=(
            "<p>A city carved into rose-red sandstone cliffs by the Nabataeans, "
            "reached through the narrow gorge of the Siq.</p>"
        ),
        image_url="https://picsum.photos/seed/petra/1200/800",
        coords=(30.3285, 35.4444),
        aliases=("Jordan",),
        quiz=(
            QuizQuestion(
                question="Which people carved Petra's facades?",
                type=QuestionType.MULTIPLE_CHOICE,
                options=(
                    QuizOption("The Nabataeans", True),
                    QuizOption("The Romans", False),
                    QuizOption("The Ottomans", False),
                ),
            ),
        ),
    ),
    Landmark(
        id=2,
        name="Machu Picchu",
        title="MACHU PICCHU",
        description="<p>A fifteenth-century Inca citadel on a ridge above the Urubamba valley.</p>",
        image_url="https://picsum.photos/seed/machu-picchu/1200/800",
        coords=(-13.1631, -72.5450),
        aliases=("Peru",),
        icon_type=IconType.NATURE,
        quiz=(
            QuizQuestion(
                question="Machu Picchu was built by the Inca.",
                type=QuestionType.TRUE_FALSE,
                options=(QuizOption("True", True), QuizOption("False", False)),
            ),
        ),
        block_navigation=True,
    ),
    Landmark(
        id=3,
        name="Great Wall of China",
        title="GREAT WALL OF CHINA",
        description="<p>Fortifications built over two millennia along China's historic northern border.</p>",
        image_url="https://picsum.photos/seed/great-wall/1200/800",
        coords=(40.4319, 116.5704),
        aliases=("China",),
    ),
    Landmark(
        id=4,
        name="Victoria Falls",
        title="VICTORIA FALLS",
        description="<p>The Zambezi drops more than a hundred metres into a chain of basalt gorges.</p>",
        image_url="https://picsum.photos/seed/victoria-falls/1200/800",
        coords=(-17.9243, 25.8572),
        aliases=("Zambia", "Zimbabwe"),
        icon_type=IconType.WATER,
    ),
)


def fallback_tour() -> Tour:
    """Intro followed by the built-in landmarks."""
    return Tour.from_parts(INTRO_LANDMARK, FALLBACK_LANDMARKS)
