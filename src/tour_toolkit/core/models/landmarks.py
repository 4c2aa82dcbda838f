"""
Module: landmarks

Purpose:
    Provides the Landmark dataclass - one point of interest in a tour with
    descriptive, media and optional quiz content. Immutable, validated on
    construction.

Key Functions:
    - parse_coords(): Convert a raw coordinate pair to two finite floats
    - Landmark.is_gated: Whether leaving this landmark requires the quiz
    - Landmark.to_dict() / Landmark.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - math (std)
    - .quiz.QuizQuestion

Used By:
    - core.models.tour.Tour
    - ingestion.coercers
    - navigation.navigator
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .quiz import QuizQuestion


Coords = tuple[float, float]

INTRO_ID = 0


class IconType(str, Enum):
    """Map marker style."""
    MONUMENT = "monument"
    NATURE = "nature"
    WATER = "water"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> IconType:
        """Restrict arbitrary input to the enum, falling back to MONUMENT."""
        try:
            return cls(value)
        except ValueError:
            return cls.MONUMENT


def _to_finite_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def parse_coords(raw: Any) -> Optional[Coords]:
    """
    Convert a raw coordinate pair to (latitude, longitude).

    Accepts a 2-element list/tuple whose entries are numbers or numeric
    strings. None, bools, blank strings, NaN and infinities are rejected.

    Args:
        raw: Candidate coordinate value from any source

    Returns:
        Tuple of two finite floats, or None if unusable

    Example:
        >>> parse_coords(["30.33", "35.44"])
        (30.33, 35.44)
        >>> parse_coords([30.33, None]) is None
        True
    """
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return None
    lat = _to_finite_float(raw[0])
    lon = _to_finite_float(raw[1])
    if lat is None or lon is None:
        return None
    return (lat, lon)


@dataclass(frozen=True)
class Landmark:
    """
    Point of interest (immutable).

    Attributes:
        id: Identifier, unique within a Tour (0 is reserved for the intro)
        name: Plain name like "Petra"
        title: Display form, conventionally upper-cased
        description: Rich text, HTML-bearing, rendered verbatim downstream
        image_url: Image URL (placeholder when the source had none)
        coords: (latitude, longitude), both finite
        aliases: Optional alternative names (e.g. the country)
        icon_type: Map marker style
        video_url: Optional video link
        audio_url: Optional audio link
        quiz: Optional non-empty tuple of questions
        block_navigation: Forward navigation requires completing the quiz

    Invariants:
        - coords are two finite floats
        - quiz is None or non-empty
    """

    id: int
    name: str
    title: str
    description: str
    image_url: str
    coords: Coords
    aliases: Optional[tuple[str, ...]] = None
    icon_type: IconType = IconType.MONUMENT
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    quiz: Optional[tuple[QuizQuestion, ...]] = None
    block_navigation: bool = False

    def __post_init__(self) -> None:
        """Validate landmark on construction."""
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValueError(f"id must be an integer: {self.id!r}")
        if not isinstance(self.name, str):
            raise ValueError(f"name must be a string: {self.name!r}")
        coords = parse_coords(self.coords)
        if coords is None:
            raise ValueError(f"coords must be two finite numbers: {self.coords!r}")
        object.__setattr__(self, "coords", coords)
        if self.quiz is not None and len(self.quiz) == 0:
            raise ValueError("quiz must be None or non-empty")
        if not isinstance(self.icon_type, IconType):
            raise ValueError(f"Invalid icon type: {self.icon_type!r}")

    @property
    def is_intro(self) -> bool:
        return self.id == INTRO_ID

    @property
    def is_gated(self) -> bool:
        """
        Whether forward navigation past this landmark needs the quiz.

        Returns:
            True only for non-intro landmarks with a quiz and block_navigation
        """
        return not self.is_intro and bool(self.quiz) and self.block_navigation

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the persisted landmark shape (camelCase keys).

        The same shape is accepted back by the overlay and upload coercers.
        """
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "imageUrl": self.image_url,
            "coords": list(self.coords),
            "iconType": self.icon_type.value,
            "videoUrl": self.video_url,
            "audioUrl": self.audio_url,
            "block_navigation": self.block_navigation,
        }
        if self.aliases is not None:
            d["aliases"] = list(self.aliases)
        if self.quiz:
            d["quiz"] = [q.to_dict() for q in self.quiz]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Landmark:
        """
        Deserialize from the persisted shape produced by to_dict().

        Strict: untrusted records go through the ingestion coercers instead.
        """
        quiz = data.get("quiz")
        aliases = data.get("aliases")
        return cls(
            id=data["id"],
            name=data["name"],
            title=data["title"],
            description=data.get("description", ""),
            image_url=data["imageUrl"],
            coords=tuple(data["coords"]),
            aliases=tuple(aliases) if aliases is not None else None,
            icon_type=IconType(data.get("iconType", "monument")),
            video_url=data.get("videoUrl"),
            audio_url=data.get("audioUrl"),
            quiz=tuple(QuizQuestion.from_dict(q) for q in quiz) if quiz else None,
            block_navigation=bool(data.get("block_navigation", False)),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        quiz_len = len(self.quiz) if self.quiz else 0
        return (
            f"Landmark({self.id}, {self.name!r}, coords={self.coords}, "
            f"quiz={quiz_len}, gated={self.is_gated})"
        )
