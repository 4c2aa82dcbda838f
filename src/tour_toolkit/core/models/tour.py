"""
Module: tour

Purpose:
    Provides the Tour dataclass - the ordered sequence of landmarks a user
    navigates, always headed by the synthetic intro entry.

Key Functions:
    - Tour.index_of(id): Position of a landmark by id
    - Tour.append(landmark): New Tour with one more entry
    - Tour.replace_body(landmarks): New Tour keeping only the intro

Dependencies:
    - dataclasses (std)
    - .landmarks.Landmark

Used By:
    - ingestion.loader
    - navigation.state
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .landmarks import Landmark


@dataclass(frozen=True)
class Tour:
    """
    Ordered landmarks (immutable).

    Attributes:
        landmarks: Tuple of landmarks, intro first

    Invariants:
        - landmarks[0] is the intro (id 0, no quiz, never gated)
        - all ids are distinct

    Tours are rebuilt wholesale; the only incremental change is append(),
    which also returns a new instance.
    """

    landmarks: tuple[Landmark, ...]

    def __post_init__(self) -> None:
        """Validate tour on construction."""
        if not self.landmarks:
            raise ValueError("Tour must contain the intro landmark")
        intro = self.landmarks[0]
        if not intro.is_intro:
            raise ValueError(f"Tour must start with the intro (id 0), got id {intro.id}")
        if intro.quiz or intro.block_navigation:
            raise ValueError("Intro landmark cannot carry a quiz or block navigation")

        seen: set[int] = set()
        for landmark in self.landmarks:
            if landmark.id in seen:
                raise ValueError(f"Duplicate landmark id in tour: {landmark.id}")
            seen.add(landmark.id)

    @classmethod
    def from_parts(cls, intro: Landmark, body: Iterable[Landmark]) -> Tour:
        return cls(landmarks=(intro, *body))

    @property
    def intro(self) -> Landmark:
        return self.landmarks[0]

    @property
    def body(self) -> tuple[Landmark, ...]:
        """Every landmark after the intro."""
        return self.landmarks[1:]

    @property
    def ids(self) -> frozenset[int]:
        return frozenset(l.id for l in self.landmarks)

    def index_of(self, landmark_id: int) -> Optional[int]:
        """
        Find a landmark position by id.

        Returns:
            Index into landmarks, or None if absent
        """
        for i, landmark in enumerate(self.landmarks):
            if landmark.id == landmark_id:
                return i
        return None

    def append(self, landmark: Landmark) -> Tour:
        """Return a new Tour with landmark added at the end."""
        return Tour(landmarks=(*self.landmarks, landmark))

    def replace_body(self, landmarks: Iterable[Landmark]) -> Tour:
        """Return a new Tour keeping the intro and replacing everything after it."""
        return Tour.from_parts(self.intro, landmarks)

    def __len__(self) -> int:
        return len(self.landmarks)

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __iter__(self) -> Iterator[Landmark]:
        return iter(self.landmarks)

    def to_list(self) -> list[dict]:
        return [l.to_dict() for l in self.landmarks]

    def __repr__(self) -> str:
        return f"Tour({len(self.landmarks)} landmarks, ids={[l.id for l in self.landmarks]})"
