"""
Module: navigation.state

Purpose:
    Immutable navigation state and the pure transitions between states.
    The navigator owns the only live instance and swaps it on every step;
    nothing here touches timers or signals.

States:
    - Intro: current_index == 0
    - Viewing(i): current_index == i
    - transitioning: a slide or fade is in flight
    - gate: a quiz must be completed before Next proceeds

Key Functions:
    - initial_state(): Focus the intro
    - open_gate() / close_gate(): Quiz gate sub-state
    - begin_step(): Start a next/previous slide (target set immediately)
    - begin_fade(): Start a jump fade (indices unchanged until commit)
    - commit(): current := target
    - finish(): End the transition
    - insert(): Append a landmark and focus it
    - replace_tour(): New tour, bumped version
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from tour_toolkit.core.models import Landmark, QuizQuestion, Tour


@dataclass(frozen=True)
class QuizGate:
    """Open quiz gate for one landmark."""
    landmark_id: int
    questions: tuple[QuizQuestion, ...]


@dataclass(frozen=True)
class NavigationState:
    """
    Navigation state (immutable).

    Attributes:
        tour: Current tour
        current_index: Landmark on display
        target_index: Landmark being moved to (== current when idle)
        transitioning: A slide or fade is in flight
        gate: Open quiz gate, if any
        version: Bumped on tour replacement; timers from older versions
            are ignored
    """

    tour: Tour
    current_index: int = 0
    target_index: int = 0
    transitioning: bool = False
    gate: Optional[QuizGate] = None
    version: int = 0

    def __post_init__(self) -> None:
        size = len(self.tour)
        if not 0 <= self.current_index < size:
            raise ValueError(f"current_index out of range: {self.current_index}")
        if not 0 <= self.target_index < size:
            raise ValueError(f"target_index out of range: {self.target_index}")

    @property
    def current(self) -> Landmark:
        return self.tour[self.current_index]

    @property
    def target(self) -> Landmark:
        return self.tour[self.target_index]

    @property
    def is_idle(self) -> bool:
        """Accepting navigation intents."""
        return not self.transitioning and self.gate is None

    @property
    def at_intro(self) -> bool:
        return self.current_index == 0


def initial_state(tour: Tour, version: int = 0) -> NavigationState:
    return NavigationState(tour=tour, version=version)


def next_index(state: NavigationState) -> int:
    return (state.current_index + 1) % len(state.tour)


def previous_index(state: NavigationState) -> int:
    return (state.current_index - 1 + len(state.tour)) % len(state.tour)


def open_gate(state: NavigationState) -> NavigationState:
    landmark = state.current
    if not landmark.is_gated:
        raise ValueError(f"Landmark {landmark.id} is not gated")
    return replace(state, gate=QuizGate(landmark.id, landmark.quiz))


def close_gate(state: NavigationState) -> NavigationState:
    return replace(state, gate=None)


def begin_step(state: NavigationState, index: int) -> NavigationState:
    """Slide: the target moves now, the current index on commit()."""
    return replace(state, target_index=index, transitioning=True)


def begin_fade(state: NavigationState) -> NavigationState:
    """Fade: both indices move together on commit_jump()."""
    return replace(state, transitioning=True)


def commit(state: NavigationState) -> NavigationState:
    return replace(state, current_index=state.target_index)


def commit_jump(state: NavigationState, index: int) -> NavigationState:
    return replace(state, current_index=index, target_index=index)


def finish(state: NavigationState) -> NavigationState:
    return replace(state, transitioning=False)


def insert(state: NavigationState, landmark: Landmark) -> NavigationState:
    """Append a landmark and focus it (raises ValueError on a duplicate id)."""
    tour = state.tour.append(landmark)
    last = len(tour) - 1
    return replace(state, tour=tour, current_index=last, target_index=last)


def replace_tour(state: NavigationState, tour: Tour, focus: int = 0) -> NavigationState:
    """Swap the tour, drop any transition or gate and bump the version."""
    focus = focus if 0 <= focus < len(tour) else 0
    return NavigationState(
        tour=tour,
        current_index=focus,
        target_index=focus,
        transitioning=False,
        gate=None,
        version=state.version + 1,
    )
