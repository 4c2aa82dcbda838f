"""
Module: navigation.navigator

Purpose:
    Qt-facing driver of the navigation state machine. Accepts user intents
    (next, previous, jump, insert, reload, upload), sequences the timed
    slide/fade transitions with single-shot QTimers and emits signals the
    presentation layer renders from.

Key Classes:
    - TourNavigator: Owns the NavigationState and the transition timers

Timing:
    next/previous: target set now → slide_ms → current := target → slide_ms → idle
    jump_to:       fade_ms → current := target := index → fade_ms → idle

Dependencies:
    - PySide6.QtCore: QObject, Signal, QTimer
    - navigation.state: Pure transitions

Used By:
    - Presentation layer (map, sidebar, quiz dialog)
    - cli
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Protocol

from PySide6.QtCore import QObject, QTimer, Signal

from tour_toolkit.config import TourConfig
from tour_toolkit.core.models import Landmark, Tour
from tour_toolkit.ingestion import (
    DiagnosticsCollector,
    OverlayStore,
    TourLoader,
    UploadError,
    parse_upload,
)

from . import state as transitions
from .state import NavigationState

logger = logging.getLogger(__name__)


class QuizResultReporter(Protocol):
    def submit_quiz_results(self, summary: Mapping[str, Any]) -> bool: ...


class TourNavigator(QObject):
    """
    Navigation state machine over a tour.

    Intents return True when accepted. While a transition is in flight or a
    quiz gate is open, next/previous/jump_to/insert_and_focus/reload are
    rejected with no state change. Uploads replace the tour outright.

    Usage:
        navigator = TourNavigator(loader.load(), config=config, loader=loader)
        navigator.state_changed.connect(view.render)
        navigator.quiz_requested.connect(view.show_quiz)
        navigator.next()
    """

    # Emitted with the new NavigationState after every change
    state_changed = Signal(object)
    # Emitted with the gated Landmark when Next hits its quiz
    quiz_requested = Signal(object)
    # Emitted with the submission summary (or None) once the gate closes
    quiz_completed = Signal(object)
    # Emitted when a slide or fade has fully finished
    transition_finished = Signal()
    # Emitted with a user-facing message when an upload is rejected
    upload_rejected = Signal(str)
    # Emitted with the intent name when an intent is ignored
    intent_rejected = Signal(str)

    def __init__(
        self,
        tour: Tour,
        *,
        config: Optional[TourConfig] = None,
        loader: Optional[TourLoader] = None,
        overlay_store: Optional[OverlayStore] = None,
        reporter: Optional[QuizResultReporter] = None,
        diagnostics: Optional[DiagnosticsCollector] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or TourConfig()
        self.loader = loader
        self.overlay_store = overlay_store if overlay_store is not None else (
            loader.overlay_store if loader is not None else None
        )
        self.reporter = reporter
        self.diagnostics = diagnostics
        self._state = transitions.initial_state(tour)
        self._timers: List[QTimer] = []

    # ─────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def tour(self) -> Tour:
        return self._state.tour

    @property
    def current_landmark(self) -> Landmark:
        return self._state.current

    def _set_state(self, new_state: NavigationState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)

    def _accepts(self, intent: str) -> bool:
        if self._state.is_idle:
            return True
        reason = "quiz gate open" if self._state.gate is not None else "transition in progress"
        logger.debug(f"Ignoring {intent}: {reason}")
        self.intent_rejected.emit(intent)
        return False

    # ─────────────────────────────────────────────────────────────────────
    # Timers
    # ─────────────────────────────────────────────────────────────────────

    def _schedule(self, delay_ms: int, step: Callable[[], None]) -> None:
        """Run step after delay_ms unless the tour is replaced first."""
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(delay_ms)
        version = self._state.version
        timer.timeout.connect(lambda: self._fire(timer, version, step))
        self._timers.append(timer)
        timer.start()

    def _fire(self, timer: QTimer, version: int, step: Callable[[], None]) -> None:
        if timer in self._timers:
            self._timers.remove(timer)
        timer.deleteLater()
        if version != self._state.version:
            logger.debug(f"Dropping stale timer (version {version}, now {self._state.version})")
            return
        step()

    def _stop_timers(self) -> None:
        for timer in self._timers:
            timer.stop()
            timer.deleteLater()
        self._timers.clear()

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    # ─────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────

    def _slide_to(self, index: int) -> None:
        self._set_state(transitions.begin_step(self._state, index))
        self._schedule(self.config.slide_ms, self._slide_commit)

    def _slide_commit(self) -> None:
        self._set_state(transitions.commit(self._state))
        self._schedule(self.config.slide_ms, self._finish)

    def _finish(self) -> None:
        self._set_state(transitions.finish(self._state))
        self.transition_finished.emit()

    # ─────────────────────────────────────────────────────────────────────
    # Intents
    # ─────────────────────────────────────────────────────────────────────

    def next(self) -> bool:
        """
        Advance to the next landmark (wrapping to the intro).

        A gated landmark opens the quiz gate instead; the advance happens on
        complete_quiz().
        """
        if not self._accepts("next"):
            return False

        landmark = self._state.current
        if landmark.is_gated:
            logger.info(f"Quiz required before leaving {landmark.name!r}")
            self._set_state(transitions.open_gate(self._state))
            self.quiz_requested.emit(landmark)
            return True

        self._slide_to(transitions.next_index(self._state))
        return True

    def previous(self) -> bool:
        """Go back one landmark (wrapping to the last); never gated."""
        if not self._accepts("previous"):
            return False
        self._slide_to(transitions.previous_index(self._state))
        return True

    def jump_to(self, landmark_id: int) -> bool:
        """Fade to a landmark by id; no-op if unknown or already current."""
        if not self._accepts("jump_to"):
            return False

        index = self._state.tour.index_of(landmark_id)
        if index is None:
            logger.debug(f"Ignoring jump to unknown landmark {landmark_id}")
            return False
        if index == self._state.current_index:
            return False

        self._set_state(transitions.begin_fade(self._state))

        def swap() -> None:
            self._set_state(transitions.commit_jump(self._state, index))
            self._schedule(self.config.fade_ms, self._finish)

        self._schedule(self.config.fade_ms, swap)
        return True

    def complete_quiz(self, summary: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Close the quiz gate and carry out the deferred Next.

        The advance happens regardless of score. A summary, when given, is
        submitted through the reporter.
        """
        gate = self._state.gate
        if gate is None:
            logger.debug("complete_quiz() with no open gate")
            return False

        if summary is not None and self.reporter is not None:
            self.reporter.submit_quiz_results(summary)

        self._state = transitions.close_gate(self._state)
        self.quiz_completed.emit(dict(summary) if summary is not None else None)
        self._slide_to(transitions.next_index(self._state))
        return True

    def insert_and_focus(self, landmark: Landmark) -> bool:
        """Append a custom landmark, persist it and focus it."""
        if not self._accepts("insert_and_focus"):
            return False

        try:
            new_state = transitions.insert(self._state, landmark)
        except ValueError as e:
            logger.warning(f"Cannot add landmark {landmark.name!r}: {e}")
            self.intent_rejected.emit("insert_and_focus")
            return False

        if self.overlay_store is not None and not self.overlay_store.append(landmark):
            logger.warning(f"Landmark {landmark.name!r} added to the tour but not saved")

        self._set_state(new_state)
        return True

    def reload(self) -> bool:
        """Re-run the loader and return to the intro."""
        if not self._accepts("reload"):
            return False
        if self.loader is None:
            logger.warning("reload() without a loader")
            return False

        tour = self.loader.load()
        self._stop_timers()
        self._set_state(transitions.replace_tour(self._state, tour))
        return True

    def load_upload(self, text: str) -> bool:
        """
        Replace everything after the intro with an uploaded tour file.

        On rejection the tour is untouched and upload_rejected is emitted.
        """
        try:
            landmarks = parse_upload(text, config=self.config, diagnostics=self.diagnostics)
        except UploadError as e:
            logger.warning(f"Upload rejected ({e.kind.value}): {e}")
            self.upload_rejected.emit(str(e))
            return False

        tour = self._state.tour.replace_body(landmarks)
        self._stop_timers()
        self._set_state(transitions.replace_tour(self._state, tour, focus=1 if len(tour) > 1 else 0))
        logger.info(f"Tour replaced by upload: {len(landmarks)} landmarks")
        return True
