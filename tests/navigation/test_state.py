"""Unit tests for the pure navigation transitions."""

import pytest

from tour_toolkit.navigation import state as transitions


class TestTransitions:

    def test_begin_step_when_called_then_target_moves_first(self, scenario_tour):
        state = transitions.begin_step(transitions.initial_state(scenario_tour), 1)
        assert (state.current_index, state.target_index, state.transitioning) == (0, 1, True)

        state = transitions.finish(transitions.commit(state))
        assert (state.current_index, state.target_index, state.transitioning) == (1, 1, False)

    def test_indices_when_at_edges_then_wrap(self, scenario_tour):
        state = transitions.initial_state(scenario_tour)
        assert transitions.previous_index(state) == 2
        last = transitions.commit_jump(state, 2)
        assert transitions.next_index(last) == 0

    def test_open_gate_when_landmark_not_gated_then_raises_error(self, scenario_tour):
        with pytest.raises(ValueError, match="not gated"):
            transitions.open_gate(transitions.initial_state(scenario_tour))

    def test_open_gate_when_gated_then_not_idle(self, scenario_tour):
        state = transitions.open_gate(transitions.commit_jump(transitions.initial_state(scenario_tour), 2))
        assert state.gate.landmark_id == 2
        assert not state.is_idle
        assert transitions.close_gate(state).is_idle

    def test_replace_tour_when_called_then_version_bumped_and_reset(self, scenario_tour):
        busy = transitions.begin_step(transitions.initial_state(scenario_tour, version=4), 1)
        state = transitions.replace_tour(busy, scenario_tour, focus=1)
        assert state.version == 5
        assert state.current_index == state.target_index == 1
        assert state.is_idle

    def test_replace_tour_when_focus_out_of_range_then_intro(self, scenario_tour):
        state = transitions.replace_tour(transitions.initial_state(scenario_tour), scenario_tour, focus=9)
        assert state.current_index == 0

    def test_state_when_index_out_of_range_then_raises_error(self, scenario_tour):
        with pytest.raises(ValueError, match="current_index"):
            transitions.NavigationState(tour=scenario_tour, current_index=3)
