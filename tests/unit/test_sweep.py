"""Unit tests for the Sweep & Wait decision and transition functions."""

import pytest

from railsim.core.agent import (
    COORDINATE_LIMIT,
    Action,
    AgentState,
    CoordinateOverflowError,
    SweepPhase,
    create_agent,
)
from railsim.core.sweep import advance, at_foreign_marker, decide, next_phase


class TestNextPhase:
    """Tests for the four-phase cycle."""

    def test_cycle_order(self):
        assert next_phase(SweepPhase.SWEEP_FORWARD) is SweepPhase.RETURN_FROM_FORWARD
        assert next_phase(SweepPhase.RETURN_FROM_FORWARD) is SweepPhase.SWEEP_BACKWARD
        assert next_phase(SweepPhase.SWEEP_BACKWARD) is SweepPhase.RETURN_FROM_BACKWARD
        assert next_phase(SweepPhase.RETURN_FROM_BACKWARD) is SweepPhase.SWEEP_FORWARD

    def test_four_steps_return_to_start(self):
        phase = SweepPhase.SWEEP_BACKWARD
        for _ in range(4):
            phase = next_phase(phase)
        assert phase is SweepPhase.SWEEP_BACKWARD

    def test_unknown_phase(self):
        with pytest.raises(ValueError):
            next_phase("sideways")


class TestAtForeignMarker:
    """Tests for foreign parachute detection."""

    def test_own_marker_is_not_foreign(self):
        # Separation 0: both parachutes share a coordinate
        assert not at_foreign_marker(create_agent(0), other_home=0)

    def test_foreign_marker(self):
        agent = AgentState(position=3, home=0, offset_from_home=3)
        assert at_foreign_marker(agent, other_home=3)

    def test_no_marker(self):
        agent = AgentState(position=2, home=0, offset_from_home=2)
        assert not at_foreign_marker(agent, other_home=3)


class TestDecide:
    """Tests for decide()."""

    @pytest.mark.parametrize(
        "phase, expected",
        [
            (SweepPhase.SWEEP_FORWARD, Action.FORWARD),
            (SweepPhase.RETURN_FROM_FORWARD, Action.BACKWARD),
            (SweepPhase.SWEEP_BACKWARD, Action.BACKWARD),
            (SweepPhase.RETURN_FROM_BACKWARD, Action.FORWARD),
        ],
    )
    def test_direction_from_phase(self, phase, expected):
        agent = AgentState(position=1, home=0, offset_from_home=1, sweep_phase=phase, phase_number=3)
        assert decide(agent, other_home=10) is expected

    def test_fresh_agent_moves_forward(self, fresh_agent):
        assert decide(fresh_agent, other_home=7) is Action.FORWARD

    def test_latched_agent_waits(self):
        agent = AgentState(position=3, home=0, offset_from_home=3, is_waiting=True)
        # Even if other_home no longer matches, the latch wins
        assert decide(agent, other_home=-50) is Action.WAIT

    def test_waits_on_foreign_marker(self):
        agent = AgentState(position=4, home=0, offset_from_home=4, phase_number=5, steps_in_phase=4)
        assert decide(agent, other_home=4) is Action.WAIT

    def test_ignores_other_home_elsewhere(self):
        agent = AgentState(position=2, home=0, offset_from_home=2, phase_number=4, steps_in_phase=2)
        actions = {decide(agent, other_home=h) for h in range(-10, 11) if h != 2}
        assert actions == {Action.FORWARD}

    def test_unknown_phase(self):
        agent = AgentState(position=1, home=0, offset_from_home=1, sweep_phase="sideways")
        with pytest.raises(ValueError):
            decide(agent, other_home=10)


class TestAdvance:
    """Tests for advance()."""

    def test_forward_move(self):
        agent = AgentState(position=0, home=0, phase_number=3)
        new = advance(agent, Action.FORWARD, other_home=10)
        assert new.position == 1
        assert new.offset_from_home == 1
        assert new.steps_in_phase == 1
        assert new.sweep_phase is SweepPhase.SWEEP_FORWARD

    def test_backward_move(self):
        agent = AgentState(
            position=5, home=5, sweep_phase=SweepPhase.SWEEP_BACKWARD, phase_number=3
        )
        new = advance(agent, Action.BACKWARD, other_home=10)
        assert new.position == 4
        assert new.offset_from_home == -1
        assert new.steps_in_phase == 1

    def test_input_untouched(self, fresh_agent):
        advance(fresh_agent, Action.FORWARD, other_home=10)
        assert fresh_agent == create_agent(0)

    def test_phase_transition_after_phase_number_steps(self, fresh_agent):
        new = advance(fresh_agent, Action.FORWARD, other_home=10)
        assert new.sweep_phase is SweepPhase.RETURN_FROM_FORWARD
        assert new.steps_in_phase == 0
        assert new.phase_number == 1

    def test_cycle_rollover_grows_phase_number(self):
        agent = AgentState(
            position=-1,
            home=0,
            offset_from_home=-1,
            sweep_phase=SweepPhase.RETURN_FROM_BACKWARD,
            phase_number=2,
            steps_in_phase=1,
        )
        new = advance(agent, Action.FORWARD, other_home=10)
        assert new.position == 0
        assert new.sweep_phase is SweepPhase.SWEEP_FORWARD
        assert new.phase_number == 3
        assert new.steps_in_phase == 0

    def test_one_full_cycle(self, fresh_agent):
        agent = fresh_agent
        positions = []
        for _ in range(4):
            agent = advance(agent, decide(agent, other_home=100), other_home=100)
            positions.append(agent.position)
        assert positions == [1, 0, -1, 0]
        assert agent.phase_number == 2
        assert agent.sweep_phase is SweepPhase.SWEEP_FORWARD

    def test_wait_sets_latch_on_foreign_marker(self):
        agent = AgentState(position=3, home=0, offset_from_home=3, phase_number=3, steps_in_phase=2)
        new = advance(agent, Action.WAIT, other_home=3)
        assert new.is_waiting is True
        assert new.position == 3
        assert new.steps_in_phase == 2
        assert new.sweep_phase is agent.sweep_phase

    def test_wait_when_latched_is_noop(self):
        agent = AgentState(position=3, home=0, offset_from_home=3, is_waiting=True)
        assert advance(agent, Action.WAIT, other_home=3) == agent

    def test_latched_agent_never_changes_phase(self):
        agent = AgentState(
            position=3, home=0, offset_from_home=3, phase_number=2, is_waiting=True
        )
        for _ in range(20):
            agent = advance(agent, decide(agent, other_home=3), other_home=3)
        assert agent.phase_number == 2
        assert agent.sweep_phase is SweepPhase.SWEEP_FORWARD
        assert agent.is_waiting is True

    def test_unknown_action(self, fresh_agent):
        with pytest.raises(ValueError):
            advance(fresh_agent, "jump", other_home=3)


class TestCoordinateBoundary:
    """Tests for the int64 boundary."""

    def test_forward_past_limit(self):
        agent = AgentState(position=COORDINATE_LIMIT, home=COORDINATE_LIMIT, phase_number=5)
        with pytest.raises(CoordinateOverflowError):
            advance(agent, Action.FORWARD, other_home=0)

    def test_backward_past_limit(self):
        agent = AgentState(
            position=-COORDINATE_LIMIT,
            home=-COORDINATE_LIMIT,
            sweep_phase=SweepPhase.SWEEP_BACKWARD,
            phase_number=5,
        )
        with pytest.raises(OverflowError):
            advance(agent, Action.BACKWARD, other_home=0)

    def test_phase_number_past_limit(self):
        agent = AgentState(
            position=-1,
            home=0,
            offset_from_home=-1,
            sweep_phase=SweepPhase.RETURN_FROM_BACKWARD,
            phase_number=COORDINATE_LIMIT,
            steps_in_phase=COORDINATE_LIMIT - 1,
        )
        with pytest.raises(CoordinateOverflowError):
            advance(agent, Action.FORWARD, other_home=10)

    def test_move_up_to_limit(self):
        agent = AgentState(position=COORDINATE_LIMIT - 1, home=COORDINATE_LIMIT - 1, phase_number=5)
        assert advance(agent, Action.FORWARD, other_home=0).position == COORDINATE_LIMIT
