"""
Sweep & Wait: the algorithm both trains execute identically.

Each cycle a train sweeps phase_number steps forward, returns home,
sweeps phase_number steps backward, and returns home again. The range
then grows by one. The search radius widens forever, so every
coordinate is eventually visited.

The only thing a train senses is "I am standing on a parachute". If
that parachute is not its own (it is away from home), the train stops
and waits there for good. The other train, still sweeping, always
returns to its own parachute and collides with the waiting one.

The other train's home is passed in as a plain integer. It stands for
the stationary marker a train can sense underfoot. Nothing in this
module may look at the other train's position or phase.
"""

from __future__ import annotations
from dataclasses import replace

from railsim.core.agent import Action, AgentState, SweepPhase, check_coordinate


_PHASE_CYCLE = {
    SweepPhase.SWEEP_FORWARD: SweepPhase.RETURN_FROM_FORWARD,
    SweepPhase.RETURN_FROM_FORWARD: SweepPhase.SWEEP_BACKWARD,
    SweepPhase.SWEEP_BACKWARD: SweepPhase.RETURN_FROM_BACKWARD,
    SweepPhase.RETURN_FROM_BACKWARD: SweepPhase.SWEEP_FORWARD,
}


def at_foreign_marker(agent: AgentState, other_home: int) -> bool:
    """
    True when the train stands on a parachute that is not its own.

    A train at its own parachute has offset 0, so a nonzero offset while
    standing on a marker means the marker belongs to the other train.
    """
    return agent.position == other_home and agent.offset_from_home != 0


def next_phase(phase: SweepPhase) -> SweepPhase:
    """Return the sub-phase that follows phase in the fixed cycle."""
    try:
        return _PHASE_CYCLE[phase]
    except KeyError:
        raise ValueError(f"Unknown sweep phase: {phase!r}") from None


def decide(agent: AgentState, other_home: int) -> Action:
    """
    Choose the next action for a train.

    Priority:
    1. Already latched -> WAIT
    2. Standing on the foreign parachute -> WAIT (latch is set by advance)
    3. Direction given by the sweep phase

    Args:
        agent: The deciding train
        other_home: Coordinate of the other train's parachute

    Returns:
        The Action for this tick
    """
    if agent.is_waiting:
        return Action.WAIT

    if at_foreign_marker(agent, other_home):
        return Action.WAIT

    phase = agent.sweep_phase
    if phase in (SweepPhase.SWEEP_FORWARD, SweepPhase.RETURN_FROM_BACKWARD):
        return Action.FORWARD
    if phase in (SweepPhase.RETURN_FROM_FORWARD, SweepPhase.SWEEP_BACKWARD):
        return Action.BACKWARD
    raise ValueError(f"Unknown sweep phase: {phase!r}")


def advance(agent: AgentState, action: Action, other_home: int) -> AgentState:
    """
    Apply an action and return the train's next state.

    Movement counts as a step of the current sub-phase. WAIT does not
    move; it sets the latch when the input state stands on the foreign
    parachute. Once a sub-phase has used up phase_number steps the train
    moves to the next one, and finishing RETURN_FROM_BACKWARD widens the
    range by one. A latched train never changes phase.

    Args:
        agent: Current state (left untouched)
        action: Action returned by decide()
        other_home: Coordinate of the other train's parachute

    Returns:
        New AgentState

    Raises:
        CoordinateOverflowError: position or phase_number would leave
            the int64 range
    """
    if action is Action.FORWARD:
        new = replace(
            agent,
            position=check_coordinate(agent.position + 1),
            offset_from_home=agent.offset_from_home + 1,
            steps_in_phase=agent.steps_in_phase + 1,
        )
    elif action is Action.BACKWARD:
        new = replace(
            agent,
            position=check_coordinate(agent.position - 1),
            offset_from_home=agent.offset_from_home - 1,
            steps_in_phase=agent.steps_in_phase + 1,
        )
    elif action is Action.WAIT:
        if not agent.is_waiting and at_foreign_marker(agent, other_home):
            new = replace(agent, is_waiting=True)
        else:
            new = agent
    else:
        raise ValueError(f"Unknown action: {action!r}")

    if new.is_waiting or new.steps_in_phase < new.phase_number:
        return new

    phase = next_phase(new.sweep_phase)
    phase_number = new.phase_number
    if phase is SweepPhase.SWEEP_FORWARD:
        # Full cycle done: widen the search range
        phase_number = check_coordinate(phase_number + 1, "phase_number")

    return replace(
        new,
        sweep_phase=phase,
        phase_number=phase_number,
        steps_in_phase=0,
    )
