"""
AgentState: the record of one train on the railway.

The record stores ONLY what the train itself knows:
- Where it is (position) and where its parachute lies (home)
- How far it has travelled from home (offset_from_home)
- Where it is in the sweep cycle (phase, range, steps taken)
- Whether it has latched onto a foreign parachute (is_waiting)

It never holds anything about the other train.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


# Trajectories are stored as int64 arrays in the analysis layer
COORDINATE_LIMIT = 2**63 - 1


class CoordinateOverflowError(OverflowError):
    """Raised when a position or phase number would leave the int64 range."""


class SweepPhase(Enum):
    """The four sub-phases of one search cycle, in cycle order."""

    SWEEP_FORWARD = "sweep_forward"
    RETURN_FROM_FORWARD = "return_from_forward"
    SWEEP_BACKWARD = "sweep_backward"
    RETURN_FROM_BACKWARD = "return_from_backward"


class Action(Enum):
    """What a train does on one tick."""

    FORWARD = "forward"
    BACKWARD = "backward"
    WAIT = "wait"


@dataclass(frozen=True)
class AgentState:
    """
    State of a single train.

    Immutable: transitions build a new record with dataclasses.replace().

    offset_from_home is carried explicitly because a train reads its
    displacement from an odometer, not its absolute position. It must
    always equal position - home.
    """

    position: int  # Absolute coordinate on the railway
    home: int  # Parachute position, fixed at creation
    offset_from_home: int = 0  # Signed displacement accumulated by moves
    sweep_phase: SweepPhase = SweepPhase.SWEEP_FORWARD
    phase_number: int = 1  # Length of each sub-phase in the current cycle
    steps_in_phase: int = 0  # In [0, phase_number)
    is_waiting: bool = False  # Absorbing latch

    @property
    def home_distance(self) -> int:
        """Unsigned distance from the train's own parachute."""
        return abs(self.offset_from_home)


def check_coordinate(value: int, name: str = "position") -> int:
    """Return value unchanged, or raise if it leaves the int64 range."""
    if abs(value) > COORDINATE_LIMIT:
        raise CoordinateOverflowError(
            f"{name} {value} exceeds coordinate limit {COORDINATE_LIMIT}"
        )
    return value


def create_agent(position: int) -> AgentState:
    """
    Create a freshly dropped train.

    The parachute lands where the train lands, so home == position and
    the train starts its first forward sweep with a range of 1.

    Args:
        position: Landing coordinate (any integer within COORDINATE_LIMIT)

    Returns:
        Initial AgentState
    """
    check_coordinate(position)
    return AgentState(position=position, home=position)
