"""
WorldState: one immutable snapshot of the two-train railway.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from railsim.core.agent import AgentState, create_agent


class SimulationStatus(Enum):
    """Coarse status of a world, as a status bar would show it."""

    SEARCHING = "searching"
    WAITING = "waiting"
    COLLIDED = "collided"


@dataclass(frozen=True)
class WorldState:
    """
    Full simulation snapshot.

    collision_position is set exactly when has_collided is True. Once a
    world has collided it never changes again.
    """

    agent_a: AgentState
    agent_b: AgentState
    step_count: int = 0  # Synchronized ticks executed
    has_collided: bool = False
    collision_position: int | None = None

    @property
    def agents(self) -> tuple[AgentState, AgentState]:
        """Both trains as (agent_a, agent_b)."""
        return self.agent_a, self.agent_b


def create_world(separation: int) -> WorldState:
    """
    Create the initial world.

    Train A lands at 0 and train B at separation. The separation may be
    positive, negative or zero.
    """
    return WorldState(
        agent_a=create_agent(0),
        agent_b=create_agent(separation),
    )


def world_status(world: WorldState) -> SimulationStatus:
    """Collided beats waiting; waiting means either latch is set."""
    if world.has_collided:
        return SimulationStatus.COLLIDED
    if world.agent_a.is_waiting or world.agent_b.is_waiting:
        return SimulationStatus.WAITING
    return SimulationStatus.SEARCHING
