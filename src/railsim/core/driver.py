"""
Driver: advances the two-train world one synchronized tick at a time.

Both trains decide from the SAME pre-tick snapshot and both transitions
are computed independently. Train B never sees where train A moved this
tick. Chaining the two updates would change the outcome.

Two surfaces are available:
- Pure functions (step, iter_steps, run, run_history) on snapshots
- Simulation: a small holder for callers that want a "current world"
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Iterator

from railsim.core.sweep import advance, decide
from railsim.core.world import WorldState, create_world

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 10000


def _check_budget(max_steps: int) -> None:
    if max_steps < 0:
        raise ValueError(f"max_steps must be >= 0, got {max_steps}")


def step(world: WorldState) -> WorldState:
    """
    Execute one synchronized tick.

    A collided world is returned as is. Trains that already share a
    coordinate before the tick (only possible for separation 0) collide
    where they stand.

    Args:
        world: Current snapshot (never modified)

    Returns:
        The next snapshot, with step_count increased by one
    """
    if world.has_collided:
        return world

    agent_a, agent_b = world.agents

    if agent_a.position == agent_b.position:
        logger.debug("trains start on the same coordinate %d", agent_a.position)
        return replace(
            world,
            step_count=world.step_count + 1,
            has_collided=True,
            collision_position=agent_a.position,
        )

    # Both decisions read the pre-tick snapshot
    action_a = decide(agent_a, agent_b.home)
    action_b = decide(agent_b, agent_a.home)

    new_a = advance(agent_a, action_a, agent_b.home)
    new_b = advance(agent_b, action_b, agent_a.home)

    step_count = world.step_count + 1
    for name, before, after in (("A", agent_a, new_a), ("B", agent_b, new_b)):
        if after.is_waiting and not before.is_waiting:
            logger.debug(
                "train %s latched at foreign parachute %d (tick %d)",
                name, after.position, step_count,
            )

    has_collided = new_a.position == new_b.position
    if has_collided:
        logger.debug("collision at %d after %d ticks", new_a.position, step_count)

    return WorldState(
        agent_a=new_a,
        agent_b=new_b,
        step_count=step_count,
        has_collided=has_collided,
        collision_position=new_a.position if has_collided else None,
    )


def iter_steps(world: WorldState, max_steps: int) -> Iterator[WorldState]:
    """
    Yield successive snapshots after world.

    Stops after yielding a collided snapshot, or after max_steps
    snapshots. The starting world itself is not yielded.
    """
    _check_budget(max_steps)
    for _ in range(max_steps):
        if world.has_collided:
            return
        world = step(world)
        yield world


def run(separation: int, max_steps: int = DEFAULT_MAX_STEPS) -> WorldState:
    """
    Run from a fresh world until collision or the step budget runs out.

    Running out of budget is not an error: the returned world simply has
    has_collided == False and the caller may retry with a larger budget.

    Args:
        separation: Landing coordinate of train B (train A lands at 0)
        max_steps: Maximum number of ticks to execute

    Returns:
        Final WorldState
    """
    world = create_world(separation)
    for world in iter_steps(world, max_steps):
        pass

    if not world.has_collided:
        logger.info(
            "no collision for separation %d within %d steps", separation, max_steps
        )
    return world


def run_history(separation: int, max_steps: int = DEFAULT_MAX_STEPS) -> list[WorldState]:
    """Every snapshot from the initial world to the final one, in order."""
    world = create_world(separation)
    return [world, *iter_steps(world, max_steps)]


@dataclass
class SimulationConfig:
    """Configuration for a Simulation."""

    separation: int = 5  # Landing coordinate of train B
    max_steps: int = DEFAULT_MAX_STEPS  # Budget used by Simulation.run()

    def __post_init__(self) -> None:
        _check_budget(self.max_steps)


@dataclass
class Simulation:
    """
    Holder for the current world and its history.

    Meant for step-at-a-time consumers (timers, step buttons, notebooks).
    It only swaps references; every snapshot in history stays valid.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)

    world: WorldState = field(init=False)
    history: list[WorldState] = field(default_factory=list, init=False)

    def __post_init__(self):
        self.reset()

    def reset(self) -> WorldState:
        """Start again from a fresh world."""
        self.world = create_world(self.config.separation)
        self.history = [self.world]
        return self.world

    def step(self) -> WorldState:
        """Advance one tick. A collided world stays put."""
        new_world = step(self.world)
        if new_world is not self.world:
            self.history.append(new_world)
            self.world = new_world
        return self.world

    def run(self, n_ticks: int | None = None) -> dict:
        """
        Run up to n_ticks ticks, stopping early on collision.

        With n_ticks=None the remaining config.max_steps budget is used.

        Returns:
            Statistics dictionary
        """
        if n_ticks is None:
            n_ticks = max(0, self.config.max_steps - self.world.step_count)

        start = self.world.step_count
        for new_world in iter_steps(self.world, n_ticks):
            self.history.append(new_world)
            self.world = new_world

        return {
            "n_ticks": self.world.step_count - start,
            "step_count": self.world.step_count,
            "has_collided": self.world.has_collided,
            "collision_position": self.world.collision_position,
            "phase_a": self.world.agent_a.phase_number,
            "phase_b": self.world.agent_b.phase_number,
        }
