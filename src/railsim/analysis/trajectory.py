"""
Trajectories: a run's snapshot history as numpy arrays.

This layer reads snapshots produced by the driver and never feeds
anything back into it.

Mirror relation between separations D and -D:
Shifting the -D world by +D gives the D world with the trains'
roles exchanged. Because both trains run the same algorithm, tick for
tick:

    position_a(-D) = position_b(D) - D
    position_b(-D) = position_a(D) - D

so the gap position_b - position_a of the -D run is exactly the
negation of the gap of the D run.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from railsim.core.agent import SweepPhase
from railsim.core.driver import DEFAULT_MAX_STEPS, run_history
from railsim.core.world import WorldState


@dataclass
class Trajectory:
    """Per-tick record of one run. All arrays share the same length."""

    separation: int
    steps: np.ndarray  # int64
    position_a: np.ndarray  # int64
    position_b: np.ndarray  # int64
    phase_a: np.ndarray  # int64 phase_number of train A
    phase_b: np.ndarray  # int64 phase_number of train B
    waiting_a: np.ndarray  # bool
    waiting_b: np.ndarray  # bool
    has_collided: bool
    collision_position: int | None

    @classmethod
    def from_history(cls, history: Sequence[WorldState]) -> "Trajectory":
        """Build a trajectory from a snapshot sequence (initial world first)."""
        if len(history) == 0:
            raise ValueError("history must contain at least the initial world")

        first, last = history[0], history[-1]
        return cls(
            separation=first.agent_b.home - first.agent_a.home,
            steps=np.array([w.step_count for w in history], dtype=np.int64),
            position_a=np.array([w.agent_a.position for w in history], dtype=np.int64),
            position_b=np.array([w.agent_b.position for w in history], dtype=np.int64),
            phase_a=np.array([w.agent_a.phase_number for w in history], dtype=np.int64),
            phase_b=np.array([w.agent_b.phase_number for w in history], dtype=np.int64),
            waiting_a=np.array([w.agent_a.is_waiting for w in history], dtype=bool),
            waiting_b=np.array([w.agent_b.is_waiting for w in history], dtype=bool),
            has_collided=last.has_collided,
            collision_position=last.collision_position,
        )

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def gap(self) -> np.ndarray:
        """Signed distance position_b - position_a at every tick."""
        return self.position_b - self.position_a

    @property
    def first_wait_step(self) -> int | None:
        """Tick at which the first latch appears, or None."""
        either = self.waiting_a | self.waiting_b
        if not either.any():
            return None
        return int(self.steps[np.argmax(either)])


def record_trajectory(separation: int, max_steps: int = DEFAULT_MAX_STEPS) -> Trajectory:
    """Run the simulation and record every tick."""
    return Trajectory.from_history(run_history(separation, max_steps))


def mirror_trajectory(traj: Trajectory) -> Trajectory:
    """
    Predict the trajectory of the run with the opposite separation.

    Args:
        traj: Trajectory recorded for separation D

    Returns:
        The trajectory the run with separation -D must produce
    """
    d = traj.separation
    return Trajectory(
        separation=-d,
        steps=traj.steps.copy(),
        position_a=traj.position_b - d,
        position_b=traj.position_a - d,
        phase_a=traj.phase_b.copy(),
        phase_b=traj.phase_a.copy(),
        waiting_a=traj.waiting_b.copy(),
        waiting_b=traj.waiting_a.copy(),
        has_collided=traj.has_collided,
        collision_position=(
            traj.collision_position - d if traj.collision_position is not None else None
        ),
    )


def is_mirror_image(a: Trajectory, b: Trajectory) -> bool:
    """True when b is exactly what mirror_trajectory(a) predicts."""
    expected = mirror_trajectory(a)
    if len(expected) != len(b):
        return False
    return (
        expected.separation == b.separation
        and expected.has_collided == b.has_collided
        and expected.collision_position == b.collision_position
        and np.array_equal(expected.steps, b.steps)
        and np.array_equal(expected.position_a, b.position_a)
        and np.array_equal(expected.position_b, b.position_b)
        and np.array_equal(expected.phase_a, b.phase_a)
        and np.array_equal(expected.phase_b, b.phase_b)
        and np.array_equal(expected.waiting_a, b.waiting_a)
        and np.array_equal(expected.waiting_b, b.waiting_b)
    )


def check_invariants(history: Sequence[WorldState]) -> list[str]:
    """
    Check a snapshot sequence against the world invariants.

    Checked per snapshot:
    - offset_from_home == position - home
    - phase_number >= 1 and 0 <= steps_in_phase < phase_number
    - collision_position set exactly when has_collided

    Checked between consecutive snapshots:
    - home never moves
    - phase_number only grows, by one, when a full cycle ends
    - is_waiting and has_collided never revert
    - a collided world never changes; otherwise step_count grows by one

    Returns:
        List of human-readable violations (empty when clean)
    """
    violations: list[str] = []

    for i, world in enumerate(history):
        for name, agent in zip("AB", world.agents):
            if agent.offset_from_home != agent.position - agent.home:
                violations.append(
                    f"tick {i}: train {name} offset {agent.offset_from_home} "
                    f"!= position - home ({agent.position - agent.home})"
                )
            if agent.phase_number < 1:
                violations.append(f"tick {i}: train {name} phase_number < 1")
            if not 0 <= agent.steps_in_phase < agent.phase_number:
                violations.append(
                    f"tick {i}: train {name} steps_in_phase {agent.steps_in_phase} "
                    f"outside [0, {agent.phase_number})"
                )
        if world.has_collided != (world.collision_position is not None):
            violations.append(f"tick {i}: collision_position does not match has_collided")

    for i in range(1, len(history)):
        prev, cur = history[i - 1], history[i]

        if prev.has_collided:
            if cur != prev:
                violations.append(f"tick {i}: collided world changed")
            continue
        if cur.step_count != prev.step_count + 1:
            violations.append(
                f"tick {i}: step_count {cur.step_count} after {prev.step_count}"
            )

        for name, before, after in zip("AB", prev.agents, cur.agents):
            if after.home != before.home:
                violations.append(f"tick {i}: train {name} home moved")
            if before.is_waiting and not after.is_waiting:
                violations.append(f"tick {i}: train {name} left the waiting latch")

            growth = after.phase_number - before.phase_number
            if growth < 0:
                violations.append(f"tick {i}: train {name} phase_number decreased")
            elif growth > 1:
                violations.append(f"tick {i}: train {name} phase_number jumped by {growth}")
            elif growth == 1 and not (
                before.sweep_phase is SweepPhase.RETURN_FROM_BACKWARD
                and after.sweep_phase is SweepPhase.SWEEP_FORWARD
            ):
                violations.append(
                    f"tick {i}: train {name} phase_number grew outside a cycle rollover"
                )

    return violations
