"""
Core engine primitives.

This layer knows NOTHING about trajectories, scaling laws, or plots.
It only knows:
- One train's state record (AgentState)
- The Sweep & Wait decision and transition functions
- The two-train world snapshot (WorldState)
- The synchronous driver that steps the world until collision

Every function here is pure: snapshots go in, new snapshots come out.
"""

from railsim.core.agent import (
    COORDINATE_LIMIT,
    Action,
    AgentState,
    CoordinateOverflowError,
    SweepPhase,
    create_agent,
)
from railsim.core.sweep import advance, at_foreign_marker, decide, next_phase
from railsim.core.world import SimulationStatus, WorldState, create_world, world_status
from railsim.core.driver import (
    DEFAULT_MAX_STEPS,
    Simulation,
    SimulationConfig,
    iter_steps,
    run,
    run_history,
    step,
)

__all__ = [
    "COORDINATE_LIMIT",
    "Action",
    "AgentState",
    "CoordinateOverflowError",
    "SweepPhase",
    "create_agent",
    "advance",
    "at_foreign_marker",
    "decide",
    "next_phase",
    "SimulationStatus",
    "WorldState",
    "create_world",
    "world_status",
    "DEFAULT_MAX_STEPS",
    "Simulation",
    "SimulationConfig",
    "iter_steps",
    "run",
    "run_history",
    "step",
]
