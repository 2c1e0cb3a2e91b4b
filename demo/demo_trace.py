"""
Demo: tick-by-tick trace of one rendezvous.

Prints both trains' positions after every tick, marks latched trains,
and audits the run against the world invariants.

Usage:
    python demo/demo_trace.py [separation] [max_steps]
"""

import sys

from railsim.core import run_history, world_status
from railsim.analysis import check_invariants, predicted_collision_steps


def format_tick(world) -> str:
    """One trace line for a snapshot."""
    a, b = world.agents
    a_wait = " (WAITING)" if a.is_waiting else ""
    b_wait = " (WAITING)" if b.is_waiting else ""
    return (
        f"  Step {world.step_count:>3}: A@{a.position}{a_wait}, B@{b.position}{b_wait}"
        f"  [{world_status(world).value}]"
    )


def main():
    separation = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    max_steps = int(sys.argv[2]) if len(sys.argv) > 2 else 100

    print("=" * 60)
    print(f"Parachute Trains: trace for separation {separation}")
    print("=" * 60)

    history = run_history(separation, max_steps)
    initial, final = history[0], history[-1]

    print(f"  Initial: A at {initial.agent_a.position}, B at {initial.agent_b.position}")
    for world in history[1:]:
        print(format_tick(world))

    print("\n" + "=" * 60)
    if final.has_collided:
        print(f"Collision at {final.collision_position} after {final.step_count} ticks")
        print(f"  Closed-form prediction: {predicted_collision_steps(separation)} ticks")
    else:
        print(f"No collision within {max_steps} ticks; try a larger budget")

    violations = check_invariants(history)
    if violations:
        print(f"\n✗ {len(violations)} invariant violations:")
        for v in violations:
            print(f"  {v}")
    else:
        print("\n✓ All invariants hold")


if __name__ == "__main__":
    main()
