"""
railsim: Parachute Trains rendezvous simulator

Two identical trains are dropped at unknown integer positions on an
infinite railway. Each leaves a parachute (its home marker) where it
landed. Neither can see the other; a train only senses that it is
standing on *a* parachute. Both run the same "Sweep & Wait" algorithm
and must eventually collide.

Core concepts:
- Sweep forward, return, sweep backward, return; widen the range by one
- A train standing on a parachute that is not its own stops forever
- The other train keeps sweeping, returns home, and runs into it

See DESIGN.md for full details.
"""

__version__ = "0.1.0"
