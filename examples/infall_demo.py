#!/usr/bin/env python3
"""Headless infall demo.

This example demonstrates:
- Building a World from a scenario without any renderer
- Watching an orbiter fall onto an anchor
- Reading the collision event and the anchor's new appearance

Run with: python examples/infall_demo.py
"""

import sys
import os

# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gravitykit.analysis.energy import EnergyTracker
from gravitykit.core.scenario import ScenarioConfig
from gravitykit.core.world import World


def main():
    """Drop one orbiter onto one anchor and report the contact."""
    print("GravityKit Infall Demo")
    print("=" * 40)

    config = ScenarioConfig.infall()
    config.seed = 42
    world = World.from_scenario(config)
    energy = EnergyTracker(world.params.G, world.params.min_distance)

    anchor = world.snapshot().anchors()[0]
    print(f"Anchor mass: {anchor.mass:.1f}, color {anchor.color}, scale {anchor.visual_scale:.2f}")
    print()

    for _ in range(1000):
        snapshot = world.tick()

        if snapshot.tick_count % 20 == 0 and snapshot.orbiters():
            orbiter = snapshot.orbiters()[0]
            print(f"  t={snapshot.time:.3f}  x={orbiter.position[0]:7.3f}  speed={orbiter.speed:7.2f}")

        if snapshot.events:
            drift = energy.relative_drift()
            event = snapshot.events[0]
            print()
            print(f"Contact at tick {snapshot.tick_count}: {event.outcome.value}")
            print(f"  P(gain) = {event.probability_to_gain:.2f}")
            print(f"  Anchor mass {event.anchor_mass_before:.1f} -> {event.anchor_mass_after:.1f}")
            if event.fragment_id is not None:
                print(f"  Fragment spawned with id {event.fragment_id}")
            anchor = snapshot.get(event.anchor_id)
            print(f"  Anchor color {anchor.color}, scale {anchor.visual_scale:.2f}")
            print(f"  Energy drift before contact: {drift:.2e}")
            break

        energy.update(snapshot)
    else:
        print("No contact within 1000 ticks")

    return 0


if __name__ == "__main__":
    sys.exit(main())
