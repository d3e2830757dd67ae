#!/usr/bin/env python3
"""Interactive gravity sandbox demo.

This example demonstrates:
- Loading a scenario preset into a World
- Fixed-timestep stepping paced to real time
- Drag-to-launch and click-to-spawn through the Pygame renderer
- Tracking collision outcomes

Run with: python examples/sandbox_demo.py [preset]
"""

import sys
import os

# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gravitykit.analysis.census import PopulationTracker
from gravitykit.config.scenario_presets import get_scenario_config
from gravitykit.core.world import World


def main():
    """Run the sandbox demo."""
    # Check for pygame
    try:
        from gravitykit.visualization import PygameRenderer
    except ImportError:
        print("This demo requires pygame. Install with: pip install pygame")
        return 1

    preset = sys.argv[1] if len(sys.argv) > 1 else "binary"

    print("GravityKit Sandbox Demo")
    print("=" * 40)
    print()
    print("Controls:")
    print("  Click        - Add body")
    print("  Drag orbiter - Launch it (release sets velocity)")
    print("  Right drag   - Pan camera")
    print("  A / O        - Click adds anchors / orbiters")
    print("  G            - Generate random scene")
    print("  Up / Down    - Increase / decrease G")
    print("  Space        - Pause")
    print("  R            - Reset")
    print("  Esc          - Quit")
    print()

    try:
        config = get_scenario_config(preset)
    except ValueError as e:
        print(e)
        return 1

    world = World.from_scenario(config)
    population = PopulationTracker()

    renderer = PygameRenderer()
    renderer.init()

    print(f"Starting '{preset}'...")

    try:
        while True:
            inputs = renderer.handle_input(world)

            if inputs.get('quit'):
                break

            if inputs.get('reset'):
                world.load_scenario(config)
                population.reset()
                renderer.reset_counters()
                continue

            if not inputs.get('paused'):
                # Step physics at real-time pace
                world.step_fixed(1 / 60)

            snapshot = world.snapshot()
            population.update(snapshot)
            for event in snapshot.events:
                print(f"Collision: anchor {event.anchor_id} vs orbiter {event.orbiter_id} "
                      f"-> {event.outcome.value} (mass {event.anchor_mass_after:.0f})")

            renderer.render(snapshot, world, fps=60)

    except KeyboardInterrupt:
        pass
    finally:
        renderer.quit()

    summary = population.summary()
    print(f"\nSimulation ended. {summary['collisions']} collisions, "
          f"{summary['anchors']} anchors, {summary['orbiters']} orbiters left.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
