"""CLI entry point for GravityKit.

Run with: python -m gravitykit [command]

Commands:
    sandbox   - Run the interactive gravity sandbox
    plot      - Run a scenario headless and plot energy/population/paths
    info      - Show available scenario presets
"""

import sys
import argparse
import logging


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_sandbox(args):
    """Run the interactive sandbox."""
    try:
        from gravitykit.visualization import PygameRenderer
        renderer = PygameRenderer()
    except ImportError:
        print("Error: Pygame is required for the sandbox.")
        print("Install it with: pip install pygame")
        return 1

    from gravitykit.core.world import World
    from gravitykit.config.scenario_presets import get_scenario_config

    print("GravityKit Sandbox")
    print("=" * 40)
    print(f"Scenario: {args.scenario}")
    print()
    print("Controls:")
    print("  Click          - Add body (anchor or orbiter)")
    print("  Drag orbiter   - Launch it")
    print("  A / O          - Click adds anchors / orbiters")
    print("  G              - Generate random scene")
    print("  Up / Down      - Increase / decrease G")
    print("  [ / ]          - Halve / double dt")
    print("  Space          - Pause")
    print("  R              - Reset")
    print("  Esc            - Quit")
    print()

    try:
        config = get_scenario_config(args.scenario)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.seed is not None:
        config.seed = args.seed
    world = World.from_scenario(config)

    print("Starting simulation...")

    try:
        while True:
            inputs = renderer.handle_input(world)

            if inputs.get('quit'):
                break

            if inputs.get('reset'):
                world.load_scenario(config)
                renderer.reset_counters()
                continue

            # One tick per rendered frame
            if not inputs.get('paused'):
                world.tick()

            renderer.render(world.snapshot(), world, fps=60)

    except KeyboardInterrupt:
        pass
    finally:
        renderer.quit()

    print("Simulation ended.")
    return 0


def plot_run(args):
    """Run a scenario headless and plot the results."""
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("Error: Matplotlib is required for plotting.")
        print("Install it with: pip install matplotlib")
        return 1

    from gravitykit.analysis.census import PopulationTracker
    from gravitykit.analysis.energy import EnergyTracker
    from gravitykit.config.scenario_presets import get_scenario_config
    from gravitykit.core.world import World
    from gravitykit.visualization.plotter import EnergyPlotter, PopulationPlotter, TrajectoryPlotter

    try:
        config = get_scenario_config(args.scenario)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.seed is not None:
        config.seed = args.seed
    world = World.from_scenario(config)

    print(f"Running '{args.scenario}' for {args.ticks} ticks...")

    energy = EnergyTracker(world.params.G, world.params.min_distance)
    population = PopulationTracker()
    paths = {}

    snapshot = world.snapshot()
    for _ in range(args.ticks):
        snapshot = world.tick()
        energy.update(snapshot, G=world.params.G)
        population.update(snapshot)
        for body in snapshot.orbiters()[:args.max_paths]:
            paths.setdefault(body.id, []).append(body.position)

    summary = population.summary()
    print(f"  Anchors:    {summary['anchors']}")
    print(f"  Orbiters:   {summary['orbiters']}")
    print(f"  Collisions: {summary['collisions']} "
          f"({summary['gains']} gains, {summary['losses']} losses, {summary['bounces']} bounces)")
    print(f"  Energy drift (last collision-free stretch): {energy.relative_drift():.2e}")

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))
    EnergyPlotter.plot_energy(energy, ax=ax1)
    TrajectoryPlotter.plot_trajectories(
        paths,
        anchors=[a.position for a in snapshot.anchors()],
        ax=ax2,
        collision_radius=world.params.collision_radius,
    )
    fig.suptitle(f"{args.scenario} - {args.ticks} ticks")
    fig.tight_layout()
    population_fig = PopulationPlotter.plot_population(population)

    if args.output:
        fig.savefig(args.output, dpi=150)
        stem, dot, ext = args.output.rpartition(".")
        population_path = f"{stem}_population.{ext}" if dot else f"{args.output}_population"
        population_fig.savefig(population_path, dpi=150)
        print(f"Saved to: {args.output}, {population_path}")
    else:
        plt.show()

    return 0


def show_info(args):
    """Show available presets and information."""
    from gravitykit import __version__
    from gravitykit.config.scenario_presets import SCENARIO_PRESETS

    print(f"GravityKit v{__version__}")
    print("=" * 40)
    print()

    print("Scenario Presets:")
    print("-" * 30)
    for name, info in SCENARIO_PRESETS.items():
        print(f"  {name:15} - {info['description']}")
    print()

    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="GravityKit - N-body gravity sandbox with collisions and mass transfer",
        prog="gravitykit"
    )
    parser.add_argument(
        "--version", action="version",
        version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log spawns, drags and collisions"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    sandbox_parser = subparsers.add_parser("sandbox", help="Run the interactive sandbox")
    sandbox_parser.add_argument(
        "-s", "--scenario",
        default="sandbox",
        help="Scenario preset to load (default: sandbox)"
    )
    sandbox_parser.add_argument(
        "--seed",
        type=int, default=None,
        help="Random seed for collisions and generated scenes"
    )

    plot_parser = subparsers.add_parser("plot", help="Run a scenario headless and plot it")
    plot_parser.add_argument(
        "-s", "--scenario",
        default="orbit",
        help="Scenario preset to run (default: orbit)"
    )
    plot_parser.add_argument(
        "-n", "--ticks",
        type=int, default=2000,
        help="Number of ticks to simulate (default: 2000)"
    )
    plot_parser.add_argument(
        "--max-paths",
        type=int, default=20,
        help="Maximum number of orbiter paths to draw (default: 20)"
    )
    plot_parser.add_argument(
        "--seed",
        type=int, default=None,
        help="Random seed for collisions and generated scenes"
    )
    plot_parser.add_argument(
        "-o", "--output",
        help="Save plots to file instead of displaying"
    )

    subparsers.add_parser("info", help="Show available presets")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "sandbox":
        return run_sandbox(args)
    elif args.command == "plot":
        return plot_run(args)
    elif args.command == "info":
        return show_info(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
