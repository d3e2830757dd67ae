"""Pre-configured scenarios."""

from gravitykit.core.body import BodyKind
from gravitykit.core.parameters import PopulationTargets, SimulationParameters
from gravitykit.core.scenario import BodySpec, ScenarioConfig, circular_speed
from gravitykit.core.vector import Vector3


def _binary() -> ScenarioConfig:
    params = SimulationParameters(G=1000.0, dt=0.001, impulse_scale=50.0)
    speed = circular_speed(params.G, 2 * params.anchor_mass, 6.0)
    bodies = [
        BodySpec(BodyKind.ANCHOR, Vector3(-2.0, 0.0, 0.0)),
        BodySpec(BodyKind.ANCHOR, Vector3(2.0, 0.0, 0.0)),
    ]
    # Ring of orbiters around the pair
    for x, y, vx, vy in ((6.0, 0.0, 0.0, 1.0), (-6.0, 0.0, 0.0, -1.0),
                         (0.0, 6.0, -1.0, 0.0), (0.0, -6.0, 1.0, 0.0)):
        bodies.append(BodySpec(
            BodyKind.ORBITER,
            Vector3(x, y, 0.0),
            Vector3(vx * speed, vy * speed, 0.0),
        ))
    return ScenarioConfig(parameters=params, bodies=bodies, seed=7)


SCENARIO_PRESETS = {
    "sandbox": {
        "name": "Sandbox",
        "description": "Empty space, click to add bodies and drag to launch",
        "config": ScenarioConfig.sandbox,
    },
    "cloud": {
        "name": "Cloud",
        "description": "Random cloud of 5 anchors and 200 orbiters",
        "config": ScenarioConfig.cloud,
    },
    "infall": {
        "name": "Infall",
        "description": "One orbiter falling from rest onto one anchor",
        "config": ScenarioConfig.infall,
    },
    "orbit": {
        "name": "Circular Orbit",
        "description": "One orbiter on a circular orbit of radius 5",
        "config": ScenarioConfig.orbit,
    },
    "binary": {
        "name": "Binary",
        "description": "Two anchors with a ring of orbiters around them",
        "config": _binary,
    },
    "heavy_core": {
        "name": "Heavy Core",
        "description": "A greedy anchor far above the reference mass in a swarm",
        "config": lambda: ScenarioConfig(
            parameters=SimulationParameters(
                G=300.0,
                dt=0.001,
                reference_mass=10.0,
                population_targets=PopulationTargets(anchors=0, orbiters=150),
            ),
            bodies=[BodySpec(BodyKind.ANCHOR, Vector3(0.0, 0.0, 0.0), mass=20.0)],
            seed=11,
        ),
    },
}


def get_scenario_config(preset_name: str) -> ScenarioConfig:
    """Get a scenario configuration by preset name.

    Args:
        preset_name: Name of the preset

    Returns:
        ScenarioConfig instance

    Raises:
        ValueError: If preset name is not found
    """
    if preset_name not in SCENARIO_PRESETS:
        available = ", ".join(SCENARIO_PRESETS.keys())
        raise ValueError(f"Unknown scenario preset '{preset_name}'. Available: {available}")

    return SCENARIO_PRESETS[preset_name]["config"]()
