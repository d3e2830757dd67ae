"""Configuration presets for scenarios."""

from gravitykit.config.scenario_presets import SCENARIO_PRESETS, get_scenario_config

__all__ = [
    "SCENARIO_PRESETS",
    "get_scenario_config",
]
