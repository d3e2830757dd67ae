"""Energy and population analysis over snapshots."""

from gravitykit.analysis.energy import (
    EnergySample, EnergyTracker, kinetic_energy, potential_energy, total_energy
)
from gravitykit.analysis.census import PopulationSample, PopulationTracker

__all__ = [
    "EnergySample",
    "EnergyTracker",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "PopulationSample",
    "PopulationTracker",
]
